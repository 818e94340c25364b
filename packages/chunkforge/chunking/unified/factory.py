#!/usr/bin/env python3
"""
Factory for splitting strategies.

Resolves strategy names (including aliases such as ``adaptive``) to splitter
classes and validates strategy options before construction.
"""

import inspect
import logging
from typing import Any

from chunkforge.chunking.exceptions import ConfigurationError, UnknownStrategyError
from chunkforge.chunking.types import STRATEGY_ALIASES, ChunkingStrategy
from chunkforge.chunking.unified.adaptive_overlap_strategy import AdaptiveOverlapSplitter
from chunkforge.chunking.unified.base import BaseSplitter
from chunkforge.chunking.unified.character_strategy import CharacterSplitter
from chunkforge.chunking.unified.recursive_strategy import RecursiveSplitter
from chunkforge.chunking.unified.semantic_strategy import SemanticSplitter
from chunkforge.chunking.unified.structure_aware_strategy import StructureAwareSplitter

logger = logging.getLogger(__name__)

SPLITTER_CLASSES: dict[ChunkingStrategy, type[BaseSplitter]] = {
    ChunkingStrategy.CHARACTER: CharacterSplitter,
    ChunkingStrategy.SEMANTIC: SemanticSplitter,
    ChunkingStrategy.STRUCTURE_AWARE: StructureAwareSplitter,
    ChunkingStrategy.RECURSIVE: RecursiveSplitter,
    ChunkingStrategy.ADAPTIVE_OVERLAP: AdaptiveOverlapSplitter,
}


class UnifiedSplitterFactory:
    """Factory for creating splitters by strategy name."""

    @staticmethod
    def parse_strategy(strategy: str | ChunkingStrategy) -> ChunkingStrategy:
        """
        Resolve a strategy name or alias.

        Raises:
            UnknownStrategyError: If the name is not recognized
        """
        if isinstance(strategy, ChunkingStrategy):
            return strategy

        name = strategy.strip().lower().replace("-", "_")
        if name in STRATEGY_ALIASES:
            return STRATEGY_ALIASES[name]
        try:
            return ChunkingStrategy(name)
        except ValueError as e:
            raise UnknownStrategyError(strategy, UnifiedSplitterFactory.get_available_strategies()) from e

    @staticmethod
    def create_splitter(strategy: str | ChunkingStrategy, **kwargs: Any) -> BaseSplitter:
        """
        Create a splitter.

        Args:
            strategy: Strategy name, alias or enum member
            **kwargs: Splitter parameters (max_tokens, overlap_tokens, tokenizer, ...)
                and strategy-specific options

        Returns:
            Configured splitter instance

        Raises:
            UnknownStrategyError: If the strategy is not recognized
            ConfigurationError: If an option is not accepted by the strategy or a
                value is invalid
        """
        strategy_type = UnifiedSplitterFactory.parse_strategy(strategy)
        splitter_class = SPLITTER_CLASSES[strategy_type]

        accepted = set(inspect.signature(splitter_class.__init__).parameters) - {"self"}
        unknown = sorted(set(kwargs) - accepted)
        if unknown:
            raise ConfigurationError(
                f"Unsupported options for {strategy_type.value} strategy: {', '.join(unknown)}",
                details={"strategy": strategy_type.value, "options": unknown},
            )

        logger.info(f"Creating {strategy_type.value} splitter")
        return splitter_class(**kwargs)

    @staticmethod
    def get_available_strategies() -> list[str]:
        """List canonical strategy names."""
        return [s.value for s in ChunkingStrategy]
