"""
Chunking types shared between the engine, the facade and the CLI.

Kept free of imports from the rest of the package to avoid circular imports.
"""

from enum import Enum


class ChunkingStrategy(str, Enum):
    """Available chunking strategies."""

    CHARACTER = "character"
    SEMANTIC = "semantic"
    STRUCTURE_AWARE = "structure_aware"
    RECURSIVE = "recursive"
    ADAPTIVE_OVERLAP = "adaptive_overlap"


# Alternative names accepted wherever a strategy name is parsed
STRATEGY_ALIASES: dict[str, ChunkingStrategy] = {
    "adaptive": ChunkingStrategy.ADAPTIVE_OVERLAP,
    "structure": ChunkingStrategy.STRUCTURE_AWARE,
    "fixed_size": ChunkingStrategy.CHARACTER,
}
