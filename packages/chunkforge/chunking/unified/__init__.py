"""
Splitting strategies.

All strategies derive from BaseSplitter and are created by name through
UnifiedSplitterFactory.
"""

from .adaptive_overlap_strategy import AdaptiveOverlapSplitter
from .base import BaseSplitter
from .character_strategy import CharacterSplitter
from .factory import UnifiedSplitterFactory
from .recursive_strategy import DEFAULT_SEPARATORS, RecursiveSplitter
from .semantic_strategy import SemanticSplitter
from .structure_aware_strategy import StructureAwareSplitter

__all__ = [
    "DEFAULT_SEPARATORS",
    "AdaptiveOverlapSplitter",
    "BaseSplitter",
    "CharacterSplitter",
    "RecursiveSplitter",
    "SemanticSplitter",
    "StructureAwareSplitter",
    "UnifiedSplitterFactory",
]
