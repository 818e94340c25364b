from .segment import Segment
from .splitter_config import SplitterConfig

__all__ = ["Segment", "SplitterConfig"]
