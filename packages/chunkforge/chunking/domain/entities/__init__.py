from .chunk import Chunk

__all__ = ["Chunk"]
