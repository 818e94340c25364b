from . import text_utils

__all__ = ["text_utils"]
