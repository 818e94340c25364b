"""Version lookup for chunkforge.

The version is read from installed package metadata, falling back to the
VERSION file at the repository root during development.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

logger = logging.getLogger(__name__)

# packages/chunkforge/version.py -> ../../VERSION
_VERSION_FILE = Path(__file__).parent.parent.parent / "VERSION"


def _read_version_file() -> str | None:
    if _VERSION_FILE.is_file():
        try:
            return _VERSION_FILE.read_text().strip()
        except OSError:
            return None
    return None


@lru_cache(maxsize=1)
def get_version() -> str:
    """Get the current chunkforge version.

    Returns:
        The version string, or "0.0.0" when neither source is available.
    """
    try:
        return version("chunkforge")
    except PackageNotFoundError:
        pass

    file_version = _read_version_file()
    if file_version:
        return file_version

    logger.warning("Could not determine chunkforge version, using fallback")
    return "0.0.0"


__version__ = get_version()
