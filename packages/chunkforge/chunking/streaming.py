#!/usr/bin/env python3
"""
Lazy file streaming on top of any splitter.

Lines are buffered until the buffer holds more than
``STREAM_BUFFER_MULTIPLIER * max_tokens`` tokens. The buffer is then split,
every chunk but the last is yielded, and the last chunk's text becomes the new
buffer so that content near the cut is re-split with what follows it.
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from chunkforge.chunking.domain.entities.chunk import Chunk
from chunkforge.chunking.exceptions import SourceFileNotFoundError
from chunkforge.config import get_settings

if TYPE_CHECKING:
    from chunkforge.chunking.unified.base import BaseSplitter

logger = logging.getLogger(__name__)

# Offsets of a buffered split are relative to the buffer, not the file
_BUFFER_RELATIVE_KEYS = ("start_offset", "end_offset")


def stream_file(
    splitter: "BaseSplitter",
    file_path: str | Path,
    encoding: str = "utf-8",
) -> Iterator[Chunk]:
    """
    Split a file lazily, yielding chunks as they become final.

    The existence check happens immediately; reading happens as the returned
    iterator is consumed. The file handle is released when the iterator is
    exhausted, closed or garbage collected.

    Args:
        splitter: Splitter used for every buffered split
        file_path: Path of the text file
        encoding: File encoding

    Returns:
        Iterator of chunks with ``index`` and ``source_file`` metadata

    Raises:
        SourceFileNotFoundError: If the file does not exist
    """
    path = Path(file_path)
    if not path.is_file():
        raise SourceFileNotFoundError(str(path))

    threshold = splitter.max_tokens * get_settings().STREAM_BUFFER_MULTIPLIER
    return _iter_file_chunks(splitter, path, encoding, threshold)


def _iter_file_chunks(
    splitter: "BaseSplitter",
    path: Path,
    encoding: str,
    threshold: int,
) -> Iterator[Chunk]:
    source = str(path)
    index = 0
    buffer = ""

    with path.open("r", encoding=encoding) as handle:
        for line in handle:
            buffer += line
            if splitter.count_tokens(buffer) <= threshold:
                continue

            chunks = splitter.split(buffer)
            if len(chunks) < 2:
                # Nothing final yet; keep accumulating
                continue

            for chunk in chunks[:-1]:
                yield _finalize(chunk, index, source)
                index += 1

            remainder = chunks[-1].text
            buffer = remainder if remainder.endswith("\n") else remainder + "\n"

    if buffer.strip():
        for chunk in splitter.split(buffer):
            yield _finalize(chunk, index, source)
            index += 1

    logger.debug(f"Streamed {index} chunks from {source}")


def _finalize(chunk: Chunk, index: int, source: str) -> Chunk:
    return chunk.without_metadata(*_BUFFER_RELATIVE_KEYS).with_metadata(index=index, source_file=source)
