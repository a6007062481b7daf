#!/usr/bin/env python3
"""
YAMLETTE SOURCES - Byte Acquisition
-----------------------------------
The scanner only needs something that yields the next byte or raises an
OSError. These helpers turn buffers, text, binary file objects and paths
into such iterators, reading lazily so large files are never slurped.

Author: YAMLette Team
Date: 2026-10-19
"""

from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Union

DEFAULT_CHUNK_SIZE = 4096


def iter_bytes(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[int]:
    """
    Yields the bytes of a binary stream one at a time.
    read() errors propagate to whoever is pulling, i.e. the cursor.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            return
        if isinstance(chunk, str):
            raise TypeError("Expected a binary stream, got a text stream")
        yield from chunk


def from_text(text: str) -> bytes:
    return text.encode("utf-8")


@contextmanager
def open_source(path: Union[str, Path], chunk_size: int = DEFAULT_CHUNK_SIZE):
    """Opens a file for scanning and closes it when the block exits."""
    with open(path, "rb") as f:
        yield iter_bytes(f, chunk_size)
