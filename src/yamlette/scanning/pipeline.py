#!/usr/bin/env python3
"""
YAMLETTE PIPELINE - The Node Stream
-----------------------------------
Presents a StateMachine as a plain Python iterator of nodes.

The contract for consumers:
  * zero or more Key / ScalarPlain nodes are yielded,
  * at most one ScanError is raised,
  * after that (or after the input ends) the iterator is exhausted for good.

Author: YAMLette Team
Date: 2026-10-19
"""

from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Union

from yamlette.core.errors import ScanError
from yamlette.core.models import Node, ScanOptions
from yamlette.scanning.machine import StateMachine
from yamlette.scanning.sources import iter_bytes, from_text


class NodeStream:
    """
    Iterator wrapper around a StateMachine.
    Repeat failures and Done are both translated into StopIteration.

    When the stream is given a file to own, that file is closed as soon
    as the scan ends (Done or the first error), or on close()/__exit__.
    """

    def __init__(self, source: Iterable[int], options: Optional[ScanOptions] = None,
                 owned: Optional[BinaryIO] = None):
        self.machine = StateMachine(source, options)
        self._owned = owned

    def __iter__(self) -> "NodeStream":
        return self

    def __next__(self) -> Node:
        try:
            node = self.machine.step().transpose()
        except ScanError:
            self.close()
            raise
        if node is None:
            self.close()
            raise StopIteration
        return node

    def __enter__(self) -> "NodeStream":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        if self._owned is not None:
            self._owned.close()
            self._owned = None

    @property
    def closed(self) -> bool:
        return self._owned is None

    @property
    def history(self) -> List[int]:
        return self.machine.history

    @property
    def succeeded(self) -> bool:
        return self.machine.is_done

    @property
    def failed(self) -> bool:
        return self.machine.is_failed


def parse_bytes(data: Union[bytes, bytearray], options: Optional[ScanOptions] = None) -> NodeStream:
    return NodeStream(bytes(data), options)


def parse_text(text: str, options: Optional[ScanOptions] = None) -> NodeStream:
    return NodeStream(from_text(text), options)


def parse_stream(stream: BinaryIO, options: Optional[ScanOptions] = None) -> NodeStream:
    """Scans a binary file object lazily. The caller keeps ownership of the stream."""
    options = options or ScanOptions()
    return NodeStream(iter_bytes(stream, options.chunk_size), options)


def parse_file(path: Union[str, Path], options: Optional[ScanOptions] = None) -> NodeStream:
    """
    Opens a file and scans it lazily. The returned stream owns the file:
    it is closed when the scan ends, or earlier through close() / a with block.
    OSError from open() is raised here, before any node is produced.
    """
    options = options or ScanOptions()
    f = open(path, "rb")
    return NodeStream(iter_bytes(f, options.chunk_size), options, owned=f)
