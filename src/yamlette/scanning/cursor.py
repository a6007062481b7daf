#!/usr/bin/env python3
"""
YAMLETTE CURSOR - One Byte of Lookahead
---------------------------------------
Wraps any iterable of byte values and buffers at most one peeked byte.

peek()    -> look at the next byte without consuming it (idempotent)
discard() -> consume the byte that was just peeked
next()    -> take a byte outright

The cursor also keeps the Mark of the next unconsumed byte so that
errors can point at the offending position.

Author: YAMLette Team
Date: 2026-10-19
"""

from typing import Iterable, Iterator, Optional

from yamlette.core.errors import ScanError
from yamlette.core.models import Mark

_NEWLINE = 0x0A


class ByteCursor:

    def __init__(self, source: Iterable[int]):
        self._source: Iterator[int] = iter(source)
        self._cached: Optional[int] = None
        self._exhausted = False
        self.offset = 0
        self.line = 1
        self.column = 1

    def _pull(self) -> Optional[int]:
        if self._exhausted:
            return None
        try:
            byte = next(self._source)
        except StopIteration:
            self._exhausted = True
            return None
        except OSError as e:
            raise ScanError.from_os_error(e, self.mark)
        return byte

    def _advance(self, byte: int):
        self.offset += 1
        if byte == _NEWLINE:
            self.line += 1
            self.column = 1
        else:
            self.column += 1

    def peek(self) -> Optional[int]:
        """Returns the next byte, or None at end of input."""
        if self._cached is None:
            self._cached = self._pull()
        return self._cached

    def next(self) -> Optional[int]:
        if self._cached is not None:
            byte, self._cached = self._cached, None
        else:
            byte = self._pull()
        if byte is not None:
            self._advance(byte)
        return byte

    def discard(self):
        """Consumes the cached byte. A no-op when nothing has been peeked."""
        if self._cached is not None:
            self._advance(self._cached)
            self._cached = None

    @property
    def mark(self) -> Mark:
        return Mark(self.offset, self.line, self.column)
