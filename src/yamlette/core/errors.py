#!/usr/bin/env python3
"""
YAMLETTE ERRORS - Failure Taxonomy
----------------------------------
Every failure the scanner can produce is a ScanError. An error carries a
kind, an optional context describing the offending input, and the cursor
mark at which it was raised.

Kinds are grouped in three categories:
    IO    - the byte source failed (wrapped, never retried)
    DATA  - the input bytes are malformed
    STATE - the machine itself broke an invariant

Author: YAMLette Team
Date: 2026-10-19
"""

import errno
from enum import Enum
from dataclasses import dataclass
from typing import Optional, Union

from yamlette.core.models import Mark


class Category(Enum):
    IO = "io"
    DATA = "data"
    STATE = "state"


class ErrorKind(Enum):
    """
    Enumerates every failure the machine knows about.
    The value is the human readable description used by str(ScanError).
    """
    MESSAGE = "Parser reported an error"
    IO = "IO error"
    REPEAT_FAILURE = "Attempted to drive an already failed parser"
    ILLEGAL_TRANSITION = "Parser attempted an illegal state transition... this is a bug"
    STATE_VIOLATION = "Parser encountered an unexpected or invalid state"
    INVALID_CHAR = "Parser encountered an invalid character"
    SCALAR_INVALID = "Parser encountered an invalid scalar"
    EOF_MAPPING = "Parser encountered an unexpected EOF while parsing a mapping"
    INVALID_EOL = "Parser encountered an invalid EOL"
    INVALID_EOF = "Parser encountered an invalid EOF"
    SOLO_CARRIAGE_RETURN = "Parser encountered a solo carriage return"

    @property
    def category(self) -> Category:
        if self is ErrorKind.IO:
            return Category.IO
        if self in _STATE_KINDS:
            return Category.STATE
        return Category.DATA


_STATE_KINDS = frozenset({
    ErrorKind.ILLEGAL_TRANSITION,
    ErrorKind.STATE_VIOLATION,
    ErrorKind.EOF_MAPPING,
    ErrorKind.REPEAT_FAILURE,
})


def _show(byte: int) -> str:
    return chr(byte)


@dataclass(frozen=True)
class GenericContext:
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class BadChar:
    """A single byte that was not allowed where it appeared."""
    byte: int

    def __str__(self) -> str:
        return f"Bad char: '{_show(self.byte)}'"


@dataclass(frozen=True)
class ExpectedChar:
    """What the machine wanted to see versus the byte it actually got."""
    expected: bytes
    got: int

    def __str__(self) -> str:
        if not self.expected:
            return f"Bad char: '{_show(self.got)}'"
        if len(self.expected) == 1:
            return f"Expected: '{_show(self.expected[0])}' got: '{_show(self.got)}'"
        choices = ", ".join(f"'{_show(b)}'" for b in self.expected)
        return f"Expected one of: [{choices}] got: {_show(self.got)}"


Context = Union[GenericContext, BadChar, ExpectedChar]


def make_context(value: Union[str, int, tuple, None]) -> Optional[Context]:
    """
    Builds a Context from the shorthand used throughout the phases:
    str -> GenericContext, int -> BadChar, (expected, got) -> ExpectedChar.
    """
    if value is None or isinstance(value, (GenericContext, BadChar, ExpectedChar)):
        return value
    if isinstance(value, str):
        return GenericContext(value)
    if isinstance(value, int):
        return BadChar(value)
    if isinstance(value, tuple) and len(value) == 2:
        expected, got = value
        return ExpectedChar(bytes(expected), got)
    raise TypeError(f"Cannot build an error context from {value!r}")


class ScanError(Exception):
    """
    The single exception type raised by the scanner.

    Attributes:
        kind: The ErrorKind describing what went wrong.
        context: Optional detail (generic text, bad byte, expected vs got).
        mark: Position of the cursor when the error was raised, if known.
        message: Free text used by ErrorKind.MESSAGE.
    """

    def __init__(self, kind: ErrorKind, context=None, mark: Optional[Mark] = None,
                 message: Optional[str] = None):
        self.kind = kind
        self.context = make_context(context)
        self.mark = mark
        self.message = message
        super().__init__(str(self))

    @classmethod
    def from_os_error(cls, err: OSError, mark: Optional[Mark] = None) -> "ScanError":
        wrapped = cls(ErrorKind.IO, mark=mark, message=str(err))
        wrapped.__cause__ = err
        return wrapped

    @property
    def category(self) -> Category:
        return self.kind.category

    def is_repeat(self) -> bool:
        return self.kind is ErrorKind.REPEAT_FAILURE

    def at(self, mark: Mark) -> "ScanError":
        """Stamps a position on an error raised without one."""
        if self.mark is None:
            self.mark = mark
            self.args = (str(self),)
        return self

    def to_os_error(self) -> OSError:
        """
        Converts into an OSError for callers that speak I/O.
        IO errors hand back the original failure; DATA and STATE errors
        become EINVAL with this error as the cause.
        """
        if self.kind is ErrorKind.IO and isinstance(self.__cause__, OSError):
            return self.__cause__
        err = OSError(errno.EINVAL, str(self))
        err.__cause__ = self
        return err

    def __str__(self) -> str:
        if self.kind is ErrorKind.MESSAGE and self.message:
            text = self.message
        elif self.kind is ErrorKind.IO and self.message:
            text = f"{self.kind.value}: {self.message}"
        else:
            text = self.kind.value
        if self.context is not None:
            text = f"{text} {self.context}"
        if self.mark is not None:
            text = f"{text} at {self.mark}"
        return text

    def __repr__(self) -> str:
        return f"ScanError({self.kind.name}, context={self.context!r}, mark={self.mark!r})"


class ComposeError(ValueError):
    """Raised when a valid node stream cannot be folded into one document."""
