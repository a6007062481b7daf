#!/usr/bin/env python3
"""
YAMLETTE PHASES - Lexical States of the Scanner
-----------------------------------------------
One small value class per phase of the state machine. Each phase may
run a consuming step (classify and eat bytes, possibly producing a Node)
and then decides its successor by peeking, returning a Marker.

Phases never pick their successor object themselves. They only name it;
the StateMachine owns the table of which (phase, marker) pairs are legal.

Accepted content bytes are ASCII letters, space and tab. Line breaks are
LF or CR+LF. A colon followed by a blank delimits a mapping key.

Author: YAMLette Team
Date: 2026-10-19
"""

from enum import Enum
from typing import Optional

from yamlette.core.errors import ScanError, ErrorKind
from yamlette.core.models import Event, Node
from yamlette.scanning.context import ScanContext

SPACE = 0x20
TAB = 0x09
LF = 0x0A
CR = 0x0D
COLON = 0x3A

BLANKS = b" \t"
NEWLINES = b"\n\r"


def is_letter(byte: Optional[int]) -> bool:
    return byte is not None and (0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A)


def is_blank(byte: Optional[int]) -> bool:
    return byte == SPACE or byte == TAB


def is_newline(byte: Optional[int]) -> bool:
    return byte == LF or byte == CR


def trim_trailing_blanks(buffer: bytearray):
    while buffer and is_blank(buffer[-1]):
        buffer.pop()


class Marker(Enum):
    """Transition signal: names the phase a phase wants to hand over to."""
    LINE_START = "LineStart"
    LINE_END = "LineEnd"
    AMBIGUOUS_SCALAR = "AmbiguousScalar"
    AMBIGUOUS_COLON = "AmbiguousColon"
    SCALAR_LITERAL = "ScalarLiteral"
    MAP_START = "MapStart"
    MAP_VERIFY_KEY = "MapVerifyKey"
    MAP_WHITESPACE = "MapWhiteSpace"
    MAP_VALUE = "MapValue"
    DONE = "Done"


class Phase:
    name = "Phase"
    terminal = False

    def consume(self, ctx: ScanContext) -> Optional[Node]:
        return None

    def find_next(self, ctx: ScanContext) -> Marker:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{self.name}>"


class Start(Phase):
    name = "Start"

    def find_next(self, ctx):
        if ctx.cursor.peek() is None:
            return Marker.DONE
        return Marker.LINE_START


class LineStart(Phase):
    """Counts leading blanks and records them with the tracker."""
    name = "LineStart"

    def consume(self, ctx):
        cursor = ctx.cursor
        ctx.line_no = cursor.line
        count = 0
        while is_blank(cursor.peek()):
            cursor.discard()
            count += 1
        ctx.tracker.update(count)
        ctx.line_indent = count
        return None

    def find_next(self, ctx):
        byte = ctx.cursor.peek()
        if byte is None:
            return Marker.DONE
        if is_newline(byte):
            return Marker.LINE_END
        return Marker.AMBIGUOUS_SCALAR


class AmbiguousScalar(Phase):
    """
    Content that could still turn out to be either a bare scalar or a key.
    Bytes are accumulated until a colon, a line break or end of input.
    """
    name = "AmbiguousScalar"

    def consume(self, ctx):
        cursor = ctx.cursor
        while True:
            byte = cursor.peek()
            if is_letter(byte) or is_blank(byte):
                ctx.scratch.append(byte)
                cursor.discard()
            elif byte is None or byte == COLON or is_newline(byte):
                return None
            else:
                raise ScanError(ErrorKind.INVALID_CHAR, byte)

    def find_next(self, ctx):
        byte = ctx.cursor.peek()
        if byte == COLON:
            return Marker.AMBIGUOUS_COLON
        if byte is None or is_newline(byte):
            return Marker.SCALAR_LITERAL
        raise ScanError(ErrorKind.STATE_VIOLATION, byte)


class AmbiguousColon(Phase):
    """
    Resolves a colon: followed by a blank it delimits a key, followed by
    a letter it was part of the content all along.
    """
    name = "AmbiguousColon"

    def __init__(self):
        self.delimits = False

    def consume(self, ctx):
        cursor = ctx.cursor
        byte = cursor.peek()
        if byte != COLON:
            raise ScanError(ErrorKind.STATE_VIOLATION, (b":", byte) if byte is not None else None)
        cursor.discard()

        follower = cursor.peek()
        if is_blank(follower):
            cursor.discard()
            self.delimits = True
        elif is_letter(follower):
            cursor.discard()
            ctx.scratch.append(COLON)
            ctx.scratch.append(follower)
            self.delimits = False
        elif follower is None:
            raise ScanError(ErrorKind.INVALID_EOF, "expected a blank or a letter after ':'")
        else:
            raise ScanError(ErrorKind.INVALID_CHAR, (BLANKS, follower))
        return None

    def find_next(self, ctx):
        return Marker.MAP_START if self.delimits else Marker.AMBIGUOUS_SCALAR


class ScalarLiteral(Phase):
    name = "ScalarLiteral"

    def consume(self, ctx):
        trim_trailing_blanks(ctx.scratch)
        return ctx.scalar()

    def find_next(self, ctx):
        byte = ctx.cursor.peek()
        if byte is None:
            return Marker.DONE
        if is_newline(byte):
            return Marker.LINE_END
        # Multi-token plain scalars are not part of the grammar
        raise ScanError(ErrorKind.SCALAR_INVALID, byte)


class MapStart(Phase):
    """Entry into a mapping. Remembers the indentation floor it was opened at."""
    name = "MapStart"

    def __init__(self, indent_floor: int = 0):
        self.indent_floor = indent_floor

    def find_next(self, ctx):
        if ctx.cursor.peek() is None:
            raise ScanError(ErrorKind.EOF_MAPPING)
        return Marker.MAP_VERIFY_KEY


class MapVerifyKey(Phase):
    name = "MapVerifyKey"

    def consume(self, ctx):
        for byte in ctx.scratch:
            if not (is_letter(byte) or is_blank(byte)):
                raise ScanError(ErrorKind.INVALID_CHAR, byte)
        trim_trailing_blanks(ctx.scratch)
        if not ctx.scratch:
            raise ScanError(ErrorKind.SCALAR_INVALID, "empty mapping key")
        return ctx.key()

    def find_next(self, ctx):
        return Marker.MAP_WHITESPACE


class MapWhiteSpace(Phase):
    """Blanks between the key delimiter and the value."""
    name = "MapWhiteSpace"

    def consume(self, ctx):
        cursor = ctx.cursor
        while is_blank(cursor.peek()):
            cursor.discard()
        return None

    def find_next(self, ctx):
        byte = ctx.cursor.peek()
        if is_letter(byte):
            return Marker.MAP_VALUE
        if byte is None:
            raise ScanError(ErrorKind.EOF_MAPPING, "implicit null values are not supported")
        if byte in b"|>":
            raise ScanError(ErrorKind.MESSAGE, byte, message="Block scalar values are not supported")
        if byte in b"[{":
            raise ScanError(ErrorKind.MESSAGE, byte, message="Flow collections are not supported")
        if is_newline(byte):
            raise ScanError(ErrorKind.MESSAGE, message="Nested or null mapping values are not supported")
        raise ScanError(ErrorKind.INVALID_CHAR, byte)


class MapValue(Phase):
    name = "MapValue"

    def consume(self, ctx):
        cursor = ctx.cursor
        while True:
            byte = cursor.peek()
            if is_letter(byte) or is_blank(byte):
                ctx.scratch.append(byte)
                cursor.discard()
            elif byte is None or is_newline(byte):
                break
            else:
                raise ScanError(ErrorKind.SCALAR_INVALID, byte)
        trim_trailing_blanks(ctx.scratch)
        return ctx.scalar()

    def find_next(self, ctx):
        byte = ctx.cursor.peek()
        if byte is None:
            return Marker.DONE
        if is_newline(byte):
            return Marker.LINE_END
        raise ScanError(ErrorKind.STATE_VIOLATION, byte)


class LineEnd(Phase):
    """Consumes exactly one line break: LF or CR+LF."""
    name = "LineEnd"

    def consume(self, ctx):
        cursor = ctx.cursor
        byte = cursor.peek()
        if byte == LF:
            cursor.discard()
        elif byte == CR:
            cursor.discard()
            follower = cursor.peek()
            if follower != LF:
                raise ScanError(ErrorKind.SOLO_CARRIAGE_RETURN,
                                (b"\n", follower) if follower is not None else None)
            cursor.discard()
        elif byte is None:
            raise ScanError(ErrorKind.INVALID_EOL, "expected a line break before end of input")
        else:
            raise ScanError(ErrorKind.INVALID_EOL, (NEWLINES, byte))
        return None

    def find_next(self, ctx):
        byte = ctx.cursor.peek()
        if byte is None:
            return Marker.DONE
        if is_letter(byte) or is_blank(byte) or is_newline(byte):
            return Marker.LINE_START
        raise ScanError(ErrorKind.INVALID_CHAR, byte)


class Done(Phase):
    """Terminal. Every further step reports Done again."""
    name = "Done"
    terminal = True

    def emit(self) -> Event:
        return Event.done()


class Failure(Phase):
    """
    Terminal. Carries the error that ended the scan; it is handed out once,
    after which every step reports a repeat failure instead.
    """
    name = "Failure"
    terminal = True

    def __init__(self, error: ScanError):
        self.error = error
        self.reported = False

    def emit(self) -> Event:
        if self.reported:
            return Event.failure(ScanError(ErrorKind.REPEAT_FAILURE, mark=self.error.mark))
        self.reported = True
        return Event.failure(self.error)
