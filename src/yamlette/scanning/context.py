#!/usr/bin/env python3
"""
YAMLETTE SCAN CONTEXT
---------------------
The state every phase borrows while it works: the lookahead cursor,
the indentation tracker and the one scratch buffer shared by all tokens.

Author: YAMLette Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field

from yamlette.core.models import Key, ScalarPlain
from yamlette.scanning.cursor import ByteCursor
from yamlette.scanning.indent import IndentTracker


@dataclass
class ScanContext:
    """
    Owned by the StateMachine, lent to the live phase on every step.
    The scratch buffer is cleared whenever a token is taken out of it.
    """
    cursor: ByteCursor
    tracker: IndentTracker
    scratch: bytearray = field(default_factory=bytearray)
    line_no: int = 0                       # Line number of the line being scanned
    line_indent: int = 0                   # Indentation recorded for that line

    def take_scratch(self) -> str:
        # The grammar only admits ASCII, so decoding cannot fail
        text = self.scratch.decode("ascii")
        self.scratch.clear()
        return text

    def key(self) -> Key:
        return Key(self.take_scratch(), line_no=self.line_no, indent=self.line_indent)

    def scalar(self) -> ScalarPlain:
        return ScalarPlain(self.take_scratch(), line_no=self.line_no, indent=self.line_indent)
