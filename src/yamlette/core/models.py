#!/usr/bin/env python3
"""
YAMLETTE CORE MODELS
--------------------
Defines the fundamental data structures shared across the scanner.
Nodes are the only thing a consumer ever sees; Events are the envelope
the state machine hands to the iterator layer.

Author: YAMLette Team
Date: 2026-10-19
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from yamlette.core.errors import ScanError


@dataclass(frozen=True)
class Mark:
    """A position in the byte stream (line and column are 1-based)."""
    offset: int = 0
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


@dataclass(frozen=True)
class Key:
    """
    A mapping key. The text never carries trailing blanks.
    line_no and indent describe the source line and do not take part in equality.
    """
    text: str
    line_no: int = field(default=0, compare=False)
    indent: int = field(default=0, compare=False)


@dataclass(frozen=True)
class ScalarPlain:
    """A plain scalar, either a bare line or the value half of a mapping entry."""
    text: str
    line_no: int = field(default=0, compare=False)
    indent: int = field(default=0, compare=False)


Node = Union[Key, ScalarPlain]


class EventKind(Enum):
    NODE = "node"
    DONE = "done"
    FAILURE = "failure"


@dataclass
class Event:
    """
    The result of one StateMachine.step(): a produced node, the terminal
    Done signal, or a failure carrying its ScanError.
    """
    kind: EventKind
    node: Optional[Node] = None
    error: Optional["ScanError"] = None

    @classmethod
    def of_node(cls, node: Node) -> "Event":
        return cls(EventKind.NODE, node=node)

    @classmethod
    def done(cls) -> "Event":
        return cls(EventKind.DONE)

    @classmethod
    def failure(cls, error: "ScanError") -> "Event":
        return cls(EventKind.FAILURE, error=error)

    def transpose(self) -> Optional[Node]:
        """
        Collapses the event into iterator terms: a node is returned, a real
        failure is raised, and Done or a repeat failure become None.
        """
        if self.kind is EventKind.NODE:
            return self.node
        if self.kind is EventKind.FAILURE and not self.error.is_repeat():
            raise self.error
        return None


@dataclass
class ScanOptions:
    """
    Tunables for a single scan.

    stall_limit: consecutive phase transitions allowed without consuming a byte
                 before the machine declares itself stuck.
    chunk_size:  read size used when pulling bytes from file objects.
    clamp_floor: initial clamp state of the indentation tracker.
    """
    stall_limit: int = 16
    chunk_size: int = 4096
    clamp_floor: bool = False
