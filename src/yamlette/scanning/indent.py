#!/usr/bin/env python3
"""
YAMLETTE INDENT TRACKER
-----------------------
Records the indentation of every line the scanner starts.

The tracker has two phases. It is only Active while the machine sits in
LineStart; updates outside that window are a state violation. Switching
phases never loses the counters or the history.

Author: YAMLette Team
Date: 2026-10-19
"""

from enum import Enum
from typing import List, Tuple

from yamlette.core.errors import ScanError, ErrorKind


class TrackerPhase(Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


class IndentTracker:
    """
    floor:    baseline indentation of the current nesting context
    previous: indentation of the line before the current one
    current:  indentation of the most recently started line
    history:  one entry per recorded line start
    """

    def __init__(self, clamp: bool = False):
        self.floor = 0
        self.previous = 0
        self.current = 0
        self.history: List[int] = []
        self.clamped = clamp
        self.phase = TrackerPhase.INACTIVE

    @property
    def is_active(self) -> bool:
        return self.phase is TrackerPhase.ACTIVE

    def activate(self):
        self.phase = TrackerPhase.ACTIVE

    def deactivate(self):
        self.phase = TrackerPhase.INACTIVE

    def clamp(self):
        self.clamped = True

    def unclamp(self):
        self.clamped = False

    def update(self, count: int):
        if not self.is_active:
            raise ScanError(ErrorKind.STATE_VIOLATION, "indentation update while tracker is inactive")
        self.history.append(count)
        self.previous = self.current
        self.current = count
        # Floor only grows, and never while a nested construct holds the clamp
        if not self.clamped and count > self.floor:
            self.floor = count

    def snapshot(self) -> Tuple[int, int, int]:
        return self.floor, self.previous, self.current

    def __repr__(self) -> str:
        return (f"IndentTracker(floor={self.floor}, previous={self.previous}, "
                f"current={self.current}, clamped={self.clamped}, phase={self.phase.value})")
