#!/usr/bin/env python3
"""
YAMLETTE STATE MACHINE - The Driver
-----------------------------------
Couples the live phase with the scan context and exposes step().

A step keeps running phases (consume, then find_next, then transition)
until something visible happens: a node is produced, the input is
exhausted (Done) or an error ends the scan (Failure). Any ScanError
raised by a phase moves the machine irrevocably into Failure.

All legal transitions live in LEGAL_TRANSITIONS below. A marker a phase
is not allowed to emit is reported as ILLEGAL_TRANSITION.

Author: YAMLette Team
Date: 2026-10-19
"""

import logging
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Type

from yamlette.core.errors import ScanError, ErrorKind
from yamlette.core.models import Event, EventKind, Node, ScanOptions
from yamlette.scanning.context import ScanContext
from yamlette.scanning.cursor import ByteCursor
from yamlette.scanning.indent import IndentTracker
from yamlette.scanning.phases import (
    Marker, Phase,
    Start, LineStart, LineEnd,
    AmbiguousScalar, AmbiguousColon, ScalarLiteral,
    MapStart, MapVerifyKey, MapWhiteSpace, MapValue,
    Done, Failure,
)

logger = logging.getLogger("yamlette.machine")

# Which markers each phase may emit
LEGAL_TRANSITIONS: Dict[Type[Phase], FrozenSet[Marker]] = {
    Start: frozenset({Marker.LINE_START, Marker.DONE}),
    LineStart: frozenset({Marker.LINE_END, Marker.AMBIGUOUS_SCALAR, Marker.DONE}),
    AmbiguousScalar: frozenset({Marker.AMBIGUOUS_COLON, Marker.SCALAR_LITERAL}),
    AmbiguousColon: frozenset({Marker.MAP_START, Marker.AMBIGUOUS_SCALAR}),
    ScalarLiteral: frozenset({Marker.LINE_END, Marker.DONE}),
    MapStart: frozenset({Marker.MAP_VERIFY_KEY}),
    MapVerifyKey: frozenset({Marker.MAP_WHITESPACE}),
    MapWhiteSpace: frozenset({Marker.MAP_VALUE}),
    MapValue: frozenset({Marker.LINE_END, Marker.DONE}),
    LineEnd: frozenset({Marker.LINE_START, Marker.DONE}),
}

# How the phase a marker names gets built
PHASE_FACTORIES: Dict[Marker, Callable[[ScanContext], Phase]] = {
    Marker.LINE_START: lambda ctx: LineStart(),
    Marker.LINE_END: lambda ctx: LineEnd(),
    Marker.AMBIGUOUS_SCALAR: lambda ctx: AmbiguousScalar(),
    Marker.AMBIGUOUS_COLON: lambda ctx: AmbiguousColon(),
    Marker.SCALAR_LITERAL: lambda ctx: ScalarLiteral(),
    Marker.MAP_START: lambda ctx: MapStart(ctx.tracker.floor),
    Marker.MAP_VERIFY_KEY: lambda ctx: MapVerifyKey(),
    Marker.MAP_WHITESPACE: lambda ctx: MapWhiteSpace(),
    Marker.MAP_VALUE: lambda ctx: MapValue(),
    Marker.DONE: lambda ctx: Done(),
}


def transition(phase: Phase, marker: Marker, ctx: ScanContext) -> Phase:
    """
    Maps (phase, marker) to the successor phase, switching the tracker
    on when a line starts and off when the line start is left.
    """
    legal = LEGAL_TRANSITIONS.get(type(phase), frozenset())
    if marker not in legal:
        raise ScanError(ErrorKind.ILLEGAL_TRANSITION, f"{phase.name} -> {marker.value}")

    successor = PHASE_FACTORIES[marker](ctx)
    if isinstance(phase, LineStart):
        ctx.tracker.deactivate()
    if isinstance(successor, LineStart):
        ctx.tracker.activate()
    return successor


class StateMachine:
    """
    Pull-driven scanner over a byte source.

    Example:
        machine = StateMachine(b"key: value\\n")
        machine.step()  # Event(NODE, Key('key'))
        machine.step()  # Event(NODE, ScalarPlain('value'))
        machine.step()  # Event(DONE)
    """

    def __init__(self, source: Iterable[int], options: Optional[ScanOptions] = None):
        self.options = options or ScanOptions()
        self.context = ScanContext(
            cursor=ByteCursor(source),
            tracker=IndentTracker(clamp=self.options.clamp_floor),
        )
        self._phase: Phase = Start()

    @property
    def phase(self) -> str:
        return self._phase.name

    @property
    def history(self) -> List[int]:
        return list(self.context.tracker.history)

    @property
    def floor(self) -> int:
        return self.context.tracker.floor

    @property
    def tracker(self) -> IndentTracker:
        return self.context.tracker

    @property
    def is_done(self) -> bool:
        return isinstance(self._phase, Done)

    @property
    def is_failed(self) -> bool:
        return isinstance(self._phase, Failure)

    def _fail(self, error: ScanError):
        error.at(self.context.cursor.mark)
        logger.warning(f"Scan failed in {self._phase.name}: {error}")
        if self.context.tracker.is_active:
            self.context.tracker.deactivate()
        self._phase = Failure(error)

    def step(self) -> Event:
        """Runs phases until one of them yields a visible Event."""
        ctx = self.context
        stalled = 0

        while True:
            phase = self._phase
            if phase.terminal:
                return phase.emit()

            offset = ctx.cursor.offset
            node: Optional[Node] = None
            try:
                node = phase.consume(ctx)
                marker = phase.find_next(ctx)
                self._phase = transition(phase, marker, ctx)
                logger.debug(f"{phase.name} -> {self._phase.name} at offset {ctx.cursor.offset}")
            except ScanError as e:
                self._fail(e)

            # A node produced before a failure is still delivered; the error follows on the next step
            if node is not None:
                return Event.of_node(node)

            stalled = stalled + 1 if ctx.cursor.offset == offset else 0
            if stalled > self.options.stall_limit and not self._phase.terminal:
                self._fail(ScanError(
                    ErrorKind.STATE_VIOLATION,
                    f"no progress after {stalled} transitions in {self._phase.name}"
                ))

    def run(self) -> List[Node]:
        """Drives the machine to the end. Raises the first ScanError encountered."""
        nodes = []
        while True:
            event = self.step()
            if event.kind is EventKind.NODE:
                nodes.append(event.node)
            elif event.kind is EventKind.FAILURE and not event.error.is_repeat():
                raise event.error
            else:
                return nodes
