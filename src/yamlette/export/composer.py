#!/usr/bin/env python3
"""
YAMLETTE COMPOSER - Nodes to Document
-------------------------------------
Folds a flat node stream into the document it describes, using the
ruamel.yaml round-trip types so the result can be dumped or merged with
documents loaded by ruamel itself.

    key: value lines   -> CommentedMap
    bare scalar lines  -> one plain scalar, lines joined by a single space
    no nodes at all    -> None

Author: YAMLette Team
Date: 2026-10-19
"""

from typing import Iterable, List, Optional, Union

from ruamel.yaml.comments import CommentedMap

from yamlette.core.errors import ComposeError
from yamlette.core.models import Key, ScalarPlain, Node

Document = Union[CommentedMap, str, None]


class YamletteComposer:

    def __init__(self):
        self.mapping = CommentedMap()
        self.scalars: List[str] = []
        self._pending_key: Optional[Key] = None

    def feed(self, node: Node):
        if isinstance(node, Key):
            if self._pending_key is not None:
                raise ComposeError(f"Key '{self._pending_key.text}' on line {self._pending_key.line_no} has no value")
            if self.scalars:
                raise ComposeError(f"Mapping key '{node.text}' on line {node.line_no} follows a bare scalar")
            if node.text in self.mapping:
                raise ComposeError(f"Duplicate key '{node.text}' on line {node.line_no}")
            self._pending_key = node
        elif isinstance(node, ScalarPlain):
            if self._pending_key is not None:
                self.mapping[self._pending_key.text] = node.text
                self._pending_key = None
            elif self.mapping:
                raise ComposeError(f"Bare scalar on line {node.line_no} inside a mapping")
            else:
                self.scalars.append(node.text)
        else:
            raise ComposeError(f"Unknown node type: {type(node).__name__}")

    def finish(self) -> Document:
        if self._pending_key is not None:
            raise ComposeError(f"Key '{self._pending_key.text}' has no value")
        if self.mapping:
            return self.mapping
        if self.scalars:
            return " ".join(self.scalars)
        return None


def compose(nodes: Iterable[Node]) -> Document:
    """Builds one document out of a node stream. ScanErrors from the stream propagate."""
    composer = YamletteComposer()
    for node in nodes:
        composer.feed(node)
    return composer.finish()
