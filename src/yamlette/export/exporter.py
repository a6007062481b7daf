#!/usr/bin/env python3
"""
YAMLETTE EXPORTER - Canonical YAML Output
-----------------------------------------
Author: YAMLette Team
Date: 2026-10-19
"""

import io
from typing import Any

from ruamel.yaml import YAML


class YamletteExporter:
    """
    Dumps composed documents back to YAML text with ruamel's round-trip emitter.
    """

    def __init__(self, indent: int = 2):
        self.yaml = YAML(typ='rt')
        self.yaml.indent(mapping=indent, sequence=indent + 2, offset=indent)
        # Scalars are single line, never let the emitter fold them
        self.yaml.width = 4096

    def export(self, document: Any) -> str:
        if document is None:
            return ""
        stream = io.StringIO()
        self.yaml.dump(document, stream)
        return stream.getvalue()
