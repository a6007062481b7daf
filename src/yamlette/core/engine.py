#!/usr/bin/env python3
"""
YAMLETTE ENGINE - Batch Orchestrator
------------------------------------
Runs the scanner over files inside a workspace and turns every outcome
(success, scan failure, unreadable file) into a ScanReport. Nothing a
single file does can abort a batch.

Author: YAMLette Team
Date: 2026-10-19
"""

import time
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Callable

from yamlette.core.errors import ScanError
from yamlette.core.models import Node, ScanOptions
from yamlette.scanning.machine import StateMachine
from yamlette.scanning.sources import open_source

logger = logging.getLogger("yamlette.engine")

STATUS_SCANNED = "SCANNED"
STATUS_FAILED = "SCAN_FAILED"
STATUS_NOT_FOUND = "FILE_NOT_FOUND"
STATUS_READ_ERROR = "READ_ERROR"


@dataclass
class ScanReport:
    file_path: str
    status: str
    nodes: List[Node] = field(default_factory=list)
    history: List[int] = field(default_factory=list)
    error: Optional[str] = None
    error_kind: Optional[str] = None       # ErrorKind name, e.g. INVALID_CHAR
    category: Optional[str] = None         # io / data / state
    timestamp: float = field(default_factory=time.time)

    @property
    def success(self) -> bool:
        return self.status == STATUS_SCANNED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_path": self.file_path,
            "status": self.status,
            "success": self.success,
            "nodes": [{"type": type(n).__name__, "text": n.text, "line": n.line_no, "indent": n.indent}
                      for n in self.nodes],
            "history": list(self.history),
            "error": self.error,
            "error_kind": self.error_kind,
            "category": self.category,
        }


class ScanEngine:
    """
    Scans files relative to a workspace directory with shared ScanOptions.
    """

    def __init__(self, workspace_path: str, options: Optional[ScanOptions] = None):
        self.workspace = Path(workspace_path).resolve()
        self.options = options or ScanOptions()

    def scan_file(self, relative_path: str) -> ScanReport:
        """Scans one file. Errors are captured in the report, never raised."""
        full_path = (self.workspace / relative_path).resolve()
        if not full_path.is_file():
            return ScanReport(str(relative_path), STATUS_NOT_FOUND, error=f"Path missing: {full_path}")

        nodes: List[Node] = []
        machine = None
        try:
            with open_source(full_path, self.options.chunk_size) as source:
                machine = StateMachine(source, self.options)
                for node in iter(lambda: machine.step().transpose(), None):
                    nodes.append(node)
        except ScanError as e:
            logger.error(f"Scan of {relative_path} failed: {e}")
            return ScanReport(
                str(relative_path), STATUS_FAILED,
                nodes=nodes, history=machine.history if machine else [],
                error=str(e), error_kind=e.kind.name, category=e.category.value,
            )
        except OSError as e:
            logger.error(f"Unable to read {relative_path}: {e}")
            return ScanReport(str(relative_path), STATUS_READ_ERROR, error=str(e), category="io")

        return ScanReport(str(relative_path), STATUS_SCANNED, nodes=nodes, history=machine.history)

    def scan_directory(self, extension: str = ".yaml", max_depth: int = 10,
                       progress_callback: Optional[Callable[[int, int], None]] = None) -> List[ScanReport]:
        """
        Recursively scans every file with the given extension.
        Symlinks are skipped so link cycles cannot trap the walk.
        """
        patterns = {f"*{extension.lower()}", f"*{extension.upper()}"}
        found = sorted({
            f.relative_to(self.workspace) for p in patterns for f in self.workspace.rglob(p)
            if f.is_file() and not f.is_symlink()
        })
        files = []
        for rel in found:
            if len(rel.parts) > max_depth:
                logger.debug(f"Skipping {rel}: deeper than {max_depth}")
                continue
            files.append(rel)

        reports = []
        total = len(files)
        for processed, rel in enumerate(files, 1):
            reports.append(self.scan_file(str(rel)))
            if progress_callback:
                progress_callback(processed, total)
        return reports

    def generate_summary(self, reports: List[ScanReport]) -> Dict[str, Any]:
        if not reports:
            return {"total_files": 0, "successful": 0, "failed": 0, "success_rate": 0, "total_nodes": 0}

        total = len(reports)
        successful = sum(1 for r in reports if r.success)
        return {
            "total_files": total,
            "successful": successful,
            "failed": total - successful,
            "success_rate": successful / total,
            "total_nodes": sum(len(r.nodes) for r in reports),
            "summary_timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        }
