#!/usr/bin/env python3
"""
YAMLETTE ENGINE & CLI SUITE
---------------------------
Batch scanning over a temporary workspace:
1. Mixed good and broken files
2. Missing files and symlinks
3. Depth limits
4. CLI exit codes and JSON output

Author: YAMLette Team
Date: 2026-10-19
"""

import io
import os
import json

import pytest
from rich.console import Console

from yamlette.cli.main import YamletteCLI
from yamlette.core.engine import ScanEngine, STATUS_SCANNED, STATUS_FAILED, STATUS_NOT_FOUND
from yamlette.core.models import Key, ScalarPlain


@pytest.fixture
def workspace(tmp_path):
    (tmp_path / "good.yaml").write_text("name: web\nkind: Service\n")
    (tmp_path / "bad.yaml").write_text("name: web\nreplicas: 3\n")
    nested = tmp_path / "one" / "two"
    nested.mkdir(parents=True)
    (nested / "deep.yaml").write_text("  indented line\n")
    (tmp_path / "notes.txt").write_text("ignored by extension\n")
    return tmp_path


def test_scan_file_success(workspace):
    report = ScanEngine(str(workspace)).scan_file("good.yaml")
    assert report.status == STATUS_SCANNED
    assert report.success
    assert report.nodes == [Key("name"), ScalarPlain("web"), Key("kind"), ScalarPlain("Service")]
    assert report.history == [0, 0]


def test_scan_file_failure_keeps_partial_nodes(workspace):
    report = ScanEngine(str(workspace)).scan_file("bad.yaml")
    assert report.status == STATUS_FAILED
    assert report.error_kind == "INVALID_CHAR"
    assert report.category == "data"
    assert report.nodes == [Key("name"), ScalarPlain("web"), Key("replicas")]
    assert "Bad char: '3'" in report.error


def test_scan_missing_file(workspace):
    report = ScanEngine(str(workspace)).scan_file("ghost.yaml")
    assert report.status == STATUS_NOT_FOUND
    assert not report.success


def test_scan_directory_and_summary(workspace):
    engine = ScanEngine(str(workspace))
    seen = []
    reports = engine.scan_directory(progress_callback=lambda done, total: seen.append((done, total)))

    paths = sorted(r.file_path for r in reports)
    assert paths == ["bad.yaml", "good.yaml", os.path.join("one", "two", "deep.yaml")]
    assert seen[-1] == (3, 3)

    summary = engine.generate_summary(reports)
    assert summary["total_files"] == 3
    assert summary["successful"] == 2
    assert summary["failed"] == 1
    assert summary["total_nodes"] == 4 + 3 + 1


def test_scan_directory_respects_depth(workspace):
    reports = ScanEngine(str(workspace)).scan_directory(max_depth=1)
    assert all("deep.yaml" not in r.file_path for r in reports)


@pytest.mark.skipif(os.name == "nt", reason="POSIX symlink semantics")
def test_scan_directory_skips_symlinks(workspace):
    os.symlink(workspace / "good.yaml", workspace / "alias.yaml")
    reports = ScanEngine(str(workspace)).scan_directory()
    assert "alias.yaml" not in [r.file_path for r in reports]


def test_empty_summary():
    assert ScanEngine(".").generate_summary([])["total_files"] == 0


def test_cli_scan_json(workspace, capsys):
    code = YamletteCLI().run(["scan", str(workspace / "good.yaml"), "--json"])
    assert code == 0

    payload = json.loads(capsys.readouterr().out)
    report = payload["reports"][0]
    assert report["status"] == STATUS_SCANNED
    assert [n["text"] for n in report["nodes"]] == ["name", "web", "kind", "Service"]
    assert payload["summary"]["failed"] == 0


def test_cli_scan_directory_reports_failure(workspace):
    out = Console(file=io.StringIO(), width=120)
    code = YamletteCLI(out=out).run(["scan", str(workspace), "--history"])
    assert code == 1

    rendered = out.file.getvalue()
    assert "SCAN_FAILED" in rendered
    assert "Indent history" in rendered


def test_cli_scan_missing_path(tmp_path):
    out = Console(file=io.StringIO(), width=120)
    assert YamletteCLI(out=out).run(["scan", str(tmp_path / "nope")]) == 2


def test_cli_export(workspace, capsys):
    assert YamletteCLI().run(["export", str(workspace / "good.yaml")]) == 0
    assert capsys.readouterr().out == "name: web\nkind: Service\n"


def test_cli_export_failure(workspace):
    out = Console(file=io.StringIO(), width=120)
    assert YamletteCLI(out=out).run(["export", str(workspace / "bad.yaml")]) == 1
    assert "invalid character" in out.file.getvalue()


def test_cli_export_pretty(workspace):
    out = Console(file=io.StringIO(), width=120)
    assert YamletteCLI(out=out).run(["export", str(workspace / "good.yaml"), "--pretty"]) == 0
    rendered = out.file.getvalue()
    assert "name: web" in rendered
    assert "Exported" in rendered


def test_progress_counts_only_files_within_depth(workspace):
    deep = workspace / "one" / "two" / "zz.yaml"
    deep.write_text("last\n")
    seen = []
    reports = ScanEngine(str(workspace)).scan_directory(
        max_depth=1, progress_callback=lambda done, total: seen.append((done, total)))
    assert len(reports) == 2
    assert seen == [(1, 2), (2, 2)]
