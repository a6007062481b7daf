#!/usr/bin/env python3
"""
YAMLETTE CLI
------------
Command line front end for the scanner.

    yamlette scan PATH   -> node tables per file plus a summary (exit 1 on failures)
    yamlette export FILE -> the composed document re-emitted as YAML

Author: YAMLette Team
Date: 2026-10-19
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from yamlette.core.engine import ScanEngine, ScanReport
from yamlette.core.errors import ScanError, ComposeError
from yamlette.core.models import ScanOptions
from yamlette.cli.formatter import YamletteFormatter
from yamlette.export.composer import compose
from yamlette.export.exporter import YamletteExporter
from yamlette.scanning.pipeline import parse_file

VERSION = "0.1.0"

console = Console()


class YamletteCLI:
    """Translates command line arguments into engine calls and renders the results."""

    def __init__(self, out: Console = None):
        self.console = out or console
        self.formatter = YamletteFormatter(self.console)
        self.parser = argparse.ArgumentParser(
            prog="yamlette",
            description="YAMLette - incremental scanner for a minimal indentation-aware YAML subset",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("-v", "--version", action="version", version=f"yamlette v{VERSION}")
        self.parser.add_argument("--verbose", action="store_true", help="Enable debug logging of phase transitions")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        scan_parser = subparsers.add_parser("scan", help="Scan a file or directory and list its nodes")
        scan_parser.add_argument("path", help="Path to a file or directory")
        scan_parser.add_argument("--ext", default=".yaml", help="File extension filter (default: .yaml)")
        scan_parser.add_argument("--max-depth", type=int, default=10, help="Directory recursion limit")
        scan_parser.add_argument("--history", action="store_true", help="Show the indentation history per file")
        scan_parser.add_argument("--json", action="store_true", help="Print machine readable reports")
        scan_parser.add_argument("--stall-limit", type=int, default=ScanOptions.stall_limit,
                                 help="Transitions allowed without progress before the scanner gives up")

        export_parser = subparsers.add_parser("export", help="Re-emit a file as canonical YAML")
        export_parser.add_argument("path", help="Path to a file")
        export_parser.add_argument("--pretty", action="store_true", help="Render with syntax highlighting")

    def _scan(self, args: argparse.Namespace) -> int:
        target = Path(args.path).resolve()
        if not target.exists():
            self.console.print(f"[bold red]Error:[/bold red] Path '{args.path}' not found.")
            return 2

        engine = ScanEngine(str(target if target.is_dir() else target.parent),
                            ScanOptions(stall_limit=args.stall_limit))
        if target.is_file():
            reports: List[ScanReport] = [engine.scan_file(target.name)]
        else:
            reports = engine.scan_directory(extension=args.ext, max_depth=args.max_depth)

        summary = engine.generate_summary(reports)
        if args.json:
            print(json.dumps({"reports": [r.to_dict() for r in reports], "summary": summary}, indent=2))
        else:
            for report in reports:
                self.formatter.show_nodes(report, show_history=args.history)
                self.formatter.show_error(report)
            self.formatter.print_final_table(reports, summary)

        return 0 if summary["failed"] == 0 else 1

    def _export(self, args: argparse.Namespace) -> int:
        try:
            with parse_file(args.path) as nodes:
                document = compose(nodes)
        except (ScanError, ComposeError) as e:
            self.console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
            return 1
        except OSError as e:
            self.console.print(f"[bold red]Error:[/bold red] Unable to read '{args.path}': {e}")
            return 2

        text = YamletteExporter().export(document)
        if args.pretty:
            self.formatter.show_yaml(text, title=f"Exported: {args.path}")
        else:
            sys.stdout.write(text)
        return 0

    def run(self, argv: Optional[List[str]] = None) -> int:
        args = self.parser.parse_args(argv)
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.ERROR)

        if args.command == "scan":
            return self._scan(args)
        if args.command == "export":
            return self._export(args)
        self.parser.print_help()
        return 0


def main():
    try:
        sys.exit(YamletteCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
