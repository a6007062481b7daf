# src/yamlette/cli/formatter.py
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from yamlette.core.engine import ScanReport
from yamlette.core.models import Key

console = Console()


class YamletteFormatter:
    """
    YamletteFormatter: renders scan results for the terminal.
    """

    def __init__(self, out: Console = None):
        self.console = out or console

    def show_nodes(self, report: ScanReport, show_history: bool = False):
        """One table per file: every node with the line and indentation it came from."""
        table = Table(title=f"Nodes: {report.file_path}", header_style="bold magenta")
        table.add_column("Line", justify="right", style="dim")
        table.add_column("Indent", justify="right")
        table.add_column("Node")
        table.add_column("Text", style="white")

        for node in report.nodes:
            kind = "[cyan]Key[/cyan]" if isinstance(node, Key) else "[green]ScalarPlain[/green]"
            table.add_row(str(node.line_no), str(node.indent), kind, escape(node.text))

        self.console.print(table)
        if show_history:
            self.console.print(f"[dim]Indent history:[/dim] {report.history}")

    def show_error(self, report: ScanReport):
        if not report.error:
            return
        self.console.print(Panel(
            f"[white]{escape(report.error)}[/white]",
            title=f"[bold red]{report.status}: {report.file_path}[/bold red]",
            subtitle=f"{report.category or 'unknown'} / {report.error_kind or report.status}",
            border_style="red"
        ))

    def show_yaml(self, text: str, title: str):
        syntax = Syntax(text.strip() or "# empty document", "yaml", theme="monokai", line_numbers=True)
        self.console.print(Panel(syntax, title=title, border_style="green"))

    def print_final_table(self, reports: List[ScanReport], summary: Dict[str, Any]):
        table = Table(title="YAMLette Scan Report", show_lines=True, header_style="bold magenta")
        table.add_column("File Path", style="cyan")
        table.add_column("Nodes", justify="right")
        table.add_column("Status", style="bold")
        table.add_column("Result", justify="center")

        for r in reports:
            color = "green" if r.success else "red"
            table.add_row(r.file_path, str(len(r.nodes)), f"[{color}]{r.status}[/{color}]",
                          "✅" if r.success else "❌")
        self.console.print(table)

        self.console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Total Files:  {summary['total_files']}\n"
            f"Successful:   [green]{summary['successful']}[/green]\n"
            f"Failed:       [red]{summary['failed']}[/red]\n"
            f"Total Nodes:  {summary['total_nodes']}",
            border_style="dim"
        ))
