"""
Rich terminal reporter - colored panels and tables
"""

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from samples_checker.models import ExecutionResult
from samples_checker.verifier import CheckReport, RunFailure, RunReport


MAX_SHOWN_FAILURES = 20


class RichReporter:
    """Rich terminal reporter"""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def report_check(self, report: CheckReport, target: str) -> None:
        self._print_header("Sample check", target)

        for i, failure in enumerate(report.failures[:MAX_SHOWN_FAILURES], 1):
            self._print_sample(i, failure.code.text, failure.result)

        if len(report.failures) > MAX_SHOWN_FAILURES:
            hidden = len(report.failures) - MAX_SHOWN_FAILURES
            self.console.print(f"  [dim]... {hidden} more failing samples not shown[/dim]")

        self._print_run_failure(report.failure)

        passed = report.checked - len(report.failures)
        if report.passed:
            style, verdict = "green", "All samples passed"
        elif report.failures:
            style, verdict = "red", f"{len(report.failures)} failing samples"
        else:
            style, verdict = "yellow", "Run stopped early"
        self.console.print(Panel(
            f"[bold {style}]{verdict}[/bold {style}]\n\n"
            f"Checked: {report.checked}   "
            f"[green]Passed: {passed}[/green]   "
            f"[red]Failed: {len(report.failures)}[/red]",
            border_style=style,
        ))

    def report_collect(self, report: RunReport[ExecutionResult], target: str) -> None:
        self._print_header("Sample outcomes", target)

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("#", justify="right", width=4)
        table.add_column("Status", width=8)
        table.add_column("Sample", overflow="fold")
        table.add_column("Outcome", overflow="fold")

        for i, (result, code) in enumerate(report.items(), 1):
            status = "[red]FAIL[/red]" if result.failed else "[green]OK[/green]"
            table.add_row(str(i), status, Text(code.text), Text(self._describe(result)))

        self.console.print(table)
        self._print_run_failure(report.failure)
        self.console.print(
            f"[dim]{report.snippet_count} samples, {len(report)} distinct outcomes[/dim]"
        )

    def _print_header(self, title: str, target: str) -> None:
        self.console.print()
        self.console.print(f"[bold cyan]{title}[/bold cyan] [dim]{target}[/dim]")
        self.console.print("─" * 80, style="dim")

    def _print_sample(self, index: int, code: str, result: ExecutionResult) -> None:
        self.console.print(f"[bold red]{index}. Failing sample[/bold red]")
        self.console.print(Syntax(code, "kotlin", line_numbers=True))
        for diagnostic in result.messages:
            self.console.print(Text(f"   {diagnostic.format()}", style="red"))
        if result.exception is not None:
            name = result.exception.full_name or "Exception"
            self.console.print(Text(f"   {name}: {result.exception.message}", style="magenta"))
        elif result.text:
            self.console.print(Text(f"   Output: {result.text}", style="dim"))
        self.console.print()

    def _print_run_failure(self, failure: RunFailure | None) -> None:
        if failure is None:
            return
        self.console.print(Panel(
            Text(failure.message),
            title=f"[bold]Run stopped ({failure.kind} error)[/bold]",
            border_style="yellow",
        ))

    def _describe(self, result: ExecutionResult) -> str:
        if result.messages:
            return "\n".join(d.format() for d in result.messages)
        if result.exception is not None:
            return f"{result.exception.full_name or 'Exception'}: {result.exception.message}"
        return result.text or "(no output)"
