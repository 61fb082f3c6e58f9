"""
CLI entry point - Typer command line interface

Flow of `check` and `collect`:
1. Clone the documentation repository
2. Walk the documents and extract samples
3. Run every sample on the compiler server
4. Render the report
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from samples_checker.config import (
    DEFAULT_COMPILER_URL,
    CloneConfig,
    ExecutionConfig,
    VerifierConfig,
)
from samples_checker.models import FileType, Platform
from samples_checker.repo import CloneError, format_clone_error
from samples_checker.reporters import JsonReporter, Reporter, RichReporter
from samples_checker.verifier import RunFailure, SamplesVerifier


EXIT_OK = 0
EXIT_SAMPLES_FAILED = 1
EXIT_RUN_FAILED = 2

app = typer.Typer(
    name="samples-checker",
    help="Samples-Checker: compile and run the code samples of your docs.",
    add_completion=False,
)

console = Console()
error_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Send package logs to stderr through Rich."""
    logger = logging.getLogger("samples_checker")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=error_console, show_path=False))


def build_verifier(
    compiler_url: str,
    platform: str,
    timeout: float,
    clone_timeout: int,
    work_dir: Optional[Path],
) -> SamplesVerifier:
    try:
        target = Platform.parse(platform)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--platform")
    config = VerifierConfig(
        clone=CloneConfig(timeout=clone_timeout),
        execution=ExecutionConfig(compiler_url=compiler_url, platform=target, timeout=timeout),
        work_dir=work_dir,
    )
    return SamplesVerifier(config)


def get_reporter(format: str) -> Reporter:
    if format == "json":
        return JsonReporter()
    return RichReporter(console)


def _parse_file_type(value: str) -> FileType:
    try:
        return FileType.parse(value)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--type")


def _explain_failure(failure: RunFailure, url: str, clone_timeout: int) -> None:
    if isinstance(failure.error, CloneError):
        error_console.print(format_clone_error(failure.error, url, clone_timeout), markup=False)


URL_ARGUMENT = typer.Argument(..., help="URL of the documentation repository")
ATTRIBUTE_OPTION = typer.Option(
    [], "--attribute", "-a", help="Attribute a sample must carry (repeatable)"
)
TYPE_OPTION = typer.Option("md", "--type", help="Document format: md or html")
COMPILER_URL_OPTION = typer.Option(
    DEFAULT_COMPILER_URL, "--compiler-url", help="Base URL of the compiler server"
)
PLATFORM_OPTION = typer.Option("jvm", "--platform", "-p", help="Compilation target: jvm or js")
TIMEOUT_OPTION = typer.Option(30.0, "--timeout", "-t", help="Compiler request timeout in seconds")
CLONE_TIMEOUT_OPTION = typer.Option(60, "--clone-timeout", help="Clone stall timeout in seconds")
WORK_DIR_OPTION = typer.Option(None, "--work-dir", help="Parent directory for clones")
FORMAT_OPTION = typer.Option("rich", "--format", "-f", help="Output format: rich (default) or json")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show detailed output")


@app.command()
def check(
    url: str = URL_ARGUMENT,
    attribute: list[str] = ATTRIBUTE_OPTION,
    file_type: str = TYPE_OPTION,
    compiler_url: str = COMPILER_URL_OPTION,
    platform: str = PLATFORM_OPTION,
    timeout: float = TIMEOUT_OPTION,
    clone_timeout: int = CLONE_TIMEOUT_OPTION,
    work_dir: Optional[Path] = WORK_DIR_OPTION,
    format: str = FORMAT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """
    Run every sample and report those that fail.

    Examples:
        samples-checker check https://github.com/org/docs -a sample
        samples-checker check https://github.com/org/site --type html -a kotlin-code
    """
    configure_logging(verbose)
    kind = _parse_file_type(file_type)

    with build_verifier(compiler_url, platform, timeout, clone_timeout, work_dir) as verifier:
        report = verifier.check(url, attribute, kind)

    get_reporter(format).report_check(report, url)

    if report.failure is not None:
        _explain_failure(report.failure, url, clone_timeout)
        raise typer.Exit(EXIT_RUN_FAILED)
    if report.failures:
        raise typer.Exit(EXIT_SAMPLES_FAILED)
    raise typer.Exit(EXIT_OK)


@app.command()
def collect(
    url: str = URL_ARGUMENT,
    attribute: list[str] = ATTRIBUTE_OPTION,
    file_type: str = TYPE_OPTION,
    compiler_url: str = COMPILER_URL_OPTION,
    platform: str = PLATFORM_OPTION,
    timeout: float = TIMEOUT_OPTION,
    clone_timeout: int = CLONE_TIMEOUT_OPTION,
    work_dir: Optional[Path] = WORK_DIR_OPTION,
    format: str = FORMAT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """
    Run every sample and list the distinct outcomes.

    Examples:
        samples-checker collect https://github.com/org/docs -a sample --format json
    """
    configure_logging(verbose)
    kind = _parse_file_type(file_type)

    with build_verifier(compiler_url, platform, timeout, clone_timeout, work_dir) as verifier:
        report = verifier.collect(url, attribute, kind)

    get_reporter(format).report_collect(report, url)

    if report.failure is not None:
        _explain_failure(report.failure, url, clone_timeout)
        raise typer.Exit(EXIT_RUN_FAILED)
    raise typer.Exit(EXIT_OK)


@app.command()
def version() -> None:
    """Show the version of Samples-Checker."""
    from samples_checker import __version__
    console.print(f"[bold]Samples-Checker[/bold] v{__version__}")


if __name__ == "__main__":
    app()
