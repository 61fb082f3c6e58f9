"""Tests for the JSON and Rich reporters."""

from __future__ import annotations

import io
import json

from rich.console import Console

from conftest import compile_error, runtime_error
from samples_checker.models import Code, ExecutionResult
from samples_checker.reporters import JsonReporter, RichReporter
from samples_checker.verifier import CheckReport, RunFailure, RunReport, SnippetFailure


def sample_check_report() -> CheckReport:
    return CheckReport(
        failures=[
            SnippetFailure(Code("fun main() = undefined()"), compile_error("Unresolved reference: undefined")),
            SnippetFailure(Code('fun main() = error("x")'), runtime_error("x")),
        ],
        checked=3,
    )


def test_json_check_report() -> None:
    output = io.StringIO()

    JsonReporter(output).report_check(sample_check_report(), "https://example.com/docs.git")

    data = json.loads(output.getvalue())
    assert data["summary"] == {"checked": 3, "failed": 2, "passed": False}
    assert data["failures"][0]["result"]["errors"]["File.kt"][0]["message"] == "Unresolved reference: undefined"
    assert data["failures"][1]["result"]["exception"]["full_name"] == "java.lang.IllegalStateException"
    assert data["run_failure"] is None


def test_json_collect_report_includes_run_failure() -> None:
    output = io.StringIO()
    report = RunReport(
        {ExecutionResult(text="1"): Code("println(1)")},
        failure=RunFailure("execution", "Cannot reach compiler server"),
        snippet_count=2,
    )

    JsonReporter(output).report_collect(report, "target")

    data = json.loads(output.getvalue())
    assert data["outcomes"] == [{
        "code": "println(1)",
        "result": {"text": "1", "errors": {}, "exception": None},
    }]
    assert data["run_failure"] == {"kind": "execution", "message": "Cannot reach compiler server"}
    assert data["summary"] == {"samples": 2, "distinct_outcomes": 1}


def test_rich_check_report_lists_failures() -> None:
    console = Console(file=io.StringIO(), width=120, color_system=None)

    RichReporter(console).report_check(sample_check_report(), "docs")

    text = console.file.getvalue()
    assert "Unresolved reference: undefined" in text
    assert "java.lang.IllegalStateException: x" in text
    assert "2 failing samples" in text


def test_rich_collect_report_keeps_brackets_literal() -> None:
    console = Console(file=io.StringIO(), width=120, color_system=None)
    report = RunReport({ExecutionResult(text="[1, 2]"): Code("println(listOf(1, 2))[0]")}, snippet_count=1)

    RichReporter(console).report_collect(report, "docs")

    text = console.file.getvalue()
    assert "[1, 2]" in text
    assert "1 samples, 1 distinct outcomes" in text
