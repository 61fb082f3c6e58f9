"""
JSON reporter - machine readable reports
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Optional, TextIO

from samples_checker.models import ExceptionInfo, ExecutionResult
from samples_checker.verifier import CheckReport, RunFailure, RunReport


def _exception_to_dict(info: Optional[ExceptionInfo]) -> Optional[dict[str, Any]]:
    if info is None:
        return None
    return {
        "message": info.message,
        "full_name": info.full_name,
        "stack_trace": list(info.stack_trace),
        "cause": _exception_to_dict(info.cause),
    }


def result_to_dict(result: ExecutionResult) -> dict[str, Any]:
    """Serialize an execution result."""
    return {
        "text": result.text,
        "errors": {
            category: [asdict(d) for d in diagnostics]
            for category, diagnostics in result.errors
        },
        "exception": _exception_to_dict(result.exception),
    }


def _failure_to_dict(failure: Optional[RunFailure]) -> Optional[dict[str, str]]:
    if failure is None:
        return None
    return {"kind": failure.kind, "message": failure.message}


class JsonReporter:
    """JSON reporter"""

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def report_check(self, report: CheckReport, target: str) -> None:
        report_data = {
            "target": target,
            "failures": [
                {"code": failure.code.text, "result": result_to_dict(failure.result)}
                for failure in report.failures
            ],
            "run_failure": _failure_to_dict(report.failure),
            "summary": {
                "checked": report.checked,
                "failed": len(report.failures),
                "passed": report.passed,
            },
        }
        self._write(report_data)

    def report_collect(self, report: RunReport[ExecutionResult], target: str) -> None:
        report_data = {
            "target": target,
            "outcomes": [
                {"code": code.text, "result": result_to_dict(result)}
                for result, code in report.items()
            ],
            "run_failure": _failure_to_dict(report.failure),
            "summary": {
                "samples": report.snippet_count,
                "distinct_outcomes": len(report),
            },
        }
        self._write(report_data)

    def _write(self, report_data: dict[str, Any]) -> None:
        json_str = json.dumps(report_data, indent=2, ensure_ascii=False)
        print(json_str, file=self.output)
