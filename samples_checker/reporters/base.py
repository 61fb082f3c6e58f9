"""
Reporter protocol - render verification reports
"""

from typing import Protocol

from samples_checker.models import ExecutionResult
from samples_checker.verifier import CheckReport, RunReport


class Reporter(Protocol):
    """Reporter protocol"""

    def report_check(self, report: CheckReport, target: str) -> None:
        """Render the failing samples of a check run."""
        ...

    def report_collect(self, report: RunReport[ExecutionResult], target: str) -> None:
        """Render the distinct outcomes of a collect run."""
        ...
