"""
Reporters Layer

Rich terminal reporter and JSON reporter.
"""

from samples_checker.reporters.base import Reporter
from samples_checker.reporters.rich_reporter import RichReporter
from samples_checker.reporters.json_reporter import JsonReporter

__all__ = [
    "Reporter",
    "RichReporter",
    "JsonReporter",
]
