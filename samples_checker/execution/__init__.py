"""Remote execution of code samples.

This module provides the client for the compiler server that
compiles and runs extracted samples.
"""

from samples_checker.execution.client import (
    ExecutionClient,
    ExecutionError,
    parse_response,
)

__all__ = [
    "ExecutionClient",
    "ExecutionError",
    "parse_response",
]
