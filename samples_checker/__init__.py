"""
Samples-Checker - compile and run the code samples embedded in documentation
"""

from samples_checker.config import CloneConfig, ExecutionConfig, VerifierConfig
from samples_checker.models import (
    Code,
    Diagnostic,
    ExceptionInfo,
    ExecutionResult,
    FileType,
    Platform,
)
from samples_checker.verifier import (
    CheckReport,
    RunFailure,
    RunReport,
    SamplesVerifier,
    SnippetFailure,
)

__version__ = "0.1.0"

__all__ = [
    "CheckReport",
    "CloneConfig",
    "Code",
    "Diagnostic",
    "ExceptionInfo",
    "ExecutionConfig",
    "ExecutionResult",
    "FileType",
    "Platform",
    "RunFailure",
    "RunReport",
    "SamplesVerifier",
    "SnippetFailure",
    "VerifierConfig",
    "__version__",
]
