"""
Data models - values passed between the walker, the extractor,
the execution client and the verifier.

All models are frozen dataclasses: a code unit and an execution result
are compared and hashed by value, and the verifier relies on that to
deduplicate identical outcomes.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Sequence


# ============================================================
# Enumerations
# ============================================================

class FileType(Enum):
    """Document format to scan for samples."""
    MD = "md"
    HTML = "html"

    @property
    def extension(self) -> str:
        """File extension (without the dot) handled by this type."""
        return self.value

    @classmethod
    def parse(cls, value: str) -> "FileType":
        """
        Resolve a file type from user input.

        Args:
            value: "md", "markdown" or "html" (any case)

        Returns:
            The matching FileType

        Raises:
            ValueError: value names no supported format
        """
        normalized = value.strip().lower()
        if normalized == "markdown":
            normalized = "md"
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unsupported file type: {value!r} (expected md or html)")


class Platform(Enum):
    """Compiler target; the value is the server's configuration type."""
    JVM = "java"
    JS = "js"

    @classmethod
    def parse(cls, value: str) -> "Platform":
        normalized = value.strip().lower()
        if normalized in ("jvm", "java"):
            return cls.JVM
        if normalized in ("js", "javascript"):
            return cls.JS
        raise ValueError(f"Unsupported platform: {value!r} (expected jvm or js)")


# ============================================================
# Values
# ============================================================

@dataclass(frozen=True)
class Code:
    """One extracted snippet; identity is the literal text."""
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Diagnostic:
    """
    A compiler diagnostic

    Attributes:
        message: Compiler message
        severity: Severity reported by the compiler (ERROR, WARNING, ...)
        line: 1-based line of the start of the reported range
        column: 1-based column of the start of the reported range
    """
    message: str
    severity: str = "ERROR"
    line: Optional[int] = None
    column: Optional[int] = None

    def format(self) -> str:
        """Render as `(line:column) SEVERITY: message`."""
        if self.line is not None:
            location = f"({self.line}:{self.column or 1}) "
        else:
            location = ""
        return f"{location}{self.severity}: {self.message}"

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class ExceptionInfo:
    """Exception raised while running a snippet on the server."""
    message: str
    full_name: str = ""
    stack_trace: tuple[str, ...] = ()
    cause: Optional["ExceptionInfo"] = None


@dataclass(frozen=True)
class ExecutionResult:
    """
    Outcome of running one code unit

    Attributes:
        text: Program output (may be empty)
        errors: (category, diagnostics) pairs in the order the server reported them
        exception: Terminal exception, if execution aborted
    """
    text: str = ""
    errors: tuple[tuple[str, tuple[Diagnostic, ...]], ...] = ()
    exception: Optional[ExceptionInfo] = None

    @classmethod
    def build(
        cls,
        text: str = "",
        errors: Optional[Mapping[str, Sequence[Diagnostic]]] = None,
        exception: Optional[ExceptionInfo] = None,
    ) -> "ExecutionResult":
        """Create a result from a plain category -> diagnostics mapping."""
        frozen = tuple(
            (category, tuple(diagnostics))
            for category, diagnostics in (errors or {}).items()
        )
        return cls(text=text, errors=frozen, exception=exception)

    @property
    def error_map(self) -> dict[str, list[Diagnostic]]:
        return {category: list(diagnostics) for category, diagnostics in self.errors}

    @property
    def messages(self) -> list[Diagnostic]:
        """All diagnostics flattened across categories."""
        return [d for _, diagnostics in self.errors for d in diagnostics]

    @property
    def failed(self) -> bool:
        """A snippet fails when it has any diagnostic or a terminal exception."""
        return bool(self.messages) or self.exception is not None


@dataclass
class RunContext:
    """
    State scoped to one verification call

    Attributes:
        url: Repository URL as given by the caller
        directory: Scratch directory the repository is cloned into
        file_type: Document format being scanned
        attributes: Attributes a snippet must carry
    """
    url: str
    directory: Path
    file_type: FileType
    attributes: list[str] = field(default_factory=list)
