"""Compiler server client.

This module sends code units to a Kotlin compiler server over HTTP and
turns its JSON answer into ExecutionResult values. Compilation errors
and runtime exceptions are part of the result; only failures to talk
to the server raise.
"""

import logging
import re
from typing import Any, Optional

import httpx

from samples_checker.config import ExecutionConfig
from samples_checker.models import (
    Code,
    Diagnostic,
    ExceptionInfo,
    ExecutionResult,
    Platform,
)


logger = logging.getLogger(__name__)

SNIPPET_FILE_NAME = "File.kt"

ENDPOINTS: dict[Platform, str] = {
    Platform.JVM: "/api/compiler/run",
    Platform.JS: "/api/compiler/translate",
}

OUT_STREAM_TAGS = re.compile(r"</?outStream>")


class ExecutionError(Exception):
    """The compiler server could not be reached or answered garbage."""
    pass


def _parse_diagnostic(data: dict[str, Any]) -> Diagnostic:
    start = (data.get("interval") or {}).get("start") or {}
    line = start.get("line")
    column = start.get("ch")
    return Diagnostic(
        message=data.get("message", ""),
        severity=data.get("severity") or "ERROR",
        line=line + 1 if isinstance(line, int) else None,
        column=column + 1 if isinstance(column, int) else None,
    )


def _format_frame(frame: Any) -> str:
    if not isinstance(frame, dict):
        return str(frame)
    location = frame.get("fileName") or "Unknown Source"
    if frame.get("lineNumber") is not None:
        location = f"{location}:{frame['lineNumber']}"
    return f"{frame.get('className', '')}.{frame.get('methodName', '')}({location})"


def _parse_exception(data: Optional[dict[str, Any]]) -> Optional[ExceptionInfo]:
    if not data:
        return None
    return ExceptionInfo(
        message=data.get("localizedMessage") or data.get("message") or "",
        full_name=data.get("fullName") or "",
        stack_trace=tuple(_format_frame(f) for f in data.get("stackTrace") or ()),
        cause=_parse_exception(data.get("cause")),
    )


def parse_response(payload: dict[str, Any], platform: Platform = Platform.JVM) -> ExecutionResult:
    """
    Convert a compiler server response into an ExecutionResult

    Args:
        payload: Decoded JSON body
        platform: Target the request was made for

    Returns:
        ExecutionResult with diagnostics grouped per reported file
    """
    errors = {
        category: [_parse_diagnostic(d) for d in diagnostics or ()]
        for category, diagnostics in (payload.get("errors") or {}).items()
    }
    if platform is Platform.JS:
        text = payload.get("jsCode") or ""
    else:
        text = OUT_STREAM_TAGS.sub("", payload.get("text") or "")
    return ExecutionResult.build(
        text=text,
        errors=errors,
        exception=_parse_exception(payload.get("exception")),
    )


class ExecutionClient:
    """Run code units on a remote compiler server."""

    def __init__(self, config: ExecutionConfig | None = None, *, client: httpx.Client | None = None):
        """
        Args:
            config: Server settings
            client: Pre-built httpx client; not closed by this object
        """
        self.config = config or ExecutionConfig()
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=self.config.timeout)

    @property
    def endpoint(self) -> str:
        return self.config.compiler_url.rstrip("/") + ENDPOINTS[self.config.platform]

    def build_request(self, code: Code) -> dict[str, Any]:
        return {
            "args": self.config.args,
            "files": [{"name": SNIPPET_FILE_NAME, "text": code.text, "publicId": ""}],
            "confType": self.config.platform.value,
        }

    def execute(self, code: Code) -> ExecutionResult:
        """
        Compile and run one code unit

        Raises:
            ExecutionError: transport failure, timeout, HTTP error status
                or a body that is not a JSON object
        """
        try:
            response = self._client.post(
                self.endpoint,
                json=self.build_request(code),
                timeout=self.config.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise ExecutionError(
                f"Compiler server did not answer within {self.config.timeout} seconds"
            ) from e
        except httpx.HTTPStatusError as e:
            raise ExecutionError(
                f"Compiler server returned HTTP {e.response.status_code} for {self.endpoint}"
            ) from e
        except httpx.HTTPError as e:
            raise ExecutionError(f"Cannot reach compiler server at {self.endpoint}: {e}") from e
        except ValueError as e:
            raise ExecutionError(f"Compiler server sent an invalid response: {e}") from e

        if not isinstance(payload, dict):
            raise ExecutionError("Compiler server sent an invalid response: expected a JSON object")

        result = parse_response(payload, self.config.platform)
        logger.debug("Executed snippet: %d diagnostics, exception=%s",
                     len(result.messages), result.exception is not None)
        return result

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ExecutionClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
