"""Tests for the data models."""

from __future__ import annotations

import pytest

from samples_checker.models import (
    Code,
    Diagnostic,
    ExceptionInfo,
    ExecutionResult,
    FileType,
    Platform,
)


def test_equal_results_hash_equal() -> None:
    first = ExecutionResult.build("out", {"File.kt": [Diagnostic("warn", "WARNING", 2, 5)]})
    second = ExecutionResult.build("out", {"File.kt": [Diagnostic("warn", "WARNING", 2, 5)]})

    assert first == second
    assert len({first: Code("a"), second: Code("b")}) == 1


def test_results_differing_in_exception_are_distinct() -> None:
    plain = ExecutionResult(text="x")
    crashed = ExecutionResult(text="x", exception=ExceptionInfo("boom"))

    assert plain != crashed


def test_failed_requires_a_diagnostic_or_an_exception() -> None:
    assert not ExecutionResult.build("ok", {"File.kt": []}).failed
    assert ExecutionResult.build(errors={"File.kt": [Diagnostic("bad")]}).failed
    assert ExecutionResult(exception=ExceptionInfo("boom")).failed


def test_messages_flatten_categories_in_order() -> None:
    result = ExecutionResult.build(errors={
        "A.kt": [Diagnostic("a1"), Diagnostic("a2")],
        "B.kt": [Diagnostic("b1")],
    })

    assert [d.message for d in result.messages] == ["a1", "a2", "b1"]
    assert list(result.error_map) == ["A.kt", "B.kt"]


def test_diagnostic_format() -> None:
    assert Diagnostic("Unresolved reference", "ERROR", 3, 7).format() == "(3:7) ERROR: Unresolved reference"
    assert str(Diagnostic("Deprecated", "WARNING")) == "WARNING: Deprecated"


@pytest.mark.parametrize("value, expected", [
    ("md", FileType.MD),
    ("Markdown", FileType.MD),
    ("HTML", FileType.HTML),
])
def test_file_type_parse(value: str, expected: FileType) -> None:
    assert FileType.parse(value) is expected


def test_file_type_parse_rejects_unknown_values() -> None:
    with pytest.raises(ValueError):
        FileType.parse("rst")


def test_platform_parse() -> None:
    assert Platform.parse("jvm") is Platform.JVM
    assert Platform.parse("JS") is Platform.JS
    with pytest.raises(ValueError):
        Platform.parse("native")
