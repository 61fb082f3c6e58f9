"""Shared fixtures: a documentation tree builder and fake collaborators."""

from __future__ import annotations

import logging
import shutil
import textwrap
from pathlib import Path
from typing import Callable, Mapping

import pytest

from samples_checker.models import Code, Diagnostic, ExceptionInfo, ExecutionResult


class DocsBuilder:
    """Write documentation files into a throwaway source tree."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "source"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")


class FakeAcquirer:
    """Copy the builder's tree instead of cloning; remembers every target directory."""

    def __init__(self, source: Path) -> None:
        self.source = source
        self.calls: list[tuple[Path, str]] = []

    def __call__(self, local_dir: Path, url: str) -> None:
        self.calls.append((local_dir, url))
        shutil.copytree(self.source, local_dir, dirs_exist_ok=True)


class FakeClient:
    """Execution backend answering from a `code text -> result` function."""

    def __init__(self, answer: Callable[[str], ExecutionResult] | None = None) -> None:
        self.answer = answer or (lambda text: ExecutionResult(text="ok"))
        self.executed: list[Code] = []

    def execute(self, code: Code) -> ExecutionResult:
        self.executed.append(code)
        return self.answer(code.text)


def compile_error(message: str) -> ExecutionResult:
    return ExecutionResult.build(errors={"File.kt": [Diagnostic(message, "ERROR", 1, 1)]})


def runtime_error(message: str) -> ExecutionResult:
    return ExecutionResult.build(
        exception=ExceptionInfo(message=message, full_name="java.lang.IllegalStateException")
    )


@pytest.fixture
def docs(tmp_path: Path) -> DocsBuilder:
    return DocsBuilder(tmp_path)


@pytest.fixture
def acquirer(docs: DocsBuilder) -> FakeAcquirer:
    return FakeAcquirer(docs.root)


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo CLI logging setup so caplog sees package records."""
    yield
    logger = logging.getLogger("samples_checker")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
