"""
Verification orchestrator - clone, walk, execute and aggregate

Three entry points share one pipeline:
1. collect: distinct execution outcomes, each with one sample producing it
2. check: log failing samples and return them
3. parse: hand every sample to a caller-supplied classifier, no execution

The scratch directory a repository is cloned into is deleted when the
call ends, on every exit path. Clone, I/O and transport failures stop the
run early; they are logged and returned on the report, never raised.
"""

import logging
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable, Iterator, Mapping, Optional, Protocol, Sequence, TypeVar

from samples_checker.config import VerifierConfig
from samples_checker.execution import ExecutionClient, ExecutionError
from samples_checker.extraction import extract_code
from samples_checker.models import Code, ExecutionResult, FileType, RunContext
from samples_checker.repo import CloneError, clone_repository, create_scratch_dir, remove_path
from samples_checker.walker import Extractor, walk_code


logger = logging.getLogger(__name__)

K = TypeVar("K")
T = TypeVar("T")

Acquirer = Callable[[Path, str], None]
Classifier = Callable[[list[Code]], Sequence[T]]


class ExecutionBackend(Protocol):
    """Anything able to run a code unit."""

    def execute(self, code: Code) -> ExecutionResult:
        ...


# ============================================================
# Reports
# ============================================================

@dataclass(frozen=True)
class RunFailure:
    """
    Why a run stopped early

    Attributes:
        kind: "clone", "io" or "execution"
        message: Human readable reason
        error: Exception that ended the run
    """
    kind: str
    message: str
    error: Optional[BaseException] = field(default=None, compare=False, repr=False)


class RunReport(Mapping[K, Code]):
    """Read-only mapping from an outcome key to one code unit producing it."""

    def __init__(
        self,
        entries: Mapping[K, Code],
        failure: Optional[RunFailure] = None,
        snippet_count: int = 0,
    ):
        self._entries = dict(entries)
        self.failure = failure
        self.snippet_count = snippet_count

    @property
    def ok(self) -> bool:
        """True when the run was not cut short."""
        return self.failure is None

    def __getitem__(self, key: K) -> Code:
        return self._entries[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RunReport({self._entries!r}, failure={self.failure!r})"


@dataclass
class SnippetFailure:
    """A sample whose execution produced diagnostics or an exception."""
    code: Code
    result: ExecutionResult


@dataclass
class CheckReport:
    """Failing samples of a check run, in walk order."""
    failures: list[SnippetFailure] = field(default_factory=list)
    checked: int = 0
    failure: Optional[RunFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def passed(self) -> bool:
        """True when the run completed and no sample failed."""
        return self.ok and not self.failures


# ============================================================
# Orchestrator
# ============================================================

class SamplesVerifier:
    """
    Verify the code samples of a documentation repository

    A compiler server client built by the verifier itself is closed when
    each call ends. The verifier is also a context manager.
    """

    def __init__(
        self,
        config: VerifierConfig | None = None,
        *,
        acquire: Acquirer | None = None,
        extract: Extractor | None = None,
        client: ExecutionBackend | None = None,
    ):
        """
        Args:
            config: Verifier settings
            acquire: Clones a URL into a directory; defaults to GitPython
            extract: Extracts code units from one file
            client: Runs code units; defaults to the compiler server client
        """
        self.config = config or VerifierConfig()
        self._acquire = acquire or partial(clone_repository, config=self.config.clone)
        self._extract = extract or extract_code
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> ExecutionBackend:
        if self._client is None:
            self._client = ExecutionClient(self.config.execution)
        return self._client

    def close(self) -> None:
        if self._owns_client and isinstance(self._client, ExecutionClient):
            self._client.close()
            self._client = None

    def __enter__(self) -> "SamplesVerifier":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def collect(
        self, url: str, attributes: Sequence[str], file_type: FileType
    ) -> RunReport[ExecutionResult]:
        """
        Execute every sample and map each distinct result to a sample

        Samples with identical results collapse into one entry holding the
        last of them.
        """
        results: dict[ExecutionResult, Code] = {}
        count = 0

        def on_code(code: Code) -> None:
            nonlocal count
            count += 1
            results[self.client.execute(code)] = code

        failure = self._process_repository(url, attributes, file_type, on_code)
        return RunReport(results, failure=failure, snippet_count=count)

    def check(self, url: str, attributes: Sequence[str], file_type: FileType) -> CheckReport:
        """
        Execute every sample and log those that failed

        A sample fails when its result has a diagnostic or an exception.
        """
        report = CheckReport()

        def on_code(code: Code) -> None:
            report.checked += 1
            result = self.client.execute(code)
            errors = result.messages
            if errors:
                logger.info("Code: \n%s", code.text)
                logger.info("Errors: \n%s", "\n".join(str(e) for e in errors))
                if result.exception is not None:
                    logger.info("Exception: \n%s", result.exception.message)
                else:
                    logger.info("Output: \n%s", result.text)
            elif result.exception is not None:
                logger.info("Code: \n%s", code.text)
                logger.info("Exception: \n%s", result.exception.message)
            else:
                return
            report.failures.append(SnippetFailure(code=code, result=result))

        report.failure = self._process_repository(url, attributes, file_type, on_code)
        return report

    def parse(
        self,
        url: str,
        attributes: Sequence[str],
        file_type: FileType,
        classifier: Classifier,
    ) -> RunReport[T]:
        """
        Classify samples without executing them

        Args:
            url: Repository URL
            attributes: Attributes a sample must carry
            file_type: Document format to scan
            classifier: Maps the ordered sample list to one value per sample

        Returns:
            Mapping from classifier output to sample

        Raises:
            ValueError: classifier returned a different number of values
        """
        snippets: list[Code] = []
        failure = self._process_repository(url, attributes, file_type, snippets.append)

        outputs = list(classifier(list(snippets)))
        if len(outputs) != len(snippets):
            raise ValueError(
                f"Classifier returned {len(outputs)} values for {len(snippets)} samples"
            )
        return RunReport(dict(zip(outputs, snippets)), failure=failure, snippet_count=len(snippets))

    def _process_repository(
        self,
        url: str,
        attributes: Sequence[str],
        file_type: FileType,
        on_code: Callable[[Code], None],
    ) -> Optional[RunFailure]:
        try:
            directory = create_scratch_dir(url, self.config.work_dir)
        except OSError as e:
            logger.error("Cannot create a working directory for %s: %s", url, e)
            return RunFailure("io", str(e), e)

        ctx = RunContext(url=url, directory=directory, file_type=file_type,
                         attributes=list(attributes))
        try:
            logger.info("Cloning repository %s...", ctx.url)
            self._acquire(ctx.directory, ctx.url)
            for code in walk_code(ctx.directory, ctx.attributes, ctx.file_type, self._extract):
                on_code(code)
        except CloneError as e:
            logger.error("Cannot clone %s: %s", ctx.url, e)
            return RunFailure("clone", str(e), e)
        except ExecutionError as e:
            logger.error("%s", e)
            return RunFailure("execution", str(e), e)
        except OSError as e:
            logger.error("I/O error while processing %s: %s", ctx.url, e)
            return RunFailure("io", str(e), e)
        finally:
            self._cleanup(ctx.directory)
            self.close()
        return None

    def _cleanup(self, directory: Path) -> None:
        try:
            remove_path(directory)
        except OSError as e:
            logger.warning("Failed to remove %s: %s", directory, e)
