"""
Extraction Layer - pull code samples out of documentation files
"""

from pathlib import Path
from typing import Iterator, Sequence

from samples_checker.extraction.html import iter_html_samples
from samples_checker.extraction.markdown import iter_markdown_samples
from samples_checker.models import Code, FileType


def extract_code(path: Path, file_type: FileType, attributes: Sequence[str]) -> Iterator[Code]:
    """
    Yield the code units of one documentation file

    Blank samples are skipped; leading and trailing newlines are trimmed.
    Malformed markup yields fewer samples rather than an error.

    Args:
        path: Document to read
        file_type: Format of the document
        attributes: Attributes a sample must carry

    Returns:
        Iterator over code units in document order

    Raises:
        OSError: the file could not be read
    """
    content = path.read_text(encoding="utf-8", errors="replace")

    if file_type is FileType.MD:
        samples = iter_markdown_samples(content, attributes)
    else:
        samples = iter_html_samples(content, attributes)

    for sample in samples:
        text = sample.strip("\r\n")
        if text.strip():
            yield Code(text)


__all__ = [
    "extract_code",
    "iter_html_samples",
    "iter_markdown_samples",
]
