"""
Document walker - find documentation files and stream their samples
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, Sequence

from samples_checker.models import Code, FileType


logger = logging.getLogger(__name__)

Extractor = Callable[[Path, FileType, Sequence[str]], Iterable[Code]]


def _raise(error: OSError) -> None:
    raise error


def iter_documents(root: Path, file_type: FileType) -> Iterator[Path]:
    """
    Yield every file under `root` whose extension is exactly the file type's

    Directories and files are visited in sorted order.

    Raises:
        OSError: a directory could not be listed
    """
    suffix = f".{file_type.extension}"
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if path.suffix == suffix and path.is_file():
                yield path


def walk_code(
    root: Path,
    attributes: Sequence[str],
    file_type: FileType,
    extract: Extractor,
) -> Iterator[Code]:
    """
    Yield the code units of every eligible document under `root`

    Args:
        root: Directory to walk
        attributes: Attributes a sample must carry
        file_type: Document format to scan
        extract: Extractor applied to each eligible file

    Returns:
        Code units in file visitation order, then extraction order
    """
    for path in iter_documents(root, file_type):
        logger.info("Processing %s...", path)
        yield from extract(path, file_type, attributes)
