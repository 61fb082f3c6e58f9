"""
Repository acquisition - clone remote documentation repositories

Provides:
1. Scratch directory naming derived from the repository URL
2. Cloning with timeout, retry and error classification
3. Removal of the scratch directory once a run is over
"""

import logging
import shutil
import tempfile
import time
from pathlib import Path
from typing import Optional

from git import GitCommandError, GitError, Repo

from samples_checker.config import CloneConfig


logger = logging.getLogger(__name__)

FALLBACK_DIR_NAME = "repository"

CLONE_ERROR_MESSAGES: dict[str, str] = {
    "timeout": """
Clone operation stalled for more than {timeout} seconds.

Suggestions:
- Try again with a longer timeout: --clone-timeout 120
- Try cloning manually: git clone {url}
""",
    "network": """
Network error while cloning repository.

Suggestions:
- Check your internet connection
- Verify the repository URL is correct: {url}
""",
    "auth": """
Authentication required for this repository.

Suggestions:
- Ensure you have access to {url}
- Check your Git credentials
""",
}


# ============================================================
# Errors
# ============================================================

class CloneError(Exception):
    """Repository could not be fetched."""
    pass


class CloneTimeoutError(CloneError):
    pass


class CloneNetworkError(CloneError):
    pass


class CloneAuthError(CloneError):
    pass


# ============================================================
# Scratch directories
# ============================================================

def scratch_name(url: str) -> str:
    """
    Derive a directory name from the last path segment of a URL

    `https://github.com/org/docs.git` -> `docs`

    Args:
        url: Repository URL

    Returns:
        Segment with its extension stripped, or a fallback name
    """
    segment = url.rstrip("/").rsplit("/", 1)[-1]
    segment = segment.rsplit(":", 1)[-1]
    if "." in segment:
        segment = segment.rsplit(".", 1)[0]
    return segment or FALLBACK_DIR_NAME


def create_scratch_dir(url: str, work_dir: Optional[Path] = None) -> Path:
    """Create a fresh, uniquely named directory for one run."""
    if work_dir is not None:
        work_dir.mkdir(parents=True, exist_ok=True)
    return Path(tempfile.mkdtemp(prefix=f"{scratch_name(url)}-", dir=work_dir))


def remove_path(path: Path) -> None:
    """
    Delete a run's directory

    Directories are removed recursively, anything else is unlinked.
    A missing path is not an error.

    Raises:
        OSError: deletion failed
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def _clear_directory(path: Path) -> None:
    for child in path.iterdir():
        remove_path(child)


# ============================================================
# Cloning
# ============================================================

def _classify_git_error(error: GitCommandError) -> CloneError:
    error_str = str(error).lower()
    if "timeout" in error_str or "timed out" in error_str or "too slow" in error_str:
        return CloneTimeoutError(str(error))
    if "authentication" in error_str or "403" in error_str or "401" in error_str:
        return CloneAuthError(str(error))
    return CloneNetworkError(str(error))


def format_clone_error(error: CloneError, url: str, timeout: int = 60) -> str:
    """
    Build a user-facing explanation for a clone failure

    Args:
        error: Clone failure
        url: Repository URL
        timeout: Timeout that was in effect

    Returns:
        Message with suggestions
    """
    if isinstance(error, CloneTimeoutError):
        return CLONE_ERROR_MESSAGES["timeout"].format(timeout=timeout, url=url)
    if isinstance(error, CloneAuthError):
        return CLONE_ERROR_MESSAGES["auth"].format(url=url)
    return CLONE_ERROR_MESSAGES["network"].format(url=url)


def clone_repository(local_dir: Path, url: str, config: Optional[CloneConfig] = None) -> None:
    """
    Clone `url` into `local_dir`, retrying transient failures

    `local_dir` may already exist but must be empty. Authentication
    failures are not retried.

    Args:
        local_dir: Destination directory
        url: Repository URL
        config: Clone settings (optional)

    Raises:
        CloneError: every attempt failed
    """
    if config is None:
        config = CloneConfig()

    last_error: Optional[CloneError] = None
    delay = config.retry_delay
    options = {"depth": config.depth} if config.depth > 0 else {}

    for attempt in range(config.max_retries + 1):
        try:
            Repo.clone_from(
                url,
                str(local_dir),
                env={
                    "GIT_HTTP_LOW_SPEED_LIMIT": "1000",
                    "GIT_HTTP_LOW_SPEED_TIME": str(config.timeout),
                    "GIT_TERMINAL_PROMPT": "0",
                },
                **options,
            )
            return
        except GitCommandError as e:
            last_error = _classify_git_error(e)
        except (GitError, OSError, ValueError) as e:
            last_error = CloneNetworkError(str(e))

        logger.debug("Clone attempt %d of %s failed: %s", attempt + 1, url, last_error)
        if isinstance(last_error, CloneAuthError):
            break
        if attempt < config.max_retries:
            if local_dir.is_dir():
                _clear_directory(local_dir)
            time.sleep(delay)
            delay *= config.backoff_factor

    if last_error:
        raise last_error
    raise CloneNetworkError(f"Unknown error while cloning {url}")
