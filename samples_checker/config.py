"""
Configuration - clone, execution and verifier settings
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from samples_checker.models import Platform


DEFAULT_COMPILER_URL = "https://api.kotlinlang.org"


@dataclass
class CloneConfig:
    """
    Clone settings

    Attributes:
        timeout: Seconds the transfer may stay below the low-speed limit
        max_retries: Retries after the first attempt
        retry_delay: Initial delay between attempts (seconds)
        backoff_factor: Multiplier applied to the delay after each retry
        depth: Clone depth; 0 fetches the full history
    """
    timeout: int = 60
    max_retries: int = 2
    retry_delay: float = 2.0
    backoff_factor: float = 2.0
    depth: int = 1


@dataclass
class ExecutionConfig:
    """
    Compiler server settings

    Attributes:
        compiler_url: Base URL of the compiler server
        platform: Compilation target
        timeout: Per-request timeout (seconds)
        args: Program arguments passed to every snippet
    """
    compiler_url: str = DEFAULT_COMPILER_URL
    platform: Platform = Platform.JVM
    timeout: float = 30.0
    args: str = ""


@dataclass
class VerifierConfig:
    """Top-level settings; work_dir=None uses the system temp directory."""
    clone: CloneConfig = field(default_factory=CloneConfig)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
    work_dir: Optional[Path] = None
