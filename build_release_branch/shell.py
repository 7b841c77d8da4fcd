"""Shell and git utilities.

Provides thin wrappers around subprocess calls for git operations, plus the
output helpers used to report progress and abort the run.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path


def git(*args: str, check: bool = True, cwd: Path | None = None) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "status", "--porcelain").
        check: If True (default), raise CalledProcessError on non-zero exit.
               Set to False for queries that may legitimately fail.
        cwd: Directory to run git in. Defaults to the current directory.

    Returns:
        Stripped stdout from the git command.
    """
    result = subprocess.run(
        ["git", *args], capture_output=True, text=True, check=check, cwd=cwd
    )
    return result.stdout.strip()


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the phases of a branch operation in terminal output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def fatal(msg: str) -> None:
    """Print an error message and exit with code 1.

    Use for unrecoverable errors and operator aborts.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)
