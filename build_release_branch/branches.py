"""Queries against the local repository and its remote branch listing."""

from __future__ import annotations

from pathlib import Path

from .models import MatchPolicy
from .shell import git


def list_remote_branches() -> list[str]:
    """Return remote-tracking branches as listed by ``git branch -r``.

    Symbolic entries such as "origin/HEAD -> origin/master" are reduced to
    their left-hand name.
    """
    branches: list[str] = []
    for line in git("branch", "-r").splitlines():
        name = line.strip().split(" -> ")[0]
        if name:
            branches.append(name)
    return branches


def find_remote_branch(
    name: str,
    branches: list[str],
    remote: str = "origin",
    policy: MatchPolicy = MatchPolicy.SUBSTRING,
) -> str | None:
    """Return the first listed branch matching ``name``, or None.

    Under SUBSTRING, any listed branch containing ``name`` matches, so
    "release-branch-4.9" is found by "origin/release-branch-4.9-built".
    Under EXACT, only "<remote>/<name>" matches.
    """
    if policy is MatchPolicy.EXACT:
        wanted = f"{remote}/{name}"
        return wanted if wanted in branches else None
    return next((b for b in branches if name in b), None)


def pending_changes() -> list[str]:
    """Return porcelain status lines for staged, unstaged and untracked files."""
    return git("status", "--porcelain").splitlines()


def current_branch() -> str:
    """Name of the checked-out branch ("HEAD" when detached)."""
    return git("rev-parse", "--abbrev-ref", "HEAD")


def repo_root() -> Path:
    """Top-level directory of the repository containing the cwd."""
    return Path(git("rev-parse", "--show-toplevel"))


def remote_url(remote: str = "origin") -> str:
    """URL configured for ``remote``; empty when none is set."""
    return git("config", "--get", f"remote.{remote}.url", check=False)
