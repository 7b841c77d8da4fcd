"""Shared test fixtures."""

from __future__ import annotations

import subprocess
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest


class FakeGit:
    """Stand-in for shell.git that records calls and answers queries.

    Attributes:
        remote_branches: Lines returned by ``git branch -r``.
        status: Output of ``git status --porcelain``.
        branch: Currently checked-out branch.
        root: Repository root returned by ``rev-parse --show-toplevel``.
        url: Configured remote URL.
        clone_files: Files (relative path → content) a clone materializes.
        fail_on: Subcommands that raise CalledProcessError.
        calls: Every call as a tuple of its arguments.
        cwds: The cwd passed with each call.
    """

    def __init__(self, root: Path) -> None:
        self.remote_branches = ["origin/HEAD -> origin/master", "origin/master"]
        self.status = ""
        self.branch = "master"
        self.root = root
        self.url = "git@example.com:acme/plugin.git"
        self.clone_files: dict[str, str] = {}
        self.fail_on: set[str] = set()
        self.calls: list[tuple[str, ...]] = []
        self.cwds: list[Path | None] = []

    def __call__(self, *args: str, check: bool = True, cwd: Path | None = None) -> str:
        self.calls.append(args)
        self.cwds.append(cwd)
        if args[0] in self.fail_on:
            raise subprocess.CalledProcessError(
                128, ["git", *args], output="", stderr=f"fatal: {args[0]} failed"
            )
        if args[:2] == ("branch", "-r"):
            return "\n".join(f"  {b}" for b in self.remote_branches)
        if args[:2] == ("status", "--porcelain"):
            return self.status
        if args[:1] == ("status",):
            return f"On branch {self.branch}\nnothing to commit, working tree clean"
        if args[:2] == ("rev-parse", "--abbrev-ref"):
            return self.branch
        if args[:2] == ("rev-parse", "--show-toplevel"):
            return str(self.root)
        if args[:2] == ("config", "--get"):
            return self.url
        if args[0] == "clone":
            self._clone(Path(args[-1]))
        return ""

    def _clone(self, dest: Path) -> None:
        (dest / ".git").mkdir(parents=True)
        (dest / ".git" / "HEAD").write_text("ref: refs/heads/built\n")
        for rel, content in self.clone_files.items():
            path = dest / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)

    def subcommands(self) -> list[str]:
        """First argument of every call, in order."""
        return [args[0] for args in self.calls]

    def find(self, *prefix: str) -> list[tuple[str, ...]]:
        """Calls whose leading arguments equal ``prefix``."""
        return [args for args in self.calls if args[: len(prefix)] == prefix]


@pytest.fixture
def worktree(tmp_path: Path) -> Path:
    """A small working tree with git metadata and dependency folders."""
    root = tmp_path / "repo"
    (root / ".git").mkdir(parents=True)
    (root / ".git" / "config").write_text("[core]\n")
    (root / ".gitignore").write_text("node_modules\n")
    (root / "node_modules" / "left-pad").mkdir(parents=True)
    (root / "node_modules" / "left-pad" / "index.js").write_text("module.exports = 1;\n")
    (root / "src").mkdir()
    (root / "src" / "plugin.php").write_text("<?php // v2\n")
    (root / "readme.txt").write_text("Stable tag: 4.9\n")
    return root


@pytest.fixture
def fake_git(worktree: Path) -> Iterator[FakeGit]:
    """Patch git in every module that shells out to it."""
    fake = FakeGit(worktree)
    with (
        patch("build_release_branch.pipeline.git", new=fake),
        patch("build_release_branch.branches.git", new=fake),
    ):
        yield fake
