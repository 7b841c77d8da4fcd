"""File synchronization between the working tree and a branch clone.

An update stages a filtered copy of the working tree, then mirrors it onto a
fresh clone of the target branch: staged files overwrite the clone's, and
clone entries the staged copy lacks are deleted. Excluded entries are never
copied; protected entries in the clone (``.git`` by default) are never
deleted.
"""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from fnmatch import fnmatch
from pathlib import Path

from pydantic import BaseModel


class StagingArea(BaseModel):
    """Per-run directories used by an update.

    Attributes:
        worktree: Destination of the filtered working-tree copy. Not created
                  until the copy runs.
        clone: Destination of the shallow branch clone. Not created until
               the clone runs.
    """

    worktree: Path
    clone: Path


@contextmanager
def staging_area(prefix: str = "build-release-branch-") -> Iterator[StagingArea]:
    """Create a uniquely named staging area, removed on every exit path."""
    with tempfile.TemporaryDirectory(prefix=prefix) as tmp:
        root = Path(tmp)
        yield StagingArea(worktree=root / "worktree", clone=root / "clone")


def is_excluded(name: str, patterns: Sequence[str]) -> bool:
    """True if a file or directory name matches any exclude pattern."""
    return any(fnmatch(name, pattern) for pattern in patterns)


def copy_worktree(src: Path, dst: Path, exclude: Sequence[str]) -> None:
    """Copy ``src`` into ``dst`` recursively, skipping excluded names.

    Patterns are matched against each entry's name at every depth, so
    "node_modules" drops nested dependency folders too.
    """
    shutil.copytree(src, dst, symlinks=True, ignore=shutil.ignore_patterns(*exclude))


def _is_real_dir(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()


def _is_real_file(path: Path) -> bool:
    return path.is_file() and not path.is_symlink()


def _remove(path: Path) -> None:
    if _is_real_dir(path):
        shutil.rmtree(path)
    else:
        path.unlink()


def _prune(
    src: Path, dst: Path, root: Path, protect: Sequence[str], removed: list[Path]
) -> None:
    for entry in sorted(dst.iterdir()):
        if is_excluded(entry.name, protect):
            continue
        counterpart = src / entry.name
        if _is_real_dir(entry) and _is_real_dir(counterpart):
            _prune(counterpart, entry, root, protect, removed)
            continue
        # Regular files get overwritten in place; anything else has to go
        # so the copy can recreate it with the source's type.
        if _is_real_file(entry) and _is_real_file(counterpart):
            continue
        _remove(entry)
        if not counterpart.exists() and not counterpart.is_symlink():
            removed.append(entry.relative_to(root))


def mirror(src: Path, dst: Path, protect: Sequence[str] = (".git",)) -> list[Path]:
    """Make ``dst`` an exact copy of ``src``, keeping protected entries.

    Args:
        src: Staged working-tree copy.
        dst: Branch clone to overwrite.
        protect: Name patterns in ``dst`` that are left untouched even when
                 absent from ``src``.

    Returns:
        Paths (relative to ``dst``) that were deleted because ``src`` lacks them.
    """
    removed: list[Path] = []
    _prune(src, dst, dst, protect, removed)
    shutil.copytree(src, dst, symlinks=True, dirs_exist_ok=True)
    return removed
