"""Release branch procedures: create a release branch, update a built branch.

create_release_branch cuts "<prefix><version>" from a base branch:
1. Ask for the version token and base branch
2. Refuse if the remote already lists a matching branch
3. Fetch, check out <remote>/<base>, create the local branch
4. Show git status and push with upstream tracking once confirmed

update_release_branch publishes the working tree onto an existing branch:
1. Refuse on a dirty working tree or an unknown target
2. Copy the working tree into a per-run staging area
3. Shallow-clone the target branch next to it
4. Mirror the copy onto the clone, commit and push from the clone

The operator's own checkout is never switched during an update; all
mutation happens inside the temporary clone.
"""

from __future__ import annotations

import click

from .branches import (
    current_branch,
    find_remote_branch,
    list_remote_branches,
    pending_changes,
    remote_url,
    repo_root,
)
from .models import BuildConfig, BuildTarget
from .shell import fatal, git, step
from .sync import copy_worktree, mirror, staging_area
from .versions import is_major_minor, release_branch_name


def create_release_branch(config: BuildConfig) -> str:
    """Create a release branch on the remote, tracked by a local branch.

    Returns:
        Name of the pushed branch.

    Raises:
        SystemExit: On a name collision, a declined push, or a requested
                    beta tag (not implemented).
        subprocess.CalledProcessError: If any git command fails.
    """
    version = click.prompt(
        "What version are you releasing? Please write in x.x syntax. Example: 4.9"
    )
    base = click.prompt(
        "Which branch would you like to base the release branch on?",
        default=config.default_base,
    )
    if not is_major_minor(version):
        print(f"  Warning: {version!r} is not in x.x syntax")

    name = release_branch_name(version, config.prefix)

    step(f"Checking {config.remote} for {name}")
    existing = find_remote_branch(
        name, list_remote_branches(), config.remote, config.match
    )
    if existing:
        fatal(f"{name} already exists (matched {existing}). Exiting...")
    print("  Not found, good to go")

    step("Fetching latest")
    git("fetch", config.remote)
    git("checkout", f"{config.remote}/{base}")

    step(f"Creating new branch {name}")
    git("checkout", "-b", name)
    print(f"  Now standing on new release branch {name}\n")
    print(git("status"))
    print()

    if not click.confirm(
        "The above output is the 'git status' of the local release branch. "
        "Push to repo?",
        default=False,
    ):
        fatal(f"Push declined. {name} exists locally only.")

    step("Pushing to repo")
    git("push", "-u", config.remote, name)
    print(f"  New branch {name} successfully created!")

    if click.confirm(
        "Would you like to create a new tag for the beta release?", default=False
    ):
        fatal(f"Creating a beta tag is not implemented yet. {name} was pushed untagged.")

    return name


def update_release_branch(config: BuildConfig, target: BuildTarget) -> None:
    """Publish the working tree onto an existing remote branch as one commit.

    A run with no change since the last update still pushes a (empty)
    commit, so repeated updates always end with the same tree on the branch
    and one new commit per run.

    Args:
        config: Tool configuration.
        target: Resolved branch target; a just-created branch wins over a
                requested one.

    Raises:
        SystemExit: On a dirty working tree, missing target, unknown branch,
                    or declined confirmation.
        subprocess.CalledProcessError: If cloning, committing or pushing fails.
    """
    step("Checking working tree")
    changes = pending_changes()
    if changes:
        fatal(
            "Uncommitted changes found.\n"
            + "\n".join(f"  {line}" for line in changes)
            + "\nPlease deal with them and try again clean."
        )
    print("  Clean")

    build_target = target.resolve()
    if not build_target:
        fatal("No target branch specified.")

    if not find_remote_branch(
        build_target, list_remote_branches(), config.remote, config.match
    ):
        fatal(f"Branch {build_target} not found in git repository.")

    source_branch = current_branch()
    if not click.confirm(
        f"You are about to update the {build_target} branch from the "
        f"{source_branch} branch. Are you sure?",
        default=False,
    ):
        fatal(f"Update of {build_target} declined.")

    root = repo_root()
    clone_url = remote_url(config.remote)
    if not clone_url:
        fatal(f"Remote {config.remote!r} has no URL configured.")

    with staging_area() as staging:
        step(f"Copying working tree (skipping {', '.join(config.exclude)})")
        copy_worktree(root, staging.worktree, config.exclude)
        print(f"  {root} → {staging.worktree}")

        step(f"Pulling latest from {build_target}")
        git(
            "clone",
            "--depth",
            "1",
            "-b",
            build_target,
            "--single-branch",
            clone_url,
            str(staging.clone),
        )

        step("Mirroring working tree onto remote version")
        removed = mirror(staging.worktree, staging.clone, config.protect)
        for path in removed:
            print(f"  Removed: {path}")

        step("Committing and pushing")
        git("add", ".", cwd=staging.clone)
        git("commit", "--allow-empty", "-m", config.commit_message, cwd=staging.clone)
        git("push", "origin", build_target, cwd=staging.clone)
        print(f"  Branch {build_target} has been updated.")

    print(f"\n{'=' * 60}\nDone! Staging area cleaned up.\n{'=' * 60}")
