"""Data models for build-release-branch.

These Pydantic models carry the tool configuration and the resolved branch
target between the dispatcher and the branch procedures.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MatchPolicy(str, Enum):
    """How a branch name is compared against the remote branch listing.

    SUBSTRING matches any listed branch containing the name, so
    "release-branch-4.9" also matches "origin/release-branch-4.9-built".
    EXACT matches only "<remote>/<name>".
    """

    SUBSTRING = "substring"
    EXACT = "exact"


class BuildConfig(BaseModel):
    """Settings read from [tool.build-release-branch] in pyproject.toml.

    Attributes:
        prefix: Prepended to a version token to form a release branch name.
        default_base: Branch new release branches are cut from.
        remote: Remote that is fetched, listed, cloned and pushed to.
        commit_message: Message of the commit pushed by an update.
        exclude: Glob patterns left out of the working-tree copy.
        protect: Glob patterns never deleted from the branch clone, even
                 when the working-tree copy lacks them.
        match: Policy for finding branches in the remote listing.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    prefix: str = "release-branch-"
    default_base: str = Field(default="master", alias="default-base")
    remote: str = "origin"
    commit_message: str = Field(default="New build", alias="commit-message")
    exclude: list[str] = Field(default_factory=lambda: ["*.git*", "node_modules"])
    protect: list[str] = Field(default_factory=lambda: [".git"])
    match: MatchPolicy = MatchPolicy.SUBSTRING


class BuildTarget(BaseModel):
    """The branch an update should publish to.

    Attributes:
        created: Branch created earlier in the same invocation, if any.
                 The CLI never chains creation into an update, so only
                 direct callers set it.
        requested: Branch resolved by the dispatcher, if any.
    """

    created: str | None = None
    requested: str | None = None

    def resolve(self) -> str | None:
        """Return the branch to build, preferring a just-created one."""
        return self.created or self.requested or None
