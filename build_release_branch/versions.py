"""Version token and release branch naming utilities.

Release branches are named after a "major.minor" version token (e.g., "4.9"
→ "release-branch-4.9"). The token is free-form: anything the operator types
is accepted, and the convention is only checked to warn about likely typos.
"""

from __future__ import annotations

import semver


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Handles incomplete versions by padding with zeros:
    - "4" → "4.0.0"
    - "4.9" → "4.9.0"
    - "4.9.1" → "4.9.1"

    Raises:
        ValueError: If the padded string is not a valid semver version.
    """
    parts = version_str.split(".")
    while len(parts) < 3:
        parts.append("0")
    return semver.Version.parse(".".join(parts[:3]))


def is_major_minor(token: str) -> bool:
    """True if ``token`` follows the "major.minor" convention (e.g., "4.9")."""
    if len(token.split(".")) != 2:
        return False
    try:
        parse_version(token)
    except ValueError:
        return False
    return True


def release_branch_name(version: str, prefix: str = "release-branch-") -> str:
    """Derive a release branch name from a version token.

    Examples:
        "4.9" → "release-branch-4.9"
        "5.0", prefix="rel-" → "rel-5.0"
    """
    return f"{prefix}{version}"
