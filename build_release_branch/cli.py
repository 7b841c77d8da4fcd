"""CLI entry point for build-release-branch."""

from __future__ import annotations

import subprocess
import sys

import click

from build_release_branch.branches import repo_root
from build_release_branch.models import BuildConfig, BuildTarget, MatchPolicy
from build_release_branch.pipeline import create_release_branch, update_release_branch
from build_release_branch.toml import load_config
from build_release_branch.versions import release_branch_name

PROG = "build-release-branch"

USAGE = f"""\
usage: {PROG} [-n new] [-u update <branchname>]
  -n      Create new release branch
  -u      Update existing release built branch
          Can take an extra param that refers to an existing branch.
          Example: {PROG} -u master
  -h      help"""

NEW_COMMANDS = ("new", "-n")
UPDATE_COMMANDS = ("update", "-u")


def _load_config(match: str | None) -> BuildConfig:
    config = load_config(repo_root())
    if match:
        config = config.model_copy(update={"match": MatchPolicy(match)})
    return config


def _abort(detail: str) -> None:
    """Print what failed, then the stop notice, and exit with code 1."""
    if detail:
        click.echo(detail, err=True)
    click.secho(
        "Something went wrong and the build has stopped.  "
        "See error above for more details.",
        fg="red",
        err=True,
    )
    sys.exit(1)


# -n/-u/-h arrive as plain arguments, so click's own option parsing and
# --help are kept out of their way.
@click.command(
    context_settings={"ignore_unknown_options": True, "help_option_names": []}
)
@click.version_option(package_name=PROG)
@click.option(
    "--match",
    type=click.Choice([p.value for p in MatchPolicy]),
    default=None,
    help="How branch names are matched against the remote listing.",
)
@click.argument("command", required=False)
@click.argument("rest", nargs=-1)
def cli(command: str | None, rest: tuple[str, ...], match: str | None) -> None:
    """Create a release branch, or update a built branch from the working tree."""
    if command not in NEW_COMMANDS + UPDATE_COMMANDS:
        click.echo(USAGE)
        sys.exit(1)

    try:
        config = _load_config(match)
        if command in NEW_COMMANDS:
            create_release_branch(config)
            return

        if rest and rest[0]:
            target = rest[0]
        else:
            version = click.prompt(
                "What release branch are you updating? "
                "(enter just version number i.e. X.X)"
            )
            target = release_branch_name(version, config.prefix)
        update_release_branch(config, BuildTarget(requested=target))
    except subprocess.CalledProcessError as exc:
        _abort((exc.stderr or exc.stdout or "").strip())
    except OSError as exc:
        _abort(str(exc))


if __name__ == "__main__":
    cli()
