"""
Command line interface for commitver.

This module defines the ``main`` function which is used as the entry
point when executing the ``commitver`` command. It captures the working
directory, locates the repository, loads the configuration, and prints
the version derived from history as a single line on standard output.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from commitver import __version__
from commitver.config.loader import ConfigError, load_config
from commitver.derive import RepoContext, derive_version
from commitver.vcs.git_client import GitClient, GitError

# Create a module-level logger. Attach a null handler and disable
# propagation to avoid logging errors when the root logger's stream is
# closed (such as during unit tests). When logging is configured by
# the CLI, root handlers will be added and messages will propagate.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_NO_REPO = 1
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6

PROG_NAME = "commitver"


def set_package_propagation(enabled: bool) -> None:
    """Route the package loggers to the root handlers, or detach them."""
    for name, candidate in logging.Logger.manager.loggerDict.items():
        if name.split(".")[0] == "commitver" and isinstance(candidate, logging.Logger):
            candidate.propagate = enabled


def print_error(message: str) -> None:
    """Print an error message on stderr."""
    click.echo(f"Error: {message}", err=True)


def print_usage_error(message: str) -> None:
    """Print the two-line usage message on stdout."""
    click.echo(f"Usage: {PROG_NAME} [--verbose]")
    click.echo(f"Error: {message}")


@click.command()
@click.option("--verbose", is_flag=True, help="Log how the version was derived on stderr.")
@click.version_option(version=__version__, prog_name=PROG_NAME)
def main(verbose: bool) -> None:
    """Print the semantic version derived from the Git history.

    Run from any directory inside the repository. Commits whose message
    contains [major] or [minor] bump that component; every other commit
    bumps the patch level.
    """
    # Use force=True so that handlers are reconfigured on subsequent
    # invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )
    set_package_propagation(verbose)

    ctx = click.get_current_context(silent=True)

    try:
        context = RepoContext.discover(Path.cwd())
        if context is None:
            print_usage_error("not inside a Git repository (run from any directory of one)")
            raise click.exceptions.Exit(EXIT_NO_REPO)
        logger.debug("Repository root: %s", context.repo_root)

        try:
            config = load_config(context.repo_root)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        client = GitClient(context.repo_root)
        try:
            version = derive_version(context, client, config)
        except GitError as exc:
            print_error(f"Git error: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        click.echo(str(version))
        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
