"""
Derive the version of the current HEAD.

This module composes the override locator and the replayer. The process
state they depend on (working directory and repository root) is captured
once into a :class:`RepoContext` by the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from commitver.history.anchor import ROOT
from commitver.history.override_locator import locate_override
from commitver.history.replay import BumpRules, replay
from commitver.semver import ZERO, Version
from commitver.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


@dataclass(frozen=True)
class RepoContext:
    """Process state captured at startup."""

    cwd: Path
    repo_root: Path

    @classmethod
    def discover(cls, cwd: Path) -> Optional["RepoContext"]:
        """Build a context for ``cwd``, or return None outside a repository."""
        repo_root = GitClient.find_repo_root(cwd)
        if repo_root is None:
            return None
        return cls(cwd=cwd, repo_root=repo_root)


def derive_version(
    context: RepoContext, client: GitClient, config: Dict[str, Any]
) -> Version:
    """Return the version of the repository's current HEAD.

    Raises
    ------
    GitError
        If any history query fails.
    """
    if not client.has_commits():
        logger.debug("Repository at %s has no commits", context.repo_root)
        return ZERO

    head = client.resolve_head()
    anchor = locate_override(client, config["override_path"])
    if anchor is ROOT:
        logger.debug("Replaying from root up to %s", head)
    else:
        logger.debug("Replaying from %s (%s) up to %s", anchor.commit_id, anchor.version, head)

    rules = BumpRules(
        major_marker=config["major_marker"],
        minor_marker=config["minor_marker"],
    )
    return replay(client, anchor, head, rules)
