"""
Replay commits after the anchor to compute the current version.

Every commit after the anchor bumps the version exactly once. The bump is
chosen from the commit message by plain, case-sensitive substring tests:

- a message containing the major marker bumps major,
- otherwise one containing the minor marker bumps minor,
- otherwise patch is bumped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from commitver.history.anchor import ROOT, OverrideRecord, anchor_version
from commitver.semver import Version
from commitver.vcs.git_client import Commit, GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


@dataclass(frozen=True)
class BumpRules:
    """Markers that select the bump applied by a commit."""

    major_marker: str = "[major]"
    minor_marker: str = "[minor]"


def apply_commit(version: Version, message: str, rules: BumpRules = BumpRules()) -> Version:
    """Apply the first matching increment rule for ``message``."""
    if rules.major_marker in message:
        return version.bump_major()
    if rules.minor_marker in message:
        return version.bump_minor()
    return version.bump_patch()


def fold_commits(
    start: Version, commits: Iterable[Commit], rules: BumpRules = BumpRules()
) -> Version:
    """Fold ``commits`` (oldest first) over ``start``."""
    version = start
    for commit in commits:
        version = apply_commit(version, commit.message, rules)
        logger.debug("%s -> %s", commit.sha[:7], version)
    return version


def replay(
    client: GitClient,
    anchor: Optional[OverrideRecord],
    head: str,
    rules: BumpRules = BumpRules(),
) -> Version:
    """Compute the version of ``head`` starting from ``anchor``.

    Parameters
    ----------
    client : GitClient
        Client bound to the repository root.
    anchor : Optional[OverrideRecord]
        The located override, or ``ROOT`` to replay the whole history.
    head : str
        Full id of the commit to compute the version for.
    rules : BumpRules
        Markers recognised in commit messages.

    Returns
    -------
    Version
        The version after replaying every commit in the range.
    """
    if anchor is not ROOT and anchor.commit_id == head:
        return anchor.version

    since = None if anchor is ROOT else anchor.commit_id
    commits = client.iter_commits(head, since=since)
    return fold_commits(anchor_version(anchor), commits, rules)
