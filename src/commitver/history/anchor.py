"""
Data model for the replay anchor.

An :class:`OverrideRecord` pins a version to the commit that declared it.
The absence of any valid override is represented by :data:`ROOT`, which
stands for "before the first commit" at version ``0.0.0``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from commitver.semver import ZERO, Version


@dataclass(frozen=True)
class OverrideRecord:
    """A version declared valid as of a specific commit.

    Attributes
    ----------
    commit_id : str
        Full id of the commit whose tree holds the declaration.
    version : Version
        The declared version.
    """

    commit_id: str
    version: Version


ROOT = None


def anchor_version(anchor: Optional[OverrideRecord]) -> Version:
    """Return the version replay starts from."""
    if anchor is ROOT:
        return ZERO
    return anchor.version
