"""
Locate the most recent valid version override in history.

The override file is a plain text file tracked in the repository. Any line
of the form ``version-at-commit: X.Y.Z`` declares the version of the commit
that introduced it. The locator walks the commits that touched the file,
newest first, and stops at the first one whose content carries a valid
declaration. Malformed or missing declarations are skipped without being
reported.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from commitver.history.anchor import ROOT, OverrideRecord
from commitver.semver import Version, parse_version
from commitver.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


DEFAULT_OVERRIDE_PATH = ".version-override"

OVERRIDE_LINE_RE = re.compile(r"^version-at-commit: (.+)$")


def parse_override(text: Optional[str]) -> Optional[Version]:
    """Extract the declared version from override file content.

    Lines are matched in file order after trimming surrounding whitespace;
    the first matching line wins and everything else is ignored.

    Parameters
    ----------
    text : Optional[str]
        File content, or ``None`` when the file is absent.

    Returns
    -------
    Optional[Version]
        The declared version, or ``None`` if no line matches.
    """
    if not text:
        return None
    for line in text.splitlines():
        match = OVERRIDE_LINE_RE.match(line.strip())
        if match is None:
            continue
        version = parse_version(match.group(1))
        if version is not None:
            return version
    return None


def locate_override(
    client: GitClient, override_path: str = DEFAULT_OVERRIDE_PATH
) -> Optional[OverrideRecord]:
    """Return the latest commit declaring a valid override.

    Parameters
    ----------
    client : GitClient
        Client bound to the repository root.
    override_path : str
        Path of the override file relative to the repository root.

    Returns
    -------
    Optional[OverrideRecord]
        The anchor, or :data:`~commitver.history.anchor.ROOT` when no commit
        in history holds a valid declaration.
    """
    for sha in client.commits_touching(override_path):
        version = parse_override(client.show_file(sha, override_path))
        if version is None:
            logger.debug("Skipping %s: no valid declaration in %s", sha, override_path)
            continue
        logger.debug("Override %s declared at %s", version, sha)
        return OverrideRecord(commit_id=sha, version=version)
    logger.debug("No valid override found for %s", override_path)
    return ROOT
