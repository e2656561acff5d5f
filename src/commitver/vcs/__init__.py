"""
Version control system (VCS) integration.

This package contains the :class:`GitClient` used to read commit history,
file contents at historical commits, and the current HEAD of a Git
repository.
"""

from .git_client import Commit, GitClient, GitError  # noqa: F401
