"""
Git client implementation for commitver.

This module wraps the read-only Git operations needed to derive a version
from history. All subprocess calls go through :meth:`GitClient._run` so that
unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


@dataclass(frozen=True)
class Commit:
    """A single commit in history order."""

    sha: str
    message: str


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


STREAM_CHUNK_SIZE = 8192


class GitClient:
    """Client for reading history from a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def is_repo(path: Path) -> bool:
        """Return True if the given path is the root of a Git repository."""
        return (path / ".git").exists()

    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if GitClient.is_repo(current):
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is
            True, or if the ``git`` executable cannot be started.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid characters instead of failing
            )
        except FileNotFoundError as e:
            logger.error("Git executable not found: %s", e)
            raise GitError("git executable not found") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    def _stream(self, args: List[str]) -> Iterator[str]:
        """Yield the NUL-separated records a Git command writes to stdout.

        Records are produced as the output arrives instead of after the
        command has finished.

        Raises
        ------
        GitError
            If the command exits with a non-zero status or the ``git``
            executable cannot be started.
        """
        full_cmd = ["git"] + args
        logger.debug("Streaming Git command: %s", " ".join(full_cmd))
        try:
            proc = subprocess.Popen(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            logger.error("Git executable not found: %s", e)
            raise GitError("git executable not found") from e

        pending = ""
        with proc:
            for chunk in iter(lambda: proc.stdout.read(STREAM_CHUNK_SIZE), ""):
                pending += chunk
                *records, pending = pending.split("\0")
                yield from records
            stderr = proc.stderr.read()
            returncode = proc.wait()

        if returncode != 0:
            logger.error("Git command failed: %s\nSTDERR: %s", " ".join(full_cmd), stderr)
            raise GitError(stderr.strip() or f"git exited with status {returncode}")
        if pending:
            yield pending

    # ------------------------------------------------------------------
    # History queries
    # ------------------------------------------------------------------
    def has_commits(self) -> bool:
        """Return True if HEAD points at a commit.

        A freshly initialised repository has an unborn HEAD, for which
        ``rev-parse --verify --quiet`` exits with status 1.

        Raises
        ------
        GitError
            If git fails for any other reason, for example because it
            refuses to open the repository.
        """
        result = self._run(["rev-parse", "--verify", "--quiet", "HEAD"], check=False)
        if result.returncode == 0:
            return True
        if result.returncode == 1:
            return False
        logger.error("Cannot read HEAD in %s: %s", self.repo_root, result.stderr.strip())
        raise GitError(
            result.stderr.strip() or f"git rev-parse exited with status {result.returncode}"
        )

    def resolve_head(self) -> str:
        """Return the full commit id HEAD currently points at.

        Raises
        ------
        GitError
            If HEAD cannot be resolved.
        """
        result = self._run(["rev-parse", "HEAD"], check=True)
        return result.stdout.strip()

    def commits_touching(self, path: str) -> List[str]:
        """List the ids of commits that touched ``path``, newest first.

        Each id appears once, in the order ``git log`` emits it.
        """
        result = self._run(["log", "--format=%H", "--", path], check=True)
        seen = set()
        shas = []
        for line in result.stdout.splitlines():
            sha = line.strip()
            if not sha or sha in seen:
                continue
            seen.add(sha)
            shas.append(sha)
        return shas

    def show_file(self, commit: str, path: str) -> Optional[str]:
        """Return the content of ``path`` as of ``commit``.

        ``None`` is returned when the path does not exist at that commit,
        for example because the commit deleted it.
        """
        result = self._run(["show", f"{commit}:{path}"], check=False)
        if result.returncode != 0:
            logger.debug("No %s at %s: %s", path, commit, result.stderr.strip())
            return None
        return result.stdout

    def iter_commits(self, head: str, since: Optional[str] = None) -> Iterator[Commit]:
        """Yield the commits up to ``head``, oldest first.

        When ``since`` is given only commits strictly after it are
        produced (``since..head``); otherwise the whole history reachable
        from ``head`` is walked.

        Parameters
        ----------
        head : str
            The last commit of the range, included.
        since : Optional[str]
            Exclusive lower bound of the range.

        Raises
        ------
        GitError
            If the log cannot be read.
        """
        revision = f"{since}..{head}" if since else head
        # -z separates records with NUL, which cannot occur in messages.
        for record in self._stream(["log", "-z", "--reverse", "--format=%H%n%B", revision]):
            if not record.strip():
                continue
            sha, _, message = record.lstrip("\n").partition("\n")
            yield Commit(sha=sha.strip(), message=message)
