"""
Semantic version triple used throughout commitver.

Only the ``major.minor.patch`` core is supported. Pre-release and build
metadata are neither parsed nor produced.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional


# Components are non-negative integers without leading zeros.
_COMPONENT = r"(0|[1-9][0-9]*)"
SEMVER_RE = re.compile(rf"^{_COMPONENT}\.{_COMPONENT}\.{_COMPONENT}$")


@dataclass(frozen=True, order=True)
class Version:
    """A ``(major, minor, patch)`` triple ordered by semver precedence."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def bump_major(self) -> "Version":
        return Version(self.major + 1, 0, 0)

    def bump_minor(self) -> "Version":
        return Version(self.major, self.minor + 1, 0)

    def bump_patch(self) -> "Version":
        return Version(self.major, self.minor, self.patch + 1)


ZERO = Version(0, 0, 0)


def parse_version(text: str) -> Optional[Version]:
    """Parse a strict ``X.Y.Z`` string.

    Returns ``None`` when ``text`` is not exactly three dot-separated
    components, or when a component has a leading zero or a suffix.
    """
    match = SEMVER_RE.match(text)
    if match is None:
        return None
    major, minor, patch = (int(part) for part in match.groups())
    return Version(major, minor, patch)
