"""
Version derivation from commit history.

See :mod:`commitver.history.override_locator` for finding the anchor and
:mod:`commitver.history.replay` for the increment rules applied after it.
"""

from .anchor import ROOT, OverrideRecord  # noqa: F401
from .override_locator import locate_override, parse_override  # noqa: F401
from .replay import BumpRules, apply_commit, replay  # noqa: F401
