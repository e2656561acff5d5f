"""
Configuration loading for commitver.

Provides a loader for the optional ``.commitver.json`` file located in
the repository root. See :mod:`commitver.config.loader` for details.
"""

from .loader import ConfigError, load_config  # noqa: F401
