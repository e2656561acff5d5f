"""
Top-level package for commitver.

commitver derives a semantic version from the commit history of a Git
repository. The command line entry point lives in :mod:`commitver.cli`.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
