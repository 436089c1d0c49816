"""
devrefresh - keep a developer workstation's package managers up to date.

Run every updater, read what changed, report it in one place.
"""

from importlib.metadata import version as _version

__version__ = _version("devrefresh")
