"""
httpdefer test suite
"""

# Read version from package metadata (single source of truth: src/httpdefer/__init__.py)
from importlib.metadata import version as _get_version

__version__ = _get_version("httpdefer")
