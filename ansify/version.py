#!/usr/bin/env python3
# ansify/version.py
"""
Version and build metadata for ANSIfy.
"""

__version__ = "1.2.0"
__build__ = "2026-10-17"
__license__ = "MIT"

def version_info() -> str:
    """Return human-readable version string."""
    return f"ANSIfy v{__version__} (build {__build__})"
