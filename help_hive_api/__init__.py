"""
Top-level package for the Help Hive Events API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
