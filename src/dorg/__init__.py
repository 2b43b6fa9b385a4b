"""
dorg - sort files into date-based folders

dorg moves files into year/month or year/month/day folders based on
their creation or modification time.
"""

from .core import main, run

__all__ = ["main", "run"]
