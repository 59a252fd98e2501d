"""Domain models and calculations for silo crate accounting.

This package holds the pure accounting core: crate growth, ordering,
selection, withdrawal classification and conversion. Nothing in here performs
I/O or keeps state between calls; callers provide a snapshot and the current
epoch and receive a plan back.
"""

__all__ = [
    "assets",
    "convert",
    "crate_selector",
    "crates",
    "growth",
    "ordering",
    "withdrawals",
]
