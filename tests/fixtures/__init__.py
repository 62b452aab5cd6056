"""
Test fixtures package for hashtree tests.

Usage:
    from fixtures.common import make_items, scenario_digests
"""

from .common import ABCDE, make_items, make_records, scenario_digests

__all__ = [
    "ABCDE",
    "make_items",
    "make_records",
    "scenario_digests",
]
