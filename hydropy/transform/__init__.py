"""Hydrogen surgery, hydrogen placement and sanitization."""

from hydropy.transform.hydrogen import add_hs, remove_hs, merge_query_hs
from hydropy.transform.placement import set_hydrogen_coords
from hydropy.transform.sanitize import sanitize, assign_hybridization

__all__ = [
    "add_hs",
    "remove_hs",
    "merge_query_hs",
    "set_hydrogen_coords",
    "sanitize",
    "assign_hybridization",
]
