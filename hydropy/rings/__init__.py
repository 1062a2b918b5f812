"""Ring membership perception."""

from hydropy.rings.detection import RingInfo, find_ring_membership

__all__ = [
    "RingInfo",
    "find_ring_membership",
]
