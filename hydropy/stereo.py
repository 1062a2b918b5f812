"""
Stereochemistry descriptors and permutation bookkeeping.

A tetrahedral chirality tag only means something relative to the order of
an atom's incident bonds. Whenever that order changes, the parity of the
permutation between the old and new order decides whether the tag must be
inverted to describe the same 3D arrangement.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike


class ChiralTag(IntEnum):
    """Tetrahedral parity relative to the atom's bond order."""

    UNSPECIFIED = 0
    CW = 1   # '@@'
    CCW = 2  # '@'

    def inverted(self) -> "ChiralTag":
        if self == ChiralTag.CW:
            return ChiralTag.CCW
        if self == ChiralTag.CCW:
            return ChiralTag.CW
        return self


class BondDir(IntEnum):
    """2D drawing direction of a single bond next to a double bond."""

    NONE = 0
    ENDUPRIGHT = 1    # '/'
    ENDDOWNRIGHT = 2  # '\\'
    UNKNOWN = 3       # wavy bond

    def flipped(self) -> "BondDir":
        if self == BondDir.ENDUPRIGHT:
            return BondDir.ENDDOWNRIGHT
        if self == BondDir.ENDDOWNRIGHT:
            return BondDir.ENDUPRIGHT
        return self


class BondStereo(IntEnum):
    """Double bond stereo descriptor.

    Values above ANY are meaningful and are measured against the bond's
    two stereo atoms.
    """

    NONE = 0
    ANY = 1
    Z = 2
    E = 3
    CIS = 4
    TRANS = 5

    @property
    def is_specified(self) -> bool:
        return self > BondStereo.ANY


def count_swaps_to_interconvert(ref: Sequence[int], probe: Sequence[int]) -> int:
    """Count swaps needed to convert probe to match ref.

    Args:
        ref: Reference ordering.
        probe: Ordering to transform.

    Returns:
        Number of swaps needed.

    Raises:
        ValueError: If lists have different elements.
    """
    if len(ref) != len(probe):
        raise ValueError(f"Size mismatch: {len(ref)} != {len(probe)}")

    probe = list(probe)
    n_swaps = 0

    for i, ref_val in enumerate(ref):
        if probe[i] != ref_val:
            j = i + 1
            while j < len(probe) and probe[j] != ref_val:
                j += 1

            if j >= len(probe):
                raise ValueError(f"Element {ref_val} not found in probe")

            probe[i], probe[j] = probe[j], probe[i]
            n_swaps += 1

    return n_swaps


def permutation_parity(ref: Sequence[int], probe: Sequence[int]) -> int:
    """Return 0 if ``probe`` is an even permutation of ``ref``, else 1."""
    return count_swaps_to_interconvert(ref, probe) % 2


def invert_cis_trans(stereo: BondStereo) -> BondStereo:
    """Swap CIS and TRANS. E, Z and unspecified labels are returned as is."""
    if stereo == BondStereo.CIS:
        return BondStereo.TRANS
    if stereo == BondStereo.TRANS:
        return BondStereo.CIS
    return stereo


def chiral_volume(center: ArrayLike, a: ArrayLike, b: ArrayLike, c: ArrayLike) -> float:
    """Signed volume spanned by three neighbors seen from ``center``.

    The sign flips when any two neighbors are exchanged, so it identifies
    the handedness of the arrangement.
    """
    origin = np.asarray(center, dtype=float)
    va = np.asarray(a, dtype=float) - origin
    vb = np.asarray(b, dtype=float) - origin
    vc = np.asarray(c, dtype=float) - origin
    return float(np.dot(va, np.cross(vb, vc)))
