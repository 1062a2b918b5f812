"""
Coordinate layers.

A conformer holds one position per atom of its molecule. Storage is a numpy
buffer with spare capacity so a batch of insertions can be pre-sized once
with :meth:`Conformer.reserve`.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray


class Conformer:
    """One full set of per-atom coordinates, tagged 2D or 3D.

    Example:
        >>> conf = Conformer(2, is_3d=False)
        >>> conf.set_atom_pos(1, (1.5, 0.0, 0.0))
        >>> len(conf)
        2
    """

    __slots__ = ("is_3d", "_buffer", "_size")

    def __init__(self, num_atoms: int = 0, is_3d: bool = True) -> None:
        self.is_3d = is_3d
        self._buffer: NDArray[np.float64] = np.zeros((max(num_atoms, 1), 3))
        self._size = num_atoms

    @classmethod
    def from_positions(cls, positions: Sequence[Sequence[float]], is_3d: bool = True) -> "Conformer":
        """Build a conformer from an (n, 2) or (n, 3) array-like."""
        coords = np.asarray(positions, dtype=float)
        if coords.ndim != 2 or coords.shape[1] not in (2, 3):
            raise ValueError(f"Expected (n, 2) or (n, 3) coordinates, got shape {coords.shape}")
        conf = cls(len(coords), is_3d=is_3d)
        conf._buffer[: len(coords), : coords.shape[1]] = coords
        return conf

    def __len__(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        """Number of rows allocated, used or not."""
        return len(self._buffer)

    @property
    def positions(self) -> NDArray[np.float64]:
        """Read-only (n, 3) view of the stored positions."""
        view = self._buffer[: self._size]
        view.flags.writeable = False
        return view

    def reserve(self, size: int) -> None:
        """Grow capacity to hold at least ``size`` atoms. Never shrinks."""
        if size <= len(self._buffer):
            return
        grown = np.zeros((size, 3))
        grown[: self._size] = self._buffer[: self._size]
        self._buffer = grown

    def append(self, pos: Sequence[float] = (0.0, 0.0, 0.0)) -> int:
        """Add a row, reallocating only when capacity is exhausted."""
        if self._size == len(self._buffer):
            self.reserve(2 * len(self._buffer))
        self._buffer[self._size] = pos
        self._size += 1
        return self._size - 1

    def remove(self, idx: int) -> None:
        """Drop the row for atom ``idx``, shifting later rows down."""
        self._check_index(idx)
        self._buffer[idx : self._size - 1] = self._buffer[idx + 1 : self._size]
        self._buffer[self._size - 1] = 0.0
        self._size -= 1

    def get_atom_pos(self, idx: int) -> NDArray[np.float64]:
        """Return a copy of the position of atom ``idx``."""
        self._check_index(idx)
        return self._buffer[idx].copy()

    def set_atom_pos(self, idx: int, pos: Sequence[float]) -> None:
        self._check_index(idx)
        self._buffer[idx] = pos

    def _check_index(self, idx: int) -> None:
        if not 0 <= idx < self._size:
            raise IndexError(f"Atom index {idx} out of range for conformer of {self._size} atoms")

    def __deepcopy__(self, memo: dict) -> "Conformer":
        conf = Conformer.__new__(Conformer)
        conf.is_3d = self.is_3d
        conf._buffer = self._buffer.copy()
        conf._size = self._size
        return conf

    def __repr__(self) -> str:
        kind = "3D" if self.is_3d else "2D"
        return f"Conformer({self._size} atoms, {kind})"
