"""Test configuration and molecule builders for hydropy tests."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pytest

from hydropy import BondOrder, Conformer, Molecule


def chain(*symbols: str, orders: Sequence[int] | None = None) -> Molecule:
    """Build a linear molecule.

    Args:
        symbols: Element symbols in chain order.
        orders: Bond orders between consecutive atoms (single by default).

    Returns:
        A molecule without hydrogen atoms.
    """
    mol = Molecule()
    for symbol in symbols:
        mol.add_atom(symbol)
    for i in range(len(symbols) - 1):
        order = orders[i] if orders is not None else BondOrder.SINGLE
        mol.add_bond(i, i + 1, order=order)
    return mol


def aromatic_ring(*symbols: str) -> Molecule:
    """Build a ring of aromatic atoms joined by aromatic bonds."""
    mol = Molecule()
    for symbol in symbols:
        mol.add_atom(symbol, is_aromatic=True)
    n = len(symbols)
    for i in range(n):
        mol.add_bond(i, (i + 1) % n, order=BondOrder.AROMATIC, is_aromatic=True)
    return mol


def hydrogen_indices(mol: Molecule) -> list[int]:
    """Indices of hydrogen atoms in the graph."""
    return [atom.idx for atom in mol.atoms if atom.atomic_number == 1]


def heavy_symbols(mol: Molecule) -> list[str]:
    return [atom.symbol for atom in mol.atoms if atom.atomic_number != 1]


def bond_table(mol: Molecule) -> list[tuple[int, int, int]]:
    """Bonds as sorted (atom, atom, order) triples."""
    return sorted(
        (min(b.atom1_idx, b.atom2_idx), max(b.atom1_idx, b.atom2_idx), int(b.order))
        for b in mol.bonds
    )


def angle_between(u: np.ndarray, v: np.ndarray) -> float:
    """Angle between two vectors in degrees."""
    cos_t = np.dot(u, v) / (np.linalg.norm(u) * np.linalg.norm(v))
    return float(np.degrees(np.arccos(np.clip(cos_t, -1.0, 1.0))))


@pytest.fixture
def ethane() -> Molecule:
    return chain("C", "C")


@pytest.fixture
def ethanol() -> Molecule:
    return chain("C", "C", "O")


@pytest.fixture
def benzene() -> Molecule:
    return aromatic_ring("C", "C", "C", "C", "C", "C")


@pytest.fixture
def pyrrole_with_h() -> Molecule:
    """Pyrrole with its N-H as an explicit hydrogen atom (index 5)."""
    mol = aromatic_ring("N", "C", "C", "C", "C")
    h_idx = mol.add_atom("H")
    mol.add_bond(0, h_idx)
    return mol


@pytest.fixture
def methanol_two_layers() -> Molecule:
    """C-O with one 3D and one 2D coordinate layer."""
    mol = chain("C", "O")
    mol.add_conformer(Conformer.from_positions([[0.0, 0.0, 0.0], [1.43, 0.0, 0.0]], is_3d=True))
    mol.add_conformer(Conformer.from_positions([[0.0, 0.0], [1.0, 0.0]], is_3d=False))
    return mol
