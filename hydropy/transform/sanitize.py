"""
Molecule sanitization.

A reduced sanitization pipeline: it rebuilds the derived state hydrogen
surgery leaves stale (valence caches, ring membership) and assigns the
hybridization the hydrogen placer reads.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hydropy.elements import BondOrder, get_valence_list
from hydropy.exceptions import SanitizeError, ValenceError
from hydropy.rings import find_ring_membership
from hydropy.types import Hybridization

if TYPE_CHECKING:
    from hydropy.types import Atom, Molecule


logger = logging.getLogger(__name__)


def _atom_hybridization(atom: "Atom", mol: "Molecule") -> Hybridization:
    if atom.atomic_number <= 1:
        return Hybridization.UNSPECIFIED
    if atom.degree == 0 and get_valence_list(atom.atomic_number)[0] < 0:
        return Hybridization.UNSPECIFIED

    n_double = 0
    n_triple = 0
    aromatic = atom.is_aromatic
    for bond in atom.get_bonds(mol):
        if bond.is_aromatic or bond.order == BondOrder.AROMATIC:
            aromatic = True
        elif bond.order == BondOrder.DOUBLE:
            n_double += 1
        elif bond.order == BondOrder.TRIPLE:
            n_triple += 1

    if n_triple or n_double >= 2:
        return Hybridization.SP
    if aromatic or n_double == 1:
        return Hybridization.SP2

    steric = atom.degree + atom.total_hydrogens(mol)
    if steric <= 4:
        return Hybridization.SP3
    return Hybridization.OTHER


def assign_hybridization(mol: "Molecule") -> None:
    """Set ``hybridization`` on every atom from its bonds and H count."""
    for atom in mol.atoms:
        atom.hybridization = _atom_hybridization(atom, mol)


def sanitize(mol: "Molecule") -> "Molecule":
    """Rebuild derived state in place.

    Steps: strict valence check, ring membership, hybridization.

    Returns:
        The same molecule, for chaining.

    Raises:
        SanitizeError: If an atom exceeds its allowed valences.
    """
    try:
        mol.update_property_cache(strict=True)
    except ValenceError as e:
        raise SanitizeError(e.message, step="valence", atom_idx=e.atom_idx) from e

    mol.ring_info = find_ring_membership(mol)
    assign_hybridization(mol)
    logger.debug("Sanitized molecule with %d atoms, %d ring atoms", mol.num_atoms, len(mol.ring_info.ring_atoms))
    return mol
