"""
Hydrogen manipulation functions.

This module turns hydrogen counts into explicit hydrogen atoms and back:

* :func:`add_hs` materializes explicit and implicit counts as atoms, with
  optional coordinates in every conformer.
* :func:`remove_hs` deletes removable hydrogen atoms and repairs the
  chirality tags and double bond stereo that depended on them.
* :func:`merge_query_hs` folds hydrogen query atoms into hydrogen-count
  constraints on their neighbors.

Each function edits a copy unless called with ``in_place=True``.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, Iterable

from hydropy.elements import BondOrder, get_valence_list
from hydropy.query import AtomQuery, QueryKind
from hydropy.residue import assign_hs_residue_info
from hydropy.stereo import BondDir, ChiralTag, invert_cis_trans, permutation_parity
from hydropy.transform.placement import set_hydrogen_coords
from hydropy.transform.sanitize import sanitize as sanitize_molecule
from hydropy.types import IS_IMPLICIT, ORIG_NO_IMPLICIT, UNKNOWN_STEREO

if TYPE_CHECKING:
    from hydropy.types import Atom, Bond, Molecule


logger = logging.getLogger(__name__)


# =============================================================================
# Adding hydrogens
# =============================================================================

def _add_hydrogen(mol: Molecule, heavy_idx: int, add_coords: bool, was_implicit: bool) -> int:
    h_idx = mol.add_atom("H")
    if was_implicit:
        # lets remove_hs(implicit_only=True) strip it again
        mol.atoms[h_idx].props[IS_IMPLICIT] = True
    mol.add_bond(heavy_idx, h_idx)
    mol.atoms[h_idx].update_property_cache(mol, strict=False)
    if add_coords:
        set_hydrogen_coords(mol, h_idx, heavy_idx)
    return h_idx


def add_hs(
    mol: Molecule,
    *,
    explicit_only: bool = False,
    add_coords: bool = False,
    only_on_atoms: Iterable[int] | None = None,
    add_residue_info: bool = False,
    in_place: bool = False,
) -> Molecule:
    """Add explicit hydrogen atoms to a molecule.

    Every unit of an atom's explicit hydrogen count becomes a hydrogen atom
    bonded to it, and, unless ``explicit_only``, so does every implicit
    hydrogen. Hydrogens made from implicit counts are tagged so they can be
    stripped again with ``remove_hs(implicit_only=True)``.

    Args:
        mol: Input molecule.
        explicit_only: Only convert explicit hydrogen counts.
        add_coords: Compute positions for the new hydrogens in every
            conformer. Hybridization should be assigned beforehand.
        only_on_atoms: Restrict the expansion to these atom indices.
        add_residue_info: Give new hydrogens residue records cloned from
            their heavy atom.
        in_place: Modify ``mol`` instead of a copy.

    Returns:
        The molecule with hydrogens added.

    Example:
        >>> mol = Molecule()
        >>> mol.add_atom("C")
        0
        >>> add_hs(mol).num_atoms
        5
    """
    if not in_place:
        mol = mol.copy()

    # ring info stays valid: new hydrogens are never ring members
    mol.clear_computed_props(include_rings=False)
    mol.update_property_cache(strict=False)

    selected = set(only_on_atoms) if only_on_atoms is not None else None
    stop_idx = mol.num_atoms
    targets = [i for i in range(stop_idx) if selected is None or i in selected]

    num_add = 0
    for aidx in targets:
        atom = mol.atoms[aidx]
        num_add += atom.explicit_hydrogens
        if not explicit_only:
            num_add += atom.implicit_hydrogens

    # size every layer once so the insertions below never reallocate
    for conf in mol.conformers:
        conf.reserve(stop_idx + num_add)

    for aidx in targets:
        atom = mol.atoms[aidx]
        num_implicit = atom.implicit_hydrogens
        atom.clear_computed_props()

        for _ in range(atom.explicit_hydrogens):
            _add_hydrogen(mol, aidx, add_coords, was_implicit=False)
        atom.explicit_hydrogens = 0

        if not explicit_only:
            for _ in range(num_implicit):
                _add_hydrogen(mol, aidx, add_coords, was_implicit=True)
            # the graph now holds every hydrogen; never count implicit ones again
            atom.props.setdefault(ORIG_NO_IMPLICIT, atom.no_implicit)
            atom.no_implicit = True

        atom.update_property_cache(mol, strict=False)

    if add_residue_info:
        assign_hs_residue_info(mol)

    logger.debug("Added %d hydrogens to %d atoms", mol.num_atoms - stop_idx, len(targets))
    return mol


# =============================================================================
# Removing hydrogens
# =============================================================================

def _can_remove_hydrogen(mol: Molecule, atom: Atom, implicit_only: bool) -> bool:
    """Decide whether hydrogen ``atom`` may be deleted from the graph."""
    if atom.degree == 0:
        logger.warning("Not removing hydrogen atom %d without neighbors", atom.idx)
        return False
    if atom.has_query:
        return False
    if atom.degree != 1:
        # bridging hydrogen, like the central H in C[H-]C
        return False

    heavy = mol.atoms[next(atom.neighbors(mol))]
    if heavy.atomic_number == 1:
        return False

    if atom.props.get(IS_IMPLICIT):
        if heavy.atomic_number < 1:
            logger.warning("Not removing hydrogen atom %d with only dummy atom neighbors", atom.idx)
            return False
        return True

    if implicit_only or atom.isotope:
        return False
    if heavy.atomic_number < 1:
        return False

    if heavy.degree == 2:
        # the only substituent on this end of a stereo double bond
        h_bond = mol.get_bond_between(atom.idx, heavy.idx)
        for bond in heavy.get_bonds(mol):
            if _is_double(bond) and (bond.stereo.is_specified or h_bond.direction != BondDir.NONE):
                logger.debug("Keeping hydrogen %d, it defines double bond %d stereo", atom.idx, bond.idx)
                return False
    return True


def _is_double(bond: Bond) -> bool:
    return bond.order == BondOrder.DOUBLE and not bond.is_aromatic


def _hydrogen_count_is_ambiguous(mol: Molecule, heavy: Atom) -> bool:
    """True when dropping a hydrogen from ``heavy`` would change its chemistry.

    Aromatic N and P cannot recover the count from valence, and neither can
    an atom sitting in one of its element's non-default valence states.
    """
    if heavy.atomic_number in (7, 15) and heavy.is_aromatic:
        return True
    return heavy.total_valence(mol) in get_valence_list(heavy.atomic_number)[1:]


def _adjust_stereo_atoms(mol: Molecule, atom: Atom, heavy: Atom) -> bool:
    """Move double bond stereo references off hydrogen ``atom``.

    The replacement is another neighbor of ``heavy``; the cis/trans label is
    inverted to match. E/Z labels do not depend on the reference atoms.

    Returns:
        Whether a cis/trans label was changed.
    """
    if heavy.degree == 2:
        return False
    for bond in heavy.get_bonds(mol):
        if not (_is_double(bond) and bond.stereo.is_specified and atom.idx in bond.stereo_atoms):
            continue
        pos = bond.stereo_atoms.index(atom.idx)
        dbl_nbr = bond.other_atom(heavy.idx)
        for nbr_idx in heavy.neighbors(mol):
            if nbr_idx in (dbl_nbr, atom.idx):
                continue
            bond.stereo_atoms[pos] = nbr_idx
            inverted = invert_cis_trans(bond.stereo)
            changed = inverted != bond.stereo
            bond.stereo = inverted
            return changed
    return False


def _propagate_bond_direction(mol: Molecule, h_bond: Bond, heavy: Atom) -> None:
    """Copy a cis/trans direction marker onto another single bond of ``heavy``.

    Only done when no other single bond of ``heavy`` already carries one.
    """
    found_dir = False
    other: Bond | None = None
    for bond in heavy.get_bonds(mol):
        if bond.idx == h_bond.idx or bond.order != BondOrder.SINGLE or bond.is_aromatic:
            continue
        if bond.direction == BondDir.NONE:
            other = bond
        else:
            found_dir = True

    if found_dir or other is None:
        return
    flip = other.atom1_idx == heavy.idx and h_bond.atom1_idx == heavy.idx
    other.direction = h_bond.direction.flipped() if flip else h_bond.direction


def _remove_hydrogen(mol: Molecule, atom: Atom, update_explicit_count: bool) -> None:
    h_bond = mol.bonds[atom.bond_indices[0]]
    heavy = mol.atoms[h_bond.other_atom(atom.idx)]

    if (
        update_explicit_count
        or heavy.no_implicit
        or heavy.chiral_tag != ChiralTag.UNSPECIFIED
        or _hydrogen_count_is_ambiguous(mol, heavy)
    ):
        heavy.explicit_hydrogens += 1

    if heavy.chiral_tag != ChiralTag.UNSPECIFIED:
        # deleting the bond moves the hydrogen's slot to the end of the order
        probe = [b for b in heavy.bond_indices if b != h_bond.idx] + [h_bond.idx]
        if permutation_parity(heavy.bond_indices, probe):
            heavy.chiral_tag = heavy.chiral_tag.inverted()

    if h_bond.direction == BondDir.UNKNOWN and h_bond.atom1_idx == heavy.idx:
        heavy.props[UNKNOWN_STEREO] = True
    else:
        if h_bond.direction in (BondDir.ENDUPRIGHT, BondDir.ENDDOWNRIGHT):
            _propagate_bond_direction(mol, h_bond, heavy)
        _adjust_stereo_atoms(mol, atom, heavy)

    mol.remove_atom(atom.idx)


def remove_hs(
    mol: Molecule,
    *,
    implicit_only: bool = False,
    update_explicit_count: bool = False,
    sanitize: bool = True,
    in_place: bool = False,
) -> Molecule:
    """Remove explicit hydrogen atoms from a molecule.

    Removed hydrogens become implicit again, or are added to the heavy
    atom's explicit count where the implicit count could not restore them.

    Hydrogens that are kept:

    * hydrogens without neighbors, or bonded to another hydrogen;
    * bridging hydrogens (more than one neighbor) and query hydrogens;
    * isotope-labelled hydrogens, and those bonded to dummy atoms;
    * the only substituent on one end of a stereo double bond.

    Args:
        mol: Input molecule.
        implicit_only: Only remove hydrogens created from implicit counts.
        update_explicit_count: Always add removed hydrogens to the heavy
            atom's explicit count.
        sanitize: Sanitize the result (skipped with ``implicit_only``).
        in_place: Modify ``mol`` instead of a copy.

    Returns:
        The molecule without the removed hydrogens.

    Raises:
        SanitizeError: If the final sanitization fails. The graph edits are
            not rolled back; a working copy is simply dropped.
    """
    if not in_place:
        mol = mol.copy()

    for atom in mol.atoms:
        if atom.atomic_number != 1:
            atom.update_property_cache(mol, strict=False)

    n_removed = 0
    curr_idx = 0
    while curr_idx < mol.num_atoms:
        atom = mol.atoms[curr_idx]
        if atom.atomic_number != 1:
            if ORIG_NO_IMPLICIT in atom.props:
                # undo add_hs; done once even if remove_hs runs again
                atom.no_implicit = atom.props.pop(ORIG_NO_IMPLICIT)
            curr_idx += 1
            continue

        if _can_remove_hydrogen(mol, atom, implicit_only):
            _remove_hydrogen(mol, atom, update_explicit_count)
            n_removed += 1
        else:
            # only advance when nothing was deleted at this index
            curr_idx += 1

    logger.debug("Removed %d hydrogens", n_removed)

    # deletions shifted indices, so index-keyed derived state is stale
    if not implicit_only and sanitize:
        sanitize_molecule(mol)
    return mol


# =============================================================================
# Merging query hydrogens
# =============================================================================

def _is_query_h(atom: Atom) -> bool:
    """Whether ``atom`` is a hydrogen that can be folded into its neighbor."""
    query = atom.query
    if atom.atomic_number == 1:
        if query is None or (not query.negated and query.kind == QueryKind.ATOMIC_NUM):
            return True

    if atom.degree != 1 or query is None or query.negated:
        return False

    has_h_query = False
    has_or = query.kind == QueryKind.OR
    pending = deque(query.children)
    while pending and not (has_h_query and has_or):
        node = pending.popleft()
        if node.kind == QueryKind.OR:
            has_or = True
        elif node.kind == QueryKind.ATOMIC_NUM:
            if node.value == 1 and not node.negated:
                has_h_query = True
        else:
            pending.extend(node.children)

    if has_h_query and has_or:
        logger.warning(
            "Merging explicit H queries involved in ORs is not supported; atom %d will not be merged",
            atom.idx,
        )
        return False
    return has_h_query


def _merge_query_hs_into(mol: Molecule, merge_unmapped_only: bool, pending: deque[Molecule]) -> None:
    is_h = [_is_query_h(atom) for atom in mol.atoms]
    to_remove: set[int] = set()

    for atom in mol.atoms:
        if is_h[atom.idx]:
            continue

        num_hs = 0
        for nbr_idx in atom.neighbors(mol):
            if not is_h[nbr_idx]:
                continue
            if merge_unmapped_only and mol.atoms[nbr_idx].atom_map is not None:
                continue
            to_remove.add(nbr_idx)
            num_hs += 1

        if num_hs:
            # C[H] -> [C;!H0], C([H])[H] -> [C;!H0;!H1]
            if atom.query is None:
                atom.query = AtomQuery.atomic_num(atom.atomic_number)
            for i in range(num_hs):
                atom.expand_query(AtomQuery.h_count(i, negated=True))

        if atom.query is not None:
            for node in atom.query.walk():
                if node.kind == QueryKind.RECURSIVE and node.mol is not None:
                    pending.append(node.mol)

    # descending, so indices still to be removed stay valid
    for idx in sorted(to_remove, reverse=True):
        mol.remove_atom(idx)


def merge_query_hs(
    mol: Molecule,
    *,
    merge_unmapped_only: bool = False,
    in_place: bool = False,
) -> Molecule:
    """Fold hydrogen atoms into hydrogen-count queries on their neighbors.

    A heavy atom that loses ``n`` hydrogens gains the constraints
    ``!H0 & ... & !H(n-1)``, i.e. "at least n hydrogens". Non-query heavy
    atoms first become query atoms that test their atomic number. Query
    molecules of recursive queries are processed the same way.

    Args:
        mol: Input (query) molecule.
        merge_unmapped_only: Keep hydrogens that carry an atom map number.
        in_place: Modify ``mol`` instead of a copy.

    Returns:
        The molecule with hydrogens merged.
    """
    if not in_place:
        mol = mol.copy()

    pending: deque[Molecule] = deque([mol])
    seen: set[int] = set()
    while pending:
        current = pending.popleft()
        if id(current) in seen:
            continue
        seen.add(id(current))
        _merge_query_hs_into(current, merge_unmapped_only, pending)
    return mol
