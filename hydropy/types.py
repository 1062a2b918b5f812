"""
Core molecular data types.

This module defines the molecular graph the hydrogen engine edits: Atom,
Bond and Molecule dataclasses plus the coordinate layers (conformers) a
molecule owns. Deleting an atom renumbers every later atom and bond, so
callers that delete in a loop must go in descending index order.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from enum import IntEnum
from math import floor
from typing import TYPE_CHECKING, Any, Final, Iterator

from hydropy.conformer import Conformer
from hydropy.elements import (
    VALENCE_LISTS,
    BondOrder,
    get_atomic_number,
    get_valence_list,
)
from hydropy.exceptions import ValenceError
from hydropy.stereo import BondDir, BondStereo, ChiralTag

if TYPE_CHECKING:
    from typing import Self

    from hydropy.query import AtomQuery
    from hydropy.residue import AtomResidueInfo
    from hydropy.rings import RingInfo


# Atom property keys with special meaning
IS_IMPLICIT: Final[str] = "is_implicit"
ORIG_NO_IMPLICIT: Final[str] = "orig_no_implicit"
UNKNOWN_STEREO: Final[str] = "unknown_stereo"
CIP_CODE: Final[str] = "cip_code"
CIP_RANK: Final[str] = "cip_rank"


class Hybridization(IntEnum):
    """Local bonding geometry class of an atom."""

    UNSPECIFIED = 0
    SP = 1
    SP2 = 2
    SP3 = 3
    OTHER = 4


@dataclass(slots=True)
class Bond:
    """Edge of the molecular graph joining two atom indices.

    Attributes:
        idx: Index of this bond in the molecule.
        atom1_idx: Index of the begin atom.
        atom2_idx: Index of the end atom.
        order: Bond order.
        is_aromatic: Whether this bond is aromatic.
        direction: 2D cis/trans drawing marker for single bonds.
        stereo: Double bond stereo descriptor.
        stereo_atoms: The two atoms the descriptor is measured against,
            or empty.
    """

    idx: int
    atom1_idx: int
    atom2_idx: int
    order: int = BondOrder.SINGLE
    is_aromatic: bool = False
    direction: BondDir = BondDir.NONE
    stereo: BondStereo = BondStereo.NONE
    stereo_atoms: list[int] = field(default_factory=list)

    def other_atom(self, atom_idx: int) -> int:
        """Get the index of the atom on the other end of this bond.

        Raises:
            ValueError: If atom_idx is not part of this bond.
        """
        if atom_idx == self.atom1_idx:
            return self.atom2_idx
        if atom_idx == self.atom2_idx:
            return self.atom1_idx
        raise ValueError(f"Atom {atom_idx} not in bond {self.idx}")

    @property
    def bond_order(self) -> BondOrder:
        """Bond order as a BondOrder member."""
        return BondOrder(self.order)

    @property
    def valence_contribution(self) -> float:
        if self.is_aromatic:
            return BondOrder.AROMATIC.valence_contribution
        return self.bond_order.valence_contribution

    def set_stereo_atoms(self, atom1_idx: int, atom2_idx: int) -> None:
        self.stereo_atoms = [atom1_idx, atom2_idx]

    def clear_stereo(self) -> None:
        self.stereo = BondStereo.NONE
        self.stereo_atoms = []

    def __contains__(self, atom_idx: int) -> bool:
        """Check if atom is part of this bond."""
        return atom_idx in (self.atom1_idx, self.atom2_idx)


@dataclass(slots=True)
class Atom:
    """Vertex of the molecular graph with its hydrogen bookkeeping.

    Attributes:
        idx: Index of this atom in the molecule.
        symbol: Element symbol ("*" for a dummy atom).
        charge: Formal charge.
        explicit_hydrogens: Hydrogens carried as a count on this atom.
        is_aromatic: Whether this atom is aromatic.
        isotope: Mass number, or None for natural abundance.
        chiral_tag: Tetrahedral parity relative to ``bond_indices``.
        hybridization: Local geometry class, set by sanitization.
        no_implicit: If True, the atom never receives implicit hydrogens.
        atom_map: Cross-reference map number, or None.
        bond_indices: Incident bonds; their order is the chirality
            reference order.
        residue_info: Optional PDB residue record.
        query: Optional query tree; its presence makes this a query atom.
        props: Free-form per-atom properties.
        explicit_valence: Cached valence from bonds and the explicit count.
        implicit_hydrogens: Cached implicit hydrogen count.
    """

    idx: int
    symbol: str
    charge: int = 0
    explicit_hydrogens: int = 0
    is_aromatic: bool = False
    isotope: int | None = None
    chiral_tag: ChiralTag = ChiralTag.UNSPECIFIED
    hybridization: Hybridization = Hybridization.UNSPECIFIED
    no_implicit: bool = False
    atom_map: int | None = None
    bond_indices: list[int] = field(default_factory=list)
    residue_info: AtomResidueInfo | None = None
    query: AtomQuery | None = None
    props: dict[str, Any] = field(default_factory=dict)

    explicit_valence: int | None = None
    implicit_hydrogens: int | None = None

    @property
    def atomic_number(self) -> int:
        """Get the atomic number for this element."""
        return get_atomic_number(self.symbol)

    @property
    def degree(self) -> int:
        """Number of bonds to this atom."""
        return len(self.bond_indices)

    @property
    def has_query(self) -> bool:
        return self.query is not None

    def neighbors(self, mol: Molecule) -> Iterator[int]:
        """Iterate over indices of neighboring atoms in bond order."""
        for bond_idx in self.bond_indices:
            yield mol.bonds[bond_idx].other_atom(self.idx)

    def get_bonds(self, mol: Molecule) -> Iterator[Bond]:
        """Iterate over bonds connected to this atom in bond order."""
        for bond_idx in self.bond_indices:
            yield mol.bonds[bond_idx]

    def expand_query(self, query: AtomQuery) -> None:
        """AND ``query`` onto this atom's query, creating it if absent."""
        self.query = query if self.query is None else self.query.expand(query)

    def update_property_cache(self, mol: Molecule, strict: bool = True) -> None:
        """Recompute explicit valence and implicit hydrogen count.

        Raises:
            ValenceError: If ``strict`` and the explicit valence exceeds
                every valence the element allows.
        """
        self.explicit_valence = self._calc_explicit_valence(mol)
        self.implicit_hydrogens = self._calc_implicit_hydrogens(self.explicit_valence, strict)

    def clear_computed_props(self) -> None:
        self.explicit_valence = None
        self.implicit_hydrogens = None

    def total_hydrogens(self, mol: Molecule, include_neighbors: bool = False) -> int:
        """Explicit plus implicit hydrogen count.

        Args:
            mol: Parent molecule.
            include_neighbors: Also count bonded hydrogen atoms.
        """
        if self.implicit_hydrogens is None:
            self.update_property_cache(mol, strict=False)
        total = self.explicit_hydrogens + self.implicit_hydrogens
        if include_neighbors:
            total += sum(1 for nbr in self.neighbors(mol) if mol.atoms[nbr].atomic_number == 1)
        return total

    def total_valence(self, mol: Molecule) -> int:
        if self.explicit_valence is None or self.implicit_hydrogens is None:
            self.update_property_cache(mol, strict=False)
        return self.explicit_valence + self.implicit_hydrogens

    def _calc_explicit_valence(self, mol: Molecule) -> int:
        accum = sum(bond.valence_contribution for bond in self.get_bonds(mol))
        # three aromatic bonds on a fusion atom sum to 4.5
        return int(floor(accum + 1e-6)) + self.explicit_hydrogens

    def _calc_implicit_hydrogens(self, explicit_valence: int, strict: bool) -> int:
        if self.no_implicit:
            return 0
        atomic_num = self.atomic_number
        if get_valence_list(atomic_num)[0] < 0:
            return 0

        # charged atoms follow the valences of their isoelectronic element
        effective = atomic_num - self.charge
        valences = get_valence_list(effective) if effective in VALENCE_LISTS else get_valence_list(atomic_num)
        if valences[0] < 0:
            return 0
        if self.is_aromatic and explicit_valence == valences[0] + 1:
            return 0

        for valence in valences:
            if valence >= explicit_valence:
                return valence - explicit_valence

        if strict:
            raise ValenceError(
                f"Explicit valence {explicit_valence} for atom {self.idx} ({self.symbol}) "
                f"exceeds allowed valences {valences}",
                atom_idx=self.idx,
                atom_symbol=self.symbol,
                explicit_valence=explicit_valence,
            )
        return 0


@dataclass
class Molecule:
    """Represents a molecular structure.

    A molecule owns its atoms, bonds and coordinate layers. Every conformer
    always holds exactly one position per atom.

    Example:
        >>> mol = Molecule()
        >>> c1 = mol.add_atom("C")
        >>> c2 = mol.add_atom("C")
        >>> mol.add_bond(c1, c2)
        0
        >>> len(mol)
        2
    """

    atoms: list[Atom] = field(default_factory=list)
    bonds: list[Bond] = field(default_factory=list)
    conformers: list[Conformer] = field(default_factory=list)
    name: str | None = None
    computed_props: dict[str, Any] = field(default_factory=dict)
    ring_info: RingInfo | None = None

    def __len__(self) -> int:
        """Atom count, hydrogens included."""
        return len(self.atoms)

    def __iter__(self) -> Iterator[Atom]:
        """Iterate over atoms."""
        return iter(self.atoms)

    def __getitem__(self, idx: int) -> Atom:
        """Get atom by index."""
        return self.atoms[idx]

    @property
    def num_atoms(self) -> int:
        """Number of atoms in the molecule."""
        return len(self.atoms)

    @property
    def num_bonds(self) -> int:
        """Number of bonds in the molecule."""
        return len(self.bonds)

    def add_atom(
        self,
        symbol: str,
        *,
        charge: int = 0,
        explicit_hydrogens: int = 0,
        is_aromatic: bool = False,
        isotope: int | None = None,
        chiral_tag: ChiralTag = ChiralTag.UNSPECIFIED,
        hybridization: Hybridization = Hybridization.UNSPECIFIED,
        no_implicit: bool = False,
        atom_map: int | None = None,
        residue_info: AtomResidueInfo | None = None,
        query: AtomQuery | None = None,
        props: dict[str, Any] | None = None,
    ) -> int:
        """Append an atom and return its index.

        Every conformer grows by one row at the origin.

        Returns:
            Index of the newly added atom.
        """
        idx = len(self.atoms)
        self.atoms.append(Atom(
            idx=idx,
            symbol=symbol,
            charge=charge,
            explicit_hydrogens=explicit_hydrogens,
            is_aromatic=is_aromatic,
            isotope=isotope,
            chiral_tag=chiral_tag,
            hybridization=hybridization,
            no_implicit=no_implicit,
            atom_map=atom_map,
            residue_info=residue_info,
            query=query,
            props=dict(props) if props else {},
        ))
        for conf in self.conformers:
            conf.append()
        return idx

    def add_bond(
        self,
        atom1_idx: int,
        atom2_idx: int,
        *,
        order: int = BondOrder.SINGLE,
        is_aromatic: bool = False,
        direction: BondDir = BondDir.NONE,
        stereo: BondStereo = BondStereo.NONE,
        stereo_atoms: list[int] | None = None,
    ) -> int:
        """Add a bond between two atoms.

        Returns:
            Index of the newly added bond.

        Raises:
            IndexError: If atom indices are out of bounds.
            ValueError: If both indices name the same atom.
        """
        n = len(self.atoms)
        if not (0 <= atom1_idx < n and 0 <= atom2_idx < n):
            raise IndexError(f"Atom index out of bounds: {atom1_idx}, {atom2_idx}")
        if atom1_idx == atom2_idx:
            raise ValueError(f"Cannot bond atom {atom1_idx} to itself")

        idx = len(self.bonds)
        self.bonds.append(Bond(
            idx=idx,
            atom1_idx=atom1_idx,
            atom2_idx=atom2_idx,
            order=order,
            is_aromatic=is_aromatic,
            direction=direction,
            stereo=stereo,
            stereo_atoms=list(stereo_atoms) if stereo_atoms else [],
        ))
        for atom_idx in (atom1_idx, atom2_idx):
            atom = self.atoms[atom_idx]
            atom.bond_indices.append(idx)
            atom.clear_computed_props()
        return idx

    def add_conformer(self, conf: Conformer) -> int:
        """Attach a coordinate layer.

        Raises:
            ValueError: If the conformer size differs from the atom count.
        """
        if len(conf) != len(self.atoms):
            raise ValueError(f"Conformer has {len(conf)} positions, molecule has {len(self.atoms)} atoms")
        self.conformers.append(conf)
        return len(self.conformers) - 1

    def get_bond_between(self, atom1_idx: int, atom2_idx: int) -> Bond | None:
        """Find the bond between two atoms, or None."""
        for bond_idx in self.atoms[atom1_idx].bond_indices:
            bond = self.bonds[bond_idx]
            if atom2_idx in bond:
                return bond
        return None

    def remove_bond(self, bond_idx: int) -> None:
        """Delete a bond and renumber all later bonds.

        The relative order of each atom's remaining bonds is kept.
        """
        bond = self.bonds.pop(bond_idx)
        for atom_idx in (bond.atom1_idx, bond.atom2_idx):
            atom = self.atoms[atom_idx]
            atom.bond_indices.remove(bond_idx)
            atom.clear_computed_props()

        for later in self.bonds[bond_idx:]:
            later.idx -= 1
        for atom in self.atoms:
            atom.bond_indices = [i - 1 if i > bond_idx else i for i in atom.bond_indices]

    def remove_atom(self, atom_idx: int) -> None:
        """Delete an atom, its bonds and its conformer rows.

        Every later atom index shifts down by one. Double bond stereo that
        referenced the atom is cleared, and ring info becomes stale.
        """
        atom = self.atoms[atom_idx]
        for bond_idx in sorted(atom.bond_indices, reverse=True):
            self.remove_bond(bond_idx)

        for bond in self.bonds:
            if atom_idx in bond.stereo_atoms:
                bond.clear_stereo()

        del self.atoms[atom_idx]
        for later in self.atoms[atom_idx:]:
            later.idx -= 1

        def shift(i: int) -> int:
            return i - 1 if i > atom_idx else i

        for bond in self.bonds:
            bond.atom1_idx = shift(bond.atom1_idx)
            bond.atom2_idx = shift(bond.atom2_idx)
            bond.stereo_atoms = [shift(i) for i in bond.stereo_atoms]

        for conf in self.conformers:
            conf.remove(atom_idx)
        self.ring_info = None

    def update_property_cache(self, strict: bool = True) -> None:
        """Recompute valence caches on every atom."""
        for atom in self.atoms:
            atom.update_property_cache(self, strict=strict)

    def clear_computed_props(self, include_rings: bool = True) -> None:
        """Drop molecule-level derived data.

        Args:
            include_rings: Also forget ring perception results.
        """
        self.computed_props.clear()
        if include_rings:
            self.ring_info = None

    def copy(self) -> Self:
        """Create a deep copy of the molecule, conformers and queries included."""
        return deepcopy(self)
