"""
Hydropy - explicit hydrogen handling for molecular graphs.

Turns hydrogen counts into hydrogen atoms (with 2D/3D coordinates) and
back, keeping tetrahedral chirality and double bond stereo intact, and
folds query hydrogens into hydrogen-count queries.

    >>> from hydropy import Molecule, add_hs, remove_hs
    >>> mol = Molecule()
    >>> c1 = mol.add_atom("C")
    >>> c2 = mol.add_atom("C")
    >>> _ = mol.add_bond(c1, c2)
    >>> add_hs(mol).num_atoms
    8
    >>> remove_hs(add_hs(mol)).num_atoms
    2

Submodules:
    hydropy.transform - Hydrogen add/remove/merge, placement, sanitization
    hydropy.rings     - Ring membership
    hydropy.query     - Atom query trees
    hydropy.residue   - PDB residue records
"""

__version__ = "0.1.0"

# Core types
from hydropy.types import Atom, Bond, Molecule, Hybridization
from hydropy.conformer import Conformer
from hydropy.stereo import BondDir, BondStereo, ChiralTag
from hydropy.query import AtomQuery, QueryKind
from hydropy.residue import AtomResidueInfo

# Hydrogen operations
from hydropy.transform import (
    add_hs,
    remove_hs,
    merge_query_hs,
    set_hydrogen_coords,
    sanitize,
)

# Exceptions
from hydropy.exceptions import ChemError, ValenceError, SanitizeError, QueryError

# Element data
from hydropy.elements import Element, BondOrder

from hydropy.logging_config import setup_logging

# Submodules
from hydropy import rings, transform

__all__ = [
    # Types
    "Atom", "Bond", "Molecule", "Hybridization", "Conformer",
    "BondDir", "BondStereo", "ChiralTag",
    "AtomQuery", "QueryKind", "AtomResidueInfo",
    # Hydrogens
    "add_hs", "remove_hs", "merge_query_hs", "set_hydrogen_coords", "sanitize",
    # Exceptions
    "ChemError", "ValenceError", "SanitizeError", "QueryError",
    # Elements
    "Element", "BondOrder",
    "setup_logging",
    # Submodules
    "rings", "transform",
]
