"""
PDB-style residue records for atoms.

New hydrogens can inherit the residue of the heavy atom they are bonded to,
with per-residue sequential names (H1, H2, ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from hydropy.types import Molecule


_LABEL_WIDTH: Final[int] = 3


@dataclass(slots=True)
class AtomResidueInfo:
    """Residue membership of a single atom, as found in PDB ATOM records."""

    name: str
    serial_number: int = 0
    alt_loc: str = ""
    residue_name: str = ""
    residue_number: int = 0
    chain_id: str = ""
    insertion_code: str = ""
    occupancy: float = 1.0
    temp_factor: float = 0.0
    is_hetero_atom: bool = False


def format_h_label(h_id: int) -> str:
    """Build the 4-character PDB atom name for the ``h_id``-th hydrogen.

    Keeps the last three digits, pads them on the right, prefixes "H" and
    moves the fourth character to the front, so 1 -> " H1 ", 12 -> " H12"
    and 123 -> "3H12".
    """
    digits = str(h_id)
    if len(digits) > _LABEL_WIDTH:
        digits = digits[-_LABEL_WIDTH:]
    label = "H" + digits.ljust(_LABEL_WIDTH)
    return label[3] + label[:3]


def assign_hs_residue_info(mol: Molecule) -> None:
    """Give hydrogens the residue of their heavy atom.

    Hydrogens that already carry residue info are left alone but still
    advance the per-residue counter, so names stay unique. Serial numbers
    continue from the highest serial in the molecule.
    """
    max_serial = max(
        (atom.residue_info.serial_number for atom in mol.atoms if atom.residue_info is not None),
        default=0,
    )

    current_info: AtomResidueInfo | None = None
    current_h_id = 0
    for atom in mol.atoms:
        info = atom.residue_info
        if info is None:
            continue
        for nbr_idx in atom.neighbors(mol):
            nbr = mol.atoms[nbr_idx]
            if nbr.atomic_number != 1:
                continue
            current_h_id += 1
            if nbr.residue_info is not None:
                continue
            if (
                current_info is None
                or current_info.residue_number != info.residue_number
                or current_info.chain_id != info.chain_id
            ):
                current_h_id = 1
                current_info = info
            max_serial += 1
            nbr.residue_info = AtomResidueInfo(
                name=format_h_label(current_h_id),
                serial_number=max_serial,
                residue_name=info.residue_name,
                residue_number=info.residue_number,
                chain_id=info.chain_id,
                is_hetero_atom=info.is_hetero_atom,
            )
