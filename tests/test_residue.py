"""Tests for residue labels on added hydrogens."""

from __future__ import annotations

import pytest

from conftest import chain, hydrogen_indices

from hydropy import AtomResidueInfo, Molecule
from hydropy.residue import assign_hs_residue_info, format_h_label
from hydropy.transform import add_hs


def residue_peptide_fragment() -> Molecule:
    """C-O in residue 1 of chain A, N in residue 2."""
    mol = chain("C", "O", "N")
    mol.atoms[0].residue_info = AtomResidueInfo(" CA ", serial_number=1, residue_name="ALA", residue_number=1, chain_id="A")
    mol.atoms[1].residue_info = AtomResidueInfo(" OG ", serial_number=2, residue_name="ALA", residue_number=1, chain_id="A")
    mol.atoms[2].residue_info = AtomResidueInfo(" N  ", serial_number=7, residue_name="GLY", residue_number=2, chain_id="A")
    return mol


class TestFormatLabel:

    @pytest.mark.parametrize("h_id,label", [
        (1, " H1 "),
        (9, " H9 "),
        (12, " H12"),
        (123, "3H12"),
        (1234, "4H23"),
    ])
    def test_label(self, h_id: int, label: str) -> None:
        assert format_h_label(h_id) == label
        assert len(format_h_label(h_id)) == 4


class TestAssignResidueInfo:

    def test_add_hs_with_residue_info(self) -> None:
        mol_h = add_hs(residue_peptide_fragment(), add_residue_info=True)

        hs = hydrogen_indices(mol_h)
        assert len(hs) == 5
        infos = [mol_h.atoms[i].residue_info for i in hs]
        assert [info.name for info in infos] == [" H1 ", " H2 ", " H3 ", " H1 ", " H2 "]
        assert [info.serial_number for info in infos] == [8, 9, 10, 11, 12]
        assert [info.residue_number for info in infos] == [1, 1, 1, 2, 2]
        assert [info.residue_name for info in infos] == ["ALA", "ALA", "ALA", "GLY", "GLY"]
        assert all(info.chain_id == "A" for info in infos)

    def test_residue_info_not_added_by_default(self) -> None:
        mol_h = add_hs(residue_peptide_fragment())
        assert all(mol_h.atoms[i].residue_info is None for i in hydrogen_indices(mol_h))

    def test_labelled_hydrogens_kept_but_counted(self) -> None:
        # C0-C1 in one residue; H3 on C1 is already labelled
        mol = chain("C", "C")
        for heavy in (0, 1, 1):
            mol.add_bond(heavy, mol.add_atom("H"))
        mol.atoms[0].residue_info = AtomResidueInfo(" C1 ", serial_number=1, residue_number=5)
        mol.atoms[1].residue_info = AtomResidueInfo(" C2 ", serial_number=2, residue_number=5)
        mol.atoms[3].residue_info = AtomResidueInfo("HX  ", serial_number=3, residue_number=5)

        assign_hs_residue_info(mol)

        assert mol.atoms[2].residue_info.name == " H1 "
        assert mol.atoms[3].residue_info.name == "HX  "
        assert mol.atoms[4].residue_info.name == " H3 "
        assert [mol.atoms[i].residue_info.serial_number for i in (2, 3, 4)] == [4, 3, 5]

    def test_atoms_without_residue_ignored(self) -> None:
        mol_h = add_hs(chain("C"))
        assign_hs_residue_info(mol_h)
        assert all(atom.residue_info is None for atom in mol_h.atoms)
