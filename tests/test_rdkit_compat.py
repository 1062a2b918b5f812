"""Cross-check hydrogen counts against RDKit."""

from __future__ import annotations

import pytest

from conftest import hydrogen_indices

from hydropy import BondOrder, Molecule
from hydropy.transform import add_hs, remove_hs

# Skip if RDKit not available
rdkit = pytest.importorskip("rdkit")
from rdkit import Chem


_BOND_ORDERS = {
    Chem.BondType.SINGLE: BondOrder.SINGLE,
    Chem.BondType.DOUBLE: BondOrder.DOUBLE,
    Chem.BondType.TRIPLE: BondOrder.TRIPLE,
    Chem.BondType.AROMATIC: BondOrder.AROMATIC,
}

SMILES = [
    "C",           # methane
    "CC",          # ethane
    "CCO",         # ethanol
    "C=C",         # ethene
    "C#N",         # hydrogen cyanide
    "c1ccccc1",    # benzene
    "c1ccncc1",    # pyridine
    "[nH]1cccc1",  # pyrrole
    "[NH4+]",      # ammonium
    "CC(=O)[O-]",  # acetate
    "CS(=O)(=O)C", # dimethyl sulfone
    "OP(=O)(O)O",  # phosphoric acid
]


def from_rdkit(smiles: str) -> Molecule:
    rdmol = Chem.MolFromSmiles(smiles)
    if rdmol is None:
        raise ValueError(f"RDKit could not parse: {smiles}")
    mol = Molecule()
    for atom in rdmol.GetAtoms():
        mol.add_atom(
            atom.GetSymbol(),
            charge=atom.GetFormalCharge(),
            explicit_hydrogens=atom.GetNumExplicitHs(),
            is_aromatic=atom.GetIsAromatic(),
            no_implicit=atom.GetNoImplicit(),
        )
    for bond in rdmol.GetBonds():
        mol.add_bond(
            bond.GetBeginAtomIdx(),
            bond.GetEndAtomIdx(),
            order=_BOND_ORDERS[bond.GetBondType()],
            is_aromatic=bond.GetIsAromatic(),
        )
    return mol


class TestAgainstRDKit:

    @pytest.mark.parametrize("smiles", SMILES)
    def test_add_hs_count(self, smiles: str) -> None:
        mol_h = add_hs(from_rdkit(smiles))
        rdmol_h = Chem.AddHs(Chem.MolFromSmiles(smiles))
        rdkit_h = sum(1 for a in rdmol_h.GetAtoms() if a.GetAtomicNum() == 1)
        assert len(hydrogen_indices(mol_h)) == rdkit_h, f"H count mismatch for {smiles}"

    @pytest.mark.parametrize("smiles", SMILES)
    def test_round_trip_total_hydrogens(self, smiles: str) -> None:
        restored = remove_hs(add_hs(from_rdkit(smiles)))
        rdmol = Chem.MolFromSmiles(smiles)
        assert restored.num_atoms == rdmol.GetNumAtoms()
        expected = [a.GetTotalNumHs() for a in rdmol.GetAtoms()]
        assert [a.total_hydrogens(restored) for a in restored.atoms] == expected
