"""Tests for sanitization and ring membership."""

from __future__ import annotations

import pytest

from conftest import aromatic_ring, chain

from hydropy import BondOrder, Hybridization, Molecule, SanitizeError
from hydropy.rings import find_ring_membership
from hydropy.transform import add_hs, assign_hybridization, sanitize


class TestHybridization:

    @pytest.mark.parametrize("symbols,orders,idx,expected", [
        (("C", "C"), [BondOrder.SINGLE], 0, Hybridization.SP3),
        (("C", "C"), [BondOrder.DOUBLE], 0, Hybridization.SP2),
        (("C", "C"), [BondOrder.TRIPLE], 0, Hybridization.SP),
        (("O", "C", "O"), [BondOrder.DOUBLE, BondOrder.DOUBLE], 1, Hybridization.SP),
        (("C", "O"), [BondOrder.SINGLE], 1, Hybridization.SP3),
        (("C", "O"), [BondOrder.DOUBLE], 1, Hybridization.SP2),
    ])
    def test_chain_atom(
        self, symbols: tuple[str, ...], orders: list[int], idx: int, expected: Hybridization
    ) -> None:
        mol = chain(*symbols, orders=orders)
        assign_hybridization(mol)
        assert mol.atoms[idx].hybridization == expected

    def test_aromatic(self, benzene: Molecule) -> None:
        assign_hybridization(benzene)
        assert all(a.hybridization == Hybridization.SP2 for a in benzene.atoms)

    def test_hydrogen_unspecified(self, ethane: Molecule) -> None:
        mol_h = add_hs(ethane)
        assign_hybridization(mol_h)
        assert mol_h.atoms[2].hybridization == Hybridization.UNSPECIFIED
        assert mol_h.atoms[0].hybridization == Hybridization.SP3

    def test_isolated_metal_unspecified(self) -> None:
        mol = chain("Fe")
        assign_hybridization(mol)
        assert mol.atoms[0].hybridization == Hybridization.UNSPECIFIED

    def test_hypervalent_other(self) -> None:
        mol = Molecule()
        p = mol.add_atom("P")
        for _ in range(5):
            mol.add_bond(p, mol.add_atom("F"))
        assign_hybridization(mol)
        assert mol.atoms[0].hybridization == Hybridization.OTHER


class TestRings:

    def test_chain_has_no_rings(self, ethanol: Molecule) -> None:
        info = find_ring_membership(ethanol)
        assert info.ring_atoms == frozenset()
        assert info.ring_bonds == frozenset()

    def test_ring_with_substituent(self) -> None:
        mol = aromatic_ring("C", "C", "C", "C", "C", "C")
        mol.add_atom("C")
        mol.add_bond(0, 6)
        info = find_ring_membership(mol)
        assert info.ring_atoms == frozenset(range(6))
        assert not info.is_bond_in_ring(6)
        assert info.is_atom_in_ring(3)
        assert not info.is_atom_in_ring(6)

    def test_fused_rings(self) -> None:
        # bicyclo[1.1.0]butane: atoms 0-1-2-0 and 0-2-3-0 share bond 0-2
        mol = chain("C", "C", "C", "C")
        mol.add_bond(0, 2)
        mol.add_bond(3, 0)
        info = find_ring_membership(mol)
        assert info.ring_bonds == frozenset(range(5))

    def test_empty_molecule(self) -> None:
        info = find_ring_membership(Molecule())
        assert info.ring_atoms == frozenset()


class TestSanitize:

    def test_returns_same_molecule(self, benzene: Molecule) -> None:
        assert sanitize(benzene) is benzene
        assert benzene.ring_info is not None
        assert all(a.implicit_hydrogens == 1 for a in benzene.atoms)

    def test_valence_failure(self) -> None:
        mol = chain("O", "O", orders=[BondOrder.TRIPLE])
        with pytest.raises(SanitizeError) as exc_info:
            sanitize(mol)
        assert exc_info.value.step == "valence"
        assert exc_info.value.atom_idx == 0
        assert str(exc_info.value).startswith("valence: ")
