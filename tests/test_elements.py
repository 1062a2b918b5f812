"""Tests for element and periodic table functionality."""

import pytest
from hydropy.elements import (
    BondOrder,
    Element,
    get_atomic_number,
    get_default_valence,
    get_rb0,
    get_valence_list,
)


class TestElement:
    """Test Element class."""

    @pytest.mark.parametrize("symbol,atomic_number", [
        ("C", 6),
        ("N", 7),
        ("O", 8),
        ("Cl", 17),
        ("Br", 35),
        ("H", 1),
        ("*", 0),
    ])
    def test_symbol_lookup(self, symbol: str, atomic_number: int) -> None:
        elem = Element.from_symbol(symbol)
        assert elem is not None
        assert elem.symbol == symbol
        assert elem.atomic_number == atomic_number

    def test_from_atomic_number(self):
        """Lookup element by atomic number."""
        elem = Element.from_atomic_number(6)
        assert elem is not None
        assert elem.symbol == "C"

    def test_invalid_symbol(self):
        """Invalid symbol should return None."""
        assert Element.from_symbol("Xx") is None

    def test_lowercase_lookup(self):
        """Lowercase aromatic symbol lookup."""
        elem = Element.from_symbol("c")
        assert elem is not None
        assert elem.atomic_number == 6

    def test_default_valence(self):
        assert Element.from_symbol("S").default_valence == 2
        assert Element.from_symbol("Fe").default_valence is None


class TestBondOrder:

    @pytest.mark.parametrize("order,contribution", [
        (BondOrder.SINGLE, 1.0),
        (BondOrder.DOUBLE, 2.0),
        (BondOrder.TRIPLE, 3.0),
        (BondOrder.AROMATIC, 1.5),
        (BondOrder.DATIVE, 0.0),
        (BondOrder.ANY, 0.0),
    ])
    def test_valence_contribution(self, order: BondOrder, contribution: float) -> None:
        assert order.valence_contribution == contribution

    def test_str(self):
        assert str(BondOrder.DOUBLE) == "double"


class TestHelperFunctions:
    """Test helper functions."""

    def test_get_atomic_number(self):
        """get_atomic_number() function."""
        assert get_atomic_number("C") == 6
        assert get_atomic_number("N") == 7
        assert get_atomic_number("O") == 8
        assert get_atomic_number("Cl") == 17

    def test_get_atomic_number_invalid(self):
        """get_atomic_number() with invalid symbol."""
        assert get_atomic_number("Xx") == 0

    def test_get_default_valence(self):
        """get_default_valence() function."""
        assert get_default_valence(6) == 4  # Carbon
        assert get_default_valence(7) == 3  # Nitrogen
        assert get_default_valence(8) == 2  # Oxygen
        assert get_default_valence(17) == 1  # Chlorine
        assert get_default_valence(26) is None  # Iron

    def test_valence_lists(self):
        assert get_valence_list(15) == (3, 5, 7)
        assert get_valence_list(16) == (2, 4, 6)
        assert get_valence_list(26) == (-1,)

    def test_rb0(self):
        assert get_rb0(1) == pytest.approx(0.33)
        assert get_rb0(6) == pytest.approx(0.77)

    def test_rb0_unknown(self):
        with pytest.raises(KeyError):
            get_rb0(500)
