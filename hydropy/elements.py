"""
Chemical elements and constants.

This module provides the periodic table data the hydrogen engine consumes:
symbols, covalent bond radii used to size new X-H bonds, and the list of
allowed valence states for each element.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Final


class BondOrder(IntEnum):
    """Bond order enumeration."""

    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3
    AROMATIC = 4
    QUADRUPLE = 5
    DATIVE = 6  # Coordinate/dative bond
    ANY = 0     # Query wildcard bond

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def valence_contribution(self) -> float:
        """Contribution of one bond of this order to an atom's valence."""
        return _VALENCE_CONTRIBUTIONS[self]


_VALENCE_CONTRIBUTIONS: Final[dict[BondOrder, float]] = {
    BondOrder.ANY: 0.0,
    BondOrder.SINGLE: 1.0,
    BondOrder.DOUBLE: 2.0,
    BondOrder.TRIPLE: 3.0,
    BondOrder.AROMATIC: 1.5,
    BondOrder.QUADRUPLE: 4.0,
    BondOrder.DATIVE: 0.0,
}


@dataclass(frozen=True, slots=True)
class Element:
    """Immutable element data.

    Attributes:
        atomic_number: Atomic number (proton count).
        symbol: Element symbol (e.g., "C", "Cl").
        name: Full element name.
        rb0: Covalent radius used for bond lengths, in Angstrom.
        valences: Allowed valence states, default first. A single -1
            entry means any valence is accepted (metals).
    """

    atomic_number: int
    symbol: str
    name: str
    rb0: float
    valences: tuple[int, ...] = (-1,)

    # Class-level registry
    _by_symbol: ClassVar[dict[str, "Element"]] = {}
    _by_number: ClassVar[dict[int, "Element"]] = {}

    def __post_init__(self) -> None:
        Element._by_symbol[self.symbol] = self
        Element._by_symbol[self.symbol.lower()] = self  # Aromatic lowercase
        Element._by_number[self.atomic_number] = self

    @property
    def default_valence(self) -> int | None:
        """First allowed valence, or None when any valence is accepted."""
        first = self.valences[0]
        return first if first >= 0 else None

    @classmethod
    def from_symbol(cls, symbol: str) -> "Element | None":
        """Look up element by symbol (case-insensitive for single letters)."""
        if symbol in cls._by_symbol:
            return cls._by_symbol[symbol]
        capitalized = symbol.capitalize()
        return cls._by_symbol.get(capitalized)

    @classmethod
    def from_atomic_number(cls, num: int) -> "Element | None":
        """Look up element by atomic number."""
        return cls._by_number.get(num)


# Allowed valence lists, default valence first. Elements missing here
# accept any valence and never receive implicit hydrogens.
VALENCE_LISTS: Final[dict[int, tuple[int, ...]]] = {
    0: (-1,),          # dummy
    1: (1,),           # H
    2: (0,),           # He
    3: (1, -1),        # Li
    4: (2,),           # Be
    5: (3,),           # B
    6: (4,),           # C
    7: (3,),           # N
    8: (2,),           # O
    9: (1,),           # F
    10: (0,),          # Ne
    11: (1, -1),       # Na
    12: (2, -1),       # Mg
    13: (3, 6),        # Al
    14: (4, 6),        # Si
    15: (3, 5, 7),     # P
    16: (2, 4, 6),     # S
    17: (1,),          # Cl
    18: (0,),          # Ar
    19: (1, -1),       # K
    20: (2, -1),       # Ca
    31: (3,),          # Ga
    32: (4,),          # Ge
    33: (3, 5, 7),     # As
    34: (2, 4, 6),     # Se
    35: (1,),          # Br
    36: (0,),          # Kr
    49: (3,),          # In
    50: (2, 4),        # Sn
    51: (3, 5, 7),     # Sb
    52: (2, 4, 6),     # Te
    53: (1, 3, 5),     # I
    54: (0, 2, 4, 6),  # Xe
    81: (1, 3),        # Tl
    82: (2, 4),        # Pb
    83: (3, 5, 7),     # Bi
    84: (2, 4, 6),     # Po
    85: (1, 3, 5, 7),  # At
    86: (0,),          # Rn
}

# (atomic_number, symbol, name, rb0)
_ELEMENTS_DATA: Final[list[tuple[int, str, str, float]]] = [
    (0, "*", "Dummy", 0.0),
    (1, "H", "Hydrogen", 0.33),
    (2, "He", "Helium", 0.7),
    (3, "Li", "Lithium", 1.23),
    (4, "Be", "Beryllium", 0.9),
    (5, "B", "Boron", 0.82),
    (6, "C", "Carbon", 0.77),
    (7, "N", "Nitrogen", 0.70),
    (8, "O", "Oxygen", 0.66),
    (9, "F", "Fluorine", 0.611),
    (10, "Ne", "Neon", 0.7),
    (11, "Na", "Sodium", 1.54),
    (12, "Mg", "Magnesium", 1.36),
    (13, "Al", "Aluminum", 1.18),
    (14, "Si", "Silicon", 0.937),
    (15, "P", "Phosphorus", 0.89),
    (16, "S", "Sulfur", 1.04),
    (17, "Cl", "Chlorine", 0.997),
    (18, "Ar", "Argon", 1.74),
    (19, "K", "Potassium", 2.03),
    (20, "Ca", "Calcium", 1.74),
    (21, "Sc", "Scandium", 1.44),
    (22, "Ti", "Titanium", 1.32),
    (23, "V", "Vanadium", 1.22),
    (24, "Cr", "Chromium", 1.18),
    (25, "Mn", "Manganese", 1.17),
    (26, "Fe", "Iron", 1.17),
    (27, "Co", "Cobalt", 1.16),
    (28, "Ni", "Nickel", 1.15),
    (29, "Cu", "Copper", 1.17),
    (30, "Zn", "Zinc", 1.25),
    (31, "Ga", "Gallium", 1.26),
    (32, "Ge", "Germanium", 1.22),
    (33, "As", "Arsenic", 1.20),
    (34, "Se", "Selenium", 1.17),
    (35, "Br", "Bromine", 1.141),
    (36, "Kr", "Krypton", 1.89),
    (37, "Rb", "Rubidium", 2.16),
    (38, "Sr", "Strontium", 1.91),
    (39, "Y", "Yttrium", 1.62),
    (40, "Zr", "Zirconium", 1.45),
    (41, "Nb", "Niobium", 1.34),
    (42, "Mo", "Molybdenum", 1.30),
    (43, "Tc", "Technetium", 1.27),
    (44, "Ru", "Ruthenium", 1.25),
    (45, "Rh", "Rhodium", 1.25),
    (46, "Pd", "Palladium", 1.28),
    (47, "Ag", "Silver", 1.34),
    (48, "Cd", "Cadmium", 1.48),
    (49, "In", "Indium", 1.44),
    (50, "Sn", "Tin", 1.41),
    (51, "Sb", "Antimony", 1.40),
    (52, "Te", "Tellurium", 1.36),
    (53, "I", "Iodine", 1.33),
    (54, "Xe", "Xenon", 2.09),
    (55, "Cs", "Cesium", 2.35),
    (56, "Ba", "Barium", 1.98),
    (57, "La", "Lanthanum", 1.69),
    (58, "Ce", "Cerium", 1.65),
    (59, "Pr", "Praseodymium", 1.65),
    (60, "Nd", "Neodymium", 1.64),
    (61, "Pm", "Promethium", 1.63),
    (62, "Sm", "Samarium", 1.62),
    (63, "Eu", "Europium", 1.85),
    (64, "Gd", "Gadolinium", 1.61),
    (65, "Tb", "Terbium", 1.59),
    (66, "Dy", "Dysprosium", 1.59),
    (67, "Ho", "Holmium", 1.58),
    (68, "Er", "Erbium", 1.57),
    (69, "Tm", "Thulium", 1.56),
    (70, "Yb", "Ytterbium", 1.74),
    (71, "Lu", "Lutetium", 1.56),
    (72, "Hf", "Hafnium", 1.44),
    (73, "Ta", "Tantalum", 1.34),
    (74, "W", "Tungsten", 1.30),
    (75, "Re", "Rhenium", 1.28),
    (76, "Os", "Osmium", 1.26),
    (77, "Ir", "Iridium", 1.27),
    (78, "Pt", "Platinum", 1.30),
    (79, "Au", "Gold", 1.34),
    (80, "Hg", "Mercury", 1.49),
    (81, "Tl", "Thallium", 1.48),
    (82, "Pb", "Lead", 1.47),
    (83, "Bi", "Bismuth", 1.46),
    (84, "Po", "Polonium", 1.46),
    (85, "At", "Astatine", 1.45),
    (86, "Rn", "Radon", 1.50),
    (87, "Fr", "Francium", 2.60),
    (88, "Ra", "Radium", 2.21),
    (89, "Ac", "Actinium", 2.15),
    (90, "Th", "Thorium", 2.06),
    (91, "Pa", "Protactinium", 2.00),
    (92, "U", "Uranium", 1.96),
    (93, "Np", "Neptunium", 1.90),
    (94, "Pu", "Plutonium", 1.87),
    (95, "Am", "Americium", 1.80),
    (96, "Cm", "Curium", 1.69),
    (97, "Bk", "Berkelium", 1.60),
    (98, "Cf", "Californium", 1.60),
    (99, "Es", "Einsteinium", 1.60),
    (100, "Fm", "Fermium", 1.60),
    (101, "Md", "Mendelevium", 1.60),
    (102, "No", "Nobelium", 1.60),
    (103, "Lr", "Lawrencium", 1.60),
    (104, "Rf", "Rutherfordium", 1.60),
    (105, "Db", "Dubnium", 1.60),
    (106, "Sg", "Seaborgium", 1.60),
    (107, "Bh", "Bohrium", 1.60),
    (108, "Hs", "Hassium", 1.60),
    (109, "Mt", "Meitnerium", 1.60),
    (110, "Ds", "Darmstadtium", 1.60),
    (111, "Rg", "Roentgenium", 1.60),
    (112, "Cn", "Copernicium", 1.60),
    (113, "Nh", "Nihonium", 1.60),
    (114, "Fl", "Flerovium", 1.60),
    (115, "Mc", "Moscovium", 1.60),
    (116, "Lv", "Livermorium", 1.60),
    (117, "Ts", "Tennessine", 1.60),
    (118, "Og", "Oganesson", 1.60),
]

# Initialize elements
ELEMENTS: Final[tuple[Element, ...]] = tuple(
    Element(num, sym, name, rb0, VALENCE_LISTS.get(num, (-1,)))
    for num, sym, name, rb0 in _ELEMENTS_DATA
)


def get_atomic_number(symbol: str) -> int:
    """Get atomic number for an element symbol.

    Args:
        symbol: Element symbol (e.g., "C", "cl", "Cl").

    Returns:
        Atomic number, or 0 if not found (dummy atom).
    """
    elem = Element.from_symbol(symbol)
    return elem.atomic_number if elem else 0


def get_rb0(atomic_num: int) -> float:
    """Covalent radius used for bond lengths.

    Raises:
        KeyError: If the atomic number is unknown.
    """
    elem = Element.from_atomic_number(atomic_num)
    if elem is None:
        raise KeyError(f"Unknown atomic number: {atomic_num}")
    return elem.rb0


def get_valence_list(atomic_num: int) -> tuple[int, ...]:
    """Allowed valence states for an element, default first."""
    return VALENCE_LISTS.get(atomic_num, (-1,))


def get_default_valence(atomic_num: int) -> int | None:
    """Get default valence for an element.

    Args:
        atomic_num: Atomic number.

    Returns:
        Default valence, or None if any valence is accepted.
    """
    first = get_valence_list(atomic_num)[0]
    return first if first >= 0 else None
