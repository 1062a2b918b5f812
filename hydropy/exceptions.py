"""Custom exceptions for hydropy."""

from __future__ import annotations


class ChemError(Exception):
    """Base exception for chemistry-related errors."""
    pass


class ValenceError(ChemError):
    """Atom exceeds every valence its element allows."""

    def __init__(
        self,
        message: str,
        atom_idx: int | None = None,
        atom_symbol: str | None = None,
        explicit_valence: int | None = None,
    ) -> None:
        self.message = message
        self.atom_idx = atom_idx
        self.atom_symbol = atom_symbol
        self.explicit_valence = explicit_valence
        super().__init__(message)


class SanitizeError(ChemError):
    """Sanitization of a molecule failed.

    Attributes:
        step: Name of the sanitization step that failed.
        atom_idx: Index of the offending atom, when one is known.
    """

    def __init__(self, message: str, step: str | None = None, atom_idx: int | None = None) -> None:
        self.message = message
        self.step = step
        self.atom_idx = atom_idx
        if step is not None:
            super().__init__(f"{step}: {message}")
        else:
            super().__init__(message)


class QueryError(ChemError):
    """Query cannot be evaluated locally."""
    pass
