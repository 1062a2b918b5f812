"""
Atom query trees.

Query atoms carry a small tree of tagged nodes instead of a fixed element.
Leaves test the atomic number or the total hydrogen count; inner nodes
combine children with AND / OR; a recursive node owns an independent query
molecule whose first atom must match in context.

    >>> q = AtomQuery.atomic_num(6).expand(AtomQuery.h_count(0, negated=True))
    >>> str(q)
    '#6&!H0'
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Iterator

from hydropy.exceptions import QueryError

if TYPE_CHECKING:
    from hydropy.types import Atom, Molecule


class QueryKind(IntEnum):
    """Node type of an atom query tree."""

    ATOMIC_NUM = 1
    H_COUNT = 2
    AND = 3
    OR = 4
    RECURSIVE = 5


@dataclass(slots=True)
class AtomQuery:
    """A node of an atom query tree.

    Attributes:
        kind: Node type.
        value: Compared value for ATOMIC_NUM and H_COUNT leaves.
        negated: Whether the node's result is inverted.
        children: Operands of AND / OR nodes.
        mol: Owned query molecule of a RECURSIVE node.
    """

    kind: QueryKind
    value: int = 0
    negated: bool = False
    children: list[AtomQuery] = field(default_factory=list)
    mol: Molecule | None = None

    @classmethod
    def atomic_num(cls, value: int, negated: bool = False) -> AtomQuery:
        return cls(QueryKind.ATOMIC_NUM, value=value, negated=negated)

    @classmethod
    def h_count(cls, value: int, negated: bool = False) -> AtomQuery:
        return cls(QueryKind.H_COUNT, value=value, negated=negated)

    @classmethod
    def and_(cls, *children: AtomQuery, negated: bool = False) -> AtomQuery:
        return cls(QueryKind.AND, children=list(children), negated=negated)

    @classmethod
    def or_(cls, *children: AtomQuery, negated: bool = False) -> AtomQuery:
        return cls(QueryKind.OR, children=list(children), negated=negated)

    @classmethod
    def recursive(cls, mol: Molecule, negated: bool = False) -> AtomQuery:
        return cls(QueryKind.RECURSIVE, mol=mol, negated=negated)

    def expand(self, other: AtomQuery) -> AtomQuery:
        """Conjoin ``other`` with this query.

        Appends to this node when it is already a plain AND, otherwise wraps
        both in a new AND node. Returns the new root.
        """
        if self.kind == QueryKind.AND and not self.negated:
            self.children.append(other)
            return self
        return AtomQuery.and_(self, other)

    def walk(self) -> Iterator[AtomQuery]:
        """Yield this node and its descendants breadth-first.

        Recursive nodes are yielded but their query molecules are not
        entered.
        """
        pending: deque[AtomQuery] = deque([self])
        while pending:
            node = pending.popleft()
            yield node
            pending.extend(node.children)

    def matches(self, atom: Atom, mol: Molecule) -> bool:
        """Evaluate the query against an atom of ``mol``.

        Raises:
            QueryError: If the tree contains a recursive node.
        """
        if self.kind == QueryKind.ATOMIC_NUM:
            result = atom.atomic_number == self.value
        elif self.kind == QueryKind.H_COUNT:
            result = atom.total_hydrogens(mol) == self.value
        elif self.kind == QueryKind.AND:
            result = all(child.matches(atom, mol) for child in self.children)
        elif self.kind == QueryKind.OR:
            result = any(child.matches(atom, mol) for child in self.children)
        else:
            raise QueryError("Recursive queries need substructure matching")
        return result != self.negated

    def __str__(self) -> str:
        if self.kind == QueryKind.ATOMIC_NUM:
            text = f"#{self.value}"
        elif self.kind == QueryKind.H_COUNT:
            text = f"H{self.value}"
        elif self.kind == QueryKind.OR:
            text = ",".join(str(child) for child in self.children)
        elif self.kind == QueryKind.AND:
            # OR binds tighter than ';' but looser than '&'
            sep = ";" if any(c.kind == QueryKind.OR for c in self.children) else "&"
            text = sep.join(str(child) for child in self.children)
        else:
            n_atoms = self.mol.num_atoms if self.mol is not None else 0
            text = f"$({n_atoms} atoms)"

        if not self.negated:
            return text
        if self.kind in (QueryKind.AND, QueryKind.OR) and len(self.children) > 1:
            return f"!({text})"
        return f"!{text}"
