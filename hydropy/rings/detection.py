"""
Ring membership detection.

A bond is a ring bond exactly when it is not a bridge of the molecular
graph. Bridges are found with Tarjan's low-link algorithm, run with an
explicit stack so large molecules do not hit the recursion limit.

Ring info is keyed by atom and bond index, so any deletion makes it stale;
the sanitizer rebuilds it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hydropy.types import Molecule


@dataclass(frozen=True, slots=True)
class RingInfo:
    """Which atoms and bonds lie on at least one ring."""

    ring_atoms: frozenset[int]
    ring_bonds: frozenset[int]

    def is_atom_in_ring(self, atom_idx: int) -> bool:
        return atom_idx in self.ring_atoms

    def is_bond_in_ring(self, bond_idx: int) -> bool:
        return bond_idx in self.ring_bonds


def _find_bridges(mol: "Molecule") -> set[int]:
    """Return indices of bonds whose removal disconnects the graph."""
    discovery: dict[int, int] = {}
    low: dict[int, int] = {}
    bridges: set[int] = set()
    counter = 0

    for start in range(mol.num_atoms):
        if start in discovery:
            continue
        discovery[start] = low[start] = counter
        counter += 1
        # (atom, bond used to reach it, iterator over its bonds)
        stack = [(start, -1, iter(mol.atoms[start].bond_indices))]

        while stack:
            node, in_bond, bonds = stack[-1]
            advanced = False
            for bond_idx in bonds:
                if bond_idx == in_bond:
                    continue
                nbr = mol.bonds[bond_idx].other_atom(node)
                if nbr not in discovery:
                    discovery[nbr] = low[nbr] = counter
                    counter += 1
                    stack.append((nbr, bond_idx, iter(mol.atoms[nbr].bond_indices)))
                    advanced = True
                    break
                low[node] = min(low[node], discovery[nbr])
            if advanced:
                continue

            stack.pop()
            if stack:
                parent = stack[-1][0]
                low[parent] = min(low[parent], low[node])
                if low[node] > discovery[parent]:
                    bridges.add(in_bond)

    return bridges


def find_ring_membership(mol: "Molecule") -> RingInfo:
    """Detect ring atoms and ring bonds.

    Args:
        mol: Molecule to analyze.

    Returns:
        RingInfo with every atom and bond that lies on a cycle.
    """
    if mol.num_atoms == 0:
        return RingInfo(frozenset(), frozenset())

    bridges = _find_bridges(mol)

    ring_atoms: set[int] = set()
    ring_bonds: set[int] = set()
    for bond in mol.bonds:
        if bond.idx not in bridges:
            ring_bonds.add(bond.idx)
            ring_atoms.add(bond.atom1_idx)
            ring_atoms.add(bond.atom2_idx)

    return RingInfo(frozenset(ring_atoms), frozenset(ring_bonds))
