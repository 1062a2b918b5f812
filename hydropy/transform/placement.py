"""
Coordinates for newly added hydrogens.

The position of a new hydrogen depends on how many other neighbors its
heavy atom has and on the heavy atom's hybridization. Placement is done in
every coordinate layer of the molecule; 3D layers use the physical X-H bond
length, 2D layers a unit length and keep z at 0.
"""

from __future__ import annotations

import logging
from math import radians
from typing import TYPE_CHECKING, Final

import numpy as np
from numpy.typing import NDArray

from hydropy.elements import BondOrder, get_rb0
from hydropy.stereo import chiral_volume
from hydropy.types import CIP_CODE, CIP_RANK, Hybridization

if TYPE_CHECKING:
    from hydropy.conformer import Conformer
    from hydropy.types import Atom, Molecule


logger = logging.getLogger(__name__)

TETRAHEDRAL_ANGLE: Final[float] = 109.471
SP2_ANGLE: Final[float] = 60.0
DEGENERATE_LENGTH_SQ: Final[float] = 1e-4
COPLANAR_THRESHOLD: Final[float] = 0.1
FLAT_BOND_LENGTH: Final[float] = 1.0

_Z_AXIS: Final[NDArray[np.float64]] = np.array([0.0, 0.0, 1.0])

Vector = NDArray[np.float64]


def _perpendicular(v: Vector) -> Vector:
    """A deterministic unit vector perpendicular to ``v``."""
    x, y, z = v
    if x != 0.0:
        if y != 0.0:
            res = np.array([y, -x, 0.0])
        elif z != 0.0:
            res = np.array([z, 0.0, -x])
        else:
            res = np.array([0.0, 1.0, 0.0])
    elif y != 0.0:
        if z != 0.0:
            res = np.array([0.0, z, -y])
        else:
            res = np.array([1.0, 0.0, 0.0])
    else:
        res = np.array([1.0, 0.0, 0.0])
    return res / np.linalg.norm(res)


def _in_plane_perpendicular(v: Vector) -> Vector:
    return np.array([-v[1], v[0], 0.0])


def _unit(v: Vector, fallback: Vector) -> Vector:
    norm = np.linalg.norm(v)
    if norm < 1e-8:
        return fallback / np.linalg.norm(fallback)
    return v / norm


def _rotate(v: Vector, angle_deg: float, axis: Vector) -> Vector:
    """Right-handed rotation of ``v`` about ``axis`` (Rodrigues)."""
    k = axis / np.linalg.norm(axis)
    theta = radians(angle_deg)
    cos_t = np.cos(theta)
    sin_t = np.sin(theta)
    return v * cos_t + np.cross(k, v) * sin_t + k * np.dot(k, v) * (1.0 - cos_t)


def _neighbor_not(mol: "Molecule", atom: "Atom", other_idx: int) -> "Atom":
    for nbr_idx in atom.neighbors(mol):
        if nbr_idx != other_idx:
            return mol.atoms[nbr_idx]
    raise ValueError(f"Atom {atom.idx} has no neighbor other than {other_idx}")


def _away_vectors(conf: "Conformer", heavy_pos: Vector, nbrs: list["Atom"]) -> list[Vector] | None:
    """Unit vectors from each neighbor through the heavy atom.

    Returns None when any neighbor sits on top of the heavy atom.
    """
    vectors = []
    for nbr in nbrs:
        v = heavy_pos - conf.get_atom_pos(nbr.idx)
        if np.dot(v, v) < DEGENERATE_LENGTH_SQ:
            return None
        vectors.append(v / np.linalg.norm(v))
    return vectors


def _direction_one_neighbor(
    mol: "Molecule", conf: "Conformer", heavy: "Atom", h_idx: int, heavy_pos: Vector
) -> Vector | None:
    nbr1 = _neighbor_not(mol, heavy, h_idx)
    away = _away_vectors(conf, heavy_pos, [nbr1])
    if away is None:
        return None
    nbr1_vect = away[0]

    if heavy.hybridization == Hybridization.SP3:
        perp = _perpendicular(nbr1_vect) if conf.is_3d else _Z_AXIS
        return _rotate(nbr1_vect, 180.0 - TETRAHEDRAL_ANGLE, perp)

    if heavy.hybridization == Hybridization.SP2:
        default_perp = _perpendicular(nbr1_vect) if conf.is_3d else _Z_AXIS
        perp = default_perp
        if nbr1.degree > 1:
            nbr_bond = mol.get_bond_between(heavy.idx, nbr1.idx)
            if nbr_bond.is_aromatic or nbr_bond.order == BondOrder.DOUBLE:
                # stay in the plane of the neighbor's substituents
                nbr2 = _neighbor_not(mol, nbr1, heavy.idx)
                nbr1_pos = conf.get_atom_pos(nbr1.idx)
                nbr2_vect = conf.get_atom_pos(nbr2.idx) - nbr1_pos
                if np.dot(nbr2_vect, nbr2_vect) >= DEGENERATE_LENGTH_SQ:
                    nbr2_vect /= np.linalg.norm(nbr2_vect)
                    perp = _unit(np.cross(nbr2_vect, nbr1_vect), default_perp)
        return _rotate(nbr1_vect, SP2_ANGLE, perp)

    # sp, and anything we have no rule for: linear
    return nbr1_vect


def _direction_two_neighbors(
    mol: "Molecule", conf: "Conformer", heavy: "Atom", h_idx: int, heavy_pos: Vector
) -> Vector | None:
    nbrs = [mol.atoms[i] for i in heavy.neighbors(mol) if i != h_idx]
    away = _away_vectors(conf, heavy_pos, nbrs)
    if away is None:
        return None
    nbr1_vect, nbr2_vect = away

    fallback = _perpendicular(nbr1_vect) if conf.is_3d else _in_plane_perpendicular(nbr1_vect)
    direction = _unit(nbr1_vect + nbr2_vect, fallback)

    if conf.is_3d and heavy.hybridization == Hybridization.SP3:
        nbr_perp = np.cross(nbr1_vect, nbr2_vect)
        rotn_axis = np.cross(nbr_perp, direction)
        if np.linalg.norm(rotn_axis) > 1e-8:
            direction = _rotate(direction, TETRAHEDRAL_ANGLE / 2, rotn_axis)
    return direction


def _direction_three_neighbors(
    mol: "Molecule", conf: "Conformer", heavy: "Atom", h_idx: int, heavy_pos: Vector
) -> Vector | None:
    nbrs = [mol.atoms[i] for i in heavy.neighbors(mol) if i != h_idx]
    cip_code = heavy.props.get(CIP_CODE)
    if cip_code is not None:
        # chiral center: order neighbors by CIP rank so the result is stable
        nbrs.sort(key=lambda a: (a.props.get(CIP_RANK, 0), a.idx))

    away = _away_vectors(conf, heavy_pos, nbrs)
    if away is None:
        return None
    nbr1_vect, nbr2_vect, nbr3_vect = away

    if conf.is_3d:
        if abs(np.dot(nbr3_vect, np.cross(nbr1_vect, nbr2_vect))) < COPLANAR_THRESHOLD:
            # neighbors are nearly planar, go along the plane normal
            direction = _unit(np.cross(nbr1_vect, nbr2_vect), np.cross(nbr1_vect, _perpendicular(nbr1_vect)))
            if cip_code is not None:
                vol = chiral_volume(nbr3_vect, direction, nbr1_vect, nbr2_vect)
                if (cip_code == "S" and vol < 0) or (cip_code == "R" and vol > 0):
                    direction = -direction
        else:
            direction = nbr1_vect + nbr2_vect + nbr3_vect
        return _unit(direction, _perpendicular(nbr1_vect))

    # 2D: point into the gap between the pair of neighbors with the widest angle.
    # An antiparallel pair leaves the third neighbor to decide the side.
    triples = [
        (nbr1_vect, nbr2_vect, nbr3_vect),
        (nbr2_vect, nbr3_vect, nbr1_vect),
        (nbr1_vect, nbr3_vect, nbr2_vect),
    ]
    first, second, third = min(triples, key=lambda t: np.dot(t[0], t[1]))
    return _unit(-(first + second), third)


def set_hydrogen_coords(mol: "Molecule", h_idx: int, heavy_idx: int) -> None:
    """Place hydrogen ``h_idx`` next to ``heavy_idx`` in every conformer.

    The hydrogen must already be bonded to the heavy atom and have no other
    bonds. Positions of all other atoms are read, never written.

    Raises:
        ValueError: If the atoms are the same, the hydrogen's degree is not
            1 or the two atoms are not bonded.
    """
    if h_idx == heavy_idx:
        raise ValueError("Hydrogen and heavy atom must be different atoms")
    if mol.atoms[h_idx].degree != 1:
        raise ValueError(f"Hydrogen {h_idx} must have exactly one bond")
    if mol.get_bond_between(heavy_idx, h_idx) is None:
        raise ValueError(f"No bond between atoms {heavy_idx} and {h_idx}")

    heavy = mol.atoms[heavy_idx]
    bond_length = get_rb0(1) + get_rb0(heavy.atomic_number)
    degree = heavy.degree

    if degree == 1:
        for conf in mol.conformers:
            heavy_pos = conf.get_atom_pos(heavy_idx)
            if conf.is_3d:
                conf.set_atom_pos(h_idx, heavy_pos + _Z_AXIS * bond_length)
            else:
                conf.set_atom_pos(h_idx, heavy_pos + np.array([1.0, 0.0, 0.0]) * FLAT_BOND_LENGTH)
        return

    if degree == 2:
        compute = _direction_one_neighbor
    elif degree == 3:
        compute = _direction_two_neighbors
    elif degree == 4:
        compute = _direction_three_neighbors
    else:
        # TODO: no geometric rule yet for hypervalent centers (degree 5+)
        logger.warning(
            "No placement rule for hydrogen on atom %d with degree %d; placing it on the heavy atom",
            heavy_idx, degree,
        )
        for conf in mol.conformers:
            conf.set_atom_pos(h_idx, conf.get_atom_pos(heavy_idx))
        return

    for conf in mol.conformers:
        heavy_pos = conf.get_atom_pos(heavy_idx)
        direction = compute(mol, conf, heavy, h_idx, heavy_pos)
        if direction is None:
            # duplicate coordinates, most likely redundant atoms
            conf.set_atom_pos(h_idx, heavy_pos)
            continue
        length = bond_length if conf.is_3d else FLAT_BOND_LENGTH
        conf.set_atom_pos(h_idx, heavy_pos + direction * length)
