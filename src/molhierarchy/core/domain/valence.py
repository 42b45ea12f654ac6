# src/molhierarchy/core/domain/valence.py
"""
Valence term enumeration over a bond graph.

Containers call these with the bonds restricted to their own atoms; joints
call ``spanning_terms`` for the bonds that cross between containers.
"""

from typing import Dict, Iterable, List, Set, Tuple

from .models.atom import Atom
from .models.bond import Bond
from .models.valence_term import Angle, Dihedral


def internal_bonds(atoms: Iterable[Atom]) -> List[Bond]:
    """
    Bonds whose two atoms are both in ``atoms``.

    Args:
        atoms: Atoms of one container

    Returns:
        Each such bond once, in order of first appearance
    """
    members = list(atoms)
    member_set = set(members)
    seen: Set[int] = set()
    bonds = []
    for atom in members:
        for bond in atom.bonds:
            if id(bond) in seen or bond.other(atom) not in member_set:
                continue
            seen.add(id(bond))
            bonds.append(bond)
    return bonds


def _incidence(bonds: Iterable[Bond]) -> Dict[Atom, List[Bond]]:
    incident: Dict[Atom, List[Bond]] = {}
    for bond in bonds:
        for atom in bond.atoms:
            incident.setdefault(atom, []).append(bond)
    return incident


def enumerate_angles(bonds: List[Bond]) -> List[Angle]:
    """One angle per unordered pair of bonds incident to the same atom."""
    angles = []
    for incident in _incidence(bonds).values():
        for i, first in enumerate(incident):
            for second in incident[i + 1:]:
                angles.append(Angle(first, second))
    return angles


def enumerate_dihedrals(bonds: List[Bond]) -> List[Dihedral]:
    """
    One dihedral per central bond and pair of flanking bonds.

    Flanking bonds that close a three-membered ring do not define a
    quadruple and are skipped.
    """
    incident = _incidence(bonds)
    dihedrals = []
    for central in bonds:
        first, second = central.atoms
        for before in incident[first]:
            if before is central:
                continue
            for after in incident[second]:
                if after is central or before.other(first) is after.other(second):
                    continue
                dihedrals.append(Dihedral(before, central, after))
    return dihedrals


def spanning_terms(bond: Bond) -> Tuple[List[Angle], List[Dihedral]]:
    """
    Every angle and dihedral of the full bond graph that contains ``bond``.

    The bond may sit at either end of an angle, and at the centre or at
    either end of a dihedral.
    """
    angles = []
    dihedrals = []
    first, second = bond.atoms
    for atom in (first, second):
        for other in atom.bonds:
            if other is not bond:
                angles.append(Angle(bond, other))

    for before in first.bonds:
        if before is bond:
            continue
        for after in second.bonds:
            if after is bond or before.other(first) is after.other(second):
                continue
            dihedrals.append(Dihedral(before, bond, after))

    for near, far in ((first, second), (second, first)):
        for middle in far.bonds:
            if middle is bond:
                continue
            pivot = middle.other(far)
            for last in pivot.bonds:
                if last is middle or last.other(pivot) is near:
                    continue
                dihedrals.append(Dihedral(bond, middle, last))
    return angles, dihedrals
