#!/usr/bin/env python3
# src/molhierarchy/core/domain/models/joint.py

"""
Domain model for the valence terms that bridge two containers.
"""

from typing import Callable, Dict, Iterable, List, Set, Tuple

from ..valence import spanning_terms
from .bond import Bond
from .valence_term import Angle, Dihedral


class Joint:
    """Bonds, angles and dihedrals whose atoms span two containers."""

    def __init__(self, group1, group2):
        self.group1 = group1
        self.group2 = group2
        self.bonds: List[Bond] = []
        self.angles: List[Angle] = []
        self.dihedrals: List[Dihedral] = []

    def __repr__(self) -> str:
        return (
            f"Joint({self.name!r}, bonds={len(self.bonds)}, "
            f"angles={len(self.angles)}, dihedrals={len(self.dihedrals)})"
        )

    @property
    def name(self) -> str:
        return f"{self.group1.name}-{self.group2.name}"

    def joins(self, group1, group2) -> bool:
        return (self.group1 is group1 and self.group2 is group2) or (
            self.group1 is group2 and self.group2 is group1
        )

    @property
    def signatures(self) -> Set[Tuple]:
        """Identities of all angles and dihedrals in the joint."""
        return {term.identity for term in (*self.angles, *self.dihedrals)}

    def add_bond(self, bond: Bond, seen: Set[Tuple]) -> None:
        """
        Add ``bond`` and every term containing it that is not in ``seen``.

        Args:
            bond: A bond between an atom of group1 and an atom of group2
            seen: Term identities already owned elsewhere; updated in place
        """
        bond.parent = self
        self.bonds.append(bond)
        angles, dihedrals = spanning_terms(bond)
        for terms, found in ((self.angles, angles), (self.dihedrals, dihedrals)):
            for term in found:
                if term.identity in seen:
                    continue
                seen.add(term.identity)
                term.parent = self
                terms.append(term)

    def merge(self, other: "Joint") -> bool:
        """
        Absorb the terms of ``other`` if it joins the same pair of groups.

        Returns:
            True if the joints were merged
        """
        if other is self or not self.joins(other.group1, other.group2):
            return False
        for attribute in ("bonds", "angles", "dihedrals"):
            for term in getattr(other, attribute):
                term.parent = self
                getattr(self, attribute).append(term)
        return True


def build_joints(
    bonds: Iterable[Bond], seen: Set[Tuple] = None, owner: Callable = None
) -> List[Joint]:
    """
    Group cross-container bonds into one joint per pair of containers.

    Args:
        bonds: Bonds whose atoms belong to different containers
        seen: Term identities that must not be claimed again
        owner: Maps an atom to the container a joint connects; defaults to
            the atom's parent

    Returns:
        Joints in order of their first bond
    """
    if seen is None:
        seen = set()
    if owner is None:
        owner = _parent
    joints: Dict[Tuple[int, int], Joint] = {}
    for bond in bonds:
        group1, group2 = owner(bond.atom1), owner(bond.atom2)
        key = tuple(sorted((id(group1), id(group2))))
        joint = joints.get(key)
        if joint is None:
            joint = joints[key] = Joint(group1, group2)
        joint.add_bond(bond, seen)
    return list(joints.values())


def _parent(atom):
    return atom.parent
