#!/usr/bin/env python3
# src/molhierarchy/core/domain/models/valence_term.py

"""
Angles and dihedrals derived from the bond graph.
"""

import math
from typing import Optional, Tuple

from ...geometry import bond_angle, dihedral_angle
from ....exceptions import InvariantViolation
from .atom import Atom
from .bond import Bond


class ValenceTerm:
    """A geometric relationship among a fixed number of bonded atoms."""

    def __init__(self, atoms: Tuple[Atom, ...], bonds: Tuple[Bond, ...]):
        self.atoms = atoms
        self.bonds = bonds
        self.parent = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.label})"

    @property
    def label(self) -> str:
        return "-".join(atom.label for atom in self.atoms)

    @property
    def key(self) -> str:
        """Element string such as "C-N-C", used to group terms by type."""
        return "-".join(atom.element for atom in self.atoms)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(atom.name for atom in self.atoms)

    @property
    def signature(self) -> Tuple[int, ...]:
        """Index tuple identifying the term regardless of construction order."""
        raise NotImplementedError

    @property
    def identity(self) -> Tuple:
        """Term type plus signature; equal identities denote the same term."""
        return (type(self).__name__,) + self.signature

    @property
    def value(self) -> float:
        """Current value in degrees."""
        raise NotImplementedError


class Angle(ValenceTerm):
    """Three atoms spanned by two bonds; the shared atom sits at index 1."""

    def __init__(self, bond1: Bond, bond2: Bond):
        center = bond1.common_atom(bond2)
        if center is None:
            raise InvariantViolation(f"{bond1!r} and {bond2!r} do not form an angle")
        super().__init__((bond1.other(center), center, bond2.other(center)), (bond1, bond2))

    @property
    def center(self) -> Atom:
        return self.atoms[1]

    @property
    def signature(self) -> Tuple[int, int, int]:
        first, center, last = (atom.index for atom in self.atoms)
        return (min(first, last), center, max(first, last))

    @property
    def value(self) -> float:
        a, b, c = (atom.coordinates for atom in self.atoms)
        return math.degrees(bond_angle(a, b, c))

    def other_terminal(self, atom: Atom) -> Optional[Atom]:
        """The terminal atom opposite ``atom``."""
        if atom is self.atoms[0]:
            return self.atoms[2]
        if atom is self.atoms[2]:
            return self.atoms[0]
        return None

    def shared_bond(self, angle: "Angle") -> Optional[Bond]:
        for bond in self.bonds:
            if bond in angle.bonds:
                return bond
        return None


class Dihedral(ValenceTerm):
    """Four atoms spanned by three consecutive bonds.

    ``Dihedral(b1, b2, b3)`` requires b1 and b2 to share one atom and b3 to
    touch the far end of b2; the central bond b2 always occupies atom
    positions 1 and 2.
    """

    def __init__(self, bond1: Bond, bond2: Bond, bond3: Bond):
        second = bond1.common_atom(bond2)
        if second is None:
            raise InvariantViolation(f"{bond1!r} and {bond2!r} are not consecutive")
        third = bond2.other(second)
        if not bond3.contains(third) or bond3 is bond2:
            raise InvariantViolation(f"{bond3!r} does not continue from {bond2!r}")
        atoms = (bond1.other(second), second, third, bond3.other(third))
        if len({id(atom) for atom in atoms}) != 4:
            raise InvariantViolation(f"Bonds {bond1!r}, {bond2!r}, {bond3!r} form a ring")
        super().__init__(atoms, (bond1, bond2, bond3))

    @classmethod
    def from_angles(cls, angle1: Angle, angle2: Angle) -> "Dihedral":
        """Dihedral of two angles sharing exactly one bond."""
        shared = angle1.shared_bond(angle2)
        if shared is None:
            raise InvariantViolation(f"{angle1!r} and {angle2!r} share no bond")
        first = next(bond for bond in angle1.bonds if bond is not shared)
        last = next(bond for bond in angle2.bonds if bond is not shared)
        return cls(first, shared, last)

    @classmethod
    def from_angle_and_bond(cls, angle: Angle, bond: Bond) -> "Dihedral":
        """Extend ``angle`` by ``bond`` at one of its terminal atoms."""
        first, last = angle.bonds
        if bond.contains(angle.atoms[2]):
            return cls(first, last, bond)
        if bond.contains(angle.atoms[0]):
            return cls(last, first, bond)
        raise InvariantViolation(f"{bond!r} does not extend {angle!r}")

    @property
    def central_bond(self) -> Bond:
        return self.bonds[1]

    @property
    def signature(self) -> Tuple[int, int, int, int]:
        forward = tuple(atom.index for atom in self.atoms)
        return min(forward, forward[::-1])

    @property
    def value(self) -> float:
        a, b, c, d = (atom.coordinates for atom in self.atoms)
        return math.degrees(dihedral_angle(a, b, c, d))
