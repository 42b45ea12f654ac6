#!/usr/bin/env python3
# src/molhierarchy/core/domain/models/bond.py

"""
Domain model representing a chemical bond between atoms.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional

from ...geometry import distance
from ....exceptions import InvariantViolation
from .atom import Atom


class BondType(Enum):
    """Enumeration of possible bond types."""

    SINGLE = auto()
    DOUBLE = auto()
    TRIPLE = auto()
    AROMATIC = auto()
    UNKNOWN = auto()

    @classmethod
    def from_order(cls, order: int) -> "BondType":
        return {1: cls.SINGLE, 2: cls.DOUBLE, 3: cls.TRIPLE}.get(order, cls.UNKNOWN)


@dataclass(eq=False)
class Bond:
    """Represents a chemical bond between two atoms.

    Creating a bond registers it with both atoms, so the incident-bond sets
    stay symmetric.
    """

    atom1: Atom
    atom2: Atom
    order: int = 1
    parent: Optional[Any] = field(default=None, repr=False)

    def __post_init__(self):
        if self.atom1 is self.atom2:
            raise InvariantViolation(f"Atom {self.atom1.index} cannot bond to itself")
        if self.atom1.is_bonded_to(self.atom2):
            raise InvariantViolation(
                f"Atoms {self.atom1.index} and {self.atom2.index} are already bonded"
            )
        self.atom1.add_bond(self)
        self.atom2.add_bond(self)

    def __repr__(self) -> str:
        return f"Bond({self.atom1.label}-{self.atom2.label}, order={self.order})"

    @property
    def atoms(self):
        return (self.atom1, self.atom2)

    @property
    def bond_type(self) -> BondType:
        return BondType.from_order(self.order)

    @property
    def length(self) -> float:
        return distance(self.atom1.coordinates, self.atom2.coordinates)

    @property
    def label(self) -> str:
        return f"{self.atom1.label}-{self.atom2.label}"

    def contains(self, atom: Atom) -> bool:
        return atom is self.atom1 or atom is self.atom2

    def other(self, atom: Atom) -> Atom:
        """Return the partner of ``atom`` in this bond."""
        if atom is self.atom1:
            return self.atom2
        if atom is self.atom2:
            return self.atom1
        raise ValueError(f"Atom {atom.index} is not part of {self!r}")

    def common_atom(self, bond: "Bond") -> Optional[Atom]:
        """Atom shared with ``bond``, or None if the bonds do not touch."""
        if bond is self:
            return None
        for atom in self.atoms:
            if bond.contains(atom):
                return atom
        return None

    def other_atom(self, bond: "Bond") -> Optional[Atom]:
        """The atom of this bond that is not shared with ``bond``."""
        common = self.common_atom(bond)
        if common is None:
            return None
        return self.other(common)

    def forms_angle_with(self, bond: "Bond") -> bool:
        return self.common_atom(bond) is not None

    def same_group(self) -> bool:
        """True if both atoms belong to the same container."""
        return self.atom1.parent is not None and self.atom1.parent is self.atom2.parent
