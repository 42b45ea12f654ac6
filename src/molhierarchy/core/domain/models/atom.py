#!/usr/bin/env python3
# src/molhierarchy/core/domain/models/atom.py

"""
Domain model representing an atom in a molecular structure.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Iterator, List, Optional, Tuple

import numpy as np

from .. import elements
from ...geometry import as_vector
from ....exceptions import InvariantViolation
from .node import Node, NodeKind

if TYPE_CHECKING:
    from .bond import Bond


@dataclass
class AtomRecord:
    """One atom as supplied by a loader, before any graph is built."""

    index: int
    element: str
    coordinates: Tuple[float, float, float]
    name: str = ""
    residue_name: Optional[str] = None
    residue_id: Optional[int] = None
    insertion_code: Optional[str] = None
    chain_id: Optional[str] = None
    serial: Optional[int] = None


@dataclass(eq=False)
class Atom(Node):
    """Represents an atom in a molecular structure.

    Atoms compare and hash by identity. ``index`` must be unique within one
    classification pool.
    """

    index: int
    element: str
    coordinates: np.ndarray
    name: str = ""
    residue_name: Optional[str] = None
    residue_id: Optional[int] = None
    insertion_code: Optional[str] = None
    chain_id: Optional[str] = None
    serial: Optional[int] = None
    radius: Optional[float] = None
    bonds: List["Bond"] = field(default_factory=list, repr=False)
    parent: Optional[Any] = field(default=None, repr=False)

    kind: ClassVar[NodeKind] = NodeKind.ATOM

    def __post_init__(self):
        self.element = elements.normalize_symbol(self.element)
        self.coordinates = as_vector(self.coordinates)
        if self.radius is None:
            self.radius = elements.bonding_radius(self.atomic_number)

    @classmethod
    def from_record(cls, record: AtomRecord) -> "Atom":
        return cls(
            index=record.index,
            element=record.element,
            coordinates=record.coordinates,
            name=record.name,
            residue_name=record.residue_name,
            residue_id=record.residue_id,
            insertion_code=record.insertion_code,
            chain_id=record.chain_id,
            serial=record.serial,
        )

    @property
    def atomic_number(self) -> int:
        return elements.atomic_number(self.element)

    @property
    def has_known_element(self) -> bool:
        return self.atomic_number > 0

    @property
    def mass(self) -> float:
        return elements.mass(self.atomic_number)

    @property
    def label(self) -> str:
        """Atom name, or element plus index for unnamed atoms."""
        return self.name or f"{self.element}{self.index}"

    @property
    def num_bonds(self) -> int:
        return len(self.bonds)

    @property
    def is_dangling(self) -> bool:
        """True if the atom has fewer bonds than its element usually forms."""
        valence = elements.VALENCES.get(self.atomic_number)
        return valence is not None and valence > len(self.bonds)

    def neighbors(self) -> Iterator["Atom"]:
        """Yield bonded atoms in bond order."""
        for bond in self.bonds:
            yield bond.other(self)

    def bond_to(self, other: "Atom") -> Optional["Bond"]:
        for bond in self.bonds:
            if bond.other(self) is other:
                return bond
        return None

    def is_bonded_to(self, other: "Atom") -> bool:
        return self.bond_to(other) is not None

    def add_bond(self, bond: "Bond") -> None:
        """
        Register an incident bond.

        Raises:
            InvariantViolation: If the bond does not involve this atom or the
                atom is already bonded to the same partner
        """
        if self is not bond.atom1 and self is not bond.atom2:
            raise InvariantViolation(f"{bond} is not incident to atom {self.index}")
        partner = bond.other(self)
        if self.is_bonded_to(partner):
            raise InvariantViolation(
                f"Atoms {self.index} and {partner.index} are already bonded"
            )
        self.bonds.append(bond)

    def get_coord(self) -> np.ndarray:
        """Coordinates, under the accessor name Bio.PDB.NeighborSearch expects."""
        return self.coordinates

    def move(self, delta) -> None:
        self.coordinates = self.coordinates + as_vector(delta)
