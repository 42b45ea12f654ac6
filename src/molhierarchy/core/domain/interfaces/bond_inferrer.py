"""Interface for bond inference strategies."""

from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from ....config import BOND_BUFFER
from ..models.atom import Atom
from ..models.bond import Bond


class BondInferrer(ABC):
    """Abstract base class for distance-based bond inference strategies.

    Atoms i and j are bonded iff their distance is strictly less than
    ``buffer + radius_i / 2 + radius_j / 2``.
    """

    def __init__(self, buffer: float = BOND_BUFFER):
        self.buffer = buffer

    def cutoff(self, atom1: Atom, atom2: Atom) -> float:
        return self.buffer + atom1.radius / 2 + atom2.radius / 2

    @abstractmethod
    def find_pairs(self, atoms: Sequence[Atom]) -> List[Tuple[int, int]]:
        """
        Find the atom pairs within bonding distance.

        Args:
            atoms: Candidate atoms

        Returns:
            Sorted (i, j) positions into ``atoms`` with i < j
        """
        pass

    def infer(self, atoms: Sequence[Atom]) -> List[Bond]:
        """
        Create order-1 bonds for every pair within bonding distance.

        Pairs that are already bonded are left alone, so repeated calls add
        nothing.

        Args:
            atoms: Atoms to connect

        Returns:
            The newly created bonds
        """
        atoms = list(atoms)
        bonds = []
        for i, j in self.find_pairs(atoms):
            if not atoms[i].is_bonded_to(atoms[j]):
                bonds.append(Bond(atoms[i], atoms[j], order=1))
        return bonds
