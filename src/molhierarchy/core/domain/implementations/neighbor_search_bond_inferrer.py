"""Bond inference backed by Biopython's k-d tree neighbour search."""

import logging
from typing import List, Sequence, Tuple

from Bio.PDB.NeighborSearch import NeighborSearch

from ...geometry import distance
from ..interfaces.bond_inferrer import BondInferrer
from ..models.atom import Atom

logger = logging.getLogger(__name__)


class NeighborSearchBondInferrer(BondInferrer):
    """Spatial-index bond inference with the same contract as the pairwise one.

    Candidates come from ``NeighborSearch.search_all`` at the largest possible
    cutoff; each candidate is then checked against its own pair cutoff.
    """

    def find_pairs(self, atoms: Sequence[Atom]) -> List[Tuple[int, int]]:
        if len(atoms) < 2:
            return []
        position = {id(atom): i for i, atom in enumerate(atoms)}
        radius = self.buffer + max(atom.radius for atom in atoms)

        search = NeighborSearch(list(atoms))
        pairs = set()
        for atom1, atom2 in search.search_all(radius, level="A"):
            if distance(atom1.coordinates, atom2.coordinates) < self.cutoff(atom1, atom2):
                i, j = sorted((position[id(atom1)], position[id(atom2)]))
                pairs.add((i, j))

        logger.debug("Found %d bonded pairs among %d atoms", len(pairs), len(atoms))
        return sorted(pairs)
