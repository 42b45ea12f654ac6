"""Bond inference by comparing every pair of atoms."""

import logging
from typing import List, Sequence, Tuple

import numpy as np
from scipy.spatial.distance import pdist, squareform

from ..interfaces.bond_inferrer import BondInferrer
from ..models.atom import Atom

logger = logging.getLogger(__name__)


class PairwiseBondInferrer(BondInferrer):
    """O(n^2) bond inference over the full distance matrix."""

    def find_pairs(self, atoms: Sequence[Atom]) -> List[Tuple[int, int]]:
        if len(atoms) < 2:
            return []
        coords = np.array([atom.coordinates for atom in atoms])
        radii = np.array([atom.radius for atom in atoms], dtype=np.float64)

        distances = squareform(pdist(coords))
        cutoffs = self.buffer + radii[:, None] / 2 + radii[None, :] / 2
        bonded = np.triu(distances < cutoffs, k=1)

        pairs = [(int(i), int(j)) for i, j in np.argwhere(bonded)]
        logger.debug("Found %d bonded pairs among %d atoms", len(pairs), len(atoms))
        return pairs
