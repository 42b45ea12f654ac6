# src/molhierarchy/config.py
"""Settings shared by the inference services."""

from dataclasses import dataclass, fields
from typing import Any, Mapping

BOND_BUFFER = 0.7
SIDE_CHAIN_DEPTH = 7
MAX_CONSECUTIVE_CARBONS = 3

INFERRERS = ("pairwise", "neighbor-search")


@dataclass(frozen=True)
class InferenceSettings:
    """Tunable constants of bond inference and backbone search.

    Attributes:
        bond_buffer: Tolerance (Angstroms) added to the half radii of two atoms
        side_chain_depth: Path length after which side-chain rules apply
        max_consecutive_carbons: Longest carbon run accepted past the depth cap
        inferrer: Bond inference strategy, "pairwise" or "neighbor-search"
        partition_fragments: Classify each connected component separately
    """

    bond_buffer: float = BOND_BUFFER
    side_chain_depth: int = SIDE_CHAIN_DEPTH
    max_consecutive_carbons: int = MAX_CONSECUTIVE_CARBONS
    inferrer: str = "pairwise"
    partition_fragments: bool = False

    def __post_init__(self):
        if self.bond_buffer < 0:
            raise ValueError(f"bond_buffer must be non-negative, got {self.bond_buffer}")
        if self.side_chain_depth < 1:
            raise ValueError(
                f"side_chain_depth must be positive, got {self.side_chain_depth}"
            )
        if self.max_consecutive_carbons < 1:
            raise ValueError(
                "max_consecutive_carbons must be positive, "
                f"got {self.max_consecutive_carbons}"
            )
        if self.inferrer not in INFERRERS:
            raise ValueError(
                f"Unknown inferrer {self.inferrer!r}, expected one of {INFERRERS}"
            )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "InferenceSettings":
        """
        Build settings from a plain mapping, e.g. parsed JSON or CLI options.

        Args:
            values: Setting names mapped to values; missing names keep defaults

        Returns:
            InferenceSettings instance

        Raises:
            ValueError: If a key is not a known setting or a value is invalid
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")
        return cls(**dict(values))

    def make_inferrer(self):
        """Return the BondInferrer selected by ``inferrer``."""
        if self.inferrer == "neighbor-search":
            from .core.domain.implementations.neighbor_search_bond_inferrer import (
                NeighborSearchBondInferrer,
            )

            return NeighborSearchBondInferrer(buffer=self.bond_buffer)

        from .core.domain.implementations.pairwise_bond_inferrer import (
            PairwiseBondInferrer,
        )

        return PairwiseBondInferrer(buffer=self.bond_buffer)
