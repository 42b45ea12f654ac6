# src/molhierarchy/core/domain/models/node.py
"""
Node kinds of the structural hierarchy.
"""

from enum import Enum, unique


@unique
class NodeKind(str, Enum):
    """Kinds of node a container may be asked to hold."""

    ATOM = "atom"
    RESIDUE = "residue"
    POLYMER = "polymer"
    MOLECULE = "molecule"


class Node:
    """Mixin for anything that can be placed into a container."""

    kind: NodeKind

    def add_to(self, container) -> None:
        """Place this node into ``container`` (dispatches on ``kind``)."""
        container.add(self)
