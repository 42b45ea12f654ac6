#!/usr/bin/env python3
# src/molhierarchy/core/domain/models/group.py

"""
Base class of the hierarchy containers.
"""

from typing import Callable, Dict, List, Optional

import numpy as np

from ...geometry import center
from ....exceptions import ContainerTypeError, InvariantViolation
from ..valence import enumerate_angles, enumerate_dihedrals, internal_bonds
from .atom import Atom
from .bond import Bond
from .node import Node, NodeKind
from .valence_term import Angle, Dihedral


class Group(Node):
    """A named container of atoms with its own bonds, angles and dihedrals.

    ``add`` dispatches on the kind of the node through ``_handlers``;
    subclasses register the kinds they accept. ``finalize`` computes the
    valence terms once and is guarded by the ``finalized`` flag.
    """

    def __init__(self, name: str, bonds_known: bool = True):
        self.name = name
        self.bonds_known = bonds_known
        self.parent = None
        self.finalized = False
        self.bonds: List[Bond] = []
        self.angles: List[Angle] = []
        self.dihedrals: List[Dihedral] = []
        self.dangling_atoms: List[Atom] = []
        self.center: Optional[np.ndarray] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, atoms={len(self.atoms)})"

    def _handlers(self) -> Dict[NodeKind, Callable]:
        return {}

    def add(self, node: Node) -> None:
        """
        Add a child node.

        Raises:
            ContainerTypeError: If this container cannot hold nodes of that kind
        """
        handler = self._handlers().get(node.kind)
        if handler is None:
            raise ContainerTypeError(
                f"{type(self).__name__} cannot contain a {node.kind.value}"
            )
        handler(node)
        self.invalidate()

    @property
    def atoms(self) -> List[Atom]:
        raise NotImplementedError

    def _claim(self, atom: Atom, members: List[Atom]) -> None:
        if atom.parent is self:
            return
        if atom.parent is not None:
            raise InvariantViolation(
                f"Atom {atom.index} already belongs to {atom.parent!r}"
            )
        atom.parent = self
        members.append(atom)

    def _release(self, atom: Atom, members: List[Atom]) -> None:
        if atom.parent is not self:
            raise ValueError(f"Atom {atom.index} does not belong to {self!r}")
        members.remove(atom)
        atom.parent = None
        self.invalidate()

    def invalidate(self) -> None:
        """Clear the finalized flag of this group and of every group above it."""
        group = self
        while group is not None:
            group.finalized = False
            group = group.parent

    @property
    def molecular_weight(self) -> float:
        return sum(atom.mass for atom in self.atoms)

    def finalize(self, force: bool = False, inferrer=None) -> None:
        """
        Compute the valence terms of this container.

        Args:
            force: Rebuild even if the container was already finalized
            inferrer: BondInferrer used when bonds are not known; defaults to
                the pairwise inferrer
        """
        if self.finalized and not force:
            return
        self._finalize(force, inferrer)
        self.finalized = True

    def _finalize(self, force: bool, inferrer) -> None:
        if not self.bonds_known:
            _default_inferrer(inferrer).infer(self.atoms)
        self.collect_valence_terms()
        self.dangling_atoms = [atom for atom in self.atoms if atom.is_dangling]
        self.update_center()

    def collect_valence_terms(self) -> None:
        """Collect the bonds, angles and dihedrals whose atoms are all in this group."""
        self.bonds = internal_bonds(self.atoms)
        self.angles = enumerate_angles(self.bonds)
        self.dihedrals = enumerate_dihedrals(self.bonds)
        for term in (*self.bonds, *self.angles, *self.dihedrals):
            term.parent = self

    def update_center(self) -> np.ndarray:
        self.center = center([atom.coordinates for atom in self.atoms])
        return self.center

    def center_of_mass(self) -> np.ndarray:
        atoms = self.atoms
        return center([atom.coordinates for atom in atoms], [atom.mass for atom in atoms])


def _default_inferrer(inferrer):
    if inferrer is not None:
        return inferrer
    from ..implementations.pairwise_bond_inferrer import PairwiseBondInferrer

    return PairwiseBondInferrer()
