#!/usr/bin/env python3
# src/molhierarchy/core/domain/models/molecular_graph.py

"""
Domain model representing a molecular structure as a graph.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np

from .atom import Atom, AtomRecord
from .bond import Bond

logger = logging.getLogger(__name__)


class MolecularGraph:
    """Graph representation of a molecular structure."""

    def __init__(self, atoms: List[Atom], bonds: Optional[List[Bond]] = None, model_num: int = 1):
        """
        Initialize a MolecularGraph.

        Args:
            atoms: List of Atom objects
            bonds: List of Bond objects; collected from the atoms when omitted
            model_num: Model number of the source file
        """
        self.atoms = atoms
        self.bonds = bonds if bonds is not None else self._collect_bonds(atoms)
        self.model_num = model_num

    @classmethod
    def from_records(
        cls,
        records: Sequence[AtomRecord],
        bonds: Optional[Iterable[Tuple[int, int]]] = None,
        inferrer=None,
        model_num: int = 1,
    ) -> "MolecularGraph":
        """
        Build a graph from loader records.

        Args:
            records: Atom records in file order
            bonds: Explicit bonds as (index, index) pairs; when None, bonds
                are inferred from geometry
            inferrer: BondInferrer used when ``bonds`` is None
            model_num: Model number of the source file

        Returns:
            MolecularGraph with every bond registered on its atoms
        """
        atoms = [Atom.from_record(record) for record in records]
        for atom in atoms:
            if not atom.has_known_element:
                logger.warning(
                    "Atom %d (%s) has unknown element %r",
                    atom.index,
                    atom.label,
                    atom.element,
                )

        if bonds is None:
            if inferrer is None:
                from ..implementations.pairwise_bond_inferrer import (
                    PairwiseBondInferrer,
                )

                inferrer = PairwiseBondInferrer()
            inferrer.infer(atoms)
        else:
            by_index = {atom.index: atom for atom in atoms}
            for first, second in bonds:
                atom1, atom2 = by_index.get(first), by_index.get(second)
                if atom1 is None or atom2 is None:
                    raise ValueError(f"Bond ({first}, {second}) references a missing atom")
                if not atom1.is_bonded_to(atom2):
                    Bond(atom1, atom2)

        return cls(atoms, model_num=model_num)

    @staticmethod
    def _collect_bonds(atoms: Iterable[Atom]) -> List[Bond]:
        seen = set()
        bonds = []
        for atom in atoms:
            for bond in atom.bonds:
                if id(bond) not in seen:
                    seen.add(id(bond))
                    bonds.append(bond)
        return bonds

    def get_coordinates(self) -> np.ndarray:
        """Get coordinates of all atoms in the graph.

        Returns:
            numpy array of shape (n_atoms, 3) containing xyz coordinates
        """
        return np.array([atom.coordinates for atom in self.atoms]).reshape(-1, 3)

    def to_networkx(self) -> nx.Graph:
        """Bond graph with atom indices as nodes and the Atom under "atom"."""
        graph = nx.Graph()
        for atom in self.atoms:
            graph.add_node(atom.index, atom=atom, element=atom.element)
        for bond in self.bonds:
            if bond.atom1.index not in graph or bond.atom2.index not in graph:
                continue
            graph.add_edge(bond.atom1.index, bond.atom2.index, order=bond.order)
        return graph

    def fragments(self) -> List[List[Atom]]:
        """
        Connected components of the bond graph.

        Returns:
            Lists of atoms in input order, ordered by their first atom
        """
        graph = self.to_networkx()
        position = {atom.index: i for i, atom in enumerate(self.atoms)}
        components = []
        for component in nx.connected_components(graph):
            ordered = sorted(component, key=position.__getitem__)
            components.append([graph.nodes[index]["atom"] for index in ordered])
        components.sort(key=lambda atoms: position[atoms[0].index])
        return components
