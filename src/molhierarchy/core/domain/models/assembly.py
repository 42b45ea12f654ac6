#!/usr/bin/env python3
# src/molhierarchy/core/domain/models/assembly.py

"""
Root of the structural hierarchy.
"""

import string
from typing import Dict, Iterator, List, Optional, Set, Tuple

import numpy as np

from ...geometry import as_vector
from .atom import Atom
from .bond import Bond
from .group import Group
from .joint import Joint, build_joints
from .molecule import Molecule
from .node import Node, NodeKind
from .polymer import Polymer
from .residue import Residue


def polymer_name(number: int) -> str:
    """Chain name for the ``number``-th polymer (0-based): A..Z, A1..Z1, A2, ..."""
    letters = string.ascii_uppercase
    letter = letters[number % len(letters)]
    cycle = number // len(letters)
    return f"{letter}{cycle}" if cycle else letter


class Assembly(Group):
    """Polymers, hetero molecules, ions and water of one structure.

    Polymers live in ``polymers``; molecules are filed on ``add`` by
    composition into ``ions`` (one atom), ``water`` or ``molecules``.
    ``joints`` hold the terms bridging different top-level containers.
    """

    def __init__(self, name: str = "assembly", bonds_known: bool = True):
        super().__init__(name, bonds_known)
        self.polymers: List[Polymer] = []
        self.molecules: List[Molecule] = []
        self.ions: List[Molecule] = []
        self.water: List[Molecule] = []
        self.joints: List[Joint] = []

    def __repr__(self) -> str:
        return (
            f"Assembly({self.name!r}, polymers={len(self.polymers)}, "
            f"molecules={len(self.molecules)}, ions={len(self.ions)}, "
            f"water={len(self.water)})"
        )

    def _handlers(self) -> Dict:
        return {
            NodeKind.ATOM: self._add_atom,
            NodeKind.RESIDUE: self._add_residue,
            NodeKind.POLYMER: self._add_polymer,
            NodeKind.MOLECULE: self._add_molecule,
        }

    def _add_atom(self, atom: Atom) -> None:
        """Place an atom in the residue its loader hints name."""
        if atom.residue_id is None or not atom.residue_name:
            raise ValueError(f"Atom {atom.index} carries no residue hints")
        polymer = self.get_polymer(atom.chain_id or "A", create=True)
        residue = polymer.get_residue_by(
            atom.residue_name,
            atom.residue_id,
            create=True,
            insertion_code=atom.insertion_code,
        )
        residue.add(atom)

    def _add_residue(self, residue: Residue) -> None:
        chain = next((atom.chain_id for atom in residue.atoms if atom.chain_id), "A")
        self.get_polymer(chain, create=True).add(residue)

    def _add_polymer(self, polymer: Polymer) -> None:
        if polymer.parent is self:
            return
        polymer.parent = self
        self.polymers.append(polymer)

    def _add_molecule(self, molecule: Molecule) -> None:
        if molecule.parent is self:
            return
        molecule.parent = self
        if molecule.is_ion:
            self.ions.append(molecule)
        elif molecule.is_water:
            self.water.append(molecule)
        else:
            self.molecules.append(molecule)

    def get_polymer(self, name: str, create: bool = False) -> Optional[Polymer]:
        for polymer in self.polymers:
            if polymer.name == name:
                return polymer
        if not create:
            return None
        polymer = Polymer(name, bonds_known=self.bonds_known)
        self.add(polymer)
        return polymer

    def containers(self) -> List[Group]:
        """Top-level containers: polymers, then molecules, ions and water."""
        return [*self.polymers, *self.molecules, *self.ions, *self.water]

    def collections(self) -> Dict[str, List[Group]]:
        """Named sub-collections, omitting empty ones."""
        named = {
            "Polymers": self.polymers,
            "Molecules": self.molecules,
            "Ions": self.ions,
            "Water": self.water,
        }
        return {name: list(items) for name, items in named.items() if items}

    @property
    def atoms(self) -> List[Atom]:
        return [atom for container in self.containers() for atom in container.atoms]

    @property
    def residues(self) -> List[Residue]:
        return [residue for polymer in self.polymers for residue in polymer.residues]

    @property
    def chain_names(self) -> List[str]:
        return [polymer.name for polymer in self.polymers]

    def walk(self) -> Iterator[Tuple[int, Node]]:
        """
        Depth-first traversal of the hierarchy.

        Yields:
            (depth, node) pairs; containers precede their children
        """
        for container in self.containers():
            yield 0, container
            if isinstance(container, Polymer):
                for residue in container.residues:
                    yield 1, residue
                    for atom in residue.atoms:
                        yield 2, atom
            else:
                for atom in container.atoms:
                    yield 1, atom

    def _finalize(self, force: bool, inferrer) -> None:
        self._remove_empty()
        for container in self.containers():
            container.finalize(force, inferrer)
        seen: Set[Tuple] = set()
        for polymer in self.polymers:
            for joint in polymer.joints:
                seen.update(joint.signatures)
        self.joints = build_joints(self.cross_bonds(), seen, owner=self.top_level)
        self.update_center()

    def _remove_empty(self) -> None:
        for polymer in self.polymers:
            polymer.residues = [residue for residue in polymer.residues if residue.atoms]
        for attribute in ("polymers", "molecules", "ions", "water"):
            kept = [group for group in getattr(self, attribute) if group.atoms]
            setattr(self, attribute, kept)

    def top_level(self, atom: Atom) -> Optional[Group]:
        """The polymer or molecule that contains ``atom``."""
        parent = atom.parent
        while parent is not None and parent.parent is not self:
            parent = parent.parent
        return parent

    def cross_bonds(self) -> List[Bond]:
        """Bonds between atoms of different top-level containers, each once."""
        seen: Set[int] = set()
        bonds = []
        for atom in self.atoms:
            owner = self.top_level(atom)
            for bond in atom.bonds:
                if id(bond) in seen:
                    continue
                partner = self.top_level(bond.other(atom))
                if partner is None or partner is owner:
                    continue
                seen.add(id(bond))
                bonds.append(bond)
        return bonds

    def center_at(self, point) -> None:
        """Translate every atom so the centre of geometry lies at ``point``."""
        delta = as_vector(point) - self.update_center()
        for atom in self.atoms:
            atom.move(delta)
        for container in self.containers():
            if container.center is not None:
                container.center = container.center + delta
            if isinstance(container, Polymer):
                for residue in container.residues:
                    if residue.center is not None:
                        residue.center = residue.center + delta
        self.center = as_vector(point)

    def extent(self) -> float:
        """Largest distance of any atom from the centre of geometry."""
        atoms = self.atoms
        if not atoms:
            return 0.0
        coords = np.array([atom.coordinates for atom in atoms])
        middle = coords.mean(axis=0)
        return float(np.linalg.norm(coords - middle, axis=1).max())
