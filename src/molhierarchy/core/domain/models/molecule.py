#!/usr/bin/env python3
# src/molhierarchy/core/domain/models/molecule.py

"""
Domain model for atoms that do not belong to a polymer.
"""

from typing import Dict, List

from ..elements import HYDROGEN, OXYGEN
from .atom import Atom
from .group import Group
from .node import NodeKind


class Molecule(Group):
    """An ion, a water or a hetero group."""

    kind = NodeKind.MOLECULE

    def __init__(self, name: str, bonds_known: bool = True):
        super().__init__(name, bonds_known)
        self._atoms: List[Atom] = []

    def _handlers(self) -> Dict:
        return {NodeKind.ATOM: lambda atom: self._claim(atom, self._atoms)}

    @property
    def atoms(self) -> List[Atom]:
        return list(self._atoms)

    @property
    def is_ion(self) -> bool:
        """A single atom with no bonds."""
        return len(self._atoms) == 1 and not self._atoms[0].bonds

    @property
    def is_water(self) -> bool:
        """One oxygen plus only hydrogens, with every hydrogen on that oxygen."""
        oxygens = [atom for atom in self._atoms if atom.atomic_number == OXYGEN]
        if len(oxygens) != 1 or len(self._atoms) == 1:
            return False
        others = [atom for atom in self._atoms if atom is not oxygens[0]]
        return all(
            atom.atomic_number == HYDROGEN and atom.is_bonded_to(oxygens[0])
            for atom in others
        )

    def remove(self, atom: Atom) -> None:
        self._release(atom, self._atoms)
