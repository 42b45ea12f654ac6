#!/usr/bin/env python3
# src/molhierarchy/core/domain/models/polymer.py

"""
Domain model for a polymer chain: ordered residues plus the joints between them.
"""

from typing import Dict, List, Optional, Set, Tuple

from .atom import Atom
from .bond import Bond
from .group import Group, _default_inferrer
from .joint import Joint, build_joints
from .node import NodeKind
from .residue import Residue, ResidueType, residue_type_of
from .valence_term import Dihedral

PHI_NAMES = ("C", "N", "CA", "C")
PSI_NAMES = ("N", "CA", "C", "N")


class Polymer(Group):
    """An ordered chain of residues.

    Args:
        name: Chain name
        link: Build joints between bonded residues on finalize
        bonds_known: False when bonds between residues must be inferred
    """

    kind = NodeKind.POLYMER

    def __init__(self, name: str, link: bool = True, bonds_known: bool = True):
        super().__init__(name, bonds_known)
        self.link = link
        self.residues: List[Residue] = []
        self.joints: List[Joint] = []

    def __repr__(self) -> str:
        return f"Polymer({self.name!r}, residues={len(self.residues)})"

    def _handlers(self) -> Dict:
        return {NodeKind.RESIDUE: self._add_residue}

    def _add_residue(self, residue: Residue) -> None:
        if residue.parent is self:
            return
        residue.parent = self
        self.residues.append(residue)

    def insert(self, position: int, residue: Residue) -> None:
        """Insert ``residue`` at ``position`` in chain order."""
        residue.parent = self
        self.residues.insert(position, residue)
        self.invalidate()

    @property
    def atoms(self) -> List[Atom]:
        return [atom for residue in self.residues for atom in residue.atoms]

    @property
    def residue_type(self) -> ResidueType:
        types = {residue.residue_type for residue in self.residues}
        types.discard(ResidueType.UNKNOWN)
        return types.pop() if len(types) == 1 else ResidueType.UNKNOWN

    @property
    def sequence(self) -> str:
        return "".join(residue.one_letter for residue in self.residues)

    def renumber(self, start: int = 1) -> None:
        """Number residues consecutively from ``start``, clearing insertion codes."""
        for number, residue in enumerate(self.residues, start):
            residue.number = number
            residue.insertion_code = None

    def get_residue(self, number: int, insertion_code: Optional[str] = None) -> Optional[Residue]:
        for residue in self.residues:
            if residue.number == number and residue.insertion_code == insertion_code:
                return residue
        return None

    def get_residue_by(
        self,
        name: str,
        number: int,
        create: bool = False,
        insertion_code: Optional[str] = None,
    ) -> Optional[Residue]:
        """
        Find the residue with the given name, number and insertion code.

        A residue that shares the number and insertion code but has another
        name is a different residue, so ``create`` adds a new one beside it.

        Args:
            name: Residue name
            number: Residue number
            create: Create (and append) the residue if it does not exist
            insertion_code: PDB insertion code, None when absent

        Returns:
            The residue, or None if absent and ``create`` is False
        """
        for residue in self.residues:
            if (
                residue.name == name
                and residue.number == number
                and residue.insertion_code == insertion_code
            ):
                return residue
        if not create:
            return None
        residue = Residue(
            name,
            number,
            residue_type_of(name),
            bonds_known=self.bonds_known,
            insertion_code=insertion_code,
        )
        self.add(residue)
        return residue

    def _finalize(self, force: bool, inferrer) -> None:
        for residue in self.residues:
            residue.finalize(force, inferrer)
        self.joints = []
        if self.link:
            if not self.bonds_known:
                self._bond_adjacent_residues(inferrer)
            self.joints = build_joints(self.cross_bonds())
        self.update_center()

    def _bond_adjacent_residues(self, inferrer) -> None:
        inferrer = _default_inferrer(inferrer)
        for previous, current in zip(self.residues, self.residues[1:]):
            inferrer.infer(previous.atoms + current.atoms)

    def cross_bonds(self) -> List[Bond]:
        """Bonds between two different residues of this polymer, each once."""
        members = set(self.residues)
        seen: Set[int] = set()
        bonds = []
        for residue in self.residues:
            for atom in residue.atoms:
                for bond in atom.bonds:
                    partner = bond.other(atom).parent
                    if partner is residue or partner not in members or id(bond) in seen:
                        continue
                    seen.add(id(bond))
                    bonds.append(bond)
        return bonds

    def phi_psi(self) -> Tuple[List[Dihedral], List[Dihedral]]:
        """
        Backbone phi and psi dihedrals among the joint terms.

        Matching relies on PDB atom names (C, N, CA), so chains built from
        unnamed atoms yield empty lists.
        """
        phi, psi = [], []
        for joint in self.joints:
            for dihedral in joint.dihedrals:
                names = dihedral.names
                if names in (PHI_NAMES, PHI_NAMES[::-1]):
                    phi.append(dihedral)
                elif names in (PSI_NAMES, PSI_NAMES[::-1]):
                    psi.append(dihedral)
        return phi, psi
