"""Fixtures that build small molecules atom by atom with explicit bonds."""

from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from molhierarchy.core.domain.models.atom import Atom
from molhierarchy.core.domain.models.bond import Bond


class MoleculeBuilder:
    """Creates atoms with unique indices and bonds them explicitly."""

    def __init__(self):
        self.atoms: List[Atom] = []

    def atom(self, element: str, name: str = "", coordinates=None, **hints) -> Atom:
        index = len(self.atoms)
        if coordinates is None:
            coordinates = (1.1 * index, 0.7 * (index % 3), 0.3 * (index % 5))
        atom = Atom(index, element, coordinates, name=name, **hints)
        self.atoms.append(atom)
        return atom

    def bond(self, atom1: Atom, atom2: Atom) -> Bond:
        return Bond(atom1, atom2)

    def chain(self, *atoms: Atom) -> None:
        for first, second in zip(atoms, atoms[1:]):
            self.bond(first, second)

    def hydrogens(self, atom: Atom, count: int) -> List[Atom]:
        added = []
        for i in range(count):
            hydrogen = self.atom("H", f"H{atom.name}{i + 1}")
            self.bond(atom, hydrogen)
            added.append(hydrogen)
        return added

    def amino_acid(
        self,
        side_chain: Sequence[Tuple[str, int]] = (),
        previous: Optional[Atom] = None,
        terminal: bool = False,
        ring_to_nitrogen: Optional[int] = None,
    ) -> Dict[str, Atom]:
        """
        Add one amino acid and return its backbone atoms by name.

        Args:
            side_chain: (element, parent) pairs; parent -1 is the alpha
                carbon, otherwise the position of an earlier side-chain atom
            previous: Carbonyl carbon of the preceding residue
            terminal: Add the C-terminal OXT oxygen
            ring_to_nitrogen: Side-chain position bonded back to the amine (proline)
        """
        nitrogen = self.atom("N", "N")
        if previous is not None:
            self.bond(previous, nitrogen)
        if ring_to_nitrogen is None:
            self.hydrogens(nitrogen, 2 if previous is None else 1)
        alpha = self.atom("C", "CA")
        self.bond(nitrogen, alpha)
        side = []
        for element, parent in side_chain:
            atom = self.atom(element, f"{element}{len(side) + 1}")
            self.bond(alpha if parent < 0 else side[parent], atom)
            side.append(atom)
        if ring_to_nitrogen is not None:
            self.bond(side[ring_to_nitrogen], nitrogen)
        self.hydrogens(alpha, 1 if side_chain else 2)
        carbonyl = self.atom("C", "C")
        self.bond(alpha, carbonyl)
        oxygen = self.atom("O", "O")
        self.bond(carbonyl, oxygen)
        if terminal:
            self.bond(carbonyl, self.atom("O", "OXT"))
        return {"N": nitrogen, "CA": alpha, "C": carbonyl, "O": oxygen}

    def nucleotide(
        self,
        base: str,
        rna: bool = False,
        previous_o3: Optional[Atom] = None,
    ) -> Dict[str, Atom]:
        """
        Add one nucleotide (phosphate, sugar and a base) and return its named atoms.

        Args:
            base: "C", "G" or "A"
            rna: Add the 2' hydroxyl
            previous_o3: O3' of the preceding nucleotide
        """
        phosphorus = self.atom("P", "P")
        if previous_o3 is not None:
            self.bond(previous_o3, phosphorus)
        self.bond(phosphorus, self.atom("O", "OP1"))
        self.bond(phosphorus, self.atom("O", "OP2"))
        o5 = self.atom("O", "O5'")
        self.bond(phosphorus, o5)
        c5 = self.atom("C", "C5'")
        self.bond(o5, c5)
        self.hydrogens(c5, 2)
        c4 = self.atom("C", "C4'")
        self.bond(c5, c4)
        self.hydrogens(c4, 1)
        o4 = self.atom("O", "O4'")
        self.bond(c4, o4)
        c3 = self.atom("C", "C3'")
        self.bond(c4, c3)
        self.hydrogens(c3, 1)
        o3 = self.atom("O", "O3'")
        self.bond(c3, o3)
        c2 = self.atom("C", "C2'")
        self.bond(c3, c2)
        if rna:
            self.hydrogens(c2, 1)
            o2 = self.atom("O", "O2'")
            self.bond(c2, o2)
            self.hydrogens(o2, 1)
        else:
            self.hydrogens(c2, 2)
        c1 = self.atom("C", "C1'")
        self.bond(c2, c1)
        self.bond(o4, c1)
        self.hydrogens(c1, 1)
        self.bond(c1, self._base(base))
        return {"P": phosphorus, "O5'": o5, "C5'": c5, "C4'": c4, "C3'": c3, "O3'": o3}

    def _base(self, base: str) -> Atom:
        """Build a base ring and return the nitrogen that bonds C1'."""
        if base == "C":
            n1, c2, o2, n3, c4, n4, c5, c6 = (
                self.atom(e, n)
                for e, n in (
                    ("N", "N1"), ("C", "C2"), ("O", "O2"), ("N", "N3"),
                    ("C", "C4"), ("N", "N4"), ("C", "C5"), ("C", "C6"),
                )
            )
            self.chain(n1, c2, n3, c4, c5, c6, n1)
            self.bond(c2, o2)
            self.bond(c4, n4)
            self.hydrogens(n4, 2)
            return n1

        n9, c8, n7, c5, c6, n1, c2, n3, c4 = (
            self.atom(e, n)
            for e, n in (
                ("N", "N9"), ("C", "C8"), ("N", "N7"), ("C", "C5"), ("C", "C6"),
                ("N", "N1"), ("C", "C2"), ("N", "N3"), ("C", "C4"),
            )
        )
        self.chain(n9, c8, n7, c5, c6, n1, c2, n3, c4, n9)
        self.bond(c4, c5)
        if base == "G":
            self.bond(c6, self.atom("O", "O6"))
            n2 = self.atom("N", "N2")
            self.bond(c2, n2)
            self.hydrogens(n2, 2)
        elif base == "A":
            n6 = self.atom("N", "N6")
            self.bond(c6, n6)
            self.hydrogens(n6, 2)
        else:
            raise ValueError(f"Unsupported base {base!r}")
        return n9


@pytest.fixture
def builder():
    return MoleculeBuilder()


def _polyglycine(builder: MoleculeBuilder, length: int) -> List[Dict[str, Atom]]:
    residues = []
    previous = None
    for i in range(length):
        residue = builder.amino_acid(previous=previous, terminal=i == length - 1)
        residues.append(residue)
        previous = residue["C"]
    return residues


@pytest.fixture
def polyglycine(builder):
    """Five bonded glycines; returns (builder, backbone atoms per residue)."""
    return builder, _polyglycine(builder, 5)


def _tripeptide(builder: MoleculeBuilder, side_chain, ring_to_nitrogen=None):
    first = builder.amino_acid()
    middle = builder.amino_acid(side_chain, previous=first["C"], ring_to_nitrogen=ring_to_nitrogen)
    last = builder.amino_acid(previous=middle["C"], terminal=True)
    backbone = [atom for residue in (first, middle, last) for atom in (residue["N"], residue["CA"], residue["C"])]
    return backbone


@pytest.fixture
def tripeptide(builder):
    """Factory for GLY-X-GLY; returns the N-CA-C backbone path."""

    def make(side_chain, ring_to_nitrogen=None):
        return _tripeptide(builder, side_chain, ring_to_nitrogen)

    return make


@pytest.fixture
def nucleic_acid(builder):
    """Factory for a linear nucleic acid; returns the per-nucleotide atom maps."""

    def make(bases: str, rna: bool = False):
        nucleotides = []
        previous = None
        for base in bases:
            atoms = builder.nucleotide(base, rna=rna, previous_o3=previous)
            nucleotides.append(atoms)
            previous = atoms["O3'"]
        return nucleotides

    return make


def backbone_of(nucleotides) -> List[Atom]:
    path = []
    for atoms in nucleotides:
        path.extend(atoms[name] for name in ("P", "O5'", "C5'", "C4'", "C3'", "O3'"))
    return path


@pytest.fixture
def nucleic_backbone():
    return backbone_of
