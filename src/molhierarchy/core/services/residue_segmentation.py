"""
Cutting a backbone path into residues and naming them by side-chain stoichiometry.

Amino acids repeat as N-CA-C; nucleotides as O5'-C5'-C4'-C3'-O3' followed
by a phosphorus. Each match is named from the element counts of its side
chain, and the residues at either end of the chain are found by walking the
graph outward from the first and last matches.
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ...exceptions import SegmentationError
from ..domain.elements import (
    CARBON,
    HYDROGEN,
    NITROGEN,
    OXYGEN,
    PHOSPHORUS,
    SULFUR,
)
from ..domain.models.atom import Atom
from ..domain.models.atom_pool import AtomPool
from ..domain.models.polymer import Polymer
from ..domain.models.residue import Residue, ResidueType, residue_type_of
from ..utils.chemistry import (
    carbons_with_oxygen,
    collect_atoms,
    count_co,
    find_alpha_carbon,
    find_bond_with,
    find_c5,
    find_carbonyl,
    find_cco,
    find_other_oxygen,
    forms_bonds_with,
    number_of_bonds_with,
)

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

AMINO_ACID_PATTERN = (NITROGEN, CARBON, CARBON)
NUCLEIC_ACID_PATTERN = (OXYGEN, CARBON, CARBON, CARBON, OXYGEN)

PATTERNS = MappingProxyType(
    {
        ResidueType.AMINO_ACID: AMINO_ACID_PATTERN,
        ResidueType.NUCLEIC_ACID: NUCLEIC_ACID_PATTERN,
    }
)

# Backbone atoms per repeating unit (nucleotides add the phosphorus).
STRIDES = MappingProxyType({ResidueType.AMINO_ACID: 3, ResidueType.NUCLEIC_ACID: 6})

# Element bins of a stoichiometry key, in key order. Hydrogens are ignored.
KEY_ELEMENTS = (("S", SULFUR), ("P", PHOSPHORUS), ("O", OXYGEN), ("N", NITROGEN), ("C", CARBON))

SIDE_CHAIN_RESIDUES = MappingProxyType(
    {
        # Amino acids
        "S1C3": "MET",
        "S1C1": "CYS",
        "O1C1": "SER",
        "O1C2": "THR",
        "O1C7": "TYR",
        "O2C2": "ASP",
        "O2C3": "GLU",
        "O1N1C2": "ASN",
        "O1N1C3": "GLN",
        "N3C4": "ARG",
        "N2C4": "HIS",
        "N1C9": "TRP",
        "N1C4": "LYS",
        "C7": "PHE",
        "H": "GLY",
        "C1": "ALA",
        # DNA
        "O2N3C6": "DC",
        "O1N5C7": "DA",
        "O3N2C7": "DT",
        # RNA
        "O3N5C7": "G",
        "O3N3C6": "C",
        "O4N2C6": "U",
    }
)

# Keys shared by two residues: (ring or RNA name, other name).
AMBIGUOUS_RESIDUES = MappingProxyType(
    {
        "C3": ("PRO", "VAL"),
        "C4": ("LEU", "ILE"),
        "O2N5C7": ("A", "DG"),
    }
)

_KEY_TERM = re.compile(r"([A-Z][a-z]?)(\d+)")


def stoichiometry_key(atoms: Iterable[Atom]) -> Optional[str]:
    """
    Element-count key of a side chain, e.g. "O1C2" for threonine.

    Args:
        atoms: Side-chain atoms

    Returns:
        The key, "H" when only hydrogens remain, or None when an atom is not
        one of H, C, N, O, P or S
    """
    binned = {number for _, number in KEY_ELEMENTS}
    counts = Counter()
    for atom in atoms:
        number = atom.atomic_number
        if number == HYDROGEN:
            continue
        if number not in binned:
            return None
        counts[number] += 1
    key = "".join(f"{symbol}{counts[number]}" for symbol, number in KEY_ELEMENTS if counts[number])
    return key or "H"


def parse_stoichiometry_key(key: str) -> Dict[str, int]:
    """
    Element counts encoded in a key; "H" decodes to no heavy atoms.

    Raises:
        ValueError: If ``key`` is not a well-formed stoichiometry key
    """
    if key == "H":
        return {}
    terms = _KEY_TERM.findall(key)
    if not terms or "".join(f"{s}{n}" for s, n in terms) != key:
        raise ValueError(f"Malformed stoichiometry key {key!r}")
    return {symbol: int(count) for symbol, count in terms}


@dataclass
class ResidueMatch:
    """A repeating unit found on the backbone, not yet claimed."""

    name: str
    residue_type: ResidueType
    key: str
    atoms: List[Atom] = field(default_factory=list)
    side_chain: List[Atom] = field(default_factory=list)

    @property
    def known(self) -> bool:
        return self.name != UNKNOWN


class ResidueSegmenter:
    """Divides backbone paths into named residues, claiming atoms from the pool."""

    def __init__(self, pool: AtomPool):
        self._pool = pool

    @staticmethod
    def chain_type(backbone: Sequence[Atom]) -> ResidueType:
        """
        Decide whether a backbone belongs to a nucleic acid or a protein.

        Raises:
            SegmentationError: If there are too few P or N atoms for either
        """
        counts = Counter(atom.atomic_number for atom in backbone)
        phosphorus, nitrogen = counts[PHOSPHORUS], counts[NITROGEN]
        if phosphorus >= nitrogen and phosphorus > 1:
            return ResidueType.NUCLEIC_ACID
        if nitrogen > phosphorus and nitrogen > 2:
            return ResidueType.AMINO_ACID
        raise SegmentationError(
            f"Backbone of {len(backbone)} atoms has {nitrogen} N and {phosphorus} P"
        )

    def match(
        self, start: int, backbone: Sequence[Atom], chain_type: ResidueType
    ) -> Optional[ResidueMatch]:
        """
        Match one repeating unit at ``start``.

        Args:
            start: Offset of the unit's first atom in ``backbone``
            backbone: Backbone path
            chain_type: AMINO_ACID or NUCLEIC_ACID

        Returns:
            The match, or None if the atoms do not fit the unit pattern
        """
        pattern = PATTERNS[chain_type]
        end = start + len(pattern)
        if start < 0 or end > len(backbone):
            return None
        units = list(backbone[start:end])
        if chain_type is ResidueType.AMINO_ACID:
            if forms_bonds_with(units[1], OXYGEN) or not forms_bonds_with(units[2], OXYGEN):
                return None
        if any(atom.atomic_number != number for atom, number in zip(units, pattern)):
            return None

        stop = []
        if start > 0:
            stop.append(backbone[start - 1])
        if end < len(backbone):
            stop.append(backbone[end])
        atoms = collect_atoms(units[0], self._pool, stop)

        if chain_type is ResidueType.AMINO_ACID:
            side_chain = collect_atoms(units[1], self._pool, units)[1:]
        else:
            nitrogen = next((atom for atom in atoms if atom.atomic_number == NITROGEN), None)
            if nitrogen is None:
                return None
            side_chain = collect_atoms(nitrogen, self._pool, units)

        key = stoichiometry_key(side_chain)
        if key is None:
            return None
        name = self._name(key, units)
        if name is None:
            return None
        residue_type = ResidueType.UNKNOWN if name == UNKNOWN else residue_type_of(name)
        return ResidueMatch(name, residue_type, key, atoms, side_chain)

    @staticmethod
    def _name(key: str, units: List[Atom]) -> Optional[str]:
        name = SIDE_CHAIN_RESIDUES.get(key)
        if name is not None:
            return name
        if key not in AMBIGUOUS_RESIDUES:
            return UNKNOWN
        first, second = AMBIGUOUS_RESIDUES[key]
        if key == "O2N5C7":
            # RNA carries O2' next to C3', so its neighbours hold two oxygens.
            return first if count_co(units[3]) == 2 else second

        alpha, carbonyl = units[1], units[2]
        beta = next(
            (
                atom
                for atom in alpha.neighbors()
                if atom.atomic_number not in (NITROGEN, HYDROGEN) and atom is not carbonyl
            ),
            None,
        )
        if beta is None:
            return None
        # Proline and leucine have a beta carbon bonded to exactly two carbons.
        return first if number_of_bonds_with(beta, CARBON) == 2 else second

    def segment(self, backbone: Sequence[Atom], polymer: Polymer) -> List[Residue]:
        """
        Divide ``backbone`` into residues and add them to ``polymer``.

        Residues are claimed from the pool as they are found and numbered
        from 1 in chain order.

        Args:
            backbone: Path from BackboneSearch
            polymer: Empty polymer that receives the residues

        Returns:
            The residues in chain order

        Raises:
            SegmentationError: If no repeating unit can be found
        """
        chain_type = self.chain_type(backbone)
        backbone = list(backbone)
        start = self._find_start(backbone, chain_type, five_prime_check=True)
        if start is None:
            backbone.reverse()
            start = self._find_start(backbone, chain_type, five_prime_check=False)
        if start is None:
            raise SegmentationError(
                f"No {chain_type.value} unit found in a backbone of {len(backbone)} atoms"
            )

        if chain_type is ResidueType.AMINO_ACID:
            residues = self._segment_peptide(backbone, start)
        else:
            residues = self._segment_nucleotides(backbone, start)

        for number, residue in enumerate(residues, 1):
            residue.number = number
            polymer.add(residue)
        return residues

    def _find_start(
        self, backbone: List[Atom], chain_type: ResidueType, five_prime_check: bool
    ) -> Optional[int]:
        for i in range(len(backbone)):
            found = self.match(i, backbone, chain_type)
            if found is None or not found.known:
                continue
            if five_prime_check and chain_type is ResidueType.NUCLEIC_ACID:
                # Reading 5' to 3', the atom after O5' is C5' with one carbon neighbour.
                if number_of_bonds_with(backbone[i + 1], CARBON) != 1:
                    return None
            return i
        return None

    def _commit(self, found: Optional[ResidueMatch]) -> Optional[Residue]:
        if found is None:
            return None
        residue = Residue(found.name, residue_type=found.residue_type, side_chain_key=found.key)
        if not self._pool.claim_all(found.atoms, residue):
            return None
        return residue

    def _add_cap(self, end: Atom, seed: Atom, residue: Residue) -> None:
        """Give ``residue`` the unclaimed atoms beyond ``seed``, walking away from ``end``."""
        self._pool.claim_all(collect_atoms(seed, self._pool, [end])[1:], residue)

    def _add_phosphate(self, phosphorus: Atom, residue: Residue) -> None:
        """Give ``residue`` a phosphorus with its carbon-free oxygens and their hydrogens."""
        self._pool.claim(phosphorus, residue)
        for oxygen in phosphorus.neighbors():
            if oxygen.atomic_number != OXYGEN or forms_bonds_with(oxygen, CARBON):
                continue
            self._pool.claim(oxygen, residue)
            for hydrogen in oxygen.neighbors():
                if hydrogen.atomic_number == HYDROGEN:
                    self._pool.claim(hydrogen, residue)

    def _commit_terminal(
        self, terminal: Optional[Tuple[ResidueMatch, Atom, Atom]]
    ) -> Optional[Residue]:
        """Commit a terminal match and claim the cap beyond its outermost backbone atom."""
        if terminal is None:
            return None
        found, end, seed = terminal
        residue = self._commit(found)
        if residue is not None:
            self._add_cap(end, seed, residue)
        return residue

    def _segment_peptide(self, backbone: List[Atom], start: int) -> List[Residue]:
        chain_type = ResidueType.AMINO_ACID
        residues = []
        first = last = None
        for offset in range(start, len(backbone), STRIDES[chain_type]):
            residue = self._commit(self.match(offset, backbone, chain_type))
            if residue is None:
                continue
            if first is None:
                first = offset
            residues.append(residue)
            last = offset
        if not residues:
            raise SegmentationError("Peptide start did not yield a residue")

        n_terminal = self._commit_terminal(self._match_n_terminal(backbone[first]))
        if n_terminal is not None:
            residues.insert(0, n_terminal)
        else:
            self._add_cap(backbone[first + 1], backbone[first], residues[0])

        c_terminal = self._commit_terminal(self._match_c_terminal(backbone[last + 1]))
        if c_terminal is not None:
            residues.append(c_terminal)
        else:
            self._add_cap(backbone[last + 1], backbone[last + 2], residues[-1])
        return residues

    def _match_n_terminal(self, nitrogen: Atom) -> Optional[Tuple[ResidueMatch, Atom, Atom]]:
        """The residue before the first match: carbonyl, then alpha, then its amine."""
        carbonyl = find_carbonyl(nitrogen)
        alpha = find_alpha_carbon(carbonyl) if carbonyl is not None else None
        amine = find_bond_with(alpha, NITROGEN) if alpha is not None else None
        if amine is None:
            return None
        atoms = [amine, alpha, carbonyl, find_bond_with(carbonyl, NITROGEN)]
        found = self.match(0, atoms, ResidueType.AMINO_ACID)
        return (found, alpha, amine) if found is not None else None

    def _match_c_terminal(self, alpha: Atom) -> Optional[Tuple[ResidueMatch, Atom, Atom]]:
        """The residue after the last match: carbonyl, amine, alpha, carbonyl."""
        carbonyl = find_carbonyl(alpha)
        nitrogen = find_bond_with(carbonyl, NITROGEN) if carbonyl is not None else None
        next_alpha = find_alpha_carbon(nitrogen) if nitrogen is not None else None
        next_carbonyl = find_carbonyl(next_alpha) if next_alpha is not None else None
        if next_carbonyl is None:
            return None
        atoms = [carbonyl, nitrogen, next_alpha, next_carbonyl]
        found = self.match(1, atoms, ResidueType.AMINO_ACID)
        return (found, next_alpha, next_carbonyl) if found is not None else None

    def _segment_nucleotides(self, backbone: List[Atom], start: int) -> List[Residue]:
        chain_type = ResidueType.NUCLEIC_ACID
        residues = []
        first = last = None
        for offset in range(start, len(backbone), STRIDES[chain_type]):
            residue = self._commit(self.match(offset, backbone, chain_type))
            if residue is None:
                continue
            if offset > 0 and backbone[offset - 1].atomic_number == PHOSPHORUS:
                self._add_phosphate(backbone[offset - 1], residue)
            if first is None:
                first = offset
            residues.append(residue)
            last = offset
        if not residues:
            raise SegmentationError("Nucleotide start did not yield a residue")

        if first > 0:
            five_prime = self._commit_terminal(
                self._match_five_prime(backbone[first - 1], backbone[first])
            )
            if five_prime is not None:
                residues.insert(0, five_prime)

        if last + 5 < len(backbone):
            phosphorus = backbone[last + 5]
            three_prime = self._commit_terminal(
                self._match_three_prime(phosphorus, backbone[last + 4])
            )
            if three_prime is not None:
                self._add_phosphate(phosphorus, three_prime)
                residues.append(three_prime)
        return residues

    def _match_five_prime(
        self, phosphorus: Atom, oxygen: Atom
    ) -> Optional[Tuple[ResidueMatch, Atom, Atom]]:
        """The nucleotide 5' of ``phosphorus``, walking O3' -> C3' -> C4' -> C5' -> O5'."""
        o3 = find_other_oxygen(phosphorus, oxygen)
        c3 = find_bond_with(o3, CARBON) if o3 is not None else None
        if c3 is None:
            return None
        for c4 in carbons_with_oxygen(c3):
            c5 = find_c5(c4)
            if c5 is None:
                continue
            o5 = find_bond_with(c5, OXYGEN)
            if o5 is None:
                return None
            atoms = [o5, c5, c4, c3, o3, phosphorus]
            found = self.match(0, atoms, ResidueType.NUCLEIC_ACID)
            return (found, c5, o5) if found is not None else None
        return None

    def _match_three_prime(
        self, phosphorus: Atom, oxygen: Atom
    ) -> Optional[Tuple[ResidueMatch, Atom, Atom]]:
        """The nucleotide 3' of ``phosphorus``, walking O5' -> C5' -> C4' -> C3' -> O3'."""
        o5 = find_other_oxygen(phosphorus, oxygen)
        c5 = find_bond_with(o5, CARBON) if o5 is not None else None
        c4 = find_bond_with(c5, CARBON) if c5 is not None else None
        c3 = find_cco(c4) if c4 is not None else None
        o3 = find_bond_with(c3, OXYGEN) if c3 is not None else None
        if o3 is None:
            return None
        atoms = [phosphorus, o5, c5, c4, c3, o3]
        found = self.match(1, atoms, ResidueType.NUCLEIC_ACID)
        return (found, c3, o3) if found is not None else None
