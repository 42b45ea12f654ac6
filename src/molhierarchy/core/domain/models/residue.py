#!/usr/bin/env python3
# src/molhierarchy/core/domain/models/residue.py

"""
Domain model for one repeating unit of a polymer.
"""

from enum import Enum, unique
from types import MappingProxyType
from typing import Dict, List, Optional

from .atom import Atom
from .group import Group
from .node import NodeKind


@unique
class ResidueType(str, Enum):
    """Classification tag of a residue (and of a polymer chain)."""

    AMINO_ACID = "amino-acid"
    NUCLEIC_ACID = "nucleic-acid"
    UNKNOWN = "unknown"


AMINO_ACID_CODES = (
    "GLY ALA VAL LEU ILE SER THR CYS PRO PHE TYR TRP ASP ASN GLU GLN MET LYS "
    "ARG HIS HID HIE ORN AIB PCA FOR ACE NH2 NME UNK"
).split()

NUCLEIC_ACID_CODES = "A C G U DA DC DG DT MPO DPO TPO UNK".split()

ONE_LETTER = MappingProxyType(
    {
        "GLY": "G", "ALA": "A", "VAL": "V", "LEU": "L", "ILE": "I",
        "SER": "S", "THR": "T", "CYS": "C", "PRO": "P", "PHE": "F",
        "TYR": "Y", "TRP": "W", "ASP": "D", "ASN": "N", "GLU": "E",
        "GLN": "Q", "MET": "M", "LYS": "K", "ARG": "R", "HIS": "H",
        "HID": "H", "HIE": "H",
        "A": "A", "C": "C", "G": "G", "U": "U",
        "DA": "A", "DC": "C", "DG": "G", "DT": "T",
    }
)

# Residue names used by structure files that differ from the codes above.
_ALIASES = MappingProxyType(
    {
        "ADE": "A", "CYT": "C", "GUA": "G", "URA": "U", "THY": "DT",
        "RA": "A", "RC": "C", "RG": "G", "RU": "U", "T": "DT",
        "HSD": "HID", "HSE": "HIE", "CYX": "CYS",
    }
)


def resolve_code(name: str) -> Optional[str]:
    """Standard residue code for ``name``, or None if it is not recognised."""
    code = name.strip().upper()
    code = _ALIASES.get(code, code)
    if code in NUCLEIC_ACID_CODES or code in AMINO_ACID_CODES:
        return code
    return None


def residue_type_of(name: str) -> ResidueType:
    code = resolve_code(name)
    if code is None:
        return ResidueType.UNKNOWN
    if code in NUCLEIC_ACID_CODES:
        return ResidueType.NUCLEIC_ACID
    return ResidueType.AMINO_ACID


class Residue(Group):
    """A named, numbered container of atoms within a polymer."""

    kind = NodeKind.RESIDUE

    def __init__(
        self,
        name: str,
        number: int = 0,
        residue_type: Optional[ResidueType] = None,
        bonds_known: bool = True,
        side_chain_key: Optional[str] = None,
        insertion_code: Optional[str] = None,
    ):
        super().__init__(name, bonds_known)
        self.number = number
        self.insertion_code = insertion_code
        self.residue_type = residue_type or residue_type_of(name)
        self.side_chain_key = side_chain_key
        self._atoms: List[Atom] = []

    def __repr__(self) -> str:
        return f"Residue({self.name!r}, {self.label!r}, atoms={len(self._atoms)})"

    def _handlers(self) -> Dict:
        return {NodeKind.ATOM: lambda atom: self._claim(atom, self._atoms)}

    @property
    def atoms(self) -> List[Atom]:
        return list(self._atoms)

    @property
    def label(self) -> str:
        """Residue number with its insertion code, e.g. "52A"."""
        return f"{self.number}{self.insertion_code or ''}"

    @property
    def code(self) -> str:
        """Resolved residue code, "UNK" when the name is not a known residue."""
        return resolve_code(self.name) or "UNK"

    @property
    def one_letter(self) -> str:
        return ONE_LETTER.get(self.code, "X")

    def get_atom(self, name: str) -> Optional[Atom]:
        for atom in self._atoms:
            if atom.name == name:
                return atom
        return None

    def remove(self, atom: Atom) -> None:
        self._release(atom, self._atoms)
