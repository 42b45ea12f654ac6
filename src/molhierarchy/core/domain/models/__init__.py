"""Domain model classes."""

from .atom import Atom, AtomRecord
from .atom_pool import AtomPool
from .bond import Bond, BondType
from .valence_term import Angle, Dihedral
from .residue import Residue, ResidueType
from .polymer import Polymer
from .molecule import Molecule
from .joint import Joint
from .assembly import Assembly
from .molecular_graph import MolecularGraph

__all__ = [
    "Atom",
    "AtomRecord",
    "AtomPool",
    "Bond",
    "BondType",
    "Angle",
    "Dihedral",
    "Residue",
    "ResidueType",
    "Polymer",
    "Molecule",
    "Joint",
    "Assembly",
    "MolecularGraph",
]
