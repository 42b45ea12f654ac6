"""Core domain models and interfaces."""

from .models.molecular_graph import MolecularGraph
from .models.atom import Atom, AtomRecord
from .models.bond import Bond
from .interfaces.bond_inferrer import BondInferrer

__all__ = [
    "MolecularGraph",
    "Atom",
    "AtomRecord",
    "Bond",
    "BondInferrer",
]
