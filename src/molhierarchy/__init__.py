"""Classification of bonded atoms into polymers, residues and small molecules."""

from .config import InferenceSettings
from .core.domain.models.assembly import Assembly
from .core.domain.models.atom import Atom, AtomRecord
from .core.domain.models.molecular_graph import MolecularGraph
from .core.services.classification_service import ClassificationService
from .exceptions import (
    ContainerTypeError,
    HierarchyError,
    InvariantViolation,
    SegmentationError,
)

__version__ = "0.1.0"

__all__ = [
    "Assembly",
    "Atom",
    "AtomRecord",
    "ClassificationService",
    "ContainerTypeError",
    "HierarchyError",
    "InferenceSettings",
    "InvariantViolation",
    "MolecularGraph",
    "SegmentationError",
]
