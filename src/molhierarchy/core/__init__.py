"""Core domain models, interfaces and services for structure classification."""

from .domain.models.molecular_graph import MolecularGraph
from .domain.models.assembly import Assembly
from .domain.interfaces.bond_inferrer import BondInferrer
from .services.backbone_search import BackboneSearch
from .services.classification_service import ClassificationService
from .services.residue_segmentation import ResidueSegmenter

__all__ = [
    "MolecularGraph",
    "Assembly",
    "BondInferrer",
    "BackboneSearch",
    "ClassificationService",
    "ResidueSegmenter",
]
