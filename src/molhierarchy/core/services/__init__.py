"""Core business logic services."""

from .backbone_search import BackboneSearch
from .classification_service import ClassificationService
from .residue_segmentation import ResidueSegmenter

__all__ = [
    "BackboneSearch",
    "ClassificationService",
    "ResidueSegmenter",
]
