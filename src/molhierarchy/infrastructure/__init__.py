"""Infrastructure implementations of core interfaces and adapters."""

from .adapters.biopython_adapter import BiopythonAdapter
from .repositories.structure_repository import StructureRepository

__all__ = [
    "BiopythonAdapter",
    "StructureRepository",
]
