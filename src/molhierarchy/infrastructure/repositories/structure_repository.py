# src/molhierarchy/infrastructure/repositories/structure_repository.py
"""Repository implementation for molecular structures."""

import logging
import os
from typing import Dict, Iterator, List, Optional, Tuple

from Bio.PDB.PDBParser import PDBParser

from ...core.domain.interfaces.bond_inferrer import BondInferrer
from ...core.domain.models.molecular_graph import MolecularGraph
from ...core.interfaces.repository import Repository
from ..adapters.biopython_adapter import BiopythonAdapter

logger = logging.getLogger(__name__)

# Fixed-width serial columns of a CONECT record.
CONECT_FIELDS = ((6, 11), (11, 16), (16, 21), (21, 26), (26, 31))


def read_conect(file_path: str) -> List[Tuple[int, int]]:
    """
    Read CONECT records as (serial, serial) pairs.

    Args:
        file_path: Path to a PDB file

    Returns:
        Each bonded pair once, lower serial first
    """
    pairs = set()
    with open(file_path) as handle:
        for line in handle:
            if not line.startswith("CONECT"):
                continue
            serials = list(_conect_serials(line))
            if not serials:
                continue
            origin, partners = serials[0], serials[1:]
            for partner in partners:
                if partner != origin:
                    pairs.add((min(origin, partner), max(origin, partner)))
    return sorted(pairs)


def _conect_serials(line: str) -> Iterator[int]:
    for start, end in CONECT_FIELDS:
        text = line[start:end].strip()
        if text:
            yield int(text)


class StructureRepository(Repository[MolecularGraph]):
    """Repository for reading molecular structures from a directory of PDB files."""

    def __init__(self, data_dir: str, inferrer: Optional[BondInferrer] = None):
        """
        Initialize repository with data directory.

        Args:
            data_dir: Directory containing structure files
            inferrer: Bond inference used for files without CONECT records
        """
        self._data_dir = data_dir
        self._parser = PDBParser(QUIET=True)
        self._adapter = BiopythonAdapter()
        self._inferrer = inferrer
        self._cache: Dict[str, MolecularGraph] = {}

    def get(self, id: str, model_index: int = 0) -> Optional[MolecularGraph]:
        """
        Load one model of a structure by ID.

        Args:
            id: Structure identifier (file name without ``.pdb``)
            model_index: Position of the model in the file

        Returns:
            MolecularGraph with bonds from CONECT records, or inferred from
            geometry when the file has none; None if the file does not exist
        """
        key = f"{id}:{model_index}"
        if key in self._cache:
            return self._cache[key]

        file_path = os.path.join(self._data_dir, f"{id}.pdb")
        if not os.path.exists(file_path):
            return None

        structure = self._parser.get_structure(id, file_path)
        records = self._adapter.to_records(structure, model_index)
        bonds = None
        conect = read_conect(file_path)
        if conect:
            index_of = {record.serial: record.index for record in records}
            bonds = [
                (index_of[first], index_of[second])
                for first, second in conect
                if first in index_of and second in index_of
            ]
            logger.debug("Read %d CONECT bonds from %s", len(bonds), file_path)

        graph = MolecularGraph.from_records(
            records, bonds=bonds, inferrer=self._inferrer, model_num=model_index + 1
        )
        self._cache[key] = graph
        return graph

    def list(self) -> List[str]:
        """
        List all available structures.

        Returns:
            Sorted structure IDs of the ``.pdb`` files in the data directory
        """
        return sorted(
            os.path.splitext(file_name)[0]
            for file_name in os.listdir(self._data_dir)
            if file_name.endswith(".pdb")
        )
