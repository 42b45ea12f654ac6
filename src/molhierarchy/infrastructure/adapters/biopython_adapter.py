"""Adapter from Bio.PDB structures to loader records."""

from typing import List

from Bio.PDB.Structure import Structure

from ...core.domain.models.atom import AtomRecord


class BiopythonAdapter:
    """Adapter for Bio.PDB structure parsing results."""

    def to_records(self, structure: Structure, model_index: int = 0) -> List[AtomRecord]:
        """
        Convert one model of a parsed structure into atom records.

        Args:
            structure: Structure returned by a Bio.PDB parser
            model_index: Position of the model in the file

        Returns:
            Records in file order, indexed from 0

        Raises:
            IndexError: If the structure has no model at ``model_index``
        """
        models = list(structure)
        if not 0 <= model_index < len(models):
            raise IndexError(
                f"Structure {structure.id!r} has {len(models)} models, "
                f"no model {model_index}"
            )

        records = []
        for index, atom in enumerate(models[model_index].get_atoms()):
            residue = atom.get_parent()
            chain = residue.get_parent()
            _, number, insertion = residue.id
            records.append(
                AtomRecord(
                    index=index,
                    element=atom.element or atom.get_name()[:1],
                    coordinates=tuple(float(c) for c in atom.coord),
                    name=atom.get_name(),
                    residue_name=residue.get_resname().strip(),
                    residue_id=int(number),
                    insertion_code=insertion.strip() or None,
                    chain_id=chain.id.strip() or None,
                    serial=atom.get_serial_number(),
                )
            )
        return records
