"""Service that sorts atoms into polymers, hetero molecules, ions and water."""

import logging
from typing import Iterable, List, Optional

from ...config import InferenceSettings
from ...exceptions import SegmentationError
from ..domain.elements import HYDROGEN, NITROGEN
from ..domain.interfaces.bond_inferrer import BondInferrer
from ..domain.models.assembly import Assembly, polymer_name
from ..domain.models.atom import Atom
from ..domain.models.atom_pool import AtomPool
from ..domain.models.molecular_graph import MolecularGraph
from ..domain.models.molecule import Molecule
from ..domain.models.polymer import Polymer
from ..domain.models.residue import resolve_code
from ..utils.chemistry import collect_atoms, is_water_oxygen
from .backbone_search import BackboneSearch
from .residue_segmentation import ResidueSegmenter

logger = logging.getLogger(__name__)


def _is_nitrogen(atom: Atom) -> bool:
    return atom.atomic_number == NITROGEN


class ClassificationService:
    """Service that builds an Assembly from bonded atoms."""

    def __init__(
        self,
        settings: Optional[InferenceSettings] = None,
        inferrer: Optional[BondInferrer] = None,
    ):
        """
        Initialize service with inference settings.

        Args:
            settings: Search and inference constants; defaults are used when omitted
            inferrer: Bond inference strategy for containers whose bonds are
                not known; built from ``settings`` when omitted
        """
        self._settings = settings or InferenceSettings()
        self._inferrer = inferrer or self._settings.make_inferrer()

    @property
    def settings(self) -> InferenceSettings:
        return self._settings

    def classify(
        self, atoms: Iterable[Atom], name: str = "assembly", finalize: bool = True
    ) -> Assembly:
        """
        Classify every atom into exactly one container.

        Args:
            atoms: Bonded atoms that belong to no container yet
            name: Name of the resulting assembly
            finalize: Compute valence terms and joints before returning

        Returns:
            Assembly holding every input atom
        """
        assembly = Assembly(name)
        self._classify_into(list(atoms), assembly)
        if finalize:
            assembly.finalize(inferrer=self._inferrer)
        self._log_summary(assembly)
        return assembly

    def assemble_from_hints(
        self,
        atoms: Iterable[Atom],
        name: str = "assembly",
        bonds_known: bool = True,
        finalize: bool = True,
    ) -> Assembly:
        """
        Build an assembly from the chain and residue labels of the input file.

        Atoms whose residue name is a standard residue code are placed in the
        chain and residue they name; all other atoms are classified from the
        bond graph.

        Args:
            atoms: Atoms with loader hints
            name: Name of the resulting assembly
            bonds_known: False when the atoms carry no bonds; bonds are then
                inferred within residues, between adjacent residues and among
                the unlabelled atoms
            finalize: Compute valence terms and joints before returning

        Returns:
            Assembly holding every input atom
        """
        assembly = Assembly(name, bonds_known=bonds_known)
        remaining = []
        for atom in atoms:
            if atom.residue_id is not None and atom.residue_name and resolve_code(atom.residue_name):
                assembly.add(atom)
            else:
                remaining.append(atom)
        logger.debug(
            "Placed %d atoms from hints, %d left to classify",
            len(assembly.atoms),
            len(remaining),
        )

        if remaining:
            if not bonds_known:
                self._inferrer.infer(remaining)
            self._classify_into(remaining, assembly)
        if finalize:
            assembly.finalize(inferrer=self._inferrer)
        self._log_summary(assembly)
        return assembly

    def _classify_into(self, atoms: List[Atom], assembly: Assembly) -> None:
        if self._settings.partition_fragments:
            fragments = MolecularGraph(atoms).fragments()
            logger.debug("Partitioned %d atoms into %d fragments", len(atoms), len(fragments))
        else:
            fragments = [atoms]
        for fragment in fragments:
            self._classify_pool(AtomPool(fragment), assembly)

    def _classify_pool(self, pool: AtomPool, assembly: Assembly) -> None:
        while len(pool):
            seed = pool.first(_is_nitrogen)
            if seed is not None:
                self._classify_from_nitrogen(seed, pool, assembly)
            else:
                self._classify_remainder(pool.first(), pool, assembly)

    def _classify_from_nitrogen(self, seed: Atom, pool: AtomPool, assembly: Assembly) -> None:
        search = BackboneSearch(pool, self._settings)
        backbone = search.find(seed)
        last = next(atom for atom in reversed(backbone) if _is_nitrogen(atom))
        backbone = search.find(last)

        if len(backbone) > 2:
            polymer = Polymer(self._next_polymer_name(assembly))
            try:
                ResidueSegmenter(pool).segment(backbone, polymer)
            except SegmentationError as exc:
                logger.debug("Backbone of %d atoms is not a polymer: %s", len(backbone), exc)
            else:
                assembly.add(polymer)
                logger.info(
                    "Sequenced chain %s: %d residues %s",
                    polymer.name,
                    len(polymer.residues),
                    polymer.sequence,
                )
                return

        self._add_hetero(collect_atoms(backbone[0], pool), pool, assembly)

    def _classify_remainder(self, atom: Atom, pool: AtomPool, assembly: Assembly) -> None:
        if not atom.bonds:
            ion = Molecule(f"{atom.label}: {len(assembly.ions) + 1}")
            pool.claim(atom, ion)
            assembly.add(ion)
            return

        oxygen = None
        if is_water_oxygen(atom):
            oxygen = atom
        elif atom.atomic_number == HYDROGEN and atom.num_bonds == 1:
            partner = next(atom.neighbors())
            if partner in pool and is_water_oxygen(partner):
                oxygen = partner
        if oxygen is None:
            self._add_hetero(collect_atoms(atom, pool), pool, assembly)
            return

        water = Molecule(f"H2O: {len(assembly.water) + 1}")
        pool.claim(oxygen, water)
        pool.claim_all(oxygen.neighbors(), water)
        assembly.add(water)

    @staticmethod
    def _add_hetero(atoms: List[Atom], pool: AtomPool, assembly: Assembly) -> None:
        weight = sum(atom.mass for atom in atoms)
        molecule = Molecule(f"Hetero {weight:.1f}: {len(assembly.molecules) + 1}")
        pool.claim_all(atoms, molecule)
        assembly.add(molecule)

    @staticmethod
    def _next_polymer_name(assembly: Assembly) -> str:
        taken = set(assembly.chain_names)
        number = len(assembly.polymers)
        while polymer_name(number) in taken:
            number += 1
        return polymer_name(number)

    @staticmethod
    def _log_summary(assembly: Assembly) -> None:
        logger.info(
            "Classified %d atoms: %d polymers, %d molecules, %d ions, %d water",
            len(assembly.atoms),
            len(assembly.polymers),
            len(assembly.molecules),
            len(assembly.ions),
            len(assembly.water),
        )
