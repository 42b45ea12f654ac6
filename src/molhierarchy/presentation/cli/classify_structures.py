"""Command-line interface for structure classification."""

import argparse
import logging
import os
from typing import Dict, List, Optional, Sequence

import pandas as pd
from tqdm import tqdm

from ...config import BOND_BUFFER, INFERRERS, InferenceSettings
from ...core.domain.models.assembly import Assembly
from ...core.domain.models.node import NodeKind
from ...core.domain.models.polymer import Polymer
from ...core.services.classification_service import ClassificationService
from ...infrastructure.repositories.structure_repository import StructureRepository

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ["structure", "collection", "name", "type", "atoms", "residues", "sequence"]


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description="Classify PDB structures into polymers, residues and small molecules"
    )
    parser.add_argument("paths", nargs="+", help="PDB files to classify")
    parser.add_argument(
        "--bond-buffer",
        type=float,
        default=BOND_BUFFER,
        help="Tolerance in Angstroms added to the atomic radii when inferring bonds",
    )
    parser.add_argument(
        "--inferrer",
        choices=INFERRERS,
        default="pairwise",
        help="Bond inference strategy",
    )
    parser.add_argument(
        "--use-hints",
        action="store_true",
        help="Place standard residues by their chain and residue labels",
    )
    parser.add_argument(
        "--partition",
        action="store_true",
        help="Classify each connected fragment separately",
    )
    parser.add_argument("--summary", help="Write a per-container summary CSV to this path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    return parser


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def settings_from_args(args: argparse.Namespace) -> InferenceSettings:
    return InferenceSettings.from_mapping(
        {
            "bond_buffer": args.bond_buffer,
            "inferrer": args.inferrer,
            "partition_fragments": args.partition,
        }
    )


def classify_file(
    path: str, service: ClassificationService, use_hints: bool = False
) -> Assembly:
    """
    Load and classify one PDB file.

    Args:
        path: Path to a ``.pdb`` file
        service: Configured classification service
        use_hints: Use residue labels for standard residues

    Returns:
        Finalized Assembly named after the file

    Raises:
        FileNotFoundError: If ``path`` does not exist
        ValueError: If ``path`` is not a ``.pdb`` file
    """
    directory, file_name = os.path.split(os.path.abspath(path))
    structure_id, extension = os.path.splitext(file_name)
    if extension.lower() != ".pdb":
        raise ValueError(f"Not a PDB file: {path}")

    repository = StructureRepository(directory, inferrer=service.settings.make_inferrer())
    graph = repository.get(structure_id)
    if graph is None:
        raise FileNotFoundError(path)

    if use_hints:
        return service.assemble_from_hints(graph.atoms, name=structure_id)
    return service.classify(graph.atoms, name=structure_id)


def summarize(assembly: Assembly) -> List[Dict]:
    """One summary row per top-level container of ``assembly``."""
    rows = []
    for collection, containers in assembly.collections().items():
        for container in containers:
            is_polymer = isinstance(container, Polymer)
            rows.append(
                {
                    "structure": assembly.name,
                    "collection": collection,
                    "name": container.name,
                    "type": container.residue_type.value if is_polymer else "molecule",
                    "atoms": len(container.atoms),
                    "residues": len(container.residues) if is_polymer else 0,
                    "sequence": container.sequence if is_polymer else "",
                }
            )
    return rows


def log_hierarchy(assembly: Assembly) -> None:
    logger.info("%r", assembly)
    for depth, node in assembly.walk():
        if node.kind is not NodeKind.ATOM:
            logger.info("%s%r", "  " * (depth + 1), node)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for structure classification CLI."""
    parser = setup_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    service = ClassificationService(settings_from_args(args))

    rows = []
    for path in tqdm(args.paths, desc="Classifying structures", disable=len(args.paths) < 2):
        assembly = classify_file(path, service, use_hints=args.use_hints)
        log_hierarchy(assembly)
        rows.extend(summarize(assembly))

    if args.summary:
        pd.DataFrame(rows, columns=SUMMARY_COLUMNS).to_csv(args.summary, index=False)
        logger.info("Wrote summary of %d containers to %s", len(rows), args.summary)


if __name__ == "__main__":
    main()
