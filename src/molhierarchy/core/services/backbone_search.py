"""Longest admissible backbone path through the bond graph."""

import logging
from typing import Iterator, List, Optional, Set

from ...config import InferenceSettings
from ..domain.elements import BACKBONE_ELEMENTS, CARBON, NITROGEN, OXYGEN, PHOSPHORUS
from ..domain.models.atom import Atom
from ..domain.models.atom_pool import AtomPool
from ..utils.chemistry import find_alpha_carbon, find_carbonyl, forms_bonds_with

logger = logging.getLogger(__name__)


class _Frame:
    """One atom on the current path and the state of its branch exploration."""

    __slots__ = ("atom", "previous", "neighbors", "best")

    def __init__(self, atom: Atom, previous: Optional[Atom]):
        self.atom = atom
        self.previous = previous
        self.neighbors: Iterator[Atom] = atom.neighbors()
        self.best: List[Atom] = []


class BackboneSearch:
    """Depth-first, backtracking search for a polymer backbone.

    The search walks C, N, O and P atoms of the pool. Once the path is longer
    than ``side_chain_depth`` atoms, every extension must look like backbone
    chemistry: an oxygen must bond a phosphorus, a nitrogen must sit between
    a carbonyl carbon and an alpha carbon, and a run of carbons may not grow
    past ``max_consecutive_carbons``. Of two branches from the same atom, the
    shorter wins when they share an atom and the longer wins otherwise.
    """

    def __init__(self, pool: AtomPool, settings: Optional[InferenceSettings] = None):
        self._pool = pool
        self._settings = settings or InferenceSettings()

    def find(self, seed: Atom) -> List[Atom]:
        """
        Find the backbone path that starts at ``seed``.

        Args:
            seed: Starting atom, by convention a nitrogen

        Returns:
            Atoms from the seed to the far end of the path; ``[seed]`` when
            the seed has no admissible extension
        """
        if not seed.bonds or not self._admissible(seed, []):
            return [seed]

        path: List[Atom] = [seed]
        on_path: Set[int] = {seed.index}
        stack = [_Frame(seed, None)]
        while True:
            frame = stack[-1]
            child = self._next_child(frame, path, on_path)
            if child is not None:
                path.append(child)
                on_path.add(child.index)
                stack.append(_Frame(child, frame.atom))
                continue

            stack.pop()
            path.pop()
            on_path.discard(frame.atom.index)
            result = [frame.atom] + frame.best
            if not stack:
                logger.debug("Backbone from atom %d has %d atoms", seed.index, len(result))
                return result
            parent = stack[-1]
            parent.best = self._keep(parent.best, result)

    def _next_child(self, frame: _Frame, path: List[Atom], on_path: Set[int]) -> Optional[Atom]:
        for neighbor in frame.neighbors:
            if neighbor is frame.previous or neighbor.index in on_path:
                continue
            if self._admissible(neighbor, path):
                return neighbor
        return None

    def _admissible(self, atom: Atom, path: List[Atom]) -> bool:
        """Whether ``atom`` may be appended to ``path``."""
        if atom not in self._pool:
            return False
        if atom.atomic_number not in BACKBONE_ELEMENTS:
            return False
        if path and len(path) > self._settings.side_chain_depth:
            if not self._continues_backbone(atom, path):
                return False
        if path and len(atom.bonds) == 1:
            return False
        return True

    def _continues_backbone(self, atom: Atom, path: List[Atom]) -> bool:
        number = atom.atomic_number
        if number == OXYGEN:
            return forms_bonds_with(atom, PHOSPHORUS)
        if number == NITROGEN:
            return find_carbonyl(atom) is not None and find_alpha_carbon(atom) is not None
        if number == CARBON:
            run = path[-self._settings.max_consecutive_carbons:]
            return not all(previous.atomic_number == CARBON for previous in run)
        return True

    @staticmethod
    def _keep(best: List[Atom], candidate: List[Atom]) -> List[Atom]:
        shared = not {id(atom) for atom in best}.isdisjoint(id(atom) for atom in candidate)
        if shared:
            return candidate if len(candidate) < len(best) else best
        return candidate if len(candidate) > len(best) else best
