#!/usr/bin/env python3
# src/molhierarchy/core/domain/models/atom_pool.py

"""
The ordered set of atoms still waiting to be classified.
"""

from typing import Callable, Dict, Iterable, Iterator, List, Optional

from ....exceptions import InvariantViolation
from .atom import Atom


class AtomPool:
    """Unclaimed atoms, keyed by atom index.

    An atom is unclaimed exactly while it is in the pool; ``claim`` moves it
    into a container and out of the pool in one step. Traversals treat atoms
    outside the pool as boundaries.
    """

    def __init__(self, atoms: Iterable[Atom]):
        self._atoms: Dict[int, Atom] = {}
        for atom in atoms:
            if atom.index in self._atoms:
                raise InvariantViolation(f"Duplicate atom index {atom.index} in pool")
            if atom.parent is not None:
                raise InvariantViolation(
                    f"Atom {atom.index} already belongs to {atom.parent!r}"
                )
            self._atoms[atom.index] = atom

    def __contains__(self, atom: Atom) -> bool:
        return self._atoms.get(atom.index) is atom

    def __len__(self) -> int:
        return len(self._atoms)

    def __iter__(self) -> Iterator[Atom]:
        return iter(list(self._atoms.values()))

    def first(self, predicate: Optional[Callable[[Atom], bool]] = None) -> Optional[Atom]:
        """First atom in pool order, optionally the first matching ``predicate``."""
        for atom in self._atoms.values():
            if predicate is None or predicate(atom):
                return atom
        return None

    def claim(self, atom: Atom, container) -> bool:
        """
        Move ``atom`` from the pool into ``container``.

        Returns:
            False (and does nothing) if the atom is not in the pool
        """
        if atom not in self:
            return False
        container.add(atom)
        del self._atoms[atom.index]
        return True

    def claim_all(self, atoms: Iterable[Atom], container) -> List[Atom]:
        """Claim every pooled atom of ``atoms``; returns the atoms claimed."""
        return [atom for atom in atoms if self.claim(atom, container)]
