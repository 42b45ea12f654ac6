# src/molhierarchy/core/utils/chemistry.py
"""
Graph predicates used to recognise backbone chemistry.

Element arguments are atomic numbers. Functions that walk the graph take the
atom pool and never enter atoms outside it.
"""

from typing import Iterable, Iterator, List, Optional, Set

from ..domain.elements import CARBON, HYDROGEN, NITROGEN, OXYGEN, SULFUR
from ..domain.models.atom import Atom


def find_bond_with(atom: Atom, element: int) -> Optional[Atom]:
    """First neighbour of ``atom`` with the given atomic number."""
    for neighbor in atom.neighbors():
        if neighbor.atomic_number == element:
            return neighbor
    return None


def forms_bonds_with(atom: Atom, element: int) -> bool:
    return find_bond_with(atom, element) is not None


def number_of_bonds_with(atom: Atom, element: int) -> int:
    return sum(1 for neighbor in atom.neighbors() if neighbor.atomic_number == element)


def find_carbonyl(atom: Atom) -> Optional[Atom]:
    """A carbon neighbour of ``atom`` that carries a terminal (singly bonded) oxygen."""
    for carbon in atom.neighbors():
        if carbon.atomic_number != CARBON:
            continue
        for oxygen in carbon.neighbors():
            if oxygen.atomic_number == OXYGEN and oxygen.num_bonds == 1:
                return carbon
    return None


def carbons_with_oxygen(atom: Atom) -> Iterator[Atom]:
    """Carbon neighbours of ``atom`` bonded to at least one oxygen."""
    for carbon in atom.neighbors():
        if carbon.atomic_number == CARBON and forms_bonds_with(carbon, OXYGEN):
            yield carbon


def find_co(atom: Atom) -> Optional[Atom]:
    return next(carbons_with_oxygen(atom), None)


def find_alpha_carbon(atom: Atom) -> Optional[Atom]:
    """A carbon neighbour bonded to a nitrogen and to a carbon that bears an oxygen."""
    for carbon in atom.neighbors():
        if (
            carbon.atomic_number == CARBON
            and find_co(carbon) is not None
            and forms_bonds_with(carbon, NITROGEN)
        ):
            return carbon
    return None


def find_c5(atom: Atom) -> Optional[Atom]:
    """A carbon neighbour with one carbon, one oxygen and no nitrogen neighbour (C5')."""
    for carbon in atom.neighbors():
        if (
            carbon.atomic_number == CARBON
            and number_of_bonds_with(carbon, CARBON) == 1
            and number_of_bonds_with(carbon, OXYGEN) == 1
            and not forms_bonds_with(carbon, NITROGEN)
        ):
            return carbon
    return None


def find_cco(atom: Atom) -> Optional[Atom]:
    """A carbon neighbour with two carbon neighbours and an oxygen (C3')."""
    for carbon in atom.neighbors():
        if (
            carbon.atomic_number == CARBON
            and number_of_bonds_with(carbon, CARBON) == 2
            and forms_bonds_with(carbon, OXYGEN)
        ):
            return carbon
    return None


def find_other_oxygen(phosphorus: Atom, oxygen: Atom) -> Optional[Atom]:
    """An oxygen on ``phosphorus``, other than ``oxygen``, that is bonded to carbon."""
    for neighbor in phosphorus.neighbors():
        if (
            neighbor is not oxygen
            and neighbor.atomic_number == OXYGEN
            and forms_bonds_with(neighbor, CARBON)
        ):
            return neighbor
    return None


def count_co(atom: Atom) -> int:
    """Total number of oxygens on the carbon neighbours of ``atom``."""
    return sum(
        number_of_bonds_with(carbon, OXYGEN)
        for carbon in atom.neighbors()
        if carbon.atomic_number == CARBON
    )


def is_water_oxygen(atom: Atom) -> bool:
    """An oxygen whose neighbours are all hydrogens."""
    return atom.atomic_number == OXYGEN and all(
        neighbor.atomic_number == HYDROGEN for neighbor in atom.neighbors()
    )


def is_disulfide(atom: Atom, neighbor: Atom) -> bool:
    return atom.atomic_number == SULFUR and neighbor.atomic_number == SULFUR


def collect_atoms(seed: Atom, pool, stop: Iterable[Atom] = ()) -> List[Atom]:
    """
    Depth-first collection of the atoms reachable from ``seed``.

    The walk never enters atoms outside ``pool`` or in ``stop`` and never
    crosses an S-S bond. The seed itself is always collected first.

    Args:
        seed: Starting atom
        pool: AtomPool of unclaimed atoms
        stop: Atoms that bound the walk without being collected

    Returns:
        Collected atoms in depth-first pre-order
    """
    blocked: Set[int] = {id(atom) for atom in stop}
    blocked.add(id(seed))
    collected = [seed]
    stack = [(seed, seed.neighbors())]
    while stack:
        atom, neighbors = stack[-1]
        for neighbor in neighbors:
            if (
                id(neighbor) in blocked
                or neighbor not in pool
                or is_disulfide(atom, neighbor)
            ):
                continue
            blocked.add(id(neighbor))
            collected.append(neighbor)
            stack.append((neighbor, neighbor.neighbors()))
            break
        else:
            stack.pop()
    return collected
