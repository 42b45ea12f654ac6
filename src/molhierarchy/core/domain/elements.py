# src/molhierarchy/core/domain/elements.py
"""
Immutable per-element data: symbols, masses, bonding radii and valences.
"""

from types import MappingProxyType
from typing import Mapping

# Index is the atomic number; 0 is reserved for unknown symbols.
SYMBOLS = tuple(
    (
        "X H He Li Be B C N O F Ne Na Mg Al Si P S Cl Ar K Ca Sc Ti V Cr Mn Fe "
        "Co Ni Cu Zn Ga Ge As Se Br Kr Rb Sr Y Zr Nb Mo Tc Ru Rh Pd Ag Cd In Sn "
        "Sb Te I Xe Cs Ba La Ce Pr Nd Pm Sm Eu Gd Tb Dy Ho Er Tm Yb Lu Hf Ta W "
        "Re Os Ir Pt Au Hg Tl Pb Bi Po At Rn Fr Ra Ac Th Pa U Np Pu Am Cm Bk Cf "
        "Es Fm Md No Lr"
    ).split()
)

ATOMIC_NUMBERS: Mapping[str, int] = MappingProxyType(
    {symbol: number for number, symbol in enumerate(SYMBOLS) if number > 0}
)

HYDROGEN = 1
CARBON = 6
NITROGEN = 7
OXYGEN = 8
PHOSPHORUS = 15
SULFUR = 16

BACKBONE_ELEMENTS = frozenset({CARBON, NITROGEN, OXYGEN, PHOSPHORUS})

# Covalent radii (Angstroms) of the elements that form covalent networks.
_COVALENT_RADII = {
    1: 0.31,
    5: 0.84,
    6: 0.76,
    7: 0.71,
    8: 0.66,
    9: 0.57,
    14: 1.11,
    15: 1.07,
    16: 1.05,
    17: 1.02,
    33: 1.19,
    34: 1.20,
    35: 1.20,
    53: 1.39,
}

# Radius given to metals, noble gases and unknown symbols; small enough that
# free ions are never bonded to their coordination shell.
ION_RADIUS = 0.5

# Bonding radius r such that BOND_BUFFER + r1/2 + r2/2 approximates the sum of
# covalent radii plus a tolerance of ~0.45 A.
BONDING_RADII: Mapping[int, float] = MappingProxyType(
    {number: round(2.0 * radius - 0.25, 3) for number, radius in _COVALENT_RADII.items()}
)

MASSES: Mapping[int, float] = MappingProxyType(
    {
        1: 1.008,
        5: 10.81,
        6: 12.011,
        7: 14.007,
        8: 15.999,
        9: 18.998,
        11: 22.990,
        12: 24.305,
        14: 28.085,
        15: 30.974,
        16: 32.06,
        17: 35.45,
        19: 39.098,
        20: 40.078,
        25: 54.938,
        26: 55.845,
        27: 58.933,
        28: 58.693,
        29: 63.546,
        30: 65.38,
        33: 74.922,
        34: 78.971,
        35: 79.904,
        53: 126.904,
    }
)

# Usual number of covalent bonds; an atom with fewer is dangling.
VALENCES: Mapping[int, int] = MappingProxyType(
    {1: 1, 6: 4, 7: 3, 8: 2, 15: 4, 16: 2, 19: 0, 26: 8}
)


def normalize_symbol(symbol: str) -> str:
    """Return ``symbol`` in title case, e.g. "CL" -> "Cl"."""
    return symbol.strip().capitalize()


def atomic_number(symbol: str) -> int:
    """Atomic number of ``symbol``, or 0 when it is not an element."""
    return ATOMIC_NUMBERS.get(normalize_symbol(symbol), 0)


def bonding_radius(number: int) -> float:
    return BONDING_RADII.get(number, ION_RADIUS)


def mass(number: int) -> float:
    """Atomic mass, or 0.0 for elements without tabulated mass."""
    return MASSES.get(number, 0.0)
