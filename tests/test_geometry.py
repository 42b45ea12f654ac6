import math

import numpy as np
import pytest

from molhierarchy.core.geometry import (
    bond_angle,
    center,
    cross,
    dihedral_angle,
    distance,
    dot,
    norm,
    normalize,
)


def test_distance_and_normalize():
    assert distance((0, 0, 0), (3, 4, 0)) == pytest.approx(5.0)
    assert np.allclose(normalize((0, 0, 2)), (0, 0, 1))
    assert np.allclose(cross((1, 0, 0), (0, 1, 0)), (0, 0, 1))
    assert dot((1, 2, 3), (4, 5, 6)) == pytest.approx(32.0)
    assert norm((0, 3, 4)) == pytest.approx(5.0)
    assert np.allclose(normalize((0, 0, 0)), (0, 0, 0))


def test_bond_angle_right_and_straight():
    assert bond_angle((1, 0, 0), (0, 0, 0), (0, 1, 0)) == pytest.approx(math.pi / 2)
    assert bond_angle((1, 0, 0), (0, 0, 0), (-1, 0, 0)) == pytest.approx(math.pi)


def test_bond_angle_zero_arm():
    assert bond_angle((0, 0, 0), (0, 0, 0), (1, 0, 0)) == 0.0


@pytest.mark.parametrize("degrees", [-150, -60, 0, 45, 60, 120, 179])
def test_dihedral_sign_convention(degrees):
    phi = math.radians(degrees)
    a, b, c = (1, 0, 0), (0, 0, 0), (0, 0, 1)
    d = (math.cos(phi), math.sin(phi), 1)
    assert dihedral_angle(a, b, c, d) == pytest.approx(phi)


def test_dihedral_collinear_is_zero():
    assert dihedral_angle((0, 0, 0), (1, 0, 0), (2, 0, 0), (3, 0, 0)) == 0.0


def test_center_weighted():
    points = [(0, 0, 0), (2, 0, 0)]
    assert np.allclose(center(points), (1, 0, 0))
    assert np.allclose(center(points, [3, 1]), (0.5, 0, 0))
    assert np.allclose(center([]), (0, 0, 0))
