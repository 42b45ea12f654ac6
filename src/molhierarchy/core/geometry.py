# src/molhierarchy/core/geometry.py
"""
Vector math used by bond inference and valence terms.

All functions are pure and accept anything ``numpy.asarray`` turns into a
length-3 float vector. Angles are returned in radians.
"""

from typing import Optional, Sequence

import numpy as np


def as_vector(point) -> np.ndarray:
    """Convert a point to a float64 array of shape (3,)."""
    vector = np.asarray(point, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"Expected a 3-D point, got shape {vector.shape}")
    return vector


def dot(a, b) -> float:
    return float(np.dot(as_vector(a), as_vector(b)))


def cross(a, b) -> np.ndarray:
    return np.cross(as_vector(a), as_vector(b))


def norm(a) -> float:
    return float(np.linalg.norm(as_vector(a)))


def normalize(a) -> np.ndarray:
    """Return ``a`` scaled to unit length; the zero vector is returned unchanged."""
    vector = as_vector(a)
    length = np.linalg.norm(vector)
    if length == 0.0:
        return vector
    return vector / length


def distance(a, b) -> float:
    return float(np.linalg.norm(as_vector(a) - as_vector(b)))


def bond_angle(a, b, c) -> float:
    """
    Angle a-b-c at the central point ``b``.

    Args:
        a: First terminal point
        b: Central point
        c: Second terminal point

    Returns:
        Angle in radians within [0, pi]; 0 when either arm has zero length
    """
    u = as_vector(a) - as_vector(b)
    v = as_vector(c) - as_vector(b)
    lengths = np.linalg.norm(u) * np.linalg.norm(v)
    if lengths == 0.0:
        return 0.0
    cosine = np.clip(np.dot(u, v) / lengths, -1.0, 1.0)
    return float(np.arccos(cosine))


def dihedral_angle(a, b, c, d) -> float:
    """
    Torsion angle of a-b-c-d about the central b-c axis.

    The sign follows the IUPAC convention: looking down b->c, a clockwise
    rotation of the a-b bond onto the c-d bond is positive.

    Returns:
        Angle in radians within [-pi, pi]; 0 for collinear input
    """
    a, b, c, d = (as_vector(p) for p in (a, b, c, d))
    ba = a - b
    cb = b - c
    dc = c - d
    t = np.cross(ba, cb)
    u = np.cross(cb, dc)
    rt = np.dot(t, t)
    ru = np.dot(u, u)
    rtu = np.sqrt(rt * ru)
    if rtu == 0.0:
        return 0.0
    cosine = np.clip(np.dot(t, u) / rtu, -1.0, 1.0)
    angle = float(np.arccos(cosine))
    # Sign from the central axis, pointing c -> b.
    if np.dot(cb, np.cross(t, u)) > 0.0:
        angle = -angle
    return angle


def center(points: Sequence, weights: Optional[Sequence[float]] = None) -> np.ndarray:
    """
    Centre of a set of points.

    Args:
        points: Sequence of 3-D points
        weights: Optional per-point weights (e.g. masses)

    Returns:
        The (weighted) mean position; the origin for an empty set
    """
    if len(points) == 0:
        return np.zeros(3)
    coords = np.asarray([as_vector(p) for p in points])
    if weights is None:
        return coords.mean(axis=0)
    weights = np.asarray(weights, dtype=np.float64)
    total = weights.sum()
    if total == 0.0:
        return coords.mean(axis=0)
    return (coords * weights[:, None]).sum(axis=0) / total
