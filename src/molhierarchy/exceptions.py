# src/molhierarchy/exceptions.py
"""Exceptions raised while building a molecular hierarchy."""


class HierarchyError(Exception):
    """Base exception class for the molhierarchy package."""


class InvariantViolation(HierarchyError, AssertionError):
    """A graph or ownership invariant was broken by the calling code.

    Raised for duplicate bonds, bonds from an atom to itself, atoms claimed
    by two containers and duplicate atom indices in one pool. These signal a
    defect in the caller and are never caught inside the library.
    """


class ContainerTypeError(HierarchyError, TypeError):
    """A node of an unsupported kind was added to a container."""


class SegmentationError(HierarchyError, ValueError):
    """A backbone path could not be cut into repeating residues."""
