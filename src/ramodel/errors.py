# src/ramodel/errors.py

from __future__ import annotations

__all__ = [
    "RAError",
    "ModelStructureError",
    "KeyLayoutError",
]


class RAError(Exception):
    """Base class for errors raised by :mod:`ramodel`."""


class ModelStructureError(RAError, RuntimeError):
    """
    A model cannot produce a consistent structure matrix.

    Raised when a structure matrix is requested for a model with no
    relations, or when a relation exposes no state constraints (missing set,
    empty set, or a missing key). The model is left without a matrix; callers
    must not continue with partial data.
    """


class KeyLayoutError(RAError, ValueError):
    """A key does not fit the segment layout of its variable list."""
