# src/ramodel/config.py

from __future__ import annotations
from dataclasses import dataclass

"""
Configuration objects for model construction.

This module centralizes the few knobs that affect how models store their
relations, how variable keys are packed, and how large a state space may be
enumerated before the core refuses to build a structure matrix.

The primary entry point is :class:`RAConfig`, a small dataclass with sane
defaults. Treat it as an immutable configuration snapshot passed into
:class:`~ramodel.model.Model` and :class:`~ramodel.variables.VariableList`;
avoid mutating it mid-run.

Examples
--------
>>> from ramodel.config import RAConfig
>>> cfg = RAConfig(initial_relation_capacity=8)
>>> cfg.initial_relation_capacity
8
>>> cfg.growth_factor
2
"""

__all__ = [
    'RAConfig',
    'DEFAULT_CONFIG',
]


@dataclass
class RAConfig:
    """
    Global knobs used by models, variable lists and the state-space enumerator.

    Parameters
    ----------
    initial_relation_capacity : int, default=4
        Number of relation slots a new :class:`~ramodel.model.Model` reserves
        when no explicit capacity is passed.
    growth_factor : int, default=2
        Factor by which relation capacity grows once exhausted.
    segment_bits : int, default=32
        Width in bits of one key segment. Variables are packed into segments
        and never straddle a segment boundary.
    max_state_space : int, default=1_000_000
        Upper bound on the number of joint states that may be enumerated.
        Acts as a guardrail against building structure matrices for
        variable lists whose Cartesian product is far too large.

    Notes
    -----
    - The tolerance used when comparing degrees of freedom is a fixed module
      constant (:data:`ramodel.oracle.DF_EPSILON`) and is intentionally not a
      field here.

    Examples
    --------
    >>> RAConfig(segment_bits=16, max_state_space=4096)
    RAConfig(initial_relation_capacity=4, growth_factor=2, segment_bits=16, max_state_space=4096)
    """

    initial_relation_capacity: int = 4
    growth_factor: int = 2
    segment_bits: int = 32
    max_state_space: int = 1_000_000

    def __post_init__(self):
        if self.initial_relation_capacity < 1:
            raise ValueError("initial_relation_capacity must be ≥ 1")
        if self.growth_factor < 2:
            raise ValueError("growth_factor must be ≥ 2")
        if not 8 <= self.segment_bits <= 64:
            raise ValueError("segment_bits must be in [8, 64]")
        if self.max_state_space < 1:
            raise ValueError("max_state_space must be ≥ 1")


DEFAULT_CONFIG = RAConfig()
