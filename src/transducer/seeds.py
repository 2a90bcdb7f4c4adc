"""Cloning rules for reduce seeds.

A reduce seed is copied every time a pipeline run starts so that one run can
never observe mutations made by another. Only plain data can be copied this
way: numbers, strings, bytes and the builtin containers built from them.
Seeds holding callables, open handles, arbitrary objects or reference cycles
are rejected up front instead of being copied with guessed semantics.
"""

from __future__ import annotations

import copy
from decimal import Decimal
from fractions import Fraction
from typing import Any, Set

from .exceptions import UnsupportedSeed

_SCALARS = (type(None), bool, int, float, complex, str, bytes, Decimal, Fraction)
_SEQUENCES = (list, tuple, set, frozenset)


def validate_seed(seed: Any) -> None:
    """Raise :class:`UnsupportedSeed` unless ``seed`` is cloneable plain data."""

    _check(seed, set(), "seed")


def _check(value: Any, active: Set[int], path: str) -> None:
    if isinstance(value, _SCALARS):
        return
    if not isinstance(value, _SEQUENCES + (dict,)):
        raise UnsupportedSeed(
            f"Unsupported value of type {type(value).__name__} at {path}; "
            "seeds must be plain data"
        )

    marker = id(value)
    if marker in active:
        raise UnsupportedSeed(f"Reference cycle detected at {path}")
    active.add(marker)
    try:
        if isinstance(value, dict):
            for key, item in value.items():
                _check(key, active, f"{path} key {key!r}")
                _check(item, active, f"{path}[{key!r}]")
        else:
            for index, item in enumerate(value):
                _check(item, active, f"{path}[{index}]")
    finally:
        active.discard(marker)


def clone_seed(seed: Any) -> Any:
    """Return an independent deep copy of a validated ``seed``."""

    if isinstance(seed, _SCALARS):
        return seed
    return copy.deepcopy(seed)


__all__ = ["clone_seed", "validate_seed"]
