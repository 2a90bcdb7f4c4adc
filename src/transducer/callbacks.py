"""Builtin callbacks that pipeline documents can reference by entrypoint."""

from __future__ import annotations

from typing import Any, Sequence


def is_odd(element: Any, index: int, sequence: Sequence[Any]) -> bool:
    """Keep odd integers."""

    return element % 2 == 1


def is_even(element: Any, index: int, sequence: Sequence[Any]) -> bool:
    """Keep even integers."""

    return element % 2 == 0


def identity(element: Any, index: int, sequence: Sequence[Any]) -> Any:
    """Pass the element through unchanged."""

    return element


def double(element: Any, index: int, sequence: Sequence[Any]) -> Any:
    """Multiply the element by two."""

    return element * 2


def add(accumulator: Any, element: Any, index: int, sequence: Sequence[Any]) -> Any:
    """Sum the elements into the accumulator."""

    return accumulator + element


def count(accumulator: int, element: Any, index: int, sequence: Sequence[Any]) -> int:
    """Count the elements that reach the reduce stage."""

    return accumulator + 1
