"""Pipeline stages and the step combinators they contribute.

Every stage turns a downstream *step* into a new step. A step has the
signature ``(accumulator, element, index, sequence) -> accumulator``; the
combinator of a stage wraps its downstream step with the stage's own
behaviour, so a chain of stages collapses into a single step per element.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, List, Sequence

from .exceptions import MissingCallback, MissingSeed, ReduceNotLast
from .seeds import clone_seed, validate_seed

Step = Callable[[Any, Any, int, Sequence[Any]], Any]


class StageKind(str, Enum):
    """Kinds of stage a pipeline can contain."""

    FILTER = "filter"
    MAP = "map"
    REDUCE = "reduce"


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


def append_step(accumulator: List[Any], element: Any, index: int, sequence: Sequence[Any]) -> List[Any]:
    """Append ``element`` to the accumulator and return it."""

    accumulator.append(element)
    return accumulator


def _require_callback(callback: Any, kind: StageKind) -> None:
    if callback is None:
        raise MissingCallback(f"Missing callback function for {kind.value} stage")
    if not callable(callback):
        raise MissingCallback(
            f"Callback for {kind.value} stage must be callable, got {type(callback).__name__}"
        )


class Stage(ABC):
    """Common interface of :class:`Filter`, :class:`Map` and :class:`Reduce`."""

    __slots__ = ()

    kind: ClassVar[StageKind]

    @property
    @abstractmethod
    def callback(self) -> Callable[..., Any]:
        """The user supplied function of this stage."""

    @property
    def reducer(self) -> Step:
        """Terminal step used when this stage is the last one of a pipeline."""

        return append_step

    def initial_accumulator(self) -> Any:
        """Return a fresh accumulator for a run ending with this stage."""

        return []

    @abstractmethod
    def combinator(self, downstream: Step) -> Step:
        """Wrap ``downstream`` with the behaviour of this stage."""


@dataclass(frozen=True, slots=True)
class Filter(Stage):
    """Forward only the elements for which ``predicate`` holds."""

    predicate: Callable[[Any, int, Sequence[Any]], Any] | None = None

    kind: ClassVar[StageKind] = StageKind.FILTER

    def __post_init__(self) -> None:
        _require_callback(self.predicate, self.kind)

    @property
    def callback(self) -> Callable[..., Any]:
        return self.predicate

    def combinator(self, downstream: Step) -> Step:
        predicate = self.predicate

        def step(accumulator: Any, element: Any, index: int, sequence: Sequence[Any]) -> Any:
            if predicate(element, index, sequence):
                return downstream(accumulator, element, index, sequence)
            return accumulator

        return step


@dataclass(frozen=True, slots=True)
class Map(Stage):
    """Forward ``transform(element, index, sequence)`` instead of the element."""

    transform: Callable[[Any, int, Sequence[Any]], Any] | None = None

    kind: ClassVar[StageKind] = StageKind.MAP

    def __post_init__(self) -> None:
        _require_callback(self.transform, self.kind)

    @property
    def callback(self) -> Callable[..., Any]:
        return self.transform

    def combinator(self, downstream: Step) -> Step:
        transform = self.transform

        def step(accumulator: Any, element: Any, index: int, sequence: Sequence[Any]) -> Any:
            return downstream(accumulator, transform(element, index, sequence), index, sequence)

        return step


@dataclass(frozen=True, slots=True)
class Reduce(Stage):
    """Fold elements into ``seed`` with ``combine``; always the final stage.

    ``seed`` must be plain data (see :mod:`transducer.seeds`). Each call to
    :meth:`initial_accumulator` returns a deep copy so runs never share it.
    """

    combine: Step | None = None
    seed: Any = MISSING

    kind: ClassVar[StageKind] = StageKind.REDUCE

    def __post_init__(self) -> None:
        _require_callback(self.combine, self.kind)
        if self.seed is MISSING or self.seed is None:
            raise MissingSeed("Missing initial value for reduce stage")
        validate_seed(self.seed)

    @property
    def callback(self) -> Callable[..., Any]:
        return self.combine

    @property
    def reducer(self) -> Step:
        return self.combine

    def initial_accumulator(self) -> Any:
        return clone_seed(self.seed)

    def combinator(self, downstream: Step) -> Step:
        # Only the stage's own combine may sit below a reduce.
        if downstream is not self.combine:
            raise ReduceNotLast("Reduce stage must be the last stage of a pipeline")
        return downstream


__all__ = [
    "Filter",
    "MISSING",
    "Map",
    "Reduce",
    "Stage",
    "StageKind",
    "Step",
    "append_step",
]
