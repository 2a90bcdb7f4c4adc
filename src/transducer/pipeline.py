"""Pipeline composition and single-pass execution.

A :class:`Pipeline` is a mutable builder holding an ordered list of stages.
:meth:`Pipeline.compose` folds that list right-to-left into one step and
returns an immutable :class:`CompiledPipeline`; building more stages
afterwards never affects an already compiled pipeline.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Sequence, Tuple

from .exceptions import EmptyPipeline, ExecutionError, MissingSequence, ReduceNotLast, StageError
from .logging import get_logger, log_event
from .stages import MISSING, Filter, Map, Reduce, Stage, StageKind, Step
from .telemetry import MetricsCollector

LOGGER = get_logger("pipeline")


@dataclass(frozen=True, slots=True)
class CompiledPipeline:
    """A combined step function plus the factory for its initial accumulator."""

    step: Step
    initial_accumulator: Callable[[], Any]
    kinds: Tuple[StageKind, ...]
    metrics: MetricsCollector | None = None

    def execute(self, sequence: Sequence[Any]) -> Any:
        """Fold every element of ``sequence`` through the combined step.

        Returns the list of surviving elements for filter/map pipelines, or
        the final accumulator for pipelines ending in a reduce stage.
        """

        if sequence is None:
            raise MissingSequence("Missing input sequence")
        if isinstance(sequence, Mapping) or not (
            hasattr(sequence, "__len__") and hasattr(sequence, "__getitem__")
        ):
            raise ExecutionError(
                f"Input must be an indexable sequence, got {type(sequence).__name__}"
            )

        if self.metrics is None:
            return self._traverse(sequence)

        with self.metrics.time("pipeline.execute"):
            result = self._traverse(sequence)
        self.metrics.record_run(len(sequence))
        return result

    def _traverse(self, sequence: Sequence[Any]) -> Any:
        step = self.step
        accumulator = self.initial_accumulator()
        count = len(sequence)
        for index in range(count):
            accumulator = step(accumulator, sequence[index], index, sequence)
        if LOGGER.isEnabledFor(logging.DEBUG):
            log_event(
                LOGGER,
                "pipeline_executed",
                level=logging.DEBUG,
                stages=[kind.value for kind in self.kinds],
                elements=count,
            )
        return accumulator


def compose(stages: Sequence[Stage], metrics: MetricsCollector | None = None) -> CompiledPipeline:
    """Fold ``stages`` right-to-left into a :class:`CompiledPipeline`.

    The last stage supplies both the terminal step and the initial
    accumulator. Each stage, from the last to the first, then wraps the step
    built so far, so the first stage's check runs first for every element.
    A reduce stage anywhere but last raises
    :class:`~transducer.exceptions.ReduceNotLast`.
    """

    if not stages:
        raise EmptyPipeline("Cannot compose a pipeline without stages")

    for position, stage in enumerate(stages[:-1]):
        if stage.kind is StageKind.REDUCE:
            raise ReduceNotLast(
                f"Reduce stage at position {position} must be the last stage of a pipeline"
            )

    terminal = stages[-1]
    step = terminal.reducer
    for stage in reversed(stages):
        step = stage.combinator(step)

    kinds = tuple(stage.kind for stage in stages)
    log_event(LOGGER, "pipeline_composed", stages=[kind.value for kind in kinds])
    return CompiledPipeline(
        step=step,
        initial_accumulator=terminal.initial_accumulator,
        kinds=kinds,
        metrics=metrics,
    )


@dataclass(slots=True)
class Pipeline:
    """An ordered list of stages built up by chaining calls."""

    stages: List[Stage] = field(default_factory=list)
    metrics: MetricsCollector | None = None

    def __post_init__(self) -> None:
        stages = list(self.stages or ())
        for stage in stages:
            _require_stage(stage)
        self.stages = stages

    def __len__(self) -> int:
        return len(self.stages)

    def add(self, stage: Stage) -> "Pipeline":
        _require_stage(stage)
        self.stages.append(stage)
        return self

    def filter(self, predicate: Callable[[Any, int, Sequence[Any]], Any] | None) -> "Pipeline":
        return self.add(Filter(predicate))

    def map(self, transform: Callable[[Any, int, Sequence[Any]], Any] | None) -> "Pipeline":
        return self.add(Map(transform))

    def reduce(self, combine: Step | None, seed: Any = MISSING) -> "Pipeline":
        return self.add(Reduce(combine, seed))

    def compose(self) -> CompiledPipeline:
        """Compose the current stages; recomputed on every call."""

        return compose(self.stages, metrics=self.metrics)

    def compose_and_execute(self, sequence: Sequence[Any]) -> Any:
        return self.compose().execute(sequence)

    @classmethod
    def from_stages(cls, stages: Iterable[Stage]) -> "Pipeline":
        return cls(list(stages))


def _require_stage(stage: Any) -> None:
    if not isinstance(stage, Stage):
        raise StageError(f"Expected a pipeline stage, got {type(stage).__name__}")


__all__ = ["CompiledPipeline", "Pipeline", "compose"]
