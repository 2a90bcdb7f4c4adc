"""Single-pass filter/map/reduce pipelines built from composable stages."""

from .exceptions import (
    CompositionError,
    ConfigurationError,
    EmptyPipeline,
    ExecutionError,
    MissingCallback,
    MissingSeed,
    MissingSequence,
    ReduceNotLast,
    StageError,
    TransducerError,
    UnsupportedSeed,
)
from .pipeline import CompiledPipeline, Pipeline, compose
from .stages import Filter, Map, Reduce, Stage, StageKind, append_step

__all__ = [
    "CompiledPipeline",
    "CompositionError",
    "ConfigurationError",
    "EmptyPipeline",
    "ExecutionError",
    "Filter",
    "Map",
    "MissingCallback",
    "MissingSeed",
    "MissingSequence",
    "Pipeline",
    "Reduce",
    "ReduceNotLast",
    "Stage",
    "StageError",
    "StageKind",
    "TransducerError",
    "UnsupportedSeed",
    "append_step",
    "compose",
]
