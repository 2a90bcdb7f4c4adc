"""Build pipelines from declarative documents."""

from __future__ import annotations

from importlib import import_module
from pathlib import Path
from typing import Any, Callable

from .config import PipelineSettings, StageSettings, load_settings
from .exceptions import ConfigurationError
from .logging import get_logger, log_event
from .pipeline import Pipeline
from .stages import MISSING, Filter, Map, Reduce, Stage
from .telemetry import MetricsCollector

LOGGER = get_logger("loader")


def resolve_callback(entrypoint: str) -> Callable[..., Any]:
    """Import the function named by a ``module:function`` entrypoint."""

    try:
        module_name, function_name = entrypoint.split(":")
    except ValueError as exc:
        raise ConfigurationError(
            "Callback entrypoint must be in 'module:function' format"
        ) from exc

    try:
        module = import_module(module_name)
        function = getattr(module, function_name)
    except (ModuleNotFoundError, AttributeError) as exc:
        raise ConfigurationError(f"Unable to resolve callback entrypoint {entrypoint}") from exc

    if not callable(function):
        raise ConfigurationError(f"Callback entrypoint {entrypoint} is not callable")
    return function


def build_stage(settings: StageSettings) -> Stage:
    callback = resolve_callback(settings.callback)
    if settings.kind == "filter":
        return Filter(callback)
    if settings.kind == "map":
        return Map(callback)
    # An omitted seed stays missing so Reduce reports it.
    seed = MISSING if settings.seed is None else settings.seed
    return Reduce(callback, seed)


def build_pipeline(settings: PipelineSettings) -> Pipeline:
    """Create a :class:`Pipeline` with one stage per entry of ``settings``."""

    metrics = MetricsCollector() if settings.collect_metrics else None
    pipeline = Pipeline([build_stage(stage) for stage in settings.stages], metrics=metrics)
    log_event(LOGGER, "pipeline_loaded", document=settings.name, stages=settings.kinds())
    return pipeline


def load_pipeline(path: Path) -> Pipeline:
    """Load a pipeline document from ``path`` and build it."""

    return build_pipeline(load_settings(path))


__all__ = ["build_pipeline", "build_stage", "load_pipeline", "resolve_callback"]
