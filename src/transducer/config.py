"""Declarative pipeline documents for the transducer package."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigurationError

_YAML_SUFFIXES = {".yaml", ".yml"}


class StageSettings(BaseModel):
    """Description of a single stage and the entrypoint of its callback."""

    kind: Literal["filter", "map", "reduce"]
    callback: str = Field(..., description="Callback entrypoint in 'module:function' format")
    seed: Any = Field(default=None, description="Initial accumulator, reduce stages only")

    @field_validator("callback")
    @classmethod
    def validate_entrypoint(cls, value: str) -> str:
        module_name, sep, function_name = value.partition(":")
        if not sep or not module_name or not function_name or ":" in function_name:
            raise ValueError("Callback entrypoint must be in 'module:function' format")
        return value

    @model_validator(mode="after")
    def validate_seed_placement(self) -> "StageSettings":
        if self.kind != "reduce" and self.seed is not None:
            raise ValueError(f"Only reduce stages accept a seed, not {self.kind}")
        return self


class PipelineSettings(BaseModel):
    """A named, ordered list of stages."""

    name: str = "pipeline"
    stages: List[StageSettings] = Field(default_factory=list)
    collect_metrics: bool = Field(
        default=False,
        description="Attach a metrics collector recording executions and timings.",
    )

    def kinds(self) -> List[str]:
        return [stage.kind for stage in self.stages]


def build_settings_from_dict(raw: Dict[str, Any]) -> PipelineSettings:
    """Utility helper to build :class:`PipelineSettings` from a plain dictionary."""

    try:
        return PipelineSettings.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid pipeline document: {exc}") from exc


def load_settings(path: Path) -> PipelineSettings:
    """Load :class:`PipelineSettings` from a JSON or YAML file at ``path``."""

    if not path.exists():
        raise ConfigurationError(f"Pipeline document not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Unable to read pipeline document {path}") from exc

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Unable to parse pipeline document {path}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError("Pipeline document must contain a mapping at the top level")
    return build_settings_from_dict(data)


__all__ = [
    "PipelineSettings",
    "StageSettings",
    "build_settings_from_dict",
    "load_settings",
]
