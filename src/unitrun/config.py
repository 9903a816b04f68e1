"""Run configuration loaded from ``unitrun.yaml``."""

from __future__ import annotations

from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


def _expand(field: str, value: str) -> str:
    try:
        return expandvars(value, nounset=True)
    except Exception:
        # Variable is missing and has no default
        raise ValueError(
            f"{field} references a missing environment variable: {value}"
        ) from None


class RunConfig(BaseModel):
    """Settings for ``unitrun run``, usually loaded from ``unitrun.yaml``."""

    model_config = ConfigDict(extra="forbid")
    scripts: list[str] = []
    junit: str | None = None
    debug_log: str | None = None
    verbose: bool = False
    strict: bool = False

    @field_validator("scripts")
    @classmethod
    def expand_script_paths(cls, v: list[str]) -> list[str]:
        return [_expand("scripts", s) for s in v]

    @field_validator("junit", "debug_log")
    @classmethod
    def expand_output_path(cls, v: str | None, info: ValidationInfo) -> str | None:
        if v is None:
            return v
        return _expand(info.field_name, v)


def load_config(path: Path) -> RunConfig:
    """Load and validate a run config from a YAML file.

    Raises ValueError (pydantic's ValidationError included) for malformed
    YAML, a non-mapping document, unknown keys or unset variables.
    """
    config_dir = path.parent.resolve()

    with open(path) as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: invalid YAML: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    config = RunConfig(**raw)

    # Resolve relative paths relative to config file location
    config.scripts = [_resolve(config_dir, s) for s in config.scripts]
    if config.junit is not None:
        config.junit = _resolve(config_dir, config.junit)
    if config.debug_log is not None:
        config.debug_log = _resolve(config_dir, config.debug_log)

    return config


def _resolve(base: Path, value: str) -> str:
    path = Path(value)
    if path.is_absolute():
        return str(path)
    return str((base / path).resolve())
