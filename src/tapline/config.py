from __future__ import annotations

from enum import Enum
from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, model_validator


class FormatterType(str, Enum):
    SILENT = "silent"
    DOT = "dot"
    SPEC = "spec"
    REPORT = "report"


_PATH_FIELDS = ("junit", "debug_log")


class ReporterConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    formatter: FormatterType = FormatterType.REPORT
    color: bool = True
    junit: str | None = None
    debug_log: str | None = None
    strict: bool = False

    @model_validator(mode="after")
    def expand_path_variables(self) -> "ReporterConfig":
        """Expand ${VAR} references in path fields.

        Raises ValueError listing every field with an unset variable that has
        no default, so they can all be fixed at once.
        """
        missing: list[str] = []
        for name in _PATH_FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            try:
                expanded = expandvars(value, nounset=True)
            except Exception:
                missing.append(f"  {name}={value}")
                continue
            setattr(self, name, expanded)

        if missing:
            details = "\n".join(missing)
            raise ValueError(f"Config has missing environment variables:\n{details}")

        return self


def load_config(path: Path) -> ReporterConfig:
    """Load and validate a reporter config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path, encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    config = ReporterConfig(**raw)

    # Resolve relative output paths relative to config file location
    for name in _PATH_FIELDS:
        value = getattr(config, name)
        if value is not None and not Path(value).is_absolute():
            setattr(config, name, str((config_dir / value).resolve()))

    return config
