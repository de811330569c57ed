"""Generate JSON Schema for the reporter YAML config."""

from __future__ import annotations

import json
from pathlib import Path

from tapline.config import ReporterConfig


def generate_json_schema() -> dict:
    schema = ReporterConfig.model_json_schema()
    schema["title"] = "tapline config"
    return schema


def write_json_schema(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    schema = generate_json_schema()
    path.write_text(json.dumps(schema, indent=2) + "\n")
