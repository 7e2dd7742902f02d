"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:        str = "chunknamer"
    book_dir:        str = Field(default="bookdown", description="Root directory of the book sources")
    pattern:         str = Field(default="*.Rmd",    description="Glob selecting documents under book_dir")
    label_width:     int = Field(default=3, ge=0,    description="Zero-padding width of label numbers; 0 disables")
    preserve_labels: list[str] = Field(default=[],   description="Chunk labels left untouched (e.g. setup)")

    @field_validator("preserve_labels", mode="before")
    @classmethod
    def _split_labels(cls, v: Any) -> Any:
        """Accept a comma-separated string (env vars) as well as a list."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then CHUNKNAMER_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"CHUNKNAMER_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
