"""Configuration system for goscope using Pydantic."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScanConfig(BaseModel):
    """Which files are collected and how declarations are captured."""

    source_suffix: str = ".go"
    test_suffix: str = "_test.go"
    skip_dirs: list[str] = Field(default_factory=lambda: ["vendor"])
    root_marker: str = "go.mod"
    max_signature_lines: int = 12


class SearchConfig(BaseModel):
    """Defaults for ranking and module summaries."""

    default_limit: int = 20
    highlight_count: int = 12
    topic_limit: int = 25


class GoscopeConfig(BaseModel):
    """Root configuration model."""

    scan: ScanConfig = Field(default_factory=ScanConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)


class EnvSettings(BaseSettings):
    """Environment variable overrides."""

    model_config = SettingsConfigDict(
        env_prefix="GOSCOPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    repo_path: str | None = None
    log_level: str = "INFO"


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dicts, override wins on conflicts."""
    result = {**base}
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Load a YAML config file, return empty dict if not found."""
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def load_config(
    project_dir: Path | None = None,
    global_config_dir: Path | None = None,
) -> GoscopeConfig:
    """Load configuration with layered precedence.

    Order (later overrides earlier):
    1. Built-in defaults (Pydantic defaults)
    2. ~/.goscope/config.yaml (global user config)
    3. .goscope/config.yaml (project-level config)
    """
    global_dir = global_config_dir or Path.home() / ".goscope"
    project_config_dir = (project_dir or Path.cwd()) / ".goscope"

    merged: dict[str, Any] = {}
    for config_path in [
        global_dir / "config.yaml",
        project_config_dir / "config.yaml",
    ]:
        merged = _deep_merge(merged, load_yaml_config(config_path))

    return GoscopeConfig(**merged)
