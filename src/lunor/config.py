"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    output_dir:        str = Field(default="dist",  description="Directory for generated component files")
    output_ext:        str = Field(default=".tsx",  pattern=r"^\.(tsx|jsx)$", description=".tsx or .jsx")
    source_extensions: list[str] = Field(default=[".lnr", ".lunor"], description="Lunor source file suffixes")
    indent_width:      int = Field(default=2, ge=1, description="Spaces per indent level in generated code")
    runtime_module:    str = Field(default="react", description="Module providing hooks and Fragment")
    router_module:     str = Field(default="react-router-dom", description="Module providing router primitives")
    auth_token_expression: str = Field(
        default='localStorage.getItem("token")',
        description="JS expression for the bearer token injected by `:fetch ... auth`",
    )
    write_sidecar:     bool = Field(default=False, description="Write a JSON sidecar with signature + diagnostics")
    log_level:         str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    @field_validator("source_extensions", mode="before")
    @classmethod
    def _split_extensions(cls, value: Any) -> Any:
        """Accept a comma-separated string (env vars) as well as a list."""
        if isinstance(value, str):
            value = [v.strip() for v in value.split(",") if v.strip()]
        if isinstance(value, list):
            return [v if v.startswith(".") else f".{v}" for v in value]
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then LUNOR_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"LUNOR_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
