from __future__ import annotations

from enum import Enum
from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ColorMode(str, Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"

    def as_echo_color(self) -> bool | None:
        """Map to the ``color`` argument of typer.echo."""
        if self is ColorMode.ALWAYS:
            return True
        if self is ColorMode.NEVER:
            return False
        return None


class SuiteConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    path: str
    name: str | None = None

    @property
    def label(self) -> str:
        return self.name or Path(self.path).stem


class GradingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    suites: list[SuiteConfig]
    pass_threshold: int = Field(default=100, ge=0, le=100)
    color: ColorMode = ColorMode.AUTO
    verbose: bool = False
    debug_log: str | None = None

    @field_validator("suites", mode="before")
    @classmethod
    def normalize_suites(cls, v: list) -> list:
        if not isinstance(v, list):
            return v
        result = []
        for item in v:
            if isinstance(item, str):
                result.append(SuiteConfig(path=item))
            elif isinstance(item, dict):
                result.append(SuiteConfig(**item))
            else:
                result.append(item)
        return result

    @field_validator("suites")
    @classmethod
    def suites_must_not_be_empty(cls, v: list[SuiteConfig]) -> list[SuiteConfig]:
        if not v:
            raise ValueError("suites must not be empty")
        return v

    @field_validator("debug_log")
    @classmethod
    def expand_debug_log(cls, v: str | None) -> str | None:
        """Expand ${VAR} and ${VAR:-default} references in the log path."""
        if v is None:
            return v
        expanded = expandvars(v)
        return expanded or None


def load_config(path: Path) -> GradingConfig:
    """Load and validate a grading config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a YAML mapping")

    config = GradingConfig(**raw)

    # Resolve relative paths relative to config file location
    for suite in config.suites:
        suite_path = Path(suite.path)
        if not suite_path.is_absolute():
            suite.path = str((config_dir / suite_path).resolve())

    if config.debug_log is not None:
        log_path = Path(config.debug_log)
        if not log_path.is_absolute():
            config.debug_log = str((config_dir / log_path).resolve())

    return config
