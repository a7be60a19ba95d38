"""Pydantic-based configuration schemas and helpers."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)


class SensitivitySettings(BaseModel):
    """Bump-and-revalue settings used when projecting point sensitivities."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    bump_size: float = Field(
        default=1e-7, gt=0.0, le=1e-2, description="Volatility bump applied to each node"
    )

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "SensitivitySettings":
        """Build settings from the ``sensitivity`` section of a config tree."""
        return cls(bump_size=float(cfg.get("bump_size", 1e-7)))


class NumericsSettings(BaseModel):
    """Numerical tolerances for surface evaluation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    time_tolerance: float = Field(
        default=1e-12, ge=0.0, description="Tolerance when matching a query time to a pillar"
    )


class LoggingSettings(BaseModel):
    """Logging configuration parsed from YAML."""

    model_config = ConfigDict(extra="forbid")

    level: str = Field(default="INFO", description="Root logging level")

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        canonical = value.upper()
        if canonical not in allowed:
            raise ValueError(f"level must be one of {sorted(allowed)}")
        return canonical


class AppConfig(BaseModel):
    """Top-level configuration container."""

    model_config = ConfigDict(extra="forbid")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    numerics: NumericsSettings = Field(default_factory=NumericsSettings)
    sensitivity: SensitivitySettings = Field(default_factory=SensitivitySettings)

    def to_overrides(self) -> dict:
        """Convert to an overrides mapping for :func:`fxsmile.config.get_config`."""
        return self.model_dump()


class ConfigValidationError(RuntimeError):
    """Raised when one or more configuration files fail validation."""

    def __init__(self, errors: list[tuple[Path, ValidationError]]):
        message_lines = ["Configuration validation failed:"]
        for path, error in errors:
            message_lines.append(f"- {path}: {error}")
        super().__init__("\n".join(message_lines))
        self.errors = errors


def _load_yaml(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration at {path} must contain a mapping")
    return data


def load_config(path: Path | str) -> AppConfig:
    """Load a configuration file into an :class:`AppConfig`."""
    target = Path(path)
    payload = _load_yaml(target)
    return AppConfig.model_validate(payload)


def discover_config_files(paths: Iterable[Path | str]) -> list[Path]:
    """Discover YAML configuration files from provided paths."""
    discovered: list[Path] = []
    seen = set()
    for raw_path in paths:
        path = Path(raw_path)
        if path.is_file() and path.suffix in {".yml", ".yaml"}:
            resolved = path.resolve()
            if resolved not in seen:
                discovered.append(resolved)
                seen.add(resolved)
        elif path.is_dir():
            for pattern in ("*.yml", "*.yaml"):
                for candidate in sorted(path.rglob(pattern)):
                    resolved = candidate.resolve()
                    if resolved not in seen:
                        discovered.append(resolved)
                        seen.add(resolved)
    return discovered


def collect_and_validate(paths: Iterable[Path | str]) -> list[AppConfig]:
    """Validate all configuration files under the given paths."""
    files = discover_config_files(paths)
    errors: list[tuple[Path, ValidationError]] = []
    configs: list[AppConfig] = []
    for file in files:
        try:
            configs.append(load_config(file))
        except ValidationError as error:
            errors.append((file, error))
    if errors:
        raise ConfigValidationError(errors)
    return configs


__all__ = [
    "SensitivitySettings",
    "NumericsSettings",
    "LoggingSettings",
    "AppConfig",
    "load_config",
    "discover_config_files",
    "collect_and_validate",
    "ConfigValidationError",
]
