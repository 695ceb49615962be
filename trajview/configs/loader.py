"""Configuration loading and validation for the trajectory viewer."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any, Mapping

import yaml


class ConfigValidationError(ValueError):
    """Raised when a viewer config file fails validation."""


_DEFAULTS: dict[str, Any] = {
    "trajectory_path": None,
    "frame_duration_ms": 100.0,
    "tick_interval_ms": 16,
    "window_width": 1024,
    "window_height": 768,
    "marker_size": 0.5,
    "log_level": "INFO",
}
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class ViewerConfig:
    """Validated viewer configuration container.

    Provides typed field access for known settings and dictionary-style
    access for extra keys carried through from the file.
    """

    trajectory_path: str | None = None
    frame_duration_ms: float = 100.0
    tick_interval_ms: int = 16
    window_width: int = 1024
    window_height: int = 768
    marker_size: float = 0.5
    log_level: str = "INFO"
    extras: dict[str, Any] = field(default_factory=dict)

    @property
    def frame_duration(self) -> timedelta:
        return timedelta(milliseconds=self.frame_duration_ms)

    @property
    def logging_level(self) -> int:
        return int(getattr(logging, self.log_level))

    def get(self, key: str, default: Any = None) -> Any:
        """Return a configuration value by key.

        Args:
            key: Configuration key name.
            default: Value to return if key does not exist.

        Returns:
            Value associated with ``key`` or ``default``.
        """
        if key in _DEFAULTS:
            return getattr(self, key)
        return self.extras.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Return a full dictionary view of the configuration."""
        payload = {key: getattr(self, key) for key in _DEFAULTS}
        payload.update(self.extras)
        return payload


class ConfigLoader:
    """Load and validate viewer configuration files (YAML or JSON)."""

    @staticmethod
    def load(path: str | Path | None) -> ViewerConfig:
        """Load a viewer config from ``path``.

        Args:
            path: Path to a YAML or JSON config file, or ``None`` for defaults.

        Returns:
            A validated ``ViewerConfig`` instance.
        """
        if path is None:
            return ViewerConfig()
        payload = _read_config_payload(path)
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ConfigValidationError("Config file must contain a mapping object.")
        return _validate_and_build(payload)


def _read_config_payload(path: str | Path) -> Any:
    """Read raw config payload from JSON or YAML file."""
    config_path = Path(path)
    suffix = config_path.suffix.lower()
    if suffix not in {".json", ".yaml", ".yml"}:
        raise ConfigValidationError(f"Unsupported config extension: {suffix}")
    if not config_path.exists():
        raise ConfigValidationError(f"Config file not found: {config_path}")

    content = config_path.read_text(encoding="utf-8")
    try:
        if suffix == ".json":
            return json.loads(content)
        return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigValidationError(f"Failed to parse config '{config_path}': {exc}") from exc


def _positive_number(payload: Mapping[str, Any], key: str) -> float:
    value = payload.get(key, _DEFAULTS[key])
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigValidationError(f"Field '{key}' expected a number, got {type(value).__name__}.")
    try:
        number = float(value)
    except OverflowError as exc:
        raise ConfigValidationError(f"{key} must be a finite number") from exc
    if not math.isfinite(number):
        raise ConfigValidationError(f"{key} must be a finite number, got {value}")
    if number <= 0:
        raise ConfigValidationError(f"{key} must be > 0")
    return number


def _frame_duration_ms(payload: Mapping[str, Any]) -> float:
    value = _positive_number(payload, "frame_duration_ms")
    try:
        duration = timedelta(milliseconds=value)
    except OverflowError as exc:
        raise ConfigValidationError(f"frame_duration_ms is too large: {value}") from exc
    if duration <= timedelta(0):
        raise ConfigValidationError(f"frame_duration_ms must be at least one microsecond, got {value}")
    return value


def _positive_int(payload: Mapping[str, Any], key: str) -> int:
    value = payload.get(key, _DEFAULTS[key])
    if type(value) is not int:
        raise ConfigValidationError(f"Field '{key}' expected int, got {type(value).__name__}.")
    if value <= 0:
        raise ConfigValidationError(f"{key} must be > 0")
    return value


def _validate_and_build(payload: Mapping[str, Any]) -> ViewerConfig:
    """Validate raw mapping and build ``ViewerConfig``."""
    trajectory_path = payload.get("trajectory_path")
    if trajectory_path is not None and (not isinstance(trajectory_path, str) or not trajectory_path):
        raise ConfigValidationError("trajectory_path must be a non-empty string or null")

    log_level = str(payload.get("log_level", _DEFAULTS["log_level"])).upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigValidationError(f"log_level must be one of {list(_LOG_LEVELS)}, got '{log_level}'")

    extras = {k: v for k, v in payload.items() if k not in _DEFAULTS}

    return ViewerConfig(
        trajectory_path=trajectory_path,
        frame_duration_ms=_frame_duration_ms(payload),
        tick_interval_ms=_positive_int(payload, "tick_interval_ms"),
        window_width=_positive_int(payload, "window_width"),
        window_height=_positive_int(payload, "window_height"),
        marker_size=_positive_number(payload, "marker_size"),
        log_level=log_level,
        extras=extras,
    )
