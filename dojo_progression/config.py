"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``DOJO_PROGRESSION_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The club's grading setup (belt ladder, points policy, skills) is NOT part of
``AppConfig``: it belongs to the club and is loaded from the file named by
``[club] config_file`` via ``dojo_progression.club.loader``. ``AppConfig``
holds the engine's own tunables: velocity heuristic constants, forecast
slider bounds, and logging.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class ClubFileConfig(BaseModel):
    """Where the club's grading configuration lives."""

    model_config = ConfigDict(frozen=True)

    config_file: str = "config/club.toml"


class VelocityConfig(BaseModel):
    """Constants of the points-per-class heuristic.

    These are empirical choices, not derived values: 0.85 approximates a
    typical (not perfect) class on the 0–2 per-skill scale, and the bonus
    figures are conservative averages of what coaches hand out.
    """

    model_config = ConfigDict(frozen=True)

    efficiency: float = 0.85
    max_skill_score: float = 2.0
    homework_bonus: float = 1.0
    coach_bonus: float = 0.5

    @field_validator("efficiency")
    @classmethod
    def validate_efficiency(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError(f"efficiency must be in (0.0, 1.0], got {v}.")
        return v

    @field_validator("max_skill_score")
    @classmethod
    def validate_max_skill_score(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"max_skill_score must be > 0, got {v}.")
        return v

    @field_validator("homework_bonus", "coach_bonus")
    @classmethod
    def validate_bonus(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"bonus values must be non-negative, got {v}.")
        return v


class ForecastConfig(BaseModel):
    """Time Machine settings.

    ``sentinel_years`` is how far in the future the "no path at this cadence"
    date is placed. The frequency bounds define the attendance slider.
    ``include_terminal_belt`` makes the goal a fully striped terminal belt
    rather than promotion to it.
    """

    model_config = ConfigDict(frozen=True)

    sentinel_years: int = 10
    include_terminal_belt: bool = False
    default_frequency: int = 2
    min_frequency: int = 1
    max_frequency: int = 6

    @field_validator("sentinel_years")
    @classmethod
    def validate_sentinel_years(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"sentinel_years must be >= 1, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_frequency_bounds(self) -> "ForecastConfig":
        if self.min_frequency < 1:
            raise ValueError(f"min_frequency must be >= 1, got {self.min_frequency}.")
        if not self.min_frequency <= self.default_frequency <= self.max_frequency:
            raise ValueError(
                "Frequency bounds must satisfy min_frequency <= default_frequency "
                f"<= max_frequency, got {self.min_frequency} / "
                f"{self.default_frequency} / {self.max_frequency}."
            )
        return self


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete engine configuration.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    club: ClubFileConfig = ClubFileConfig()
    velocity: VelocityConfig = VelocityConfig()
    forecast: ForecastConfig = ForecastConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    load_dotenv(dotenv_path=root / ".env", override=False)

    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    raw = _apply_env_overrides(raw)

    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply DOJO_PROGRESSION_* env vars to the raw config dict.

    Supported overrides:
      DOJO_PROGRESSION_CLUB_FILE  → raw["club"]["config_file"]
      DOJO_PROGRESSION_LOG_LEVEL  → raw["logging"]["level"]
      DOJO_PROGRESSION_DEBUG      → raw["debug"]
    """
    if club_file := os.environ.get("DOJO_PROGRESSION_CLUB_FILE"):
        raw.setdefault("club", {})["config_file"] = club_file

    if log_level := os.environ.get("DOJO_PROGRESSION_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("DOJO_PROGRESSION_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        club=ClubFileConfig(**raw.get("club", {})),
        velocity=VelocityConfig(**raw.get("velocity", {})),
        forecast=ForecastConfig(**raw.get("forecast", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", False),
    )
