from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

CONFIG_DIR = Path.home() / ".weaseltoon"
CONFIG_FILE = CONFIG_DIR / "weaseltoon.cfg"
DEFAULT_CONFIG = {
    "_comment": "Valid units: inches (default), millimeters, meters. Value is case-insensitive.",
    "units": "inches",
    "circular_segments": 64,
    "loft_steps": 8,
}
_UNIT_INFO: Dict[str, Dict[str, Any]] = {
    "millimeters": {"label": "mm", "scale_to_mm": 1.0},
    "meters": {"label": "m", "scale_to_mm": 1000.0},
    "inches": {"label": "in", "scale_to_mm": 25.4},
}
_UNIT_ALIASES = {
    "millimeter": "millimeters",
    "millimeters": "millimeters",
    "mm": "millimeters",
    "meter": "meters",
    "meters": "meters",
    "m": "meters",
    "inch": "inches",
    "inches": "inches",
    "in": "inches",
}

# Every dimension in the model is authored in inches.
MODEL_UNITS = "inches"


@dataclass(frozen=True)
class UnitSettings:
    """Resolved output units."""

    name: str
    label: str
    scale_to_mm: float

    @property
    def scale_from_model(self) -> float:
        """Factor applied to model (inch) coordinates when writing files."""
        return _UNIT_INFO[MODEL_UNITS]["scale_to_mm"] / self.scale_to_mm


@dataclass(frozen=True)
class Settings:
    units: UnitSettings
    circular_segments: int
    loft_steps: int


def ensure_user_config() -> None:
    """Ensure ~/.weaseltoon/weaseltoon.cfg exists with sane defaults."""

    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    if CONFIG_FILE.exists():
        return

    try:
        CONFIG_FILE.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config() -> Dict[str, Any]:
    ensure_user_config()
    try:
        loaded = json.loads(CONFIG_FILE.read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(loaded, dict):
        return DEFAULT_CONFIG.copy()
    return loaded


def normalize_units(value: str) -> str | None:
    key = value.strip().lower()
    if key in _UNIT_INFO:
        return key
    return _UNIT_ALIASES.get(key)


def resolve_units(value: str) -> UnitSettings:
    normalized = normalize_units(value)
    if normalized is None:
        raise ValueError(f"Unknown units '{value}'. Use one of {sorted(_UNIT_INFO)}.")
    info = _UNIT_INFO[normalized]
    return UnitSettings(name=normalized, label=info["label"], scale_to_mm=info["scale_to_mm"])


def _positive_int(raw: object, fallback: int) -> int:
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return fallback
    return value if value > 0 else fallback


def get_settings() -> Settings:
    """Return the configured output units and tessellation defaults."""

    raw_config = _load_user_config()
    raw_units = str(raw_config.get("units", DEFAULT_CONFIG["units"]))
    normalized = normalize_units(raw_units) or DEFAULT_CONFIG["units"]

    return Settings(
        units=resolve_units(normalized),
        circular_segments=_positive_int(raw_config.get("circular_segments"), DEFAULT_CONFIG["circular_segments"]),
        loft_steps=_positive_int(raw_config.get("loft_steps"), DEFAULT_CONFIG["loft_steps"]),
    )
