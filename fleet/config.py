"""Engine configuration: thresholds and the safety-critical checklist keys."""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Union

import yaml

SAFETY_CRITICAL_KEYS = frozenset(
    {
        "brake_lights",
        "foot_brake",
        "seat_belts",
        "dashboard_warning",
        "brake_performance",
        "steering",
        "tyres",
    }
)


class ConfigError(ValueError):
    """Raised for unknown keys or invalid values in engine configuration."""


@dataclass(frozen=True)
class EngineConfig:
    """All tunable policy of the health engine."""

    # Warning fires at avg interval * factor; critical at that * critical factor
    inspection_adaptive_factor: float = 1.4
    inspection_critical_factor: float = 1.5
    # Used when a vehicle has fewer than two inspections
    inspection_fallback_warning_days: int = 21
    inspection_fallback_critical_days: int = 45
    maintenance_warning_days: int = 90
    maintenance_critical_days: int = 180
    odometer_gap_km: int = 5000
    recurring_window_size: int = 3
    recurring_min_count: int = 2
    recent_failure_window_days: int = 10
    safety_critical_keys: FrozenSet[str] = field(default=SAFETY_CRITICAL_KEYS)

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "safety_critical_keys":
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{f.name} must be a number, got {value!r}")
            # Day counts, window sizes and distances are whole numbers
            if f.type is int and not isinstance(value, int):
                raise ConfigError(f"{f.name} must be a whole number, got {value!r}")
            if value < 0:
                raise ConfigError(f"{f.name} cannot be negative, got {value!r}")
        if self.recurring_window_size < 1:
            raise ConfigError("recurring_window_size must be at least 1")
        if self.inspection_fallback_critical_days < self.inspection_fallback_warning_days:
            raise ConfigError(
                "inspection_fallback_critical_days must not be below the warning days"
            )
        if self.maintenance_critical_days < self.maintenance_warning_days:
            raise ConfigError(
                "maintenance_critical_days must not be below maintenance_warning_days"
            )
        # Accept any iterable of keys but always store an immutable set
        object.__setattr__(
            self, "safety_critical_keys", frozenset(self.safety_critical_keys)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the YAML/JSON format (camelCase keys)."""
        d: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "safety_critical_keys":
                value = sorted(value)
            d[_camel_case(f.name)] = value
        return d


def _camel_case(name: str) -> str:
    first, *rest = name.split("_")
    return first + "".join(part.capitalize() for part in rest)


_FIELD_BY_KEY = {_camel_case(f.name): f.name for f in fields(EngineConfig)}


def config_from_dict(
    data: Dict[str, Any], base: EngineConfig = EngineConfig()
) -> EngineConfig:
    """
    Build a config from camelCase keys, starting from base.

    Keys that are absent keep the base value.
    """
    overrides = {}
    for key, value in (data or {}).items():
        if key not in _FIELD_BY_KEY:
            raise ConfigError(f"Unknown configuration key '{key}'")
        if key == "safetyCriticalKeys":
            if isinstance(value, str) or not isinstance(value, (list, tuple, set)):
                raise ConfigError("safetyCriticalKeys must be a list of checklist keys")
            value = frozenset(value)
        overrides[_FIELD_BY_KEY[key]] = value
    return replace(base, **overrides)


def load_config(filename: Union[str, Path]) -> EngineConfig:
    """
    Load an engine config from a YAML file.

    Thresholds may sit at the top level or under a 'thresholds' key.
    """
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{filename}: expected a mapping of configuration keys")
    if "thresholds" in data:
        data = data["thresholds"] or {}
    return config_from_dict(data)
