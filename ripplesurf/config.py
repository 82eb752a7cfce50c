"""Simulation parameters and parameter files."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from ripplesurf import defaults
from ripplesurf.errors import ConfigError
from ripplesurf.impulse import Impulse

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"


@dataclass(frozen=True)
class InjectionProfile:
    """Calibration for one injection variant (continuous or trigger).

    Attributes:
        intensity: Base impulse intensity (signed)
        radius: Impulse falloff radius in world units
        speed_gain: Extra intensity per unit of pointer speed (0 = speed-independent)
    """
    intensity: float
    radius: float
    speed_gain: float = 0.0

    def impulse_at(self, point, speed: float = 0.0) -> Impulse:
        """Impulse centred on the (x, y) of a world-space hit."""
        intensity = self.intensity * (1.0 + self.speed_gain * speed)
        return Impulse(center=(point[0], point[1]), intensity=intensity, radius=self.radius)


def _continuous_default() -> InjectionProfile:
    return InjectionProfile(
        intensity=defaults.DEFAULT_CONTINUOUS_INTENSITY,
        radius=defaults.DEFAULT_CONTINUOUS_RADIUS,
        speed_gain=defaults.DEFAULT_CONTINUOUS_SPEED_GAIN,
    )


def _trigger_default() -> InjectionProfile:
    return InjectionProfile(
        intensity=defaults.DEFAULT_TRIGGER_INTENSITY,
        radius=defaults.DEFAULT_TRIGGER_RADIUS,
        speed_gain=defaults.DEFAULT_TRIGGER_SPEED_GAIN,
    )


@dataclass(frozen=True)
class SimulationParameters:
    """Per-session integrator and injection settings."""
    damping: float = defaults.DEFAULT_DAMPING
    spread: float = defaults.DEFAULT_SPREAD
    wave_height_scale: float = defaults.DEFAULT_WAVE_HEIGHT_SCALE
    continuous: InjectionProfile = field(default_factory=_continuous_default)
    trigger: InjectionProfile = field(default_factory=_trigger_default)
    backend: str = defaults.DEFAULT_BACKEND

    def validate(self) -> SimulationParameters:
        """Reject unusable values and warn about ones that may not decay.

        Damping and spread outside (0, 1] are accepted but stability is then
        the caller's problem.
        """
        if self.backend not in defaults.BACKEND_CHOICES:
            raise ConfigError(
                f"unknown backend {self.backend!r}, expected one of {defaults.BACKEND_CHOICES}"
            )
        for name in ("damping", "spread", "wave_height_scale"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigError(f"{name} must be finite, got {value}")
        for name in ("damping", "spread"):
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                logger.warning("%s=%g is outside (0, 1]; decay is not guaranteed", name, value)
        for name in ("continuous", "trigger"):
            profile = getattr(self, name)
            for attr in ("intensity", "speed_gain"):
                value = getattr(profile, attr)
                if not math.isfinite(value):
                    raise ConfigError(f"{name} {attr} must be finite, got {value}")
            if not profile.radius > 0:
                raise ConfigError(f"{name} radius must be positive, got {profile.radius}")
        return self

    def with_changes(self, **changes: Any) -> SimulationParameters:
        return replace(self, **changes)


def _profile_from_dict(data: Any, fallback: InjectionProfile) -> InjectionProfile:
    if data is None:
        return fallback
    if not isinstance(data, dict):
        raise ConfigError(f"injection profile must be an object, got {type(data).__name__}")
    known = {f.name for f in fields(InjectionProfile)}
    values = {k: float(v) for k, v in data.items() if k in known}
    return replace(fallback, **values)


def parameters_to_dict(params: SimulationParameters) -> dict[str, Any]:
    data = asdict(params)
    data["schema_version"] = SCHEMA_VERSION
    return data


def parameters_from_dict(data: dict[str, Any]) -> SimulationParameters:
    """Build parameters from a dict. Unknown keys are ignored, missing keys take defaults."""
    if not isinstance(data, dict):
        raise ConfigError(f"parameters must be an object, got {type(data).__name__}")
    base = SimulationParameters()
    try:
        scalars = {
            name: float(data[name])
            for name in ("damping", "spread", "wave_height_scale")
            if name in data
        }
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid numeric parameter: {exc}") from exc
    try:
        params = replace(
            base,
            continuous=_profile_from_dict(data.get("continuous"), base.continuous),
            trigger=_profile_from_dict(data.get("trigger"), base.trigger),
            backend=str(data.get("backend", base.backend)),
            **scalars,
        )
    except ConfigError:
        raise
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid injection profile: {exc}") from exc
    return params.validate()


def save_parameters(params: SimulationParameters, filepath: str | Path) -> None:
    """Write parameters to a JSON file."""
    filepath = Path(filepath)
    with open(filepath, "w") as f:
        json.dump(parameters_to_dict(params), f, indent=2)


def load_parameters(filepath: str | Path) -> SimulationParameters:
    """Read parameters written by ``save_parameters``.

    Raises:
        ConfigError: If the file is not valid JSON or holds bad values
    """
    filepath = Path(filepath)
    try:
        with open(filepath) as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{filepath} is not valid JSON: {exc}") from exc
    version = data.get("schema_version") if isinstance(data, dict) else None
    if version is not None and version != SCHEMA_VERSION:
        logger.warning("Parameter file %s has schema %s, expected %s", filepath, version, SCHEMA_VERSION)
    return parameters_from_dict(data)
