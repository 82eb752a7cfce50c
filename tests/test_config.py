"""Tests for simulation parameters and parameter files."""

import json
import logging

import pytest

from ripplesurf import ConfigError, InjectionProfile, SimulationParameters, load_parameters, save_parameters
from ripplesurf import defaults
from ripplesurf.config import SCHEMA_VERSION, parameters_from_dict, parameters_to_dict


class TestSimulationParameters:

    def test_defaults(self):
        p = SimulationParameters()
        assert p.damping == defaults.DEFAULT_DAMPING
        assert p.spread == defaults.DEFAULT_SPREAD
        assert p.backend == "numba"
        assert p.trigger.intensity > p.continuous.intensity

    def test_validate_returns_self(self):
        p = SimulationParameters()
        assert p.validate() is p

    @pytest.mark.parametrize("field,value", [("damping", 1.5), ("spread", 0.0), ("damping", -0.1)])
    def test_unstable_values_warn(self, field, value, caplog):
        p = SimulationParameters(**{field: value})
        with caplog.at_level(logging.WARNING, logger="ripplesurf.config"):
            p.validate()
        assert field in caplog.text

    def test_in_range_values_do_not_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="ripplesurf.config"):
            SimulationParameters(damping=1.0, spread=1.0).validate()
        assert caplog.text == ""

    def test_unknown_backend(self):
        with pytest.raises(ConfigError):
            SimulationParameters(backend="cuda").validate()

    def test_non_finite_rejected(self):
        with pytest.raises(ConfigError):
            SimulationParameters(spread=float("nan")).validate()

    @pytest.mark.parametrize("profile", [
        InjectionProfile(intensity=float("nan"), radius=1.0),
        InjectionProfile(intensity=float("inf"), radius=1.0),
        InjectionProfile(intensity=1.0, radius=1.0, speed_gain=float("nan")),
    ])
    def test_non_finite_profile_rejected(self, profile):
        with pytest.raises(ConfigError):
            SimulationParameters(continuous=profile).validate()
        with pytest.raises(ConfigError):
            SimulationParameters(trigger=profile).validate()

    def test_profile_radius_must_be_positive(self):
        with pytest.raises(ConfigError):
            SimulationParameters(trigger=InjectionProfile(1.0, 0.0)).validate()

    def test_with_changes(self):
        p = SimulationParameters().with_changes(damping=0.9)
        assert p.damping == 0.9
        assert p.spread == defaults.DEFAULT_SPREAD


class TestInjectionProfile:

    def test_impulse_at_uses_xy_of_hit(self):
        impulse = InjectionProfile(intensity=0.2, radius=0.5).impulse_at((1.0, -2.0, 0.3))
        assert impulse.center == (1.0, -2.0)
        assert impulse.intensity == 0.2
        assert impulse.radius == 0.5

    def test_speed_gain(self):
        profile = InjectionProfile(intensity=0.1, radius=1.0, speed_gain=0.5)
        assert profile.impulse_at((0, 0, 0), speed=2.0).intensity == pytest.approx(0.2)

    def test_no_speed_gain_ignores_speed(self):
        profile = InjectionProfile(intensity=0.1, radius=1.0)
        assert profile.impulse_at((0, 0, 0), speed=50.0).intensity == 0.1


class TestParameterFiles:

    def test_roundtrip(self, tmp_path):
        p = SimulationParameters(
            damping=0.95,
            spread=0.45,
            wave_height_scale=2.0,
            continuous=InjectionProfile(0.01, 0.3, 0.2),
            backend="scipy",
        )
        path = tmp_path / "params.json"
        save_parameters(p, path)
        assert load_parameters(path) == p

    def test_file_has_schema_version(self, tmp_path):
        path = tmp_path / "params.json"
        save_parameters(SimulationParameters(), path)
        assert json.loads(path.read_text())["schema_version"] == SCHEMA_VERSION

    def test_missing_keys_default_unknown_ignored(self):
        p = parameters_from_dict({"damping": 0.9, "trigger": {"intensity": 3.0}, "colour": "blue"})
        assert p.damping == 0.9
        assert p.spread == defaults.DEFAULT_SPREAD
        assert p.trigger.intensity == 3.0
        assert p.trigger.radius == defaults.DEFAULT_TRIGGER_RADIUS

    def test_dict_contains_profiles(self):
        data = parameters_to_dict(SimulationParameters())
        assert set(data["continuous"]) == {"intensity", "radius", "speed_gain"}

    def test_nan_in_file_rejected(self, tmp_path):
        path = tmp_path / "nan.json"
        path.write_text('{"continuous": {"intensity": NaN}}')
        with pytest.raises(ConfigError):
            load_parameters(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            load_parameters(path)

    @pytest.mark.parametrize("data", [[], {"damping": "fast"}, {"continuous": 3}, {"trigger": {"radius": "x"}}])
    def test_malformed_values(self, data):
        with pytest.raises(ConfigError):
            parameters_from_dict(data)
