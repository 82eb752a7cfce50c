"""Tests for ripplesurf.impulse."""

import numpy as np
import pytest

from ripplesurf import GridField, Impulse, InvalidImpulse, TopologyMismatch, inject


def distances(positions, center):
    return np.hypot(positions[:, 0] - center[0], positions[:, 1] - center[1])


class TestImpulse:

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_non_positive_radius_rejected(self, radius):
        with pytest.raises(InvalidImpulse):
            Impulse(center=(0.0, 0.0), intensity=1.0, radius=radius)

    @pytest.mark.parametrize("bad", [np.nan, np.inf])
    def test_non_finite_rejected(self, bad):
        with pytest.raises(InvalidImpulse):
            Impulse(center=(bad, 0.0), intensity=1.0, radius=1.0)
        with pytest.raises(InvalidImpulse):
            Impulse(center=(0.0, 0.0), intensity=bad, radius=1.0)

    def test_center_normalized_to_floats(self):
        impulse = Impulse(center=np.array([1, 2]), intensity=1.0, radius=1.0)
        assert impulse.center == (1.0, 2.0)


class TestInject:

    def test_cone_falloff(self, unit_lattice):
        positions = unit_lattice(7, 7, origin=(3, 3))
        field = GridField(7, 7)
        impulse = Impulse(center=(0.0, 0.0), intensity=2.0, radius=2.5)
        inject(field, impulse, positions)

        d = distances(positions, impulse.center)
        expected = np.where(d < 2.5, 2.0 * (2.5 - d), 0.0)
        np.testing.assert_allclose(field.buffer_current, expected)
        assert not field.buffer_previous.any()

    def test_radius_boundary_is_exclusive(self, unit_lattice):
        positions = unit_lattice(5, 5, origin=(2, 2))
        field = GridField(5, 5)
        inject(field, Impulse(center=(0.0, 0.0), intensity=1.0, radius=1.0), positions)

        origin = 2 * 5 + 2
        assert field.get(origin) == 1.0
        # Neighbours sit exactly at d == radius
        for i in (origin - 1, origin + 1, origin - 5, origin + 5):
            assert field.get(i) == 0.0
        assert np.count_nonzero(field.buffer_current) == 1

    def test_only_cells_within_radius_change(self, rng):
        positions = rng.uniform(-5, 5, size=(200, 2))
        field = GridField(20, 10)
        impulse = Impulse(center=(0.5, -1.0), intensity=-0.3, radius=2.0)
        inject(field, impulse, positions)

        outside = distances(positions, impulse.center) >= 2.0
        assert not field.buffer_current[outside].any()
        assert (field.buffer_current[~outside] < 0).all()

    def test_linear_in_intensity(self, unit_lattice):
        positions = unit_lattice(9, 9, origin=(4, 4))
        base, scaled = GridField(9, 9), GridField(9, 9)
        inject(base, Impulse((0.3, 0.2), 0.7, 3.0), positions)
        inject(scaled, Impulse((0.3, 0.2), 3 * 0.7, 3.0), positions)
        np.testing.assert_allclose(scaled.buffer_current, 3 * base.buffer_current)

    def test_additive(self, unit_lattice):
        positions = unit_lattice(5, 5, origin=(2, 2))
        field = GridField(5, 5)
        field.buffer_current[:] = 1.0
        impulse = Impulse((0.0, 0.0), 1.0, 1.5)
        inject(field, impulse, positions)
        inject(field, impulse, positions)
        assert field.get(12) == pytest.approx(1.0 + 2 * 1.5)
        assert field.get(0) == 1.0

    def test_uses_only_planar_coordinates(self, unit_lattice):
        flat = unit_lattice(4, 4)
        raised = np.column_stack([flat, np.full(16, 10.0)])
        a, b = GridField(4, 4), GridField(4, 4)
        impulse = Impulse((1.0, 1.0), 1.0, 2.0)
        inject(a, impulse, flat)
        inject(b, impulse, raised)
        np.testing.assert_array_equal(a.buffer_current, b.buffer_current)

    def test_position_count_must_match(self, unit_lattice):
        field = GridField(4, 4)
        with pytest.raises(TopologyMismatch):
            inject(field, Impulse((0.0, 0.0), 1.0, 1.0), unit_lattice(4, 3))

    def test_position_shape_must_be_pairs(self):
        field = GridField(2, 2)
        with pytest.raises(TopologyMismatch):
            inject(field, Impulse((0.0, 0.0), 1.0, 1.0), np.zeros(4))
