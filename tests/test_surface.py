"""
Tests for surface configuration and the dimensional force output.
"""

import dataclasses
import numpy as np
import pytest
from aerosurfaces.surface import (
    AeroSurface,
    ConfigurationError,
    ControlInputType,
    SurfaceConfig,
)


def air_velocity(alpha: float, speed: float) -> np.ndarray:
    """Local airflow meeting the chord at alpha."""
    return speed * np.array([0.0, -np.sin(alpha), np.cos(alpha)])


class TestSurfaceConfig:
    """Validated once at construction."""

    def test_defaults(self):
        config = SurfaceConfig()
        assert config.lift_slope == pytest.approx(6.28)
        assert config.skin_friction == pytest.approx(0.02)
        assert config.aspect_ratio == pytest.approx(2.0)
        assert config.area == pytest.approx(2.0)

    @pytest.mark.parametrize("kwargs", [
        dict(chord=0.0),
        dict(chord=-1.0),
        dict(span=0.0),
        dict(stall_angle_high=-0.3),
        dict(stall_angle_low=0.3),
        dict(zero_lift_aoa=0.5),
        dict(control_surface_fraction=1.0),
        dict(control_surface_fraction=-0.1),
        dict(lift_slope=0.0),
        dict(lift_slope=float('nan')),
        dict(chord=float('nan')),
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigurationError):
            SurfaceConfig(**kwargs)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            SurfaceConfig(span=-2.0)

    def test_immutable(self):
        config = SurfaceConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.chord = 2.0

    def test_from_dict(self):
        config = SurfaceConfig.from_dict({'span': 8, 'chord': '1.2'})
        assert config.span == pytest.approx(8.0)
        assert config.chord == pytest.approx(1.2)
        assert SurfaceConfig.from_dict(config.to_dict()) == config

    def test_from_dict_unknown_key(self):
        with pytest.raises(ConfigurationError, match="wingspan"):
            SurfaceConfig.from_dict({'wingspan': 8.0})

    def test_from_dict_bad_value(self):
        with pytest.raises(ConfigurationError):
            SurfaceConfig.from_dict({'span': 'wide'})


class TestControlInputType:

    def test_parse(self):
        assert ControlInputType.parse('Pitch') is ControlInputType.PITCH
        assert ControlInputType.parse(ControlInputType.YAW) is ControlInputType.YAW

    def test_parse_unknown(self):
        with pytest.raises(ConfigurationError):
            ControlInputType.parse('throttle')

    def test_surface_accepts_name(self):
        surface = AeroSurface(input_type='roll')
        assert surface.input_type is ControlInputType.ROLL


class TestComputeForces:
    """Lift, drag and torque magnitudes of a single surface."""

    @pytest.fixture
    def surface(self):
        return AeroSurface(SurfaceConfig())

    def test_still_air(self, surface):
        """No airflow, no force."""
        assert surface.compute_forces(np.zeros(3), 1.2) == (0.0, 0.0, 0.0)

    def test_zero_density(self, surface):
        assert surface.compute_forces([0.0, -1.0, 50.0], 0.0) == (0.0, 0.0, 0.0)

    def test_reference_case(self, surface):
        """Small positive alpha inside the low-AoA region, against a hand calculation."""
        forces = surface.compute_forces([0.0, -1.0, 50.0], 1.2)

        aspect_ratio = 2.0
        slope = 6.28 * aspect_ratio / (aspect_ratio + 2.0 * (aspect_ratio + 4.0) / (aspect_ratio + 2.0))
        alpha = np.arctan2(1.0, 50.0)
        cl = slope * alpha
        effective = alpha - cl / (np.pi * aspect_ratio)
        ct = 0.02 * np.cos(effective)
        cn = (cl + np.sin(effective) * ct) / np.cos(effective)
        cd = cn * np.sin(effective) + ct * np.cos(effective)
        q = 0.5 * 1.2 * (1.0 + 50.0**2)
        area = 2.0

        assert alpha == pytest.approx(0.02, abs=1e-4)
        assert forces.lift == pytest.approx(cl * q * area, rel=0.01)
        assert forces.drag == pytest.approx(cd * q * area, rel=0.01)

        # Drag is mostly skin friction at this angle
        cd_actual = forces.drag / (q * area)
        assert 0.02 <= cd_actual < 0.025

    def test_span_flow_ignored(self, surface):
        """Velocity along the span produces nothing."""
        with_span = surface.compute_forces([30.0, -1.0, 50.0], 1.2)
        without = surface.compute_forces([0.0, -1.0, 50.0], 1.2)
        assert with_span == without
        assert surface.compute_forces([40.0, 0.0, 0.0], 1.2) == (0.0, 0.0, 0.0)

    @pytest.mark.parametrize("alpha", [0.1, 0.3, 0.5, -0.8])
    def test_quadratic_in_airspeed(self, surface, alpha):
        slow = surface.compute_forces(air_velocity(alpha, 20.0), 1.2)
        fast = surface.compute_forces(air_velocity(alpha, 40.0), 1.2)
        np.testing.assert_allclose(fast, 4.0 * np.array(slow), rtol=1e-9)

    def test_symmetric_forces(self, surface):
        for alpha in [0.1, 0.35, 0.9]:
            up = surface.compute_forces(air_velocity(alpha, 30.0), 1.2)
            down = surface.compute_forces(air_velocity(-alpha, 30.0), 1.2)
            assert down.lift == pytest.approx(-up.lift, abs=1e-9)
            assert down.drag == pytest.approx(up.drag, abs=1e-9)
            assert down.torque == pytest.approx(-up.torque, abs=1e-9)

    def test_pure(self, surface):
        """Repeated calls agree and leave inputs alone."""
        v = [5.0, -2.0, 30.0]
        first = surface.compute_forces(v, 1.2)
        second = surface.compute_forces(v, 1.2)
        assert first == second
        assert v == [5.0, -2.0, 30.0]
        assert surface.control_surface_angle == 0.0

    def test_torque_scales_with_chord(self):
        """Torque is coefficient * q * S * chord."""
        short = AeroSurface(SurfaceConfig(chord=1.0, span=2.0))
        long = AeroSurface(SurfaceConfig(chord=2.0, span=4.0))
        v = air_velocity(0.1, 30.0)
        ratio = long.compute_forces(v, 1.2).torque / short.compute_forces(v, 1.2).torque
        assert ratio == pytest.approx(8.0)

    def test_flap_deflection_adds_lift(self):
        surface = AeroSurface(SurfaceConfig(control_surface_fraction=0.3))
        v = air_velocity(0.05, 30.0)
        neutral = surface.compute_forces(v, 1.2).lift

        surface.control_surface_angle = 0.2
        assert surface.compute_forces(v, 1.2).lift > neutral

        surface.control_surface_angle = -0.2
        assert surface.compute_forces(v, 1.2).lift < neutral

    def test_classify_uses_current_deflection(self):
        surface = AeroSurface(SurfaceConfig(control_surface_fraction=0.3))
        assert type(surface.classify(0.0)).__name__ == 'LowAoARegion'
        assert surface.lift_curve().zero_lift_aoa == pytest.approx(0.0, abs=1e-12)
        surface.control_surface_angle = 0.3
        assert surface.lift_curve().zero_lift_aoa < 0.0
