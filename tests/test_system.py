"""
Tests for the per-step aerodynamics system.
"""

import logging

import numpy as np
import pytest
from aerosurfaces.airframe import create_default_airframe
from aerosurfaces.controls import ControlAxes
from aerosurfaces.frames import Quaternion, Transform
from aerosurfaces.surface import AeroSurface, ControlInputType, SurfaceConfig
from aerosurfaces.surface_set import SurfaceSet
from aerosurfaces.system import AeroBody, AerodynamicsSystem, BodyState


@pytest.fixture
def glider():
    return AeroBody.from_airframe(create_default_airframe(), name="glider")


@pytest.fixture
def cruise():
    """Straight and level at 27.7 m/s, 200 m up."""
    return BodyState(
        pose=Transform.from_xyz(0.0, 200.0, 0.0),
        linear_velocity=[0.0, 0.0, -27.7]
    )


class TestAeroBody:

    def test_from_airframe(self, glider):
        assert glider.name == "glider"
        assert len(glider.surface_set) == 5
        np.testing.assert_allclose(glider.center_of_mass, [-0.08496038, 0.86599594, -0.15])

    def test_name_defaults_to_airframe(self):
        assert AeroBody.from_airframe(create_default_airframe()).name == "ASK 21"

    def test_world_center_of_mass(self):
        body = AeroBody("b", SurfaceSet(), [0.0, 0.0, 2.0])
        pose = Transform.from_xyz(1.0, 0.0, 0.0).with_rotation(Quaternion.from_rotation_y(np.pi / 2))
        np.testing.assert_array_almost_equal(body.world_center_of_mass(pose), [3.0, 0.0, 0.0])

    def test_torque_about_world_center_of_mass(self):
        """A surface placed on the centre of mass adds no lever-arm torque."""
        surface_set = SurfaceSet(thrust=0.0)
        surface_set.add(AeroSurface(), Transform.from_xyz(0.0, 1.0, 2.0))
        body = AeroBody("b", surface_set, [0.0, 1.0, 2.0])

        state = BodyState(
            pose=Transform.from_xyz(5.0, 50.0, 0.0),
            linear_velocity=[0.0, 3.0, -30.0]
        )
        fm = body.compute_forces(state)
        sample = fm.samples[0]
        np.testing.assert_allclose(fm.torque, sample.torque, atol=1e-9)


class TestAerodynamicsSystem:

    def test_duplicate_name(self, glider):
        system = AerodynamicsSystem([glider])
        with pytest.raises(ValueError):
            system.add_body(AeroBody("glider", SurfaceSet()))

    def test_container(self, glider):
        system = AerodynamicsSystem([glider, AeroBody("drone", SurfaceSet())])
        assert len(system) == 2
        assert system["glider"] is glider
        assert [b.name for b in system] == ["glider", "drone"]

    def test_step_applies_controls_first(self, glider, cruise):
        """Forces of a step see the deflections written in the same step."""
        system = AerodynamicsSystem([glider])
        neutral = system.step(ControlAxes(), {"glider": cruise})["glider"]
        pulled = system.step(ControlAxes(pitch=1.0), {"glider": cruise})["glider"]

        elevator = glider.surface_set[4].surface
        assert elevator.input_type is ControlInputType.PITCH
        assert elevator.control_surface_angle == pytest.approx(0.5)
        assert not np.allclose(neutral.torque, pulled.torque)

    def test_matches_two_phases(self, glider, cruise):
        system = AerodynamicsSystem([glider])
        axes = ControlAxes(roll=0.3, pitch=-0.2, yaw=0.1)
        stepped = system.step(axes, {"glider": cruise})["glider"]

        system.update_controls(axes)
        phased = system.compute_forces({"glider": cruise})["glider"]

        np.testing.assert_array_equal(stepped.force, phased.force)
        np.testing.assert_array_equal(stepped.torque, phased.torque)

    def test_roll_input_rolls(self, glider, cruise):
        """Opposed aileron deflection produces torque about the nose axis."""
        system = AerodynamicsSystem([glider])
        neutral = system.step(ControlAxes(), {"glider": cruise})["glider"]
        rolled = system.step(ControlAxes(roll=1.0), {"glider": cruise})["glider"]
        roll_change = (rolled.torque - neutral.torque) @ cruise.pose.forward
        assert abs(roll_change) > 1.0

    def test_bodies_are_independent(self, cruise):
        a = AeroBody.from_airframe(create_default_airframe(), name="a")
        b = AeroBody.from_airframe(create_default_airframe(), name="b")
        alone = AerodynamicsSystem([AeroBody.from_airframe(create_default_airframe(), name="a")])
        together = AerodynamicsSystem([a, b])

        slow = BodyState(linear_velocity=[0.0, 0.0, -10.0])
        loads = together.step(ControlAxes(), {"a": cruise, "b": slow})
        reference = alone.step(ControlAxes(), {"a": cruise})

        np.testing.assert_array_equal(loads["a"].force, reference["a"].force)
        assert not np.allclose(loads["a"].force, loads["b"].force)

    def test_missing_state_skipped(self, glider, cruise):
        system = AerodynamicsSystem([glider, AeroBody("drone", SurfaceSet())])
        loads = system.step(ControlAxes(), {"glider": cruise, "unknown": cruise})
        assert set(loads) == {"glider"}

    def test_non_finite_load_logged(self, caplog):
        surface_set = SurfaceSet(thrust=0.0)
        surface_set.add(AeroSurface(SurfaceConfig()))
        system = AerodynamicsSystem([AeroBody("b", surface_set)])
        state = BodyState(linear_velocity=[0.0, 0.0, np.inf])

        with caplog.at_level(logging.WARNING, logger="aerosurfaces.system"):
            loads = system.compute_forces({"b": state})

        assert not loads["b"].is_finite
        assert "Non-finite aerodynamic load on b" in caplog.text

    def test_finite_load_not_logged(self, glider, cruise, caplog):
        system = AerodynamicsSystem([glider])
        with caplog.at_level(logging.WARNING, logger="aerosurfaces.system"):
            system.step(ControlAxes(), {"glider": cruise})
        assert caplog.records == []


class TestBodyState:

    def test_metrics(self, cruise):
        metrics = cruise.metrics
        assert metrics.airspeed == pytest.approx(27.7)
        assert metrics.vertical_speed == pytest.approx(0.0)
        assert metrics.height == pytest.approx(200.0)

    def test_metrics_sinking(self):
        metrics = BodyState(linear_velocity=[0.0, -1.0, -25.0]).metrics
        assert metrics.vertical_speed == pytest.approx(-1.0)
        assert metrics.airspeed == pytest.approx(25.0)

    def test_metrics_at_rest(self):
        metrics = BodyState().metrics
        assert metrics.airspeed == 0.0
