"""
Airframe Configuration

Describes an aircraft as a set of lifting surfaces mounted on a rigid body:
- Surface parameters and where each surface is attached
- Which control channel drives each flap
- Centre of mass (body frame)
- Air density and the constant thrust placeholder

Airframes load from and save to YAML so different aircraft can be flown
without code changes.
"""

import numpy as np
import yaml
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .frames import Quaternion, Transform
from .surface import AeroSurface, ConfigurationError, ControlInputType, SurfaceConfig
from .surface_set import AIR_DENSITY, DEFAULT_THRUST, SurfaceSet


@dataclass
class SurfaceSpec:
    """Static description of one mounted surface."""

    name: str = "surface"
    config: SurfaceConfig = field(default_factory=SurfaceConfig)
    input_type: ControlInputType = ControlInputType.NONE
    input_sensitivity: float = 0.0

    # Mount point and orientation in the body frame
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: Quaternion = field(default_factory=Quaternion.identity)

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=np.float64)
        if self.position.shape != (3,):
            raise ConfigurationError(f"position must have 3 components, got {self.position!r}")
        self.input_type = ControlInputType.parse(self.input_type)

    @property
    def transform(self) -> Transform:
        return Transform(translation=self.position.copy(), rotation=self.rotation)

    def build(self) -> AeroSurface:
        return AeroSurface(
            config=self.config,
            input_type=self.input_type,
            input_sensitivity=self.input_sensitivity
        )

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> 'SurfaceSpec':
        known = {'name', 'config', 'input_type', 'input_sensitivity', 'position', 'rotation'}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown surface keys: {sorted(unknown)}")

        return cls(
            name=data.get('name', 'surface'),
            config=SurfaceConfig.from_dict(data.get('config') or {}),
            input_type=data.get('input_type', 'none'),
            input_sensitivity=float(data.get('input_sensitivity', 0.0)),
            position=_parse_vector(data.get('position', [0.0, 0.0, 0.0]), 'position'),
            rotation=_parse_rotation(data.get('rotation'))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'config': self.config.to_dict(),
            'input_type': self.input_type.value,
            'input_sensitivity': float(self.input_sensitivity),
            'position': [float(x) for x in self.position],
            'rotation': [float(x) for x in self.rotation.to_array()],
        }


def _parse_vector(value: Any, name: str) -> np.ndarray:
    """Three-component vector from YAML."""
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ConfigurationError(f"{name} must have 3 components, got {value!r}")
    try:
        return np.array([float(x) for x in value], dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid {name} {value!r}: {e}") from e


def _parse_rotation(value: Any) -> Quaternion:
    """
    Rotation from YAML: omitted (identity), [w, x, y, z], or
    {axis: [x, y, z], angle: rad}.
    """
    if value is None:
        return Quaternion.identity()
    if isinstance(value, dict):
        if set(value) != {'axis', 'angle'}:
            raise ConfigurationError(f"rotation mapping needs 'axis' and 'angle', got {value!r}")
        axis = _parse_vector(value['axis'], 'rotation axis')
        try:
            angle = float(value['angle'])
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid rotation angle {value['angle']!r}") from e
        return Quaternion.from_axis_angle(axis, angle)
    if isinstance(value, (list, tuple)) and len(value) == 4:
        return Quaternion.from_array([float(x) for x in value])
    raise ConfigurationError(f"Cannot interpret rotation {value!r}")


@dataclass
class AirframeConfig:
    """Complete airframe configuration."""

    name: str = "Unnamed airframe"

    # Propulsion placeholder (N)
    thrust: float = DEFAULT_THRUST

    # kg/m³
    air_density: float = AIR_DENSITY

    # Centre of mass in the body frame (m)
    center_of_mass: np.ndarray = field(default_factory=lambda: np.zeros(3))

    surfaces: List[SurfaceSpec] = field(default_factory=list)

    def __post_init__(self):
        self.center_of_mass = np.asarray(self.center_of_mass, dtype=np.float64)
        if self.center_of_mass.shape != (3,):
            raise ConfigurationError(
                f"center_of_mass must have 3 components, got {self.center_of_mass!r}")
        if self.air_density < 0:
            raise ConfigurationError(f"air_density must be non-negative, got {self.air_density}")

    def build_surface_set(self) -> SurfaceSet:
        """Fresh surfaces (zero deflection) in declaration order."""
        surface_set = SurfaceSet(thrust=self.thrust, air_density=self.air_density)
        for spec in self.surfaces:
            surface_set.add(spec.build(), spec.transform, spec.name)
        return surface_set

    @classmethod
    def from_yaml(cls, filepath: str) -> 'AirframeConfig':
        """Load airframe configuration from YAML file."""
        with open(filepath, 'r') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ConfigurationError(f"{filepath}: expected a mapping at top level")
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> 'AirframeConfig':
        """Create config from dictionary."""
        known = {'name', 'thrust', 'air_density', 'center_of_mass', 'surfaces'}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown airframe keys: {sorted(unknown)}")

        return cls(
            name=data.get('name', 'Unknown'),
            thrust=float(data.get('thrust', DEFAULT_THRUST)),
            air_density=float(data.get('air_density', AIR_DENSITY)),
            center_of_mass=_parse_vector(
                data.get('center_of_mass', [0.0, 0.0, 0.0]), 'center_of_mass'),
            surfaces=[SurfaceSpec._from_dict(s) for s in data.get('surfaces') or []]
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for serialization."""
        return {
            'name': self.name,
            'thrust': float(self.thrust),
            'air_density': float(self.air_density),
            'center_of_mass': [float(x) for x in self.center_of_mass],
            'surfaces': [spec.to_dict() for spec in self.surfaces],
        }

    def save_yaml(self, filepath: str):
        """Save configuration to YAML file."""
        with open(filepath, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def surface(self, name: str) -> Optional[SurfaceSpec]:
        for spec in self.surfaces:
            if spec.name == name:
                return spec
        return None


def create_default_airframe() -> AirframeConfig:
    """ASK 21 two-seat glider with wings, fuselage and tail surfaces."""
    wing = SurfaceConfig(span=8.0, chord=1.2, control_surface_fraction=0.2)
    return AirframeConfig(
        name="ASK 21",
        center_of_mass=np.array([-0.08496038, 0.86599594, -0.15]),
        surfaces=[
            SurfaceSpec(
                name="left wing",
                config=wing,
                input_type=ControlInputType.ROLL,
                input_sensitivity=0.5,
                position=np.array([-4.5, 1.0, 0.2]),
                rotation=Quaternion.from_rotation_z(-0.07)
            ),
            SurfaceSpec(
                name="right wing",
                config=wing,
                input_type=ControlInputType.ROLL,
                input_sensitivity=-0.5,
                position=np.array([4.5, 1.0, 0.2]),
                rotation=Quaternion.from_rotation_z(0.07)
            ),
            SurfaceSpec(
                name="fuselage",
                config=SurfaceConfig(span=0.8, chord=8.5),
                position=np.array([0.0, 0.6, 1.2]),
                rotation=Quaternion.from_rotation_z(np.pi / 2)
            ),
            SurfaceSpec(
                name="vertical stabilizer",
                config=SurfaceConfig(span=1.5, chord=1.0, control_surface_fraction=0.3),
                input_type=ControlInputType.YAW,
                input_sensitivity=0.5,
                position=np.array([0.0, 1.3, 4.9]),
                rotation=Quaternion.from_rotation_z(np.pi / 2)
            ),
            SurfaceSpec(
                name="horizontal stabilizer",
                config=SurfaceConfig(span=3.0, chord=0.8, control_surface_fraction=0.3),
                input_type=ControlInputType.PITCH,
                input_sensitivity=0.5,
                position=np.array([0.0, 2.0, 4.9])
            ),
        ]
    )
