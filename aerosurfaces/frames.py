"""
Coordinate Frames and Transforms

Rigid transforms between the world, body and surface frames:
- World: Y up, the integrator's inertial frame
- Body: attached to the aircraft, -Z forward (nose), +X right, +Y up
- Surface: attached to a lifting surface, +X along the span (right),
  +Y normal to the chord plane (up), +Z along the chord (leading edge
  to trailing edge, "back")

Rotations are unit quaternions q = [w, x, y, z] where w is the scalar part.
A Transform rotates first, then translates (no scale).
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Sequence


@dataclass
class Quaternion:
    """
    Unit quaternion for attitude representation.
    q = w + xi + yj + zk, stored as [w, x, y, z]

    Rotates vectors from a child frame into its parent frame.
    """
    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self):
        """Normalize on creation to ensure unit quaternion."""
        norm = np.sqrt(self.w**2 + self.x**2 + self.y**2 + self.z**2)
        if norm > 1e-10:
            self.w /= norm
            self.x /= norm
            self.y /= norm
            self.z /= norm

    @classmethod
    def identity(cls) -> 'Quaternion':
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_axis_angle(cls, axis: Sequence[float], angle: float) -> 'Quaternion':
        """
        Create quaternion for a right-handed rotation about an axis.

        Args:
            axis: Rotation axis (need not be normalized)
            angle: Rotation angle (rad)
        """
        axis = np.asarray(axis, dtype=np.float64)
        norm = np.linalg.norm(axis)
        if norm < 1e-12:
            return cls.identity()
        axis = axis / norm
        s = np.sin(angle / 2)
        return cls(np.cos(angle / 2), axis[0] * s, axis[1] * s, axis[2] * s)

    @classmethod
    def from_rotation_x(cls, angle: float) -> 'Quaternion':
        return cls.from_axis_angle([1.0, 0.0, 0.0], angle)

    @classmethod
    def from_rotation_y(cls, angle: float) -> 'Quaternion':
        return cls.from_axis_angle([0.0, 1.0, 0.0], angle)

    @classmethod
    def from_rotation_z(cls, angle: float) -> 'Quaternion':
        return cls.from_axis_angle([0.0, 0.0, 1.0], angle)

    @classmethod
    def from_array(cls, arr: Sequence[float]) -> 'Quaternion':
        """Create quaternion from [w, x, y, z]."""
        return cls(arr[0], arr[1], arr[2], arr[3])

    def to_array(self) -> np.ndarray:
        """Return quaternion as numpy array [w, x, y, z]."""
        return np.array([self.w, self.x, self.y, self.z])

    def to_dcm(self) -> np.ndarray:
        """
        Direction cosine matrix of this rotation.

        Returns:
            3x3 matrix R with v_parent = R @ v_child
        """
        w, x, y, z = self.w, self.x, self.y, self.z

        return np.array([
            [1 - 2*(y**2 + z**2),     2*(x*y - w*z),     2*(x*z + w*y)],
            [    2*(x*y + w*z), 1 - 2*(x**2 + z**2),     2*(y*z - w*x)],
            [    2*(x*z - w*y),     2*(y*z + w*x), 1 - 2*(x**2 + y**2)]
        ])

    def conjugate(self) -> 'Quaternion':
        """Inverse rotation."""
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def __mul__(self, other: 'Quaternion') -> 'Quaternion':
        """Hamilton product; (a * b) applies b first, then a."""
        w1, x1, y1, z1 = self.w, self.x, self.y, self.z
        w2, x2, y2, z2 = other.w, other.x, other.y, other.z

        return Quaternion(
            w1*w2 - x1*x2 - y1*y2 - z1*z2,
            w1*x2 + x1*w2 + y1*z2 - z1*y2,
            w1*y2 - x1*z2 + y1*w2 + z1*x2,
            w1*z2 + x1*y2 - y1*x2 + z1*w2
        )

    def rotate_vector(self, v: Sequence[float]) -> np.ndarray:
        """Rotate a vector from the child frame into the parent frame."""
        return self.to_dcm() @ np.asarray(v, dtype=np.float64)

    def inverse_rotate_vector(self, v: Sequence[float]) -> np.ndarray:
        """Rotate a vector from the parent frame into the child frame."""
        return self.to_dcm().T @ np.asarray(v, dtype=np.float64)


@dataclass
class Transform:
    """
    Rigid transform: rotation followed by translation.

    Maps points from a child frame (body, surface) into its parent frame.
    """

    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: Quaternion = field(default_factory=Quaternion.identity)

    def __post_init__(self):
        self.translation = np.asarray(self.translation, dtype=np.float64)

    @classmethod
    def from_xyz(cls, x: float, y: float, z: float) -> 'Transform':
        return cls(translation=np.array([x, y, z], dtype=np.float64))

    def with_rotation(self, rotation: Quaternion) -> 'Transform':
        return Transform(translation=self.translation.copy(), rotation=rotation)

    def mul_transform(self, child: 'Transform') -> 'Transform':
        """Compose: the returned transform maps child-local points to this transform's parent."""
        return Transform(
            translation=self.translation + self.rotation.rotate_vector(child.translation),
            rotation=self.rotation * child.rotation
        )

    def transform_point(self, point: Sequence[float]) -> np.ndarray:
        return self.translation + self.rotation.rotate_vector(point)

    # Axis helpers (local axes expressed in the parent frame)

    @property
    def right(self) -> np.ndarray:
        return self.rotation.rotate_vector([1.0, 0.0, 0.0])

    @property
    def left(self) -> np.ndarray:
        return -self.right

    @property
    def up(self) -> np.ndarray:
        return self.rotation.rotate_vector([0.0, 1.0, 0.0])

    @property
    def down(self) -> np.ndarray:
        return -self.up

    @property
    def back(self) -> np.ndarray:
        return self.rotation.rotate_vector([0.0, 0.0, 1.0])

    @property
    def forward(self) -> np.ndarray:
        return -self.back


def normalize_or_zero(v: Sequence[float]) -> np.ndarray:
    """
    Unit vector along v, or the zero vector when v has no direction.

    Never returns NaN: zero-length or non-finite inputs map to zero.
    """
    v = np.asarray(v, dtype=np.float64)
    norm = np.linalg.norm(v)
    if not np.isfinite(norm) or norm < 1e-12:
        return np.zeros(3)
    return v / norm
