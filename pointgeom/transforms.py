"""Rigid transformation utilities."""

import numpy as np
from scipy.spatial.transform import Rotation


class RigidTransform:
    """
    Rotation followed by translation in 3D.

    Applying the transform to a point p gives ``rotation @ p + translation``.
    Composition follows matrix order: ``(a @ b).apply(p) == a.apply(b.apply(p))``.
    """

    def __init__(self, rotation, translation):
        """
        Args:
            rotation: 3x3 rotation matrix
            translation: Translation vector of length 3
        """
        rotation = np.asarray(rotation, dtype=float)
        translation = np.asarray(translation, dtype=float).reshape(-1)
        if rotation.shape != (3, 3):
            raise ValueError(f"Expected rotation with shape (3, 3), got {rotation.shape}")
        if translation.shape != (3,):
            raise ValueError(f"Expected translation with shape (3,), got {translation.shape}")
        self.rotation = rotation
        self.translation = translation

    @classmethod
    def identity(cls):
        return cls(np.eye(3), np.zeros(3))

    @classmethod
    def from_matrix(cls, transformation):
        """Build from a 4x4 homogeneous transformation matrix."""
        transformation = np.asarray(transformation, dtype=float)
        if transformation.shape != (4, 4):
            raise ValueError(f"Expected a (4, 4) matrix, got {transformation.shape}")
        return cls(transformation[:3, :3], transformation[:3, 3])

    def as_matrix(self):
        """Homogeneous 4x4 transformation matrix."""
        transformation = np.eye(4)
        transformation[:3, :3] = self.rotation
        transformation[:3, 3] = self.translation
        return transformation

    def as_quaternion(self):
        """Rotation as a unit quaternion in scalar-last (x, y, z, w) order."""
        return Rotation.from_matrix(self.rotation).as_quat()

    def apply(self, point):
        """Rotate, then translate a single point."""
        return self.rotation @ np.asarray(point, dtype=float) + self.translation

    def apply_points(self, points):
        """Transform an (N, 3) array of points."""
        return apply_transformation(points, self.as_matrix())

    def inverse(self):
        rotation_t = self.rotation.T
        return RigidTransform(rotation_t, -rotation_t @ self.translation)

    def __matmul__(self, other):
        if not isinstance(other, RigidTransform):
            return NotImplemented
        return RigidTransform(
            self.rotation @ other.rotation,
            self.rotation @ other.translation + self.translation,
        )

    def allclose(self, other, atol=1e-8):
        """Whether rotation and translation match ``other`` within ``atol``."""
        return (np.allclose(self.rotation, other.rotation, rtol=0.0, atol=atol)
                and np.allclose(self.translation, other.translation, rtol=0.0, atol=atol))

    def __eq__(self, other):
        if not isinstance(other, RigidTransform):
            return NotImplemented
        return (np.array_equal(self.rotation, other.rotation)
                and np.array_equal(self.translation, other.translation))

    __hash__ = None

    def __repr__(self):
        return (f"RigidTransform(rotation={self.rotation.tolist()}, "
                f"translation={self.translation.tolist()})")


def apply_transformation(points, transformation):
    """
    Apply a 4x4 homogeneous transformation to points.

    Args:
        points: Points array (N, 3)
        transformation: 4x4 transformation matrix

    Returns:
        Transformed points (N, 3)
    """
    R = transformation[:3, :3]
    t = transformation[:3, 3]
    return np.asarray(points, dtype=float) @ R.T + t
