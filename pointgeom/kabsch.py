"""Rigid alignment of paired point sets (Kabsch algorithm)."""

import logging
import warnings

import numpy as np

from .centroid import centroid
from .transforms import RigidTransform

logger = logging.getLogger(__name__)


class AlignmentError(RuntimeError):
    """The SVD of the cross-covariance matrix could not be computed."""


class DegenerateCorrespondenceWarning(UserWarning):
    """The cross-covariance matrix has rank < 2, so the rotation is not unique."""


def cross_covariance(source_centered, target_centered):
    """
    Sum of outer products of centered corresponding points.

    Source points index the rows and target points the columns:
    ``H[i, j] = sum_k source[k, i] * target[k, j]``.

    Args:
        source_centered: Centered source points (N, 3)
        target_centered: Centered target points (N, 3)

    Returns:
        3x3 cross-covariance matrix
    """
    return source_centered.T @ target_centered


def align(correspondences, warn_degenerate=True):
    """
    Find the rigid transform that best maps source points onto target points.

    Minimizes ``sum ||R @ p_i + t - q_i||^2`` over proper rotations R
    (det(R) = +1) and translations t. When the cross-covariance matrix has
    rank < 2 (fewer than 3 non-collinear source points, or targets collapsed
    onto a line or a point) several rotations are optimal and the one produced by
    the SVD is returned unchanged.

    Args:
        correspondences: Iterable of (source_point, target_point) pairs
        warn_degenerate: Emit DegenerateCorrespondenceWarning for
            underdetermined rotations

    Returns:
        RigidTransform, or None if there are no correspondences

    Raises:
        ValueError: If points are not 3-dimensional
        AlignmentError: If the SVD does not converge (e.g. non-finite input)
    """
    pairs = list(correspondences)
    if not pairs:
        return None

    source_points = np.array([np.asarray(source) for source, _ in pairs], dtype=float)
    target_points = np.array([np.asarray(target) for _, target in pairs], dtype=float)
    if source_points.ndim != 2 or source_points.shape[1] != 3:
        raise ValueError(f"Expected source points with shape (n, 3), got {source_points.shape}")
    if target_points.ndim != 2 or target_points.shape[1] != 3:
        raise ValueError(f"Expected target points with shape (n, 3), got {target_points.shape}")

    # Compute centroids
    source_centroid = centroid(source_points)
    target_centroid = centroid(target_points)

    # Center the points
    source_centered = source_points - source_centroid
    target_centered = target_points - target_centroid

    H = cross_covariance(source_centered, target_centered)
    if not np.all(np.isfinite(H)):
        raise AlignmentError("Cross-covariance matrix has non-finite entries")
    try:
        U, S, Vt = np.linalg.svd(H)
    except np.linalg.LinAlgError as err:
        raise AlignmentError(f"SVD of cross-covariance matrix failed: {err}") from err

    if warn_degenerate and _is_degenerate(S):
        logger.warning("Rotation underdetermined by %d correspondences", len(pairs))
        warnings.warn(
            f"cross-covariance of {len(pairs)} correspondences has rank < 2; rotation is not unique",
            DegenerateCorrespondenceWarning,
            stacklevel=2,
        )

    # Handle reflection case
    d = -1.0 if np.linalg.det(U @ Vt) < 0 else 1.0
    rotation_t = U @ np.diag([1.0, 1.0, d]) @ Vt

    # U diag Vt maps target onto source; its transpose maps source onto target
    rotation = rotation_t.T

    translation = target_centroid - rotation @ source_centroid

    logger.debug("Aligned %d correspondences, singular values %s", len(pairs), S)
    return RigidTransform(rotation, translation)


def align_point_sets(source_points, target_points, warn_degenerate=True):
    """
    Align two point sets whose i-th points correspond.

    Args:
        source_points: Source points (N, 3)
        target_points: Target points (N, 3)

    Returns:
        RigidTransform, or None if the sets are empty
    """
    if len(source_points) != len(target_points):
        raise ValueError(
            f"Expected point sets of equal length, got {len(source_points)} and {len(target_points)}"
        )
    return align(zip(source_points, target_points), warn_degenerate=warn_degenerate)


def _is_degenerate(singular_values, tol=1e-10):
    # the rotation is unique only when H has rank >= 2
    if singular_values[0] == 0.0:
        return True
    return singular_values[1] <= tol * singular_values[0]
