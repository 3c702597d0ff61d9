"""Centroid computation and centroid shifting for point sequences."""

import numpy as np


class PointAccumulator:
    """
    Running coordinate sum and count of a point sequence.

    Points are summed strictly in the order they are pushed, one addition per
    coordinate, so results are reproducible bit for bit. The dtype of the
    first point is kept for the whole sum.
    """

    def __init__(self):
        self.total = None
        self.count = 0

    def push(self, point):
        """Add one point to the running sum."""
        point = np.asarray(point)
        if self.total is None:
            if point.ndim != 1:
                raise ValueError(f"Expected a point with shape (d,), got {point.shape}")
            self.total = point.copy()
        else:
            if point.shape != self.total.shape:
                raise ValueError(
                    f"Expected a point with shape {self.total.shape}, got {point.shape}"
                )
            self.total = self.total + point
        self.count += 1

    def extend(self, points):
        """
        Add every point of an iterable or (N, D) array.

        Args:
            points: Iterable of points, traversed once, or a 2D numpy array
        """
        if isinstance(points, np.ndarray) and points.ndim == 2:
            if points.shape[0] == 0:
                return
            if self.total is not None:
                # keep left-to-right order relative to what was already pushed
                for point in points:
                    self.push(point)
                return
            # cumsum along axis 0 adds row after row, unlike np.sum
            self.total = np.cumsum(points, axis=0)[-1].copy()
            self.count += points.shape[0]
            return

        for point in points:
            self.push(point)

    def mean(self):
        """Mean point, or None when nothing was accumulated."""
        if self.count == 0:
            return None
        return self.total / self.count

    def __len__(self):
        return self.count


def centroid(points):
    """
    Compute the arithmetic mean of a point sequence.

    Args:
        points: Iterable of points (traversed once) or an (N, D) array

    Returns:
        Centroid as a numpy array, or None for an empty sequence
    """
    accumulator = PointAccumulator()
    accumulator.extend(points)
    return accumulator.mean()


def shift_to_origin(points):
    """
    Move points so that their centroid becomes the origin.

    The input is copied and read twice: once for the centroid and once for
    the shifted points. The result is a single-use generator.

    Args:
        points: Iterable of points or an (N, D) array

    Returns:
        Generator of shifted points, or None for an empty sequence
    """
    # own copy, so later edits to the caller's storage do not reach the output
    if isinstance(points, np.ndarray):
        points = points.copy()
    else:
        points = [np.array(point) for point in points]

    center = centroid(points)
    if center is None:
        return None

    return (point - center for point in points)
