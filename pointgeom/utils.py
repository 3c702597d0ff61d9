"""General utility functions."""

import logging
import time
from functools import wraps

import numpy as np


def time_function(func):
    """
    Decorator that logs the wall time of each call at DEBUG level,
    on the logger of the module defining ``func``.
    """
    func_logger = logging.getLogger(func.__module__)

    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            func_logger.debug("%s took %.6f seconds", func.__qualname__,
                              time.perf_counter() - start_time)

    return wrapper


def as_point_array(points, dimension=None, name="points"):
    """
    Convert an array-like of points to a 2D float array.

    Args:
        points: Sequence of points or array of shape (N, D)
        dimension: Required point dimension, or None to accept any
        name: Argument name used in error messages

    Returns:
        Array of shape (N, D); an empty input gives shape (0, dimension or 0)
    """
    arr = np.asarray(points, dtype=float)
    if arr.size == 0:
        return arr.reshape(0, dimension or (arr.shape[-1] if arr.ndim == 2 else 0))
    if arr.ndim != 2:
        raise ValueError(f"Expected {name} with shape (n, d), got {arr.shape}")
    if dimension is not None and arr.shape[1] != dimension:
        raise ValueError(f"Expected {name} with shape (n, {dimension}), got {arr.shape}")
    return arr


def nearest_neighbor_search(query_point, root, points_array):
    """
    Iterative nearest neighbor search in KD-tree.

    Args:
        query_point: Point to find the nearest neighbor for
        root: Root node of the KD-tree
        points_array: Numpy array of points the tree was built on

    Returns:
        Tuple of (index into points_array, distance); (-1, inf) for an empty tree
    """
    stack = [root]
    best = (-1, np.inf)

    while stack:
        node = stack.pop()
        if node is None:
            continue

        # Leaf node: check all points in the leaf
        if node.indices is not None:
            leaf_points = points_array[node.indices]
            dists = np.linalg.norm(leaf_points - query_point, axis=1)
            dist = dists.min()
            # lowest index wins among equidistant points
            index = node.indices[dists == dist].min()
            if dist < best[1] or (dist == best[1] and index < best[0]):
                best = (int(index), float(dist))
            continue

        # Internal node: check node point
        dist = np.linalg.norm(node.point - query_point)
        if dist < best[1] or (dist == best[1] and node.index < best[0]):
            best = (int(node.index), float(dist))

        # Traverse tree
        axis = node.axis
        if query_point[axis] < node.point[axis]:
            near_node, far_node = node.left, node.right
        else:
            near_node, far_node = node.right, node.left

        if abs(query_point[axis] - node.point[axis]) <= best[1]:
            stack.append(far_node)
        stack.append(near_node)

    return best
