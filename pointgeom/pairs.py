"""Closest point pairs between two point sets."""

import logging

import numpy as np
from joblib import Parallel, delayed

from .kdtree import KDTree
from .utils import as_point_array, nearest_neighbor_search

logger = logging.getLogger(__name__)


def _find_correspondences(source_points, tree, n_jobs=1):
    """Nearest target point for every source point, optionally in parallel."""
    if n_jobs == 1:
        results = [nearest_neighbor_search(p, tree.root, tree.points) for p in source_points]
    else:
        results = Parallel(n_jobs=n_jobs, backend='loky')(
            delayed(nearest_neighbor_search)(p, tree.root, tree.points)
            for p in source_points
        )
    indices, distances = zip(*results)
    return np.array(indices, dtype=np.int64), np.array(distances)


def closest_point_pairs(source, target, max_distance=None, n_jobs=1, leaf_size=128):
    """
    Pair every source point with its nearest target point.

    Args:
        source: Source points (N, D)
        target: Target points (M, D)
        max_distance: Drop pairs farther apart than this
        n_jobs: Number of joblib workers for the neighbor queries
        leaf_size: KD-tree leaf size

    Returns:
        List of (source_index, target_index, distance) in source order
    """
    source_points = as_point_array(source, name="source")
    target_points = as_point_array(target, name="target")
    if len(source_points) == 0 or len(target_points) == 0:
        return []
    if source_points.shape[1] != target_points.shape[1]:
        raise ValueError(
            f"Expected points of equal dimension, got {source_points.shape} and {target_points.shape}"
        )

    tree = KDTree(leaf_size=leaf_size, dimension=target_points.shape[1])
    tree.build(target_points)

    target_indices, distances = _find_correspondences(source_points, tree, n_jobs=n_jobs)

    pairs = [
        (i, int(j), float(dist))
        for i, (j, dist) in enumerate(zip(target_indices, distances))
        if max_distance is None or dist <= max_distance
    ]
    logger.debug("Kept %d of %d closest pairs", len(pairs), len(source_points))
    return pairs


def closest_pair(source, target, n_jobs=1):
    """
    Find the closest pair of points across two point sets.

    Args:
        source: Source points (N, D)
        target: Target points (M, D)

    Returns:
        Tuple of (source_index, target_index, distance), or None if either
        set is empty
    """
    pairs = closest_point_pairs(source, target, n_jobs=n_jobs)
    if not pairs:
        return None
    # min keeps the first of equal distances, i.e. the lowest source index
    return min(pairs, key=lambda pair: pair[2])
