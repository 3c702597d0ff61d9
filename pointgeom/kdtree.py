"""KD-Tree implementation for spatial partitioning and nearest neighbor search."""

import numpy as np
from .utils import nearest_neighbor_search, time_function


class Node:
    def __init__(self):
        self.point = None
        self.index = None
        self.left = None
        self.right = None
        self.axis = None
        self.indices = None
    def set_point(self, point, index):
        # index into the points array the tree was built on
        self.point = point
        self.index = index
    def set_left(self, left):
        self.left = left
    def set_right(self, right):
        self.right = right
    def set_axis(self, axis):
        self.axis = axis
    def set_indices(self, indices):
        self.indices = indices

class KDTree:
    """Median-split KD-tree over a fixed array of points, bucketed at the leaves."""

    def __init__(self, leaf_size=128, dimension=3):
        self.root = None
        self.points = None
        self.leaf_size = max(1, int(leaf_size))
        self.dimension = dimension

    @time_function
    def build(self, points):
        """
        Index an (N, dimension) array of points.

        Returns:
            Root node, or None for an empty array
        """
        points = np.asarray(points, dtype=float)
        if points.shape[0] == 0:
            self.points = points
            self.root = None
            return None
        if points.ndim != 2 or points.shape[1] != self.dimension:
            raise ValueError(f"Expected points with shape (n, {self.dimension}), got {points.shape}")

        self.points = points
        self.root = self._split(np.arange(points.shape[0], dtype=np.int64))
        return self.root

    def _split(self, indices):
        if indices.shape[0] == 0:
            return None

        if indices.shape[0] <= self.leaf_size:
            leaf = Node()
            leaf.set_indices(indices)
            return leaf

        segment = self.points[indices]
        # cut across the widest extent of this cell
        axis = int(np.argmax(np.ptp(segment, axis=0)))
        median = indices.shape[0] // 2
        # indices is a view into the array allocated in build()
        indices[:] = indices[np.argpartition(segment[:, axis], median)]

        node = Node()
        node.set_axis(axis)
        node.set_point(self.points[indices[median]], indices[median])
        node.set_left(self._split(indices[:median]))
        node.set_right(self._split(indices[median + 1:]))
        return node

    def query(self, point):
        """
        Find the nearest point stored in the tree.

        Args:
            point: Query point of shape (dimension,)

        Returns:
            Tuple of (index, distance); (-1, inf) if the tree is empty
        """
        return nearest_neighbor_search(np.asarray(point, dtype=float), self.root, self.points)

    def __len__(self):
        return 0 if self.points is None else len(self.points)
