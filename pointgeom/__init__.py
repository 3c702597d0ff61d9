"""
PointGeom - Point-set geometry primitives for perception and robotics

A small geometry library featuring:
- Centroid computation and centroid shifting for point sequences
- Rigid alignment of paired point sets (Kabsch algorithm)
- Rectangle/polygon overlap scores
- Haversine distance and closest point pair search
"""

import logging

from .centroid import PointAccumulator, centroid, shift_to_origin
from .haversine import haversine
from .intersection import rect_hull_intersection, rect_hull_iou
from .kabsch import (AlignmentError, DegenerateCorrespondenceWarning, align,
                     align_point_sets, cross_covariance)
from .kdtree import KDTree
from .pairs import closest_pair, closest_point_pairs
from .transforms import RigidTransform, apply_transformation

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = ["PointAccumulator", "centroid", "shift_to_origin",
           "RigidTransform", "apply_transformation",
           "align", "align_point_sets", "cross_covariance",
           "AlignmentError", "DegenerateCorrespondenceWarning",
           "rect_hull_intersection", "rect_hull_iou", "haversine",
           "KDTree", "closest_point_pairs", "closest_pair"]
