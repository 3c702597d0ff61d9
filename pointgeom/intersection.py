"""Overlap between an axis-aligned rectangle and a polygon."""

import logging

from shapely.errors import GEOSException
from shapely.geometry import Polygon, box

logger = logging.getLogger(__name__)

# Shapes with an area at or below this count as empty
AREA_EPSILON = 1e-6


def _to_box(rect):
    min_x, min_y, max_x, max_y = (float(v) for v in rect)
    return box(min(min_x, max_x), min(min_y, max_y), max(min_x, max_x), max(min_y, max_y))


def _to_polygon(hull):
    if isinstance(hull, Polygon):
        polygon = hull
    else:
        try:
            polygon = Polygon(hull)
        except (ValueError, TypeError, GEOSException) as err:
            raise ValueError("not a valid polygon") from err
    if polygon.is_empty or not polygon.is_valid:
        raise ValueError("not a valid polygon")
    return polygon


def rect_hull_intersection(rect, hull):
    """
    Compute the intersection polygon of a rectangle and a polygon.

    Args:
        rect: Rectangle bounds (min_x, min_y, max_x, max_y)
        hull: shapely Polygon or sequence of (x, y) exterior vertices

    Returns:
        Intersection as a shapely Polygon, or None if the shapes do not
        overlap in a polygon

    Raises:
        ValueError: If the hull is not a valid polygon or the intersection
            cannot be computed
    """
    rect = _to_box(rect)
    hull = _to_polygon(hull)

    try:
        intersection = rect.intersection(hull)
    except GEOSException as err:
        raise ValueError("failed to compute polygon intersection") from err

    if intersection.is_empty:
        return None
    if intersection.geom_type != "Polygon":
        logger.warning("unexpected intersection: %s", intersection.geom_type)
        return None
    return intersection


def rect_hull_iou(rect, hull):
    """
    Overlap score of a rectangle and a polygon.

    The score is the sum of the fractions of each shape covered by their
    intersection, ``area(I) / area(rect) + area(I) / area(hull)``, so two
    identical shapes score 2.0 and disjoint shapes score 0.0.

    Args:
        rect: Rectangle bounds (min_x, min_y, max_x, max_y)
        hull: shapely Polygon or sequence of (x, y) exterior vertices

    Returns:
        Overlap score as a float
    """
    intersection = rect_hull_intersection(rect, hull)
    if intersection is None:
        return 0.0

    rect_area = _to_box(rect).area
    hull_area = _to_polygon(hull).area
    if rect_area <= AREA_EPSILON or hull_area <= AREA_EPSILON:
        return 0.0

    return intersection.area * (1.0 / rect_area + 1.0 / hull_area)
