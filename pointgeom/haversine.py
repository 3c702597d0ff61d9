"""Great-circle distance on a sphere."""

import numpy as np

# Mean Earth radius in metres
EARTH_RADIUS = 6_371_008.8


def haversine(lat1, lon1, lat2, lon2, radius=EARTH_RADIUS):
    """
    Great-circle distance between two geographic coordinates.

    Args:
        lat1, lon1: Latitude and longitude of the first point in degrees
        lat2, lon2: Latitude and longitude of the second point in degrees
        radius: Sphere radius; the result is in the same unit

    Returns:
        Distance as a float, or an array when any input is an array
    """
    lat1, lon1, lat2, lon2 = map(np.radians, (lat1, lon1, lat2, lon2))

    hav = (np.sin((lat2 - lat1) / 2.0) ** 2
           + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2.0) ** 2)
    # rounding can push hav slightly outside [0, 1] for antipodal points
    hav = np.clip(hav, 0.0, 1.0)
    distance = 2.0 * radius * np.arcsin(np.sqrt(hav))

    if np.ndim(distance) == 0:
        return float(distance)
    return distance
