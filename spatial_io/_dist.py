"""Distance conversions."""

from math import degrees, radians
from typing import Final


EARTH_MEAN_RADIUS_KM: Final[float] = 6371.0087714
"""Mean radius of the earth in kilometers (WGS 84)."""

DEG_TO_KM: Final[float] = radians(EARTH_MEAN_RADIUS_KM)
"""Kilometers along a great circle per degree of arc, roughly ``111.195``."""


def degrees_to_dist(degs: float, radius: float) -> float:
    """
    Length of an arc on a sphere.

    Args:
        degs: the arc's angle in degrees
        radius: the sphere's radius, in any unit

    Returns:
        the arc length in the unit of ``radius``

    References:
        - https://nssdc.gsfc.nasa.gov/planetary/factsheet/earthfact.html
    """
    return radians(degs) * radius


def dist_to_degrees(dist: float, radius: float) -> float:
    """Inverse of ``degrees_to_dist()``."""
    return degrees(dist / radius)
