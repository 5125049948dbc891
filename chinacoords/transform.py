"""
Conversions between WGS84, GCJ-02 and BD-09 coordinates.

All conversions accept and return (longitude, latitude) pairs in degrees.
"""

__all__ = [
    'ConvergenceError', 'convert', 'in_region',
    'obfuscated_to_provider', 'provider_to_obfuscated', 'provider_to_standard',
    'to_obfuscated', 'to_provider', 'to_standard',
    'bd09_to_gcj02', 'bd09_to_wgs84', 'gcj02_to_bd09', 'gcj02_to_wgs84',
    'wgs84_to_bd09', 'wgs84_to_gcj02',
]

import math
from typing import Tuple

from chinacoords._const import (
    ACCURACY_THRESHOLD, BD09, BD_LAT_OFFSET, BD_LON_OFFSET, BD_THETA_OFFSET, BD_Z_OFFSET,
    COORDINATE_SYSTEMS, GCJ02, MAX_ITERATIONS, REGION_MAX_LAT, REGION_MAX_LON,
    REGION_MIN_LAT, REGION_MIN_LON, SEARCH_HALF_WIDTH, WGS84, X_PI,
)
from chinacoords._distortion import correct
from chinacoords.utils.logging import LOGGER


class ConvergenceError(ArithmeticError):
    """
    Raised when the GCJ-02 -> WGS84 search and its fallback exhaust their iterations without
    bringing the residual under the accuracy threshold.

    Attributes:
        target:
            The (longitude, latitude) GCJ-02 point being inverted

        estimate:
            The last (longitude, latitude) estimate tried

        residual:
            The (longitude, latitude) residual of the last estimate

        iterations:
            The number of iterations performed, bisection and fallback combined
    """

    def __init__(
        self,
        target: Tuple[float, float],
        estimate: Tuple[float, float],
        residual: Tuple[float, float],
        iterations: int,
    ):
        self.target = target
        self.estimate = estimate
        self.residual = residual
        self.iterations = iterations
        super().__init__(
            f'Failed to convert {target} to WGS84 within {iterations} iterations; '
            f'last estimate {estimate} has residual {residual}'
        )


def in_region(lon: float, lat: float) -> bool:
    """
    Test whether a coordinate lies inside the box where the GCJ-02 distortion
    is applied. Bounds are exclusive.

    Args:
        lon:
            The longitude

        lat:
            The latitude

    Returns:
        bool
    """
    return REGION_MIN_LON < lon < REGION_MAX_LON and REGION_MIN_LAT < lat < REGION_MAX_LAT


def to_obfuscated(lon: float, lat: float) -> Tuple[float, float]:
    """
    Convert a WGS84 coordinate to GCJ-02. Coordinates outside the region are
    returned unchanged.
    """
    if not in_region(lon, lat):
        return lon, lat

    return correct(lon, lat)


def obfuscated_to_provider(lon: float, lat: float) -> Tuple[float, float]:
    """Convert a GCJ-02 coordinate to BD-09."""
    z = math.sqrt(lon * lon + lat * lat) + BD_Z_OFFSET * math.sin(lat * X_PI)
    theta = math.atan2(lat, lon) + BD_THETA_OFFSET * math.cos(lon * X_PI)
    return z * math.cos(theta) + BD_LON_OFFSET, z * math.sin(theta) + BD_LAT_OFFSET


def provider_to_obfuscated(lon: float, lat: float) -> Tuple[float, float]:
    """
    Convert a BD-09 coordinate to GCJ-02.

    The perturbation is removed using the shifted BD-09 coordinate in place of the
    unknown GCJ-02 one, so this is only an approximate inverse of
    `obfuscated_to_provider()`; round trips drift by a few millionths of a degree.
    """
    x = lon - BD_LON_OFFSET
    y = lat - BD_LAT_OFFSET
    z = math.sqrt(x * x + y * y) - BD_Z_OFFSET * math.sin(y * X_PI)
    theta = math.atan2(y, x) - BD_THETA_OFFSET * math.cos(x * X_PI)
    return z * math.cos(theta), z * math.sin(theta)


def _converged(residual: Tuple[float, float]) -> bool:
    return abs(residual[1]) < ACCURACY_THRESHOLD and abs(residual[0]) < ACCURACY_THRESHOLD


def _bisect(lon: float, lat: float, max_iterations: int):
    """
    Bisects a box of +/- 0.01 degrees around a GCJ-02 point, narrowing each axis
    independently by the sign of its residual.

    Returns:
        The last midpoint, its (longitude, latitude) residual and the number of
        iterations performed
    """
    mlon, plon = lon - SEARCH_HALF_WIDTH, lon + SEARCH_HALF_WIDTH
    mlat, plat = lat - SEARCH_HALF_WIDTH, lat + SEARCH_HALF_WIDTH
    wgs_lon, wgs_lat = lon, lat
    dlon, dlat = math.nan, math.nan

    for iteration in range(1, max_iterations + 1):
        wgs_lat = (mlat + plat) / 2.0
        wgs_lon = (mlon + plon) / 2.0
        tmp_lon, tmp_lat = to_obfuscated(wgs_lon, wgs_lat)
        dlon = tmp_lon - lon
        dlat = tmp_lat - lat
        if _converged((dlon, dlat)):
            return (wgs_lon, wgs_lat), (dlon, dlat), iteration

        if dlat > 0.0:
            plat = wgs_lat
        else:
            mlat = wgs_lat

        if dlon > 0.0:
            plon = wgs_lon
        else:
            mlon = wgs_lon

    return (wgs_lon, wgs_lat), (dlon, dlat), max_iterations


def _fixed_point(lon: float, lat: float, start: Tuple[float, float], max_iterations: int):
    """
    Refines an estimate by repeatedly subtracting its residual. Same return
    signature as `_bisect()`.
    """
    wgs_lon, wgs_lat = start
    dlon, dlat = math.nan, math.nan

    for iteration in range(1, max_iterations + 1):
        tmp_lon, tmp_lat = to_obfuscated(wgs_lon, wgs_lat)
        dlon = tmp_lon - lon
        dlat = tmp_lat - lat
        if _converged((dlon, dlat)):
            return (wgs_lon, wgs_lat), (dlon, dlat), iteration

        # Report the estimate the final residual was measured at
        if iteration < max_iterations:
            wgs_lon -= dlon
            wgs_lat -= dlat

    return (wgs_lon, wgs_lat), (dlon, dlat), max_iterations


def to_standard(
    lon: float,
    lat: float,
    max_iterations: int = MAX_ITERATIONS,
) -> Tuple[float, float]:
    """
    Convert a GCJ-02 coordinate to WGS84.

    The distortion has no closed-form inverse, so the WGS84 point is found by
    bisecting a box of +/- 0.01 degrees around the input, using `to_obfuscated()`
    to measure how far each candidate lands from the target. Each axis is narrowed
    independently until both residuals fall under 1e-10 degrees.

    Because the latitude residual also depends on the not yet settled longitude
    (and vice versa), bisection occasionally discards the half of the box holding
    the answer. When it exhausts its iterations the last midpoint is refined by
    fixed-point iteration instead.

    Args:
        lon:
            The GCJ-02 longitude

        lat:
            The GCJ-02 latitude

        max_iterations: (int) (Default 100)
            The number of steps allowed to each of the bisection and the
            fixed-point fallback

    Returns:
        The WGS84 coordinate as (longitude, latitude)

    Raises:
        ConvergenceError: if the residual is still above the threshold after
            both searches
    """
    estimate, residual, iterations = _bisect(lon, lat, max_iterations)
    if _converged(residual):
        LOGGER.debug('Converted (%s, %s) to WGS84 in %d iterations', lon, lat, iterations)
        return estimate

    estimate, residual, fallback_iterations = _fixed_point(lon, lat, estimate, max_iterations)
    iterations += fallback_iterations
    if _converged(residual):
        LOGGER.debug(
            'Converted (%s, %s) to WGS84 in %d iterations (%d fixed-point)',
            lon, lat, iterations, fallback_iterations
        )
        return estimate

    raise ConvergenceError((lon, lat), estimate, residual, iterations)


def to_provider(lon: float, lat: float) -> Tuple[float, float]:
    """Convert a WGS84 coordinate to BD-09."""
    return obfuscated_to_provider(*to_obfuscated(lon, lat))


def provider_to_standard(
    lon: float,
    lat: float,
    max_iterations: int = MAX_ITERATIONS,
) -> Tuple[float, float]:
    """
    Convert a BD-09 coordinate to WGS84. See `to_standard()` for the failure mode.
    """
    return to_standard(*provider_to_obfuscated(lon, lat), max_iterations=max_iterations)


# Names by coordinate system
wgs84_to_gcj02 = to_obfuscated
gcj02_to_wgs84 = to_standard
gcj02_to_bd09 = obfuscated_to_provider
bd09_to_gcj02 = provider_to_obfuscated
wgs84_to_bd09 = to_provider
bd09_to_wgs84 = provider_to_standard


_CONVERSIONS = {
    (WGS84, GCJ02): to_obfuscated,
    (WGS84, BD09): to_provider,
    (GCJ02, WGS84): to_standard,
    (GCJ02, BD09): obfuscated_to_provider,
    (BD09, WGS84): provider_to_standard,
    (BD09, GCJ02): provider_to_obfuscated,
}


def convert(lon: float, lat: float, from_system: str, to_system: str) -> Tuple[float, float]:
    """
    Convert a coordinate between any two of the supported systems.

    Args:
        lon:
            The longitude

        lat:
            The latitude

        from_system:
            The system the coordinate is expressed in; one of 'wgs84', 'gcj02', 'bd09'

        to_system:
            The system to convert to; one of 'wgs84', 'gcj02', 'bd09'

    Returns:
        The converted coordinate as (longitude, latitude)
    """
    for system in (from_system, to_system):
        if system not in COORDINATE_SYSTEMS:
            raise ValueError(
                f"Unknown coordinate system '{system}'. Options: {list(COORDINATE_SYSTEMS)}"
            )

    if from_system == to_system:
        return lon, lat

    return _CONVERSIONS[(from_system, to_system)](lon, lat)
