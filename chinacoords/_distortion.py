"""
Internal module defining the empirical GCJ-02 distortion model.

Evaluation order in this module is significant: the published reference values are
reproduced bit-for-bit only when every sum and product is grouped exactly as written.
"""
import math
from typing import Tuple

from chinacoords._const import KRASOVSKY_A, KRASOVSKY_E2, REFERENCE_LAT, REFERENCE_LON


def raw_offset(lon: float, lat: float) -> Tuple[float, float]:
    """
    Computes the raw (unscaled) offset magnitudes of the distortion model.

    The coordinate must already be shifted relative to the reference origin
    (105.0, 35.0); see `correct()`.

    Args:
        lon:
            The shifted longitude

        lat:
            The shifted latitude

    Returns:
        A 2-tuple of raw offsets. The first component is later used for latitude
        and the second for longitude.
    """
    lonlat = lon * lat
    abs_x = math.sqrt(abs(lon))
    lon_pi = lon * math.pi
    lat_pi = lat * math.pi

    d = math.sin(lon_pi * 6.0) * 20.0 + math.sin(lon_pi * 2.0) * 20.0
    x = d
    y = d

    x += 20.0 * math.sin(lat_pi) + math.sin(lat_pi / 3.0) * 40.0
    x += 160.0 * math.sin(lat_pi / 12.0) + 320.0 * math.sin(lat_pi / 30.0)

    y += 20.0 * math.sin(lon_pi) + math.sin(lon_pi / 3.0) * 40.0
    y += 150.0 * math.sin(lon_pi / 12.0) + 300.0 * math.sin(lon_pi / 30.0)

    threshold = 2.0 / 3.0
    x *= threshold
    y *= threshold

    x += 2.0 * lon + 3.0 * lat + 0.2 * lat * lat + 0.1 * lonlat + 0.2 * abs_x - 100.0
    y += lon + 2.0 * lat + 0.1 * lon * lon + 0.1 * lonlat + 0.1 * abs_x + 300.0
    return x, y


def correct(lon: float, lat: float) -> Tuple[float, float]:
    """
    Applies the distortion to a WGS84 coordinate, scaling the raw offsets by the
    curvature of the Krasovsky ellipsoid at the given latitude.

    No region check is made here.

    Args:
        lon:
            The WGS84 longitude

        lat:
            The WGS84 latitude

    Returns:
        The distorted (GCJ-02) coordinate as (longitude, latitude), not the offset
    """
    de_lat, de_lon = raw_offset(lon - REFERENCE_LON, lat - REFERENCE_LAT)
    rad_lat = lat / 180.0 * math.pi
    magic = math.sin(rad_lat)
    magic = 1.0 - KRASOVSKY_E2 * magic * magic
    sqrtmagic = math.sqrt(magic)

    de_lat = (de_lat * 180.0) / (
        (KRASOVSKY_A * (1.0 - KRASOVSKY_E2)) / (magic * sqrtmagic) * math.pi
    )
    de_lon = (de_lon * 180.0) / (KRASOVSKY_A / sqrtmagic * math.cos(rad_lat) * math.pi)
    return lon + de_lon, lat + de_lat
