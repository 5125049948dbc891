"""
Representation of a point on earth in a specific coordinate system
"""

__all__ = ['Coordinate']

from typing import Tuple, Union

from chinacoords._const import BD09, COORDINATE_SYSTEMS, GCJ02, WGS84
from chinacoords.transform import convert, in_region
from chinacoords.utils.logging import warn_once


class Coordinate:
    """
    Representation of a coordinate on the globe (i.e., a lon/lat pair), tagged with
    the coordinate system it is expressed in. Coordinates are immutable; conversions
    return new instances.
    """

    __slots__ = ('longitude', 'latitude', 'system')

    def __init__(
        self,
        longitude: Union[float, int, str],
        latitude: Union[float, int, str],
        system: str = WGS84,
    ):
        if system not in COORDINATE_SYSTEMS:
            raise ValueError(
                f"Unknown coordinate system '{system}'. Options: {list(COORDINATE_SYSTEMS)}"
            )

        object.__setattr__(self, 'longitude', float(longitude))
        object.__setattr__(self, 'latitude', float(latitude))
        object.__setattr__(self, 'system', system)

    def __setattr__(self, name, value):
        raise AttributeError(f'Coordinate is immutable; cannot set {name!r}')

    def __delattr__(self, name):
        raise AttributeError(f'Coordinate is immutable; cannot delete {name!r}')

    def __eq__(self, other):
        if not isinstance(other, Coordinate):
            return False

        return (
            self.longitude == other.longitude and
            self.latitude == other.latitude and
            self.system == other.system
        )

    def __hash__(self):
        return hash((self.longitude, self.latitude, self.system))

    def __repr__(self):
        return f'<Coordinate({self.longitude}, {self.latitude}, {self.system})>'

    @property
    def in_region(self) -> bool:
        """Whether this coordinate lies inside the box where GCJ-02 distortion applies"""
        return in_region(self.longitude, self.latitude)

    def to_float(self, reverse: bool = False) -> Tuple[float, float]:
        """
        Converts the coordinate to a tuple of floats (longitude, latitude).

        Args:
            reverse: (bool)
                (Default False) If True, reverses the coordinate order to (latitude, longitude)

        Returns:
            Tuple[float, float]
        """
        if reverse:
            return self.latitude, self.longitude

        return self.longitude, self.latitude

    def to_str(self, reverse: bool = False) -> Tuple[str, str]:
        """
        Converts the coordinate to a tuple of strings (longitude, latitude).

        Args:
            reverse: (bool)
                (Default False) If True, reverses the coordinate order to (latitude, longitude)

        Returns:
            Tuple[str, str]
        """
        lon, lat = self.to_float(reverse)
        return str(lon), str(lat)

    def to_system(self, system: str) -> 'Coordinate':
        """
        Convert this coordinate to another coordinate system.

        Args:
            system:
                The target system; one of 'wgs84', 'gcj02', 'bd09'

        Returns:
            Coordinate

        Raises:
            ConvergenceError: converting to WGS84 failed to converge
        """
        if self.system == WGS84 and system != WGS84 and not self.in_region:
            warn_once(
                'WGS84 coordinate lies outside the GCJ-02 region; no distortion is applied. '
                '(this warning will not repeat)'
            )

        return Coordinate(
            *convert(self.longitude, self.latitude, self.system, system),
            system=system,
        )

    def to_wgs84(self) -> 'Coordinate':
        """Convert this coordinate to WGS84"""
        return self.to_system(WGS84)

    def to_gcj02(self) -> 'Coordinate':
        """Convert this coordinate to GCJ-02"""
        return self.to_system(GCJ02)

    def to_bd09(self) -> 'Coordinate':
        """Convert this coordinate to BD-09"""
        return self.to_system(BD09)
