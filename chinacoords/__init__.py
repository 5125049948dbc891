
from chinacoords._version import __version__  # noqa: F401
from chinacoords.utils.logging import LOGGER
from chinacoords.transform import (
    ConvergenceError, convert, in_region,
    obfuscated_to_provider, provider_to_obfuscated, provider_to_standard,
    to_obfuscated, to_provider, to_standard,
    bd09_to_gcj02, bd09_to_wgs84, gcj02_to_bd09, gcj02_to_wgs84,
    wgs84_to_bd09, wgs84_to_gcj02,
)
from chinacoords.coordinates import Coordinate


__all__ = [
    'Coordinate',
    'ConvergenceError',
    'LOGGER',
    'bd09_to_gcj02',
    'bd09_to_wgs84',
    'convert',
    'gcj02_to_bd09',
    'gcj02_to_wgs84',
    'in_region',
    'obfuscated_to_provider',
    'provider_to_obfuscated',
    'provider_to_standard',
    'to_obfuscated',
    'to_provider',
    'to_standard',
    'wgs84_to_bd09',
    'wgs84_to_gcj02',
]
