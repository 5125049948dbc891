
import logging
import math

import numpy as np
import pytest

from chinacoords.transform import *
from chinacoords.transform import _bisect

from tests.functions import assert_pairs_equal


CITIES = [
    (121.4737, 31.2304),  # Shanghai
    (114.0579, 22.5431),  # Shenzhen
    (104.0665, 30.5723),  # Chengdu
    (126.6424, 45.7569),  # Harbin
    (87.6168, 43.8256),  # Urumqi
    (116.65383912049425, 39.992875254426366),
]


def test_in_region():
    assert in_region(116.4, 39.9)
    assert not in_region(2.3522, 48.8566)
    assert not in_region(-122.4194, 37.7749)

    # Bounds are exclusive
    assert not in_region(73.66, 30.)
    assert not in_region(135.05, 30.)
    assert not in_region(100., 3.86)
    assert not in_region(100., 53.55)
    assert in_region(73.660001, 30.)


def test_to_obfuscated():
    assert to_obfuscated(116.65383912049425, 39.992875254426366) == (
        116.6597270000643, 39.99397599992571
    )


def test_to_obfuscated_outside_region():
    assert to_obfuscated(73.66, 30.) == (73.66, 30.)
    assert to_obfuscated(2.3522, 48.8566) == (2.3522, 48.8566)

    for lon in np.linspace(-180., 73., 17):
        for lat in np.linspace(-90., 90., 13):
            assert to_obfuscated(float(lon), float(lat)) == (float(lon), float(lat))

    for lon in np.linspace(74., 135., 9):
        for lat in (-45., 0., 3.86, 53.55, 60., 89.):
            assert to_obfuscated(float(lon), lat) == (float(lon), lat)


def test_to_obfuscated_nan():
    lon, lat = to_obfuscated(math.nan, math.nan)
    assert math.isnan(lon)
    assert math.isnan(lat)


def test_obfuscated_to_provider():
    assert obfuscated_to_provider(113.56733, 34.81754) == (
        113.5739274927449, 34.82327621798387
    )


def test_provider_to_obfuscated():
    assert provider_to_obfuscated(113.5739274927449, 34.82327621798387) == (
        113.56732983450783, 34.81754111708383
    )


def test_provider_round_trip():
    # Approximate inverse; drift stays under a few millionths of a degree
    for lon in np.linspace(-179.5, 179.5, 25):
        for lat in np.linspace(-89.5, 89.5, 19):
            start = (float(lon), float(lat))
            assert_pairs_equal(
                provider_to_obfuscated(*obfuscated_to_provider(*start)),
                start,
                abs_tol=4e-6
            )


def test_to_standard():
    assert to_standard(113.5739274927449, 34.82327621798387) == (
        113.56784261660992, 34.82437523040346
    )


@pytest.mark.parametrize('wgs', CITIES)
def test_to_standard_round_trip(wgs):
    assert_pairs_equal(to_standard(*to_obfuscated(*wgs)), wgs, abs_tol=1e-9)


def test_to_standard_round_trip_region():
    for lon in np.arange(73.7, 135.0, 0.5):
        for lat in np.arange(3.9, 53.5, 0.5):
            wgs = (float(lon), float(lat))
            gcj = to_obfuscated(*wgs)
            result = to_standard(*gcj)
            assert abs(result[0] - wgs[0]) < 1e-9, wgs
            assert abs(result[1] - wgs[1]) < 1e-9, wgs

            # Halving a 0.02 degree box reaches 1e-10 in well under 60 steps
            _, residual, iterations = _bisect(*gcj, 100)
            if max(abs(residual[0]), abs(residual[1])) < 1e-10:
                assert iterations < 60, wgs


@pytest.mark.parametrize('wgs', CITIES)
def test_to_standard_iterations(wgs):
    # Halving a 0.02 degree box reaches 1e-10 in well under 60 steps
    to_standard(*to_obfuscated(*wgs), max_iterations=60)


def test_to_standard_outside_region():
    assert to_standard(2.3522, 48.8566) == (2.3522, 48.8566)
    assert to_standard(-122.4194, 37.7749) == (-122.4194, 37.7749)


def test_to_standard_logs_iterations(caplog):
    caplog.set_level(logging.DEBUG, logger='chinacoords')
    to_standard(113.5739274927449, 34.82327621798387)
    assert 'in 28 iterations' in caplog.text


def test_to_standard_fixed_point_fallback(caplog):
    caplog.set_level(logging.DEBUG, logger='chinacoords')

    # Per-axis bisection settles on the wrong latitude for these; the
    # fixed-point refinement recovers them
    assert_pairs_equal(
        to_standard(74.00328042122058, 45.81062479170601), (74.0, 45.81), abs_tol=1e-9
    )
    assert_pairs_equal(
        to_standard(77.2027213530921, 32.89750013755491), (77.2, 32.9), abs_tol=1e-9
    )
    assert 'fixed-point' in caplog.text

    _, residual, iterations = _bisect(74.00328042122058, 45.81062479170601, 100)
    assert iterations == 100
    assert abs(residual[1]) >= 1e-10


def test_to_standard_convergence_error():
    with pytest.raises(ConvergenceError) as exc:
        to_standard(113.5739274927449, 34.82327621798387, max_iterations=1)

    err = exc.value
    assert isinstance(err, ArithmeticError)
    assert err.iterations == 2
    assert err.target == (113.5739274927449, 34.82327621798387)
    assert abs(err.estimate[0] - 113.5739274927449) < 0.01
    assert abs(err.estimate[1] - 34.82327621798387) < 0.01
    assert max(abs(x) for x in err.residual) >= 1e-10

    with pytest.raises(ConvergenceError):
        to_standard(math.nan, 30.)


def test_to_provider():
    assert to_provider(116.65383912049425, 39.992875254426366) == (
        116.66618404045535, 40.0001616498407
    )
    assert to_provider(2.3522, 48.8566) == obfuscated_to_provider(2.3522, 48.8566)


def test_provider_to_standard():
    bd = to_provider(*CITIES[0])
    assert provider_to_standard(*bd) == to_standard(*provider_to_obfuscated(*bd))
    assert_pairs_equal(provider_to_standard(*bd), CITIES[0], abs_tol=1e-5)

    with pytest.raises(ConvergenceError):
        provider_to_standard(*bd, max_iterations=1)


def test_aliases():
    assert wgs84_to_gcj02 is to_obfuscated
    assert gcj02_to_wgs84 is to_standard
    assert gcj02_to_bd09 is obfuscated_to_provider
    assert bd09_to_gcj02 is provider_to_obfuscated
    assert wgs84_to_bd09 is to_provider
    assert bd09_to_wgs84 is provider_to_standard


def test_convert():
    wgs = CITIES[1]
    assert convert(*wgs, 'wgs84', 'wgs84') == wgs
    assert convert(*wgs, 'wgs84', 'gcj02') == to_obfuscated(*wgs)
    assert convert(*wgs, 'wgs84', 'bd09') == to_provider(*wgs)
    assert convert(*wgs, 'gcj02', 'wgs84') == to_standard(*wgs)
    assert convert(*wgs, 'gcj02', 'bd09') == obfuscated_to_provider(*wgs)
    assert convert(*wgs, 'bd09', 'gcj02') == provider_to_obfuscated(*wgs)
    assert convert(*wgs, 'bd09', 'wgs84') == provider_to_standard(*wgs)

    with pytest.raises(ValueError):
        convert(*wgs, 'wgs84', 'made up')

    with pytest.raises(ValueError):
        convert(*wgs, 'made up', 'wgs84')
