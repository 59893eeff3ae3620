'''
Series and iteration tests
'''

import math

from deskcalc import series
from deskcalc.util import NotConverged, Undefined

from pytest import approx, mark, raises


ANGLES = [-1000.0, -7.5, -math.pi, -1.0, 0.0, 0.3, 1.0, 2.5, math.pi,
          4.0, 6.0, 100.0, 1e6]


@mark.parametrize('value', [0.0, 1e-12, 0.25, 2.0, 9.0, 12345.678, 1e20,
                            1e300])
def test_square_root_round_trip(value):
    root = series.square_root(value)
    assert root * root == approx(value, rel=1e-14, abs=1e-15)


def test_square_root_exact():
    assert series.square_root(9.0) == 3.0
    assert series.square_root(0.0) == 0.0


@mark.parametrize('value', [1e-40, 1e-30, 2.5e-17])
def test_square_root_of_tiny_values(value):
    assert series.square_root(value) == approx(math.sqrt(value), rel=1e-14)


def test_square_root_negative_is_nan():
    assert math.isnan(series.square_root(-4.0))


@mark.parametrize('degrees', [False, True])
@mark.parametrize('x', ANGLES)
def test_pythagorean_identity(x, degrees):
    sine = series.sin(x, degrees)
    cosine = series.cos(x, degrees)
    assert sine * sine + cosine * cosine == approx(1.0, abs=1e-12)


@mark.parametrize('x', [0.0, 0.5, 1.0, 2.0, -3.0, 10.0])
def test_matches_reference(x):
    assert series.sin(x) == approx(math.sin(x), abs=1e-12)
    assert series.cos(x) == approx(math.cos(x), abs=1e-12)


def test_degrees():
    assert series.sin(30.0, degrees=True) == approx(0.5, abs=1e-12)
    assert series.cos(60.0, degrees=True) == approx(0.5, abs=1e-12)
    assert series.sin(-90.0, degrees=True) == approx(-1.0, abs=1e-12)
    assert series.cos(360.0, degrees=True) == approx(1.0, abs=1e-12)


@mark.parametrize('x', [0.3, 1.0, -2.0, 4.0])
def test_tangent_and_cotangent(x):
    sine, cosine = series.sin(x), series.cos(x)
    assert series.tg(x) == approx(sine / cosine)
    assert series.ctg(x) == approx(cosine / sine)


def test_tangent_asymptote():
    with raises(Undefined):
        series.tg(90.0, degrees=True)
    with raises(Undefined):
        series.tg(math.pi / 2)


def test_cotangent_at_zero():
    with raises(Undefined):
        series.ctg(0.0)


def test_trigonometry_of_infinity_is_nan():
    assert math.isnan(series.sin(math.inf))
    assert math.isnan(series.cos(-math.inf))


def test_ln():
    assert series.ln(1.0) == 0.0
    assert series.ln(math.e) == approx(1.0, abs=1e-14)


@mark.parametrize('x', [1e-300, 0.001, 0.5, 1.5, 2.0, 10.0, 1e6, 1e300])
def test_ln_matches_reference(x):
    assert series.ln(x) == approx(math.log(x), rel=1e-13, abs=1e-14)


@mark.parametrize('x', [0.0, -1.0, math.nan])
def test_ln_domain(x):
    assert math.isnan(series.ln(x))


def test_power():
    assert series.power(2.0, 10.0) == 1024.0
    assert series.power(4.0, 0.5) == 2.0
    assert series.power(-2.0, 3.0) == -8.0


def test_power_not_real():
    assert math.isnan(series.power(-8.0, 1 / 3))
    assert math.isnan(series.power(0.0, -1.0))


def test_power_overflow():
    assert series.power(10.0, 400.0) == math.inf
    assert series.power(-10.0, 401.0) == -math.inf
    assert series.power(-10.0, 400.0) == math.inf


def test_iteration_cap(monkeypatch):
    monkeypatch.setattr(series, 'MAX_ITERATIONS', 3)
    with raises(NotConverged):
        series.sin(3.0)
    with raises(NotConverged):
        series.ln(1.9)
