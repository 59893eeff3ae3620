'''
Elementary functions by series and iteration.

Everything here is computed from scratch: Taylor series for sine and cosine,
Heron's method for square roots, and the (x - 1)/x series for the natural
logarithm. The standard library is only used for constants, fmod-based range
reduction and IEEE special values.

All loops stop once a term (or step) drops below the shared tolerance, and
give up with NotConverged after MAX_ITERATIONS rounds.
'''

from logging import getLogger

import math

from .util import NotConverged, Undefined


log = getLogger(__name__)

# Convergence threshold shared by every series and iteration.
EPSILON = 1e-15
MAX_ITERATIONS = 10000

TAU = 2 * math.pi


def _radians(x, degrees):
    if degrees:
        return x * math.pi / 180.0
    return x


def _not_converged(name, x):
    log.info('%s(%r) did not converge in %d iterations',
             name, x, MAX_ITERATIONS)
    return NotConverged('{}({}) did not converge'.format(name, x))


def _is_odd_integer(n):
    return n == math.floor(n) and math.fmod(n, 2) != 0


def power(base, exponent):
    '''
    Raise base to exponent.

    NaN where the result is not real (negative base with a fractional
    exponent, zero to a negative power), signed infinity on overflow.
    '''
    try:
        return math.pow(base, exponent)
    except ValueError:
        return math.nan
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf


def square_root(value, epsilon=EPSILON):
    '''
    Square root by Heron's method, starting from the value itself.

    NaN for negative (or NaN) values, never raises on bad input.
    '''
    if math.isnan(value) or value < 0:
        return math.nan
    if value == 0 or math.isinf(value):
        return value
    x = value
    for iteration in range(MAX_ITERATIONS):
        following = 0.5 * (x + value / x)
        # Relative below 1, where an absolute step would stop while x is
        # still halving toward a tiny root.
        if abs(following - x) < epsilon * min(1.0, following):
            return following
        # Past the first step the sequence only decreases; once it stops,
        # rounding has pinned it.
        if iteration and following >= x:
            return x
        x = following
    raise _not_converged('sqrt', value)


def _reduce(x, low):
    '''
    Map x into [low, low + 2π).
    '''
    x = math.fmod(x, TAU)
    if x < low:
        x += TAU
    if x >= low + TAU:
        x -= TAU
    return x


def sin(x, degrees=False, epsilon=EPSILON):
    '''
    Sine by Taylor series over [-π, π).
    '''
    if not math.isfinite(x):
        return math.nan
    x = _reduce(_radians(x, degrees), -math.pi)
    total = 0.0
    term = x
    for k in range(1, MAX_ITERATIONS + 1):
        if abs(term) < epsilon:
            return total
        total += term
        term *= -x * x / ((2 * k) * (2 * k + 1))
    raise _not_converged('sin', x)


def cos(x, degrees=False, epsilon=EPSILON):
    '''
    Cosine by Taylor series over [0, 2π).
    '''
    if not math.isfinite(x):
        return math.nan
    x = _reduce(_radians(x, degrees), 0.0)
    total = term = 1.0
    for i in range(2, 2 * MAX_ITERATIONS + 2, 2):
        if abs(term) < epsilon:
            return total
        term *= -x * x / ((i - 1) * i)
        total += term
    raise _not_converged('cos', x)


def tg(x, degrees=False, epsilon=EPSILON):
    '''
    Tangent, undefined where the cosine vanishes.
    '''
    sine = sin(x, degrees, epsilon)
    cosine = cos(x, degrees, epsilon)
    if abs(cosine) < epsilon:
        raise Undefined('tg({}) is undefined'.format(x))
    return sine / cosine


def ctg(x, degrees=False, epsilon=EPSILON):
    '''
    Cotangent, undefined where the sine vanishes.
    '''
    sine = sin(x, degrees, epsilon)
    cosine = cos(x, degrees, epsilon)
    if abs(sine) < epsilon:
        raise Undefined('ctg({}) is undefined'.format(x))
    return cosine / sine


def _ln_series(x, epsilon):
    # Sum of ((x - 1)/x)**k / k, converges for x > 1/2.
    ratio = (x - 1) / x
    total = 0.0
    term = ratio
    for k in range(1, MAX_ITERATIONS + 1):
        if abs(term) < epsilon:
            return total
        total += term
        term *= ratio * k / (k + 1)
    raise _not_converged('ln', x)


def ln(x, epsilon=EPSILON):
    '''
    Natural logarithm.

    NaN for x <= 0. The argument is scaled by powers of two into [1, 2), so
    the series ratio never exceeds 1/2, and the exponent is added back as a
    multiple of ln(2).
    '''
    if not x > 0:
        return math.nan
    if math.isinf(x):
        return x
    exponent = 0
    while x >= 2:
        x /= 2
        exponent += 1
    while x < 1:
        x *= 2
        exponent -= 1
    result = _ln_series(x, epsilon)
    if exponent:
        result += exponent * _ln_series(2.0, epsilon)
    return result
