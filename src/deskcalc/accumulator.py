'''
Running accumulator state machine.

Every input is a pure transition from one immutable State to the next:

    state = apply(state, Token(Kind.DIGIT, '3'))

Operators are applied strictly left to right, with no precedence, like a desk
calculator: 2 + 3 * 4 = 20.
'''

from collections import namedtuple
from enum import Enum
from logging import getLogger
from operator import add, mul, sub

import math

import regex

from . import series
from .util import (CalcError, DivisionByZero, DomainError, InvalidInput,
                   MalformedTokens, wrap_user_errors)


log = getLogger(__name__)


class Kind(Enum):
    DIGIT = 'digit'
    DECIMAL_POINT = 'decimal point'
    OPERATOR = 'operator'
    EQUALS = 'equals'
    TOGGLE_SIGN = 'toggle sign'
    BACKSPACE = 'backspace'
    CLEAR = 'clear'
    UNARY_FUNCTION = 'unary function'
    POWER = 'power'
    CONSTANT = 'constant'


class Operator(Enum):
    ADD = '+'
    SUBTRACT = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    POWER = '^'


class Function(Enum):
    LN = 'ln'
    SIN = 'sin'
    COS = 'cos'
    TG = 'tg'
    CTG = 'ctg'
    SQRT = 'sqrt'
    SQR = 'sqr'


class Mode(Enum):
    ENTERING = 'entering'
    RESULTED = 'resulted'
    ERROR = 'error'


Token = namedtuple('Token', ['kind', 'payload'], defaults=(None,))

# operand: text being entered, '' when waiting for one.
# tokens: tuple alternating operand text and Operator.
# failure: display text while in Mode.ERROR.
State = namedtuple('State', ['operand', 'tokens', 'history', 'mode',
                             'failure', 'degrees'])

DisplayState = namedtuple('DisplayState', ['operand_text', 'history_text',
                                           'is_error'])

CONSTANTS = {
    'e': math.e,
}

# Canonical operand text: '.' as decimal point, optional exponent from
# stringified results.
OPERAND = regex.compile(r'''
    [-+]?
    (?:
        (?:\d+\.?\d*|\.\d+)
        (?:[eE][-+]?\d+)?
        |
        inf
    )
    ''', flags=regex.VERBOSE)

BINARY = {
    Operator.ADD: add,
    Operator.SUBTRACT: sub,
    Operator.MULTIPLY: mul,
    Operator.POWER: series.power,
}

UNARY = {
    Function.LN: lambda x, degrees: series.ln(x),
    Function.SIN: series.sin,
    Function.COS: series.cos,
    Function.TG: series.tg,
    Function.CTG: series.ctg,
    Function.SQRT: lambda x, degrees: series.square_root(x),
}

# What a NaN result from a function means, InvalidInput otherwise.
DOMAIN_ERRORS = {
    Function.SQRT: DomainError,
}


def initial(degrees=False):
    '''
    Fresh session state.
    '''
    return State(operand='', tokens=(), history='', mode=Mode.ENTERING,
                 failure=None, degrees=degrees)


def format_number(value):
    '''
    Stringify a result so it can be edited and parsed again.
    '''
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


@wrap_user_errors('Cannot convert {0!r}')
def parse_operand(text):
    if OPERAND.fullmatch(text) is None:
        raise InvalidInput('Cannot convert {!r}'.format(text))
    return float(text)


def combine(left, right, operator, epsilon=series.EPSILON):
    if operator is Operator.DIVIDE:
        if abs(right) < epsilon:
            raise DivisionByZero('Division of {} by zero'.format(left))
        return left / right
    return BINARY[operator](left, right)


def evaluate(tokens, epsilon=series.EPSILON):
    '''
    Evaluate [operand, operator, operand, ...] strictly left to right.

    Operators may be given as Operator members or their symbols. An empty
    list is 0.
    '''
    if not tokens:
        return 0.0
    if len(tokens) % 2 == 0:
        raise MalformedTokens('Operator {!r} has no operand'
                              .format(tokens[-1]))
    result = parse_operand(tokens[0])
    for index in range(1, len(tokens), 2):
        operator = Operator(tokens[index])
        operand = parse_operand(tokens[index + 1])
        result = combine(result, operand, operator, epsilon)
    return result


def _append(history, entry):
    if history:
        return history + ' ' + entry
    return entry


def _fail(state, error):
    log.info('%s: %s', type(error).__name__, error)
    return state._replace(operand='', tokens=(), history='',
                          mode=Mode.ERROR, failure=error.display)


def _checked(result):
    if math.isnan(result):
        raise InvalidInput('Result is not a number')
    return result


def _settled(state):
    '''
    Mode after a function: a result only if nothing is pending.
    '''
    return Mode.ENTERING if state.tokens else Mode.RESULTED


def _restart(state):
    '''
    Drop history left over from a finished computation or error.
    '''
    if state.mode is Mode.ENTERING:
        return state
    return state._replace(history='', mode=Mode.ENTERING, failure=None)


def input_digit(state, digit):
    if not isinstance(digit, str) or len(digit) != 1 \
            or digit not in '0123456789':
        raise ValueError('Not a digit: {!r}'.format(digit))
    if state.mode is Mode.ERROR:
        return _restart(state)._replace(operand=digit, tokens=())
    sign, number = ('-', state.operand[1:]) \
        if state.operand.startswith('-') else ('', state.operand)
    if number == '0':
        number = digit
    else:
        number += digit
    if len(number) > 1 and number[0] == '0' and number[1] != '.':
        number = number.lstrip('0') or '0'
    return state._replace(operand=sign + number)


def input_decimal_point(state):
    if state.mode is Mode.ERROR:
        return _restart(state)._replace(operand='0.', tokens=())
    if '.' in state.operand:
        return state
    return state._replace(operand=(state.operand or '0') + '.')


def input_operator(state, operator):
    operator = Operator(operator)
    if not state.operand:
        return state
    state = _restart(state)
    entry = '{} {}'.format(state.operand, operator.value)
    return state._replace(operand='',
                          tokens=state.tokens + (state.operand, operator),
                          history=_append(state.history, entry))


def input_equals(state):
    if not state.operand:
        return state
    if state.mode is Mode.RESULTED and not state.tokens:
        state = _restart(state)
    try:
        result = _checked(evaluate(state.tokens + (state.operand,)))
    except CalcError as e:
        return _fail(state, e)
    if state.history:
        history = '{} {} ='.format(state.history, state.operand)
    else:
        history = '{} ='.format(format_number(result))
    return state._replace(operand=format_number(result), tokens=(),
                          history=history, mode=Mode.RESULTED)


def toggle_sign(state):
    if state.operand in ('', '0'):
        return state
    if state.operand.startswith('-'):
        return state._replace(operand=state.operand[1:])
    return state._replace(operand='-' + state.operand)


def backspace(state):
    if state.history:
        return state._replace(history='')
    return state._replace(operand=state.operand[:-1])


def clear(state):
    return initial(state.degrees)._replace(operand='0')


def apply_function(state, function):
    function = Function(function)
    if function is Function.SQR:
        return squaring(state)
    if not state.operand:
        return state
    if function is Function.SQRT:
        entry = '√{} ='.format(state.operand)
    else:
        entry = '{}({}) ='.format(function.value, state.operand)
    state = _restart(state)
    state = state._replace(history=_append(state.history, entry))
    try:
        value = parse_operand(state.operand)
        result = UNARY[function](value, state.degrees)
        if math.isnan(result):
            raise DOMAIN_ERRORS.get(function, InvalidInput)(
                '{} is outside the domain of {}'.format(value,
                                                        function.value))
    except CalcError as e:
        return _fail(state, e)
    return state._replace(operand=format_number(result),
                          mode=_settled(state))


def apply_power(state):
    return input_operator(state, Operator.POWER)


def squaring(state):
    if not state.operand:
        return state
    state = _restart(state)
    state = state._replace(
        history=_append(state.history, 'sqr({}) ='.format(state.operand)))
    try:
        result = _checked(evaluate((state.operand, Operator.POWER, '2')))
    except CalcError as e:
        return _fail(state, e)
    return state._replace(operand=format_number(result),
                          mode=_settled(state))


def input_constant(state, name):
    value = CONSTANTS[name]
    if state.mode is Mode.ERROR:
        state = _restart(state)._replace(tokens=())
    return state._replace(operand=format_number(value))


def set_angle_mode(state, degrees):
    return state._replace(degrees=bool(degrees))


def apply(state, token):
    '''
    Run one input token against state, returning the next state.
    '''
    kind, payload = token
    kind = Kind(kind)
    if kind is Kind.DIGIT:
        return input_digit(state, payload)
    elif kind is Kind.DECIMAL_POINT:
        return input_decimal_point(state)
    elif kind is Kind.OPERATOR:
        return input_operator(state, payload)
    elif kind is Kind.EQUALS:
        return input_equals(state)
    elif kind is Kind.TOGGLE_SIGN:
        return toggle_sign(state)
    elif kind is Kind.BACKSPACE:
        return backspace(state)
    elif kind is Kind.CLEAR:
        return clear(state)
    elif kind is Kind.UNARY_FUNCTION:
        return apply_function(state, payload)
    elif kind is Kind.POWER:
        return apply_power(state)
    elif kind is Kind.CONSTANT:
        return input_constant(state, payload)
    raise ValueError('Unhandled token kind {}'.format(kind))


def display(state):
    '''
    What the shell should show for state.
    '''
    if state.mode is Mode.ERROR:
        return DisplayState(state.failure, state.history, True)
    return DisplayState(state.operand or '0', state.history, False)
