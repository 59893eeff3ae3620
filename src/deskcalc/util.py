from functools import wraps


class CalcError(Exception):
    '''
    User-facing calculator error.

    Recovered by the accumulator: never escapes a transition, only changes
    what the display shows.
    '''
    display = 'Error'


class DivisionByZero(CalcError):
    display = 'Error'


class InvalidInput(CalcError):
    display = 'Invalid input'


class DomainError(CalcError):
    display = 'Error'


class Undefined(CalcError):
    display = 'Invalid input'


class NotConverged(CalcError):
    display = 'Did not converge'


class MalformedTokens(RuntimeError):
    '''
    Token list that the input guards should never have produced.
    '''


def wrap_user_errors(fmt, error=InvalidInput):
    '''
    Decorator that converts stray exceptions into calculator errors.

    Passes through CalcErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except (ValueError, TypeError, OverflowError) as e:
                raise error(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator
