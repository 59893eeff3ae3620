from logging import getLogger

from . import accumulator
from .accumulator import Function, Kind, Operator, Token


log = getLogger(__name__)


class Machine:
    '''
    Desk calculator session.

    Holds the current accumulator state for one session and feeds it tokens,
    either directly (submit) or from lexemes (feed). Not safe to share
    between concurrent front-ends; give each its own machine.
    '''

    # Language mapping from typed text to tokens. The lexer builds its
    # grammar from these tables.
    OPERATORS = {
        operator.value: Token(Kind.OPERATOR, operator)
        for operator in Operator
        if operator is not Operator.POWER
    }
    OPERATORS['^'] = Token(Kind.POWER)

    FUNCTIONS = {
        function.value: Token(Kind.UNARY_FUNCTION, function)
        for function in Function
    }
    # Shorthand
    FUNCTIONS['√'] = Token(Kind.UNARY_FUNCTION, Function.SQRT)

    COMMANDS = {
        '=': Token(Kind.EQUALS),
        'c': Token(Kind.CLEAR),
        'n': Token(Kind.TOGGLE_SIGN),
        '±': Token(Kind.TOGGLE_SIGN),
        '<': Token(Kind.BACKSPACE),
    }

    CONSTANTS = {
        name: Token(Kind.CONSTANT, name)
        for name in accumulator.CONSTANTS
    }

    ANGLE_MODES = {
        'deg': True,
        'rad': False,
    }

    def __init__(self, degrees=False):
        '''
        Create machine with an empty operand.

        :param degrees: Evaluate trigonometric functions in degrees.
        '''
        self.state = accumulator.initial(degrees)

    def submit(self, kind, payload=None):
        '''
        Apply one input token and return what to display.
        '''
        token = Token(Kind(kind), payload)
        self.state = accumulator.apply(self.state, token)
        log.debug('%s %r -> %r', token.kind.value, payload, self.state)
        return self.display()

    def feed(self, groups):
        '''
        Run lexemes on machine.

        :param groups: Named groups of a lexeme match.
        '''
        if 'mode' in groups:
            self.set_angle_mode(type(self).ANGLE_MODES[groups['mode']])
            return self.display()
        for token in self.parse(groups):
            self.submit(*token)
        return self.display()

    def parse(self, groups):
        '''
        Parse lexeme groups into tokens.
        '''
        if 'number' in groups:
            for character in groups['number']:
                if character == '.':
                    yield Token(Kind.DECIMAL_POINT)
                else:
                    yield Token(Kind.DIGIT, character)
        elif 'operator' in groups:
            yield type(self).OPERATORS[groups['operator']]
        elif 'function' in groups:
            yield type(self).FUNCTIONS[groups['function']]
        elif 'command' in groups:
            yield type(self).COMMANDS[groups['command']]
        elif 'constant' in groups:
            yield type(self).CONSTANTS[groups['constant']]

    def display(self):
        return accumulator.display(self.state)

    def set_angle_mode(self, degrees):
        self.state = accumulator.set_angle_mode(self.state, degrees)
        log.debug('angle mode: %s', 'deg' if degrees else 'rad')

    def get_angle_mode(self):
        '''
        Return True when trigonometric functions take degrees.
        '''
        return self.state.degrees
