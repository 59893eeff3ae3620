from functools import reduce
import operator

import regex

from .util import CalcError
from .machine import Machine


def _alternatives(words):
    '''
    Regex alternation of literal words, longest first.
    '''
    return r'(?:' + r'|'.join(map(regex.escape,
                                  sorted(words, key=len, reverse=True))) + r')'


class Lexer:
    '''
    Lexer for the calculator's *regular* keystroke grammar.

    A typed line is a run of keys: digits and the decimal separator build
    the operand, everything else is a single operator, function, command,
    constant or angle mode word. Whitespace only separates.
    '''
    DEFAULT_SEPARATOR = '.'

    # Keys typed as words or symbols, built from the machine's language.
    OPERATOR = _alternatives(Machine.OPERATORS)
    FUNCTION = _alternatives(Machine.FUNCTIONS)
    COMMAND = _alternatives(Machine.COMMANDS)
    CONSTANT = _alternatives(Machine.CONSTANTS)
    MODE = _alternatives(Machine.ANGLE_MODES)
    SPACE = r'\s+'

    # Run of digits and decimal separators, each one a key press. Only the
    # first separator of an operand counts.
    NUMBER = r'''
              (?:
                  [0-9]
                  |
                  {SEPARATOR}
              )+
              '''

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def __init__(self, separator=DEFAULT_SEPARATOR):
        '''
        Create lexer for numbers using separator as decimal point.
        '''
        if len(separator) != 1 or separator.isdigit():
            raise CalcError('Bad decimal separator {!r}'.format(separator))
        self.separator = separator
        number = type(self).NUMBER.format(SEPARATOR=regex.escape(separator))
        # All possible lexemes.
        self.LEXEME = r'(?<number>' + number + r')|' \
                      r'(?<function>' + self.FUNCTION + r')|' \
                      r'(?<mode>' + self.MODE + r')|' \
                      r'(?<command>' + self.COMMAND + r')|' \
                      r'(?<constant>' + self.CONSTANT + r')|' \
                      r'(?<operator>' + self.OPERATOR + r')|' \
                      r'(?<space>' + self.SPACE + r')'
        self.pattern = regex.compile(self.LEXEME, flags=type(self).FLAGS)

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Doesn't yield incomplete or incorrect lexemes, stopping on first bad.
        '''
        while line:
            match = self.pattern.match(line)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise CalcError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to machine.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return matched lexeme groups, numbers with a canonical '.' point.
        '''
        groups = {key: value
                  for key, value
                  in match.groupdict().items()
                  if value}
        if 'number' in groups:
            groups['number'] = groups['number'].replace(self.separator, '.')
        return groups
