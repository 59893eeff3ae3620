'''
Desk calculator.

Running left-to-right accumulator, like the pocket kind: no precedence,
2 + 3 * 4 = 20. Logarithms, square roots and trigonometry are computed by
series and iteration in deskcalc.series rather than borrowed from math.

Keys are typed as text: digits, the decimal separator, + - * / ^, =, and the
words ln sin cos tg ctg sqrt sqr, plus c (clear), n (toggle sign), < (back
space), e (Euler's number) and deg/rad.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine


__all__ = 'Machine', 'Lexer', 'CLI'
