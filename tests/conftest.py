from pytest import Item, fixture

from deskcalc.lexer import Lexer
from deskcalc.machine import Machine


@fixture
def machine():
    return Machine()


@fixture
def press():
    '''
    Type a line of keys into a fresh machine, return what it displays.
    '''
    machine = Machine()
    lexer = Lexer()

    def typed(line):
        for match in lexer.lex(line):
            if lexer.isfeedable(match):
                machine.feed(lexer.matchedgroups(match))
        return machine.display()
    typed.machine = machine
    return typed


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Only fires with enable_assertion_pass_hook set. Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
