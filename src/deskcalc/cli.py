from os import isatty, path
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import CalcError
from .machine import Machine
from .lexer import Lexer


class InteractiveInput:
    def __init__(self, prompt, history_file=None, toolbar=None):
        self.prompt = prompt
        self.history_file = history_file
        self.toolbar = toolbar

    def __iter__(self):
        history = None
        if self.history_file is not None:
            history = FileHistory(path.expanduser(self.history_file))
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    history=history,
                                    bottom_toolbar=self.toolbar,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the desk calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.deskcalc_history'

    def render(self, display):
        '''
        Print history and operand, in the user's decimal separator.
        '''
        separator = self.args.separator
        if display.history_text:
            print(display.history_text.replace('.', separator))
        print(display.operand_text.replace('.', separator))

    def dumper(self):
        '''
        Dump all lexemes matches and the tokens they feed.
        '''
        machine = Machine()
        lexer = Lexer(self.args.separator)
        print('[groups]\t<repr(lexeme)>\t<tokens>')
        for line in self.args.expressions:
            for match in lexer.lex(line):
                matched = match.group(0)  # the lexeme text itself
                groups = lexer.matchedgroups(match)
                tokens = [(kind.value, payload)
                          for kind, payload in machine.parse(groups)]
                print(*groups.keys(),
                      repr(matched),
                      tokens,
                      sep='\t')

    def executor(self):
        '''
        Run machine (desk calculator).
        '''
        machine = self.machine
        lexer = Lexer(self.args.separator)
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    if lexer.isfeedable(match):
                        machine.feed(lexer.matchedgroups(match))
            # Abort entire rest of line, makes sense anyway
            except CalcError as e:
                print(e.args[0], file=stderr)
            if line.strip():
                self.render(machine.display())

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer(self.args.separator)
        print(lexer.LEXEME)

    def toolbar(self):
        return 'DEG' if self.machine.get_angle_mode() else 'RAD'

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history_file=self.HISTORY_FILE,
                                    toolbar=self.toolbar)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='Desk calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-d', '--degrees',
                                          action='store_true',
                                          help='trigonometry in degrees')
        self.argument_parser.add_argument('-s', '--separator',
                                          default=Lexer.DEFAULT_SEPARATOR,
                                          help='decimal separator')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.verbose:
            logging.basicConfig(level=logging.DEBUG, stream=stderr,
                                format='%(name)s: %(message)s')
        self.machine = Machine(degrees=self.args.degrees)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except CalcError as e:
            print(e.args[0], file=stderr)
            exit(1)
        except KeyboardInterrupt:
            exit(1)
