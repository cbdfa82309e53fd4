"""Session control for DPL. A Session is one interpreter instance: it owns the root Context (with the built-in bindings
`pi`, `print` and `prompt`) and runs source texts through the lexer, parser and interpreter.

Bindings made by one run persist into the next run of the same session, which is what the shell relies on.
"""

import logging
import math
import sys
from dataclasses import dataclass
from typing import Optional

from dpl.lang.error import DPLError, DPLRuntimeError, InvalidSyntaxError
from dpl.lang.interpreter import Interpreter
from dpl.lang.symbols import Context
from dpl.lang.values import BuiltInFunction, Host, Number, Value
from dpl.pure.lexical import Lexer
from dpl.pure.parser import Parser

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of Session.run. Exactly one of value and error is set."""
    value: Optional[Value] = None
    error: Optional[DPLError] = None

    @property
    def ok(self):
        return self.error is None


class Session:
    """Governs a DPL session, with control over the root scope."""
    SH_FILE = "<stdin>"         # file id used for shell input
    ROOT_CONTEXT = "<program>"  # name of the top-level frame in tracebacks
    RECURSION_LIMIT = 10000     # every DPL call or nesting level costs about a dozen Python frames

    def __init__(self, output=None, input=None):
        """output is called with each line the program prints, input with a prompt when the program asks for a line.
        They default to print and input.
        """
        if sys.getrecursionlimit() < Session.RECURSION_LIMIT:
            sys.setrecursionlimit(Session.RECURSION_LIMIT)

        self.host = Host(output, input)
        self.interpreter = Interpreter()

        self.context = Context(Session.ROOT_CONTEXT)
        self.context.symbol_table.set("pi", Number(math.pi))
        for name in BuiltInFunction.BUILTINS:
            self.context.symbol_table.set(name, BuiltInFunction(name, self.host))

    @staticmethod
    def tokenize(file_id, text):
        tokens = Lexer(file_id, text).tokenize()
        logger.debug("%s: %d tokens", file_id, len(tokens))
        return tokens

    @staticmethod
    def parse(file_id, text):
        tokens = Session.tokenize(file_id, text)

        try:
            ast = Parser(tokens).parse()
        except RecursionError:
            raise InvalidSyntaxError(tokens[0].pos_start, tokens[-1].pos_end, "Maximum nesting depth exceeded")

        logger.debug("%s: parsed %s", file_id, ast)
        return ast

    def evaluate(self, file_id, text):
        """Like run, but raises the DPLError instead of returning it."""
        ast = Session.parse(file_id, text)

        try:
            value = self.interpreter.visit(ast, self.context)
        except RecursionError:
            raise DPLRuntimeError(ast.pos_start, ast.pos_end, "Maximum call depth exceeded", self.context)

        logger.debug("%s: evaluated to %r", file_id, value)
        return value

    def run(self, file_id, text):
        """Lexes, parses and evaluates text. Returns a RunResult holding either the value of the last statement or
        the first diagnostic raised.
        """
        try:
            return RunResult(value=self.evaluate(file_id, text))
        except DPLError as error:
            logger.debug("%s: %s", file_id, error.header())
            return RunResult(error=error)


def run(file_id, text, output=None, input=None):
    """Runs text in a fresh Session."""
    return Session(output, input).run(file_id, text)
