"""Runtime values of DPL: none, numbers, bools, strings, user functions and built-in functions.

Operators are looked up in per-type tables. unary_ops maps an operator token type to a function of the operand;
binary_ops maps (operator, right operand type) to a function of both operands, with ANY matching every right operand
type. All lookups go through unary_op/binary_op, which also intercept equality: = and != are defined between any two
values and compare the variant and the payload, so `none = false` is simply false.

Every value carries the span and Context it was produced in. These are only ever used to build diagnostics, and are
re-stamped on copies so that one use site never leaks its position into another.
"""

import builtins
import math
from abc import ABC, abstractmethod
from decimal import Decimal

from dpl.lang.error import DPLRuntimeError, UndefinedOpError
from dpl.lang.symbols import Context, SymbolTable
from dpl.pure.tokens import SYMBOLS

ANY = "*"


def format_number(num):
    """Display form of a number: integral values have no fraction and nothing is ever in exponent notation."""
    if math.isnan(num):
        return "NaN"
    if math.isinf(num):
        return "Infinity" if num > 0 else "-Infinity"
    if num.is_integer():
        return str(int(num))
    return format(Decimal(repr(num)), "f")


def to_int(operand, context):
    """Truncates a number to an integer for bitwise operators."""
    if not math.isfinite(operand.value):
        raise DPLRuntimeError(operand.pos_start, operand.pos_end, "Cannot apply a bitwise operator to "
                              f"{format_number(operand.value)}", context)
    return int(operand.value)


class Value(ABC):
    """Superclass of every runtime value."""
    type = None
    unary_ops = {}
    binary_ops = {}

    def __init__(self, value):
        self.value = value
        self.pos_start = None
        self.pos_end = None
        self.context = None

    def set_pos(self, pos_start=None, pos_end=None):
        self.pos_start = pos_start
        self.pos_end = pos_end
        return self

    def set_context(self, context=None):
        self.context = context
        return self

    @abstractmethod
    def copy(self):
        """Returns a value with the same payload and span but independent stamps."""

    def equals(self, other):
        return type(self) is type(other) and self.value == other.value

    def call(self, args):
        raise DPLRuntimeError(self.pos_start, self.pos_end, f"{self.type} is not callable", self.context)

    def render(self):
        """Form shown by the REPL. Defaults to the display form."""
        return str(self)

    def __repr__(self):
        return f"{type(self).__name__}({self.render()})"


class NoneValue(Value):
    type = "NONE"

    def __init__(self):
        super().__init__(None)

    def copy(self):
        return NoneValue().set_pos(self.pos_start, self.pos_end)

    def __str__(self):
        return "none"


class Number(Value):
    """IEEE double. There is no integer/float distinction at the language level."""
    type = "NUMBER"

    def __init__(self, value):
        super().__init__(float(value))

    def copy(self):
        return Number(self.value).set_pos(self.pos_start, self.pos_end)

    def div(self, other):
        if other.value == 0:
            raise DPLRuntimeError(other.pos_start, other.pos_end, "Division by zero", self.context)
        return Number(self.value / other.value)

    def mod(self, other):
        if other.value == 0:
            raise DPLRuntimeError(other.pos_start, other.pos_end, "Modulus by zero", self.context)
        return Number(math.fmod(self.value, other.value))

    def pow(self, other):
        if self.value == 0 and other.value == 0:
            raise DPLRuntimeError(self.pos_start, other.pos_end, "0 ^ 0 is undefined", self.context)
        try:
            return Number(math.pow(self.value, other.value))
        except (OverflowError, ValueError):
            msg = f"{format_number(self.value)} ^ {format_number(other.value)} has no real result"
            raise DPLRuntimeError(self.pos_start, other.pos_end, msg, self.context)

    def bitwise(self, other, func):
        return Number(func(to_int(self, self.context), to_int(other, self.context)))

    def __str__(self):
        return format_number(self.value)


class Bool(Value):
    type = "BOOL"

    def __init__(self, value):
        if isinstance(value, str):
            value = value == "true"
        super().__init__(bool(value))

    def copy(self):
        return Bool(self.value).set_pos(self.pos_start, self.pos_end)

    def __str__(self):
        return "true" if self.value else "false"


class String(Value):
    type = "STRING"
    ESCAPES = {"\b": "b", "\f": "f", "\n": "n", "\r": "r", "\t": "t"}
    MAX_LENGTH = 2 ** 28  # longest string a repetition may produce

    def __init__(self, value):
        super().__init__(str(value))

    def copy(self):
        return String(self.value).set_pos(self.pos_start, self.pos_end)

    def repeat(self, other):
        if other.value < 0:
            raise DPLRuntimeError(other.pos_start, other.pos_end, "Cannot repeat STRING a negative number of times",
                                  self.context)
        elif not other.value.is_integer():
            raise DPLRuntimeError(other.pos_start, other.pos_end, "Cannot repeat STRING by a non-integer value",
                                  self.context)

        count = int(other.value)
        if len(self.value) * count > String.MAX_LENGTH:
            raise DPLRuntimeError(other.pos_start, other.pos_end, "Cannot repeat STRING that many times",
                                  self.context)
        try:
            return String(self.value * count)
        except (OverflowError, MemoryError):
            raise DPLRuntimeError(other.pos_start, other.pos_end, "Cannot repeat STRING that many times", self.context)

    def render(self):
        """Quoted, with the escapes the lexer understands."""
        escaped = ""
        for char in self.value:
            if char in "\"\\":
                escaped += "\\" + char
            elif char in String.ESCAPES:
                escaped += "\\" + String.ESCAPES[char]
            elif ord(char) < 0x20:
                escaped += f"\\u{ord(char):04x}"
            else:
                escaped += char
        return f'"{escaped}"'

    def __str__(self):
        return self.value


class Function(Value):
    """User-defined function. closure is the SymbolTable of the scope it was defined in."""
    type = "FUNCTION"

    def __init__(self, name, body, param_names, closure, interpreter):
        super().__init__(body)
        self.name = name
        self.body = body
        self.param_names = param_names
        self.closure = closure
        self.interpreter = interpreter

    def copy(self):
        fn = Function(self.name, self.body, self.param_names, self.closure, self.interpreter)
        return fn.set_pos(self.pos_start, self.pos_end).set_context(self.context)

    def equals(self, other):
        return isinstance(other, Function) and other.body is self.body and other.closure is self.closure

    def call(self, args):
        """Runs the body in a new frame. The frame's parent is the caller (self.context), while its scope's parent
        is the defining scope.
        """
        if len(args) != len(self.param_names):
            expected = len(self.param_names)
            msg = f"Expected {expected} argument{'' if expected == 1 else 's'}, got {len(args)}"
            raise DPLRuntimeError(self.pos_start, self.pos_end, msg, self.context)

        exec_ctx = Context(self.name or "<anonymous>", self.context, self.pos_start, SymbolTable(self.closure))
        for name, arg in zip(self.param_names, args):
            exec_ctx.symbol_table.set(name, arg.copy().set_context(exec_ctx))

        return self.interpreter.visit(self.body, exec_ctx)

    def __str__(self):
        return f"<fn {self.name or '<anonymous>'}>"


class Host:
    """I/O capabilities of the embedding program. output takes one line; input takes a prompt and returns a line."""

    def __init__(self, output=None, input=None):
        self.output = output if output is not None else builtins.print
        self.input = input if input is not None else builtins.input

    def write(self, line):
        self.output(line)

    def read_line(self, prompt=""):
        return self.input(prompt)


class BuiltInFunction(Value):
    """Function implemented by the host rather than in DPL. Dispatches by name, see BUILTINS."""
    type = "BUILT-IN FUNCTION"

    def __init__(self, name, host):
        super().__init__(name)
        self.name = name
        self.host = host

    def copy(self):
        fn = BuiltInFunction(self.name, self.host)
        return fn.set_pos(self.pos_start, self.pos_end).set_context(self.context)

    def call(self, args):
        if self.name not in BuiltInFunction.BUILTINS:
            raise DPLRuntimeError(self.pos_start, self.pos_end, f"Undefined built-in function '{self.name}'",
                                  self.context, internal=True)

        method, min_args, max_args = BuiltInFunction.BUILTINS[self.name]
        if not min_args <= len(args) <= max_args:
            expected = str(min_args) if min_args == max_args else f"{min_args} to {max_args}"
            msg = f"Expected {expected} argument{'' if max_args == 1 else 's'}, got {len(args)}"
            raise DPLRuntimeError(self.pos_start, self.pos_end, msg, self.context)

        return method(self, *args)

    def execute_print(self, value):
        self.host.write(str(value))
        return value

    def execute_prompt(self, message=None):
        if message is not None:
            self.host.write(str(message))
        return String(self.host.read_line())

    def __str__(self):
        return f"<built-in fn {self.name}>"


BuiltInFunction.BUILTINS = {
    "print": (BuiltInFunction.execute_print, 1, 1),
    "prompt": (BuiltInFunction.execute_prompt, 0, 1),
}


NoneValue.unary_ops = {
    "NOT": lambda self: Bool(True),
}

Number.unary_ops = {
    "PLUS": lambda self: self.copy(),
    "MINUS": lambda self: Number(-self.value),
    "NOT": lambda self: Number(~to_int(self, self.context)),
}
Number.binary_ops = {
    ("PLUS", "NUMBER"): lambda self, other: Number(self.value + other.value),
    ("MINUS", "NUMBER"): lambda self, other: Number(self.value - other.value),
    ("MUL", "NUMBER"): lambda self, other: Number(self.value * other.value),
    ("DIV", "NUMBER"): Number.div,
    ("MOD", "NUMBER"): Number.mod,
    ("POW", "NUMBER"): Number.pow,

    ("AND", "NUMBER"): lambda self, other: self.bitwise(other, lambda a, b: a & b),
    ("OR", "NUMBER"): lambda self, other: self.bitwise(other, lambda a, b: a | b),
    ("XOR", "NUMBER"): lambda self, other: self.bitwise(other, lambda a, b: a ^ b),

    ("LT", "NUMBER"): lambda self, other: Bool(self.value < other.value),
    ("LE", "NUMBER"): lambda self, other: Bool(self.value <= other.value),
    ("GT", "NUMBER"): lambda self, other: Bool(self.value > other.value),
    ("GE", "NUMBER"): lambda self, other: Bool(self.value >= other.value),
}

Bool.unary_ops = {
    "NOT": lambda self: Bool(not self.value),
}
Bool.binary_ops = {
    ("AND", "BOOL"): lambda self, other: Bool(self.value and other.value),
    ("OR", "BOOL"): lambda self, other: Bool(self.value or other.value),
    ("XOR", "BOOL"): lambda self, other: Bool(self.value != other.value),
}

String.binary_ops = {
    ("PLUS", ANY): lambda self, other: String(self.value + str(other)),
    ("MUL", "NUMBER"): String.repeat,

    ("LT", "STRING"): lambda self, other: Bool(self.value < other.value),
    ("LE", "STRING"): lambda self, other: Bool(self.value <= other.value),
    ("GT", "STRING"): lambda self, other: Bool(self.value > other.value),
    ("GE", "STRING"): lambda self, other: Bool(self.value >= other.value),
}


def unary_op(op, operand):
    """Applies the unary operator token type op to operand."""
    func = type(operand).unary_ops.get(op)

    if func is None:
        msg = f"Undefined behavior for {SYMBOLS[op]} {operand.type}"
        raise UndefinedOpError(operand.pos_start, operand.pos_end, msg, operand.context)

    return func(operand).set_pos(operand.pos_start, operand.pos_end).set_context(operand.context)


def binary_op(op, left, right):
    """Applies the binary operator token type op to left and right. Dispatches on the left operand's table."""
    if op == "EQ":
        result = Bool(left.equals(right))
    elif op == "NEQ":
        result = Bool(not left.equals(right))
    else:
        table = type(left).binary_ops
        func = table.get((op, right.type), table.get((op, ANY)))

        if func is None:
            msg = f"Undefined behavior for {left.type} {SYMBOLS[op]} {right.type}"
            raise UndefinedOpError(left.pos_start, right.pos_end, msg, left.context)

        result = func(left, right)

    return result.set_pos(left.pos_start, right.pos_end).set_context(left.context)
