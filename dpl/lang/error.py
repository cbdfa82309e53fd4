"""Error handling for the DPL language. Only DPLErrors should be encountered while running a program: if another type
of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every DPLError carries the span of the offending source and renders itself as

```
<Kind>: <message>
  File <id>, line L, column C              ; lex/syntax errors
                                           ; runtime errors print a traceback of every frame instead

<offending source line(s)>
     ^^^^
```
"""

import sys

from termcolor import colored


def underline(text, pos_start, pos_end):
    """Returns the source lines covered by [pos_start, pos_end) with a caret underline below each of them."""
    lines = text.split("\n")
    last = min(pos_end.line, len(lines) - 1)
    result = []

    for line_num in range(pos_start.line, last + 1):
        line = lines[line_num].replace("\t", " ")
        col_start = pos_start.column if line_num == pos_start.line else 0
        col_end = pos_end.column if line_num == pos_end.line else len(line)

        result.append(line)
        result.append(" " * col_start + "^" * max(col_end - col_start, 1))

    return "\n".join(result)


class DPLError(Exception):
    """Base class for every diagnostic. kind is the name shown to the user."""
    kind = "Error"

    def __init__(self, pos_start, pos_end, msg, internal=False):
        super().__init__(msg)

        self.pos_start = pos_start
        self.pos_end = pos_end
        self.msg = msg
        self.internal = internal

    def header(self):
        prefix = "[internal] " if self.internal else ""
        return f"{prefix}{self.kind}: {self.msg}"

    def location(self):
        """Single-frame location line."""
        return f"  File {self.pos_start.file_id}, line {self.pos_start.line + 1}, column {self.pos_start.column + 1}"

    def render(self, color=False):
        """Full human-readable diagnostic. If color, uses terminal colors."""
        header, location = self.header(), self.location()
        arrows = underline(self.pos_start.text, self.pos_start, self.pos_end)

        if color:
            header = colored(header, ErrorHandler.ERROR, attrs=["bold"])
            location = colored(location, attrs=["dark"])
            *source, carets = arrows.split("\n")
            arrows = "\n".join(source + [colored(carets, ErrorHandler.ERROR, attrs=["bold"])]) if source else arrows

        return f"{header}\n{location}\n\n{arrows}"

    def __str__(self):
        return self.render()


class IllegalCharError(DPLError):
    """Raised by the lexer when no token pattern matches."""
    kind = "IllegalCharError"


class InvalidSyntaxError(DPLError):
    """Raised by the parser at the first unexpected token."""
    kind = "SyntaxError"


class DPLRuntimeError(DPLError):
    """Raised during evaluation. context is the frame the error happened in and is used to build the traceback."""
    kind = "RuntimeError"

    def __init__(self, pos_start, pos_end, msg, context, internal=False):
        super().__init__(pos_start, pos_end, msg, internal)
        self.context = context

    def location(self):
        return self.traceback()

    def traceback(self):
        """Walks the frame chain outward, most recent call last."""
        frames = []
        pos, ctx = self.pos_start, self.context

        while ctx is not None:
            frames.insert(0, f"  File {pos.file_id}, line {pos.line + 1}, column {pos.column + 1}, in {ctx.name}")
            pos, ctx = ctx.parent_entry_pos, ctx.parent

        return "\n".join(["Traceback (most recent call last):"] + frames)


class UndefinedOpError(DPLRuntimeError):
    """No operator exists for this operand type or combination of types."""
    kind = "UndefinedOpError"


class ErrorHandler:
    """Context manager that reports DPLErrors (and unexpected Python errors) instead of letting them propagate."""
    ERROR = "red"

    def __init__(self, fatal=True, color=True, stream=None):
        self.fatal = fatal
        self.color = color
        self.stream = stream

    def report(self, error, internal=True):
        """Prints error without exiting. Plain-string errors are internal unless internal is False."""
        if isinstance(error, DPLError):
            msg = error.render(self.color)
        else:
            msg = f"{'[internal] ' if internal else ''}error: {error}"
            if self.color:
                msg = colored(msg, ErrorHandler.ERROR, attrs=["bold"])

        print(msg, file=self.stream or sys.stdout)

    def throw(self, error, internal=True):
        """Prints error. Exits if this handler is fatal."""
        self.report(error, internal)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw("keyboard interrupt")
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is not None and issubclass(exc_type, DPLError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(f"unknown error: '{exc_type.__name__}: {exc_val}'")
            do_exit = True

        return not do_exit
