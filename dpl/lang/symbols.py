"""Scopes and call frames.

Two parent chains exist side by side. A SymbolTable's parent is the scope a function was *defined* in (closures), a
Context's parent is the frame a function was *called* from (tracebacks). They diverge as soon as a function is called
from somewhere other than where it was defined, and must not be collapsed into one chain.
"""


class SymbolTable:
    """Variable bindings of one scope."""

    def __init__(self, parent=None):
        self.symbols = {}
        self.parent = parent

    def get(self, name):
        """Returns the nearest binding of name walking outward, or None if it is not bound anywhere."""
        table = self
        while table is not None:
            if name in table.symbols:
                return table.symbols[name]
            table = table.parent
        return None

    def set(self, name, value):
        """Always binds in this table, never in an enclosing one."""
        self.symbols[name] = value

    def remove(self, name):
        """Removes a local binding. Bindings in enclosing tables are left alone."""
        self.symbols.pop(name, None)

    def __contains__(self, name):
        return self.get(name) is not None

    def __repr__(self):
        return f"SymbolTable({list(self.symbols)}, parent={self.parent!r})"


class Context:
    """One call frame (or the top-level program)."""

    def __init__(self, name, parent=None, parent_entry_pos=None, symbol_table=None):
        self.name = name
        self.parent = parent
        self.parent_entry_pos = parent_entry_pos
        self.symbol_table = symbol_table if symbol_table is not None else SymbolTable()

    def __repr__(self):
        return f"Context({self.name!r})"
