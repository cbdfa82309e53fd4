"""Source positions. A Position is a cursor into the original source text: the lexer owns one running cursor and every
token/node keeps its own snapshots of it for diagnostics.
"""


class Position:
    """Offset, zero-based line and column, plus the file id and full text the offset points into."""

    def __init__(self, offset, line, column, file_id, text):
        self.offset = offset
        self.line = line
        self.column = column
        self.file_id = file_id
        self.text = text

    def advance(self, current_char=""):
        """Moves the cursor past current_char. Returns self so that calls can be chained."""
        self.offset += 1

        if current_char == "\n":
            self.line += 1
            self.column = 0
        else:
            self.column += 1

        return self

    def copy(self):
        """Independent snapshot of this cursor."""
        return Position(self.offset, self.line, self.column, self.file_id, self.text)

    def __repr__(self):
        return f"Position({self.file_id}:{self.line + 1}:{self.column + 1})"

    def __eq__(self, other):
        return isinstance(other, Position) and (self.offset, self.file_id) == (other.offset, other.file_id)

    def __hash__(self):
        return hash((self.offset, self.file_id))
