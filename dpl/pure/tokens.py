"""Token taxonomy shared by the lexer and the parser.

Token types are plain strings. Keywords all share the single KEYWORD type and are told apart by their value, so the
parser recognizes them generically with Token.matches.
"""

KEYWORDS = ("set", "if", "else", "for", "to", "step", "while", "fn")

TOKENS = (
    # special tokens and symbols
    "EOF", "KEYWORD", "IDENTIFIER", "ASSIGN", "LPAREN", "RPAREN", "LBRACE", "RBRACE", "COMMA", "SEMICOLON", "ARROW",
    # literals
    "NONE", "NUMBER", "BOOL", "STRING",
    # arithmetic
    "PLUS", "MINUS", "MUL", "DIV", "MOD", "POW",
    # boolean/bitwise
    "AND", "OR", "XOR", "NOT",
    # comparison
    "EQ", "NEQ", "LT", "LE", "GT", "GE",
)

SYMBOLS = {
    "PLUS": "+", "MINUS": "-", "MUL": "*", "DIV": "/", "MOD": "%", "POW": "^",
    "AND": "and", "OR": "or", "XOR": "xor", "NOT": "not",
    "EQ": "=", "NEQ": "!=", "LT": "<", "LE": "<=", "GT": ">", "GE": ">=",
}


class Token:
    """A typed lexeme with its source span. pos_end defaults to one character past pos_start."""

    def __init__(self, type, value, pos_start, pos_end=None):
        assert type in TOKENS, f"{type} is not a valid token type"

        self.type = type
        self.value = value
        self.pos_start = pos_start.copy()
        self.pos_end = pos_end.copy() if pos_end is not None else pos_start.copy().advance()

    def matches(self, type, value):
        return self.type == type and self.value == value

    def __repr__(self):
        if self.value:
            return f"{self.type}({self.value})"
        return self.type

    def __eq__(self, other):
        return isinstance(other, Token) and (self.type, self.value) == (other.type, other.value)

    def __hash__(self):
        return hash((self.type, self.value))
