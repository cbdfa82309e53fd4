"""Lexical analysis for DPL: converts raw source text into a flat list of typed, positioned tokens.

The lexer tries an ordered table of patterns against the remaining source and takes the first match. Patterns with no
token type (whitespace and comments) are consumed but produce no token. Lexing is not resumable: the first character
no pattern accepts raises an IllegalCharError and no partial token list is returned.
"""

import re

from dpl.lang.error import IllegalCharError
from dpl.pure.position import Position
from dpl.pure.tokens import KEYWORDS, Token


ESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t"}
ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|[^u]|u)")


def unescape(raw):
    """Decodes backslash escapes in a string literal body. Unknown escapes map to the escaped character itself."""

    def _replace(match):
        escape = match.group(1)
        if escape[0] == "u" and len(escape) == 5:
            return chr(int(escape[1:], 16))
        return ESCAPES.get(escape, escape)

    return ESCAPE_RE.sub(_replace, raw)


class Lexer:
    """Tokenizes one source text. See TOKEN_MAP for the priority order of patterns."""
    TOKEN_MAP = [
        (re.compile(r"\s+"), None, None),
        (re.compile(r"//.*"), None, None),
        (re.compile(r"/\*[\s\S]*?\*/"), None, None),

        (re.compile(r"(?:{})\b".format("|".join(KEYWORDS))), "KEYWORD", None),

        (re.compile(r":=?"), "ASSIGN", None),
        (re.compile(r"\("), "LPAREN", None),
        (re.compile(r"\)"), "RPAREN", None),
        (re.compile(r"\{"), "LBRACE", None),
        (re.compile(r"\}"), "RBRACE", None),
        (re.compile(r","), "COMMA", None),
        (re.compile(r";"), "SEMICOLON", None),
        (re.compile(r"->"), "ARROW", None),

        (re.compile(r"none\b"), "NONE", None),
        (re.compile(r"\d+\.?\d*\b"), "NUMBER", None),
        (re.compile(r"(?:true|false)\b"), "BOOL", None),
        (re.compile(r'"((?:\\.|.)*?)"'), "STRING", lambda match: unescape(match.group(1))),

        (re.compile(r"\+"), "PLUS", None),
        (re.compile(r"-"), "MINUS", None),
        (re.compile(r"\*"), "MUL", None),
        (re.compile(r"/"), "DIV", None),
        (re.compile(r"%"), "MOD", None),
        (re.compile(r"\^"), "POW", None),

        (re.compile(r"and\b"), "AND", None),
        (re.compile(r"or\b"), "OR", None),
        (re.compile(r"xor\b"), "XOR", None),
        (re.compile(r"not\b"), "NOT", None),

        (re.compile(r"<="), "LE", None),
        (re.compile(r"<"), "LT", None),
        (re.compile(r">="), "GE", None),
        (re.compile(r">"), "GT", None),
        (re.compile(r"="), "EQ", None),
        (re.compile(r"!="), "NEQ", None),

        (re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*"), "IDENTIFIER", None),
    ]

    def __init__(self, file_id, text):
        self.file_id = file_id
        self.text = text
        self.pos = Position(0, 0, 0, file_id, text)

    @property
    def current_char(self):
        if self.pos.offset < len(self.text):
            return self.text[self.pos.offset]
        return None

    def advance(self, count=1):
        for __ in range(count):
            self.pos.advance(self.current_char)

    def match(self):
        """Returns (type, value, length) of the first pattern matching at the cursor, or None."""
        for regex, type, convert in Lexer.TOKEN_MAP:
            match = regex.match(self.text, self.pos.offset)
            if match:
                value = convert(match) if convert else match.group(0)
                return type, value, len(match.group(0))
        return None

    def tokenize(self):
        """Returns the full token list, terminated by a zero-width EOF token."""
        tokens = []

        while self.current_char is not None:
            pos_start = self.pos.copy()
            matched = self.match()

            if matched is None:
                char = self.current_char
                self.advance()
                raise IllegalCharError(pos_start, self.pos.copy(), f"'{char}'")

            type, value, length = matched
            self.advance(length)

            if type is not None:
                tokens.append(Token(type, value, pos_start, self.pos))

        tokens.append(Token("EOF", "", self.pos, self.pos))
        return tokens
