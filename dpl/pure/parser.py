"""Parser for DPL: recursive descent for blocks and control flow, precedence climbing for expressions.

Grammar (lower rules bind tighter):

```
program     ::= statements EOF
statements  ::= (expr (";" expr)* ";"?)?                        ; stops at EOF or "}"
expr        ::= "set"? IDENTIFIER ":" expr                       ; ":" may also be written ":="
              | logic (("and" | "or" | "xor") logic)*
logic       ::= "not" logic | relational
relational  ::= additive (("=" | "!=" | "<" | "<=" | ">" | ">=") additive)*
additive    ::= term (("+" | "-") term)*
term        ::= factor (("*" | "/" | "%") factor)*
factor      ::= ("+" | "-") power | power
power       ::= call ("^" factor)*                               ; right-associative
call        ::= atom ("(" (expr ("," expr)*)? ")")?
atom        ::= NONE | NUMBER | BOOL | STRING | IDENTIFIER
              | "(" expr ")" | if_expr | for_expr | while_expr | fn_def
if_expr     ::= "if" expr "{" statements "}" ("else" "{" statements "}")?
for_expr    ::= "for" IDENTIFIER ":" expr "to" expr ("step" expr)? "{" statements "}"
while_expr  ::= "while" expr "{" statements "}"
fn_def      ::= "fn" IDENTIFIER? "(" (IDENTIFIER ("," IDENTIFIER)*)? ")" "{" statements "}"
```

The parser does no error recovery: the first unexpected token raises an InvalidSyntaxError.
"""

from dpl.lang.error import InvalidSyntaxError
from dpl.pure.nodes import (BinaryOpNode, CallNode, FnDefNode, ForNode, IfNode, StatementsNode, UnaryOpNode,
                            ValueNode, VarAccessNode, VarAssignNode, WhileNode)


class Parser:
    """Builds an AST from a token list produced by Lexer.tokenize (which always ends with EOF)."""
    LITERALS = ("NONE", "NUMBER", "BOOL", "STRING")

    def __init__(self, tokens):
        self.tokens = tokens
        self.idx = 0

    @property
    def current(self):
        return self.tokens[self.idx]

    def peek(self):
        """Token after current. EOF is returned past the end."""
        return self.tokens[min(self.idx + 1, len(self.tokens) - 1)]

    def advance(self):
        if self.current.type != "EOF":
            self.idx += 1
        return self.current

    def error(self, msg, token=None):
        """Returns a syntax error spanning token (defaults to current)."""
        token = token or self.current
        return InvalidSyntaxError(token.pos_start, token.pos_end, msg)

    def unexpected(self):
        if self.current.type == "EOF":
            return self.error("Unexpected end of input")
        return self.error(f"Unexpected {self.current.type}: '{self.current.value}'")

    def expect(self, type, msg):
        """Consumes and returns current if it has the given type, else raises with msg."""
        token = self.current
        if token.type != type:
            raise self.error(msg)
        self.advance()
        return token

    def expect_keyword(self, keyword):
        token = self.current
        if not token.matches("KEYWORD", keyword):
            raise self.error(f"Expected '{keyword}'")
        self.advance()
        return token

    def parse(self):
        """Parses the whole token list into a StatementsNode."""
        node = self.statements()

        if self.current.type != "EOF":
            raise self.unexpected()

        return node

    def statements(self):
        pos_start, pos_end = self.current.pos_start, self.current.pos_end
        statements = []

        while self.current.type not in ("EOF", "RBRACE"):
            statements.append(self.expr())

            if self.current.type != "SEMICOLON":
                break
            self.advance()

        return StatementsNode(statements, pos_start, pos_end)

    def block(self):
        """'{' statements '}'"""
        self.expect("LBRACE", "Expected '{'")
        body = self.statements()
        self.expect("RBRACE", "Expected '}'")
        return body

    def expr(self):
        if self.current.matches("KEYWORD", "set"):
            self.advance()
            identifier = self.expect("IDENTIFIER", "Expected IDENTIFIER")
            self.expect("ASSIGN", "Expected ':'")
            return VarAssignNode(identifier, self.expr())

        if self.current.type == "IDENTIFIER" and self.peek().type == "ASSIGN":
            identifier = self.current
            self.advance()
            self.advance()
            return VarAssignNode(identifier, self.expr())

        return self.bin_op(self.logic, ("AND", "OR", "XOR"))

    def logic(self):
        if self.current.type == "NOT":
            op = self.current
            self.advance()
            return UnaryOpNode(op, self.logic())

        return self.relational()

    def relational(self):
        return self.bin_op(self.additive, ("EQ", "NEQ", "LT", "LE", "GT", "GE"))

    def additive(self):
        return self.bin_op(self.term, ("PLUS", "MINUS"))

    def term(self):
        return self.bin_op(self.factor, ("MUL", "DIV", "MOD"))

    def factor(self):
        token = self.current

        if token.type in ("PLUS", "MINUS"):
            self.advance()
            return UnaryOpNode(token, self.power())

        return self.power()

    def power(self):
        return self.bin_op(self.call, ("POW",), self.factor)

    def call(self):
        atom = self.atom()

        if self.current.type != "LPAREN":
            return atom
        self.advance()

        args = []
        while self.current.type != "RPAREN":
            args.append(self.expr())

            if self.current.type == "COMMA":
                self.advance()
            elif self.current.type != "RPAREN":
                raise self.error("Expected ',' or ')'")

        self.advance()
        return CallNode(atom, args)

    def atom(self):
        token = self.current

        if token.type in Parser.LITERALS:
            self.advance()
            return ValueNode(token)

        if token.type == "IDENTIFIER":
            self.advance()
            return VarAccessNode(token)

        if token.type == "LPAREN":
            self.advance()
            expr = self.expr()
            self.expect("RPAREN", "Expected ')'")
            return expr

        if token.matches("KEYWORD", "if"):
            return self.if_expr()
        if token.matches("KEYWORD", "for"):
            return self.for_expr()
        if token.matches("KEYWORD", "while"):
            return self.while_expr()
        if token.matches("KEYWORD", "fn"):
            return self.fn_def()

        raise self.unexpected()

    def if_expr(self):
        self.expect_keyword("if")
        condition = self.expr()
        then_branch = self.block()

        if not self.current.matches("KEYWORD", "else"):
            return IfNode(condition, then_branch)
        self.advance()

        return IfNode(condition, then_branch, self.block())

    def for_expr(self):
        self.expect_keyword("for")
        var_name = self.expect("IDENTIFIER", "Expected IDENTIFIER")
        self.expect("ASSIGN", "Expected ':'")
        start = self.expr()

        self.expect_keyword("to")
        end = self.expr()

        step = None
        if self.current.matches("KEYWORD", "step"):
            self.advance()
            step = self.expr()

        return ForNode(var_name, start, end, step, self.block())

    def while_expr(self):
        self.expect_keyword("while")
        condition = self.expr()
        return WhileNode(condition, self.block())

    def fn_def(self):
        self.expect_keyword("fn")

        name = None
        if self.current.type == "IDENTIFIER":
            name = self.current
            self.advance()

        self.expect("LPAREN", "Expected '('" if name else "Expected '(' or IDENTIFIER")

        params = []
        while self.current.type != "RPAREN":
            params.append(self.expect("IDENTIFIER", "Expected IDENTIFIER"))

            if self.current.type == "COMMA":
                self.advance()
            elif self.current.type != "RPAREN":
                raise self.error("Expected ',' or ')'")
        self.advance()

        return FnDefNode(name, params, self.block())

    def bin_op(self, operand, ops, right_operand=None):
        """Left-associative fold of operand (ops operand)*. right_operand, if given, parses the right-hand sides."""
        right_operand = right_operand or operand
        left = operand()

        while self.current.type in ops:
            op = self.current
            self.advance()
            left = BinaryOpNode(op, left, right_operand())

        return left
