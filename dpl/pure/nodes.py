"""Abstract syntax tree for DPL. Everything is an expression, including blocks, conditionals, loops and function
literals. Nodes are pure data: the interpreter dispatches on the node class, nodes never evaluate themselves.

Every node spans the union of its parts, and str(node) gives a parenthesized form of the tree that is handy for
debugging the parser (see `dpl --ast`).
"""

from dpl.pure.tokens import SYMBOLS


class Node:
    """Superclass for every AST node."""

    def __init__(self, pos_start, pos_end):
        self.pos_start = pos_start
        self.pos_end = pos_end

    def __repr__(self):
        return f"{type(self).__name__}({self})"


class ValueNode(Node):
    """NONE, NUMBER, BOOL or STRING literal."""

    def __init__(self, token):
        super().__init__(token.pos_start, token.pos_end)
        self.token = token

    def __str__(self):
        if self.token.type == "STRING":
            return f'"{self.token.value}"'
        return self.token.value


class UnaryOpNode(Node):

    def __init__(self, op, child):
        super().__init__(op.pos_start, child.pos_end)
        self.op = op
        self.child = child

    def __str__(self):
        return f"({SYMBOLS[self.op.type]} {self.child})"


class BinaryOpNode(Node):

    def __init__(self, op, left, right):
        super().__init__(left.pos_start, right.pos_end)
        self.op = op
        self.left = left
        self.right = right

    def __str__(self):
        return f"({self.left} {SYMBOLS[self.op.type]} {self.right})"


class VarAccessNode(Node):

    def __init__(self, identifier):
        super().__init__(identifier.pos_start, identifier.pos_end)
        self.identifier = identifier

    @property
    def name(self):
        return self.identifier.value

    def __str__(self):
        return self.name


class VarAssignNode(Node):

    def __init__(self, identifier, value):
        super().__init__(identifier.pos_start, value.pos_end)
        self.identifier = identifier
        self.value = value

    @property
    def name(self):
        return self.identifier.value

    def __str__(self):
        return f"(set {self.name}: {self.value})"


class IfNode(Node):
    """else_branch is None when there is no else block."""

    def __init__(self, condition, then_branch, else_branch=None):
        super().__init__(condition.pos_start, (else_branch or then_branch).pos_end)
        self.condition = condition
        self.then_branch = then_branch
        self.else_branch = else_branch

    def __str__(self):
        if self.else_branch is not None:
            return f"({self.condition} ? {self.then_branch} : {self.else_branch})"
        return f"({self.condition} ? {self.then_branch})"


class ForNode(Node):
    """step is None when the loop steps by the implicit 1."""

    def __init__(self, var_name, start, end, step, body):
        super().__init__(var_name.pos_start, body.pos_end)
        self.var_name = var_name
        self.start = start
        self.end = end
        self.step = step
        self.body = body

    def __str__(self):
        step = f" step {self.step}" if self.step is not None else ""
        return f"(for {self.var_name.value}: {self.start} to {self.end}{step} do {self.body})"


class WhileNode(Node):

    def __init__(self, condition, body):
        super().__init__(condition.pos_start, body.pos_end)
        self.condition = condition
        self.body = body

    def __str__(self):
        return f"(while {self.condition} do {self.body})"


class FnDefNode(Node):
    """name is None for anonymous functions. params is a list of IDENTIFIER tokens."""

    def __init__(self, name, params, body):
        first = name or (params[0] if params else body)
        super().__init__(first.pos_start, body.pos_end)
        self.name = name
        self.params = params
        self.body = body

    @property
    def param_names(self):
        return [param.value for param in self.params]

    def __str__(self):
        name = self.name.value if self.name else ""
        return f"(fn {name}({', '.join(self.param_names)}) {self.body})"


class CallNode(Node):

    def __init__(self, callee, args):
        super().__init__(callee.pos_start, (args[-1] if args else callee).pos_end)
        self.callee = callee
        self.args = args

    def __str__(self):
        return f"({self.callee}({', '.join(str(arg) for arg in self.args)}))"


class StatementsNode(Node):
    """A sequence of expressions: the program itself and every block body."""

    def __init__(self, statements, pos_start, pos_end):
        if statements:
            pos_start, pos_end = statements[0].pos_start, statements[-1].pos_end
        super().__init__(pos_start, pos_end)
        self.statements = statements

    def __str__(self):
        return "{" + "; ".join(str(statement) for statement in self.statements) + "}"
