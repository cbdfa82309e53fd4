"""Tree-walking evaluator. Interpreter.visit dispatches on the node's class to a visit_<NodeClass> method and returns a
Value; any DPLError raised by a child propagates immediately, so siblings after a failing node are never evaluated.
"""

from dpl.lang.error import DPLRuntimeError
from dpl.lang.values import Bool, Function, NoneValue, Number, String, binary_op, unary_op


class Interpreter:
    """Evaluates AST nodes against a Context."""
    LITERALS = {"NONE": lambda value: NoneValue(), "NUMBER": Number, "BOOL": Bool, "STRING": String}

    def visit(self, node, context):
        method = getattr(self, f"visit_{type(node).__name__}", None)
        if method is None:
            raise DPLRuntimeError(node.pos_start, node.pos_end, f"No visit method for {type(node).__name__}", context,
                                  internal=True)
        return method(node, context)

    def visit_ValueNode(self, node, context):
        token = node.token
        if token.type not in Interpreter.LITERALS:
            raise DPLRuntimeError(token.pos_start, token.pos_end, f"Unknown token type {token.type}", context,
                                  internal=True)

        value = Interpreter.LITERALS[token.type](token.value)
        return value.set_pos(node.pos_start, node.pos_end).set_context(context)

    def visit_UnaryOpNode(self, node, context):
        child = self.visit(node.child, context)
        return unary_op(node.op.type, child).set_pos(node.pos_start, node.pos_end)

    def visit_BinaryOpNode(self, node, context):
        left = self.visit(node.left, context)
        right = self.visit(node.right, context)
        return binary_op(node.op.type, left, right).set_pos(node.pos_start, node.pos_end)

    def visit_VarAccessNode(self, node, context):
        value = context.symbol_table.get(node.name)
        if value is None:
            raise DPLRuntimeError(node.pos_start, node.pos_end, f"Undefined variable '{node.name}'", context)

        return value.copy().set_pos(node.pos_start, node.pos_end).set_context(context)

    def visit_VarAssignNode(self, node, context):
        value = self.visit(node.value, context)
        context.symbol_table.set(node.name, value)
        return value

    def check_type(self, value, expected, what, context):
        """Raises unless value is of type expected. what names the value in the message."""
        if value.type != expected:
            msg = f"{what} should be type {expected}, got {value.type}"
            raise DPLRuntimeError(value.pos_start, value.pos_end, msg, context)

    def visit_IfNode(self, node, context):
        condition = self.visit(node.condition, context)
        self.check_type(condition, "BOOL", "Condition", context)

        if condition.value:
            return self.visit(node.then_branch, context)
        if node.else_branch is not None:
            return self.visit(node.else_branch, context)

        return NoneValue().set_pos(node.pos_start, node.pos_end).set_context(context)

    def visit_ForNode(self, node, context):
        start = self.visit(node.start, context)
        end = self.visit(node.end, context)
        if node.step is not None:
            step = self.visit(node.step, context)
        else:
            step = Number(1).set_pos(end.pos_start, end.pos_end).set_context(context)

        self.check_type(start, "NUMBER", "Start value", context)
        self.check_type(end, "NUMBER", "End value", context)
        self.check_type(step, "NUMBER", "Step value", context)

        i, step = start.value, step.value
        while i <= end.value if step > 0 else i >= end.value:
            # rebinds in the enclosing scope, closures made in the body all see the same binding
            context.symbol_table.set(node.var_name.value, Number(i).set_pos(node.pos_start, node.pos_end))
            i += step

            self.visit(node.body, context)

        return NoneValue().set_pos(node.pos_start, node.pos_end).set_context(context)

    def visit_WhileNode(self, node, context):
        while True:
            condition = self.visit(node.condition, context)
            self.check_type(condition, "BOOL", "Condition", context)

            if not condition.value:
                break

            self.visit(node.body, context)

        return NoneValue().set_pos(node.pos_start, node.pos_end).set_context(context)

    def visit_FnDefNode(self, node, context):
        name = node.name.value if node.name else None

        fn = Function(name, node.body, node.param_names, context.symbol_table, self)
        fn.set_pos(node.pos_start, node.pos_end).set_context(context)

        if name:
            context.symbol_table.set(name, fn)
        return fn

    def visit_CallNode(self, node, context):
        fn = self.visit(node.callee, context)
        fn = fn.copy().set_pos(node.pos_start, node.pos_end).set_context(context)

        args = [self.visit(arg, context) for arg in node.args]

        result = fn.call(args)
        return result.copy().set_pos(node.pos_start, node.pos_end).set_context(context)

    def visit_StatementsNode(self, node, context):
        value = None
        for statement in node.statements:
            value = self.visit(statement, context)

        if value is None:
            return NoneValue().set_pos(node.pos_start, node.pos_end).set_context(context)
        return value
