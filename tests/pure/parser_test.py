import unittest

from dpl.lang.error import InvalidSyntaxError
from dpl.pure.lexical import Lexer
from dpl.pure.nodes import BinaryOpNode, CallNode, FnDefNode, StatementsNode
from dpl.pure.parser import Parser


def parse(text):
    return Parser(Lexer("<test>", text).tokenize()).parse()


class ParserTestCase(unittest.TestCase):

    def test_precedence(self):
        cases = {
            "1 + 2 * 3": "{(1 + (2 * 3))}",
            "(1 + 2) * 3": "{((1 + 2) * 3)}",
            "1 - 2 - 3": "{((1 - 2) - 3)}",
            "2 ^ 3 ^ 2": "{(2 ^ (3 ^ 2))}",
            "-2 ^ 2": "{(- (2 ^ 2))}",
            "2 ^ -1": "{(2 ^ (- 1))}",
            "10 % 3 / 2": "{((10 % 3) / 2)}",
            "1 + 2 < 4": "{((1 + 2) < 4)}",
            "not a = b": "{(not (a = b))}",
            "a and b or c xor d": "{(((a and b) or c) xor d)}",
            "not not a": "{(not (not a))}",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(parse(case)), case)

    def test_statements(self):
        cases = {
            "": "{}",
            "1": "{1}",
            "1; 2": "{1; 2}",
            "1; 2;": "{1; 2}",
            "x := 1 + 2": "{(set x: (1 + 2))}",
            "set x : 1 + 2": "{(set x: (1 + 2))}",
            "x := y := 3": "{(set x: (set y: 3))}",
            '"hi"; none; true': '{"hi"; none; true}',
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(parse(case)), case)

    def test_control_flow(self):
        cases = {
            "if a { 1 }": "{(a ? {1})}",
            "if a { 1 } else { 2; 3 }": "{(a ? {1} : {2; 3})}",
            "if a { } else { }": "{(a ? {} : {})}",
            "for i := 0 to 10 { i }": "{(for i: 0 to 10 do {i})}",
            "for i : 10 to 0 step -2 { i }": "{(for i: 10 to 0 step (- 2) do {i})}",
            "while x < 3 { x := x + 1 }": "{(while (x < 3) do {(set x: (x + 1))})}",
            "if a { 1 }; 2": "{(a ? {1}); 2}",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(parse(case)), case)

    def test_functions(self):
        cases = {
            "fn add(a, b) { a + b }": "{(fn add(a, b) {(a + b)})}",
            "fn (a) { a }": "{(fn (a) {a})}",
            "fn () { }": "{(fn () {})}",
            "add(1, 2)": "{(add(1, 2))}",
            "f()": "{(f())}",
            "(fn (x) { x })(1)": "{((fn (x) {x})(1))}",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(parse(case)), case)

        fn_def = parse("fn add(a, b) { a + b }").statements[0]
        self.assertIsInstance(fn_def, FnDefNode)
        self.assertEqual(["a", "b"], fn_def.param_names)
        self.assertEqual("add", fn_def.name.value)

        call = parse("add(1, 2)").statements[0]
        self.assertIsInstance(call, CallNode)
        self.assertEqual(2, len(call.args))

    def test_syntax_errors(self):
        should_raise = ["1 +", "(1", "1 2", "}", "if true 1", "if true { 1", "if true { 1 } else 2", "for i 0 to 1 { }",
                        "for i := 0 1 { }", "for 1 := 0 to 1 { }", "while true", "fn add(a b) { }", "fn add(1) { }",
                        "fn add { }", "f(1 2", "set 1 : 2", "set x 2", ";", "1;;", "x := ", ")", "f(1)(2)"]
        for case in should_raise:
            self.assertRaises(InvalidSyntaxError, parse, case)

    def test_error_messages(self):
        cases = {
            "(1": "Expected ')'",
            "if true 1": "Expected '{'",
            "if true { 1": "Expected '}'",
            "for i := 0 1 { }": "Expected 'to'",
            "fn { }": "Expected '(' or IDENTIFIER",
            "fn f { }": "Expected '('",
            "f(1 2)": "Expected ',' or ')'",
            "set x 2": "Expected ':'",
            "1 2": "Unexpected NUMBER: '2'",
            "1 +": "Unexpected end of input",
        }
        for case, expected in cases.items():
            with self.assertRaises(InvalidSyntaxError) as cm:
                parse(case)
            self.assertEqual(expected, cm.exception.msg, case)

    def test_error_span(self):
        with self.assertRaises(InvalidSyntaxError) as cm:
            parse("1 + 2 3")
        self.assertEqual(6, cm.exception.pos_start.offset)
        self.assertEqual(7, cm.exception.pos_end.offset)

    def test_spans(self):
        program = parse("x := 1;\n12 + 345")
        self.assertIsInstance(program, StatementsNode)
        self.assertEqual(0, program.pos_start.offset)
        self.assertEqual(16, program.pos_end.offset)

        binary = program.statements[1]
        self.assertIsInstance(binary, BinaryOpNode)
        self.assertEqual((1, 0), (binary.pos_start.line, binary.pos_start.column))
        self.assertEqual((1, 8), (binary.pos_end.line, binary.pos_end.column))

        call = parse("f(1, 22)").statements[0]
        self.assertEqual((0, 7), (call.pos_start.offset, call.pos_end.offset))


if __name__ == '__main__':
    unittest.main()
