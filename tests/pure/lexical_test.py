import unittest

from dpl.lang.error import IllegalCharError
from dpl.pure.lexical import Lexer, unescape


def types(text):
    return [token.type for token in Lexer("<test>", text).tokenize()]


class UnescapeTestCase(unittest.TestCase):

    def test_unescape(self):
        cases = {
            r"a\nb": "a\nb",
            r"\t\r\b\f": "\t\r\b\f",
            r"\u0041\u00e9": "Aé",
            r"\q\"\\": "q\"\\",
            r"\n\n": "\n\n",
            "plain": "plain",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, unescape(case), case)


class LexerTestCase(unittest.TestCase):

    def test_tokenize(self):
        cases = {
            "set x : 10": ["KEYWORD", "IDENTIFIER", "ASSIGN", "NUMBER", "EOF"],
            "x := 1.5": ["IDENTIFIER", "ASSIGN", "NUMBER", "EOF"],
            "fn add(a, b) { a + b }": ["KEYWORD", "IDENTIFIER", "LPAREN", "IDENTIFIER", "COMMA", "IDENTIFIER", "RPAREN",
                                       "LBRACE", "IDENTIFIER", "PLUS", "IDENTIFIER", "RBRACE", "EOF"],
            "a <= b != c >= d < e > f = g": ["IDENTIFIER", "LE", "IDENTIFIER", "NEQ", "IDENTIFIER", "GE", "IDENTIFIER",
                                             "LT", "IDENTIFIER", "GT", "IDENTIFIER", "EQ", "IDENTIFIER", "EOF"],
            "not true and false or none xor x": ["NOT", "BOOL", "AND", "BOOL", "OR", "NONE", "XOR", "IDENTIFIER",
                                                  "EOF"],
            "1 - 2 * 3 / 4 % 5 ^ 6": ["NUMBER", "MINUS", "NUMBER", "MUL", "NUMBER", "DIV", "NUMBER", "MOD", "NUMBER",
                                      "POW", "NUMBER", "EOF"],
            "a; b ->": ["IDENTIFIER", "SEMICOLON", "IDENTIFIER", "ARROW", "EOF"],
            "": ["EOF"],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, types(case), case)

    def test_word_boundaries(self):
        cases = ["settle", "tofu", "iffy", "notable", "nonexistent", "truthy", "order", "android", "fnord"]
        for case in cases:
            self.assertEqual(["IDENTIFIER", "EOF"], types(case), case)

    def test_comments(self):
        cases = ["1 // comment\n2", "1 /* block\ncomment */ 2", "/**/1/* a */ /* b */2 // trailing"]
        for case in cases:
            self.assertEqual(["NUMBER", "NUMBER", "EOF"], types(case), case)

    def test_values(self):
        tokens = Lexer("<test>", 'set greeting : "hi\\tthere\\u0021"').tokenize()
        self.assertEqual(["set", "greeting", ":", "hi\tthere!", ""], [token.value for token in tokens])

    def test_positions(self):
        tokens = Lexer("<test>", "a\n  bc").tokenize()
        a, bc, eof = tokens

        self.assertEqual((0, 0, 0), (a.pos_start.offset, a.pos_start.line, a.pos_start.column))
        self.assertEqual((1, 0, 1), (a.pos_end.offset, a.pos_end.line, a.pos_end.column))
        self.assertEqual((4, 1, 2), (bc.pos_start.offset, bc.pos_start.line, bc.pos_start.column))
        self.assertEqual((6, 1, 4), (bc.pos_end.offset, bc.pos_end.line, bc.pos_end.column))

        self.assertEqual(6, eof.pos_start.offset)
        self.assertEqual(eof.pos_start, eof.pos_end)
        self.assertEqual("<test>", bc.pos_start.file_id)

    def test_illegal_char(self):
        should_raise = ["1 $ 2", "@", "x := 'a'", '"unterminated', "a # b"]
        for case in should_raise:
            self.assertRaises(IllegalCharError, Lexer("<test>", case).tokenize)

        with self.assertRaises(IllegalCharError) as cm:
            Lexer("<test>", "1 $ 2").tokenize()

        self.assertEqual("'$'", cm.exception.msg)
        self.assertEqual(2, cm.exception.pos_start.column)
        self.assertEqual(3, cm.exception.pos_end.column)


if __name__ == '__main__':
    unittest.main()
