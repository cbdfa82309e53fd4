import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from dpl.main import get_parser, main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "program.dpl")

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, text):
        with open(self.path, "w", encoding="utf-8") as file:
            file.write(text)

    def run_main(self, *flags):
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            main(["--no-color", *flags, self.path])
        return stdout.getvalue()

    def test_parser(self):
        args = get_parser().parse_args([])
        self.assertIsNone(args.file)
        self.assertFalse(args.time or args.tokens or args.ast or args.no_color or args.verbose)

        args = get_parser().parse_args(["-v", "--ast", "x.dpl"])
        self.assertTrue(args.verbose and args.ast)
        self.assertEqual("x.dpl", args.file)

    def test_runs_file(self):
        self.write('fn fact(n) { if n <= 1 { 1 } else { n * fact(n - 1) } };\nprint("5! = " + fact(5))\n')
        self.assertEqual("5! = 120\n", self.run_main())

    def test_time(self):
        self.write("1 + 1")
        self.assertIn("Evaluation took", self.run_main("--time"))

    def test_time_after_error(self):
        self.write("1 / 0")
        stdout = io.StringIO()
        with self.assertRaises(SystemExit) as cm, redirect_stdout(stdout):
            main(["--no-color", "--time", self.path])

        self.assertEqual(1, cm.exception.code)
        output = stdout.getvalue()
        self.assertTrue(output.startswith("RuntimeError: Division by zero\n"))
        self.assertIn("\nEvaluation took ", output)
        self.assertLess(output.index("RuntimeError"), output.index("Evaluation took"))

    def test_tokens(self):
        self.write("set x : 1")
        self.assertEqual("KEYWORD(set) IDENTIFIER(x) ASSIGN(:) NUMBER(1) EOF\n", self.run_main("--tokens"))

    def test_ast(self):
        self.write("x := 1 + 2 * 3; f(x)")
        self.assertEqual("{(set x: (1 + (2 * 3))); (f(x))}\n", self.run_main("--ast"))

    def test_ast_does_not_run(self):
        self.write('print("side effect")')
        self.assertNotIn("side effect\n", self.run_main("--ast"))

    def test_error_exits(self):
        self.write('print("before"); 1 / 0; print("after")')
        stdout = io.StringIO()
        with self.assertRaises(SystemExit) as cm, redirect_stdout(stdout):
            main(["--no-color", self.path])

        self.assertEqual(1, cm.exception.code)
        output = stdout.getvalue()
        self.assertTrue(output.startswith("before\nRuntimeError: Division by zero\n"))
        self.assertNotIn("after", output)

    def test_syntax_error_in_dump(self):
        self.write("(1")
        stdout = io.StringIO()
        with self.assertRaises(SystemExit), redirect_stdout(stdout):
            main(["--no-color", "--ast", self.path])
        self.assertIn("SyntaxError: Expected ')'", stdout.getvalue())

    def test_missing_file(self):
        stdout = io.StringIO()
        with self.assertRaises(SystemExit) as cm, redirect_stdout(stdout):
            main(["--no-color", os.path.join(self.tmpdir.name, "missing.dpl")])

        self.assertEqual(1, cm.exception.code)
        self.assertTrue(stdout.getvalue().startswith("error: '"))
        self.assertIn("could not be opened", stdout.getvalue())


if __name__ == '__main__':
    unittest.main()
