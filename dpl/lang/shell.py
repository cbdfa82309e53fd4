"""Handles interactive/command-line mode for the DPL interpreter. Uses cmd as backend."""

import cmd

from termcolor import colored


class Shell(cmd.Cmd):
    """DPL interpreter shell. Every line is run in the same session, so bindings persist between lines."""
    intro = "DPL interpreter :: Python backend\nType 'help' for more information, 'exit' to quit."
    prompt = "dpl> "

    def __init__(self, sess, error_handler, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.error_handler = error_handler
        self.error_handler.fatal = False

    def parseline(self, line):
        """Only a bare command word is a shell command. Anything else, such as `exit := 3` or `help(1)`, is DPL code."""
        command, arg, parsed = super().parseline(line)
        if arg:
            return None, None, line.strip()
        return command, arg, parsed

    def default(self, line):
        """Runs arbitrary DPL code."""
        with self.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            result = self.sess.run(self.sess.SH_FILE, line)

            if not result.ok:
                self.error_handler.throw(result.error)
            elif self.error_handler.color:
                self.stdout.write(colored(result.value.render(), "green") + "\n")
            else:
                self.stdout.write(result.value.render() + "\n")

    def do_help(self, arg):
        """Prints a short introduction to the language instead of per-command docs."""
        self.stdout.write("Welcome to the DPL interpreter!\n\n"
                          "Every line is an expression and its value is printed back. Try 'set x : 2 ^ 10' and\n"
                          "then 'x + 1', or define a function with 'fn add(a, b) { a + b }' and call it with\n"
                          "'add(2, 3)'. Separate several expressions on one line with ';'.\n")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write("\n")
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
