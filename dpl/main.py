"""Runs .dpl files or starts the interactive shell. Called from the dpl executable script."""

import argparse
import logging
import sys
import time

from dpl.lang.error import ErrorHandler
from dpl.lang.session import Session
from dpl.lang.shell import Shell


def get_parser():
    parser = argparse.ArgumentParser(prog="dpl", description="DPL interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--time", action="store_true", help="print how long evaluation took")
    parser.add_argument("--tokens", action="store_true", help="print the token list instead of running")
    parser.add_argument("--ast", action="store_true", help="print the syntax tree instead of running")
    parser.add_argument("--no-color", action="store_true", help="disable colored output")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every pipeline stage")
    return parser


def run_file(args, error_handler):
    """Runs (or dumps) one file. Errors are raised into error_handler, which exits."""
    try:
        with open(args.file, "r", encoding="utf-8") as file:
            text = file.read()
    except OSError as error:
        error_handler.throw(f"'{args.file}' could not be opened: {error.strerror}", internal=False)
        return

    if args.tokens:
        print(" ".join(repr(token) for token in Session.tokenize(args.file, text)))
        return
    if args.ast:
        print(Session.parse(args.file, text))
        return

    sess = Session()
    time_before = time.perf_counter()
    result = sess.run(args.file, text)
    time_after = time.perf_counter()

    if not result.ok:
        error_handler.report(result.error)
    if args.time:
        print(f"\nEvaluation took {(time_after - time_before) * 1000:.3f}ms.")

    if not result.ok:
        sys.exit(1)


def main(argv=None):
    """Runs DPL interpreter. Called from dpl executable script."""
    args = get_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    with ErrorHandler(color=not args.no_color) as error_handler:
        if args.file is not None:
            run_file(args, error_handler)
        else:
            Shell(Session(), error_handler).cmdloop()


if __name__ == "__main__":
    main()
