"""Runs .pas files or the command-line shell through a pcalc Session, inside the error handling context manager.
Called from the pcalc console script and from `python -m pcalc`.
"""

import argparse

from pcalc.lang.error import ErrorHandler
from pcalc.lang.session import Session
from pcalc.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="pcalc", description="Pascal calculator: BEGIN x := 2 * (3 + 4) END.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--expr", action="store_true",
                        help="read bare arithmetic expressions instead of BEGIN ... END. programs")
    parser.add_argument("--fresh-scope", action="store_true",
                        help="start every line with an empty scope instead of keeping variables between lines")
    parser.add_argument("--trace", action="store_true",
                        help="print the parsed tree and value of every line")
    return parser


def main(argv=None):
    """Runs pcalc interpreter."""
    args = build_parser().parse_args(argv)

    with ErrorHandler(verbose=args.trace) as error_handler:
        options = {"expression_mode": args.expr, "persistent": not args.fresh_scope}

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, **options)
            sess.run()

            while sess.results:
                print(sess.pop())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, **options)).cmdloop()
