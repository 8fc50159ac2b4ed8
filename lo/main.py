"""Runs a .lo file, or starts the interactive shell when no file is given. Also uses the error handling context
manager. Called from the `lo` console script.

Exit status in file mode: 0 on success, 65 if the source failed to scan or parse, 66 if it could not be read and 70
if it failed at runtime.
"""

import argparse
import sys

from lo.lang.error import ErrorHandler
from lo.lang.session import Session
from lo.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="lo", description="lo language interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-v", "--verbose", action="store_true", help="print the token stream and syntax tree")
    parser.add_argument("--no-color", action="store_true", help="disable colored diagnostics")
    return parser


def main(argv=None):
    """Runs lo interpreter. Called from lo executable script."""
    args = build_parser().parse_args(argv)

    with ErrorHandler(verbose=args.verbose, color=not args.no_color) as error_handler:
        sess = Session(error_handler)

        if args.file is not None:
            outcome = sess.run_file(args.file)
            sys.exit(outcome.exit_code)

        else:
            Shell(sess).cmdloop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
