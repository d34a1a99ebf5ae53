"""Command-line entry point: interactive shell or one-shot evaluation."""

from __future__ import annotations

import argparse
import logging
import sys

from .session import Session, Shell


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="numcalc", description=__doc__)
    parser.add_argument(
        "-e",
        "--expression",
        action="append",
        default=[],
        help="evaluate an expression and print the result (repeatable, shares one environment)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="print the parsed syntax tree instead of evaluating",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level for session diagnostics",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    session = Session(debug=args.debug)
    if args.expression:
        status = 0
        for line in args.expression:
            output = session.respond(line)
            print(output)
            if output.startswith(("error:", "syntax error:")):
                status = 1
        return status

    Shell(session).cmdloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
