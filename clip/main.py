"""Uses the clip pipeline to interpret .clip files or run in command-line mode. Also uses the error handling context
manager. Called from the clip executable script.
"""

import argparse
import sys

from clip.core import errors
from clip.lang.error import ErrorHandler
from clip.lang.session import Session
from clip.lang.shell import DumpShell, Shell, dump_ast, dump_tokens

# clip has no loops, so recursion has to go deep: one clip call takes about seven Python frames
RECURSION_LIMIT = 100_000


def build_arg_parser():
    parser = argparse.ArgumentParser(prog="clip", description="Evaluate clip source code")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")

    dump = parser.add_mutually_exclusive_group()
    dump.add_argument("-t", "--token", action="store_true", help="print the tokens instead of evaluating")
    dump.add_argument("-p", "--parse", action="store_true", help="print the syntax tree instead of evaluating")

    parser.add_argument("-q", "--quiet", action="store_true", help="don't print the value of the last expression")
    return parser


def main(argv=None):
    """Runs the clip interpreter. Called from the clip executable script."""
    args = build_arg_parser().parse_args(argv)
    dump = dump_tokens if args.token else dump_ast if args.parse else None

    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    if args.file is None:
        with ErrorHandler(fatal=False) as error_handler:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True)
            shell = Shell(sess) if dump is None else DumpShell(sess, dump)
            shell.cmdloop()
        return

    with ErrorHandler() as error_handler:
        if dump is not None:
            error_handler.register_file(args.file)
            try:
                with open(args.file, "r") as file:
                    source = file.read()
            except OSError:
                raise errors.ClipError(f"'{args.file}' could not be opened")

            error_handler.register_source(args.file, source)
            dump(source)
            return

        sess = Session(error_handler, args.file, cmd_line=False)
        sess.run()

        if not args.quiet and sess.last is not None:
            print(sess.last)


if __name__ == "__main__":
    main()
