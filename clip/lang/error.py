"""Error reporting for the clip language. Only ClipErrors (see core/errors.py) should be encountered during running:
if another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored

from clip.core.errors import ClipError


class ErrorHandler:
    """Context manager that suppresses errors raised while running clip code and reports them instead."""
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_source(self, path, source, first_line=1):
        """Registers the source currently being run for path. first_line is the line number of source's first line in
        path, so that errors in the middle of a REPL session point at the right line. Should be called prior to
        Session add/run.
        """
        self.traceback[path] = (source, first_line)

    def remove_source(self, path):
        """Removes source from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(line, col):
        """Returns line with the character at col highlighted and a caret underneath it."""
        idx = min(max(col - 1, 0), len(line))

        diagnosis = "  " + line[:idx]
        diagnosis += colored(line[idx:idx + 1], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[idx + 1:] + "\n"

        diagnosis += "  " + " " * idx + colored("^", ErrorHandler.ERROR, attrs=["bold"])
        return diagnosis

    def throw(self, error, internal=False):
        """Reports error using self.traceback. error must be a ClipError; internal marks errors that escaped from
        Python rather than from the clip pipeline.
        """
        path, (source, first_line) = next(iter(self.traceback.items()), ("<unknown>", (None, None)))

        location = path
        line = None
        if error.located and source is not None:
            location += f":{first_line + error.line - 1}:{error.col}"
            lines = source.splitlines()
            if 0 < error.line <= len(lines):
                line = lines[error.line - 1]

        error_msg = colored(f"{location}: ", attrs=["bold"])
        if internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored(f"{error.kind}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if line is not None and not internal:
            print(ErrorHandler.diagnose(line, error.col))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.traceback[path] = (None, None)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(ClipError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(ClipError("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, ClipError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(ClipError(f"unknown error: '{exc_type.__name__}: {exc_val}'"), internal=True)
            do_exit = True

        return not do_exit
