"""Errors raised by the clip pipeline. Every stage (lexer, parser, interpreter) raises a subclass of ClipError carrying
the position of the offending source, which ErrorHandler (see lang/error.py) turns into a report.

Note that NameError and TypeError share their names with the Python builtins. Import this module rather than the
classes (`from clip.core import errors`, then `errors.TypeError`) so the builtins are never shadowed.
"""


class ClipError(Exception):
    """Base class for every error the clip pipeline raises. line and col are 1-based, or -1 when unknown."""
    kind = "error"

    def __init__(self, msg, line=-1, col=-1):
        super().__init__(msg if line == -1 or col == -1 else f"{line}:{col}: {msg}")
        self.msg = msg
        self.line = line
        self.col = col

    @property
    def located(self):
        """Whether or not this error knows where in the source it happened."""
        return self.line != -1 and self.col != -1


class LexError(ClipError):
    """Unrecognized character or malformed literal."""
    kind = "lex error"


class UnterminatedString(LexError):
    """String literal still open at the end of the source. The shell reads another line when it sees one."""

    def __init__(self, line=-1, col=-1):
        super().__init__("unterminated string literal", line, col)


class ParseError(ClipError):
    """Structural grammar violation."""
    kind = "parse error"


class NameError(ClipError):
    """Lookup of an identifier that isn't bound anywhere in the environment chain."""
    kind = "name error"


class TypeError(ClipError):
    """Operand/argument type violation, type mixing, non-callable callee or non-boolean condition."""
    kind = "type error"


class ArityError(ClipError):
    """Wrong number of operands or arguments."""
    kind = "arity error"


class DivisionByZero(ClipError):
    """Numeric division or remainder by zero."""
    kind = "division by zero"
