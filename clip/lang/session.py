"""Session control for the clip language. Feeds source text through the lexer, parser and interpreter, either in
command-line mode or file interpretation mode, keeping one top-level environment for the whole session.
"""

from clip.core import errors
from clip.core.environment import Environment
from clip.core.interpreter import Interpreter
from clip.core.lexer import tokenize
from clip.core.parser import Parser
from clip.core.tokens import TokenKind

OPENERS = {TokenKind.LEFT_BRACE, TokenKind.LEFT_PAREN, TokenKind.LEFT_SQUARE_BRACKET}
CLOSERS = {TokenKind.RIGHT_BRACE, TokenKind.RIGHT_PAREN, TokenKind.RIGHT_SQUARE_BRACKET}


class Session:
    """Governs a clip session, with control over the top-level environment."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = Environment()     # top-level environment, lives as long as the session
        self.interpreter = Interpreter()
        self.to_exec = []            # list of (first line num, source, expressions) to evaluate
        self.results = []            # command-line mode only: values not yet reported, oldest first
        self.last = None             # value of the most recently evaluated expression
        self.line_num = 0            # number of source lines added so far

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise errors.ClipError(f"'{path}' could not be opened")
            self.add(source)

        elif not cmd_line:
            raise errors.ClipError("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, prev=""):
        """Preprocesses a line from the command-line. prev is the unfinished input so far. Returns the updated input
        and whether or not a line continuation is necessary, i.e. whether a brace, bracket or paren or a string
        literal is still open. Other lex errors are left for add to report.
        """
        line = prev + line + "\n"

        depth = 0
        try:
            for tok in tokenize(line):
                if tok.kind in OPENERS:
                    depth += 1
                elif tok.kind in CLOSERS:
                    depth -= 1
        except errors.UnterminatedString:
            return line, True
        except errors.LexError:
            return line, False

        return line, depth > 0

    def add(self, source):
        """Parses source and queues its top-level expressions. Evaluation is delayed until run is called. Raises
        LexError/ParseError.
        """
        first_line = self.line_num + 1
        self.line_num += max(source.count("\n"), 1)

        self.error_handler.register_source(self.path, source, first_line)  # in case error is raised
        exprs = Parser().parse(tokenize(source))
        self.error_handler.remove_source(self.path)  # error was not raised

        if exprs:
            self.to_exec.append((first_line, source, exprs))
        return exprs

    def run(self):
        """Evaluates this session's queued expressions in order, keeping the value of the last one. In command-line
        mode every value is also appended to self.results to be reported. Raises the first error encountered;
        expressions after it in the same source are dropped.
        """
        while self.to_exec:
            first_line, source, exprs = self.to_exec.pop(0)
            self.error_handler.register_source(self.path, source, first_line)

            for expr in exprs:
                self.last = self.interpreter.evaluate(expr, self.env)
                if self.cmd_line:
                    self.results.append(self.last)

            self.error_handler.remove_source(self.path)

    def pop(self):
        """Pops the oldest unreported result."""
        return self.results.pop(0)

