"""Recursive descent parser for the clip language. There is no operator precedence: operators are prefix forms that
gather their operands exactly like a call gathers its arguments, strictly left to right.

Argument gathering is greedy and driven by ARG_START (see tokens.py): arguments are consumed while the next token can
begin one and is on the same line. Outside parentheses a newline ends the argument list, and with it the statement.
Arguments themselves are never extended into calls, so `f a b` applies f to a and b, while an operator argument takes
the rest of the list with it (`fib - n 1` applies fib to `- n 1`). Use parentheses to group.
"""

from contextlib import contextmanager

from clip.core import errors, nodes
from clip.core.lexer import tokenize
from clip.core.tokens import ARG_START, TokenKind
from clip.core.values import INT_MAX


class Parser:
    def __init__(self):
        self._tokens = []
        self._pos = 0
        self._in_cond = False
        self._in_group = False

    # Program = { ";" } { Expr { ";" } }
    def parse(self, tokens):
        """Returns the list of top-level expressions in tokens. tokens must end with an EOF token."""
        self._tokens = list(tokens)
        self._reset()

        exprs = []
        self._skip_semicolons()
        while not self._is_done():
            exprs.append(self._parse_expr())
            self._skip_semicolons()
        return exprs

    def _reset(self):
        self._pos = 0
        self._in_cond = False
        self._in_group = False

    @contextmanager
    def _context(self, **state):
        """Overrides parser state for the duration of the block:

        in_cond  -- in an if condition, where "{" belongs to the then-block and so cannot begin an argument
        in_group -- in parentheses, where newlines don't end argument lists
        """
        prev = {key: getattr(self, f"_{key}") for key in state}
        for key, val in state.items():
            setattr(self, f"_{key}", val)
        try:
            yield
        finally:
            for key, val in prev.items():
                setattr(self, f"_{key}", val)

    # Expr = AssignmentExpr |
    #   IfExpr |
    #   OperatorExpr |
    #   FnLitExpr |
    #   Primary [ Arg { Arg } ]
    #
    # Arg = IfExpr | OperatorExpr | FnLitExpr | Primary
    def _parse_expr(self, call=True) -> nodes.ExprNode:
        tok = self._peek()
        if tok.kind == TokenKind.ASSIGN and call:
            return self._parse_assignment_expr()
        elif tok.kind == TokenKind.IF:
            return self._parse_if_expr()
        elif tok.kind == TokenKind.OPERATOR:
            return self._parse_operator_expr()
        elif tok.kind == TokenKind.LEFT_BRACE:
            return self._parse_fn_lit_expr()

        primary = self._parse_primary()
        if call and self._at_arg_start():
            return nodes.CallExpr(primary.line, primary.col, primary, self._parse_args())
        return primary

    # Primary = LitExpr | AccessExpr | "(" ")" | "(" Expr ")"
    #
    # LitExpr = BoolLitExpr | FloatLitExpr | IntLitExpr | StrLitExpr
    # AccessExpr = identifier
    def _parse_primary(self):
        tok = self._next()
        if tok.kind == TokenKind.BOOL_LIT:
            return nodes.BoolLitExpr(tok.line, tok.col, tok.val == "true")
        elif tok.kind == TokenKind.FLOAT_LIT:
            return nodes.FloatLitExpr(tok.line, tok.col, float(tok.val))
        elif tok.kind == TokenKind.INT_LIT:
            val = int(tok.val)
            if val > INT_MAX:
                raise errors.ParseError(f"integer literal {tok.val} out of range", tok.line, tok.col)
            return nodes.IntLitExpr(tok.line, tok.col, val)
        elif tok.kind == TokenKind.STR_LIT:
            return nodes.StrLitExpr(tok.line, tok.col, tok.val)
        elif tok.kind == TokenKind.IDENTIFIER:
            return nodes.AccessExpr(tok.line, tok.col, tok.val)
        elif tok.kind == TokenKind.LEFT_PAREN:
            if self._accept(TokenKind.RIGHT_PAREN):
                return nodes.UnitExpr(tok.line, tok.col)
            with self._context(in_cond=False, in_group=True):
                expr = self._parse_expr()
            self._expect(TokenKind.RIGHT_PAREN)
            return expr
        else:
            raise errors.ParseError(f"unexpected token {tok.kind} at start of expression", tok.line, tok.col)

    def _at_arg_start(self):
        tok = self._peek()
        if tok.newline_before and not self._in_group:
            return False
        if tok.kind == TokenKind.LEFT_BRACE and self._in_cond:
            return False
        return tok.kind in ARG_START

    def _parse_args(self):
        args = []
        while self._at_arg_start():
            args.append(self._parse_expr(call=False))
        return args

    # AssignmentExpr = "=" identifier Expr
    def _parse_assignment_expr(self):
        tok = self._expect(TokenKind.ASSIGN)
        name = self._expect(TokenKind.IDENTIFIER).val
        val = self._parse_expr()
        return nodes.AssignmentExpr(tok.line, tok.col, name, val)

    # OperatorExpr = operator { Arg }
    def _parse_operator_expr(self):
        tok = self._expect(TokenKind.OPERATOR)
        return nodes.OperatorExpr(tok.line, tok.col, tok.val, self._parse_args())

    # FnLitExpr = "{" [ "[" { identifier } "]" ] Body "}"
    def _parse_fn_lit_expr(self):
        tok = self._expect(TokenKind.LEFT_BRACE)

        param_names = []
        if self._accept(TokenKind.LEFT_SQUARE_BRACKET):
            while True:
                param = self._expect(TokenKind.IDENTIFIER, TokenKind.RIGHT_SQUARE_BRACKET)
                if param.kind == TokenKind.RIGHT_SQUARE_BRACKET:
                    break
                if param.val in param_names:
                    raise errors.ParseError(f"duplicate parameter name {param.val}", param.line, param.col)
                param_names.append(param.val)

        with self._context(in_cond=False, in_group=False):
            body = self._parse_body()
        return nodes.FnLitExpr(tok.line, tok.col, param_names, body)

    # Block = "{" Body "}"
    def _parse_block(self):
        self._expect(TokenKind.LEFT_BRACE)
        with self._context(in_cond=False, in_group=False):
            return self._parse_body()

    # Body = { ";" } { Expr { ";" } }
    def _parse_body(self):
        # opening brace is already scanned
        body = []
        self._skip_semicolons()
        while not self._accept(TokenKind.RIGHT_BRACE):
            if self._is_done():
                tok = self._peek()
                raise errors.ParseError(
                    f"unexpected token {tok.kind}; expected one of {TokenKind.RIGHT_BRACE}", tok.line, tok.col
                )
            body.append(self._parse_expr())
            self._skip_semicolons()
        return body

    # IfExpr     = ("if" | "elif") Expr Block [ ElseBranch ]
    # ElseBranch = "else" (IfExpr | Block) | ("elif" ...)
    def _parse_if_expr(self):
        tok = self._expect(TokenKind.IF, TokenKind.ELIF)
        with self._context(in_cond=True):
            cond = self._parse_expr()
        if_branch = self._parse_block()
        return nodes.IfExpr(tok.line, tok.col, cond, if_branch, self._parse_else_branch())

    def _parse_else_branch(self):
        # "else if" and "elif" are both lowered into a nested if:
        # if x { ... } else { if y { ... } }
        if self._lookahead(TokenKind.ELIF):
            return [self._parse_if_expr()]
        elif self._accept(TokenKind.ELSE):
            if self._lookahead(TokenKind.IF):
                return [self._parse_if_expr()]
            return self._parse_block()
        return None

    def _skip_semicolons(self):
        while self._accept(TokenKind.SEMICOLON):
            pass

    def _accept(self, *args):
        if self._peek().kind in args:
            self._ignore()
            return True
        return False

    def _lookahead(self, *args):
        return self._peek().kind in args

    def _expect(self, *args):
        expected = ", ".join(map(str, args))
        tok = self._next()
        if tok.kind not in args:
            raise errors.ParseError(f"unexpected token {tok.kind}; expected one of {expected}", tok.line, tok.col)
        return tok

    def _peek(self):
        return self._tokens[self._pos]

    def _next(self):
        tok = self._tokens[self._pos]
        if tok.kind != TokenKind.EOF:  # EOF is sticky
            self._pos += 1
        return tok

    _ignore = _next  # alias for clarity

    def _is_done(self):
        return self._peek().kind == TokenKind.EOF


def parse_program(src):
    """Lexes and parses src into its list of top-level expressions. Raises LexError or ParseError."""
    return Parser().parse(tokenize(src))
