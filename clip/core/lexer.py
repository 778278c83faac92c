"""Lexical analysis for the clip language. Converts source text into a lazy stream of Tokens.

The lexical grammar can be loosely defined as follows:

```
<int_lit>    ::= <digit>+
<float_lit>  ::= <digit>+ "." <digit>*            ; the decimal point is what makes a float
<str_lit>    ::= '"' <char>* '"'                  ; passed through verbatim, \" does not close the string
<bool_lit>   ::= "true" | "false"
<identifier> ::= [A-Za-z_] [A-Za-z0-9_]*          ; except the keywords if, else, elif
<operator>   ::= "&&" | "||" | "==" | ">=" | "<=" | ">" | "<" | "+" | "-" | "*" | "/" | "%" | "!"
<syntax>     ::= "=" | "{" | "}" | "[" | "]" | "(" | ")" | ";"

<comment>    ::= "#" <char>* <newline>            ; discarded
```

Whitespace separates tokens. Newlines are not tokens themselves: each Token records whether one came before it
(newline_before), which is all the parser needs to end a statement at the end of a line.
"""

from clip.core import errors
from clip.core.tokens import KEYWORDS, OPERATORS, SYNTAX, Token, TokenKind


class Lexer:
    """Single forward pass over a source string. lex is a generator, so tokens are only produced as they're consumed."""

    def __init__(self):
        self._src = ""
        self._line = 1
        self._col = 1
        self._pos = 0

    def lex(self, src):
        """Yields the Tokens of src, always ending with an EOF token. Raises LexError on the first character no token
        rule matches.
        """
        self._src = src
        self._reset()

        while True:
            newline = self._skip_ignored()
            if self._is_done():
                break
            tok = self._lex_any()
            tok.newline_before = newline
            yield tok

        yield Token(TokenKind.EOF, "", self._line, self._col, newline)

    def _reset(self):
        self._line = 1
        self._col = 1
        self._pos = 0

    def _skip_ignored(self):
        """Skips whitespace and comments. Returns whether or not a newline was among them."""
        newline = False
        while not self._is_done():
            c = self._peek()
            if c == "\n":
                newline = True
                self._ignore()
            elif c.isspace():
                self._ignore()
            elif c == "#":
                while not self._is_done() and self._peek() != "\n":
                    self._ignore()
            else:
                break
        return newline

    def _lex_any(self):
        line, col = self._line, self._col
        c = self._peek()

        if is_word_start(c):
            return self._lex_identifier()
        elif is_digit(c):
            return self._lex_num_lit()
        elif c == '"':
            return self._lex_str_lit()
        elif c in SYNTAX:
            self._ignore()
            return Token(SYNTAX[c], c, line, col)

        for op in OPERATORS:
            if self._src.startswith(op, self._pos):
                for __ in op:
                    self._ignore()
                return Token(TokenKind.OPERATOR, op, line, col)

        if c == "=":
            self._ignore()
            return Token(TokenKind.ASSIGN, c, line, col)

        raise errors.LexError(f"unexpected character '{c}'", line, col)

    def _lex_identifier(self):
        line, col = self._line, self._col
        word = self._accept_run(is_word_char)
        if word in KEYWORDS:
            return Token(KEYWORDS[word], word, line, col)
        elif word == "true" or word == "false":
            return Token(TokenKind.BOOL_LIT, word, line, col)
        return Token(TokenKind.IDENTIFIER, word, line, col)

    def _lex_num_lit(self):
        line, col = self._line, self._col
        whole = self._accept_run(is_digit)
        if self._is_done() or self._peek() != ".":
            return Token(TokenKind.INT_LIT, whole, line, col)

        self._ignore()
        frac = self._accept_run(is_digit)
        if not self._is_done() and self._peek() == ".":
            raise errors.LexError("unexpected character '.' in float literal", self._line, self._col)
        return Token(TokenKind.FLOAT_LIT, f"{whole}.{frac}", line, col)

    def _lex_str_lit(self):
        line, col = self._line, self._col
        self._ignore()  # ignore opening quote
        chars = []
        in_escape = False

        while not self._is_done():
            c = self._next()
            if in_escape:
                in_escape = False
            elif c == "\\":
                in_escape = True
            elif c == '"':
                return Token(TokenKind.STR_LIT, "".join(chars), line, col)
            chars.append(c)

        raise errors.UnterminatedString(line, col)

    def _accept_run(self, pred):
        chars = []
        while not self._is_done() and pred(self._peek()):
            chars.append(self._next())
        return "".join(chars)

    def _peek(self):
        return self._src[self._pos]

    def _next(self):
        c = self._src[self._pos]
        self._pos += 1
        if c == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return c

    _ignore = _next  # alias for clarity

    def _is_done(self):
        return self._pos >= len(self._src)


def is_word_start(c):
    return c.isascii() and (c.isalpha() or c == "_")


def is_digit(c):
    return c.isascii() and c.isdigit()


def is_word_char(c):
    return c.isascii() and (c.isalnum() or c == "_")


def tokenize(src):
    """Lazily tokenizes src."""
    return Lexer().lex(src)
