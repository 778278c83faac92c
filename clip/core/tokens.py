"""Tokens produced by the lexer. See lexer.py for the lexical grammar."""

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    BOOL_LIT = auto()  # true/false
    FLOAT_LIT = auto()  # float literal
    INT_LIT = auto()  # integer literal
    STR_LIT = auto()  # quoted string literal

    IDENTIFIER = auto()  # alphanumeric identifier
    OPERATOR = auto()  # one of OPERATORS

    ASSIGN = auto()  # =
    LEFT_BRACE = auto()  # {
    LEFT_PAREN = auto()  # (
    LEFT_SQUARE_BRACKET = auto()  # [
    RIGHT_BRACE = auto()  # }
    RIGHT_PAREN = auto()  # )
    RIGHT_SQUARE_BRACKET = auto()  # ]
    SEMICOLON = auto()  # ;

    ELIF = auto()  # elif
    ELSE = auto()  # else
    IF = auto()  # if

    EOF = auto()

    def __str__(self):
        return self.name

    __repr__ = __str__


@dataclass
class Token:
    kind: TokenKind
    val: str
    line: int
    col: int
    newline_before: bool = False  # a newline separates this token from the previous one

    def __str__(self):
        return f"<{self.kind}: {repr(self.val)} at {self.line}:{self.col}>"

    __repr__ = __str__


KEYWORDS = {
    "elif": TokenKind.ELIF,
    "else": TokenKind.ELSE,
    "if": TokenKind.IF,
}

SYNTAX = {
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "[": TokenKind.LEFT_SQUARE_BRACKET,
    "]": TokenKind.RIGHT_SQUARE_BRACKET,
    ";": TokenKind.SEMICOLON,
}

# longest spellings first, so that "==" wins over "=" and ">=" over ">"
OPERATORS = ["&&", "||", "==", ">=", "<=", ">", "<", "+", "-", "*", "/", "%", "!"]

LITERALS = {TokenKind.BOOL_LIT, TokenKind.FLOAT_LIT, TokenKind.INT_LIT, TokenKind.STR_LIT}

# tokens that can begin an argument of an operator or a call; anything else ends the argument list
ARG_START = LITERALS | {
    TokenKind.IDENTIFIER,
    TokenKind.OPERATOR,
    TokenKind.LEFT_PAREN,
    TokenKind.LEFT_BRACE,
    TokenKind.IF,
}
