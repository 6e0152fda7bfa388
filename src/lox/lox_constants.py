"""
Token vocabulary for the Lox expression front end.

Defines the closed set of token kinds produced by the lexer, together with the
lookup tables the lexer and parser dispatch on:

    single_char_tokens:  punctuation that is always exactly one character
    two_char_tokens:     `!`, `=`, `<`, `>` and their `=`-suffixed forms
    reserved_words:      exact-text keyword table (no case folding)
    statement_starters:  keywords the parser may resynchronise on after an error

Exports:
    - TokenKind
    - single_char_tokens
    - two_char_tokens
    - reserved_words
    - statement_starters
"""

from enum import Enum


class TokenKind(Enum):
    """Every kind of token the lexer can emit."""

    # Single-character tokens.
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    COMMA = ","
    DOT = "."
    MINUS = "-"
    PLUS = "+"
    SEMICOLON = ";"
    SLASH = "/"
    STAR = "*"

    # One or two character tokens.
    BANG = "!"
    BANG_EQUAL = "!="
    EQUAL = "="
    EQUAL_EQUAL = "=="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="

    # Literals.
    IDENTIFIER = "identifier"
    STRING = "string"
    NUMBER = "number"

    # Keywords.
    AND = "and"
    CLASS = "class"
    ELSE = "else"
    FALSE = "false"
    FUN = "fun"
    FOR = "for"
    IF = "if"
    NIL = "nil"
    OR = "or"
    PRINT = "print"
    RETURN = "return"
    SUPER = "super"
    THIS = "this"
    TRUE = "true"
    VAR = "var"
    WHILE = "while"

    EOF = "eof"

    def __repr__(self) -> str:
        return f"TokenKind.{self.name}"


single_char_tokens: dict[str, TokenKind] = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.STAR,
}

# first char -> (kind when followed by "=", kind otherwise)
two_char_tokens: dict[str, tuple[TokenKind, TokenKind]] = {
    "!": (TokenKind.BANG_EQUAL, TokenKind.BANG),
    "=": (TokenKind.EQUAL_EQUAL, TokenKind.EQUAL),
    "<": (TokenKind.LESS_EQUAL, TokenKind.LESS),
    ">": (TokenKind.GREATER_EQUAL, TokenKind.GREATER),
}

reserved_words: dict[str, TokenKind] = {
    kind.value: kind
    for kind in (
        TokenKind.AND,
        TokenKind.CLASS,
        TokenKind.ELSE,
        TokenKind.FALSE,
        TokenKind.FUN,
        TokenKind.FOR,
        TokenKind.IF,
        TokenKind.NIL,
        TokenKind.OR,
        TokenKind.PRINT,
        TokenKind.RETURN,
        TokenKind.SUPER,
        TokenKind.THIS,
        TokenKind.TRUE,
        TokenKind.VAR,
        TokenKind.WHILE,
    )
}

statement_starters: frozenset[TokenKind] = frozenset(
    {
        TokenKind.CLASS,
        TokenKind.FUN,
        TokenKind.VAR,
        TokenKind.FOR,
        TokenKind.IF,
        TokenKind.WHILE,
        TokenKind.PRINT,
        TokenKind.RETURN,
    }
)

__all__ = [
    "TokenKind",
    "reserved_words",
    "single_char_tokens",
    "statement_starters",
    "two_char_tokens",
]
