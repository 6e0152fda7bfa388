"""
Lexical analyzer for the Lox expression language.

This module converts raw source text into a flat, `EOF`-terminated token list:

Classes:
    CharacterStream: Code-point cursor over the source with line tracking.
    Token: A classified, located slice of source text.
    Diagnostic: A lexical error collected while scanning.
    Lexer: Scans a whole source buffer into tokens in a single pass.

Features:
    - Skips spaces, tabs, carriage returns, newlines and `//` line comments
    - Maximal munch for `!=`, `==`, `<=`, `>=`
    - Recognizes:
        * Identifiers and reserved words (exact match only)
        * Numbers (decimal digits with an optional fractional part)
        * Strings (double quoted, may span lines, no escapes)
        * Punctuation and operators

Errors:
    The lexer never raises on bad input. Unexpected characters and
    unterminated strings are recorded as `Diagnostic` entries, the offending
    text is dropped from the token list and scanning carries on to the end.
    Callers must check `Lexer.had_errors`.

Example:
    >>> lexer = Lexer("1 + 2")
    >>> [tok.kind.name for tok in lexer.scan_tokens()]
    ['NUMBER', 'PLUS', 'NUMBER', 'EOF']

Exports:
    - CharacterStream
    - Diagnostic
    - Lexer
    - Token
"""

import logging
from dataclasses import dataclass
from typing import Any

from lox.lox_constants import (
    TokenKind,
    reserved_words,
    single_char_tokens,
    two_char_tokens,
)

logger = logging.getLogger(__name__)


class CharacterStream:
    """
    Reads a source string one code point at a time, tracking the current line.

    Attributes:
        source (str): The input source string.
        position (int): Index of the next character to read.
        line (int): Current line number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1):
        self.source = source
        self.position = position
        self.line = line

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            Exception: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise Exception(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character `offset` places ahead without advancing.

        Returns:
            str: The character, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """A single lexical token.

    Tokens are immutable once built.

    Attributes:
        kind (TokenKind): What the token is.
        lexeme (str): The exact source text the token was scanned from.
        line (int): The 1-based line on which the token starts.
        literal (str | float | None): Payload of `STRING` and `NUMBER` tokens.
    """

    __slots__ = ("kind", "lexeme", "line", "literal")

    def __init__(
        self,
        kind: TokenKind,
        lexeme: str,
        line: int = 1,
        literal: str | float | None = None,
    ):
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "lexeme", lexeme)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "literal", literal)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable, cannot set {name!r}")

    def __repr__(self) -> str:
        if self.literal is not None:
            return f"Token({self.kind.name}, {self.lexeme!r}, {self.literal!r})"
        return f"Token({self.kind.name}, {self.lexeme!r})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.lexeme == other.lexeme
            and self.line == other.line
            and self.literal == other.literal
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.lexeme, self.line, self.literal))


@dataclass(frozen=True)
class Diagnostic:
    """A lexical error, reported at the line where it was detected.

    Attributes:
        line (int): Line the lexer was on when the error was found.
        message (str): Human readable description.
        span (tuple[int, int]): Start and end offsets of the offending text.
    """

    line: int
    message: str
    span: tuple[int, int]

    def __str__(self) -> str:
        return f"Error at line {self.line}: {self.message}"


def is_digit(ch: str) -> bool:
    return len(ch) == 1 and "0" <= ch <= "9"


class Lexer:
    """Scans a complete Lox source buffer into a list of tokens.

    The whole buffer is tokenized by one call to `scan_tokens`; there is no
    streaming mode.

    Attributes:
        source (str): The text being scanned.
        stream (CharacterStream): Cursor over `source`.
        tokens (list[Token]): Tokens produced so far.
        diagnostics (list[Diagnostic]): Lexical errors, in source order.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.stream = CharacterStream(source)
        self.tokens: list[Token] = []
        self.diagnostics: list[Diagnostic] = []
        self.start = 0
        self.start_line = 1
        self._scanned = False

    @property
    def had_errors(self) -> bool:
        return bool(self.diagnostics)

    def scan_tokens(self) -> list[Token]:
        """Tokenizes the whole source.

        Returns:
            list[Token]: Every token in source order, always ending in exactly
            one `EOF` token with an empty lexeme.
        """
        if self._scanned:
            return self.tokens

        while not self.stream.end_of_file():
            self.start = self.stream.position
            self.start_line = self.stream.line
            self.scan_token()

        self.tokens.append(Token(TokenKind.EOF, "", self.stream.line))
        self._scanned = True
        logger.debug(
            "Scanned %d tokens with %d diagnostics",
            len(self.tokens),
            len(self.diagnostics),
        )
        return self.tokens

    def peek(self) -> str:
        return self.stream.peek()

    def peek_next(self) -> str:
        return self.stream.peek(1)

    def advance(self) -> str:
        return self.stream.next()

    def advance_if_matches(self, expected: str) -> bool:
        """Consumes the next character only if it is `expected`."""
        if self.peek() != expected:
            return False
        self.advance()
        return True

    def add_token(self, kind: TokenKind, literal: str | float | None = None) -> None:
        lexeme = self.source[self.start : self.stream.position]
        self.tokens.append(Token(kind, lexeme, self.start_line, literal))

    def error(self, message: str) -> None:
        diagnostic = Diagnostic(
            self.stream.line, message, (self.start, self.stream.position)
        )
        logger.debug("Lexical error: %s", diagnostic)
        self.diagnostics.append(diagnostic)

    def scan_token(self) -> None:
        """Scans one lexeme starting at `self.start`."""
        ch = self.advance()

        if ch in single_char_tokens:
            self.add_token(single_char_tokens[ch])
        elif ch in two_char_tokens:
            with_equal, alone = two_char_tokens[ch]
            self.add_token(with_equal if self.advance_if_matches("=") else alone)
        elif ch == "/":
            if self.advance_if_matches("/"):
                self.skip_comment()
            else:
                self.add_token(TokenKind.SLASH)
        elif ch in " \r\t\n":
            # newlines are counted by the stream
            pass
        elif ch == '"':
            self.string_literal()
        elif is_digit(ch):
            self.number_literal()
        elif ch.isalpha() or ch == "_":
            self.identifier()
        else:
            self.error(f"Unexpected character {ch!r}.")

    def skip_comment(self) -> None:
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def string_literal(self) -> None:
        while not self.stream.end_of_file() and self.peek() != '"':
            self.advance()

        if self.stream.end_of_file():
            self.error("Unterminated string.")
            return

        # closing quote
        self.advance()
        value = self.source[self.start + 1 : self.stream.position - 1]
        self.add_token(TokenKind.STRING, value)

    def number_literal(self) -> None:
        while is_digit(self.peek()):
            self.advance()

        # a trailing dot is left for the DOT token
        if self.peek() == "." and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()

        text = self.source[self.start : self.stream.position]
        self.add_token(TokenKind.NUMBER, float(text))

    def identifier(self) -> None:
        while self.peek().isalnum() or self.peek() == "_":
            self.advance()

        text = self.source[self.start : self.stream.position]
        self.add_token(reserved_words.get(text, TokenKind.IDENTIFIER))


__all__ = ["CharacterStream", "Diagnostic", "Lexer", "Token"]
