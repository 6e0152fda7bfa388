"""
Lox Expression Parser

Parses a lexer-generated token list into an expression tree.

Grammar
-------
Strictly layered, lowest precedence first, every binary level left-associative::

    expression     → equality
    equality       → comparison ( ( "!=" | "==" ) comparison )*
    comparison     → addition ( ( ">" | ">=" | "<" | "<=" ) addition )*
    addition       → multiplication ( ( "+" | "-" ) multiplication )*
    multiplication → unary ( ( "*" | "/" ) unary )*
    unary          → ( "!" | "-" ) unary | primary
    primary        → NUMBER | STRING | "false" | "true" | "nil"
                   | "(" expression ")"

Each rule maps to one method. The `( ... )*` repetitions are loops that fold
each new operand into a `Binary` node whose left side is the tree built so far.

Parser Behavior
---------------
- `parse()` reads exactly one expression and returns its tree.
- The first syntax error aborts the parse; no partial tree is returned.
- Tokens after the expression are left unconsumed.
- `synchronize()` implements panic-mode recovery for a statement-level loop.
  `parse()` never calls it.

Raises
------
ParseError
    `UnexpectedTokenError` when an operand is missing or malformed,
    `MissingParenthesisError` when a group is not closed, and
    `NestingTooDeepError` when nesting exceeds `max_depth`.
"""

import logging

from lox.lox_ast import Binary, Expr, Grouping, Literal, Unary
from lox.lox_constants import TokenKind, statement_starters
from lox.lox_lexer import Token

logger = logging.getLogger(__name__)


class ParseError(SyntaxError):
    """Base class for Lox syntax errors.

    Attributes:
        token (Token): The token the parser was looking at.
        line (int): Line of that token.
    """

    def __init__(self, message: str, token: Token):
        super().__init__(f"[line {token.line}] {message}")
        self.token = token
        self.line = token.line


class UnexpectedTokenError(ParseError):
    """Raised when `primary` finds nothing it can start an operand with."""

    def __init__(self, token: Token):
        where = "end of input" if token.kind is TokenKind.EOF else repr(token.lexeme)
        super().__init__(f"Expected expression, got {where}", token)


class MissingParenthesisError(ParseError):
    """Raised when a parenthesized expression is not followed by `)`."""

    def __init__(self, token: Token):
        super().__init__("Expected ')' after expression", token)


class NestingTooDeepError(ParseError):
    """Raised when groups or prefix operators nest deeper than allowed."""

    def __init__(self, token: Token, max_depth: int):
        super().__init__(f"Expression nested deeper than {max_depth} levels", token)


class Parser:
    """
    Recursive-descent parser over a complete token list.

    Attributes
    ----------
    tokens : list[Token]
        The token list, ending in `EOF`.
    position : int
        Index of the current token.
    max_depth : int
        Maximum nesting of parenthesized groups and prefix operators. Each
        `(` and each `!` or `-` prefix uses one level; the top-level
        expression uses none, so `max_depth=64` accepts 64 nested groups.
    """

    equality_ops = (TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL)
    comparison_ops = (
        TokenKind.GREATER,
        TokenKind.GREATER_EQUAL,
        TokenKind.LESS,
        TokenKind.LESS_EQUAL,
    )
    addition_ops = (TokenKind.PLUS, TokenKind.MINUS)
    multiplication_ops = (TokenKind.STAR, TokenKind.SLASH)
    unary_ops = (TokenKind.BANG, TokenKind.MINUS)
    literal_kinds = (
        TokenKind.NUMBER,
        TokenKind.STRING,
        TokenKind.FALSE,
        TokenKind.TRUE,
        TokenKind.NIL,
    )

    def __init__(self, tokens: list[Token], max_depth: int = 64) -> None:
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            raise ValueError("Token list must end with an EOF token")
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.max_depth = max_depth
        self.depth = 0

    # Cursor helpers

    def current(self) -> Token:
        return self.tokens[self.position]

    def previous(self) -> Token:
        return self.tokens[self.position - 1]

    def is_at_end(self) -> bool:
        return self.current().kind is TokenKind.EOF

    def advance(self) -> Token:
        """Moves past the current token (never past `EOF`) and returns it."""
        if not self.is_at_end():
            self.position += 1
        return self.previous()

    def match(self, *kinds: TokenKind) -> Token | None:
        """Consumes and returns the current token if its kind is in `kinds`."""
        if self.current().kind in kinds:
            return self.advance()
        return None

    def parse(self) -> Expr:
        """Parse a single expression and return its tree."""
        try:
            return self.expression()
        except ParseError as e:
            logger.debug("Parse failed at token %d: %s", self.position, e)
            raise

    # Grammar

    def expression(self) -> Expr:
        return self.equality()

    def equality(self) -> Expr:
        expr = self.comparison()
        while (operator := self.match(*self.equality_ops)) is not None:
            expr = Binary(expr, operator, self.comparison())
        return expr

    def comparison(self) -> Expr:
        expr = self.addition()
        while (operator := self.match(*self.comparison_ops)) is not None:
            expr = Binary(expr, operator, self.addition())
        return expr

    def addition(self) -> Expr:
        expr = self.multiplication()
        while (operator := self.match(*self.addition_ops)) is not None:
            expr = Binary(expr, operator, self.multiplication())
        return expr

    def multiplication(self) -> Expr:
        expr = self.unary()
        while (operator := self.match(*self.multiplication_ops)) is not None:
            expr = Binary(expr, operator, self.unary())
        return expr

    def unary(self) -> Expr:
        operator = self.match(*self.unary_ops)
        if operator is None:
            return self.primary()
        self.enter(operator)
        try:
            return Unary(operator, self.unary())
        finally:
            self.depth -= 1

    def primary(self) -> Expr:
        if self.match(*self.literal_kinds) is not None:
            return Literal(self.previous())

        if (paren := self.match(TokenKind.LEFT_PAREN)) is not None:
            self.enter(paren)
            try:
                inner = self.expression()
            finally:
                self.depth -= 1
            if self.match(TokenKind.RIGHT_PAREN) is None:
                raise MissingParenthesisError(self.current())
            return Grouping(inner)

        raise UnexpectedTokenError(self.current())

    def enter(self, token: Token) -> None:
        if self.depth >= self.max_depth:
            raise NestingTooDeepError(token, self.max_depth)
        self.depth += 1

    # Recovery

    def synchronize(self) -> None:
        """Discard tokens until a likely statement boundary.

        Stops right after a `;`, in front of a statement keyword, or at `EOF`.
        """
        self.advance()
        while not self.is_at_end():
            if self.previous().kind is TokenKind.SEMICOLON:
                return
            if self.current().kind in statement_starters:
                return
            self.advance()


__all__ = [
    "MissingParenthesisError",
    "NestingTooDeepError",
    "ParseError",
    "Parser",
    "UnexpectedTokenError",
]
