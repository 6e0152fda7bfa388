"""
Defines the abstract syntax tree (AST) for Lox expressions.

Classes:
    Expr:
        Common base of every expression node. Nodes are immutable once built
        and own their children exclusively (no sharing, no back-references).

    Literal(token):
        A number, string, `true`, `false` or `nil` token.

    Unary(operator, operand):
        A prefix `!` or `-` applied to one operand.

    Binary(left, operator, right):
        An infix operator applied to two operands.

    Grouping(inner):
        A parenthesized sub-expression, kept explicit so that `(a)` and `a`
        produce different trees.

    ExprDict:
        TypedDict shape of `Expr.to_dict()` output, suitable for JSON.

Usage:
    Trees are produced by `lox.lox_parser.Parser` and rendered by
    `lox.lox_printer.ast_dump`.

Example:
    node = Binary(Literal(three), plus, Literal(four))
"""

from typing import Any, TypedDict

from lox.lox_constants import TokenKind
from lox.lox_lexer import Token

LITERAL_KINDS = frozenset(
    {
        TokenKind.NUMBER,
        TokenKind.STRING,
        TokenKind.TRUE,
        TokenKind.FALSE,
        TokenKind.NIL,
    }
)


class ExprDict(TypedDict, total=False):
    """Serialized form of an `Expr` node.

    Fields:
        kind (str): "literal", "unary", "binary" or "grouping".
        value (Any): Literal payload (literal nodes only).
        operator (str): Operator lexeme (unary and binary nodes).
        line (int): Line of the node's token (literal, unary and binary nodes).
        operand, left, right, inner (ExprDict): Child nodes.
    """

    kind: str
    value: Any
    operator: str
    line: int
    operand: "ExprDict"
    left: "ExprDict"
    right: "ExprDict"
    inner: "ExprDict"


class Expr:
    """Base class of all expression nodes.

    `to_dict` walks the tree with an explicit stack and handles any depth.
    `__eq__`, `__hash__` and `__repr__` recurse once per level, so they are
    limited by the interpreter recursion limit (about 1000 nested nodes).
    """

    __slots__ = ()

    kind = "expr"

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable, cannot set {name!r}")

    def _init(self, **fields: Any) -> None:
        for name, value in fields.items():
            object.__setattr__(self, name, value)

    def children(self) -> tuple["Expr", ...]:
        return ()

    def to_dict(self) -> ExprDict:
        """Convert the tree to nested dicts, children before parents."""
        work: list[tuple[Expr, bool]] = [(self, False)]
        done: list[ExprDict] = []

        while work:
            node, expanded = work.pop()
            kids = node.children()
            if not expanded:
                work.append((node, True))
                work.extend((child, False) for child in reversed(kids))
                continue
            converted = done[len(done) - len(kids) :]
            del done[len(done) - len(kids) :]
            done.append(node._as_dict(converted))

        return done[0]

    def _as_dict(self, children: list[ExprDict]) -> ExprDict:
        raise NotImplementedError(f"to_dict not implemented for {type(self).__name__}")


class Literal(Expr):
    __slots__ = ("token",)

    kind = "literal"

    def __init__(self, token: Token) -> None:
        if token.kind not in LITERAL_KINDS:
            raise ValueError(f"Not a literal token: {token!r}")
        self._init(token=token)

    @property
    def value(self) -> str | float | bool | None:
        """The Python value the literal denotes."""
        if self.token.kind is TokenKind.TRUE:
            return True
        if self.token.kind is TokenKind.FALSE:
            return False
        return self.token.literal

    def __repr__(self) -> str:
        return f"Literal({self.token.lexeme})"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Literal) and self.token == other.token

    def __hash__(self) -> int:
        return hash((self.kind, self.token))

    def _as_dict(self, children: list[ExprDict]) -> ExprDict:
        return {"kind": self.kind, "value": self.value, "line": self.token.line}


class Unary(Expr):
    __slots__ = ("operator", "operand")

    kind = "unary"

    def __init__(self, operator: Token, operand: Expr) -> None:
        self._init(operator=operator, operand=operand)

    def children(self) -> tuple[Expr, ...]:
        return (self.operand,)

    def __repr__(self) -> str:
        return f"Unary({self.operator.lexeme}, {self.operand!r})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Unary)
            and self.operator == other.operator
            and self.operand == other.operand
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.operator, self.operand))

    def _as_dict(self, children: list[ExprDict]) -> ExprDict:
        return {
            "kind": self.kind,
            "operator": self.operator.lexeme,
            "line": self.operator.line,
            "operand": children[0],
        }


class Binary(Expr):
    __slots__ = ("left", "operator", "right")

    kind = "binary"

    def __init__(self, left: Expr, operator: Token, right: Expr) -> None:
        self._init(left=left, operator=operator, right=right)

    def children(self) -> tuple[Expr, ...]:
        return (self.left, self.right)

    def __repr__(self) -> str:
        return f"Binary({self.left!r}, {self.operator.lexeme}, {self.right!r})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Binary)
            and self.left == other.left
            and self.operator == other.operator
            and self.right == other.right
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.left, self.operator, self.right))

    def _as_dict(self, children: list[ExprDict]) -> ExprDict:
        return {
            "kind": self.kind,
            "operator": self.operator.lexeme,
            "line": self.operator.line,
            "left": children[0],
            "right": children[1],
        }


class Grouping(Expr):
    __slots__ = ("inner",)

    kind = "grouping"

    def __init__(self, inner: Expr) -> None:
        self._init(inner=inner)

    def children(self) -> tuple[Expr, ...]:
        return (self.inner,)

    def __repr__(self) -> str:
        return f"Grouping({self.inner!r})"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Grouping) and self.inner == other.inner

    def __hash__(self) -> int:
        return hash((self.kind, self.inner))

    def _as_dict(self, children: list[ExprDict]) -> ExprDict:
        return {"kind": self.kind, "inner": children[0]}


__all__ = ["Binary", "Expr", "ExprDict", "Grouping", "Literal", "Unary"]
