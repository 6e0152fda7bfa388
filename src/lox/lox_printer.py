"""
Renders Lox expression trees as fully parenthesized debug strings.

Every node is wrapped in one pair of parentheses:

    Literal   →  (lexeme)
    Unary     →  (op<operand>)
    Binary    →  (<left>op<right>)
    Grouping  →  (<inner>)

so `3 + 4` renders as `((3)+(4))` and `-(1)` as `(-((1)))`. The format is for
diagnostics and tests only; it is not meant to be parsed back.

`json_dump` writes the `Expr.to_dict()` form as indented JSON, laid out
exactly as `json.dumps(tree, indent=2)` would.

Both walks use an explicit work stack rather than recursion, so arbitrarily
long operator chains render without hitting the interpreter's recursion limit.
"""

import json
from typing import Any

from lox.lox_ast import Binary, Expr, Grouping, Literal, Unary


class AstPrinter:
    """Serializes `Expr` trees.

    Methods:
        dump(expr): Returns the debug rendering of `expr`.
    """

    def dump(self, expr: Expr) -> str:
        """
        Render `expr` and all of its descendants.

        Raises
        ------
        TypeError
            If the tree contains something that is not a known `Expr` node.
        """
        parts: list[str] = []
        # items are popped last-first; plain strings are emitted verbatim
        stack: list[Expr | str] = [expr]

        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, Literal):
                parts.append(f"({item.token.lexeme})")
            elif isinstance(item, Unary):
                stack.extend((")", item.operand, item.operator.lexeme, "("))
            elif isinstance(item, Binary):
                stack.extend((")", item.right, item.operator.lexeme, item.left, "("))
            elif isinstance(item, Grouping):
                stack.extend((")", item.inner, "("))
            else:
                raise TypeError(f"Cannot render {type(item).__name__}: {item!r}")

        return "".join(parts)


def ast_dump(expr: Expr) -> str:
    return AstPrinter().dump(expr)


def json_dump(expr: Expr, indent: int = 2) -> str:
    """Render `expr.to_dict()` as indented JSON without recursing."""
    parts: list[str] = []
    # (value, nesting level) pairs, or literal text to emit
    stack: list[tuple[Any, int] | str] = [(expr.to_dict(), 0)]

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        value, level = item
        if not isinstance(value, dict) or not value:
            parts.append(json.dumps(value))
            continue

        pad = "\n" + " " * (indent * (level + 1))
        work: list[tuple[Any, int] | str] = []
        for i, (key, child) in enumerate(value.items()):
            work.append(("," if i else "") + pad + json.dumps(key) + ": ")
            work.append((child, level + 1))
        work.append("\n" + " " * (indent * level) + "}")
        parts.append("{")
        stack.extend(reversed(work))

    return "".join(parts)


__all__ = ["AstPrinter", "ast_dump", "json_dump"]
