import json
from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lox.lox_ast import Binary, Expr, Grouping, Literal, Unary
from lox.lox_constants import TokenKind
from lox.lox_lexer import Token

THREE = Token(TokenKind.NUMBER, "3", 1, 3.0)
FOUR = Token(TokenKind.NUMBER, "4", 1, 4.0)
PLUS = Token(TokenKind.PLUS, "+", 1)
MINUS = Token(TokenKind.MINUS, "-", 2)


def test_literal_repr_and_value() -> None:
    node = Literal(THREE)
    assert repr(node) == "Literal(3)"
    assert node.value == 3.0
    assert node.kind == "literal"


@pytest.mark.parametrize(
    "token,expected",
    [
        (Token(TokenKind.TRUE, "true", 1), True),
        (Token(TokenKind.FALSE, "false", 1), False),
        (Token(TokenKind.NIL, "nil", 1), None),
        (Token(TokenKind.STRING, '"hi"', 1, "hi"), "hi"),
    ],
)
def test_literal_values(token: Token, expected: Any) -> None:
    assert Literal(token).value == expected


def test_literal_rejects_non_literal_tokens() -> None:
    with pytest.raises(ValueError):
        Literal(PLUS)
    with pytest.raises(ValueError):
        Literal(Token(TokenKind.IDENTIFIER, "x", 1))


def test_binary_repr() -> None:
    node = Binary(Literal(THREE), PLUS, Literal(FOUR))
    assert repr(node) == "Binary(Literal(3), +, Literal(4))"
    assert node.children() == (Literal(THREE), Literal(FOUR))


def test_unary_and_grouping_repr() -> None:
    assert repr(Unary(MINUS, Literal(THREE))) == "Unary(-, Literal(3))"
    assert repr(Grouping(Literal(THREE))) == "Grouping(Literal(3))"


def test_structural_equality() -> None:
    assert Binary(Literal(THREE), PLUS, Literal(FOUR)) == Binary(
        Literal(THREE), PLUS, Literal(FOUR)
    )
    assert Binary(Literal(THREE), PLUS, Literal(FOUR)) != Binary(
        Literal(FOUR), PLUS, Literal(THREE)
    )
    assert Grouping(Literal(THREE)) != Literal(THREE)
    assert Unary(MINUS, Literal(THREE)) != "Unary(-, Literal(3))"


def test_nodes_are_hashable() -> None:
    nodes = {Grouping(Literal(THREE)), Grouping(Literal(THREE)), Literal(THREE)}
    assert len(nodes) == 2


@pytest.mark.parametrize(
    "node,attr",
    [
        (Literal(THREE), "token"),
        (Unary(MINUS, Literal(THREE)), "operand"),
        (Binary(Literal(THREE), PLUS, Literal(FOUR)), "left"),
        (Grouping(Literal(THREE)), "inner"),
    ],
)
def test_nodes_are_immutable(node: Expr, attr: str) -> None:
    with pytest.raises(AttributeError):
        setattr(node, attr, None)


def test_to_dict() -> None:
    node = Binary(Unary(MINUS, Literal(THREE)), PLUS, Grouping(Literal(FOUR)))
    assert node.to_dict() == {
        "kind": "binary",
        "operator": "+",
        "line": 1,
        "left": {
            "kind": "unary",
            "operator": "-",
            "line": 2,
            "operand": {"kind": "literal", "value": 3.0, "line": 1},
        },
        "right": {
            "kind": "grouping",
            "inner": {"kind": "literal", "value": 4.0, "line": 1},
        },
    }
    assert json.loads(json.dumps(node.to_dict())) == node.to_dict()


def test_to_dict_on_long_chain() -> None:
    node: Expr = Literal(THREE)
    for _ in range(5000):
        node = Binary(node, PLUS, Literal(FOUR))
    tree: Any = node.to_dict()
    depth = 0
    while tree["kind"] == "binary":
        assert tree["right"] == {"kind": "literal", "value": 4.0, "line": 1}
        tree = tree["left"]
        depth += 1
    assert depth == 5000
    assert tree == {"kind": "literal", "value": 3.0, "line": 1}


def test_base_expr_has_no_dict_form() -> None:
    with pytest.raises(NotImplementedError):
        Expr().to_dict()


@given(st.text(), st.integers(min_value=1))  # type: ignore[misc]
def test_string_literal_to_dict(text: str, line: int) -> None:
    node = Literal(Token(TokenKind.STRING, f'"{text}"', line, text))
    assert node.to_dict() == {"kind": "literal", "value": text, "line": line}
