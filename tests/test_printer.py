import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lox.lox_ast import Binary, Expr, Grouping, Literal, Unary
from lox.lox_constants import TokenKind
from lox.lox_lexer import Token
from lox.lox_printer import AstPrinter, ast_dump, json_dump

FORTY_TWO = Token(TokenKind.NUMBER, "42", 1, 42.0)
MINUS = Token(TokenKind.MINUS, "-", 1)
STAR = Token(TokenKind.STAR, "*", 1)


def test_print_literal() -> None:
    assert ast_dump(Literal(FORTY_TWO)) == "(42)"


def test_print_keyword_and_string_literals() -> None:
    assert ast_dump(Literal(Token(TokenKind.NIL, "nil", 1))) == "(nil)"
    assert ast_dump(Literal(Token(TokenKind.STRING, '"x y"', 1, "x y"))) == '("x y")'


def test_print_unary() -> None:
    assert ast_dump(Unary(MINUS, Literal(FORTY_TWO))) == "(-(42))"


def test_print_binary() -> None:
    expr = Binary(Literal(FORTY_TWO), STAR, Unary(MINUS, Literal(FORTY_TWO)))
    assert ast_dump(expr) == "((42)*(-(42)))"


def test_print_grouping() -> None:
    assert ast_dump(Grouping(Literal(FORTY_TWO))) == "((42))"
    assert ast_dump(Unary(MINUS, Grouping(Literal(FORTY_TWO)))) == "(-((42)))"


def test_printer_is_idempotent() -> None:
    expr = Binary(Grouping(Literal(FORTY_TWO)), STAR, Literal(FORTY_TWO))
    printer = AstPrinter()
    assert printer.dump(expr) == printer.dump(expr) == ast_dump(expr)


def test_deep_left_chain_does_not_recurse() -> None:
    expr: Expr = Literal(FORTY_TWO)
    for _ in range(5000):
        expr = Binary(expr, STAR, Literal(FORTY_TWO))
    out = ast_dump(expr)
    assert out.startswith("(" * 5001)
    assert out.count("*") == 5000


def test_json_dump_matches_json_module() -> None:
    expr = Binary(Grouping(Literal(FORTY_TWO)), STAR, Unary(MINUS, Literal(FORTY_TWO)))
    assert json_dump(expr) == json.dumps(expr.to_dict(), indent=2)
    assert json_dump(expr, indent=4) == json.dumps(expr.to_dict(), indent=4)
    string = Literal(Token(TokenKind.STRING, '"tab\there é"', 1, "tab\there é"))
    assert json_dump(string) == json.dumps(string.to_dict(), indent=2)


def test_json_dump_deep_chain() -> None:
    expr: Expr = Literal(FORTY_TWO)
    for _ in range(3000):
        expr = Unary(MINUS, Grouping(expr))
    out = json_dump(expr)
    assert out.count('"kind": "unary"') == 3000
    assert out.startswith('{\n  "kind": "unary",\n  "operator": "-",')
    assert out.endswith("\n}")


def test_unknown_node_raises() -> None:
    with pytest.raises(TypeError):
        ast_dump(object())  # type: ignore[arg-type]


def trees() -> st.SearchStrategy[Expr]:
    leaves = st.builds(
        lambda n: Literal(Token(TokenKind.NUMBER, str(n), 1, float(n))),
        st.integers(min_value=0, max_value=999),
    )
    return st.recursive(
        leaves,
        lambda children: st.one_of(
            st.builds(Grouping, children),
            st.builds(Unary, st.just(MINUS), children),
            st.builds(Binary, children, st.just(STAR), children),
        ),
        max_leaves=20,
    )


@given(trees())  # type: ignore[misc]
def test_output_is_balanced_and_deterministic(expr: Expr) -> None:
    out = ast_dump(expr)
    assert out == ast_dump(expr)
    depth = 0
    for ch in out:
        depth += {"(": 1, ")": -1}.get(ch, 0)
        assert depth >= 0
    assert depth == 0
    assert out.startswith("(") and out.endswith(")")
