import os

import pytest

from lox.lox_constants import TokenKind
from lox.lox_lexer import Token

# Subprocess runs of the CLI report coverage when COVERAGE_PROCESS_START is set
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


@pytest.fixture  # type: ignore[misc]
def eof() -> Token:
    return Token(TokenKind.EOF, "", 1)
