"""
Error handling for the Lox parser.

Provides the ParseError signal, the diagnostic sink the parser reports
through, and the statement-boundary synchronization used to keep parsing
after a syntax error.

Author: xwest
"""

from typing import List, Optional, Protocol

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic


class DiagnosticSink(Protocol):
    """Anything that accepts `(line, message)` error reports."""

    def report(self, line: int, message: str) -> None:
        ...


class ErrorReporter:
    """
    Default diagnostic sink.

    Collects every reported problem so callers can inspect or render them
    after a parse.
    """

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def report(self, line: int, message: str) -> None:
        self.diagnostics.append(Diagnostic(message=message, line=line))

    @property
    def had_error(self) -> bool:
        return len(self.diagnostics) > 0

    @property
    def messages(self) -> List[str]:
        return [d.message for d in self.diagnostics]

    def reset(self):
        self.diagnostics.clear()

    def __len__(self) -> int:
        return len(self.diagnostics)


def format_token_error(token: Token, message: str) -> str:
    """Attribute a message to a token: `Error at 'x': ...` or `Error at end: ...`."""
    if token.type == TokenType.EOF:
        return f"Error at end: {message}"
    return f"Error at '{token.lexeme}': {message}"


class ParseError(Exception):
    """
    Exception raised when the parser hits a fatal syntax error.

    Unwinds to the nearest declaration, which reports it and synchronizes.
    """

    def __init__(self, token: Token, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.token = token
        self.message = message
        self.code = code

    @property
    def line(self) -> int:
        return self.token.line

    def __str__(self) -> str:
        return format_token_error(self.token, self.message)


class SyntaxErrorRecovery:
    """
    Utilities for error recovery in the parser.

    Lets a single pass surface several independent syntax errors.
    """

    # Keywords that begin a new statement
    STATEMENT_STARTS = {
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }

    @staticmethod
    def synchronize(tokens: List[Token], current_pos: int) -> int:
        """
        Skip past the malformed statement.

        Always discards the token at `current_pos`, then stops right after
        a `;` or right before a statement keyword. Returns the position to
        resume parsing from.
        """
        last = len(tokens) - 1

        def at_end(pos: int) -> bool:
            return pos >= last or tokens[pos].type == TokenType.EOF

        if not at_end(current_pos):
            current_pos += 1

        while not at_end(current_pos):
            if tokens[current_pos - 1].type == TokenType.SEMICOLON:
                return current_pos
            if tokens[current_pos].type in SyntaxErrorRecovery.STATEMENT_STARTS:
                return current_pos
            current_pos += 1

        return current_pos


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Expected token not found",
    "P002": "Expected expression",
    "P003": "Nesting too deep",
}


# Helper functions for creating common parser errors

def create_expected_token_error(found: Token, message: str) -> ParseError:
    """Create an error for a required token that is missing."""
    return ParseError(found, message, code="P001")


def create_expect_expression_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    return ParseError(found, "Expect expression.", code="P002")


def create_nesting_error(found: Token) -> ParseError:
    """Create an error for input nested deeper than the parser allows."""
    return ParseError(found, "Too much nesting.", code="P003")
