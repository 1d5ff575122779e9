"""
Error handling for the Lox lexer.

Provides the shared Diagnostic record used by both the lexer and the
parser, and the LexerError raised for malformed source text.

Author: xwest
"""

from dataclasses import dataclass


@dataclass
class Diagnostic:
    """A single reported problem."""
    message: str
    line: int

    def __str__(self) -> str:
        return f"[line {self.line}] {self.message}"


class LexerError(Exception):
    """
    Exception raised when the lexer encounters an invalid character sequence.

    The lexer collects these and keeps scanning; `tokenize_string` raises
    the first one.
    """

    def __init__(self, message: str, line: int):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(message=f"Error: {message}", line=line)

    @property
    def line(self) -> int:
        return self.diagnostic.line

    def __str__(self) -> str:
        return str(self.diagnostic)


# Helper functions for creating common lexer errors

def create_unexpected_character_error(line: int) -> LexerError:
    """Create an error for a character that starts no token."""
    return LexerError("Unexpected character.", line)


def create_unterminated_string_error(line: int) -> LexerError:
    """Create an error for a string literal missing its closing quote."""
    return LexerError("Unterminated string.", line)
