"""
Positional view over the token list.

No grammar knowledge lives here, only lookahead/advance/consume
primitives the recursive descent parser is built on.

Author: xwest
"""

from typing import List

from ..lexer.tokens import Token, TokenType, make_eof
from .errors import create_expected_token_error


class TokenCursor:
    """One-token-lookahead cursor over a list of tokens ending in EOF."""

    def __init__(self, tokens: List[Token]):
        tokens = list(tokens)
        if not tokens or tokens[-1].type != TokenType.EOF:
            line = tokens[-1].line if tokens else 1
            tokens.append(make_eof(line=line))
        self.tokens = tokens
        self.current = 0

    def peek(self) -> Token:
        """Return current token without consuming."""
        return self.tokens[self.current]

    def previous(self) -> Token:
        """Return the most recently consumed token."""
        if self.current > 0:
            return self.tokens[self.current - 1]
        return self.tokens[0]

    def is_at_end(self) -> bool:
        """Check if we've reached the end of tokens."""
        return self.peek().type == TokenType.EOF

    def advance(self) -> Token:
        """Consume and return current token."""
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        if self.is_at_end():
            return False
        return self.peek().type == token_type

    def match(self, *token_types: TokenType) -> bool:
        """Consume the current token if it is one of `token_types`."""
        for token_type in token_types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type: TokenType, message: str) -> Token:
        """Consume token of expected type or raise ParseError."""
        if self.check(token_type):
            return self.advance()

        raise create_expected_token_error(self.peek(), message)
