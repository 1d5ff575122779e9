"""
Lox Lexer Package

Implements the lexical analyzer (tokenizer) that feeds the Lox parser.

Key Features:
- Single/double character operators, including '?' and ':' for conditionals
- Decimal number literals (always floats) and multi-line string literals
- Keyword recognition
- Error collection with line attribution

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, make_eof
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "make_eof",
    "tokenize_string",
    "tokenize_file",
    "Diagnostic",
    "LexerError",
]
