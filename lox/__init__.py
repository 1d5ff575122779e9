"""
Lox Front End Package

Scanner, parser and syntax tree for the Lox scripting language.

Architecture:
    lox/
    ├── lexer/           # Tokenization
    ├── parser/          # Syntax analysis, AST, error recovery, printers
    └── cli.py           # `loxparse` command line / REPL

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .lexer import Lexer
from .parser import Parser

__all__ = [
    # Core classes
    "Lexer",
    "Parser",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
