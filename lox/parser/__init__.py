"""
Lox Parser Package

Implements a recursive descent parser for the Lox language.

Key Features:
- One method per precedence level, from comma down to primary
- Right-associative conditional (`?:`) and assignment expressions
- `for` loops desugared into `while` loops
- Error recovery by statement-boundary synchronization
- Printers for s-expression dumps and source round-tripping

Author: xwest
"""

from .ast_nodes import *
from .cursor import TokenCursor
from .parser import (
    Parser, ParseContext, DEFAULT_MAX_DEPTH, parse_source, parse_expression_source
)
from .errors import (
    ParseError, DiagnosticSink, ErrorReporter, SyntaxErrorRecovery, PARSER_ERROR_CODES
)
from .printer import AstPrinter, SourcePrinter

__all__ = [
    # Core parser
    "Parser", "ParseContext", "TokenCursor", "DEFAULT_MAX_DEPTH",
    "parse_source", "parse_expression_source",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "Statement", "Expression",
    "ExpressionStatement", "PrintStatement", "VarDeclaration", "BlockStatement",
    "IfStatement", "WhileStatement", "BreakStatement", "ErrorStatement",
    "Literal", "Unary", "Binary", "Grouping", "Ternary", "Logical",
    "Variable", "Assign",

    # Printers
    "AstPrinter", "SourcePrinter",

    # Error handling
    "ParseError", "DiagnosticSink", "ErrorReporter", "SyntaxErrorRecovery",
    "PARSER_ERROR_CODES",
]
