"""
Printers for Lox syntax trees.

AstPrinter renders a tree as parenthesized s-expressions for debugging and
tests. SourcePrinter renders it back to Lox source; re-parsing that output
gives a structurally identical tree for any program that parsed cleanly.

Author: xwest
"""

from decimal import Decimal
from typing import Any, List

from .ast_nodes import (
    ASTNode, ASTVisitor, Statement, ExpressionStatement, PrintStatement,
    VarDeclaration, BlockStatement, IfStatement, WhileStatement, BreakStatement,
    ErrorStatement, Literal, Unary, Binary, Grouping, Ternary, Logical,
    Variable, Assign
)


def format_number(value: float) -> str:
    """Render a number the way it would be written in Lox source."""
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text:
        # Lox has no exponent syntax; spell out every digit
        text = format(Decimal(text), "f")
    return text


def format_literal(value: Any) -> str:
    if value is None:
        return "nil"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, float):
        return format_number(value)
    return str(value)


class AstPrinter(ASTVisitor):
    """Renders nodes as s-expressions, e.g. `(+ 1 (* 2 3))`."""

    def print(self, node: ASTNode) -> str:
        return node.accept(self)

    def _parenthesize(self, name: str, *parts) -> str:
        rendered = [name]
        for part in parts:
            rendered.append(part.accept(self) if isinstance(part, ASTNode) else str(part))
        return "(" + " ".join(rendered) + ")"

    # Statements

    def visit_expression_statement(self, stmt: ExpressionStatement) -> str:
        return self._parenthesize(";", stmt.expression)

    def visit_print_statement(self, stmt: PrintStatement) -> str:
        return self._parenthesize("print", stmt.expression)

    def visit_var_declaration(self, stmt: VarDeclaration) -> str:
        if stmt.initializer is None:
            return self._parenthesize("var", stmt.name.lexeme)
        return self._parenthesize("var", stmt.name.lexeme, stmt.initializer)

    def visit_block_statement(self, stmt: BlockStatement) -> str:
        return self._parenthesize("block", *stmt.statements)

    def visit_if_statement(self, stmt: IfStatement) -> str:
        if stmt.else_branch is None:
            return self._parenthesize("if", stmt.condition, stmt.then_branch)
        return self._parenthesize("if", stmt.condition, stmt.then_branch, stmt.else_branch)

    def visit_while_statement(self, stmt: WhileStatement) -> str:
        return self._parenthesize("while", stmt.condition, stmt.body)

    def visit_break_statement(self, stmt: BreakStatement) -> str:
        return "(break)"

    def visit_error_statement(self, stmt: ErrorStatement) -> str:
        return "(error)"

    # Expressions

    def visit_literal(self, expr: Literal) -> str:
        return format_literal(expr.value)

    def visit_unary(self, expr: Unary) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.operand)

    def visit_binary(self, expr: Binary) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_grouping(self, expr: Grouping) -> str:
        return self._parenthesize("group", expr.expression)

    def visit_ternary(self, expr: Ternary) -> str:
        return self._parenthesize("?:", expr.condition, expr.then_branch, expr.else_branch)

    def visit_logical(self, expr: Logical) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_variable(self, expr: Variable) -> str:
        return expr.name.lexeme

    def visit_assign(self, expr: Assign) -> str:
        return self._parenthesize("=", expr.name.lexeme, expr.value)


class SourcePrinter(ASTVisitor):
    """Renders nodes back to Lox source text."""

    def __init__(self, indent: str = "    "):
        self.indent = indent
        self._level = 0

    def print(self, node: ASTNode) -> str:
        return node.accept(self)

    def print_program(self, statements: List[Statement]) -> str:
        return "\n".join(self.print(stmt) for stmt in statements)

    def _pad(self) -> str:
        return self.indent * self._level

    # Statements

    def visit_expression_statement(self, stmt: ExpressionStatement) -> str:
        return f"{self._pad()}{stmt.expression.accept(self)};"

    def visit_print_statement(self, stmt: PrintStatement) -> str:
        return f"{self._pad()}print {stmt.expression.accept(self)};"

    def visit_var_declaration(self, stmt: VarDeclaration) -> str:
        if stmt.initializer is None:
            return f"{self._pad()}var {stmt.name.lexeme};"
        return f"{self._pad()}var {stmt.name.lexeme} = {stmt.initializer.accept(self)};"

    def visit_block_statement(self, stmt: BlockStatement) -> str:
        lines = [self._pad() + "{"]
        self._level += 1
        try:
            lines.extend(inner.accept(self) for inner in stmt.statements)
        finally:
            self._level -= 1
        lines.append(self._pad() + "}")
        return "\n".join(lines)

    def visit_if_statement(self, stmt: IfStatement) -> str:
        text = f"{self._pad()}if ({stmt.condition.accept(self)})\n{self._body(stmt.then_branch)}"
        if stmt.else_branch is not None:
            text += f"\n{self._pad()}else\n{self._body(stmt.else_branch)}"
        return text

    def visit_while_statement(self, stmt: WhileStatement) -> str:
        return f"{self._pad()}while ({stmt.condition.accept(self)})\n{self._body(stmt.body)}"

    def visit_break_statement(self, stmt: BreakStatement) -> str:
        return f"{self._pad()}break;"

    def visit_error_statement(self, stmt: ErrorStatement) -> str:
        raise ValueError(f"cannot print erroneous statement on line {stmt.token.line}")

    def _body(self, stmt: Statement) -> str:
        self._level += 1
        try:
            return stmt.accept(self)
        finally:
            self._level -= 1

    # Expressions

    def visit_literal(self, expr: Literal) -> str:
        if isinstance(expr.value, str):
            return f'"{expr.value}"'
        return format_literal(expr.value)

    def visit_unary(self, expr: Unary) -> str:
        return f"{expr.operator.lexeme}{expr.operand.accept(self)}"

    def visit_binary(self, expr: Binary) -> str:
        if expr.operator.lexeme == ",":
            return f"{expr.left.accept(self)}, {expr.right.accept(self)}"
        return f"{expr.left.accept(self)} {expr.operator.lexeme} {expr.right.accept(self)}"

    def visit_grouping(self, expr: Grouping) -> str:
        return f"({expr.expression.accept(self)})"

    def visit_ternary(self, expr: Ternary) -> str:
        return (f"{expr.condition.accept(self)} ? {expr.then_branch.accept(self)}"
                f" : {expr.else_branch.accept(self)}")

    def visit_logical(self, expr: Logical) -> str:
        return f"{expr.left.accept(self)} {expr.operator.lexeme} {expr.right.accept(self)}"

    def visit_variable(self, expr: Variable) -> str:
        return expr.name.lexeme

    def visit_assign(self, expr: Assign) -> str:
        return f"{expr.name.lexeme} = {expr.value.accept(self)}"
