"""
Abstract Syntax Tree node definitions for Lox.

Defines the closed set of expression and statement nodes produced by the
parser. Every node supports the visitor pattern and records its parent.

Author: xwest
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Any
from enum import Enum
import re
import uuid

from ..lexer.tokens import Token


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Statements
    EXPRESSION_STMT = "ExpressionStatement"
    PRINT_STMT = "PrintStatement"
    VAR_DECLARATION = "VarDeclaration"
    BLOCK_STATEMENT = "BlockStatement"
    IF_STATEMENT = "IfStatement"
    WHILE_STATEMENT = "WhileStatement"
    BREAK_STATEMENT = "BreakStatement"
    ERROR_STATEMENT = "ErrorStatement"

    # Expressions
    LITERAL = "Literal"
    UNARY = "Unary"
    BINARY = "Binary"
    GROUPING = "Grouping"
    TERNARY = "Ternary"
    LOGICAL = "Logical"
    VARIABLE = "Variable"
    ASSIGN = "Assign"


_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


class ASTVisitor(ABC):
    """
    Visitor interface for traversing AST nodes.

    `visit` dispatches to `visit_<snake_case node type>`, e.g.
    `visit_binary` or `visit_while_statement`.
    """

    def visit(self, node: 'ASTNode') -> Any:
        """Visit a node by dispatching on its type."""
        method_name = "visit_" + _CAMEL_BOUNDARY.sub("_", node.node_type.value).lower()
        method = getattr(self, method_name, None)
        if method is None:
            return self.generic_visit(node)
        return method(node)

    def generic_visit(self, node: 'ASTNode') -> Any:
        raise NotImplementedError(
            f"{self.__class__.__name__} does not handle {node.node_type.value}"
        )


class ASTNode(ABC):
    """Base class for all AST nodes."""

    # Names of the attributes that make up the node's structure
    _fields: tuple = ()

    def __init__(self, node_type: ASTNodeType):
        self.node_type = node_type
        self.parent: Optional['ASTNode'] = None
        # Generate unique ID for hashability
        self._id = uuid.uuid4()

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    def set_parent(self, parent: 'ASTNode'):
        """Set the parent node."""
        self.parent = parent

    def same_structure(self, other: Any) -> bool:
        """
        Compare two trees structurally.

        Tokens compare by type, lexeme and literal value; their source
        locations are ignored so a re-parsed tree matches the original.
        """
        if type(self) is not type(other):
            return False
        return all(
            _same_value(getattr(self, name), getattr(other, name))
            for name in self._fields
        )

    def __str__(self) -> str:
        return self.node_type.value

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._fields)
        return f"{self.__class__.__name__}({fields})"

    def __hash__(self) -> int:
        """Hash based on unique ID for use in dictionaries."""
        return hash(self._id)

    def __eq__(self, other) -> bool:
        """Equality based on unique ID."""
        if not isinstance(other, ASTNode):
            return False
        return self._id == other._id


def _same_value(left: Any, right: Any) -> bool:
    if isinstance(left, ASTNode):
        return left.same_structure(right)
    if isinstance(left, Token):
        return (isinstance(right, Token) and left.type == right.type
                and left.lexeme == right.lexeme and left.value == right.value)
    if isinstance(left, list):
        return (isinstance(right, list) and len(left) == len(right)
                and all(_same_value(a, b) for a, b in zip(left, right)))
    # bool is an int subclass; keep True distinct from 1.0
    return type(left) is type(right) and left == right


# ============================================================================
# Statements
# ============================================================================

class Statement(ASTNode):
    """Base class for statements."""
    pass


class ExpressionStatement(Statement):
    """Expression evaluated for its side effects."""
    _fields = ("expression",)

    def __init__(self, expression: 'Expression'):
        super().__init__(ASTNodeType.EXPRESSION_STMT)
        self.expression = expression
        expression.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.expression]


class PrintStatement(Statement):
    """`print expression;`"""
    _fields = ("expression",)

    def __init__(self, expression: 'Expression'):
        super().__init__(ASTNodeType.PRINT_STMT)
        self.expression = expression
        expression.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.expression]


class VarDeclaration(Statement):
    """Variable declaration with an optional initializer."""
    _fields = ("name", "initializer")

    def __init__(self, name: Token, initializer: Optional['Expression']):
        super().__init__(ASTNodeType.VAR_DECLARATION)
        self.name = name
        self.initializer = initializer

        if initializer:
            initializer.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.initializer] if self.initializer else []


class BlockStatement(Statement):
    """Block statement containing multiple statements."""
    _fields = ("statements",)

    def __init__(self, statements: List[Statement]):
        super().__init__(ASTNodeType.BLOCK_STATEMENT)
        self.statements = statements
        for stmt in statements:
            stmt.set_parent(self)

    def children(self) -> List[ASTNode]:
        return list(self.statements)


class IfStatement(Statement):
    """If statement with optional else clause."""
    _fields = ("condition", "then_branch", "else_branch")

    def __init__(self, condition: 'Expression', then_branch: Statement,
                 else_branch: Optional[Statement]):
        super().__init__(ASTNodeType.IF_STATEMENT)
        self.condition = condition
        self.then_branch = then_branch
        self.else_branch = else_branch

        condition.set_parent(self)
        then_branch.set_parent(self)
        if else_branch:
            else_branch.set_parent(self)

    def children(self) -> List[ASTNode]:
        children = [self.condition, self.then_branch]
        if self.else_branch:
            children.append(self.else_branch)
        return children


class WhileStatement(Statement):
    """While loop statement. `for` loops are desugared into this."""
    _fields = ("condition", "body")

    def __init__(self, condition: 'Expression', body: Statement):
        super().__init__(ASTNodeType.WHILE_STATEMENT)
        self.condition = condition
        self.body = body

        condition.set_parent(self)
        body.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.condition, self.body]


class BreakStatement(Statement):
    """`break;` - keeps its keyword token for diagnostics."""
    _fields = ("keyword",)

    def __init__(self, keyword: Token):
        super().__init__(ASTNodeType.BREAK_STATEMENT)
        self.keyword = keyword

    def children(self) -> List[ASTNode]:
        return []


class ErrorStatement(Statement):
    """
    Placeholder for a declaration that failed to parse.

    Holds the token and message of the parse error so consumers can skip
    the slot without null checks.
    """
    _fields = ("token", "message")

    def __init__(self, token: Token, message: str):
        super().__init__(ASTNodeType.ERROR_STATEMENT)
        self.token = token
        self.message = message

    def children(self) -> List[ASTNode]:
        return []


# ============================================================================
# Expressions
# ============================================================================

class Expression(ASTNode):
    """Base class for expressions."""
    pass


class Literal(Expression):
    """Literal value: float, str, bool or None (nil)."""
    _fields = ("value",)

    def __init__(self, value: Any):
        super().__init__(ASTNodeType.LITERAL)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []


class Unary(Expression):
    """Prefix operation: `!operand` or `-operand`."""
    _fields = ("operator", "operand")

    def __init__(self, operator: Token, operand: Expression):
        super().__init__(ASTNodeType.UNARY)
        self.operator = operator
        self.operand = operand

        operand.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.operand]


class Binary(Expression):
    """Binary operation, including the comma operator."""
    _fields = ("left", "operator", "right")

    def __init__(self, left: Expression, operator: Token, right: Expression):
        super().__init__(ASTNodeType.BINARY)
        self.left = left
        self.operator = operator
        self.right = right

        left.set_parent(self)
        right.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


class Grouping(Expression):
    """Parenthesized expression."""
    _fields = ("expression",)

    def __init__(self, expression: Expression):
        super().__init__(ASTNodeType.GROUPING)
        self.expression = expression
        expression.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.expression]


class Ternary(Expression):
    """Conditional expression `condition ? then_branch : else_branch`."""
    _fields = ("condition", "then_branch", "else_branch")

    def __init__(self, condition: Expression, then_branch: Expression,
                 else_branch: Expression):
        super().__init__(ASTNodeType.TERNARY)
        self.condition = condition
        self.then_branch = then_branch
        self.else_branch = else_branch

        condition.set_parent(self)
        then_branch.set_parent(self)
        else_branch.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.condition, self.then_branch, self.else_branch]


class Logical(Expression):
    """
    `and` / `or` expression.

    Shaped like Binary but kept separate so an evaluator can short-circuit.
    """
    _fields = ("left", "operator", "right")

    def __init__(self, left: Expression, operator: Token, right: Expression):
        super().__init__(ASTNodeType.LOGICAL)
        self.left = left
        self.operator = operator
        self.right = right

        left.set_parent(self)
        right.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


class Variable(Expression):
    """Variable reference."""
    _fields = ("name",)

    def __init__(self, name: Token):
        super().__init__(ASTNodeType.VARIABLE)
        self.name = name

    def children(self) -> List[ASTNode]:
        return []


class Assign(Expression):
    """Assignment to a named variable."""
    _fields = ("name", "value")

    def __init__(self, name: Token, value: Expression):
        super().__init__(ASTNodeType.ASSIGN)
        self.name = name
        self.value = value

        value.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.value]
