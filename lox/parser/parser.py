"""
Lox Recursive Descent Parser

Turns the lexer's token list into statements and expressions. Each
precedence level is its own method and calls the next-higher level:

    expression  -> comma
    comma       -> assignment ( "," assignment )*
    assignment  -> IDENTIFIER "=" assignment | ternary
    ternary     -> logic_or ( "?" ternary ":" ternary )?
    logic_or    -> logic_and ( "or" logic_and )*
    logic_and   -> equality ( "and" equality )*
    equality    -> comparison ( ( "!=" | "==" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "-" | "+" ) factor )*
    factor      -> unary ( ( "/" | "*" ) unary )*
    unary       -> ( "!" | "-" ) unary | primary
    primary     -> NUMBER | STRING | "true" | "false" | "nil"
                 | "(" expression ")" | IDENTIFIER

Syntax errors unwind to the enclosing declaration, which reports them,
synchronizes to the next statement and leaves an ErrorStatement behind.

Author: xwest
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import List, Optional

from ..lexer.tokens import Token, TokenType
from ..lexer.lexer import Lexer
from .ast_nodes import (
    Statement, Expression, ExpressionStatement, PrintStatement, VarDeclaration,
    BlockStatement, IfStatement, WhileStatement, BreakStatement, ErrorStatement,
    Literal, Unary, Binary, Grouping, Ternary, Logical, Variable, Assign
)
from .cursor import TokenCursor
from .errors import (
    ParseError, DiagnosticSink, ErrorReporter, SyntaxErrorRecovery, PARSER_ERROR_CODES,
    format_token_error, create_expect_expression_error, create_nesting_error
)

logger = logging.getLogger(__name__)

# Nesting budget, in Python stack frames. Each recursive construct is
# charged what one more level of it costs, so the total stays well under
# the default recursion limit however the constructs are mixed.
DEFAULT_MAX_DEPTH = 600

GROUPING_COST = 12      # primary -> expression -> comma -> ... -> primary
STATEMENT_COST = 3      # block -> declaration -> statement, or if/while -> statement
CHAIN_COST = 1          # unary, assignment and conditional tails recurse in place

EQUALITY_OPERATORS = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
COMPARISON_OPERATORS = (
    TokenType.GREATER, TokenType.GREATER_EQUAL,
    TokenType.LESS, TokenType.LESS_EQUAL,
)
TERM_OPERATORS = (TokenType.MINUS, TokenType.PLUS)
FACTOR_OPERATORS = (TokenType.SLASH, TokenType.STAR)
UNARY_OPERATORS = (TokenType.BANG, TokenType.MINUS)

# Binary operators that can show up where an operand was expected.
# '-' is absent: it is a valid prefix operator.
MISPLACED_BINARY_OPERATORS = (
    TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL,
    TokenType.GREATER, TokenType.GREATER_EQUAL,
    TokenType.LESS, TokenType.LESS_EQUAL,
    TokenType.PLUS, TokenType.SLASH, TokenType.STAR,
)


@dataclass(frozen=True)
class ParseContext:
    """Lexical nesting information threaded through statement parsing."""
    loop_depth: int = 0

    @property
    def in_loop(self) -> bool:
        return self.loop_depth > 0

    def enter_loop(self) -> 'ParseContext':
        return ParseContext(self.loop_depth + 1)


class Parser(TokenCursor):
    """
    Lox recursive descent parser.

    Reports every diagnostic through `reporter` and keeps going after
    errors, so one call surfaces all independent syntax errors.
    """

    def __init__(self, tokens: List[Token], reporter: Optional[DiagnosticSink] = None,
                 max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Tokens from the lexer, terminated by EOF
            reporter: Diagnostic sink; a fresh ErrorReporter if omitted
            max_depth: Nesting budget in stack frames before giving up on a declaration
        """
        super().__init__(tokens)
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.max_depth = max_depth
        self._depth = 0

    # Entry points

    def parse(self) -> List[Statement]:
        """
        Parse a whole program.

        Returns:
            One statement per declaration, with an ErrorStatement in
            every slot that failed to parse
        """
        statements = []
        context = ParseContext()

        while not self.is_at_end():
            statements.append(self._declaration(context))

        logger.debug("Parsed %d declarations", len(statements))
        return statements

    def parse_expression(self) -> Optional[Expression]:
        """Parse a single expression, or return None after reporting an error."""
        try:
            return self._expression()
        except ParseError as error:
            self._report_parse_error(error)
            return None

    # Error handling

    def _report(self, line: int, message: str):
        self.reporter.report(line, message)

    def _report_parse_error(self, error: ParseError):
        self._report(error.line, str(error))

    @contextmanager
    def _nested(self, cost: int):
        """Charge `cost` frames of nesting, failing once `max_depth` would be exceeded."""
        if self._depth + cost > self.max_depth:
            raise create_nesting_error(self.peek())
        self._depth += cost
        try:
            yield
        finally:
            self._depth -= cost

    # Statements

    def _declaration(self, context: ParseContext) -> Statement:
        """Parse a declaration, recovering from syntax errors."""
        try:
            if self.match(TokenType.VAR):
                return self._var_declaration()
            return self._statement(context)

        except ParseError as error:
            self._report_parse_error(error)
            self.current = SyntaxErrorRecovery.synchronize(self.tokens, self.current)
            logger.debug("Recovered from %s (%s) on line %d, resuming at %s",
                         error.code, PARSER_ERROR_CODES.get(error.code, "unclassified"),
                         error.line, self.peek())
            return ErrorStatement(error.token, error.message)

    def _var_declaration(self) -> VarDeclaration:
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self._expression()

        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return VarDeclaration(name, initializer)

    def _statement(self, context: ParseContext) -> Statement:
        with self._nested(STATEMENT_COST):
            if self.match(TokenType.BREAK):
                return self._break_statement(context)
            if self.match(TokenType.FOR):
                return self._for_statement(context)
            if self.match(TokenType.IF):
                return self._if_statement(context)
            if self.match(TokenType.PRINT):
                return self._print_statement()
            if self.match(TokenType.WHILE):
                return self._while_statement(context)
            if self.match(TokenType.LEFT_BRACE):
                return BlockStatement(self._block(context))

            return self._expression_statement()

    def _break_statement(self, context: ParseContext) -> BreakStatement:
        keyword = self.previous()
        self.consume(TokenType.SEMICOLON, "Expect ';' after 'break'.")

        if not context.in_loop:
            self._report(keyword.line, format_token_error(keyword, "Illegal break statement."))

        return BreakStatement(keyword)

    def _for_statement(self, context: ParseContext) -> Statement:
        """Parse a C-style for loop and desugar it into a while loop."""
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self._var_declaration()
        else:
            initializer = self._expression_statement()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self._expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self._expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self._statement(context.enter_loop())

        if increment is not None:
            body = BlockStatement([body, ExpressionStatement(increment)])

        if condition is None:
            condition = Literal(True)
        loop = WhileStatement(condition, body)

        if initializer is not None:
            return BlockStatement([initializer, loop])
        return loop

    def _if_statement(self, context: ParseContext) -> IfStatement:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self._expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self._statement(context)
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self._statement(context)

        return IfStatement(condition, then_branch, else_branch)

    def _print_statement(self) -> PrintStatement:
        value = self._expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return PrintStatement(value)

    def _while_statement(self, context: ParseContext) -> WhileStatement:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self._expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")

        body = self._statement(context.enter_loop())
        return WhileStatement(condition, body)

    def _expression_statement(self) -> ExpressionStatement:
        expr = self._expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ExpressionStatement(expr)

    def _block(self, context: ParseContext) -> List[Statement]:
        statements = []

        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            statements.append(self._declaration(context))

        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    # Expressions, lowest precedence first

    def _expression(self) -> Expression:
        return self._comma()

    def _comma(self) -> Expression:
        expr = self._assignment()

        while self.match(TokenType.COMMA):
            operator = self.previous()
            right = self._assignment()
            expr = Binary(expr, operator, right)

        return expr

    def _assignment(self) -> Expression:
        expr = self._ternary()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            with self._nested(CHAIN_COST):
                value = self._assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value)

            # Not fatal: the rest of the statement is still parsed
            self._report(equals.line, "Invalid assignment target.")

        return expr

    def _ternary(self) -> Expression:
        expr = self._or()

        if self.match(TokenType.QUESTION):
            with self._nested(CHAIN_COST):
                then_branch = self._ternary()
                self.consume(TokenType.COLON,
                             "Expect ':' after then branch of conditional expression.")
                else_branch = self._ternary()
            return Ternary(expr, then_branch, else_branch)

        return expr

    def _or(self) -> Expression:
        expr = self._and()

        while self.match(TokenType.OR):
            operator = self.previous()
            right = self._and()
            expr = Logical(expr, operator, right)

        return expr

    def _and(self) -> Expression:
        expr = self._equality()

        while self.match(TokenType.AND):
            operator = self.previous()
            right = self._equality()
            expr = Logical(expr, operator, right)

        return expr

    def _equality(self) -> Expression:
        expr = self._comparison()

        while self.match(*EQUALITY_OPERATORS):
            operator = self.previous()
            right = self._comparison()
            expr = Binary(expr, operator, right)

        return expr

    def _comparison(self) -> Expression:
        expr = self._term()

        while self.match(*COMPARISON_OPERATORS):
            operator = self.previous()
            right = self._term()
            expr = Binary(expr, operator, right)

        return expr

    def _term(self) -> Expression:
        expr = self._factor()

        while self.match(*TERM_OPERATORS):
            operator = self.previous()
            right = self._factor()
            expr = Binary(expr, operator, right)

        return expr

    def _factor(self) -> Expression:
        expr = self._unary()

        while self.match(*FACTOR_OPERATORS):
            operator = self.previous()
            right = self._unary()
            expr = Binary(expr, operator, right)

        return expr

    def _unary(self) -> Expression:
        if self.match(*UNARY_OPERATORS):
            operator = self.previous()
            with self._nested(CHAIN_COST):
                operand = self._unary()
            return Unary(operator, operand)

        return self._primary()

    def _primary(self) -> Expression:
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)

        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().value)

        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())

        if self.match(TokenType.LEFT_PAREN):
            with self._nested(GROUPING_COST):
                expr = self._expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        if self.match(*MISPLACED_BINARY_OPERATORS):
            operator = self.previous()
            self._report(
                operator.line,
                f"Binary operator '{operator.lexeme}' not expected at the beginning of an expression."
            )
            # Skip the operator and parse what follows as the expression
            with self._nested(GROUPING_COST):
                return self._expression()

        raise create_expect_expression_error(self.peek())


def _scan(source: str, filename: str, reporter: DiagnosticSink):
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()
    for error in lexer.errors:
        reporter.report(error.line, error.diagnostic.message)
    return tokens


def parse_source(source: str, reporter: Optional[DiagnosticSink] = None,
                 filename: str = "<string>") -> List[Statement]:
    """
    Convenience function to scan and parse a whole program.

    Lexer errors are forwarded to the same reporter as parse errors.
    """
    reporter = reporter if reporter is not None else ErrorReporter()
    tokens = _scan(source, filename, reporter)
    return Parser(tokens, reporter).parse()


def parse_expression_source(source: str, reporter: Optional[DiagnosticSink] = None,
                            filename: str = "<repl>") -> Optional[Expression]:
    """Convenience function to scan and parse a single expression."""
    reporter = reporter if reporter is not None else ErrorReporter()
    tokens = _scan(source, filename, reporter)
    return Parser(tokens, reporter).parse_expression()
