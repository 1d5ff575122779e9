"""
Test suite for Lox statement parsing.

Tests cover:
- Declarations, print, expression and block statements
- if/else (including the dangling else) and while loops
- Desugaring of for loops into while loops
- Loop context for break statements

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from lox.parser import (
    ErrorReporter, AstPrinter, ParseContext, parse_source,
    ExpressionStatement, PrintStatement, VarDeclaration, BlockStatement,
    IfStatement, WhileStatement, BreakStatement, ErrorStatement,
    Literal, Assign
)


class StatementTestCase(unittest.TestCase):
    """Shared helpers for statement tests."""

    def setUp(self):
        self.reporter = ErrorReporter()
        self.printer = AstPrinter()

    def _parse(self, source: str):
        return parse_source(source, self.reporter)

    def _dump(self, source: str):
        return [self.printer.print(stmt) for stmt in self._parse(source)]

    def assertParsesTo(self, source: str, *expected: str):
        self.assertEqual(self._dump(source), list(expected))
        self.assertFalse(self.reporter.had_error, f"Unexpected errors: {self.reporter.messages}")


class TestSimpleStatements(StatementTestCase):

    def test_empty_program(self):
        self.assertEqual(self._parse(""), [])
        self.assertEqual(self._parse("// only a comment\n"), [])
        self.assertFalse(self.reporter.had_error)

    def test_var_declaration(self):
        self.assertParsesTo("var x = 1;", "(var x 1)")
        self.assertParsesTo("var y;", "(var y)")

    def test_var_declaration_node(self):
        stmt, = self._parse("var greeting = \"hi\";")
        self.assertIsInstance(stmt, VarDeclaration)
        self.assertEqual(stmt.name.lexeme, "greeting")
        self.assertEqual(stmt.initializer.value, "hi")

    def test_print_statement(self):
        self.assertParsesTo("print 1 + 2;", "(print (+ 1 2))")

    def test_expression_statement(self):
        self.assertParsesTo("x = 3;", "(; (= x 3))")

    def test_comma_expression_statement(self):
        self.assertParsesTo("a, b;", "(; (, a b))")

    def test_multiple_statements(self):
        self.assertParsesTo(
            "var a = 1;\nprint a;\na = a * 2;",
            "(var a 1)", "(print a)", "(; (= a (* a 2)))"
        )

    def test_block(self):
        self.assertParsesTo("{ var a = 1; print a; }", "(block (var a 1) (print a))")

    def test_empty_and_nested_blocks(self):
        self.assertParsesTo("{ { } }", "(block (block))")

    def test_block_children_know_their_parent(self):
        block, = self._parse("{ print 1; }")
        self.assertIs(block.statements[0].parent, block)


class TestConditionals(StatementTestCase):

    def test_if_without_else(self):
        stmt, = self._parse("if (a) print 1;")
        self.assertIsInstance(stmt, IfStatement)
        self.assertIsNone(stmt.else_branch)

    def test_if_else(self):
        self.assertParsesTo("if (a) print 1; else print 2;", "(if a (print 1) (print 2))")

    def test_dangling_else_binds_to_nearest_if(self):
        stmt, = self._parse("if (a) if (b) print 1; else print 2;")
        self.assertIsNone(stmt.else_branch)
        self.assertIsInstance(stmt.then_branch, IfStatement)
        self.assertIsNotNone(stmt.then_branch.else_branch)
        self.assertEqual(self.printer.print(stmt), "(if a (if b (print 1) (print 2)))")

    def test_missing_paren_after_if(self):
        self.assertEqual(self._dump("if a) print 1;"), ["(error)", "(print 1)"])
        self.assertEqual(self.reporter.messages, ["Error at 'a': Expect '(' after 'if'."])

    def test_missing_paren_after_if_condition(self):
        self._parse("if (a print 1;")
        self.assertEqual(self.reporter.messages, ["Error at 'print': Expect ')' after if condition."])


class TestWhileLoops(StatementTestCase):

    def test_while(self):
        self.assertParsesTo("while (i < 3) i = i + 1;", "(while (< i 3) (; (= i (+ i 1))))")

    def test_while_with_block_body(self):
        stmt, = self._parse("while (true) { print 1; }")
        self.assertIsInstance(stmt, WhileStatement)
        self.assertIsInstance(stmt.body, BlockStatement)

    def test_missing_paren_after_while_condition(self):
        self._parse("while (x print x;")
        self.assertEqual(self.reporter.messages, ["Error at 'print': Expect ')' after condition."])


class TestForLoops(StatementTestCase):
    """for loops come back as equivalent while loops."""

    def test_full_for_loop(self):
        self.assertParsesTo(
            "for (var i = 0; i < 3; i = i + 1) print i;",
            "(block (var i 0) (while (< i 3) (block (print i) (; (= i (+ i 1))))))"
        )

    def test_full_for_loop_structure(self):
        outer, = self._parse("for (var i = 0; i < 3; i = i + 1) print i;")
        self.assertIsInstance(outer, BlockStatement)
        initializer, loop = outer.statements
        self.assertIsInstance(initializer, VarDeclaration)
        self.assertEqual(initializer.name.lexeme, "i")
        self.assertIsInstance(loop, WhileStatement)
        self.assertIsInstance(loop.body, BlockStatement)
        body, increment = loop.body.statements
        self.assertIsInstance(body, PrintStatement)
        self.assertIsInstance(increment, ExpressionStatement)
        self.assertIsInstance(increment.expression, Assign)

    def test_empty_clauses(self):
        stmt, = self._parse("for (;;) break;")
        self.assertIsInstance(stmt, WhileStatement)
        self.assertIsInstance(stmt.condition, Literal)
        self.assertIs(stmt.condition.value, True)
        self.assertIsInstance(stmt.body, BreakStatement)
        self.assertFalse(self.reporter.had_error)

    def test_condition_only(self):
        self.assertParsesTo("for (; i < 3;) print i;", "(while (< i 3) (print i))")

    def test_expression_initializer(self):
        self.assertParsesTo(
            "for (i = 0; i < 1;) print i;",
            "(block (; (= i 0)) (while (< i 1) (print i)))"
        )

    def test_increment_only(self):
        self.assertParsesTo("for (;; i = i + 1) print i;",
                            "(while true (block (print i) (; (= i (+ i 1)))))")

    def test_missing_paren_after_for(self):
        self.assertEqual(self._dump("for var i = 0;"), ["(error)"])
        self.assertEqual(self.reporter.messages, ["Error at 'var': Expect '(' after 'for'."])

    def test_missing_semicolon_after_condition(self):
        self._parse("for (; i < 3) print i;")
        self.assertEqual(self.reporter.messages,
                         ["Error at ')': Expect ';' after loop condition."])

    def test_missing_close_paren_after_clauses(self):
        self._parse("for (;; i = i + 1 print i;")
        self.assertEqual(self.reporter.messages,
                         ["Error at 'print': Expect ')' after for clauses."])


class TestBreak(StatementTestCase):

    def test_break_outside_loop_is_reported(self):
        statements = self._parse("break;")
        self.assertEqual(len(statements), 1)
        self.assertIsInstance(statements[0], BreakStatement)
        self.assertEqual(self.reporter.messages, ["Error at 'break': Illegal break statement."])

    def test_break_inside_while(self):
        self.assertParsesTo("while (true) break;", "(while true (break))")

    def test_break_inside_nested_block_and_if(self):
        self._parse("while (true) { if (x) break; else { break; } }")
        self.assertFalse(self.reporter.had_error)

    def test_break_inside_for(self):
        self._parse("for (var i = 0; i < 10; i = i + 1) { if (i > 5) break; }")
        self.assertFalse(self.reporter.had_error)

    def test_loop_context_ends_with_loop_body(self):
        statements = self._parse("while (true) print 1; break;")
        self.assertEqual(len(statements), 2)
        self.assertEqual(len(self.reporter.diagnostics), 1)
        self.assertEqual(self.reporter.messages[0], "Error at 'break': Illegal break statement.")

    def test_break_in_if_outside_loop(self):
        self._parse("if (x) break;")
        self.assertEqual(self.reporter.messages, ["Error at 'break': Illegal break statement."])

    def test_break_line_is_reported(self):
        self._parse("print 1;\n\nbreak;")
        self.assertEqual(self.reporter.diagnostics[0].line, 3)

    def test_missing_semicolon_is_fatal(self):
        statements = self._parse("while (true) break")
        self.assertIsInstance(statements[0], ErrorStatement)
        self.assertEqual(self.reporter.messages, ["Error at end: Expect ';' after 'break'."])


class TestParseContext(unittest.TestCase):

    def test_default_context_is_outside_loop(self):
        self.assertFalse(ParseContext().in_loop)

    def test_enter_loop_returns_new_context(self):
        outer = ParseContext()
        inner = outer.enter_loop()
        self.assertTrue(inner.in_loop)
        self.assertFalse(outer.in_loop)
        self.assertEqual(inner.enter_loop().loop_depth, 2)


if __name__ == '__main__':
    unittest.main()
