"""
Test suite for the Lox lexer.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from lox.lexer import Lexer, TokenType, LexerError, tokenize_string


def _types(source: str):
    return [token.type for token in Lexer(source).tokenize()]


class TestLexer(unittest.TestCase):

    def test_declaration(self):
        tokens = Lexer("var x = 1.5;").tokenize()
        self.assertEqual([t.type for t in tokens], [
            TokenType.VAR, TokenType.IDENTIFIER, TokenType.EQUAL,
            TokenType.NUMBER, TokenType.SEMICOLON, TokenType.EOF,
        ])
        self.assertEqual(tokens[3].value, 1.5)
        self.assertEqual(tokens[1].lexeme, "x")

    def test_one_and_two_character_operators(self):
        self.assertEqual(_types("!= == <= >= ! = < >")[:-1], [
            TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL,
            TokenType.LESS_EQUAL, TokenType.GREATER_EQUAL,
            TokenType.BANG, TokenType.EQUAL, TokenType.LESS, TokenType.GREATER,
        ])

    def test_punctuation(self):
        self.assertEqual(_types("(){},.-+;/*?:")[:-1], [
            TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN,
            TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
            TokenType.COMMA, TokenType.DOT, TokenType.MINUS, TokenType.PLUS,
            TokenType.SEMICOLON, TokenType.SLASH, TokenType.STAR,
            TokenType.QUESTION, TokenType.COLON,
        ])

    def test_keywords(self):
        self.assertEqual(_types("and or nil true false break while")[:-1], [
            TokenType.AND, TokenType.OR, TokenType.NIL, TokenType.TRUE,
            TokenType.FALSE, TokenType.BREAK, TokenType.WHILE,
        ])

    def test_identifier_with_keyword_prefix(self):
        tokens = Lexer("orchid _under2").tokenize()
        self.assertEqual(tokens[0].type, TokenType.IDENTIFIER)
        self.assertEqual(tokens[1].type, TokenType.IDENTIFIER)

    def test_numbers_are_floats(self):
        token = Lexer("42").tokenize()[0]
        self.assertIsInstance(token.value, float)
        self.assertEqual(token.value, 42.0)

    def test_trailing_dot_is_separate(self):
        self.assertEqual(_types("1.")[:-1], [TokenType.NUMBER, TokenType.DOT])

    def test_strings_span_lines(self):
        tokens = Lexer('"a\nb" x').tokenize()
        self.assertEqual(tokens[0].value, "a\nb")
        self.assertEqual(tokens[0].line, 1)
        self.assertEqual(tokens[1].line, 2)

    def test_comments_are_skipped(self):
        self.assertEqual(_types("// nothing here\nprint 1; // trailing")[:-1], [
            TokenType.PRINT, TokenType.NUMBER, TokenType.SEMICOLON,
        ])

    def test_slash_is_not_a_comment(self):
        self.assertEqual(_types("a / b")[1], TokenType.SLASH)

    def test_line_numbers(self):
        tokens = Lexer("a\n\nb").tokenize()
        self.assertEqual([t.line for t in tokens[:2]], [1, 3])

    def test_eof_always_present(self):
        self.assertEqual(_types(""), [TokenType.EOF])
        self.assertEqual(_types("   \n\t"), [TokenType.EOF])


class TestLexerErrors(unittest.TestCase):

    def test_unexpected_character_is_collected(self):
        lexer = Lexer("a @ b")
        tokens = lexer.tokenize()
        self.assertTrue(lexer.has_errors())
        self.assertEqual(lexer.errors[0].message, "Unexpected character.")
        self.assertEqual([t.lexeme for t in tokens[:-1]], ["a", "b"])
        self.assertEqual(tokens[-1].type, TokenType.EOF)

    def test_unterminated_string(self):
        lexer = Lexer('print "oops\n')
        lexer.tokenize()
        self.assertEqual(len(lexer.errors), 1)
        self.assertEqual(str(lexer.errors[0]), "[line 2] Error: Unterminated string.")

    def test_non_ascii_identifier_is_rejected(self):
        lexer = Lexer("é")
        lexer.tokenize()
        self.assertTrue(lexer.has_errors())

    def test_tokenize_string_raises_first_error(self):
        with self.assertRaises(LexerError) as ctx:
            tokenize_string("# $")
        self.assertEqual(ctx.exception.line, 1)


if __name__ == '__main__':
    unittest.main()
