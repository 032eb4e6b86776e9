import io
import unittest

from pylox.lang.error import ErrorHandler
from pylox.lang.scanner import Scanner
from pylox.lang.tokens import TokenType


def scan(source):
    error_handler = ErrorHandler(stream=io.StringIO(), fatal=False)
    return Scanner(source, error_handler).scan_tokens(), error_handler


class ScannerTestCase(unittest.TestCase):

    def test_operators(self):
        cases = {
            "!= == <= >=": [TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL, TokenType.LESS_EQUAL, TokenType.GREATER_EQUAL],
            "! = < >": [TokenType.BANG, TokenType.EQUAL, TokenType.LESS, TokenType.GREATER],
            "!!=": [TokenType.BANG, TokenType.BANG_EQUAL],
            "(){},.-+;*/": [TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
                            TokenType.COMMA, TokenType.DOT, TokenType.MINUS, TokenType.PLUS, TokenType.SEMICOLON,
                            TokenType.STAR, TokenType.SLASH],
            "a ? b : c": [TokenType.IDENTIFIER, TokenType.QUESTION_MARK, TokenType.IDENTIFIER, TokenType.COLON,
                          TokenType.IDENTIFIER],
        }
        for case, expected in cases.items():
            tokens, __ = scan(case)
            self.assertEqual(expected + [TokenType.EOF], [token.type for token in tokens], case)

    def test_numbers(self):
        cases = {
            "123": [123.0],
            "45.67": [45.67],
            "0.5 10": [0.5, 10.0],
        }
        for case, expected in cases.items():
            tokens, __ = scan(case)
            self.assertEqual(expected, [token.literal for token in tokens if token.type == TokenType.NUMBER], case)

    def test_trailing_dot(self):
        tokens, __ = scan("8.")
        self.assertEqual([TokenType.NUMBER, TokenType.DOT, TokenType.EOF], [token.type for token in tokens])
        self.assertEqual("8", tokens[0].lexeme)

    def test_strings(self):
        tokens, error_handler = scan("\"hello world\" \"\"")
        self.assertEqual(["hello world", ""], [token.literal for token in tokens[:-1]])
        self.assertFalse(error_handler.had_error)

    def test_multiline_string(self):
        tokens, __ = scan("\"a\nb\" x")
        self.assertEqual("a\nb", tokens[0].literal)
        self.assertEqual(2, tokens[1].line)

    def test_keywords(self):
        cases = {
            "or": TokenType.OR,
            "orchid": TokenType.IDENTIFIER,
            "class": TokenType.CLASS,
            "_class": TokenType.IDENTIFIER,
            "super": TokenType.SUPER,
            "nil": TokenType.NIL,
            "var1": TokenType.IDENTIFIER,
        }
        for case, expected in cases.items():
            tokens, __ = scan(case)
            self.assertEqual(expected, tokens[0].type, case)

    def test_comments(self):
        tokens, __ = scan("// line comment\n/* block\n comment */ x / y")
        self.assertEqual([TokenType.IDENTIFIER, TokenType.SLASH, TokenType.IDENTIFIER, TokenType.EOF],
                         [token.type for token in tokens])
        self.assertEqual(3, tokens[0].line)

    def test_block_comments_do_not_nest(self):
        tokens, __ = scan("/* outer /* inner */ x */")
        self.assertEqual([TokenType.IDENTIFIER, TokenType.STAR, TokenType.SLASH, TokenType.EOF],
                         [token.type for token in tokens])

    def test_unexpected_characters(self):
        tokens, error_handler = scan("@ var\n#")
        self.assertEqual([TokenType.VAR, TokenType.EOF], [token.type for token in tokens])
        self.assertEqual(["[line 1] Error: Unexpected character.", "[line 2] Error: Unexpected character."],
                         error_handler.messages)
        self.assertTrue(error_handler.had_error)

    def test_unterminated_string(self):
        tokens, error_handler = scan("print \"abc")
        self.assertEqual([TokenType.PRINT, TokenType.EOF], [token.type for token in tokens])
        self.assertEqual(["[line 1] Error: Unterminated string."], error_handler.messages)


if __name__ == '__main__':
    unittest.main()
