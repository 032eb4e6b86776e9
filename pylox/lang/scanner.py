"""Lexical analysis for Lox. Turns source text into a list of Tokens terminated by an EOF token.

Errors (unexpected characters, unterminated strings) are reported to the session's ErrorHandler and scanning carries
on, so every lexical error in a source is surfaced in one pass.
"""

from pylox.lang.tokens import KEYWORDS, Token, TokenType


SINGLE = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
    "?": TokenType.QUESTION_MARK,
    ":": TokenType.COLON,
}

# char: (type if followed by "=", type otherwise)
DOUBLE = {
    "!": (TokenType.BANG_EQUAL, TokenType.BANG),
    "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": (TokenType.LESS_EQUAL, TokenType.LESS),
    ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
}


class Scanner:
    """Single-use scanner over source."""

    def __init__(self, source, error_handler):
        self.source = source
        self.error_handler = error_handler

        self.tokens = []
        self._start = 0
        self._current = 0
        self._line = 1

    def scan_tokens(self):
        """Scans the whole source and returns the token list."""
        while not self._is_at_end():
            self._start = self._current
            self._scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self._line))
        return self.tokens

    def _scan_token(self):
        char = self._advance()

        if char in SINGLE:
            self._add_token(SINGLE[char])
        elif char in DOUBLE:
            if_equal, otherwise = DOUBLE[char]
            self._add_token(if_equal if self._match("=") else otherwise)
        elif char == "/":
            if self._match("/"):
                while self._peek() != "\n" and not self._is_at_end():
                    self._advance()
            elif self._match("*"):
                self._block_comment()
            else:
                self._add_token(TokenType.SLASH)
        elif char in " \r\t":
            pass
        elif char == "\n":
            self._line += 1
        elif char == "\"":
            self._string()
        elif self._is_digit(char):
            self._number()
        elif self._is_alpha(char):
            self._identifier()
        else:
            self.error_handler.error(self._line, "Unexpected character.")

    def _block_comment(self):
        """Skips a /* ... */ comment. Block comments do not nest."""
        while not self._is_at_end():
            if self._peek() == "*" and self._peek_next() == "/":
                self._current += 2
                return
            if self._peek() == "\n":
                self._line += 1
            self._advance()

    def _string(self):
        while self._peek() != "\"" and not self._is_at_end():
            if self._peek() == "\n":
                self._line += 1
            self._advance()

        if self._is_at_end():
            self.error_handler.error(self._line, "Unterminated string.")
            return

        self._advance()  # closing "
        self._add_token(TokenType.STRING, self.source[self._start + 1:self._current - 1])

    def _number(self):
        while self._is_digit(self._peek()):
            self._advance()

        # a trailing "." is left for the next token
        if self._peek() == "." and self._is_digit(self._peek_next()):
            self._advance()
            while self._is_digit(self._peek()):
                self._advance()

        self._add_token(TokenType.NUMBER, float(self.source[self._start:self._current]))

    def _identifier(self):
        while self._is_alphanumeric(self._peek()):
            self._advance()

        text = self.source[self._start:self._current]
        self._add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    @staticmethod
    def _is_digit(char):
        return "0" <= char <= "9"

    @staticmethod
    def _is_alpha(char):
        return ("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_"

    @staticmethod
    def _is_alphanumeric(char):
        return Scanner._is_digit(char) or Scanner._is_alpha(char)

    def _match(self, expected):
        if self._is_at_end() or self.source[self._current] != expected:
            return False
        self._current += 1
        return True

    def _peek(self):
        return "\0" if self._is_at_end() else self.source[self._current]

    def _peek_next(self):
        if self._current + 1 >= len(self.source):
            return "\0"
        return self.source[self._current + 1]

    def _advance(self):
        char = self.source[self._current]
        self._current += 1
        return char

    def _is_at_end(self):
        return self._current >= len(self.source)

    def _add_token(self, token_type, literal=None):
        text = self.source[self._start:self._current]
        self.tokens.append(Token(token_type, text, literal, self._line))
