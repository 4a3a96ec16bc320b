"""
Lexical analyzer for the MonCow programming language.

This module turns raw source text into tokens, one token per request:

Classes:
    CharacterStream: Code point cursor over the source with line/column tracking.
    Lexer: Pulls tokens out of a CharacterStream on demand.

Functions:
    tokenize(source: str) -> list[Token]:
        Lexes a whole source text, including the terminating EOF token.

Features:
    - Skips Unicode whitespace between tokens
    - Distinguishes `==`/`!=` from `=`/`!` with one character of lookahead
    - Recognizes:
        * Identifiers (Unicode letters, symbols and `_`) and keywords
        * Integer and float literals over Unicode digits
        * Single-character operators and delimiters
    - Unknown characters become ILLEGAL tokens; lexing never raises
    - Returns EOF forever once the source is exhausted

Example:
    >>> lexer = Lexer("let x = 5;")
    >>> lexer.next_token()
    Token(LET, 'let')
"""

import unicodedata
from collections.abc import Iterator

from moncow.moncow_token import Token, TokenType, lookup_ident

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "!": TokenType.BANG,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

# Checked before SINGLE_CHAR_TOKENS so `==` never lexes as two `=`.
DOUBLE_CHAR_TOKENS: dict[str, TokenType] = {
    "==": TokenType.EQ,
    "!=": TokenType.NOT_EQ,
}


def is_letter(ch: str) -> bool:
    """True for Unicode letters, Unicode symbols and `_`."""
    if ch == "_":
        return True
    return unicodedata.category(ch)[0] in ("L", "S")


def is_digit(ch: str) -> bool:
    """True for any Unicode number character."""
    return unicodedata.category(ch)[0] == "N"


# Information separators that str.isspace() accepts but Unicode White_Space does not.
NOT_WHITE_SPACE = frozenset("\x1c\x1d\x1e\x1f")


def is_whitespace(ch: str) -> bool:
    """True for Unicode White_Space characters."""
    return ch.isspace() and ch not in NOT_WHITE_SPACE


class CharacterStream:
    """
    Reads a source string one code point at a time, tracking line and column.

    Attributes:
        source (str): The input source string.
        position (int): Index of the current character.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the current character.

        Returns:
            str: The consumed character, or an empty string at end of source.
        """
        if self.position >= len(self.source):
            return ""
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character `offset` places past the cursor without consuming it.

        Returns:
            str: The character, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Lexer:
    """Lexical analyzer for MonCow.

    The lexer owns its cursor and knows only character classes, never syntax.
    Iterating a Lexer yields tokens up to, but not including, EOF.

    Attributes:
        stream (CharacterStream): The source cursor.
    """

    def __init__(self, source: str | CharacterStream) -> None:
        if isinstance(source, str):
            source = CharacterStream(source)
        self.stream = source

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            if tok.type == TokenType.EOF:
                return
            yield tok

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and is_whitespace(self.stream.peek()):
            self.stream.next()

    def read_identifier(self) -> str:
        ident = ""
        while not self.stream.end_of_file():
            ch = self.stream.peek()
            # `= + < >` are Unicode symbols but always end a run, so `(a+b)` re-lexes
            # as three tokens.
            if not is_letter(ch) or ch in SINGLE_CHAR_TOKENS:
                break
            ident += self.stream.next()
        return ident

    def read_digits(self) -> str:
        digits = ""
        while not self.stream.end_of_file() and is_digit(self.stream.peek()):
            digits += self.stream.next()
        return digits

    def read_number(self) -> tuple[str, bool]:
        """Reads a digit run with an optional `.` and fractional digit run.

        Returns:
            tuple[str, bool]: The literal text and whether a `.` was consumed.
        """
        literal = self.read_digits()
        if self.stream.peek() != ".":
            return literal, False
        literal += self.stream.next()
        literal += self.read_digits()
        return literal, True

    def next_token(self) -> Token:
        """Consumes and returns the next Token.

        Returns:
            Token: The next token; EOF on every call once the source is exhausted.
        """
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token(TokenType.EOF, "", line, col)

        ch = self.stream.peek()

        # 1. Operators and delimiters
        pair = ch + self.stream.peek(1)
        if pair in DOUBLE_CHAR_TOKENS:
            self.stream.next()
            self.stream.next()
            return Token(DOUBLE_CHAR_TOKENS[pair], pair, line, col)
        if ch in SINGLE_CHAR_TOKENS:
            self.stream.next()
            return Token(SINGLE_CHAR_TOKENS[ch], ch, line, col)

        # 2. Identifier or keyword
        if is_letter(ch):
            ident = self.read_identifier()
            return Token(lookup_ident(ident), ident, line, col)

        # 3. Integer or float
        if is_digit(ch):
            literal, has_dot = self.read_number()
            kind = TokenType.FLOAT if has_dot else TokenType.INT
            return Token(kind, literal, line, col)

        # 4. Anything else is carried forward as data
        return Token(TokenType.ILLEGAL, self.stream.next(), line, col)


def tokenize(source: str) -> list[Token]:
    """Lexes `source` completely; the last token is always EOF."""
    lexer = Lexer(source)
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == TokenType.EOF:
            break
    return tokens


__all__ = ["CharacterStream", "Lexer", "tokenize"]
