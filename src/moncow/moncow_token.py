"""
Token vocabulary for the MonCow language.

Classes:
    TokenType: Closed enumeration of every token kind the lexer can produce.
    Token: Immutable (kind, literal) value with its source position.

Functions:
    lookup_ident(ident: str) -> TokenType:
        Resolves a scanned word against the keyword table, falling back to IDENT.

Exports:
    - TokenType
    - Token
    - KEYWORDS
    - lookup_ident
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class TokenType(str, Enum):
    """Every kind of token in MonCow.

    Member values double as display names in parser diagnostics: operators and
    delimiters display as their symbol, everything else as its upper-case name.
    """

    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers and literals
    IDENT = "IDENT"
    INT = "INT"
    FLOAT = "FLOAT"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    ASTERISK = "*"
    SLASH = "/"
    BANG = "!"

    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"

    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # Keywords
    LET = "LET"
    FUNCTION = "FUNCTION"
    RETURN = "RETURN"
    IF = "IF"
    ELSE = "ELSE"
    TRUE = "TRUE"
    FALSE = "FALSE"

    def __str__(self) -> str:
        return self.value


KEYWORDS: MappingProxyType[str, TokenType] = MappingProxyType(
    {
        "let": TokenType.LET,
        "fn": TokenType.FUNCTION,
        "return": TokenType.RETURN,
        "if": TokenType.IF,
        "else": TokenType.ELSE,
        "true": TokenType.TRUE,
        "false": TokenType.FALSE,
    }
)


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        type (TokenType): The token kind.
        literal (str): The exact source text (empty for EOF).
        line (int): 1-based line of the token's first character.
        col (int): 1-based column of the token's first character.

    Equality and hashing use only `type` and `literal`.
    """

    type: TokenType
    literal: str
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.literal!r})"


def lookup_ident(ident: str) -> TokenType:
    """Returns the keyword kind for `ident`, or IDENT if it is not reserved."""
    return KEYWORDS.get(ident, TokenType.IDENT)


__all__ = ["KEYWORDS", "Token", "TokenType", "lookup_ident"]
