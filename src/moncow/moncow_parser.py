"""
MonCow Language Parser

Builds a `Program` AST from the token stream of a `Lexer`.

The parser is a Pratt (precedence-climbing) recursive-descent parser. Token
kinds that can start an expression are bound to prefix parse functions; token
kinds that can continue one are bound to infix parse functions. A single loop
in `parse_expression()` combines them under a precedence threshold, which
yields left-associative binary operators and the usual nesting of `*`/`/`
inside `+`/`-` without one grammar rule per level.

Supported Constructs
--------------------
- Statements:
    * `let <ident> = <expression>;`
    * `return [<expression>];`
    * `<expression>[;]`
- Expressions:
    * Identifiers, integer and float literals, `true`/`false`
    * Prefix `!` and `-`
    * Infix `+ - * / == != < >`
    * Grouping with `( ... )`
    * `if (<cond>) { ... } [else { ... }]`

Parser Behavior
---------------
- Pulls tokens lazily, holding exactly `current_token` and `peek_token`.
- Never raises on malformed input. Each grammar violation is appended to
  `errors` as a human-readable diagnostic, the offending statement is left out
  of the tree, and parsing resumes with the next token.
- Callers must check `errors`: an empty Program with no errors and a partial
  Program with errors are both valid results.

Entry Points
------------
- `Parser(lexer).parse_program()`: Parse a full program.
- `parse(source)`: Lex and parse a source string, returning the Program and
  the diagnostics.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import IntEnum
from types import MappingProxyType

from moncow.moncow_ast import (
    BlockStatement,
    Boolean,
    Expression,
    ExpressionStatement,
    FloatLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from moncow.moncow_lexer import Lexer
from moncow.moncow_token import Token, TokenType

logger = logging.getLogger(__name__)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -x or !x
    CALL = 7  # fn(x), not parsed yet


PRECEDENCES: MappingProxyType[TokenType, Precedence] = MappingProxyType(
    {
        TokenType.EQ: Precedence.EQUALS,
        TokenType.NOT_EQ: Precedence.EQUALS,
        TokenType.LT: Precedence.LESSGREATER,
        TokenType.GT: Precedence.LESSGREATER,
        TokenType.PLUS: Precedence.SUM,
        TokenType.MINUS: Precedence.SUM,
        TokenType.ASTERISK: Precedence.PRODUCT,
        TokenType.SLASH: Precedence.PRODUCT,
    }
)

PrefixParseFn = Callable[[], Expression | None]
InfixParseFn = Callable[[Expression], Expression | None]


class Parser:
    """
    MonCow Parser Class

    Attributes
    ----------
    lexer : Lexer
        Source of tokens, read one token at a time.
    current_token : Token
        The token under examination.
    peek_token : Token
        The token after `current_token`.
    errors : list[str]
        Diagnostics collected so far, in the order they were found.
    prefix_parse_fns : dict[TokenType, PrefixParseFn]
        Handlers for token kinds that can start an expression.
    infix_parse_fns : dict[TokenType, InfixParseFn]
        Handlers for token kinds that can continue an expression.

    Methods
    -------
    parse_program() -> Program
        Parse statements until EOF.
    parse_statement() -> Statement | None
        Parse one `let`, `return` or expression statement.
    parse_expression(precedence) -> Expression | None
        Parse an expression whose operators all bind tighter than `precedence`.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.errors: list[str] = []

        self.current_token: Token = Token(TokenType.EOF, "")
        self.peek_token: Token = Token(TokenType.EOF, "")
        # Read two tokens so current_token and peek_token are both set
        self.next_token()
        self.next_token()

        self.prefix_parse_fns: dict[TokenType, PrefixParseFn] = {
            TokenType.IDENT: self.parse_identifier,
            TokenType.INT: self.parse_integer_literal,
            TokenType.FLOAT: self.parse_float_literal,
            TokenType.TRUE: self.parse_boolean,
            TokenType.FALSE: self.parse_boolean,
            TokenType.BANG: self.parse_prefix_expression,
            TokenType.MINUS: self.parse_prefix_expression,
            TokenType.LPAREN: self.parse_grouped_expression,
            TokenType.IF: self.parse_if_expression,
        }

        self.infix_parse_fns: dict[TokenType, InfixParseFn] = {
            TokenType.PLUS: self.parse_infix_expression,
            TokenType.MINUS: self.parse_infix_expression,
            TokenType.ASTERISK: self.parse_infix_expression,
            TokenType.SLASH: self.parse_infix_expression,
            TokenType.EQ: self.parse_infix_expression,
            TokenType.NOT_EQ: self.parse_infix_expression,
            TokenType.LT: self.parse_infix_expression,
            TokenType.GT: self.parse_infix_expression,
        }

    # Token window

    def next_token(self) -> None:
        self.current_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def current_token_is(self, kind: TokenType) -> bool:
        return self.current_token.type == kind

    def peek_token_is(self, kind: TokenType) -> bool:
        return self.peek_token.type == kind

    def expect_peek(self, kind: TokenType) -> bool:
        """Advances onto the peek token, reporting whether it had kind `kind`.

        The window moves even on a mismatch so a bad token is always consumed.
        """
        ok = self.peek_token_is(kind)
        if not ok:
            self.peek_error(kind)
        self.next_token()
        return ok

    def skip_optional_semicolon(self) -> None:
        """Steps onto a `;` in peek position so it does not start a statement."""
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def current_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.current_token.type, Precedence.LOWEST)

    # Diagnostics

    def peek_error(self, kind: TokenType) -> None:
        self.errors.append(
            f"expected token type {kind.value}, got {self.peek_token.type.value} instead"
        )

    def no_prefix_parse_fn_error(self, kind: TokenType) -> None:
        self.errors.append(f"no prefix parse function found for {kind.value}")

    # Statements

    def parse_program(self) -> Program:
        """Parse every statement up to EOF into a Program."""
        program = Program()
        while not self.current_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                logger.debug("Parsed statement %r", str(stmt))
                program.statements.append(stmt)
            self.next_token()
        return program

    def parse_statement(self) -> Statement | None:
        logger.debug(
            "Parsing statement beginning %s at %d:%d",
            self.current_token.type.value,
            self.current_token.line,
            self.current_token.col,
        )
        if self.current_token_is(TokenType.LET):
            return self.parse_let_statement()
        if self.current_token_is(TokenType.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        """Parse `let <ident> = <expression>;`."""
        let_tok = self.current_token

        if not self.expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.current_token, self.current_token.literal)

        if not self.expect_peek(TokenType.ASSIGN):
            return None
        self.next_token()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            self.skip_optional_semicolon()
            return None
        if not self.expect_peek(TokenType.SEMICOLON):
            return None
        return LetStatement(let_tok, name, value)

    def parse_return_statement(self) -> ReturnStatement | None:
        """Parse `return;` or `return <expression>;`."""
        ret_tok = self.current_token

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
            return ReturnStatement(ret_tok)
        self.next_token()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            self.skip_optional_semicolon()
            return None
        if not self.expect_peek(TokenType.SEMICOLON):
            return None
        return ReturnStatement(ret_tok, value)

    def parse_expression_statement(self) -> ExpressionStatement | None:
        stmt_tok = self.current_token
        expression = self.parse_expression(Precedence.LOWEST)
        self.skip_optional_semicolon()
        if expression is None:
            return None
        return ExpressionStatement(stmt_tok, expression)

    def parse_block_statement(self) -> BlockStatement | None:
        """Parse `{ <statement>* }`, leaving `current_token` on the `}`."""
        block = BlockStatement(self.current_token)
        self.next_token()

        while not self.current_token_is(TokenType.RBRACE):
            if self.current_token_is(TokenType.EOF):
                self.errors.append(
                    f"expected token type {TokenType.RBRACE.value}, "
                    f"got {TokenType.EOF.value} instead"
                )
                return None
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self.next_token()
        return block

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        prefix = self.prefix_parse_fns.get(self.current_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.current_token.type)
            return None
        left = prefix()

        while (
            left is not None
            and not self.peek_token_is(TokenType.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.current_token, self.current_token.literal)

    def parse_integer_literal(self) -> Expression | None:
        """Convert the literal the way a base-0 int64 parse does.

        A leading `0` followed by more digits selects octal, so `010` is 8 and
        `09` is an error. Only ASCII digits convert.
        """
        literal = self.current_token.literal
        base = 8 if len(literal) > 1 and literal.startswith("0") else 10
        value = None
        if literal.isascii() and literal.isdigit():
            try:
                value = int(literal, base)
            except ValueError:
                value = None
        if value is None or not INT64_MIN <= value <= INT64_MAX:
            self.errors.append(f"could not parse {literal!r} as integer")
            return None
        return IntegerLiteral(self.current_token, value)

    def parse_float_literal(self) -> Expression | None:
        literal = self.current_token.literal
        value = None
        if literal.isascii():
            try:
                value = float(literal)
            except ValueError:
                value = None
        if value is None:
            self.errors.append(f"could not parse {literal!r} as float")
            return None
        return FloatLiteral(self.current_token, value)

    def parse_boolean(self) -> Expression:
        return Boolean(self.current_token, self.current_token_is(TokenType.TRUE))

    def parse_prefix_expression(self) -> Expression | None:
        """Parse `!x` or `-x`; the operand binds at PREFIX precedence."""
        op_tok = self.current_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(op_tok, op_tok.literal, right)

    def parse_infix_expression(self, left: Expression) -> Expression | None:
        op_tok = self.current_token
        precedence = self.current_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(op_tok, left, op_tok.literal, right)

    def parse_grouped_expression(self) -> Expression | None:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Expression | None:
        """Parse `if (<cond>) { ... }` with an optional `else { ... }`."""
        if_tok = self.current_token

        if not self.expect_peek(TokenType.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(TokenType.RPAREN):
            return None

        if not self.expect_peek(TokenType.LBRACE):
            return None
        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            if not self.expect_peek(TokenType.LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(if_tok, condition, consequence, alternative)


def parse(source: str) -> tuple[Program, list[str]]:
    """Lex and parse `source`.

    Returns:
        tuple[Program, list[str]]: The (possibly partial) program and the
        diagnostics, in the order they were found.
    """
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors


__all__ = ["PRECEDENCES", "Parser", "Precedence", "parse"]
