"""
Defines the abstract syntax tree (AST) produced by the MonCow parser.

The node set is closed: four statement variants and seven expression variants,
plus the `Program` root. `Statement` and `Expression` are unions over those
variants, so a consumer can dispatch on them exhaustively.

Every node keeps the Token it was built from, for its literal text and source
position only. Node equality is structural: tokens take no part in it.

Each node renders to a canonical single-line string via `str(node)`. Infix and
prefix expressions render fully parenthesized with no whitespace, e.g.
`(a+(b*c))` and `((-a)*b)`; tests and diagnostics compare trees by that form.

Classes:
    Node: Base class with `token_literal()` and `to_dict()`.
    Program: Root node owning the top-level statements.
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement
    Identifier, IntegerLiteral, FloatLiteral, Boolean,
    PrefixExpression, InfixExpression, IfExpression

    ASTDict:
        TypedDict shape of a serialized node, suitable for JSON output.

Example:
    >>> tok = Token(TokenType.IDENT, "x", 1, 1)
    >>> str(Identifier(tok, "x"))
    'x'
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, TypedDict, Union

from moncow.moncow_token import Token


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of a serialized node.

    Fields:
        kind (str): The node class name (e.g. "InfixExpression").
        line (int): Line of the node's originating token.
        col (int): Column of the node's originating token.

    The variant's own fields follow, with child nodes serialized recursively
    and lists of statements serialized element-wise.
    """

    kind: str
    line: int
    col: int


def _serialize(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    return value


@dataclass
class Node:
    """Base class for every AST node.

    Attributes:
        token (Token): The token this node was built from. Excluded from
            equality and repr.
    """

    token: Token = field(compare=False, repr=False)

    def token_literal(self) -> str:
        return self.token.literal

    def to_dict(self) -> ASTDict:
        """Converts this node and all descendants into plain dicts."""
        data: dict[str, Any] = {
            "kind": type(self).__name__,
            "line": self.token.line,
            "col": self.token.col,
        }
        for f in fields(self):
            if f.name == "token":
                continue
            data[f.name] = _serialize(getattr(self, f.name))
        return data  # type: ignore[return-value]


# Expressions


@dataclass
class Identifier(Node):
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class IntegerLiteral(Node):
    value: int

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class FloatLiteral(Node):
    value: float

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class Boolean(Node):
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class PrefixExpression(Node):
    """Unary operator applied to one operand, e.g. `-a` or `!ok`."""

    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Node):
    """Binary operator applied to two operands, e.g. `a + b`."""

    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left}{self.operator}{self.right})"


@dataclass
class IfExpression(Node):
    """`if (condition) { ... }` with an optional `else { ... }` branch."""

    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self) -> str:
        out = f"if {self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


# Statements


@dataclass
class LetStatement(Node):
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass
class ReturnStatement(Node):
    value: Expression | None = None

    def __str__(self) -> str:
        if self.value is None:
            return f"{self.token_literal()};"
        return f"{self.token_literal()} {self.value};"


@dataclass
class ExpressionStatement(Node):
    """A bare expression used as a statement; renders as the expression alone."""

    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass
class BlockStatement(Node):
    """Brace-delimited statement sequence used as an `if`/`else` body."""

    statements: list[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return "{" + " ".join(str(s) for s in self.statements) + "}"


@dataclass
class Program:
    """Root of a parsed source text.

    Attributes:
        statements (list[Statement]): Top-level statements in source order.
    """

    statements: list[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "Program",
            "statements": [s.to_dict() for s in self.statements],
        }

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


Expression = Union[
    Identifier,
    IntegerLiteral,
    FloatLiteral,
    Boolean,
    PrefixExpression,
    InfixExpression,
    IfExpression,
]

Statement = Union[
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    BlockStatement,
]


__all__ = [
    "ASTDict",
    "BlockStatement",
    "Boolean",
    "Expression",
    "ExpressionStatement",
    "FloatLiteral",
    "Identifier",
    "IfExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
]
