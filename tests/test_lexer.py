import pytest
from hypothesis import given
from hypothesis import strategies as st

from moncow.moncow_lexer import CharacterStream, Lexer, is_whitespace, tokenize
from moncow.moncow_token import KEYWORDS, Token, TokenType, lookup_ident


def kinds_and_literals(source: str) -> list[tuple[TokenType, str]]:
    return [(tok.type, tok.literal) for tok in tokenize(source)]


def test_next_token() -> None:
    source = """let five = 5;
let ten = 10.5;
!-/*5 < 10 > 5;
5 == 5 != 4;
if (5 < 10) { return true; } else { return false; }
fn , @"""
    expected = [
        (TokenType.LET, "let"),
        (TokenType.IDENT, "five"),
        (TokenType.ASSIGN, "="),
        (TokenType.INT, "5"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.LET, "let"),
        (TokenType.IDENT, "ten"),
        (TokenType.ASSIGN, "="),
        (TokenType.FLOAT, "10.5"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.BANG, "!"),
        (TokenType.MINUS, "-"),
        (TokenType.SLASH, "/"),
        (TokenType.ASTERISK, "*"),
        (TokenType.INT, "5"),
        (TokenType.LT, "<"),
        (TokenType.INT, "10"),
        (TokenType.GT, ">"),
        (TokenType.INT, "5"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.INT, "5"),
        (TokenType.EQ, "=="),
        (TokenType.INT, "5"),
        (TokenType.NOT_EQ, "!="),
        (TokenType.INT, "4"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.IF, "if"),
        (TokenType.LPAREN, "("),
        (TokenType.INT, "5"),
        (TokenType.LT, "<"),
        (TokenType.INT, "10"),
        (TokenType.RPAREN, ")"),
        (TokenType.LBRACE, "{"),
        (TokenType.RETURN, "return"),
        (TokenType.TRUE, "true"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.RBRACE, "}"),
        (TokenType.ELSE, "else"),
        (TokenType.LBRACE, "{"),
        (TokenType.RETURN, "return"),
        (TokenType.FALSE, "false"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.RBRACE, "}"),
        (TokenType.FUNCTION, "fn"),
        (TokenType.COMMA, ","),
        (TokenType.ILLEGAL, "@"),
        (TokenType.EOF, ""),
    ]
    assert kinds_and_literals(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("=", [(TokenType.ASSIGN, "=")]),
        ("==", [(TokenType.EQ, "==")]),
        ("===", [(TokenType.EQ, "=="), (TokenType.ASSIGN, "=")]),
        ("!", [(TokenType.BANG, "!")]),
        ("!=", [(TokenType.NOT_EQ, "!=")]),
        ("!==", [(TokenType.NOT_EQ, "!="), (TokenType.ASSIGN, "=")]),
        ("= =", [(TokenType.ASSIGN, "="), (TokenType.ASSIGN, "=")]),
    ],
)  # type: ignore[misc]
def test_two_character_operators(
    source: str, expected: list[tuple[TokenType, str]]
) -> None:
    assert kinds_and_literals(source)[:-1] == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("12345", [(TokenType.INT, "12345")]),
        ("3.14", [(TokenType.FLOAT, "3.14")]),
        ("7.", [(TokenType.FLOAT, "7.")]),
        ("007", [(TokenType.INT, "007")]),
        ("1.2.3", [(TokenType.FLOAT, "1.2"), (TokenType.ILLEGAL, "."), (TokenType.INT, "3")]),
        (".5", [(TokenType.ILLEGAL, "."), (TokenType.INT, "5")]),
        ("١٢٣", [(TokenType.INT, "١٢٣")]),
        ("²", [(TokenType.INT, "²")]),
    ],
)  # type: ignore[misc]
def test_numeric_literals(source: str, expected: list[tuple[TokenType, str]]) -> None:
    assert kinds_and_literals(source)[:-1] == expected


def test_leading_sign_is_a_separate_token() -> None:
    assert kinds_and_literals("-5")[:-1] == [
        (TokenType.MINUS, "-"),
        (TokenType.INT, "5"),
    ]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("moo", [(TokenType.IDENT, "moo")]),
        ("snake_case", [(TokenType.IDENT, "snake_case")]),
        ("_", [(TokenType.IDENT, "_")]),
        ("π_λ", [(TokenType.IDENT, "π_λ")]),
        ("∑", [(TokenType.IDENT, "∑")]),
        ("x+y", [(TokenType.IDENT, "x"), (TokenType.PLUS, "+"), (TokenType.IDENT, "y")]),
        ("a<b", [(TokenType.IDENT, "a"), (TokenType.LT, "<"), (TokenType.IDENT, "b")]),
        ("a=b", [(TokenType.IDENT, "a"), (TokenType.ASSIGN, "="), (TokenType.IDENT, "b")]),
        ("(a>b)", [
            (TokenType.LPAREN, "("),
            (TokenType.IDENT, "a"),
            (TokenType.GT, ">"),
            (TokenType.IDENT, "b"),
            (TokenType.RPAREN, ")"),
        ]),
        ("a$b", [(TokenType.IDENT, "a$b")]),
        ("x1", [(TokenType.IDENT, "x"), (TokenType.INT, "1")]),
        ("letter", [(TokenType.IDENT, "letter")]),
        ("LET", [(TokenType.IDENT, "LET")]),
    ],
)  # type: ignore[misc]
def test_identifiers(source: str, expected: list[tuple[TokenType, str]]) -> None:
    assert kinds_and_literals(source)[:-1] == expected


@pytest.mark.parametrize("word,kind", list(KEYWORDS.items()))  # type: ignore[misc]
def test_keywords(word: str, kind: TokenType) -> None:
    assert lookup_ident(word) == kind
    assert kinds_and_literals(word)[0] == (kind, word)


def test_lookup_ident_falls_back_to_ident() -> None:
    assert lookup_ident("moo") == TokenType.IDENT


def test_unicode_whitespace_is_skipped() -> None:
    source = "a　b \tc\r\n"
    assert kinds_and_literals(source)[:-1] == [
        (TokenType.IDENT, "a"),
        (TokenType.IDENT, "b"),
        (TokenType.IDENT, "c"),
    ]


def test_illegal_character_is_data() -> None:
    tokens = tokenize("x ? y")
    assert tokens[1] == Token(TokenType.ILLEGAL, "?", 1, 3)
    assert (tokens[1].line, tokens[1].col) == (1, 3)


@pytest.mark.parametrize("ch", ["\x1c", "\x1d", "\x1e", "\x1f"])  # type: ignore[misc]
def test_information_separators_are_not_whitespace(ch: str) -> None:
    assert ch.isspace()
    assert not is_whitespace(ch)
    assert kinds_and_literals(f"a{ch}b")[:-1] == [
        (TokenType.IDENT, "a"),
        (TokenType.ILLEGAL, ch),
        (TokenType.IDENT, "b"),
    ]


@pytest.mark.parametrize(
    "ch", ["\x85", "\xa0", "\u1680", "\u2009", "\u2028", "\u2029", "\u202f", "\u3000"]
)  # type: ignore[misc]
def test_unicode_white_space(ch: str) -> None:
    assert is_whitespace(ch)
    assert kinds_and_literals(f"1{ch}2")[:-1] == [(TokenType.INT, "1"), (TokenType.INT, "2")]


def test_line_and_column_tracking() -> None:
    tokens = tokenize("let x\n  = 5;")
    assign = tokens[2]
    assert assign.type == TokenType.ASSIGN
    assert (assign.line, assign.col) == (2, 3)
    assert (tokens[0].line, tokens[0].col) == (1, 1)


def test_eof_is_idempotent() -> None:
    lexer = Lexer("x")
    assert lexer.next_token().type == TokenType.IDENT
    for _ in range(5):
        tok = lexer.next_token()
        assert tok.type == TokenType.EOF
        assert tok.literal == ""


def test_empty_source_is_eof() -> None:
    assert kinds_and_literals("") == [(TokenType.EOF, "")]
    assert kinds_and_literals("  \n\t ") == [(TokenType.EOF, "")]


def test_lexer_iteration_stops_before_eof() -> None:
    tokens = list(Lexer("let x = 1;"))
    assert [t.type for t in tokens] == [
        TokenType.LET,
        TokenType.IDENT,
        TokenType.ASSIGN,
        TokenType.INT,
        TokenType.SEMICOLON,
    ]


def test_lexer_accepts_character_stream() -> None:
    lexer = Lexer(CharacterStream("y", 0, 4, 7))
    tok = lexer.next_token()
    assert tok == Token(TokenType.IDENT, "y", 4, 7)
    assert (tok.line, tok.col) == (4, 7)


def test_character_stream_methods() -> None:
    stream = CharacterStream("ab\nc")
    assert stream.peek() == "a"
    assert stream.peek(1) == "b"
    assert stream.next() == "a"
    assert stream.next() == "b"
    assert stream.next() == "\n"
    assert (stream.line, stream.column) == (2, 1)
    assert not stream.end_of_file()
    assert stream.next() == "c"
    assert stream.end_of_file()
    assert stream.next() == ""
    assert stream.peek() == ""
    assert stream.peek(-10) == ""


def test_token_repr_and_eq() -> None:
    t1 = Token(TokenType.INT, "42", 1, 2)
    t2 = Token(TokenType.INT, "42", 1, 2)
    t3 = Token(TokenType.IDENT, "x")

    assert repr(t1) == "Token(INT, '42')"
    assert t1 == t2
    assert t1 != t3
    assert len({t1, t2, t3}) == 2


def test_token_equality_ignores_position() -> None:
    here = Token(TokenType.IDENT, "x", 1, 1)
    there = Token(TokenType.IDENT, "x", 7, 12)
    assert here == there
    assert hash(here) == hash(there)
    assert here != Token(TokenType.IDENT, "y", 1, 1)


def test_token_is_immutable() -> None:
    tok = Token(TokenType.INT, "1")
    with pytest.raises(AttributeError):
        tok.literal = "2"  # type: ignore[misc]


def test_token_type_displays_as_value() -> None:
    assert str(TokenType.NOT_EQ) == "!="
    assert str(TokenType.IDENT) == "IDENT"


@given(st.text(max_size=200))  # type: ignore[misc]
def test_lexer_does_not_crash_on_random_input(source: str) -> None:
    tokens = tokenize(source)
    assert tokens[-1].type == TokenType.EOF
    assert all(t.type != TokenType.EOF for t in tokens[:-1])
    assert len(tokens) <= len(source) + 1


@given(st.text(alphabet=st.characters(blacklist_categories=["Cs"]), max_size=200))  # type: ignore[misc]
def test_literals_cover_every_non_whitespace_character(source: str) -> None:
    tokens = tokenize(source)
    consumed = "".join(t.literal for t in tokens)
    assert consumed == "".join(ch for ch in source if not is_whitespace(ch))
