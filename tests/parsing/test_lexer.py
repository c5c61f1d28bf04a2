"""Tests for the ics lexer."""

import pytest

from taggytime.parsing.const import KEYWORDS
from taggytime.parsing.lexer import Lexer, Token, TokenType


def kinds(content: str) -> list[TokenType]:
    return [token.kind for token in Lexer(content)]


def test_datetime_property() -> None:
    """Test splitting a date-time property into tokens."""
    tokens = list(Lexer("DTSTART:20230303T140000Z\n"))
    assert [(token.kind, token.text) for token in tokens] == [
        (TokenType.DTSTART, "DTSTART"),
        (TokenType.COLON, ":"),
        (TokenType.NUMBER, "20230303"),
        (TokenType.OTHER, "T"),
        (TokenType.NUMBER, "140000"),
        (TokenType.OTHER, "Z"),
        (TokenType.NEWLINE, "\n"),
    ]


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("SUMMARY:", TokenType.SUMMARY),
        ("SUMMARY;", TokenType.SUMMARY),
        ("SUMMARY ", TokenType.SUMMARY),
        ("SUMMARY", TokenType.SUMMARY),
        ("SUMMARY\n", TokenType.SUMMARY),
        ("COUNT=3", TokenType.COUNT),
        ("SUMMARYX:", TokenType.OTHER),
        ("SUMMARY-X:", TokenType.OTHER),
        ("SUMMARY,", TokenType.OTHER),
        ("summary:", TokenType.OTHER),
        ("Summary:", TokenType.OTHER),
        ("VERSION:", TokenType.OTHER),
    ],
)
def test_keyword_boundaries(content: str, expected: TokenType) -> None:
    """Test that keywords are only recognized when terminated."""
    token = Lexer(content).next_token()
    assert token.kind == expected
    assert token.is_keyword == (expected is not TokenType.OTHER)


def test_every_keyword() -> None:
    """Test that each keyword maps to its own token type."""
    for keyword in KEYWORDS:
        token = Lexer(f"{keyword}:").next_token()
        assert token.kind.value == keyword
        assert token.is_keyword


def test_structural_tokens() -> None:
    """Test single character tokens."""
    assert kinds(":;,/-_.=") == [
        TokenType.COLON,
        TokenType.SEMICOLON,
        TokenType.COMMA,
        TokenType.SLASH,
        TokenType.DASH,
        TokenType.UNDERSCORE,
        TokenType.PERIOD,
        TokenType.EQUALS,
    ]


def test_other_runs() -> None:
    """Test that anything else is grouped into text runs."""
    tokens = list(Lexer("BYDAY=+1MO,-1FR"))
    assert [(token.kind, token.text) for token in tokens] == [
        (TokenType.BYDAY, "BYDAY"),
        (TokenType.EQUALS, "="),
        (TokenType.OTHER, "+"),
        (TokenType.NUMBER, "1"),
        (TokenType.OTHER, "MO"),
        (TokenType.COMMA, ","),
        (TokenType.DASH, "-"),
        (TokenType.NUMBER, "1"),
        (TokenType.OTHER, "FR"),
    ]
    assert [token.text for token in Lexer("a\\, b!?")] == ["a", "\\", ",", "b", "!?"]


def test_whitespace() -> None:
    """Test that whitespace separates tokens and is remembered."""
    tokens = list(Lexer("CS  101\tLecture\r\n"))
    assert [token.text for token in tokens] == ["CS", "101", "Lecture", "\n"]
    assert [token.space_before for token in tokens] == [False, True, True, True]
    assert tokens[-1].kind is TokenType.NEWLINE


def test_folding() -> None:
    """Test that folded lines are joined without introducing a space."""
    tokens = list(Lexer("SUMMARY:Intro to Comp\n uter Science\nEND"))
    assert [token.text for token in tokens] == [
        "SUMMARY",
        ":",
        "Intro",
        "to",
        "Comp",
        "uter",
        "Science",
        "\n",
        "END",
    ]
    comp, uter = tokens[4], tokens[5]
    assert not uter.space_before
    assert not uter.line_start
    assert comp.line == 1
    assert uter.line == 2
    assert uter.column == 2

    assert [token.text for token in Lexer("DTST\n\tART:1")] == ["DTST", "ART", ":", "1"]


def test_line_start() -> None:
    """Test that only the first token on each line starts a line."""
    tokens = list(Lexer("BEGIN:VEVENT\nEND:VEVENT\n"))
    assert [token.line_start for token in tokens] == [
        True,
        False,
        False,
        False,
        True,
        False,
        False,
        False,
    ]
    assert tokens[4].kind is TokenType.END
    assert not tokens[4].space_before


def test_folded_line_start() -> None:
    """Test that a folded continuation never starts a line."""
    tokens = list(Lexer("BEGIN:VEVENT\n  END:VEVENT\n"))
    assert [token.text for token in tokens[:4]] == ["BEGIN", ":", "VEVENT", "END"]
    assert not tokens[3].line_start
    assert [token.line_start for token in tokens].count(True) == 1


def test_positions() -> None:
    """Test line and column tracking."""
    tokens = list(Lexer("BEGIN:VCALENDAR\nVERSION:2.0\n"))
    assert [token.position for token in tokens] == [
        "line 1, column 1",
        "line 1, column 6",
        "line 1, column 7",
        "line 1, column 16",
        "line 2, column 1",
        "line 2, column 8",
        "line 2, column 9",
        "line 2, column 10",
        "line 2, column 11",
        "line 2, column 12",
    ]


def test_end_of_input() -> None:
    """Test that the end of input is reported repeatedly."""
    lexer = Lexer("END")
    assert lexer.next_token().kind is TokenType.END
    first = lexer.next_token()
    assert first.kind is TokenType.EOF
    assert first.position == "line 1, column 4"
    assert lexer.next_token().kind is TokenType.EOF
    assert list(Lexer("")) == []
    assert list(Lexer("  \n ")) == []


def test_token_str() -> None:
    """Test the descriptions of tokens used in error messages."""
    assert str(Token(TokenType.OTHER, "abc", 1, 1)) == "`abc`"
    assert str(Token(TokenType.NEWLINE, "\n", 1, 1)) == "newline"
    assert str(Token(TokenType.EOF, "", 1, 1)) == "end of input"
    assert str(TokenType.COLON) == ":"
