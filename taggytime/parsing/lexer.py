"""Library for splitting ics content into tokens.

The lexer is a small state machine over the input text. Each call to
`Lexer.next_token` skips insignificant whitespace and returns the next token:

  - Single character structural tokens such as `:` `;` `,` `=` and newline.
  - Alphabetic runs that match a known property or frequency keyword, but
    only when the run is followed by whitespace, one of `:;=`, or the end of
    the input. Any other alphabetic run is `OTHER`, so that the `SUMMARY` in
    `SUMMARYX` is never mistaken for a property name.
  - Digit runs as `NUMBER`.
  - Anything else as an `OTHER` run.

Folded lines (a newline followed by a space or tab) are joined back together
as described in rfc5545. The end of the input is reported as an `EOF` token,
as many times as it is requested.

```python
lexer = Lexer("DTSTART:20230303T140000Z\n")
[token.kind for token in lexer]
# [TokenType.DTSTART, TokenType.COLON, TokenType.NUMBER, TokenType.OTHER,
#  TokenType.NUMBER, TokenType.OTHER, TokenType.NEWLINE]
```
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from .const import FOLD_WSP, KEYWORD_TERMINATORS, KEYWORDS, NEWLINE, WSP

__all__ = ["Lexer", "Token", "TokenType"]


class TokenType(str, enum.Enum):
    """The lexical category of a token."""

    COLON = ":"
    SEMICOLON = ";"
    COMMA = ","
    SLASH = "/"
    DASH = "-"
    UNDERSCORE = "_"
    PERIOD = "."
    EQUALS = "="
    NEWLINE = "newline"
    NUMBER = "number"
    OTHER = "text"
    EOF = "end of input"

    BEGIN = "BEGIN"
    END = "END"
    VCALENDAR = "VCALENDAR"
    VEVENT = "VEVENT"
    DTSTART = "DTSTART"
    DTEND = "DTEND"
    TZID = "TZID"
    SUMMARY = "SUMMARY"
    TRANSP = "TRANSP"
    LOCATION = "LOCATION"
    RRULE = "RRULE"
    FREQ = "FREQ"
    INTERVAL = "INTERVAL"
    COUNT = "COUNT"
    UNTIL = "UNTIL"
    WKST = "WKST"
    BYDAY = "BYDAY"
    BYSECOND = "BYSECOND"
    BYMINUTE = "BYMINUTE"
    BYHOUR = "BYHOUR"
    BYMONTH = "BYMONTH"
    BYMONTHDAY = "BYMONTHDAY"
    BYYEARDAY = "BYYEARDAY"
    BYWEEKNO = "BYWEEKNO"
    BYSETPOS = "BYSETPOS"
    SECONDLY = "SECONDLY"
    MINUTELY = "MINUTELY"
    HOURLY = "HOURLY"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"

    def __str__(self) -> str:
        return self.value


STRUCTURAL = {
    kind.value: kind
    for kind in (
        TokenType.COLON,
        TokenType.SEMICOLON,
        TokenType.COMMA,
        TokenType.SLASH,
        TokenType.DASH,
        TokenType.UNDERSCORE,
        TokenType.PERIOD,
        TokenType.EQUALS,
    )
}
KEYWORD_TYPES = {keyword: TokenType[keyword] for keyword in KEYWORDS}


@dataclass(frozen=True)
class Token:
    """A lexical token and the position where it starts."""

    kind: TokenType
    text: str
    line: int
    column: int

    space_before: bool = False
    """True if whitespace separated this token from the previous one."""

    line_start: bool = False
    """True if this is the first token on its (unfolded) line."""

    @property
    def is_keyword(self) -> bool:
        """Return True if the token is a recognized keyword."""
        return self.text in KEYWORD_TYPES and self.kind is KEYWORD_TYPES[self.text]

    @property
    def position(self) -> str:
        """Return a description of where the token starts."""
        return f"line {self.line}, column {self.column}"

    def __str__(self) -> str:
        if self.kind in (TokenType.NEWLINE, TokenType.EOF):
            return str(self.kind)
        return f"`{self.text}`"


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_other(char: str) -> bool:
    return not (
        char in WSP
        or char == NEWLINE
        or char in STRUCTURAL
        or char.isalpha()
        or _is_digit(char)
    )


class Lexer:
    """Produces tokens from ics content, one at a time."""

    def __init__(self, content: str) -> None:
        """Initialize Lexer."""
        self._content = content
        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start = True

    def _peek_char(self, offset: int = 0) -> str | None:
        pos = self._pos + offset
        if pos < len(self._content):
            return self._content[pos]
        return None

    def _advance(self, count: int = 1) -> str:
        text = self._content[self._pos : self._pos + count]
        for char in text:
            if char == NEWLINE:
                self._line += 1
                self._column = 1
            else:
                self._column += 1
        self._pos += count
        return text

    def _take_while(self, predicate: Callable[[str], bool]) -> str:
        start = self._pos
        while (char := self._peek_char()) is not None and predicate(char):
            self._advance()
        return self._content[start : self._pos]

    def _skip_whitespace(self) -> bool:
        """Skip whitespace and folds, returning True if any whitespace was skipped."""
        skipped = False
        while (char := self._peek_char()) is not None:
            if char in WSP:
                self._advance()
                skipped = True
            elif char == NEWLINE and self._peek_char(1) in FOLD_WSP:
                self._advance(2)
            else:
                break
        return skipped

    def next_token(self) -> Token:
        """Return the next token in the input."""
        space_before = self._skip_whitespace()
        line, column, line_start = self._line, self._column, self._line_start

        def make(kind: TokenType, text: str) -> Token:
            self._line_start = kind is TokenType.NEWLINE
            return Token(kind, text, line, column, space_before, line_start)

        if (char := self._peek_char()) is None:
            return Token(TokenType.EOF, "", line, column, space_before, line_start)
        if char == NEWLINE:
            return make(TokenType.NEWLINE, self._advance())
        if (kind := STRUCTURAL.get(char)) is not None:
            return make(kind, self._advance())
        if char.isalpha():
            text = self._take_while(str.isalpha)
            following = self._peek_char()
            terminated = (
                following is None
                or following in WSP
                or following == NEWLINE
                or following in KEYWORD_TERMINATORS
            )
            if terminated and (keyword := KEYWORD_TYPES.get(text)) is not None:
                return make(keyword, text)
            return make(TokenType.OTHER, text)
        if _is_digit(char):
            return make(TokenType.NUMBER, self._take_while(_is_digit))
        return make(TokenType.OTHER, self._take_while(_is_other))

    def __iter__(self) -> Iterator[Token]:
        """Return all tokens up to, but not including, the end of input."""
        while (token := self.next_token()).kind is not TokenType.EOF:
            yield token
