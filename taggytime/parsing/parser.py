"""Library for parsing ics content into calendar objects.

This is a recursive-descent parser over the tokens produced by the `Lexer`,
with one method per grammar production:

  - The calendar body skips until a `BEGIN` or `END` property and dispatches
    into a `VEVENT` or finishes the calendar.
  - The event body reads `DTSTART`, `DTEND`, `SUMMARY` and `RRULE` in any
    order until `END:VEVENT`. Nested components such as `VALARM` and any
    other property are skipped.
  - A date-time literal is `yyyymmdd`, optionally followed by `Thhmmss`,
    optionally followed by `Z`. A time without `Z` is only accepted when a
    `TZID` parameter was given. A date without a time is read as the end of
    that day.
  - A recurrence rule starts with `FREQ` followed by `;` separated
    `INTERVAL`, `COUNT`, `UNTIL`, `WKST` and `BYDAY` parts.

Only tokens that start a line are considered as property names, so keywords
that appear inside free text are never mistaken for properties.

Every error raised here is a `CalendarParseError` whose `detailed_error`
names the line and column of the offending token.

```python
calendar = IcsParser(content, ZoneOffset(-240)).parse_calendar("school")
```
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Optional

from ..calendar import ICalendar
from ..compat import summary_compat
from ..event import Vevent
from ..exceptions import (
    CalendarParseError,
    EndOfInputError,
    InvalidFrequencyError,
    MalformedDateError,
    MalformedListError,
    MissingPropertyError,
    NotANumberError,
    RefinementError,
    TokenMismatchError,
    UnsupportedRuleError,
    UntilAndCountError,
)
from ..timespan import MinInterval
from ..types.date import Date
from ..types.instant import MinInstant
from ..types.ranged import OccurrenceCount, RangedInt, RepeatInterval
from ..types.recur import BYDAY, Frequency, Recur, RRuleToks
from ..types.utc_offset import ZoneOffset
from ..types.weekday import Weekday
from .const import DEFAULT_TIME, TIME_PREFIX, UNESCAPE_CHAR, UNNAMED_EVENT, UTC_SUFFIX
from .lexer import Lexer, Token, TokenType
from .peekbuf import PeekBuffer

__all__ = ["IcsParser", "parse_calendar", "parse_rrule"]

_LOGGER = logging.getLogger(__name__)

TZID_PARAM = "TZID"

_FREQUENCIES = {
    TokenType.DAILY: Frequency.DAILY,
    TokenType.WEEKLY: Frequency.WEEKLY,
    TokenType.MONTHLY: Frequency.MONTHLY,
    TokenType.YEARLY: Frequency.YEARLY,
}
_UNSUPPORTED_RULES = {
    TokenType.BYSECOND,
    TokenType.BYMINUTE,
    TokenType.BYHOUR,
    TokenType.BYMONTH,
    TokenType.BYMONTHDAY,
    TokenType.BYYEARDAY,
    TokenType.BYWEEKNO,
    TokenType.BYSETPOS,
}
_DESCRIBED_KINDS = {
    TokenType.NEWLINE,
    TokenType.NUMBER,
    TokenType.OTHER,
    TokenType.EOF,
}


def _describe(kind: TokenType) -> str:
    if kind in _DESCRIBED_KINDS:
        return str(kind)
    return f"`{kind}`"


def _unescape(value: str) -> str:
    for key, vin in UNESCAPE_CHAR.items():
        if key not in value:
            continue
        value = value.replace(key, vin)
    return value


def _ends_line(token: Token) -> bool:
    return token.kind in (TokenType.NEWLINE, TokenType.EOF)


def _ends_param(token: Token) -> bool:
    return token.kind in (TokenType.COLON, TokenType.SEMICOLON) or _ends_line(token)


def _ends_param_name(token: Token) -> bool:
    return token.kind is TokenType.EQUALS or _ends_param(token)


def _ends_multiline_summary(token: Token) -> bool:
    if token.kind is TokenType.EOF:
        return True
    return token.line_start and token.kind in (TokenType.TRANSP, TokenType.END)


class IcsParser:
    """Parses a single ics document."""

    def __init__(self, content: str, default_offset: ZoneOffset) -> None:
        """Initialize IcsParser.

        The default offset is used for literals that do not carry a `Z`, and
        is the offset that every parsed instant is displayed in.
        """
        self._buffer = PeekBuffer(Lexer(content))
        self._offset = default_offset

    def _peek(self, k: int = 0) -> Token:
        return self._buffer.peek(k)

    def _consume(self) -> Token:
        token = self._buffer.consume()
        if token.kind is TokenType.EOF:
            raise EndOfInputError(detailed_error=token.position)
        return token

    def _expect(self, kind: TokenType) -> Token:
        """Consume the next token, which must be of the specified kind."""
        token = self._consume()
        if token.kind is not kind:
            raise TokenMismatchError(
                _describe(kind), str(token), detailed_error=token.position
            )
        return token

    def _expect_number(self) -> str:
        token = self._consume()
        if token.kind is not TokenType.NUMBER:
            raise NotANumberError(token.text, detailed_error=token.position)
        return token.text

    def _skip_newlines(self) -> None:
        while self._peek().kind is TokenType.NEWLINE:
            self._consume()

    def _collect_text(self, stop: Callable[[Token], bool]) -> str:
        """Join tokens until the stop token, keeping the spacing between them."""
        parts: list[str] = []
        pending_space = False
        while not stop(self._peek()):
            token = self._consume()
            if token.kind is TokenType.NEWLINE:
                pending_space = True
                continue
            if parts and (token.space_before or pending_space):
                parts.append(" ")
            pending_space = False
            parts.append(token.text)
        return "".join(parts)

    def parse_calendar(self, name: str = "") -> ICalendar:
        """Parse a VCALENDAR block and the events inside of it."""
        self._skip_newlines()
        self._expect(TokenType.BEGIN)
        self._expect(TokenType.COLON)
        self._expect(TokenType.VCALENDAR)
        events: list[Vevent] = []
        while True:
            token = self._peek()
            if token.kind is TokenType.EOF:
                raise EndOfInputError(detailed_error=token.position)
            if not token.line_start:
                self._consume()
            elif token.kind is TokenType.BEGIN:
                if (
                    self._peek(1).kind is TokenType.COLON
                    and self._peek(2).kind is TokenType.VEVENT
                ):
                    events.append(self._parse_vevent())
                else:
                    self._skip_component()
            elif token.kind is TokenType.END:
                self._consume()
                self._expect(TokenType.COLON)
                self._expect(TokenType.VCALENDAR)
                break
            else:
                self._consume()
        _LOGGER.debug("Parsed calendar `%s` with %d events", name, len(events))
        return ICalendar(name=name, events=events)

    def _skip_component(self) -> None:
        """Skip a component from its BEGIN to its matching END."""
        begin = self._expect(TokenType.BEGIN)
        self._expect(TokenType.COLON)
        component = self._consume().text
        _LOGGER.debug("Skipping component %s at %s", component, begin.position)
        depth = 1
        while depth:
            token = self._consume()
            if not token.line_start or token.kind not in (
                TokenType.BEGIN,
                TokenType.END,
            ):
                continue
            if (
                self._peek().kind is TokenType.COLON
                and self._peek(1).text == component
            ):
                depth += 1 if token.kind is TokenType.BEGIN else -1
        self._consume()
        self._consume()

    def _parse_vevent(self) -> Vevent:
        begin = self._expect(TokenType.BEGIN)
        self._expect(TokenType.COLON)
        self._expect(TokenType.VEVENT)
        start: Optional[MinInstant] = None
        end: Optional[MinInstant] = None
        recur: Optional[Recur] = None
        summary: Optional[str] = None
        while True:
            token = self._peek()
            if token.kind is TokenType.EOF:
                raise EndOfInputError(detailed_error=token.position)
            if not token.line_start:
                self._consume()
            elif token.kind is TokenType.DTSTART:
                self._consume()
                start = self._parse_datetime_property()
            elif token.kind is TokenType.DTEND:
                self._consume()
                end = self._parse_datetime_property()
            elif token.kind is TokenType.SUMMARY:
                self._consume()
                summary = self._parse_summary()
            elif token.kind is TokenType.RRULE:
                self._consume()
                self._parse_params()
                self._expect(TokenType.COLON)
                recur = self.parse_rrule_value()
            elif token.kind is TokenType.BEGIN:
                self._skip_component()
            elif token.kind is TokenType.END:
                self._consume()
                self._expect(TokenType.COLON)
                self._expect(TokenType.VEVENT)
                break
            else:
                self._consume()
        if start is None:
            raise MissingPropertyError(
                TokenType.DTSTART.value,
                summary or UNNAMED_EVENT,
                detailed_error=begin.position,
            )
        if end is None:
            raise MissingPropertyError(
                TokenType.DTEND.value,
                summary or UNNAMED_EVENT,
                detailed_error=begin.position,
            )
        _LOGGER.debug("Parsed event `%s` from %s to %s", summary, start, end)
        return Vevent(span=MinInterval(start, end), recur=recur, summary=summary or "")

    def _parse_params(self) -> dict[str, str]:
        """Parse `;NAME=value` property parameters up to the colon."""
        params: dict[str, str] = {}
        while self._peek().kind is TokenType.SEMICOLON:
            self._consume()
            token = self._peek()
            if _ends_param_name(token):
                raise TokenMismatchError(
                    "parameter name", str(token), detailed_error=token.position
                )
            name = self._collect_text(_ends_param_name)
            self._expect(TokenType.EQUALS)
            params[name] = self._collect_text(_ends_param)
        return params

    def _parse_datetime_property(self) -> MinInstant:
        params = self._parse_params()
        self._expect(TokenType.COLON)
        return self._parse_datetime_literal(zoned=TZID_PARAM in params)

    def _parse_datetime_literal(self, zoned: bool) -> MinInstant:
        """Parse `yyyymmdd[Thhmmss][Z]`."""
        first = self._peek()
        ymd = self._expect_number()
        hms = DEFAULT_TIME
        has_time = False
        token = self._peek()
        if (
            token.kind is TokenType.OTHER
            and token.text == TIME_PREFIX
            and not token.space_before
        ):
            self._consume()
            hms = self._expect_number()
            has_time = True
        token = self._peek()
        utc = (
            token.kind is TokenType.OTHER
            and token.text == UTC_SUFFIX
            and not token.space_before
        )
        if utc:
            self._consume()
        elif has_time and not zoned:
            raise TokenMismatchError(
                f"`{UTC_SUFFIX}`", str(token), detailed_error=token.position
            )
        offset = ZoneOffset.utc() if utc else self._offset
        try:
            date = Date.from_ics_time_string(ymd, hms, offset)
        except MalformedDateError as err:
            raise MalformedDateError(ymd, hms, detailed_error=first.position) from err
        return MinInstant.from_date(date).with_offset(self._offset)

    def _parse_summary(self) -> str:
        self._parse_params()
        self._expect(TokenType.COLON)
        stop = _ends_line
        if summary_compat.is_multiline_summary_enabled():
            stop = _ends_multiline_summary
        return _unescape(self._collect_text(stop).strip())

    def parse_rrule_value(self) -> Recur:
        """Parse the value of an RRULE property, up to the end of its line."""
        self._expect(TokenType.FREQ)
        self._expect(TokenType.EQUALS)
        token = self._consume()
        if (freq := _FREQUENCIES.get(token.kind)) is None:
            raise InvalidFrequencyError(token.text, detailed_error=token.position)
        values: dict[str, Any] = {"freq": freq}
        rules: list[RRuleToks] = []
        seen: set[TokenType] = set()
        while self._peek().kind not in (TokenType.NEWLINE, TokenType.EOF):
            self._expect(TokenType.SEMICOLON)
            key = self._consume()
            self._expect(TokenType.EQUALS)
            if key.kind in seen:
                if key.kind is TokenType.BYDAY:
                    raise UnsupportedRuleError(
                        "Repeated BYDAY rules are not implemented",
                        detailed_error=key.position,
                    )
                raise CalendarParseError(
                    f"{key.text} appears more than once", detailed_error=key.position
                )
            seen.add(key.kind)
            if key.kind is TokenType.INTERVAL:
                values["interval"] = self._parse_ranged(RepeatInterval, key)
            elif key.kind is TokenType.COUNT:
                values["count"] = self._parse_ranged(OccurrenceCount, key)
            elif key.kind is TokenType.UNTIL:
                values["until"] = self._parse_datetime_literal(zoned=False)
            elif key.kind is TokenType.WKST:
                values["week_start"] = self._parse_weekday()
            elif key.kind is TokenType.BYDAY:
                rules.append(RRuleToks(BYDAY, self._parse_byday()))
            elif key.kind in _UNSUPPORTED_RULES or key.text.startswith("BY"):
                raise UnsupportedRuleError(
                    f"Rule {key.text} is not implemented", detailed_error=key.position
                )
            else:
                raise TokenMismatchError(
                    "recurrence rule part", str(key), detailed_error=key.position
                )
        if "count" in values and "until" in values:
            raise UntilAndCountError(
                values["count"], values["until"], detailed_error=self._peek().position
            )
        return Recur(rules=tuple(rules), **values)

    def _parse_ranged(self, cls: type[RangedInt], key: Token) -> RangedInt:
        token = self._peek()
        text = self._expect_number()
        try:
            return cls(int(text))
        except RefinementError as err:
            raise CalendarParseError(
                f"{key.text} must be within [{err.lower}, {err.upper}], found {text}",
                detailed_error=token.position,
            ) from err

    def _parse_weekday(self) -> Weekday:
        token = self._consume()
        try:
            return Weekday(token.text)
        except ValueError as err:
            raise TokenMismatchError(
                "weekday", str(token), detailed_error=token.position
            ) from err

    def _parse_byday(self) -> tuple[str, ...]:
        """Parse a comma separated list of weekday codes."""
        entries: list[str] = []
        while True:
            token = self._buffer.consume()
            previous = entries[-1] if entries else BYDAY
            if token.kind in (TokenType.NUMBER, TokenType.DASH) or (
                token.kind is TokenType.OTHER and token.text == "+"
            ):
                raise UnsupportedRuleError(
                    f"BYDAY ordinal `{token.text}` is not implemented",
                    detailed_error=token.position,
                )
            if token.kind is not TokenType.OTHER:
                raise MalformedListError(
                    previous, str(token), detailed_error=token.position
                )
            try:
                Weekday(token.text)
            except ValueError as err:
                raise MalformedListError(
                    previous, str(token), detailed_error=token.position
                ) from err
            entries.append(token.text)
            if self._peek().kind is not TokenType.COMMA:
                return tuple(entries)
            self._consume()

    def parse_rrule(self) -> Recur:
        """Parse a document that only holds an RRULE value."""
        self._skip_newlines()
        recur = self.parse_rrule_value()
        self._skip_newlines()
        if (token := self._peek()).kind is not TokenType.EOF:
            raise TokenMismatchError(
                _describe(TokenType.EOF), str(token), detailed_error=token.position
            )
        return recur


def parse_calendar(
    content: str, default_offset: ZoneOffset, name: str = ""
) -> ICalendar:
    """Parse ics content into a calendar."""
    return IcsParser(content, default_offset).parse_calendar(name)


def parse_rrule(value: str, default_offset: ZoneOffset) -> Recur:
    """Parse an RRULE value such as `FREQ=WEEKLY;BYDAY=MO,WE`."""
    return IcsParser(value, default_offset).parse_rrule()
