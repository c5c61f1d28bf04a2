"""Library for parsing the ics subset understood by taggytime.

The lexer, lookahead buffer and parser are internal building blocks; most
callers should use `taggytime.calendar_stream` instead.
"""

from .lexer import Lexer, Token, TokenType
from .parser import IcsParser, parse_calendar, parse_rrule
from .peekbuf import PeekBuffer

__all__ = [
    "IcsParser",
    "Lexer",
    "PeekBuffer",
    "Token",
    "TokenType",
    "parse_calendar",
    "parse_rrule",
]
