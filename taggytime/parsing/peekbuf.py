"""Library for looking ahead in a stream of tokens.

The parser sometimes needs to see several tokens before it can decide how
to proceed, for example `BEGIN` `:` `VEVENT` versus `BEGIN` `:` `VALARM`. The
`PeekBuffer` keeps the tokens it has already pulled from the lexer so that
looking ahead never re-lexes the input.
"""

from __future__ import annotations

from collections import deque

from .lexer import Lexer, Token

__all__ = ["PeekBuffer"]


class PeekBuffer:
    """A lookahead buffer over a lexer."""

    def __init__(self, lexer: Lexer) -> None:
        """Initialize PeekBuffer."""
        self._lexer = lexer
        self._queue: deque[Token] = deque()

    def peek(self, k: int = 0) -> Token:
        """Return the token `k` positions ahead without consuming anything."""
        if k < 0:
            raise ValueError(f"Lookahead must not be negative: {k}")
        while len(self._queue) <= k:
            self._queue.append(self._lexer.next_token())
        return self._queue[k]

    def consume(self) -> Token:
        """Remove and return the next token."""
        if self._queue:
            return self._queue.popleft()
        return self._lexer.next_token()

    def __len__(self) -> int:
        """Return the number of tokens currently buffered."""
        return len(self._queue)
