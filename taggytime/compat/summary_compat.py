"""Compatibility layer for summaries that continue past the end of a line.

Some calendar exports put unfolded free text after a `SUMMARY` line. By
default the summary ends at the end of its (unfolded) line. When multiline
summaries are enabled, the summary instead runs until the next `TRANSP` or
`END` property, joining the lines with spaces.
"""

from collections.abc import Generator
import contextlib
import contextvars


_multiline_summary = contextvars.ContextVar("multiline_summary", default=False)


@contextlib.contextmanager
def enable_multiline_summary() -> Generator[None, None, None]:
    """Context manager to let a summary span several lines."""
    token = _multiline_summary.set(True)
    try:
        yield
    finally:
        _multiline_summary.reset(token)


def is_multiline_summary_enabled() -> bool:
    """Check if multiline summaries are enabled."""
    return _multiline_summary.get()
