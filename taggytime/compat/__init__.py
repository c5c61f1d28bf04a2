"""Compatibility layer for reading calendars exported by other tools.

Switches in this package are scoped with context variables so that they only
apply to the code that enabled them.
"""

from .summary_compat import enable_multiline_summary, is_multiline_summary_enabled

__all__ = [
    "enable_multiline_summary",
    "is_multiline_summary_enabled",
]
