"""Constants for taggytime parsing library."""

# Related to rfc5545 text parsing
WSP = (" ", "\t", "\r")
FOLD_WSP = (" ", "\t")
NEWLINE = "\n"
KEYWORD_TERMINATORS = (":", ";", "=")

KEYWORDS = (
    "BEGIN",
    "END",
    "VCALENDAR",
    "VEVENT",
    "DTSTART",
    "DTEND",
    "TZID",
    "SUMMARY",
    "TRANSP",
    "LOCATION",
    "RRULE",
    "FREQ",
    "INTERVAL",
    "COUNT",
    "UNTIL",
    "WKST",
    "BYDAY",
    "BYSECOND",
    "BYMINUTE",
    "BYHOUR",
    "BYMONTH",
    "BYMONTHDAY",
    "BYYEARDAY",
    "BYWEEKNO",
    "BYSETPOS",
    "SECONDLY",
    "MINUTELY",
    "HOURLY",
    "DAILY",
    "WEEKLY",
    "MONTHLY",
    "YEARLY",
)

# A date literal without a time of day is read as the end of that day.
DEFAULT_TIME = "235900"
TIME_PREFIX = "T"
UTC_SUFFIX = "Z"

UNNAMED_EVENT = "unnamed"

UNESCAPE_CHAR = {"\\\\": "\\", "\\;": ";", "\\,": ",", "\\N": "\n", "\\n": "\n"}
