"""Facts for time unit conversions and the bounds of an instant."""

MIN_IN_HR = 60
HR_IN_DAY = 24
MIN_IN_DAY = HR_IN_DAY * MIN_IN_HR
DAYS_IN_WEEK = 7

EPOCH_YEAR = 1970
MAX_YEAR = 9999

# An instant is stored as unsigned minutes since the epoch. The upper bound
# leaves room to add any legal offset without leaving a 32-bit width.
MINUTE_LOWERBOUND = 0
MINUTE_UPPERBOUND = 0x7FFFFFFF
U32_MAX = 0xFFFFFFFF

# Legal UTC offsets are -12:00 through +14:00, in minutes.
UTC_LOWERBOUND = -720
UTC_UPPERBOUND = 840
