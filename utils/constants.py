"""
Application-wide constants.
Centralizes unit sizes and fixed reply texts.
"""

# Duration units, in seconds
SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400

# Unit suffixes accepted by the duration parser, largest last
UNIT_SUFFIXES = {
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
    "d": DAY,
}

# Numeric tokens above this value are treated as unparsable
MAX_TOKEN_VALUE = 2**63 - 1

# Commands (exact, case-sensitive)
LIST_COMMAND = "List"
CLEAR_ALL_COMMAND = "Clear all"

# Reply texts
ALARM_TEXT = "Alarm"
EMPTY_LIST_TEXT = "List is empty"
LIST_HEADER_TEXT = "List"
DONE_TEXT = "Done"
