"""
vttcue/timestamps.py

Lexical helpers for cue headers: timestamps ([hh:]mm:ss.ttt) and percentages (N%).
"""

import math
import re

from .errors import InvalidTimestamp, InvalidPercentage

MAX_TIMESTAMP_US = 2**63 - 1
PERCENTAGE_RE = re.compile(r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')


def _is_digits(s: str) -> bool:
    return s.isascii() and s.isdigit()


def parse_timestamp_us(token: str) -> int:
    """
    Parses a WebVTT timestamp into microseconds.

    Any number of ':'-separated fields is accepted (each one scaled by 60), so
    both "mm:ss.ttt" and "hh:mm:ss.ttt" work. The fraction after '.' is read
    as milliseconds.
    """
    whole, dot, fraction = token.partition('.')
    fields = whole.split(':')
    if not all(_is_digits(f) for f in fields) or (dot and not _is_digits(fraction)):
        raise InvalidTimestamp(f"Invalid timestamp: {token!r}")

    value = 0
    for f in fields:
        value = value * 60 + int(f)
    value *= 1000
    if dot:
        value += int(fraction)
    value *= 1000
    if value > MAX_TIMESTAMP_US:
        raise InvalidTimestamp(f"Timestamp out of range: {token!r}")
    return value


def parse_percentage(value: str) -> float:
    """Parses 'N%' into N / 100. Range checks are left to the caller."""
    if not value.endswith('%'):
        raise InvalidPercentage(f"Percentages must end with %: {value!r}")
    if not PERCENTAGE_RE.fullmatch(value[:-1]):
        raise InvalidPercentage(f"Invalid percentage: {value!r}")
    number = float(value[:-1])
    if not math.isfinite(number):
        raise InvalidPercentage(f"Invalid percentage: {value!r}")
    return number / 100
