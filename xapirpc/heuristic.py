"""Guess the wire type of a command line argument"""
import re

from xapirpc.wire import INT64_MAX, INT64_MIN, Bool, Double, Int64, Str

_BOOLEANS = {"true": True, "false": False}
_INTEGER = re.compile(r"[+-]?[0-9]+\Z")
_FLOAT = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\Z"
    r"|[+-]?(?:inf|infinity|nan)\Z",
    re.IGNORECASE,
)


def as_value_heuristic(raw):
    """Return the first of bool, int64, double that parses raw, else Str(raw).

    Only the lowercase tokens "true" and "false" are booleans, so "1" stays
    an integer. Integers outside the int64 range fall through to Double.
    """
    if raw in _BOOLEANS:
        return Bool(_BOOLEANS[raw])

    # more than 19 digits never fits in int64, and int() refuses very long strings
    if _INTEGER.match(raw) and len(raw.lstrip("+-").lstrip("0")) <= 19:
        value = int(raw)
        if INT64_MIN <= value <= INT64_MAX:
            return Int64(value)

    if _FLOAT.match(raw):
        return Double(float(raw))

    return Str(raw)
