"""
Translation between wire values and JSON values.

JSON values are the native types the json module reads and writes: float and
int for numbers, bool, str, dict, list and None.

as_json() is total and is what the client renders. Integers go through a
double, so magnitudes above 2**53 lose precision. from_json() is the best
effort reverse used to send JSON shaped arguments: JSON has no way to mark a
string as base64 data or as a timestamp, so Bytes and DateTime never come back
out of it.
"""
import base64
import json
import math

from xapirpc.wire import (INT64_MAX, INT64_MIN, Array, Bool, Bytes, DateTime,
                          Double, Int32, Int64, Nil, Str, Struct)


def format_datetime(date_time):
    """Render a DateTime as YYYYMMDDTHH:MM:SS"""
    return "%04d%02d%02dT%02d:%02d:%02d" % date_time.value


def _number(value):
    # Infinite and NaN doubles have no JSON number form
    value = float(value)
    if math.isfinite(value):
        return value
    return None


_AS_JSON = {
    Int32: lambda w: _number(w.value),
    Int64: lambda w: _number(w.value),
    Bool: lambda w: w.value,
    Str: lambda w: w.value,
    Double: lambda w: _number(w.value),
    DateTime: format_datetime,
    Bytes: lambda w: base64.b64encode(w.value).decode("ascii"),
    Struct: lambda w: {name: as_json(member) for name, member in w.value.items()},
    Array: lambda w: [as_json(item) for item in w.value],
    Nil: lambda w: None,
}


def as_json(value):
    """Convert a wire value to a JSON value"""
    try:
        convert = _AS_JSON[type(value)]
    except KeyError:
        raise TypeError("not a wire value: %r" % (value,)) from None
    return convert(value)


def _from_number(number):
    if isinstance(number, int):
        if INT64_MIN <= number <= INT64_MAX:
            return Int64(number)
        try:
            return Double(float(number))
        except OverflowError:
            return Double(math.copysign(math.inf, number))
    if number.is_integer() and INT64_MIN <= number <= INT64_MAX:
        return Int64(int(number))
    return Double(number)


def from_json(value):
    """Convert a JSON value to the wire value that best represents it"""
    # bool is a subclass of int and has to be checked first
    if isinstance(value, bool):
        return Bool(value)
    if isinstance(value, (int, float)):
        return _from_number(value)
    if isinstance(value, str):
        return Str(value)
    if isinstance(value, dict):
        return Struct({name: from_json(member) for name, member in value.items()})
    if isinstance(value, (list, tuple)):
        return Array(from_json(item) for item in value)
    if value is None:
        return Nil()
    raise TypeError("not a JSON value: %r" % (value,))


def dumps(value, compact=False):
    """Render a JSON value, indented unless compact is set"""
    if compact:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(value, indent=2, ensure_ascii=False)
