"""
The XML-RPC value model spoken by xapi.

Every value that crosses the wire is one of the classes listed in WIRE_TYPES.
Instances are immutable once constructed and compare equal only to an
instance of the same class holding an equal payload, so Int32(5) and
Int64(5) are different values.
"""
import types
from collections.abc import Mapping

INT32_MIN, INT32_MAX = -2**31, 2**31 - 1
INT64_MIN, INT64_MAX = -2**63, 2**63 - 1

# YYYYMMDDTHH:MM:SS has room for four year digits
_DATETIME_FIELDS = ("year", "month", "day", "hour", "minute", "second")
_DATETIME_LOW = (0, 1, 1, 0, 0, 0)
_DATETIME_HIGH = (9999, 12, 31, 23, 59, 59)


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


class WireValue:
    """Base class of the closed set of wire values"""

    __slots__ = ("value",)

    def __init__(self, value):
        object.__setattr__(self, "value", value)

    def __setattr__(self, name, value):
        raise AttributeError("%s is immutable" % type(self).__name__)

    def __delattr__(self, name):
        raise AttributeError("%s is immutable" % type(self).__name__)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.value)


class Int32(WireValue):
    __slots__ = ()

    def __init__(self, value):
        if not _is_int(value):
            raise TypeError("Int32 needs an int, got %r" % (value,))
        if not INT32_MIN <= value <= INT32_MAX:
            raise ValueError("%d does not fit in 32 bits" % value)
        super().__init__(value)


class Int64(WireValue):
    __slots__ = ()

    def __init__(self, value):
        if not _is_int(value):
            raise TypeError("Int64 needs an int, got %r" % (value,))
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError("%d does not fit in 64 bits" % value)
        super().__init__(value)


class Bool(WireValue):
    __slots__ = ()

    def __init__(self, value):
        if not isinstance(value, bool):
            raise TypeError("Bool needs a bool, got %r" % (value,))
        super().__init__(value)


class Str(WireValue):
    __slots__ = ()

    def __init__(self, value):
        if not isinstance(value, str):
            raise TypeError("Str needs a str, got %r" % (value,))
        super().__init__(value)


class Double(WireValue):
    __slots__ = ()

    def __init__(self, value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError("Double needs a float, got %r" % (value,))
        super().__init__(float(value))


class DateTime(WireValue):
    """A naive timestamp with one-second resolution"""

    __slots__ = ()

    def __init__(self, year, month, day, hour=0, minute=0, second=0):
        fields = (year, month, day, hour, minute, second)
        if not all(_is_int(f) for f in fields):
            raise TypeError("DateTime fields must be ints, got %r" % (fields,))
        for name, field, low, high in zip(_DATETIME_FIELDS, fields, _DATETIME_LOW, _DATETIME_HIGH):
            if not low <= field <= high:
                raise ValueError("DateTime %s %d is outside %d..%d" % (name, field, low, high))
        super().__init__(fields)

    year = property(lambda self: self.value[0])
    month = property(lambda self: self.value[1])
    day = property(lambda self: self.value[2])
    hour = property(lambda self: self.value[3])
    minute = property(lambda self: self.value[4])
    second = property(lambda self: self.value[5])

    def __repr__(self):
        return "DateTime(%d, %d, %d, %d, %d, %d)" % self.value


class Bytes(WireValue):
    __slots__ = ()

    def __init__(self, value):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("Bytes needs a bytes-like object, got %r" % (value,))
        super().__init__(bytes(value))


class Struct(WireValue):
    """Named members; the member names are unique strings"""

    __slots__ = ()

    def __init__(self, members=None):
        if members is None:
            members = {}
        if not isinstance(members, Mapping):
            raise TypeError("Struct needs a mapping, got %r" % (members,))
        copied = {}
        for name, member in members.items():
            if not isinstance(name, str):
                raise TypeError("Struct member names must be str, got %r" % (name,))
            if not isinstance(member, WireValue):
                raise TypeError("Struct member %r is not a wire value: %r" % (name, member))
            copied[name] = member
        super().__init__(types.MappingProxyType(copied))

    def __contains__(self, name):
        return name in self.value

    def __getitem__(self, name):
        return self.value[name]

    def __repr__(self):
        return "Struct(%r)" % dict(self.value)


class Array(WireValue):
    __slots__ = ()

    def __init__(self, items=()):
        items = tuple(items)
        for item in items:
            if not isinstance(item, WireValue):
                raise TypeError("Array element is not a wire value: %r" % (item,))
        super().__init__(items)

    def __iter__(self):
        return iter(self.value)

    def __len__(self):
        return len(self.value)

    def __repr__(self):
        return "Array(%r)" % list(self.value)


class Nil(WireValue):
    __slots__ = ()

    def __init__(self):
        super().__init__(None)

    def __repr__(self):
        return "Nil()"


WIRE_TYPES = (Int32, Int64, Bool, Str, Double, DateTime, Bytes, Struct, Array, Nil)
