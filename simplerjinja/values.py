"""
The runtime data a template reads: strings, ordered maps and lists.

Values are immutable. A context is a MapValue; loop bodies see a new context
with the loop variable bound, never a mutated one.
"""

from collections import namedtuple
from types import MappingProxyType

from simplerjinja.constants import ENTRY_KEY, ENTRY_VALUE


class UnsupportedValueError(TypeError):
    """Raised when converting Python data that has no counterpart in the value model."""
    pass


class Value(object):
    __slots__ = ()

    def __eq__(self, other):
        return type(self) is type(other) and tuple.__eq__(self, other)

    def __ne__(self, other):
        return not self == other

    __hash__ = None


class StringValue(Value, namedtuple('StringValue', 'text')):
    __slots__ = ()


class MapValue(Value, namedtuple('MapValue', 'fields')):
    """Ordered name -> Value mapping; iteration follows insertion order."""

    __slots__ = ()

    def __new__(cls, fields=()):
        return super(MapValue, cls).__new__(cls, MappingProxyType(dict(fields)))

    def __eq__(self, other):
        return type(self) is type(other) and list(self.fields.items()) == list(other.fields.items())

    def get(self, name):
        return self.fields.get(name)


class ListValue(Value, namedtuple('ListValue', 'items')):
    __slots__ = ()

    def __new__(cls, items=()):
        return super(ListValue, cls).__new__(cls, tuple(items))


EMPTY_CONTEXT = MapValue()

def to_value(obj):
    """Convert plain Python data (str, mappings, lists, tuples) into the value model."""
    if isinstance(obj, Value):
        return obj
    if isinstance(obj, str):
        return StringValue(obj)
    if hasattr(obj, 'items'):
        fields = []
        for key, value in obj.items():
            if not isinstance(key, str):
                raise UnsupportedValueError('Map keys must be strings, got %r' % (key,))
            fields.append((key, to_value(value)))
        return MapValue(fields)
    if isinstance(obj, (list, tuple)):
        return ListValue(to_value(item) for item in obj)
    raise UnsupportedValueError("Can't use %r in a template context" % (type(obj),))

def as_context(obj):
    """Accept a MapValue or a plain mapping as an evaluation context."""
    if obj is None:
        return EMPTY_CONTEXT
    value = to_value(obj)
    if not isinstance(value, MapValue):
        raise UnsupportedValueError('A context must be a mapping, got %r' % (type(obj),))
    return value

def _list_index(segment):
    if not segment.isdecimal():
        return None
    return int(segment)

def resolve(context, parts):
    """Follow the dotted path `parts` from `context`; None when any step misses."""
    current = context
    for part in parts:
        if isinstance(current, MapValue):
            current = current.get(part)
            if current is None:
                return None
        elif isinstance(current, ListValue):
            index = _list_index(part)
            if index is None or index >= len(current.items):
                return None
            current = current.items[index]
        else:
            # strings have no children
            return None
    return current

def bind(context, name, value):
    """Return a copy of `context` with `name` bound to `value`."""
    fields = dict(context.fields)
    fields[name] = value
    return MapValue(fields)

def entry_record(key, value):
    return MapValue([(ENTRY_KEY, StringValue(key)), (ENTRY_VALUE, value)])

def loop_items(value):
    """The values a for loop binds in turn, or None when `value` can't be iterated."""
    if isinstance(value, ListValue):
        return list(value.items)
    if isinstance(value, MapValue):
        return [entry_record(key, item) for key, item in value.fields.items()]
    return None

def is_truthy(value):
    if isinstance(value, StringValue):
        return value.text != ''
    if isinstance(value, MapValue):
        return len(value.fields) > 0
    return len(value.items) > 0
