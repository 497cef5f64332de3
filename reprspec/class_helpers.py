# Copyright (c) 2026 NASK. All rights reserved.

import collections.abc as collections_abc
import datetime
import decimal


def attr_repr(*attr_names):
    """
    Make a __repr__() implementation based on given attribute names.

    Any number of positional args:
        Names of instance attributes and/or class attributes.

    Returns:
        A function being the requested __repr__() implementation.

    >>> class A(object):
    ...    __repr__ = attr_repr('x', 'y')
    ...    x = 1
    ...    def __init__(self):
    ...        self.y = 'qwerty'
    >>> a = A()
    >>> a
    <A x=1, y='qwerty'>
    """
    format_repr = ('<{0.__class__.__qualname__} ' +
                   ', '.join('%s={0.%s!r}' % (name, name)
                             for name in attr_names) +
                   '>').format
    format_repr_fallback = object.__repr__

    def __repr__(self):
        # noinspection PyBroadException
        try:
            return format_repr(self)
        except Exception:
            return format_repr_fallback(self)

    return __repr__


#: Types whose instances are always represented as scalars.
RAW_SCALAR_TYPES = (
    str,
    bytes,
    bool,
    int,
    float,
    decimal.Decimal,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    type(None),
)


def is_raw_scalar(obj):
    """
    >>> is_raw_scalar('foo') and is_raw_scalar(42) and is_raw_scalar(None)
    True
    >>> is_raw_scalar(False) and is_raw_scalar(datetime.date(2026, 1, 1))
    True
    >>> is_raw_scalar(['foo']) or is_raw_scalar({}) or is_raw_scalar(object())
    False
    """
    return isinstance(obj, RAW_SCALAR_TYPES)


def is_seq(obj):
    """
    Check if the given object is a *sequence-like* collection (but
    not a string or a mapping).

    >>> is_seq([1, 2]) and is_seq((1, 2)) and is_seq({1, 2})
    True
    >>> is_seq(x for x in 'ab')
    True
    >>> is_seq('ab') or is_seq(b'ab') or is_seq({'a': 1}) or is_seq(42)
    False
    """
    return (isinstance(obj, collections_abc.Iterable)
            and not isinstance(obj, (str, bytes, bytearray, memoryview,
                                     collections_abc.Mapping)))
