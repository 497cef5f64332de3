# Copyright (c) 2026 NASK. All rights reserved.

"""
Coercion of parsed raw values to declared target types.

TL;DR: `default_coercion_adapter.coerce(raw_value, target_type)`.

The target type of a property is specified with the `type`
declaration option; it can be:

* one of the built-in classes: `str`, `int`, `float`, `bool`,
  `decimal.Decimal`, `datetime.date`, `datetime.datetime`;

* one of the corresponding string tags: `'String'`, `'Integer'`,
  `'Float'`, `'Boolean'`, `'Decimal'`, `'Date'`, `'DateTime'`;

* a tag registered with :meth:`CoercionAdapter.register`;

* any other class (which is then called with the raw value as the
  sole argument).

***

>>> adapter = CoercionAdapter()
>>> adapter.coerce('42', int)
42
>>> adapter.coerce('42', 'Integer')
42
>>> adapter.coerce(42.0, int)
42
>>> adapter.coerce('off', 'Boolean')
False
>>> adapter.coerce('2013-06-12', 'Date')
datetime.date(2013, 6, 12)
>>> adapter.coerce('2013-06-12T10:02', datetime.datetime)
datetime.datetime(2013, 6, 12, 10, 2)
>>> adapter.coerce('1.10', 'Decimal')
Decimal('1.10')

>>> adapter.coerce('4.2', int)
Traceback (most recent call last):
  ...
reprspec.exceptions.TypeMismatchError: cannot coerce '4.2' to int
>>> adapter.coerce(True, 'Integer')
Traceback (most recent call last):
  ...
reprspec.exceptions.TypeMismatchError: cannot coerce True to Integer
"""


import datetime
import decimal

from reprspec.encoding_helpers import str_to_bool
from reprspec.exceptions import (
    SchemaError,
    TypeMismatchError,
)
from reprspec.log_helpers import get_logger
from reprspec.regexes import DATE_FOLLOWED_BY_TIME_REGEX


LOGGER = get_logger(__name__)


#
# Built-in converters
#

def to_str(value):
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return value.decode('utf-8')
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float, decimal.Decimal)):
        return str(value)
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    raise TypeError('{!r} cannot be converted to str'.format(value))


def to_int(value):
    if isinstance(value, bool):
        raise TypeError('bool is not accepted as int')
    if isinstance(value, int):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode('utf-8')
    coerced_value = int(value)
    if not isinstance(value, str) and coerced_value != value:
        raise ValueError('{!r} is not an integer number'.format(value))
    return coerced_value


def to_float(value):
    if isinstance(value, bool):
        raise TypeError('bool is not accepted as float')
    if isinstance(value, (bytes, bytearray)):
        value = value.decode('utf-8')
    return float(value)


def to_bool(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode('utf-8')
    if isinstance(value, str):
        return str_to_bool(value.strip())
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise TypeError('{!r} cannot be converted to bool'.format(value))


def to_decimal(value):
    if isinstance(value, bool):
        raise TypeError('bool is not accepted as Decimal')
    if isinstance(value, (bytes, bytearray)):
        value = value.decode('utf-8')
    if isinstance(value, str):
        value = value.strip()
    elif isinstance(value, float):
        value = str(value)
    elif not isinstance(value, (int, decimal.Decimal)):
        raise TypeError('{!r} cannot be converted to Decimal'.format(value))
    return decimal.Decimal(value)


def to_date(value):
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode('utf-8')
    if isinstance(value, str):
        # e.g.: '2013-06-12', '20130612'
        return datetime.date.fromisoformat(value.strip())
    raise TypeError('{!r} cannot be converted to date'.format(value))


def to_datetime(value):
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode('utf-8')
    if isinstance(value, str):
        text = value.strip()
        if not DATE_FOLLOWED_BY_TIME_REGEX.search(text):
            raise ValueError('{!a} lacks the time part'.format(text))
        # e.g.: '2013-06-12T10:02:04', '2013-06-12 10:02Z' (a TZ-aware one)
        return datetime.datetime.fromisoformat(text)
    raise TypeError('{!r} cannot be converted to datetime'.format(value))


BUILTIN_CONVERTERS = {
    str: to_str,
    'String': to_str,
    int: to_int,
    'Integer': to_int,
    float: to_float,
    'Float': to_float,
    bool: to_bool,
    'Boolean': to_bool,
    decimal.Decimal: to_decimal,
    'Decimal': to_decimal,
    datetime.date: to_date,
    'Date': to_date,
    datetime.datetime: to_datetime,
    'DateTime': to_datetime,
}


class CoercionAdapter(object):

    """
    The type-conversion contract used by the parser.

    Constructor kwargs:
        `converters` (optional):
            A mapping of target types/tags to converter callables (each
            taking a raw value and returning the converted one, raising
            :exc:`TypeError` or :exc:`ValueError` on failure); they
            override the built-in ones.
    """

    def __init__(self, converters=None):
        self._converters = dict(BUILTIN_CONVERTERS)
        if converters:
            self._converters.update(converters)

    def register(self, target_type, converter):
        """
        Register a converter for a target type (a class or a tag).

        >>> adapter = CoercionAdapter()
        >>> adapter.knows('Upper')
        False
        >>> adapter.register('Upper', lambda value: str(value).upper())
        >>> adapter.knows('Upper')
        True
        >>> adapter.coerce('peter', 'Upper')
        'PETER'
        """
        if not callable(converter):
            raise TypeError('{!r} is not callable'.format(converter))
        self._converters[target_type] = converter

    def knows(self, target_type):
        return target_type in self._converters or isinstance(target_type, type)

    def coerce(self, raw_value, target_type):
        """
        Convert the raw value to the target type.

        Raises:
            :exc:`~reprspec.exceptions.TypeMismatchError` -- if the
            conversion fails;
            :exc:`~reprspec.exceptions.SchemaError` -- if the target
            type is unknown.
        """
        converter = self._converters.get(target_type)
        if converter is None:
            if not isinstance(target_type, type):
                raise SchemaError('unknown coercion target type {!r}'.format(target_type))
            if isinstance(raw_value, target_type):
                return raw_value
            converter = target_type
        try:
            return converter(raw_value)
        except (TypeError, ValueError, ArithmeticError) as exc:
            LOGGER.debug('Cannot coerce %a to %a (%s)', raw_value, target_type, exc)
            raise TypeMismatchError(raw_value=raw_value, target_type=target_type) from exc


#: The adapter used when none is specified explicitly (tags registered
#: in it are also the ones accepted by the `type` declaration option).
default_coercion_adapter = CoercionAdapter()
