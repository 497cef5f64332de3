# Copyright (c) 2026 NASK. All rights reserved.

import re

from reprspec.regexes import CAMEL_CASE_BOUNDARY_REGEX


def ascii_str(obj):

    r"""
    Safely convert the given object to an ASCII-only :class:`str`.

    This function does its best to obtain a string representation
    (possibly :class:`str`-like or :class:`bytes`-like converted to str,
    though :func:`repr` can also be used as the last-resort fallback)
    and then escaping any non-ASCII characters -- *not raising* any
    encoding/decoding exceptions.

    The result is an ASCII :class:`str`, with non-ASCII characters escaped
    using Python literal notation (``\x...``, ``\u...``, ``\U...``).

    >>> ascii_str('')
    ''
    >>> ascii_str(b'')
    ''
    >>> ascii_str('Peter Pan')   # pure ASCII str => unchanged
    'Peter Pan'
    >>> ascii_str(b'Peter Pan')
    'Peter Pan'

    >>> ascii_str('Ech, ale błąd!')       # non-pure-ASCII-str => escaped
    'Ech, ale b\\u0142\\u0105d!'
    >>> ascii_str(b'Ech, ale b\xc5\x82\xc4\x85d!')   # UTF-8 bytes => decoded + escaped
    'Ech, ale b\\u0142\\u0105d!'
    >>> ascii_str(b'\xee\xdd abc')                   # non-UTF-8 bytes => surrogate-escaped
    '\\udcee\\udcdd abc'

    >>> ascii_str(ValueError('Ech, ale błąd!'))
    'Ech, ale b\\u0142\\u0105d!'
    >>> ascii_str(42)
    '42'

    >>> class Nasty(object):
    ...     def __str__(self): raise ValueError
    ...     def __repr__(self): return u'really nasŧy!!!'
    ...
    >>> ascii_str(Nasty())
    'really nas\\u0167y!!!'
    """
    if isinstance(obj, str):
        s = obj
    else:
        if isinstance(obj, memoryview):
            obj = bytes(obj)
        if isinstance(obj, (bytes, bytearray)):
            s = obj.decode('utf-8', 'surrogateescape')
        else:
            try:
                s = str(obj)
            except ValueError:
                s = repr(obj)
    return s.encode('ascii', 'backslashreplace').decode('ascii')


def str_to_bool(s):
    """
    Return True or False, given one of the known strings (see examples below).

    >>> str_to_bool('1')
    True
    >>> str_to_bool('y')
    True
    >>> str_to_bool('yes')
    True
    >>> str_to_bool('Yes')  # note: checks are case-insensitive
    True
    >>> str_to_bool('t')
    True
    >>> str_to_bool('true')
    True
    >>> str_to_bool('on')
    True

    >>> str_to_bool('0')
    False
    >>> str_to_bool('n')
    False
    >>> str_to_bool('nO')
    False
    >>> str_to_bool('f')
    False
    >>> str_to_bool('false')
    False
    >>> str_to_bool('off')
    False

    Other string values cause ValueError:

    >>> str_to_bool('unknown')        # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...
    >>> str_to_bool('')               # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    ValueError: ...

    Non-str values cause TypeError:

    >>> str_to_bool(b'yes')  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    TypeError: ...
    >>> str_to_bool(True)             # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    TypeError: ...
    >>> str_to_bool(None)             # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    TypeError: ...
    """
    if not isinstance(s, str):
        raise TypeError('{!a} is not a str'.format(s))
    try:
        return LOWERCASE_TO_BOOL[s.lower()]
    except KeyError:
        raise ValueError('{!a} is not a valid boolean flag'.format(s)) from None

LOWERCASE_TO_BOOL = {
    '1': True, 'y': True, 'yes': True, 't': True, 'true': True, 'on': True,
    '0': False, 'n': False, 'no': False, 'f': False, 'false': False, 'off': False,
}


def as_snake_case(name):
    """
    Convert a *CamelCase* (or *mixedCase*) name to the *snake_case* form.

    >>> as_snake_case('Song')
    'song'
    >>> as_snake_case('MusicAlbum')
    'music_album'
    >>> as_snake_case('HTTPRequest')
    'http_request'
    >>> as_snake_case('already_snake')
    'already_snake'
    >>> as_snake_case('Band 2 Songs')
    'band_2_songs'
    """
    name = CAMEL_CASE_BOUNDARY_REGEX.sub('_', name.strip())
    return _NON_WORD_CHARS_REGEX.sub('_', name).lower()

_NON_WORD_CHARS_REGEX = re.compile(r'[^0-9a-zA-Z_]+', re.ASCII)
