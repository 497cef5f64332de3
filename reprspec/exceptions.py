# Copyright (c) 2026 NASK. All rights reserved.

"""
Exception classes raised by the *reprspec* machinery.

All of them are subclasses of :exc:`RepresenterError`:

* :exc:`SchemaError` -- a schema is (or turns out to be, at traversal
  time) ill-formed;
* :exc:`BindingError` -- a host object does not provide what a
  property declaration requires;
* :exc:`TypeMismatchError` -- a value cannot be coerced (or a document
  node has a shape other than the one required);
* :exc:`MalformedDocumentError` -- a document cannot be (de)serialized.

Errors raised during a render/parse traversal carry the *location* of
the offending item (see :meth:`RepresenterError.sublocation`).
"""


import contextlib

from reprspec.encoding_helpers import ascii_str


#
# Generic mix-ins
#

class _ErrorWithPublicMessageMixin(object):

    r"""
    A mix-in class that provides the :attr:`public_message` property.

    The value of this property is a string.  It is taken either from
    the `public_message` constructor keyword argument or -- if the
    argument was not specified -- from the value of the
    :attr:`default_public_message` attribute (which, in subclasses,
    can also be a property).

    The :class:`str` conversion provided by the class uses the value
    of :attr:`public_message`:

    >>> class SomeError(_ErrorWithPublicMessageMixin, Exception):
    ...     pass
    ...
    >>> str(SomeError('a', 'b'))  # using attribute default_public_message
    'Internal error.'
    >>> str(SomeError('a', 'b', public_message='Spam.'))
    'Spam.'

    The :func:`repr` conversion results in a programmer-readable
    representation (containing the class name, :func:`repr`-formatted
    constructor arguments and the :attr:`public_message` property):

    >>> SomeError('a', 'b')   # using class's default_public_message
    <SomeError: args=('a', 'b'); public_message='Internal error.'>
    >>> SomeError('a', 'b', public_message='Spam.')
    <SomeError: args=('a', 'b'); public_message='Spam.'>
    """

    #: (overridable in subclasses)
    default_public_message = 'Internal error.'

    def __init__(self, *args, **kwargs):
        try:
            public_message = kwargs.pop('public_message')
        except KeyError:
            pass
        else:
            self._public_message = str(public_message)
        try:
            super(_ErrorWithPublicMessageMixin, self).__init__(*args, **kwargs)
        except TypeError:
            if kwargs:
                raise TypeError(
                    'illegal keyword arguments for {} constructor: {}'.format(
                        self.__class__.__name__,
                        ', '.join(sorted(map(repr, kwargs)))))
            else:
                raise

    @property
    def public_message(self):
        """The aforementioned property."""
        try:
            return self._public_message
        except AttributeError:
            # (not cached, as in subclasses `default_public_message`
            # can be a @property whose value changes over time)
            return str(self.default_public_message)

    def __str__(self):
        return self.public_message

    def __repr__(self):
        return ('<{0.__class__.__name__}: args={0.args!r}; '
                'public_message={0.public_message!r}>'.format(self))


#
# Public exception classes
#

class RepresenterError(_ErrorWithPublicMessageMixin, Exception):

    r"""
    The base class of all *reprspec*-specific exceptions.

    The first constructor argument (if any) should be a message
    describing the problem.  The message, followed by the location
    of the problem (if known), makes the :attr:`public_message`:

    >>> exc = RepresenterError('something went wrong')
    >>> str(exc)
    'something went wrong'
    >>> exc.location
    []

    >>> with RepresenterError.sublocation('songs'):
    ...     with RepresenterError.sublocation(3):
    ...         raise exc
    Traceback (most recent call last):
      ...
    reprspec.exceptions.RepresenterError: something went wrong (at 'songs.3')
    >>> exc.location
    ['songs', 3]
    >>> exc.location_str
    'songs.3'

    >>> str(RepresenterError())
    'Representation error.'
    >>> str(RepresenterError('Błąd!'))   # (non-ASCII characters are escaped)
    'B\\u0142\\u0105d!'
    """

    def __init__(self, *args, **kwargs):
        self.location = []
        super(RepresenterError, self).__init__(*args, **kwargs)

    @property
    def location_str(self):
        return '.'.join(map(ascii_str, self.location))

    @property
    def default_public_message(self):
        message = ascii_str(self.args[0]) if self.args else 'Representation error.'
        if self.location:
            return '{} (at {!r})'.format(message, self.location_str)
        return message

    @classmethod
    @contextlib.contextmanager
    def sublocation(cls, key):
        """
        A context manager that, if an instance of the class (or of its
        subclass) is raised inside the `with` block, prepends the given
        `key` (a property name, document key or collection index) to
        the exception's :attr:`location`.
        """
        try:
            yield
        except cls as exc:
            exc.location.insert(0, key)
            raise


class SchemaError(RepresenterError):

    """
    Raised when a schema is ill-formed (declare time) or when nested
    schema resolution fails (traversal time).

    Also raised when the recursion guard is tripped.
    """


class BindingError(RepresenterError):

    """
    Raised when a host object lacks a required accessor (or holds a
    value whose shape contradicts the property declaration).
    """


class TypeMismatchError(RepresenterError):

    r"""
    Raised when a value cannot be coerced to the declared target type.

    Keyword-only constructor arguments (required):
        `raw_value`:
            The value that could not be coerced.
        `target_type`:
            The target type (a class or a type tag).

    Both are exposed as instance attributes (for possible later
    inspection).

    >>> exc = TypeMismatchError(raw_value='abc', target_type=int)
    >>> exc.raw_value
    'abc'
    >>> exc.target_type
    <class 'int'>
    >>> str(exc)
    "cannot coerce 'abc' to int"

    >>> str(TypeMismatchError('expected a mapping', raw_value=[1], target_type='hash'))
    'expected a mapping'
    """

    def __init__(self, *args, raw_value, target_type, **kwargs):
        self.raw_value = raw_value
        self.target_type = target_type
        if not args:
            args = ('cannot coerce {!r} to {}'.format(
                raw_value,
                getattr(target_type, '__qualname__', target_type)),)
        super(TypeMismatchError, self).__init__(*args, **kwargs)


class MalformedDocumentError(RepresenterError):

    """
    Raised by format adapters when the input data is not a valid
    document (and when a document lacks the root wrapper required by
    a wrapped schema).
    """
