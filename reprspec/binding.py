# Copyright (c) 2026 NASK. All rights reserved.

"""
Runtime pairing of property descriptors with host objects.

A host object can be any object with attributes (the property name
being the attribute name) or any mapping (the property name being the
key; a missing key means `None`).
"""


import collections.abc as collections_abc

from reprspec.class_helpers import attr_repr
from reprspec.exceptions import BindingError


class HostView(object):

    r"""
    A read-only view of a host object (given to `if` conditions).

    >>> class Person(object):
    ...     forename = 'Peter'
    ...
    >>> view = HostView(Person())
    >>> view.forename
    'Peter'
    >>> view['forename']
    'Peter'
    >>> view.get('surename', 'Pan')
    'Pan'
    >>> view.forename = 'Captain'           # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    AttributeError: ...

    >>> view = HostView({'forename': 'Wendy'})
    >>> view.forename, view.get('surename')
    ('Wendy', None)
    """

    __slots__ = ('_host',)

    def __init__(self, host):
        object.__setattr__(self, '_host', host)

    def __getattr__(self, name):
        host = object.__getattribute__(self, '_host')
        if isinstance(host, collections_abc.Mapping):
            try:
                return host[name]
            except KeyError:
                raise AttributeError(name) from None
        return getattr(host, name)

    def __getitem__(self, name):
        try:
            return self.__getattr__(name)
        except AttributeError:
            raise KeyError(name) from None

    def get(self, name, default=None):
        try:
            return self.__getattr__(name)
        except AttributeError:
            return default

    def __setattr__(self, name, value):
        raise AttributeError('{} is read-only'.format(self.__class__.__qualname__))

    def __delattr__(self, name):
        raise AttributeError('{} is read-only'.format(self.__class__.__qualname__))

    def __repr__(self):
        return '<{} of {!r}>'.format(self.__class__.__qualname__,
                                     object.__getattribute__(self, '_host'))


class Binding(object):

    """
    A pairing of a property descriptor with a concrete host object
    (alive for one traversal step).
    """

    __slots__ = ('descriptor', 'host')

    __repr__ = attr_repr('descriptor', 'host')

    def __init__(self, descriptor, host):
        self.descriptor = descriptor
        self.host = host

    def get(self):
        name = self.descriptor.name
        if isinstance(self.host, collections_abc.Mapping):
            return self.host.get(name)
        try:
            return getattr(self.host, name)
        except AttributeError as exc:
            raise BindingError('{!r} has no readable accessor {!r}'.format(
                type(self.host), name)) from exc

    def set(self, value):
        name = self.descriptor.name
        if isinstance(self.host, collections_abc.MutableMapping):
            self.host[name] = value
            return
        if isinstance(self.host, collections_abc.Mapping):
            raise BindingError('{!r} is a read-only mapping'.format(type(self.host)))
        try:
            setattr(self.host, name, value)
        except AttributeError as exc:
            raise BindingError('{!r} has no writable accessor {!r}'.format(
                type(self.host), name)) from exc

    def condition_holds(self):
        condition = self.descriptor.condition
        if condition is None:
            return True
        return bool(condition(HostView(self.host)))
