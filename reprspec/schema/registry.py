# Copyright (c) 2026 NASK. All rights reserved.

import threading

from reprspec.exceptions import SchemaError
from reprspec.log_helpers import get_logger
from reprspec.schema._schema import verified_as_schema


LOGGER = get_logger(__name__)


class SchemaRegistry(object):

    r"""
    A static map of types to the schemas that represent their instances.

    Lookups follow the MRO of the given type, so a schema registered
    for a base class also governs its subclasses (unless any of them
    has its own schema registered).

    >>> from reprspec.schema import SchemaBuilder
    >>> registry = SchemaRegistry()
    >>> location_schema = SchemaBuilder('Location').declare_property('title').build()
    >>> class Location(object): pass
    >>> class Island(Location): pass
    >>> registry.register(Location, location_schema)
    >>> registry.lookup(Island) is location_schema
    True
    >>> registry.lookup(int) is None
    True
    >>> Location in registry, Island in registry
    (True, False)

    Registering another schema for an already registered type is an
    error (registering the same one again is not):

    >>> registry.register(Location, location_schema)
    >>> registry.register(Location, SchemaBuilder('Other').build())
    ... # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    SchemaError: ...
    """

    def __init__(self):
        self._type_to_schema = {}
        self._lock = threading.Lock()

    def __contains__(self, type_):
        return type_ in self._type_to_schema

    def register(self, type_, schema):
        """
        Register the schema (or `Representer` subclass) for the type.
        """
        if not isinstance(type_, type):
            raise SchemaError('{!r} is not a class'.format(type_))
        schema = verified_as_schema(schema)
        with self._lock:
            registered = self._type_to_schema.get(type_)
            if registered is not None and registered is not schema:
                raise SchemaError('another schema already registered for {!r}'.format(type_))
            self._type_to_schema[type_] = schema
        LOGGER.debug('Registered %a for %a', schema, type_)

    def unregister(self, type_):
        with self._lock:
            self._type_to_schema.pop(type_, None)

    def lookup(self, type_):
        """
        Get the schema registered for the type (or for the nearest
        class in its MRO); `None` if there is no such schema.
        """
        for klass in type_.__mro__:
            schema = self._type_to_schema.get(klass)
            if schema is not None:
                return schema
        return None

    def represented_by(self, schema):
        """
        Get a class decorator that registers the schema for the class.

        >>> from reprspec.schema import SchemaBuilder
        >>> registry = SchemaRegistry()
        >>> schema = SchemaBuilder('Song').declare_property('title').build()
        >>> @registry.represented_by(schema)
        ... class Song(object):
        ...     title = None
        ...
        >>> registry.lookup(Song) is schema
        True
        """
        def decorator(cls):
            self.register(cls, schema)
            return cls
        return decorator


#: The registry used when none is specified explicitly.
default_registry = SchemaRegistry()


def represented_by(schema, registry=None):
    """
    Get a class decorator that registers the schema for the class in
    the given registry (by default: in `default_registry`).
    """
    if registry is None:
        registry = default_registry
    return registry.represented_by(schema)
