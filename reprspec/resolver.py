# Copyright (c) 2026 NASK. All rights reserved.

"""
Resolution of the schemas governing nested values.

The rules (for each value of a property, or each element of a
collection/hash property):

* if `extend` is specified, it determines the schema; when rendering,
  the schema is just applied to the existing value (the value itself
  is not altered in any way); when parsing, a new instance of the
  `class` type is made first, and then the schema is applied to it
  (so, when parsing, `extend` requires `class`);

* otherwise, if `class` is specified, the schema registered for that
  class is used;

* otherwise: raw values (scalars, plain lists/dicts) need no schema,
  whereas any other value is rendered with the schema registered for
  its type.

`extend` can be a schema, a `Representer` subclass or a *strategy*:
a callable that takes the represented object (when parsing: the newly
made instance) and returns a schema (or a `Representer` subclass).

All resolution failures are signalled with :exc:`SchemaError` (at
traversal time, as the actual type of a value may be known only then).
"""


import collections.abc as collections_abc

from reprspec.class_helpers import (
    is_raw_scalar,
    is_seq,
)
from reprspec.exceptions import (
    BindingError,
    SchemaError,
)
from reprspec.log_helpers import get_logger
from reprspec.schema import (
    OBJECT,
    as_schema,
    default_registry,
)


LOGGER = get_logger(__name__)


class NestedSchemaResolver(object):

    def __init__(self, registry=None):
        self.registry = registry if registry is not None else default_registry

    def schema_for_render(self, spec, value):
        """
        Get the schema for rendering the value (`None` for raw values).

        Args:
            `spec`: A `NestedSpec` or `None`.
            `value`: The (non-`None`) value to be rendered.
        """
        if spec is not None and spec.extend is not None:
            return self._get_extend_schema(spec.extend, value)
        if spec is not None and spec.type is not None:
            return self._get_registered_schema(spec.type)
        if (is_raw_scalar(value)
                or isinstance(value, collections_abc.Mapping)
                or is_seq(value)):
            return None
        schema = self.registry.lookup(type(value))
        if schema is None:
            raise SchemaError('cannot resolve the schema for {!r} (no `class`/`extend` '
                              'specified and no schema registered for the type)'
                              .format(type(value)))
        return self._verified_object_schema(schema)

    def instance_and_schema_for_parse(self, spec):
        """
        Make a new instance and get the schema for parsing into it.

        Args:
            `spec`: A `NestedSpec` or `None`.

        Returns:
            An `(instance, schema)` pair -- or `None` if `spec` does not
            specify any nested schema (i.e., the parsed value is to be a
            raw one).
        """
        if spec is None or (spec.type is None and spec.extend is None):
            return None
        if spec.type is None:
            raise SchemaError('cannot parse a nested value: `extend` without `class` '
                              'does not specify what to instantiate')
        instance = self.instantiate(spec.type)
        if spec.extend is not None:
            schema = self._get_extend_schema(spec.extend, instance)
        else:
            schema = self._get_registered_schema(spec.type)
        return instance, schema

    def instantiate(self, type_):
        try:
            return type_()
        except TypeError as exc:
            raise BindingError('cannot instantiate {!r} without arguments ({})'.format(
                type_, exc)) from exc

    def _get_extend_schema(self, extend, obj):
        schema = as_schema(extend)
        if schema is None:
            schema = as_schema(extend(obj))
            if schema is None:
                raise SchemaError('the `extend` strategy {!r} returned no schema for '
                                  '{!r}'.format(extend, type(obj)))
            LOGGER.debug('The `extend` strategy %a resolved %a for %a', extend, schema, type(obj))
        return self._verified_object_schema(schema)

    def _get_registered_schema(self, type_):
        schema = self.registry.lookup(type_)
        if schema is None:
            raise SchemaError('no schema registered for {!r}'.format(type_))
        return self._verified_object_schema(schema)

    def _verified_object_schema(self, schema):
        if schema.kind != OBJECT:
            raise SchemaError('a nested schema must be an object schema '
                              '(got: {!r})'.format(schema))
        return schema
