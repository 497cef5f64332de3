# Copyright (c) 2026 NASK. All rights reserved.

import collections.abc as collections_abc
import contextlib
import dataclasses
from typing import (
    Any,
    FrozenSet,
)

from reprspec.exceptions import SchemaError


@dataclasses.dataclass(frozen=True)
class CallOptions:

    r"""
    Call-time options of one render/parse call.

    Attributes:
        `include` (frozenset of str):
            If non-empty: the names of the only properties of the
            top-level schema to be processed.
        `exclude` (frozenset of str):
            The names of the properties of the top-level schema not to
            be processed.
        `wrap`:
            `None` (the schema-level `wrap` option applies), `False`
            (no wrapping), `True` (wrapping under the default key) or
            an explicit wrap key.

    These options never alter the (shared) schema; `include`/`exclude`
    combine with the `if` conditions of the properties.

    >>> options = CallOptions.make({'exclude': ['surename']}, wrap=False)
    >>> options
    CallOptions(include=frozenset(), exclude=frozenset({'surename'}), wrap=False)
    >>> options.admits('forename'), options.admits('surename')
    (True, False)
    >>> CallOptions.make(options) is options
    True
    >>> CallOptions.make(include='forename').admits('surename')
    False
    >>> CallOptions.make(colour='blue')          # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    SchemaError: ...
    """

    include: FrozenSet[str] = frozenset()
    exclude: FrozenSet[str] = frozenset()
    wrap: Any = None

    @classmethod
    def make(cls, options=None, **kwargs):
        """
        Make an instance from another instance, a mapping (or `None`)
        and/or keyword arguments (the latter take precedence).
        """
        if isinstance(options, CallOptions):
            if not kwargs:
                return options
            kwargs = dict(dataclasses.asdict(options), **kwargs)
        elif options is not None:
            if not isinstance(options, collections_abc.Mapping):
                raise TypeError('options must be a CallOptions instance or '
                                'a mapping (got: {!r})'.format(options))
            kwargs = dict(options, **kwargs)
        illegal = sorted(set(kwargs).difference(f.name for f in dataclasses.fields(cls)))
        if illegal:
            raise SchemaError('illegal call option(s): {!r}'.format(illegal))
        for key in ('include', 'exclude'):
            if key in kwargs:
                kwargs[key] = _as_name_set(kwargs[key])
        return cls(**kwargs)

    def admits(self, name):
        if self.include and name not in self.include:
            return False
        return name not in self.exclude

    def verify_names(self, schema):
        """
        Raise :exc:`~reprspec.exceptions.SchemaError` if `include` or
        `exclude` contains names not declared in the schema.
        """
        unknown = sorted((self.include | self.exclude).difference(schema.property_names))
        if unknown:
            raise SchemaError('call option(s) `include`/`exclude` refer to undeclared '
                              'properties: {!r}'.format(unknown))


def _as_name_set(names):
    if names is None:
        return frozenset()
    if isinstance(names, str):
        return frozenset({names})
    return frozenset(names)


class TraversalContext(object):

    r"""
    The state of one render/parse traversal: the recursion guard.

    >>> ctx = TraversalContext(max_depth=2)
    >>> with ctx.entering():
    ...     with ctx.entering():
    ...         ctx.depth
    2
    >>> with ctx.entering():
    ...     with ctx.entering():
    ...         with ctx.entering():
    ...             pass
    Traceback (most recent call last):
      ...
    reprspec.exceptions.SchemaError: maximum nesting depth (2) exceeded (a self-referential schema without a terminating condition?)

    >>> parent = {}
    >>> with ctx.entering(parent):
    ...     with ctx.entering(parent):
    ...         pass
    Traceback (most recent call last):
      ...
    reprspec.exceptions.SchemaError: reference cycle detected (an object of <class 'dict'> contains itself)
    >>> ctx.depth
    0
    """

    def __init__(self, max_depth):
        self.max_depth = max_depth
        self.depth = 0
        self._active_obj_ids = set()

    @contextlib.contextmanager
    def entering(self, obj=None):
        """
        Enter one nesting level (optionally: of the given object, to
        detect reference cycles).
        """
        if self.depth >= self.max_depth:
            raise SchemaError('maximum nesting depth ({}) exceeded (a self-referential '
                              'schema without a terminating condition?)'.format(self.max_depth))
        obj_id = id(obj) if obj is not None else None
        if obj_id is not None:
            if obj_id in self._active_obj_ids:
                raise SchemaError('reference cycle detected (an object of {!r} '
                                  'contains itself)'.format(type(obj)))
            self._active_obj_ids.add(obj_id)
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1
            if obj_id is not None:
                self._active_obj_ids.discard(obj_id)
