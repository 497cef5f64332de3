# Copyright (c) 2026 NASK. All rights reserved.

"""
Property descriptors: the leaf data of a schema.

A *property descriptor* keeps the whole configuration of one declared
property.  Descriptors are made (and the declaration options are
validated) by :func:`make_descriptor`; they are immutable.

>>> d = make_descriptor('forename', SCALAR, {'from': 'first_name'})
>>> d.name, d.document_key, d.cardinality
('forename', 'first_name', 'scalar')
>>> d.parent_key
'first_name'

>>> make_descriptor('forename', SCALAR, {'as': 'first_name'})  # doctest: +ELLIPSIS
Traceback (most recent call last):
  ...
reprspec.exceptions.SchemaError: illegal option(s) ['as'] of property 'forename' (legal options: ...) (at 'forename')
"""


import collections.abc as collections_abc
import dataclasses
from typing import (
    Any,
    Callable,
    Optional,
)

from reprspec.class_helpers import attr_repr
from reprspec.exceptions import SchemaError


SCALAR = 'scalar'
COLLECTION = 'collection'
HASH = 'hash'

CARDINALITIES = (SCALAR, COLLECTION, HASH)


#: The (closed) set of legal declaration options.
OPTION_NAMES = frozenset({
    'class',
    'extend',
    'from',
    'if',
    'render_nil',
    'wrap',
    'attribute',
    'style',
    'items',
    'values',
    'default',
    'type',
})

#: Spellings accepted for the options whose names are Python keywords.
KEYWORD_OPTION_ALIASES = {
    'class_': 'class',
    'from_': 'from',
    'if_': 'if',
}

#: Legal values of the `style` option.
STYLES = ('flow', 'inline', 'block')


class _MissingType(object):

    def __repr__(self):
        return '<MISSING>'

    def __bool__(self):
        return False

#: Marker of an unspecified default.
MISSING = _MissingType()


@dataclasses.dataclass(frozen=True)
class NestedSpec:

    """
    The `class`/`extend` pair governing the values of a property.

    `type` is a class (whose schema is looked up in a registry, and
    whose instances are constructed when parsing); `extend` is a schema,
    a `Representer` subclass, or a callable that takes the represented
    object and returns one of them.
    """

    type: Optional[type] = None
    extend: Any = None


@dataclasses.dataclass(frozen=True)
class CoercionTarget:

    type: Any = None
    default: Any = MISSING

    @property
    def has_default(self):
        return self.default is not MISSING


@dataclasses.dataclass(frozen=True)
class PropertyDescriptor:

    """
    The full configuration of one declared property.

    Attributes:
        `name`:
            The accessor name on the host object.
        `document_key`:
            The key/tag used in the document (by default: `name`).
        `cardinality`:
            One of: `'scalar'`, `'collection'`, `'hash'`.
        `nested` (`NestedSpec` or `None`):
            The nested-schema pair governing the property's value (for
            collections and hashes: the value's elements).
        `condition` (callable or `None`):
            A predicate taking a read-only view of the host object.
        `render_nil` (bool):
            Whether a `None` value is to be emitted as an explicit null.
        `attribute` (bool):
            Whether the value is to be placed as a tag attribute.
        `wrap_tag` (str or `None`):
            The key of the container node for a collection/hash.
        `style` (str or `None`):
            The sequence layout hint.
        `coercion` (`CoercionTarget` or `None`):
            The coercion target type and/or default value.
    """

    name: str
    document_key: str
    cardinality: str = SCALAR
    nested: Optional[NestedSpec] = None
    condition: Optional[Callable] = None
    render_nil: bool = False
    attribute: bool = False
    wrap_tag: Optional[str] = None
    style: Optional[str] = None
    coercion: Optional[CoercionTarget] = None

    __repr__ = attr_repr('name', 'document_key', 'cardinality')

    @property
    def parent_key(self):
        """The key this property occupies in its parent mapping node."""
        return self.wrap_tag if self.wrap_tag is not None else self.document_key

    @property
    def coercion_type(self):
        return self.coercion.type if self.coercion is not None else None

    @property
    def has_default(self):
        return self.coercion is not None and self.coercion.has_default


def make_descriptor(name, cardinality, options):
    """
    Make a :class:`PropertyDescriptor`, validating declaration options.

    Args:
        `name`: The property name.
        `cardinality`: One of `SCALAR`, `COLLECTION`, `HASH`.
        `options`: A dict of declaration options (see `OPTION_NAMES`).

    Returns:
        A new :class:`PropertyDescriptor` instance.

    Raises:
        :exc:`~reprspec.exceptions.SchemaError` -- if the name or any
        of the options is invalid.
    """
    with SchemaError.sublocation(name):
        if not isinstance(name, str) or not name:
            raise SchemaError('property name must be a non-empty str (got: {!r})'.format(name))
        if cardinality not in CARDINALITIES:
            raise SchemaError('unknown cardinality {!r}'.format(cardinality))
        opts = normalize_options(options, 'property {!r}'.format(name))
        document_key = opts.get('from', name)
        if not isinstance(document_key, str) or not document_key:
            raise SchemaError('the `from` option must be a non-empty str')
        condition = opts.get('if')
        if condition is not None and not callable(condition):
            raise SchemaError('the `if` option must be callable')
        render_nil = _verified_bool(opts, 'render_nil')
        attribute = _verified_bool(opts, 'attribute')
        if attribute and cardinality != SCALAR:
            raise SchemaError('only scalar properties can be bound to attributes')
        wrap_tag = opts.get('wrap')
        if wrap_tag is not None:
            if cardinality == SCALAR:
                raise SchemaError('the `wrap` option is only legal for collections and hashes')
            if not isinstance(wrap_tag, str) or not wrap_tag:
                raise SchemaError('the `wrap` option of a property must be a non-empty str')
        style = opts.get('style')
        if style is not None:
            if cardinality != COLLECTION:
                raise SchemaError('the `style` option is only legal for collections')
            if style not in STYLES:
                raise SchemaError('the `style` option must be one of: {}'.format(
                    ', '.join(STYLES)))
        if 'items' in opts and cardinality != COLLECTION:
            raise SchemaError('the `items` option is only legal for collections')
        if 'values' in opts and cardinality != HASH:
            raise SchemaError('the `values` option is only legal for hashes')
        return PropertyDescriptor(
            name=name,
            document_key=document_key,
            cardinality=cardinality,
            nested=_make_nested_spec(opts),
            condition=condition,
            render_nil=render_nil,
            attribute=attribute,
            wrap_tag=wrap_tag,
            style=style,
            coercion=_make_coercion_target(opts))


def normalize_options(options, owner_label, legal_names=OPTION_NAMES):
    """
    Translate keyword-alias spellings (`class_` etc.) and reject
    illegal option names.

    >>> normalize_options({'class_': int, 'render_nil': True}, 'x')
    {'class': <class 'int'>, 'render_nil': True}
    """
    opts = {}
    for key, value in options.items():
        canonical = KEYWORD_OPTION_ALIASES.get(key, key)
        if canonical in opts:
            raise SchemaError('option {!r} given more than once (for {})'.format(
                canonical, owner_label))
        opts[canonical] = value
    illegal = sorted(set(opts).difference(legal_names))
    if illegal:
        raise SchemaError('illegal option(s) {!r} of {} (legal options: {})'.format(
            illegal, owner_label, ', '.join(sorted(legal_names))))
    return opts


def make_nested_spec(options, owner_label):
    """
    Make a :class:`NestedSpec` from an `items`/`values` option
    (or from the options of a top-level collection/hash schema).

    Returns `None` if neither `class` nor `extend` is given.
    """
    opts = normalize_options(options, owner_label, legal_names={'class', 'extend'})
    return _make_nested_spec(opts)


def _make_nested_spec(opts):
    element_opts = opts.get('items', opts.get('values'))
    if element_opts is not None:
        if 'class' in opts or 'extend' in opts:
            raise SchemaError('the `class`/`extend` options cannot be combined '
                              'with the `items`/`values` option')
        if not isinstance(element_opts, collections_abc.Mapping):
            raise SchemaError('the `items`/`values` option must be a dict')
        return make_nested_spec(element_opts, 'the `items`/`values` option')
    type_ = opts.get('class')
    extend = opts.get('extend')
    if type_ is None and extend is None:
        return None
    if type_ is not None and not isinstance(type_, type):
        raise SchemaError('the `class` option must be a class (got: {!r})'.format(type_))
    if extend is not None:
        _verify_extend(extend)
    return NestedSpec(type=type_, extend=extend)


def _verify_extend(extend):
    from reprspec.schema._schema import as_schema
    if as_schema(extend) is None and not callable(extend):
        raise SchemaError('the `extend` option must be a schema, a Representer '
                          'subclass or a callable (got: {!r})'.format(extend))


def _make_coercion_target(opts):
    if 'type' not in opts and 'default' not in opts:
        return None
    type_ = opts.get('type')
    # (tags are looked up by the parser's coercion adapter)
    if type_ is not None and not (isinstance(type_, type) or (isinstance(type_, str) and type_)):
        raise SchemaError('the `type` option must be a class or a non-empty '
                          'tag string (got: {!r})'.format(type_))
    return CoercionTarget(type=type_, default=opts.get('default', MISSING))


def _verified_bool(opts, opt_name):
    value = opts.get(opt_name, False)
    if not isinstance(value, bool):
        raise SchemaError('the `{}` option must be a bool (got: {!r})'.format(opt_name, value))
    return value
