# Copyright (c) 2026 NASK. All rights reserved.

import collections

from pyramid.decorator import reify

from reprspec.class_helpers import attr_repr
from reprspec.encoding_helpers import as_snake_case
from reprspec.exceptions import SchemaError
from reprspec.log_helpers import get_logger
from reprspec.schema.descriptors import (
    COLLECTION,
    HASH,
    SCALAR,
    NestedSpec,
    PropertyDescriptor,
    make_descriptor,
    make_nested_spec,
)


LOGGER = get_logger(__name__)


#
# Schema kinds
#

OBJECT = 'object'

SCHEMA_KINDS = (OBJECT, COLLECTION, HASH)


class RepresenterSchema(object):

    r"""
    An ordered, immutable set of property descriptors plus the
    schema-level options.

    Constructor args/kwargs:
        `descriptors` (default: empty tuple):
            An iterable of :class:`PropertyDescriptor` instances (their
            order is the rendering order).
        `name` (default: `None`):
            The schema name (used to derive the default wrap key).
        `wrap` (default: `None`):
            `None`/`False` (no wrapping), `True` (wrapping under the
            default key, derived from `name`) or an explicit key (`str`).
        `kind` (default: `'object'`):
            `'object'`, `'collection'` (a top-level sequence) or `'hash'`
            (a top-level mapping).
        `element` (default: `None`):
            For the `'collection'`/`'hash'` kinds: the :class:`NestedSpec`
            governing the elements (`None` means raw elements).

    Raises:
        :exc:`~reprspec.exceptions.SchemaError` -- for duplicate property
        names, for document key clashes (properties occupying the same
        key of the same parent node, with the same placement; note that
        collections/hashes wrapped with the same `wrap` tag share one
        container node, so only their document keys must differ), and
        for invalid schema-level options.

    Typically, schemas are made with :class:`SchemaBuilder` or by
    subclassing :class:`~reprspec.representer.Representer`, rather than
    by calling the constructor directly.

    >>> schema = (SchemaBuilder('Person')
    ...           .declare_property('forename')
    ...           .declare_property('surename')
    ...           .build())
    >>> schema
    <RepresenterSchema name='Person', kind='object', property_names=('forename', 'surename'), wrap=None>
    >>> schema.get('forename').document_key
    'forename'
    >>> schema.get('origin') is None
    True
    >>> schema.default_wrap_key()
    'person'
    >>> schema.default_wrap_key(style='as_is')
    'Person'
    """

    __repr__ = attr_repr('name', 'kind', 'property_names', 'wrap')

    def __init__(self, descriptors=(), name=None, wrap=None, kind=OBJECT, element=None):
        self._descriptors = tuple(descriptors)
        self._name = name
        self._wrap = wrap
        self._kind = kind
        self._element = element
        self._verify()

    def _verify(self):
        if self._name is not None and (not isinstance(self._name, str) or not self._name):
            raise SchemaError('schema name must be a non-empty str or None')
        if not (self._wrap is None
                or isinstance(self._wrap, bool)
                or (isinstance(self._wrap, str) and self._wrap)):
            raise SchemaError('the `wrap` option of a schema must be '
                              'a bool, a non-empty str or None')
        if self._kind not in SCHEMA_KINDS:
            raise SchemaError('unknown schema kind {!r}'.format(self._kind))
        if self._kind == OBJECT:
            if self._element is not None:
                raise SchemaError('only collection/hash schemas have the element spec')
        elif self._descriptors:
            raise SchemaError('collection/hash schemas do not declare properties')
        if self._element is not None and not isinstance(self._element, NestedSpec):
            raise SchemaError('element spec must be a NestedSpec instance')
        seen_names = set()
        direct_keys = set()
        container_keys = set()
        wrapped_keys = set()
        for descriptor in self._descriptors:
            if not isinstance(descriptor, PropertyDescriptor):
                raise SchemaError('{!r} is not a PropertyDescriptor instance'.format(descriptor))
            if descriptor.name in seen_names:
                raise SchemaError('property {!r} declared more than once'.format(descriptor.name))
            seen_names.add(descriptor.name)
            if descriptor.wrap_tag is None:
                key = (descriptor.document_key, descriptor.attribute)
                clash = (key in direct_keys
                         or (not descriptor.attribute and descriptor.document_key in container_keys))
                direct_keys.add(key)
            else:
                key = (descriptor.wrap_tag, descriptor.document_key)
                clash = (key in wrapped_keys
                         or (descriptor.wrap_tag, False) in direct_keys)
                wrapped_keys.add(key)
                container_keys.add(descriptor.wrap_tag)
            if clash:
                raise SchemaError('document key {!r} of property {!r} clashes with '
                                  'another property'.format(descriptor.parent_key,
                                                            descriptor.name))

    @property
    def name(self):
        return self._name

    @property
    def wrap(self):
        return self._wrap

    @property
    def kind(self):
        return self._kind

    @property
    def element(self):
        return self._element

    @property
    def descriptors(self):
        return self._descriptors

    @reify
    def property_names(self):
        return tuple(descriptor.name for descriptor in self._descriptors)

    @reify
    def _name_to_descriptor(self):
        return {descriptor.name: descriptor for descriptor in self._descriptors}

    def __iter__(self):
        return iter(self._descriptors)

    def __len__(self):
        return len(self._descriptors)

    def get(self, name):
        """Get the descriptor of the named property (or `None`)."""
        return self._name_to_descriptor.get(name)

    def default_wrap_key(self, style='snake_case'):
        """
        Derive the wrap key (used when `wrap` is `True`) from the name.

        Kwargs:
            `style` (default: `'snake_case'`):
                `'snake_case'` or `'as_is'`.

        Raises:
            :exc:`~reprspec.exceptions.SchemaError` if the schema has
            no name.
        """
        if self._name is None:
            raise SchemaError('cannot derive the wrap key of an unnamed schema')
        if style == 'as_is':
            return self._name
        return as_snake_case(self._name)

    def get_wrap_key(self, wrap, default_wrap_key_maker=None):
        """
        Get the effective wrap key (or `None` for no wrapping).

        Args:
            `wrap`:
                The call-time `wrap` option (`None` means: use the
                schema-level one).

        Kwargs:
            `default_wrap_key_maker` (optional):
                A callable that takes the schema and returns the key to
                be used when `wrap` is `True`; by default, the method
                :meth:`default_wrap_key` is used.

        >>> schema = RepresenterSchema(name='LostBoy', wrap='boy')
        >>> schema.get_wrap_key(None)
        'boy'
        >>> schema.get_wrap_key(False) is None
        True
        >>> schema.get_wrap_key(True)
        'lost_boy'
        >>> schema.get_wrap_key(True, lambda schema: schema.name.upper())
        'LOSTBOY'
        """
        if wrap is None:
            wrap = self._wrap
        if not wrap:
            return None
        if wrap is True:
            if default_wrap_key_maker is None:
                return self.default_wrap_key()
            return default_wrap_key_maker(self)
        return wrap


def as_schema(obj):
    """
    Get the schema that the given object is or carries (or `None`).

    The object can be a :class:`RepresenterSchema` instance or anything
    whose `schema` attribute is one (such as a subclass of
    :class:`~reprspec.representer.Representer`).

    >>> schema = RepresenterSchema(name='Spam')
    >>> as_schema(schema) is schema
    True
    >>> class HasSchema:
    ...     schema = schema
    >>> as_schema(HasSchema) is schema
    True
    >>> as_schema('spam') is None
    True
    """
    if isinstance(obj, RepresenterSchema):
        return obj
    schema = getattr(obj, 'schema', None)
    if isinstance(schema, RepresenterSchema):
        return schema
    return None


def verified_as_schema(obj):
    schema = as_schema(obj)
    if schema is None:
        raise SchemaError('{!r} is neither a schema nor a Representer'.format(obj))
    return schema


class SchemaBuilder(object):

    r"""
    The builder of :class:`RepresenterSchema` instances.

    Constructor args/kwargs:
        `name` (optional):
            The schema name.
        `wrap` (optional, keyword-only):
            The schema-level `wrap` option.
        `base` (optional, keyword-only):
            A schema (or a `Representer` subclass) whose properties are
            to be declared first; if `name`/`wrap` are not given they
            are also taken from it.

    The `declare_property()`, `declare_collection()` and
    `declare_hash()` methods take the property name and any of the
    declaration options as keyword arguments: `class` (or `class_`),
    `extend`, `from` (or `from_`), `if` (or `if_`), `render_nil`,
    `wrap`, `attribute`, `style`, `items`, `values`, `default`,
    `type`.  They return the builder (so that calls can be chained).

    >>> builder = SchemaBuilder('Album', wrap=True)
    >>> builder.declare_property('title').declare_collection(
    ...     'songs', wrap='songs', from_='song')        # doctest: +ELLIPSIS
    <reprspec.schema._schema.SchemaBuilder object at ...>
    >>> schema = builder.build()
    >>> [(d.name, d.document_key, d.cardinality, d.wrap_tag) for d in schema]
    [('title', 'title', 'scalar', None), ('songs', 'song', 'collection', 'songs')]

    >>> builder.declare_property('title')
    Traceback (most recent call last):
      ...
    reprspec.exceptions.SchemaError: property 'title' already declared (at 'title')
    """

    def __init__(self, name=None, *, wrap=None, base=None):
        self._descriptors = collections.OrderedDict()
        if base is not None:
            base = verified_as_schema(base)
            if base.kind != OBJECT:
                raise SchemaError('the base schema must be an object schema')
            for descriptor in base:
                self._descriptors[descriptor.name] = descriptor
            if name is None:
                name = base.name
            if wrap is None:
                wrap = base.wrap
        self._name = name
        self._wrap = wrap

    def declare_property(self, name, **options):
        return self._declare(name, SCALAR, options)

    def declare_collection(self, name, **options):
        return self._declare(name, COLLECTION, options)

    def declare_hash(self, name, **options):
        return self._declare(name, HASH, options)

    def _declare(self, name, cardinality, options):
        if name in self._descriptors:
            with SchemaError.sublocation(name):
                raise SchemaError('property {!r} already declared'.format(name))
        self._descriptors[name] = make_descriptor(name, cardinality, options)
        return self

    def build(self):
        schema = RepresenterSchema(self._descriptors.values(),
                                   name=self._name,
                                   wrap=self._wrap)
        LOGGER.debug('Built %a', schema)
        return schema

    @classmethod
    def collection_of(cls, name=None, *, wrap=None, **items_options):
        """
        Build a top-level collection schema.

        Kwargs:
            `wrap` (optional): The schema-level `wrap` option.
            `class` (or `class_`) and/or `extend` (optional):
                The schema of the elements (see: the `items`
                declaration option).

        >>> schema = SchemaBuilder.collection_of('Songs', extend=RepresenterSchema())
        >>> schema.kind
        'collection'
        """
        element = make_nested_spec(items_options, 'collection schema {!r}'.format(name))
        return RepresenterSchema(name=name, wrap=wrap, kind=COLLECTION, element=element)

    @classmethod
    def hash_of(cls, name=None, *, wrap=None, **values_options):
        """
        Build a top-level hash schema (see: :meth:`collection_of`).
        """
        element = make_nested_spec(values_options, 'hash schema {!r}'.format(name))
        return RepresenterSchema(name=name, wrap=wrap, kind=HASH, element=element)
