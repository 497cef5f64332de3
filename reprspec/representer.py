# Copyright (c) 2026 NASK. All rights reserved.

"""
Declarative representers.

A *representer* is a subclass of :class:`Representer` whose class
attributes declare properties (with :class:`Property`,
:class:`Collection` and :class:`Hash`); the schema is built once, when
the class is created, and is available as the `schema` class
attribute.

>>> class LocationRepresenter(Representer):
...     title = Property()
...
>>> class PersonRepresenter(Representer):
...     representation_wrap = True
...     forename = Property()
...     surename = Property()
...     origin = Property(extend=LocationRepresenter)
...
>>> PersonRepresenter.schema
<RepresenterSchema name='Person', kind='object', property_names=('forename', 'surename', 'origin'), wrap=True>

Subclasses inherit the declared properties (and can override them
-- then the overridden ones keep their positions -- or remove them,
by setting the attribute to `None`):

>>> class LostBoyRepresenter(PersonRepresenter):
...     representation_wrap = 'boy'
...     surename = None
...     forename = Property(from_='name')
...     nickname = Property()
...
>>> [(d.name, d.document_key) for d in LostBoyRepresenter.schema]
[('forename', 'name'), ('origin', 'origin'), ('nickname', 'nickname')]
"""


from reprspec import api
from reprspec.class_helpers import attr_repr
from reprspec.exceptions import SchemaError
from reprspec.schema import (
    COLLECTION,
    HASH,
    SCALAR,
    SchemaBuilder,
    default_registry,
)


class _Declaration(object):

    cardinality = None

    __repr__ = attr_repr('name', 'options')

    def __init__(self, **options):
        self.name = None
        self.options = options

    def __set_name__(self, owner, name):
        self.name = name


class Property(_Declaration):
    """Declaration of a scalar (or a nested object) property."""
    cardinality = SCALAR


class Collection(_Declaration):
    """Declaration of a collection property."""
    cardinality = COLLECTION


class Hash(_Declaration):
    """Declaration of a hash property."""
    cardinality = HASH


class Representer(object):

    r"""
    The base class of declarative representers.

    Class attributes that can be set in subclasses:

    * `representation_name` -- the schema name (by default: the class
      name without the `Representer` suffix);

    * `representation_wrap` -- the schema-level `wrap` option.

    The names of the attributes (and methods) of this base class cannot
    be used as property names (use the builder and/or the `from`
    declaration option instead).
    """

    representation_name = None
    representation_wrap = None

    #: (set automatically for each subclass)
    schema = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.schema = cls._build_schema()

    @classmethod
    def _build_schema(cls):
        name = cls.representation_name
        if name is None:
            name = cls.__name__
            if name.endswith('Representer') and name != 'Representer':
                name = name[:-len('Representer')]
        builder = SchemaBuilder(name, wrap=cls.representation_wrap)
        declare_methods = {
            SCALAR: builder.declare_property,
            COLLECTION: builder.declare_collection,
            HASH: builder.declare_hash,
        }
        for attr_name, declaration in cls._iter_all_declarations():
            declare_methods[declaration.cardinality](attr_name, **declaration.options)
        return builder.build()

    @classmethod
    def _iter_all_declarations(cls):
        name_to_declaration = {}
        for klass in reversed(cls.__mro__):
            for attr_name, obj in vars(klass).items():
                if isinstance(obj, _Declaration):
                    if attr_name in vars(Representer):
                        raise SchemaError('{!r} cannot be declared as a property name '
                                          '(it is reserved by Representer)'.format(attr_name))
                    name_to_declaration[attr_name] = obj
                elif obj is None and attr_name in name_to_declaration:
                    del name_to_declaration[attr_name]
        return name_to_declaration.items()

    @classmethod
    def represents(cls, type_, registry=None):
        """
        Register the representer's schema for the type (can be used
        as a class decorator).
        """
        if registry is None:
            registry = default_registry
        registry.register(type_, cls.schema)
        return type_

    @classmethod
    def render(cls, obj, options=None, **kwargs):
        return api.render(obj, cls.schema, options, **kwargs)

    @classmethod
    def parse(cls, node, object_factory=None, options=None, **kwargs):
        return api.parse(node, cls.schema, object_factory, options, **kwargs)

    @classmethod
    def parse_into(cls, node, instance, options=None, **kwargs):
        return api.parse_into(node, cls.schema, instance, options, **kwargs)

    @classmethod
    def dumps(cls, obj, format='json', options=None, **kwargs):
        return api.dumps(obj, cls.schema, format, options, **kwargs)

    @classmethod
    def loads(cls, data, object_factory=None, format='json', options=None, **kwargs):
        return api.loads(data, cls.schema, object_factory, format, options, **kwargs)
