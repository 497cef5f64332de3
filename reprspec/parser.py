# Copyright (c) 2026 NASK. All rights reserved.

from reprspec.binding import Binding
from reprspec.coercion import default_coercion_adapter
from reprspec.config import ConfigMixin
from reprspec.exceptions import (
    MalformedDocumentError,
    RepresenterError,
    SchemaError,
    TypeMismatchError,
)
from reprspec.log_helpers import get_logger
from reprspec.nodes import (
    Mapping,
    Scalar,
    Sequence,
)
from reprspec.options import (
    CallOptions,
    TraversalContext,
)
from reprspec.resolver import NestedSchemaResolver
from reprspec.schema import (
    COLLECTION,
    HASH,
    OBJECT,
    SCALAR,
    verified_as_schema,
)


LOGGER = get_logger(__name__)


class Parser(ConfigMixin):

    r"""
    Parses generic document trees into objects.

    Constructor kwargs (all optional):
        `registry`:
            The `SchemaRegistry` (default: `default_registry`).
        `coercion`:
            The `CoercionAdapter` (default: `default_coercion_adapter`).
        `settings`:
            The configuration settings (see: :mod:`reprspec.config`).
        `default_wrap_key_maker`:
            See: :class:`~reprspec.renderer.Renderer`.

    The parser mutates only the declared properties of the target
    object; document keys not declared in the schema are ignored.
    A property whose key is absent from the document is left untouched
    (unless a `default` is declared for it).  Changes made before a
    failure are not rolled back -- so, generally, parse into fresh
    objects, discarding them on failure.

    >>> from reprspec.nodes import from_plain
    >>> from reprspec.schema import SchemaBuilder
    >>> schema = (SchemaBuilder('Boy')
    ...           .declare_property('forename')
    ...           .declare_property('age', type=int, default=12)
    ...           .build())
    >>> parser = Parser(settings={})
    >>> parser.parse(from_plain({'forename': 'Peter', 'unknown': 1}), schema)
    {'forename': 'Peter', 'age': 12}
    """

    config_section_name = 'reprspec'

    def __init__(self, registry=None, coercion=None, settings=None,
                 default_wrap_key_maker=None):
        self.config = self.get_config_section(settings)
        self.resolver = NestedSchemaResolver(registry)
        self.coercion = coercion if coercion is not None else default_coercion_adapter
        if default_wrap_key_maker is None:
            style = self.config['default_wrap_key_style']
            default_wrap_key_maker = lambda schema: schema.default_wrap_key(style)
        self._default_wrap_key_maker = default_wrap_key_maker

    def parse(self, node, schema, object_factory=None, options=None, **option_kwargs):
        """
        Parse the node into a new object.

        Args:
            `node`:
                The document tree.
            `schema`:
                A `RepresenterSchema` (or a `Representer` subclass).

        Kwargs:
            `object_factory` (optional):
                For object schemas: a callable returning a new target
                object (default: `dict`).  For collection/hash schemas:
                a callable taking an iterable of elements (respectively,
                of key-value pairs) and returning the container (default:
                `list`, respectively, `dict`).
            `options` (optional) and any other keyword arguments:
                Call options (see: :meth:`Renderer.render`).

        Returns:
            The new object (populated).

        Raises:
            :exc:`~reprspec.exceptions.RepresenterError` (a subclass of).
        """
        schema = verified_as_schema(schema)
        if schema.kind == OBJECT:
            instance = (object_factory if object_factory is not None else dict)()
            return self.parse_into(node, schema, instance, options, **option_kwargs)
        options = CallOptions.make(options, **option_kwargs)
        options.verify_names(schema)
        LOGGER.debug('Parsing with %a', schema)
        node = self._unwrap(node, schema, options)
        ctx = TraversalContext(self.config['max_depth'])
        with ctx.entering():
            if schema.kind == COLLECTION:
                items = self._parse_items(_root_sequence_items(node), schema.element, None, ctx)
                return (object_factory if object_factory is not None else list)(items)
            assert schema.kind == HASH
            pairs = self._parse_pairs(node, schema.element, None, ctx)
            return (object_factory if object_factory is not None else dict)(pairs)

    def parse_into(self, node, schema, instance, options=None, **option_kwargs):
        """
        Parse the node into the given (existing) object.

        Returns:
            The given object.
        """
        schema = verified_as_schema(schema)
        if schema.kind != OBJECT:
            raise SchemaError('parse_into() requires an object schema '
                              '(got: {!r})'.format(schema))
        options = CallOptions.make(options, **option_kwargs)
        options.verify_names(schema)
        LOGGER.debug('Parsing into %a with %a', type(instance), schema)
        node = self._unwrap(node, schema, options)
        ctx = TraversalContext(self.config['max_depth'])
        with ctx.entering():
            self._parse_object(node, schema, instance, ctx, options)
        return instance

    def _unwrap(self, node, schema, options):
        wrap_key = schema.get_wrap_key(options.wrap, self._default_wrap_key_maker)
        if wrap_key is None:
            return node
        if node.tag == wrap_key:
            # the node is the wrapper itself (e.g., an XML root element)
            return node
        if isinstance(node, Mapping):
            inner = node.lookup(wrap_key)
            if inner is not None:
                return inner
        raise MalformedDocumentError('the document lacks the root wrapper '
                                     '{!r}'.format(wrap_key))

    def _parse_object(self, node, schema, instance, ctx, options):
        if _is_null(node):
            node = Mapping()
        if not isinstance(node, Mapping):
            raise TypeMismatchError('a mapping expected for {!r}'.format(schema),
                                    raw_value=node.to_plain(),
                                    target_type='mapping')
        for descriptor in schema:
            if options is not None and not options.admits(descriptor.name):
                continue
            with RepresenterError.sublocation(descriptor.document_key):
                binding = Binding(descriptor, instance)
                if not binding.condition_holds():
                    continue
                value_node = self._lookup(node, descriptor)
                if value_node is not None:
                    binding.set(self._parse_property(descriptor, value_node, ctx))
                elif descriptor.has_default:
                    binding.set(self._get_default(descriptor))

    def _lookup(self, node, descriptor):
        if descriptor.wrap_tag is None:
            return node.lookup(descriptor.document_key, attribute=descriptor.attribute)
        container = node.lookup(descriptor.wrap_tag)
        if container is None:
            return None
        empty = Sequence() if descriptor.cardinality == COLLECTION else Mapping()
        if _is_null(container):
            # an empty container (e.g., `<songs/>`)
            return empty
        if not isinstance(container, Mapping):
            raise TypeMismatchError('a container mapping expected under {!r}'.format(
                                        descriptor.wrap_tag),
                                    raw_value=container.to_plain(),
                                    target_type='mapping')
        value_node = container.lookup(descriptor.document_key)
        return value_node if value_node is not None else empty

    def _parse_property(self, descriptor, value_node, ctx):
        if descriptor.cardinality == SCALAR:
            return self._parse_value(value_node, descriptor.nested, descriptor.coercion_type, ctx)
        if _is_null(value_node):
            return None
        if descriptor.cardinality == COLLECTION:
            if isinstance(value_node, Sequence):
                items = value_node.items
            elif value_node.tag is not None:
                # a single element (e.g., the only XML child element of its kind)
                items = (value_node,)
            else:
                raise TypeMismatchError('a sequence expected',
                                        raw_value=value_node.to_plain(),
                                        target_type='sequence')
            return self._parse_items(items, descriptor.nested, descriptor.coercion_type, ctx)
        assert descriptor.cardinality == HASH
        return dict(self._parse_pairs(value_node, descriptor.nested,
                                      descriptor.coercion_type, ctx))

    def _parse_items(self, items, spec, coercion_type, ctx):
        values = []
        for i, item in enumerate(items):
            with RepresenterError.sublocation(i):
                values.append(self._parse_value(item, spec, coercion_type, ctx))
        return values

    def _parse_pairs(self, node, spec, coercion_type, ctx):
        if _is_null(node):
            return []
        if not isinstance(node, Mapping):
            raise TypeMismatchError('a mapping expected',
                                    raw_value=node.to_plain(),
                                    target_type='mapping')
        pairs = []
        for entry in node:
            with RepresenterError.sublocation(entry.key):
                pairs.append((entry.key,
                              self._parse_value(entry.node, spec, coercion_type, ctx)))
        return pairs

    def _parse_value(self, node, spec, coercion_type, ctx):
        if _is_null(node) and not _is_empty_element(node):
            return None
        resolved = self.resolver.instance_and_schema_for_parse(spec)
        if resolved is None:
            value = node.to_plain()
            if value is not None and coercion_type is not None:
                value = self.coercion.coerce(value, coercion_type)
            return value
        instance, schema = resolved
        with ctx.entering():
            self._parse_object(node, schema, instance, ctx, None)
        return instance

    def _get_default(self, descriptor):
        default = descriptor.coercion.default
        coercion_type = descriptor.coercion_type
        if default is None:
            return None
        if descriptor.cardinality == COLLECTION:
            return [self._coerced(value, coercion_type) for value in default]
        if descriptor.cardinality == HASH:
            return {key: self._coerced(value, coercion_type)
                    for key, value in default.items()}
        return self._coerced(default, coercion_type)

    def _coerced(self, value, coercion_type):
        if value is None or coercion_type is None:
            return value
        return self.coercion.coerce(value, coercion_type)


def _is_null(node):
    return isinstance(node, Scalar) and node.value is None


def _is_empty_element(node):
    # (e.g., an empty XML element; under a nested object property it
    # stands for an object without any non-nil properties)
    return _is_null(node) and node.tag is not None


def _root_sequence_items(node):
    # (a top-level collection can come as a mapping of repeated
    # elements, e.g., from an XML document)
    if isinstance(node, Sequence):
        return node.items
    if _is_null(node):
        return ()
    if isinstance(node, Mapping):
        items = []
        for entry in node:
            if entry.is_attribute:
                continue
            if isinstance(entry.node, Sequence):
                items.extend(entry.node.items)
            else:
                items.append(entry.node)
        return tuple(items)
    return (node,)
