# Copyright (c) 2026 NASK. All rights reserved.

import collections.abc as collections_abc
import dataclasses

from reprspec.binding import Binding
from reprspec.class_helpers import (
    is_raw_scalar,
    is_seq,
)
from reprspec.config import ConfigMixin
from reprspec.exceptions import (
    BindingError,
    RepresenterError,
)
from reprspec.log_helpers import get_logger
from reprspec.nodes import (
    Entry,
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
    SCALAR,
    verified_as_schema,
)


LOGGER = get_logger(__name__)


class Renderer(ConfigMixin):

    r"""
    Renders objects into generic document trees.

    Constructor kwargs (all optional):
        `registry`:
            The `SchemaRegistry` (default: `default_registry`).
        `settings`:
            The configuration settings (see: :mod:`reprspec.config`).
        `default_wrap_key_maker`:
            A callable that takes a schema and returns its default
            wrap key (used when `wrap` is `True`); by default, the key
            is derived from the schema name according to the
            `default_wrap_key_style` configuration option.

    >>> from reprspec.schema import SchemaBuilder
    >>> schema = (SchemaBuilder('Boy', wrap=True)
    ...           .declare_property('forename')
    ...           .declare_property('surename')
    ...           .build())
    >>> node = Renderer(settings={}).render({'forename': 'Peter', 'surename': 'Pan'}, schema)
    >>> node.to_plain()
    {'boy': {'forename': 'Peter', 'surename': 'Pan'}}
    >>> node.lookup('boy').tag
    'boy'
    """

    config_section_name = 'reprspec'

    def __init__(self, registry=None, settings=None, default_wrap_key_maker=None):
        self.config = self.get_config_section(settings)
        self.resolver = NestedSchemaResolver(registry)
        if default_wrap_key_maker is None:
            style = self.config['default_wrap_key_style']
            default_wrap_key_maker = lambda schema: schema.default_wrap_key(style)
        self._default_wrap_key_maker = default_wrap_key_maker

    def render(self, obj, schema, options=None, **option_kwargs):
        """
        Render the object according to the schema.

        Args:
            `obj`:
                The object to be rendered.
            `schema`:
                A `RepresenterSchema` (or a `Representer` subclass).

        Kwargs:
            `options` (optional):
                A `CallOptions` instance or a mapping of call options.
            Any other keyword arguments:
                Call options (`include`, `exclude`, `wrap`).

        Returns:
            A `Mapping` node (for object/hash schemas) or a `Sequence`
            node (for collection schemas) -- or, if the schema or call
            options specify wrapping, a `Mapping` node with one entry,
            whose node is the former one.

        Raises:
            :exc:`~reprspec.exceptions.RepresenterError` (a subclass of).
        """
        schema = verified_as_schema(schema)
        options = CallOptions.make(options, **option_kwargs)
        options.verify_names(schema)
        LOGGER.debug('Rendering %a with %a', type(obj), schema)
        ctx = TraversalContext(self.config['max_depth'])
        with ctx.entering(obj):
            node = self._render_by_schema(obj, schema, ctx, options)
        wrap_key = schema.get_wrap_key(options.wrap, self._default_wrap_key_maker)
        if wrap_key is not None:
            node = Mapping((Entry(wrap_key, dataclasses.replace(node, tag=wrap_key)),))
        return node

    def _render_by_schema(self, obj, schema, ctx, options=None):
        if schema.kind == COLLECTION:
            return self._render_sequence(obj, schema.element, ctx)
        if schema.kind == HASH:
            return self._render_mapping(obj, schema.element, ctx)
        return self._render_object(obj, schema, ctx, options)

    def _render_object(self, obj, schema, ctx, options):
        entries = []
        container_indexes = {}
        for descriptor in schema:
            if options is not None and not options.admits(descriptor.name):
                continue
            with RepresenterError.sublocation(descriptor.document_key):
                binding = Binding(descriptor, obj)
                if not binding.condition_holds():
                    continue
                entry = self._render_property(descriptor, binding.get(), ctx)
            if entry is None:
                continue
            if descriptor.wrap_tag is None:
                entries.append(entry)
            elif descriptor.wrap_tag in container_indexes:
                # (one container shared by several wrapped properties)
                i = container_indexes[descriptor.wrap_tag]
                container = entries[i].node
                entries[i] = entry._replace(node=dataclasses.replace(
                    container,
                    entries=container.entries + entry.node.entries))
            else:
                container_indexes[descriptor.wrap_tag] = len(entries)
                entries.append(entry)
        return Mapping(tuple(entries))

    def _render_property(self, descriptor, value, ctx):
        if value is None:
            if not descriptor.render_nil:
                return None
            node = Scalar(None)
        elif descriptor.cardinality == SCALAR:
            node = self._render_value(value, descriptor.nested, ctx)
        elif descriptor.cardinality == COLLECTION:
            node = self._render_sequence(value, descriptor.nested, ctx, descriptor.style)
        else:
            assert descriptor.cardinality == HASH
            node = self._render_mapping(value, descriptor.nested, ctx)
        if descriptor.wrap_tag is not None:
            node = Mapping((Entry(descriptor.document_key, node),), tag=descriptor.wrap_tag)
        return Entry(descriptor.parent_key, node, descriptor.attribute)

    def _render_sequence(self, value, spec, ctx, style=None):
        if not is_seq(value):
            raise BindingError('a collection expected (got: {!r})'.format(type(value)))
        items = []
        for i, item in enumerate(value):
            with RepresenterError.sublocation(i):
                items.append(self._render_value(item, spec, ctx))
        return Sequence(tuple(items), style=style)

    def _render_mapping(self, value, spec, ctx):
        if not isinstance(value, collections_abc.Mapping):
            raise BindingError('a mapping expected (got: {!r})'.format(type(value)))
        entries = []
        for key, item in value.items():
            with RepresenterError.sublocation(key):
                entries.append(Entry(key, self._render_value(item, spec, ctx)))
        return Mapping(tuple(entries))

    def _render_value(self, value, spec, ctx):
        if value is None:
            return Scalar(None)
        schema = self.resolver.schema_for_render(spec, value)
        if schema is None:
            return self._render_raw(value, ctx)
        with ctx.entering(value):
            return self._render_object(value, schema, ctx, None)

    def _render_raw(self, value, ctx):
        if is_raw_scalar(value):
            return Scalar(value)
        with ctx.entering(value):
            if isinstance(value, collections_abc.Mapping):
                return self._render_mapping(value, None, ctx)
            return self._render_sequence(value, None, ctx)
