# Copyright (c) 2026 NASK. All rights reserved.

"""
The convenience entry points of *reprspec*.

TL;DR:

* `render(obj, schema)` -> a generic document tree;
* `parse(node, schema, object_factory)` -> a new object;
* `parse_into(node, schema, instance)` -> the given object (populated);
* `dumps(obj, schema, format='json')` -> document `bytes`;
* `loads(data, schema, object_factory, format='json')` -> a new object.

***

>>> from reprspec.schema import SchemaBuilder
>>> schema = (SchemaBuilder('Person')
...           .declare_property('forename')
...           .declare_property('surename')
...           .build())
>>> dumps({'forename': 'Peter', 'surename': 'Pan'}, schema, settings={})
b'{"forename": "Peter", "surename": "Pan"}'
>>> loads(b'{"forename": "Captain", "surename": "Hook"}', schema, settings={})
{'forename': 'Captain', 'surename': 'Hook'}
>>> dumps({'forename': 'Peter', 'surename': 'Pan'}, schema, format='xml',
...       wrap=True, exclude=['surename'], settings={})
b"<?xml version='1.0' encoding='utf-8'?>\\n<person><forename>Peter</forename></person>"
"""


from reprspec.formats import get_format
from reprspec.parser import Parser
from reprspec.renderer import Renderer


def render(obj, schema, options=None, *, registry=None, settings=None,
           default_wrap_key_maker=None, **option_kwargs):
    """
    Render the object into a generic document tree.

    See: :meth:`reprspec.renderer.Renderer.render`.
    """
    renderer = Renderer(registry=registry,
                        settings=settings,
                        default_wrap_key_maker=default_wrap_key_maker)
    return renderer.render(obj, schema, options, **option_kwargs)


def parse(node, schema, object_factory=None, options=None, *, registry=None,
          coercion=None, settings=None, default_wrap_key_maker=None, **option_kwargs):
    """
    Parse the generic document tree into a new object.

    See: :meth:`reprspec.parser.Parser.parse`.
    """
    parser = Parser(registry=registry,
                    coercion=coercion,
                    settings=settings,
                    default_wrap_key_maker=default_wrap_key_maker)
    return parser.parse(node, schema, object_factory, options, **option_kwargs)


def parse_into(node, schema, instance, options=None, *, registry=None,
               coercion=None, settings=None, default_wrap_key_maker=None, **option_kwargs):
    """
    Parse the generic document tree into the given object.

    See: :meth:`reprspec.parser.Parser.parse_into`.
    """
    parser = Parser(registry=registry,
                    coercion=coercion,
                    settings=settings,
                    default_wrap_key_maker=default_wrap_key_maker)
    return parser.parse_into(node, schema, instance, options, **option_kwargs)


def dumps(obj, schema, format='json', options=None, *, registry=None,
          settings=None, **option_kwargs):
    """
    Render the object and serialize it in the given format.

    Kwargs:
        `format` (default: `'json'`):
            A format name or a `FormatAdapter` instance.
        Other:
            See: :func:`render`.

    Returns:
        The document (`bytes`).
    """
    adapter = get_format(format, settings=settings)
    node = render(obj, schema, options,
                  registry=registry,
                  settings=settings,
                  default_wrap_key_maker=adapter.default_wrap_key,
                  **option_kwargs)
    return adapter.serialize(node)


def loads(data, schema, object_factory=None, format='json', options=None, *,
          registry=None, coercion=None, settings=None, **option_kwargs):
    """
    Deserialize the document in the given format and parse it into
    a new object.

    Kwargs:
        `format` (default: `'json'`):
            A format name or a `FormatAdapter` instance.
        Other:
            See: :func:`parse`.
    """
    adapter = get_format(format, settings=settings)
    node = adapter.deserialize(data)
    return parse(node, schema, object_factory, options,
                 registry=registry,
                 coercion=coercion,
                 settings=settings,
                 default_wrap_key_maker=adapter.default_wrap_key,
                 **option_kwargs)
