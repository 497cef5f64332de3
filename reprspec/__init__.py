# Copyright (c) 2026 NASK. All rights reserved.

"""
*reprspec* -- bidirectional, schema-driven object representation.

A declarative schema describes named properties of domain objects;
the same schema drives both *rendering* objects into generic document
trees (and further: into JSON, YAML or XML documents) and *parsing*
such trees (documents) back into objects.
"""


from reprspec.api import (
    dumps,
    loads,
    parse,
    parse_into,
    render,
)
from reprspec.binding import (
    Binding,
    HostView,
)
from reprspec.coercion import (
    CoercionAdapter,
    default_coercion_adapter,
)
from reprspec.exceptions import (
    BindingError,
    MalformedDocumentError,
    RepresenterError,
    SchemaError,
    TypeMismatchError,
)
from reprspec.formats import (
    FormatAdapter,
    JSONFormat,
    XMLFormat,
    YAMLFormat,
    get_format,
)
from reprspec.nodes import (
    Entry,
    Mapping,
    Scalar,
    Sequence,
    from_plain,
)
from reprspec.options import CallOptions
from reprspec.parser import Parser
from reprspec.renderer import Renderer
from reprspec.representer import (
    Collection,
    Hash,
    Property,
    Representer,
)
from reprspec.resolver import NestedSchemaResolver
from reprspec.schema import (
    PropertyDescriptor,
    RepresenterSchema,
    SchemaBuilder,
    SchemaRegistry,
    default_registry,
    represented_by,
)
