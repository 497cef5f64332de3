# Copyright (c) 2026 NASK. All rights reserved.

from reprspec.schema.descriptors import (
    CARDINALITIES,
    COLLECTION,
    HASH,
    MISSING,
    OPTION_NAMES,
    SCALAR,
    CoercionTarget,
    NestedSpec,
    PropertyDescriptor,
    make_descriptor,
)
from reprspec.schema._schema import (
    OBJECT,
    RepresenterSchema,
    SchemaBuilder,
    as_schema,
    verified_as_schema,
)
from reprspec.schema.registry import (
    SchemaRegistry,
    default_registry,
    represented_by,
)
