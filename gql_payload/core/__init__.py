"""Core modules for building GraphQL payload strings."""

from .arguments import EnumStrategy, render_value, serialize_arguments
from .errors import (
    MalformedReplacementError,
    PayloadError,
    SchemaError,
    SerializationError,
)
from .graph import render_graph
from .ir import (
    FieldSpec,
    Leaf,
    Node,
    OperationDescriptor,
    OperationKind,
    to_field_spec,
)
from .loader import descriptor_from_dict, load_descriptors
from .parser import SchemaParser
from .query_builder import BuilderOptions, QueryBuilder

__all__ = [
    # Errors
    "PayloadError",
    "SerializationError",
    "MalformedReplacementError",
    "SchemaError",
    # IR types
    "FieldSpec",
    "Leaf",
    "Node",
    "OperationDescriptor",
    "OperationKind",
    "to_field_spec",
    # Arguments
    "EnumStrategy",
    "render_value",
    "serialize_arguments",
    # Graph
    "render_graph",
    # Descriptor sources
    "SchemaParser",
    "descriptor_from_dict",
    "load_descriptors",
    # Query Builder
    "BuilderOptions",
    "QueryBuilder",
]
