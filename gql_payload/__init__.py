"""Build GraphQL query and mutation strings from operation metadata."""

from .core import (
    BuilderOptions,
    EnumStrategy,
    OperationDescriptor,
    OperationKind,
    QueryBuilder,
)

__all__ = [
    "BuilderOptions",
    "EnumStrategy",
    "OperationDescriptor",
    "OperationKind",
    "QueryBuilder",
]
