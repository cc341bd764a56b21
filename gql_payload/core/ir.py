"""Intermediate Representation (IR) for operations and output fields.

This module defines the immutable operation metadata a QueryBuilder is
constructed from, and the recursive field-spec variant used to describe the
desired output shape of a response.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from .errors import SerializationError


class OperationKind(Enum):
    """Whether a document is a read or a write."""
    QUERY = "query"
    MUTATION = "mutation"

    @classmethod
    def parse(cls, value: "OperationKind | str") -> "OperationKind":
        """Coerce a kind or its name ('query', 'MUTATION', ...) to a member."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown operation kind {value!r}; expected 'query' or 'mutation'"
            ) from None


@dataclass(frozen=True)
class Leaf:
    """A scalar output field, rendered as its bare name."""
    name: str


@dataclass(frozen=True)
class Node:
    """A sub-object selection: ordered (key, spec) pairs rendered inside braces."""
    children: tuple[tuple[str, "FieldSpec"], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.children

    @property
    def depth(self) -> int:
        """Brace nesting depth this node renders to."""
        return 1 + max(
            (child.depth for _, child in self.children if isinstance(child, Node)),
            default=0,
        )


FieldSpec = Union[Leaf, Node]


def to_field_spec(raw: Any) -> Node:
    """Coerce plain containers into a Node.

    Accepted shapes:
        {"id": "id", "profile": {"name": "name"}}   # leaf values are emitted
        ["id", "email", {"profile": ["name"]}]       # strings are leaves
        Node(...)                                    # returned unchanged

    None and empty containers become an empty Node.
    """
    if raw is None:
        return Node()
    if isinstance(raw, Node):
        return raw
    if isinstance(raw, Mapping):
        return Node(tuple(_mapping_children(raw)))
    if isinstance(raw, (list, tuple)):
        children: list[tuple[str, FieldSpec]] = []
        for item in raw:
            if isinstance(item, str):
                children.append((item, Leaf(item)))
            elif isinstance(item, Leaf):
                children.append((item.name, item))
            elif isinstance(item, Mapping):
                children.extend(_mapping_children(item))
            else:
                raise SerializationError(f"Cannot use {item!r} as an output field")
        return Node(tuple(children))
    raise SerializationError(f"Cannot build an output field spec from {raw!r}")


def _mapping_children(raw: Mapping) -> list[tuple[str, FieldSpec]]:
    children: list[tuple[str, FieldSpec]] = []
    for key, value in raw.items():
        if not isinstance(key, str):
            raise SerializationError(f"Output field names must be strings, got {key!r}")
        if isinstance(value, str):
            children.append((key, Leaf(value)))
        elif isinstance(value, Leaf):
            children.append((key, value))
        elif isinstance(value, (Node, Mapping, list, tuple)):
            children.append((key, to_field_spec(value)))
        else:
            raise SerializationError(f"Cannot use {value!r} as output field {key!r}")
    return children


@dataclass(frozen=True)
class OperationDescriptor:
    """Metadata for one query or mutation.

    Supplied by a schema/config collaborator (SchemaParser, load_descriptors
    or caller code) and fixed for the lifetime of a QueryBuilder.
    """
    name: str
    kind: OperationKind = OperationKind.QUERY
    # Default output tree, used whenever a call passes no fields
    output_fields: Node = field(default_factory=Node)
    # Argument names whose values are emitted as bare enum symbols
    enums: frozenset[str] = frozenset()
    description: str | None = None

    def __post_init__(self):
        # Frozen: coerce loose inputs in place once
        object.__setattr__(self, "kind", OperationKind.parse(self.kind))
        object.__setattr__(self, "output_fields", to_field_spec(self.output_fields))
        enums = self.enums
        if isinstance(enums, str):
            enums = [enums]
        object.__setattr__(self, "enums", frozenset(enums))
