"""GraphQL schema parser using graphql-core.

Parses SDL text or .graphqls files and produces one OperationDescriptor per
Query/Mutation field: its kind, name, enum arguments and a default output
selection derived from the return type.
"""

import logging
import os
from dataclasses import dataclass, field

from graphql import (
    EnumTypeDefinitionNode,
    GraphQLError,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    TypeNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    parse,
)

from .errors import SchemaError
from .ir import Leaf, Node, OperationDescriptor, OperationKind

logger = logging.getLogger(__name__)

ROOT_TYPES = {"Query": OperationKind.QUERY, "Mutation": OperationKind.MUTATION}

# Unions have no common fields; only the concrete type name can be selected
UNION_SELECTION = Node((("__typename", Leaf("__typename")),))


@dataclass
class _Field:
    name: str
    type_name: str
    # Named types of the field's arguments, keyed by argument name
    arguments: dict[str, str] = field(default_factory=dict)
    description: str | None = None


class SchemaParser:
    """Parses GraphQL SDL into operation descriptors.

    Example:
        parser = SchemaParser("./schema")          # directory of .graphqls
        parser = SchemaParser(sdl_text)            # or raw SDL
        descriptors = parser.parse_all()
        descriptors["users"].enums                 # frozenset({"status"})
    """

    def __init__(self, source: str, max_depth: int = 3):
        """Initialize with SDL text, a .graphqls file or a directory.

        Args:
            source: Schema location or inline SDL
            max_depth: Deepest object nesting included in default output fields
        """
        if max_depth < 1:
            raise ValueError("max_depth must be >= 1")
        self.source = source
        self.max_depth = max_depth
        self.enums: set[str] = set()
        self.unions: set[str] = set()
        self.types: dict[str, list[_Field]] = {}
        self.operations: dict[OperationKind, list[_Field]] = {kind: [] for kind in OperationKind}

    def parse_all(self) -> dict[str, OperationDescriptor]:
        """Parse all schema sources and return descriptors keyed by operation name."""
        for label, content in self._collect_sources():
            try:
                ast = parse(content)
            except GraphQLError as e:
                raise SchemaError(f"Error parsing {label}: {e.message}") from e
            self._process_ast(ast)

        descriptors: dict[str, OperationDescriptor] = {}
        for kind, fields in self.operations.items():
            for op in fields:
                descriptors[op.name] = OperationDescriptor(
                    name=op.name,
                    kind=kind,
                    output_fields=self._build_output_fields(op.type_name, depth=1),
                    enums=frozenset(
                        arg for arg, type_name in op.arguments.items() if type_name in self.enums
                    ),
                    description=op.description,
                )

        logger.debug(
            "Parsed %d operations (%d enums, %d types)",
            len(descriptors),
            len(self.enums),
            len(self.types),
        )
        return descriptors

    def _collect_sources(self) -> list[tuple[str, str]]:
        """Return (label, SDL) pairs for the configured source."""
        if os.path.isdir(self.source):
            files = []
            for root, _, filenames in os.walk(self.source):
                for filename in filenames:
                    if filename.endswith((".graphqls", ".graphql")):
                        files.append(os.path.join(root, filename))
            if not files:
                raise SchemaError(f"No .graphqls files found in {self.source}")
            return [(os.path.basename(path), self._read(path)) for path in sorted(files)]
        if os.path.isfile(self.source):
            return [(os.path.basename(self.source), self._read(self.source))]
        return [("<sdl>", self.source)]

    @staticmethod
    def _read(path: str) -> str:
        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise SchemaError(f"Cannot read schema file {path}: {e}") from e

    def _process_ast(self, ast):
        """Process GraphQL AST and record enums, types and root fields."""
        for definition in ast.definitions:
            if isinstance(definition, EnumTypeDefinitionNode):
                self.enums.add(definition.name.value)
            elif isinstance(definition, (UnionTypeDefinitionNode, UnionTypeExtensionNode)):
                self.unions.add(definition.name.value)
            elif isinstance(
                definition,
                (
                    ObjectTypeDefinitionNode,
                    ObjectTypeExtensionNode,
                    InterfaceTypeDefinitionNode,
                    InterfaceTypeExtensionNode,
                ),
            ):
                name = definition.name.value
                fields = self._process_fields(definition.fields or [])
                if name in ROOT_TYPES:
                    self.operations[ROOT_TYPES[name]].extend(fields)
                else:
                    # Extensions merge into the base type
                    existing = self.types.setdefault(name, [])
                    known = {f.name for f in existing}
                    existing.extend(f for f in fields if f.name not in known)

    def _process_fields(self, field_nodes) -> list[_Field]:
        fields = []
        for node in field_nodes:
            fields.append(
                _Field(
                    name=node.name.value,
                    type_name=self._named_type(node.type),
                    arguments={
                        arg.name.value: self._named_type(arg.type)
                        for arg in (node.arguments or [])
                    },
                    description=node.description.value if node.description else None,
                )
            )
        return fields

    def _build_output_fields(
        self,
        type_name: str,
        depth: int,
        visited: frozenset[str] = frozenset(),
    ) -> Node:
        """Select scalar fields of a type, recursing into object fields."""
        if type_name in self.unions:
            return UNION_SELECTION
        type_fields = self.types.get(type_name)
        if type_fields is None:
            # Scalar or enum return type: nothing to select
            return Node()

        visited = visited | {type_name}
        children = []
        for f in type_fields:
            if f.type_name in self.unions:
                children.append((f.name, UNION_SELECTION))
            elif f.type_name not in self.types:
                children.append((f.name, Leaf(f.name)))
            elif depth < self.max_depth and f.type_name not in visited:
                nested = self._build_output_fields(f.type_name, depth + 1, visited)
                # An empty selection is invalid GraphQL
                if not nested.is_empty:
                    children.append((f.name, nested))
        return Node(tuple(children))

    @staticmethod
    def _named_type(type_node: TypeNode) -> str:
        """Unwrap NonNull/List wrappers down to the named type."""
        while isinstance(type_node, (NonNullTypeNode, ListTypeNode)):
            type_node = type_node.type
        assert isinstance(type_node, NamedTypeNode), f"Expected NamedTypeNode, got {type(type_node)}"
        return type_node.name.value
