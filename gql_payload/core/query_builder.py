"""Query builder for GraphQL operations.

Constructs GraphQL query/mutation strings from operation metadata, inline
argument values and an output field selection.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .arguments import EnumStrategy, serialize_arguments
from .graph import render_graph
from .ir import OperationDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuilderOptions:
    """Configuration for how a QueryBuilder renders arguments."""
    enum_strategy: EnumStrategy = EnumStrategy.STRUCTURAL
    strict_enums: bool = False  # Raise when REPLACE cannot find an enum value

    def __post_init__(self):
        if not isinstance(self.enum_strategy, EnumStrategy):
            try:
                strategy = EnumStrategy(str(self.enum_strategy).lower())
            except ValueError:
                raise ValueError(
                    f"Unknown enum strategy {self.enum_strategy!r}; "
                    f"expected one of {[s.value for s in EnumStrategy]}"
                ) from None
            object.__setattr__(self, "enum_strategy", strategy)
        if self.strict_enums and self.enum_strategy is EnumStrategy.STRUCTURAL:
            raise ValueError("strict_enums only applies to the 'replace' enum strategy")


class QueryBuilder:
    """Builds GraphQL document strings for one operation.

    The builder holds only immutable metadata, so one instance can serve
    any number of calls (and threads).

    Examples:
        builder = QueryBuilder(OperationDescriptor(
            name="users",
            output_fields={"id": "id", "profile": {"name": "name"}},
            enums={"status"},
        ))
        builder.build({"status": "ACTIVE"})
        # query { users(status:ACTIVE) { id profile { name } } }
    """

    def __init__(self, descriptor: OperationDescriptor, options: BuilderOptions | None = None):
        """Initialize with the operation metadata and rendering options."""
        self.descriptor = descriptor
        self.options = options or BuilderOptions()

    @property
    def kind(self) -> str:
        return self.descriptor.kind.value

    @property
    def name(self) -> str:
        return self.descriptor.name

    def build(self, arguments: Mapping[str, Any], fields: Any = None) -> str:
        """Build a query/mutation with arguments and an output selection.

        Args:
            arguments: Input arguments to send
            fields: Desired output fields; the descriptor's defaults when
                empty or None

        Returns:
            Complete GraphQL document string
        """
        args = self._build_arguments(arguments)
        graph = self._create_graph(fields)
        return self._emit(f"{self.kind} {{ {self.name}({args}) {graph} }}")

    def build_without_fields(self, arguments: Mapping[str, Any]) -> str:
        """Build a call with arguments and no output selection."""
        args = self._build_arguments(arguments)
        return self._emit(f"{self.kind} {{ {self.name}({args}) }}")

    def build_update(self, record_id: Any, arguments: Mapping[str, Any], fields: Any = None) -> str:
        """Build an id-addressed update.

        The id leads the argument list unquoted. Extra arguments follow after
        a single space with no comma; GraphQL treats commas as whitespace, so
        ``(id:7 name:"x")`` is still a valid argument list.
        """
        args = self._build_arguments(arguments)
        graph = self._create_graph(fields)
        return self._emit(f"{self.kind} {{ {self.name}(id:{record_id} {args}) {graph} }}")

    def build_list(self, fields: Any = None) -> str:
        """Build an unfiltered collection fetch.

        The selection is wrapped in an extra brace pair:
        ``query { items { { id } } }``.
        """
        graph = self._create_graph(fields)
        return self._emit(f"{self.kind} {{ {self.name} {{ {graph} }} }}")

    def build_single(self, record_id: Any, fields: Any = None) -> str:
        """Build a fetch of one record by id."""
        graph = self._create_graph(fields)
        return self._emit(f"{self.kind} {{ {self.name}(id:{record_id}) {graph} }}")

    def build_paginate(self, limit: int = 1, page: int = 1, fields: Any = None) -> str:
        """Build a paginated collection fetch.

        Args:
            limit: Records per page
            page: Page number
            fields: Fields of each record inside ``data``

        Returns:
            Document selecting ``data``, ``total`` and ``per_page``
        """
        graph = self._create_graph(fields)
        return self._emit(
            f"{self.kind} {{ {self.name}(limit:{limit},page:{page}){{data{graph} }},total,per_page }}"
        )

    def build_search(
        self,
        limit: int = 1,
        page: int = 1,
        arguments: Mapping[str, Any] | None = None,
        fields: Any = None,
    ) -> str:
        """Build a paginated collection fetch filtered by arguments."""
        args = self._build_arguments(arguments or {})
        graph = self._create_graph(fields)
        return self._emit(
            f"{self.kind} {{ {self.name}(limit:{limit},page:{page},{args}){{data {graph} }}}}"
        )

    def _build_arguments(self, arguments: Mapping[str, Any]) -> str:
        """Serialize arguments, unquoting this operation's enum arguments."""
        return serialize_arguments(
            arguments,
            self.descriptor.enums,
            strategy=self.options.enum_strategy,
            strict=self.options.strict_enums,
        )

    def _create_graph(self, fields: Any) -> str:
        return render_graph(fields, self.descriptor.output_fields)

    def _emit(self, document: str) -> str:
        logger.debug("Built %s %s: %s", self.kind, self.name, document)
        return document
