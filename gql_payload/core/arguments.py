"""Argument serialization for GraphQL call sites.

Renders an argument map as the inside of a GraphQL argument list:

    {"status": "ACTIVE", "name": "Bob", "filter": {"age": 30}}
        -> status:"ACTIVE",name:"Bob",filter:{age:30}

Scalars go through json.dumps (unicode kept as-is), keys are always bare.
Arguments named as enums are emitted unquoted, either while serializing
(EnumStrategy.STRUCTURAL) or by a find/replace pass over the finished
string (EnumStrategy.REPLACE).
"""

import json
import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import MalformedReplacementError, SerializationError

logger = logging.getLogger(__name__)


class EnumStrategy(Enum):
    """How enum arguments lose their quotes."""
    STRUCTURAL = "structural"  # Emit top-level enum values bare while serializing
    REPLACE = "replace"        # Serialize first, then unquote with one global replace pass


def serialize_arguments(
    arguments: Mapping[str, Any],
    enums: Iterable[str] = frozenset(),
    strategy: EnumStrategy = EnumStrategy.STRUCTURAL,
    strict: bool = False,
) -> str:
    """Serialize an argument map into comma-separated key:value tokens.

    Args:
        arguments: Argument name -> value
        enums: Argument names whose string values are enum symbols
        strategy: Enum substitution strategy
        strict: With REPLACE, raise instead of warning when an enum value
            cannot be found in its quoted form

    Returns:
        The argument list body, without surrounding parentheses

    Raises:
        SerializationError: If a value (or key) cannot be rendered
        MalformedReplacementError: Only with strict=True and REPLACE
    """
    enums = frozenset(enums)
    if not enums:
        return _render_pairs(arguments)

    if strategy is EnumStrategy.STRUCTURAL:
        return _render_pairs(arguments, bare=enums)

    return _replace_enums(arguments, _render_pairs(arguments), enums, strict)


def render_value(value: Any) -> str:
    """Render a single value as a GraphQL literal."""
    value = _plain(value)

    if isinstance(value, Mapping):
        return "{" + _render_pairs(value) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(render_value(v) for v in value) + "]"
    if value is None or isinstance(value, (str, int, float, bool)):
        try:
            return json.dumps(value, ensure_ascii=False, allow_nan=False)
        except ValueError as e:
            raise SerializationError(f"Cannot serialize {value!r}: {e}") from e

    raise SerializationError(
        f"Cannot serialize value of type {type(value).__name__}: {value!r}"
    )


def _render_pairs(arguments: Mapping[str, Any], bare: frozenset[str] = frozenset()) -> str:
    if not isinstance(arguments, Mapping):
        raise SerializationError(
            f"Arguments must be a mapping, got {type(arguments).__name__}"
        )

    tokens = []
    for key, value in arguments.items():
        if not isinstance(key, str):
            raise SerializationError(f"Argument names must be strings, got {key!r}")
        plain = _plain(value)
        if key in bare and isinstance(plain, str):
            tokens.append(f"{key}:{plain}")
        else:
            tokens.append(f"{key}:{render_value(plain)}")
    return ",".join(tokens)


def _replace_enums(
    arguments: Mapping[str, Any],
    serialized: str,
    enums: frozenset[str],
    strict: bool,
) -> str:
    """Unquote enum values in an already serialized argument string.

    Every occurrence of a quoted value is replaced, including occurrences
    under other keys that happen to hold the same string.
    """
    replacements: list[tuple[str, str]] = []
    for key, value in arguments.items():
        if key not in enums:
            continue
        plain = _plain(value)
        quoted = render_value(plain) if isinstance(plain, str) else None
        if quoted is None or quoted not in serialized:
            if strict:
                raise MalformedReplacementError(key, quoted or repr(plain))
            logger.warning(
                "Enum argument %r has no quoted string form in %r; left unchanged",
                key,
                serialized,
            )
            continue
        replacements.append((quoted, plain))

    for quoted, bare in replacements:
        serialized = serialized.replace(quoted, bare)
    return serialized


def _plain(value: Any) -> Any:
    """Unwrap Python enums and pydantic models into plain values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        # Same dump options as request variables: aliases on, None dropped
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    return value
