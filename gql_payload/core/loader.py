"""Load operation descriptors from JSON.

A descriptor document is one object or a list of objects:

    [
      {
        "kind": "query",
        "name": "users",
        "output_fields": {"id": "id", "profile": {"name": "name"}},
        "enums": ["status"]
      }
    ]
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .errors import SchemaError, SerializationError
from .ir import OperationDescriptor

logger = logging.getLogger(__name__)


def descriptor_from_dict(data: Mapping[str, Any]) -> OperationDescriptor:
    """Build a descriptor from its JSON form."""
    if not isinstance(data, Mapping):
        raise SchemaError(f"Descriptor must be an object, got {type(data).__name__}")
    if not data.get("name"):
        raise SchemaError(f"Descriptor is missing 'name': {dict(data)!r}")

    try:
        return OperationDescriptor(
            name=data["name"],
            kind=data.get("kind", "query"),
            output_fields=data.get("output_fields"),
            enums=data.get("enums") or (),
            description=data.get("description"),
        )
    except (ValueError, SerializationError) as e:
        raise SchemaError(f"Invalid descriptor {data['name']!r}: {e}") from e


def load_descriptors(path: str | Path) -> dict[str, OperationDescriptor]:
    """Read a descriptor file and return descriptors keyed by name."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SchemaError(f"Cannot read descriptor file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SchemaError(f"Invalid JSON in {path}: {e}") from e

    items = data if isinstance(data, list) else [data]
    descriptors = {}
    for item in items:
        descriptor = descriptor_from_dict(item)
        descriptors[descriptor.name] = descriptor
    logger.debug("Loaded %d descriptors from %s", len(descriptors), path)
    return descriptors
