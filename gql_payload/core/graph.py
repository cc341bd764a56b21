"""Output field graph rendering.

    render_graph({"id": "id", "profile": {"name": "name"}})
        -> "{ id profile { name } }"
"""

from typing import Any

from .ir import Leaf, Node, to_field_spec


def render_graph(fields: Any, defaults: Any = None) -> str:
    """Render a field spec as a brace-delimited selection.

    Any empty selection, top-level or nested, is replaced by ``defaults``.
    Empty selections inside the defaults are left as they are. The braces
    are always emitted, even when both are empty.
    """
    return _render_node(to_field_spec(fields), to_field_spec(defaults))


def _render_node(node: Node, defaults: Node | None) -> str:
    if node.is_empty and defaults is not None:
        node, defaults = defaults, None

    tokens = []
    for key, child in node.children:
        if isinstance(child, Leaf):
            tokens.append(child.name)
        else:
            tokens.append(f"{key} {_render_node(child, defaults)}")
    return f"{{ {' '.join(tokens)} }}"
