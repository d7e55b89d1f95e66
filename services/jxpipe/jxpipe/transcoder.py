"""JSON value to XML fragment transcoding.

Arrays become runs of sibling ``<item>`` elements, objects become one element
per key, nulls become self-closing elements. The output is a fragment: the
document prolog and the ``<root>`` wrapper are added by the responder.
"""

from __future__ import annotations

from typing import Any

from .values import Array, Bool, Container, JsonValue, Null, Number, Object, String, is_container, lift

ARRAY_ITEM_TAG = "item"
EMPTY_KEY_TAG = "empty_key"
TOP_LEVEL_SCALAR_TAG = "value"

# Ampersand first, otherwise the later entities get escaped again.
_XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_xml(scalar: Any) -> str:
    """Stringify a scalar and escape it for use as XML text content."""
    text = _scalar_text(lift(scalar))
    for char, entity in _XML_ESCAPES:
        text = text.replace(char, entity)
    return text


def _scalar_text(value: JsonValue) -> str:
    if isinstance(value, String):
        return value.value
    if isinstance(value, Number):
        return value.text
    if isinstance(value, Bool):
        return "true" if value.value else "false"
    if isinstance(value, Null):
        return "null"
    raise TypeError(f"Expected a scalar JSON value, got {type(value).__name__}")


def encode_value(value: Any) -> str:
    """Encode any JSON value as an XML fragment.

    Containers expand to their entries with no wrapper. A top-level scalar or
    null has no name to use as a tag, so it is wrapped in ``<value>``.
    """
    value = lift(value)
    if is_container(value):
        return encode_container(value)
    return f"<{TOP_LEVEL_SCALAR_TAG}>{escape_xml(value)}</{TOP_LEVEL_SCALAR_TAG}>"


def encode_container(container: Container) -> str:
    """Encode each entry of an array or object as a sibling element, in order.

    Object keys are used verbatim as tag names. Keys that are not valid XML
    names produce malformed markup; only the empty key is replaced.
    """
    container = lift(container)
    if isinstance(container, Array):
        entries = ((ARRAY_ITEM_TAG, item) for item in container.items)
    elif isinstance(container, Object):
        entries = ((key or EMPTY_KEY_TAG, value) for key, value in container.entries)
    else:
        raise TypeError(f"Expected an array or object, got {type(container).__name__}")

    parts: list[str] = []
    for tag, value in entries:
        if isinstance(value, Null):
            parts.append(f"<{tag}/>")
        elif isinstance(value, (Array, Object)):
            parts.append(f"<{tag}>{encode_container(value)}</{tag}>")
        else:
            parts.append(f"<{tag}>{escape_xml(value)}</{tag}>")
    return "".join(parts)
