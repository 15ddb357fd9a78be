"""Entity sizing — box dimensions from member counts and estimated text widths.

Text width is estimated as ``len(text) * char_width``: renderers use a
monospace-ish font, so no font metrics are consulted.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from diagram_layout.config import DEFAULT_CONFIG, LayoutConfig
from diagram_layout.model import Attribute, Entity, Function, Method, Parameter
from diagram_layout.types import Size


def member_row_count(entity: Entity) -> int:
    """Number of rows drawn below the header."""
    return (
        len(entity.attributes)
        + len(entity.methods)
        + len(entity.functions)
        + len(entity.types)
        + len(entity.values)
    )


def _params_text(parameters: Iterable[Parameter]) -> str:
    return ", ".join(f"{p.name}: {p.type.name}" for p in parameters)


def attribute_text(attr: Attribute) -> str:
    prefix = f"{attr.visibility.symbol} " if attr.visibility else ""
    return f"{prefix}{attr.name}: {attr.type.name}"


def method_text(method: Method) -> str:
    prefix = f"{method.visibility.symbol} " if method.visibility else ""
    return f"{prefix}{method.name}({_params_text(method.parameters)}): {method.return_type.name}"


def function_text(fn: Function) -> str:
    prefix = "+ " if fn.is_exported else "- "
    return f"{prefix}{fn.name}({_params_text(fn.parameters)}): {fn.return_type.name}"


def header_chars(entity: Entity) -> int:
    """Character count of the header: name plus ``<T, U>`` when generic."""
    chars = len(entity.name)
    if entity.generics:
        chars += len(", ".join(entity.generics)) + 2
    return chars


def _row_texts(entity: Entity) -> Iterator[str]:
    for attr in entity.attributes:
        yield attribute_text(attr)
    for method in entity.methods:
        yield method_text(method)
    for fn in entity.functions:
        yield function_text(fn)
    yield from entity.values


def calculate_entity_size(entity: Entity, config: LayoutConfig = DEFAULT_CONFIG) -> Size:
    """Compute the (width, height) of an entity box.

    height = header + rows * row height + padding
    width  = max(min width, widest text + 2 * padding)

    An entity without members gets the header-only height and, for a short
    name, the minimum width.
    """
    height = config.header_height + member_row_count(entity) * config.member_height + config.entity_padding

    max_text_width = header_chars(entity) * config.char_width
    for text in _row_texts(entity):
        max_text_width = max(max_text_width, len(text) * config.char_width)

    width = max(config.min_entity_width, max_text_width + config.entity_padding * 2)
    return Size(width=width, height=height)


def calculate_sizes(entities: Iterable[Entity], config: LayoutConfig = DEFAULT_CONFIG) -> list[Size]:
    """Sizes indexed like ``entities``."""
    return [calculate_entity_size(e, config) for e in entities]
