"""Renderer registry keyed by type tag.

This module exposes:
- `make_renderer_registry()` → RendererRegistry prefilled with the byte-string strategy
- `add_renderer(registry, type_tag, renderer)` → register one strategy
- `add_many(registry, renderers)` → register several
- `render_field` / `render_fields` → dispatch event fields through a registry

Special-casing another type only requires registering a renderer here;
the render loop never changes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from chainevents.core.models import EventField, RenderedField
from chainevents.decoding.renderers import BYTES_TYPE, FieldRenderer, render_bytes, render_default

# Type tag → renderer. Unregistered tags use `render_default`.
RendererRegistry = dict[str, FieldRenderer]


def make_renderer_registry() -> RendererRegistry:
    """Build the default registry (byte strings decoded as UTF-8 text)."""
    reg: RendererRegistry = {}
    add_renderer(reg, BYTES_TYPE, render_bytes)
    return reg


def add_renderer(registry: RendererRegistry, type_tag: str, renderer: FieldRenderer) -> None:
    """Insert one renderer for an exact type tag."""
    registry[type_tag] = renderer


def add_many(registry: RendererRegistry, renderers: Mapping[str, FieldRenderer]) -> None:
    """Insert many renderers into the registry."""
    for type_tag, renderer in renderers.items():
        add_renderer(registry, type_tag, renderer)


def render_field(field: EventField, registry: RendererRegistry) -> RenderedField:
    renderer = registry.get(field.type_tag, render_default)
    return RenderedField(type_tag=field.type_tag, text=renderer(field.value))


def render_fields(fields: Iterable[EventField], registry: RendererRegistry) -> tuple[RenderedField, ...]:
    """Render every field, keeping declaration order."""
    return tuple(render_field(f, registry) for f in fields)
