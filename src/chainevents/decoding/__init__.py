"""Field value rendering.

This package provides:
- Renderer strategies (default string form, byte-string → UTF-8 text)
- A registry keyed by type tag and the dispatching render functions
"""

from chainevents.decoding.registry import (
    RendererRegistry,
    add_many,
    add_renderer,
    make_renderer_registry,
    render_field,
    render_fields,
)
from chainevents.decoding.renderers import BYTES_TYPE, as_bytes, render_bytes, render_default

__all__ = [
    "RendererRegistry",
    "add_many",
    "add_renderer",
    "make_renderer_registry",
    "render_field",
    "render_fields",
    "BYTES_TYPE",
    "as_bytes",
    "render_bytes",
    "render_default",
]
