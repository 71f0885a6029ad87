"""Registry of file renderers.

Apps register renderers in AppConfig.ready(); callers ask for the best
renderer for a file with get_renderer().
"""

from __future__ import annotations

from .rendering import FileRenderer

_registry: list[FileRenderer] = []


def register(renderer: FileRenderer) -> None:
    """Register a renderer instance. Each renderer class may be registered once."""
    if any(type(existing) is type(renderer) for existing in _registry):
        raise ValueError(f"Renderer '{type(renderer).__name__}' is already registered")
    _registry.append(renderer)


def clear_registry() -> None:
    """Reset registry state. For tests only."""
    _registry.clear()


def get_renderers() -> list[FileRenderer]:
    """Return registered renderers, highest priority first (ties keep registration order)."""
    return sorted(_registry, key=lambda renderer: renderer.get_priority(), reverse=True)


def get_renderer(file) -> FileRenderer | None:
    """Return the highest-priority renderer that accepts ``file``, or None."""
    for renderer in get_renderers():
        if renderer.can_render(file):
            return renderer
    return None
