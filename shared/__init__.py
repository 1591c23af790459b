"""Shared utility package for cross-layer value objects and interfaces."""

from .interfaces import IRenderer, IRendererFactory  # noqa: F401
from .render_data import RenderData  # noqa: F401
