"""Backends for stub output generation (template rendering per target language)."""

from .read_data import ReadData, resolve_read_data
from .stub_renderer import RenderError, StubRenderer, render_stub

__all__ = ["ReadData", "resolve_read_data", "RenderError", "StubRenderer", "render_stub"]
