"""Renderers projecting a menu document onto the preview and export surfaces."""

from menu_render_service.rendering.bitmap_exporter import layout_bitmap, rasterize, render_bitmap
from menu_render_service.rendering.document_exporter import render_document, render_print_document
from menu_render_service.rendering.preview_renderer import PreviewRenderer, build_preview_view

__all__ = [
    "PreviewRenderer",
    "build_preview_view",
    "render_document",
    "render_print_document",
    "layout_bitmap",
    "rasterize",
    "render_bitmap",
]
