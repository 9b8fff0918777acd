"""
Visualization module for UV previews.
"""

from .preview_exporter import PreviewExporter, default_preview_name

__all__ = ["PreviewExporter", "default_preview_name"]
