"""Export functionality for GreenlightIQ."""

from .markdown import MarkdownExporter

__all__ = ['MarkdownExporter']
