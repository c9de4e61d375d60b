"""Industry catalogs consumed by the analysis engine."""

from .provider import CatalogProvider

__all__ = ['CatalogProvider']
