from .registry import CatalogEntry, DiagramCatalog, get_catalog

__all__ = ["CatalogEntry", "DiagramCatalog", "get_catalog"]
