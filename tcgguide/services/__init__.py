"""
TCG Guide services.

Query building, catalog access, favorites and search orchestration.
"""

from tcgguide.services.catalog_client import CatalogClient
from tcgguide.services.favorites import FavoritesStore
from tcgguide.services.query_builder import build_query, build_terms
from tcgguide.services.search_controller import (
    AnnotatedCard,
    SearchController,
    SearchPhase,
)
from tcgguide.services.storage import KeyValueStorage, MemoryStorage, SqlKeyValueStorage

__all__ = [
    "AnnotatedCard",
    "CatalogClient",
    "FavoritesStore",
    "KeyValueStorage",
    "MemoryStorage",
    "SearchController",
    "SearchPhase",
    "SqlKeyValueStorage",
    "build_query",
    "build_terms",
]
