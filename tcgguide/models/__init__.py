from tcgguide.models.card import (
    Attack,
    Card,
    CardImages,
    PriceSnapshot,
    SetReference,
    TypeValue,
)
from tcgguide.models.card_set import CardSet, display_sort_key, sort_sets_by_name
from tcgguide.models.criteria import FilterCriteria
from tcgguide.models.failure import (
    ApiError,
    CatalogError,
    FailureKind,
    MalformedQuery,
    PersistenceError,
    TransportError,
)

__all__ = [
    "ApiError",
    "Attack",
    "Card",
    "CardImages",
    "CardSet",
    "CatalogError",
    "FailureKind",
    "FilterCriteria",
    "MalformedQuery",
    "PersistenceError",
    "PriceSnapshot",
    "SetReference",
    "TransportError",
    "TypeValue",
    "display_sort_key",
    "sort_sets_by_name",
]
