import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CardSet:
    """
    A set (expansion) in the catalog.

    Used to populate the selectable set filter.
    """

    id: str
    name: str | None = None
    series: str | None = None
    printed_total: int | None = None
    total: int | None = None
    release_date: str | None = None
    legalities: dict[str, str] = field(default_factory=dict, compare=False, hash=False)


def display_sort_key(name: str | None) -> str:
    """
    Sort key approximating a locale-aware, case-insensitive comparison.

    Accents are dropped and case folded, so "Évolutions" sorts with "E"
    and "aquapolis" before "Base Set". A missing name sorts first.
    """
    decomposed = unicodedata.normalize("NFKD", name or "")
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def sort_sets_by_name(sets: Iterable[CardSet]) -> list[CardSet]:
    """Sets in display order (name ascending). Stable for equal names."""
    return sorted(sets, key=lambda s: display_sort_key(s.name))
