"""
Favorites store.

Keeps the user's favorite cards in memory (keyed by id, in insertion order)
and writes the whole list back to durable storage on every toggle.

Loading never fails: a missing, unreadable or corrupt stored value starts
the store empty. Writing can fail; the in-memory toggle is kept either way
so the UI reflects the user's action immediately, and the failure is
raised for the caller to report.
"""

import logging

from tcgguide.config import settings
from tcgguide.models.card import Card
from tcgguide.models.failure import PersistenceError
from tcgguide.parsers.catalog import dump_cards, load_cards
from tcgguide.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class FavoritesStore:
    """
    The persisted set of favorite cards.

    Invariant: no two favorites share an id.
    """

    def __init__(self, storage: KeyValueStorage, key: str | None = None) -> None:
        self._storage = storage
        self.key = key or settings.favorites_key
        self._cards: dict[str, Card] = {}

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card: object) -> bool:
        return isinstance(card, Card) and card.id in self._cards

    @property
    def favorites(self) -> list[Card]:
        """Snapshot of favorites in the order they were added."""
        return list(self._cards.values())

    async def load(self) -> list[Card]:
        """
        Load favorites from storage, replacing the in-memory set.

        Returns:
            Favorites in stored order. Empty if nothing is stored or the
            stored value cannot be read or decoded.
        """
        self._cards = {}

        try:
            raw = await self._storage.get(self.key)
        except PersistenceError as e:
            logger.warning("Could not read favorites, starting empty: %s", e)
            return self.favorites

        if raw is None:
            return self.favorites

        try:
            cards = load_cards(raw)
        except ValueError as e:
            logger.warning("Stored favorites are corrupt, starting empty: %s", e)
            return self.favorites

        for card in cards:
            # First occurrence wins if the stored list somehow has duplicates
            self._cards.setdefault(card.id, card)

        logger.info("Loaded %d favorites", len(self._cards))
        return self.favorites

    def is_favorite(self, card_id: str) -> bool:
        """True if a card with this id is a favorite."""
        return card_id in self._cards

    async def toggle(self, card: Card) -> list[Card]:
        """
        Add the card if it is not a favorite, remove it if it is.

        The in-memory set changes before the write starts, so is_favorite
        reflects the toggle even while the write is pending or after it fails.

        Args:
            card: Card to toggle

        Returns:
            Favorites after the toggle, in insertion order

        Raises:
            PersistenceError: If the new list could not be written
        """
        if card.id in self._cards:
            del self._cards[card.id]
            logger.debug("Removed favorite %s", card.id)
        else:
            self._cards[card.id] = card
            logger.debug("Added favorite %s", card.id)

        snapshot = self.favorites
        await self._storage.set(self.key, dump_cards(snapshot))
        return snapshot
