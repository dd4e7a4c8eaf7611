from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from tcgguide.models.card import Card
from tcgguide.parsers.catalog import CardPayload
from tcgguide.services.storage import MemoryStorage


@pytest.fixture
def charizard_payload() -> dict[str, Any]:
    """Full card object as returned by the catalog."""
    return {
        "id": "base1-4",
        "name": "Charizard",
        "supertype": "Pokémon",
        "subtypes": ["Stage 2"],
        "hp": "120",
        "types": ["Fire"],
        "attacks": [
            {
                "name": "Fire Spin",
                "cost": ["Fire", "Fire", "Fire", "Fire"],
                "convertedEnergyCost": 4,
                "damage": "100",
                "text": "Discard 2 Energy cards attached to Charizard.",
            }
        ],
        "weaknesses": [{"type": "Water", "value": "×2"}],
        "resistances": [{"type": "Fighting", "value": "-30"}],
        "retreatCost": ["Colorless", "Colorless", "Colorless"],
        "set": {
            "id": "base1",
            "name": "Base",
            "series": "Base",
            "printedTotal": 102,
            "total": 102,
        },
        "number": "4",
        "rarity": "Rare Holo",
        "flavorText": "Spits fire that is hot enough to melt boulders.",
        "legalities": {"unlimited": "Legal"},
        "images": {
            "small": "https://images.pokemontcg.io/base1/4.png",
            "large": "https://images.pokemontcg.io/base1/4_hires.png",
        },
        "tcgplayer": {
            "url": "https://prices.pokemontcg.io/tcgplayer/base1-4",
            "updatedAt": "2024/01/15",
            "prices": {"holofoil": {"low": 250.0, "mid": 400.0, "market": 375.5}},
        },
    }


@pytest.fixture
def make_card() -> Callable[..., Card]:
    """Factory for minimal cards."""

    def _make(card_id: str, name: str | None = None, **fields: Any) -> Card:
        payload = {"id": card_id, "name": name or card_id, **fields}
        return CardPayload.model_validate(payload).to_card()

    return _make


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """File-backed SQLite URL so every session sees the same data."""
    return f"sqlite+aiosqlite:///{tmp_path / 'tcgguide-test.db'}"
