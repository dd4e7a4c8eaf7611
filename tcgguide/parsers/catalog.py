"""
Pokémon TCG API payload parsing.

Wire schemas for the catalog's card and set objects, and conversion to the
domain dataclasses. The same card shape is used to persist favorites, so a
stored favorite decodes exactly like a search result.

API reference: https://docs.pokemontcg.io/api-reference/cards/card-object

Every card field except `id` is optional on the wire; missing fields
decode as None / empty rather than failing.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from tcgguide.models.card import (
    Attack,
    Card,
    CardImages,
    PriceSnapshot,
    SetReference,
    TypeValue,
)
from tcgguide.models.card_set import CardSet

logger = logging.getLogger(__name__)


class _Payload(BaseModel):
    """Base for camelCase catalog objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


class SetReferencePayload(_Payload):
    id: str | None = None
    name: str | None = None
    series: str | None = None
    printed_total: int | None = None


class AttackPayload(_Payload):
    name: str | None = None
    cost: list[str] | None = None
    converted_energy_cost: int | None = None
    damage: str | None = None
    text: str | None = None


class TypeValuePayload(_Payload):
    type: str | None = None
    value: str | None = None


class ImagesPayload(_Payload):
    small: str | None = None
    large: str | None = None


class TcgplayerPayload(_Payload):
    url: str | None = None
    updated_at: str | None = None
    prices: dict[str, dict[str, float | None]] = Field(default_factory=dict)


class CardPayload(_Payload):
    """A card object as sent by the catalog."""

    id: str
    name: str | None = None
    set: SetReferencePayload | None = None
    supertype: str | None = None
    subtypes: list[str] | None = None
    hp: str | None = None
    types: list[str] | None = None
    rarity: str | None = None
    number: str | None = None
    attacks: list[AttackPayload] | None = None
    weaknesses: list[TypeValuePayload] | None = None
    resistances: list[TypeValuePayload] | None = None
    retreat_cost: list[str] | None = None
    legalities: dict[str, str] | None = None
    flavor_text: str | None = None
    tcgplayer: TcgplayerPayload | None = None
    images: ImagesPayload | None = None

    def to_card(self) -> Card:
        """Convert to the immutable domain Card."""
        set_ref = None
        if self.set is not None:
            set_ref = SetReference(
                id=self.set.id,
                name=self.set.name,
                series=self.set.series,
                printed_total=self.set.printed_total,
            )

        tcgplayer = None
        if self.tcgplayer is not None:
            tcgplayer = PriceSnapshot(
                url=self.tcgplayer.url,
                updated_at=self.tcgplayer.updated_at,
                prices=self.tcgplayer.prices,
            )

        images = self.images or ImagesPayload()

        return Card(
            id=self.id,
            name=self.name,
            set=set_ref,
            supertype=self.supertype,
            subtypes=tuple(self.subtypes or ()),
            hp=self.hp,
            types=tuple(self.types or ()),
            rarity=self.rarity,
            number=self.number,
            attacks=tuple(
                Attack(
                    name=a.name,
                    cost=tuple(a.cost or ()),
                    converted_energy_cost=a.converted_energy_cost,
                    damage=a.damage,
                    text=a.text,
                )
                for a in self.attacks or ()
            ),
            weaknesses=tuple(TypeValue(type=w.type, value=w.value) for w in self.weaknesses or ()),
            resistances=tuple(
                TypeValue(type=r.type, value=r.value) for r in self.resistances or ()
            ),
            retreat_cost=tuple(self.retreat_cost or ()),
            legalities=dict(self.legalities or {}),
            flavor_text=self.flavor_text,
            tcgplayer=tcgplayer,
            images=CardImages(small=images.small, large=images.large),
        )

    @classmethod
    def from_card(cls, card: Card) -> "CardPayload":
        """Build the wire shape back from a domain Card."""
        return cls(
            id=card.id,
            name=card.name,
            set=(
                SetReferencePayload(
                    id=card.set.id,
                    name=card.set.name,
                    series=card.set.series,
                    printed_total=card.set.printed_total,
                )
                if card.set
                else None
            ),
            supertype=card.supertype,
            subtypes=list(card.subtypes) or None,
            hp=card.hp,
            types=list(card.types) or None,
            rarity=card.rarity,
            number=card.number,
            attacks=[
                AttackPayload(
                    name=a.name,
                    cost=list(a.cost) or None,
                    converted_energy_cost=a.converted_energy_cost,
                    damage=a.damage,
                    text=a.text,
                )
                for a in card.attacks
            ]
            or None,
            weaknesses=[TypeValuePayload(type=w.type, value=w.value) for w in card.weaknesses]
            or None,
            resistances=[TypeValuePayload(type=r.type, value=r.value) for r in card.resistances]
            or None,
            retreat_cost=list(card.retreat_cost) or None,
            legalities=dict(card.legalities) or None,
            flavor_text=card.flavor_text,
            tcgplayer=(
                TcgplayerPayload(
                    url=card.tcgplayer.url,
                    updated_at=card.tcgplayer.updated_at,
                    prices=card.tcgplayer.prices,
                )
                if card.tcgplayer
                else None
            ),
            images=ImagesPayload(small=card.images.small, large=card.images.large),
        )


class SetPayload(_Payload):
    """A set object as sent by the catalog."""

    id: str
    name: str | None = None
    series: str | None = None
    printed_total: int | None = None
    total: int | None = None
    release_date: str | None = None
    legalities: dict[str, str] | None = None

    def to_card_set(self) -> CardSet:
        return CardSet(
            id=self.id,
            name=self.name,
            series=self.series,
            printed_total=self.printed_total,
            total=self.total,
            release_date=self.release_date,
            legalities=dict(self.legalities or {}),
        )


class CardListResponse(_Payload):
    """Envelope returned by GET /cards. Entries are validated one by one."""

    data: list[Any] = Field(default_factory=list)
    page: int | None = None
    page_size: int | None = None
    count: int | None = None
    total_count: int | None = None


class SetListResponse(_Payload):
    """Envelope returned by GET /sets."""

    data: list[Any] = Field(default_factory=list)


_card_list_adapter: TypeAdapter[list[CardPayload]] = TypeAdapter(list[CardPayload])


def _decode_cards(entries: list[Any]) -> list[Card]:
    """Decode card entries in order, skipping any that are not card objects."""
    cards: list[Card] = []
    for index, entry in enumerate(entries):
        try:
            cards.append(CardPayload.model_validate(entry).to_card())
        except ValidationError as e:
            logger.warning("Skipping undecodable card entry %d: %s", index, e)
    return cards


def parse_cards_response(body: bytes | str) -> list[Card]:
    """
    Parse a /cards response body.

    A card entry that cannot be decoded (for example one without an id) is
    skipped with a warning; the rest of the page is kept.

    Raises:
        pydantic.ValidationError: If the body is not JSON or not the expected envelope
    """
    response = CardListResponse.model_validate_json(body)
    return _decode_cards(response.data)


def parse_sets_response(body: bytes | str) -> list[CardSet]:
    """
    Parse a /sets response body (server order is kept).

    Undecodable set entries are skipped with a warning.

    Raises:
        pydantic.ValidationError: If the body is not JSON or not the expected envelope
    """
    response = SetListResponse.model_validate_json(body)

    sets: list[CardSet] = []
    for index, entry in enumerate(response.data):
        try:
            sets.append(SetPayload.model_validate(entry).to_card_set())
        except ValidationError as e:
            logger.warning("Skipping undecodable set entry %d: %s", index, e)
    return sets


def dump_cards(cards: list[Card]) -> bytes:
    """Serialize cards, in order, as a JSON array in catalog shape."""
    return _card_list_adapter.dump_json(
        [CardPayload.from_card(card) for card in cards],
        by_alias=True,
        exclude_none=True,
    )


def load_cards(raw: bytes | str) -> list[Card]:
    """
    Deserialize a JSON array of card objects, in order.

    Entries that are not valid card objects are skipped with a warning.

    Raises:
        ValueError: If the payload is not JSON or not a JSON array
    """
    try:
        entries = json.loads(raw)
    except RecursionError as e:
        raise ValueError("Card payload is nested too deeply to decode") from e

    if not isinstance(entries, list):
        raise ValueError(f"Expected a JSON array of cards, got {type(entries).__name__}")

    return _decode_cards(entries)
