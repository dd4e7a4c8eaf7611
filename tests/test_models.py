from collections.abc import Callable

import pytest

from tcgguide.models.card import Card, PriceSnapshot
from tcgguide.models.card_set import CardSet, sort_sets_by_name
from tcgguide.models.criteria import FilterCriteria
from tcgguide.models.failure import ApiError, FailureKind, PersistenceError, TransportError


class TestCardIdentity:
    def test_equal_by_id_only(self) -> None:
        """Cards with the same id are equal even if other fields differ."""
        assert Card(id="xy1-1", name="Venusaur") == Card(id="xy1-1", name="Renamed")
        assert Card(id="xy1-1") != Card(id="xy1-2")

    def test_set_membership_by_id(self) -> None:
        """A set of cards deduplicates by id."""
        cards = {Card(id="a", name="One"), Card(id="a", name="Two"), Card(id="b")}
        assert len(cards) == 2

    def test_cards_are_immutable(self) -> None:
        """Card values cannot be reassigned."""
        card = Card(id="a")
        with pytest.raises(AttributeError):
            card.name = "changed"  # type: ignore[misc]


class TestCardHelpers:
    def test_hp_value(self, make_card: Callable[..., Card]) -> None:
        """Numeric HP parses; missing or odd values are None."""
        assert make_card("a", hp="120").hp_value == 120
        assert make_card("b").hp_value is None
        assert make_card("c", hp="??").hp_value is None

    def test_prices_prefer_holofoil(self) -> None:
        """Holofoil prices win over normal ones."""
        snapshot = PriceSnapshot(
            prices={"normal": {"market": 1.0, "low": 0.5}, "holofoil": {"market": 9.0}}
        )
        card = Card(id="a", tcgplayer=snapshot)

        assert card.market_price == 9.0
        assert card.low_price == 0.5

    def test_prices_missing_snapshot(self) -> None:
        """No price snapshot means unknown prices."""
        card = Card(id="a")
        assert card.market_price is None
        assert card.low_price is None

    def test_is_legal(self, make_card: Callable[..., Card]) -> None:
        """Legality lookup is case-insensitive and only 'Legal' counts."""
        card = make_card("a", legalities={"unlimited": "Legal", "expanded": "Banned"})

        assert card.is_legal("Unlimited")
        assert not card.is_legal("expanded")
        assert not card.is_legal("standard")


class TestSetOrdering:
    def test_sorted_case_and_accent_insensitively(self) -> None:
        """Lowercase and accented names sort with their base letters."""
        sets = [
            CardSet(id="evo", name="Évolutions"),
            CardSet(id="base1", name="Base Set"),
            CardSet(id="ecard2", name="aquapolis"),
            CardSet(id="xy1", name="XY"),
        ]

        assert [s.id for s in sort_sets_by_name(sets)] == ["ecard2", "base1", "evo", "xy1"]

    def test_missing_name_sorts_first(self) -> None:
        """A set without a name sorts as an empty name."""
        sets = [CardSet(id="base1", name="Base"), CardSet(id="unknown")]

        assert [s.id for s in sort_sets_by_name(sets)] == ["unknown", "base1"]

    def test_sort_is_stable(self) -> None:
        """Equal names keep their original relative order."""
        sets = [CardSet(id="p2", name="Promo"), CardSet(id="p1", name="promo")]

        assert [s.id for s in sort_sets_by_name(sets)] == ["p2", "p1"]


class TestFilterCriteria:
    def test_default_is_empty(self) -> None:
        assert FilterCriteria().is_empty()

    def test_blank_values_are_empty(self) -> None:
        assert FilterCriteria(name_substring="  ", set_id="").is_empty()

    def test_any_constraint_is_not_empty(self) -> None:
        assert not FilterCriteria(min_damage=10).is_empty()
        assert not FilterCriteria(card_type="Fire").is_empty()


class TestFailures:
    def test_api_error_carries_status_and_body(self) -> None:
        """ApiError keeps status and body for reporting."""
        error = ApiError(500, "Internal Server Error")

        assert error.status == 500
        assert error.body == "Internal Server Error"
        assert error.kind is FailureKind.API
        assert "500" in str(error)

    def test_kinds(self) -> None:
        assert TransportError("down").kind is FailureKind.TRANSPORT
        assert PersistenceError("disk").kind is FailureKind.PERSISTENCE
