"""Tests for catalog query building."""

from urllib.parse import unquote

import pytest

from tcgguide.models.criteria import FilterCriteria
from tcgguide.services.query_builder import build_query, build_terms


class TestEmptyCriteria:
    def test_default_criteria_build_empty_query(self) -> None:
        """No criteria means no query at all."""
        assert build_query(FilterCriteria()) == ""
        assert build_terms(FilterCriteria()) == []

    def test_blank_strings_and_zero_thresholds_are_absent(self) -> None:
        """Whitespace-only text and zero thresholds add no terms."""
        criteria = FilterCriteria(
            name_substring="   ",
            set_id="",
            card_type="\t",
            min_hp=0,
            min_damage=0,
        )
        assert build_query(criteria) == ""


class TestNameTerm:
    def test_wraps_trimmed_name_in_wildcards(self) -> None:
        """Name becomes a quoted wildcard substring match."""
        assert build_terms(FilterCriteria(name_substring="  char ")) == ['name:"*char*"']

    def test_keeps_inner_spaces(self) -> None:
        """Only leading and trailing whitespace is removed."""
        assert build_terms(FilterCriteria(name_substring="Mr. Mime")) == ['name:"*Mr. Mime*"']

    def test_escapes_quotes(self) -> None:
        """A double quote in the name cannot terminate the quoted term."""
        terms = build_terms(FilterCriteria(name_substring='say "hi"'))
        assert terms == ['name:"*say \\"hi\\"*"']


class TestExactTerms:
    def test_set_term(self) -> None:
        """Set id is an exact match."""
        assert build_terms(FilterCriteria(set_id="base1")) == ['set.id:"base1"']

    def test_type_term_is_trimmed(self) -> None:
        """Type is trimmed and matched exactly."""
        assert build_terms(FilterCriteria(card_type=" Fire ")) == ['types:"Fire"']


class TestRangeTerms:
    def test_min_hp_range(self) -> None:
        """min_hp=150 becomes an open lower bound of 150."""
        assert build_terms(FilterCriteria(min_hp=150)) == ["hp:[150 TO *]"]

    @pytest.mark.parametrize("value", [0, -10])
    def test_non_positive_min_hp_omitted(self, value: int) -> None:
        """Zero and negative HP never produce a range term."""
        assert build_terms(FilterCriteria(min_hp=value)) == []

    def test_min_damage_range(self) -> None:
        """min_damage becomes a range on attack damage."""
        assert build_terms(FilterCriteria(min_damage=60)) == ["attacks.damage:[60 TO *]"]

    def test_malformed_threshold_is_dropped(self) -> None:
        """A non-numeric threshold drops only that term."""
        criteria = FilterCriteria(name_substring="pika", min_hp="lots")  # type: ignore[arg-type]
        assert build_terms(criteria) == ['name:"*pika*"']

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_threshold_is_dropped(self, value: float) -> None:
        """Infinite or NaN thresholds drop only their own term."""
        criteria = FilterCriteria(name_substring="x", min_hp=value)  # type: ignore[arg-type]

        assert build_terms(criteria) == ['name:"*x*"']
        assert build_query(criteria) == "name%3A%22*x*%22"

    def test_bool_threshold_is_dropped(self) -> None:
        """Booleans are not accepted as numbers."""
        assert build_terms(FilterCriteria(min_damage=True)) == []

    def test_numeric_string_threshold_is_accepted(self) -> None:
        """A threshold given as digits still works."""
        criteria = FilterCriteria(min_hp="90")  # type: ignore[arg-type]
        assert build_terms(criteria) == ["hp:[90 TO *]"]


class TestTermOrder:
    def test_fixed_order_regardless_of_construction(self) -> None:
        """Terms are always name, set, type, HP, damage."""
        criteria = FilterCriteria(
            min_damage=30,
            card_type="Water",
            min_hp=60,
            set_id="base1",
            name_substring="squirtle",
        )
        assert build_terms(criteria) == [
            'name:"*squirtle*"',
            'set.id:"base1"',
            'types:"Water"',
            "hp:[60 TO *]",
            "attacks.damage:[30 TO *]",
        ]


class TestEncoding:
    def test_name_and_hp_scenario(self) -> None:
        """Name wildcard and HP range are space-joined and percent-encoded."""
        query = build_query(FilterCriteria(name_substring="char", min_hp=100))

        assert query == "name%3A%22*char*%22%20hp%3A%5B100%20TO%20*%5D"
        assert unquote(query) == 'name:"*char*" hp:[100 TO *]'

    def test_encoding_matches_uri_component_rules(self) -> None:
        """Unreserved marks stay literal; reserved characters are escaped."""
        query = build_query(FilterCriteria(name_substring="Farfetch'd & co"))

        assert "Farfetch'd" in query
        assert "%26" in query
        assert " " not in query

    def test_non_ascii_is_utf8_encoded(self) -> None:
        """Accented names are UTF-8 percent-encoded."""
        query = build_query(FilterCriteria(name_substring="Flabébé"))
        assert "Flab%C3%A9b%C3%A9" in query
