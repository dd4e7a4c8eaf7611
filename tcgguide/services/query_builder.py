"""
Catalog query builder.

Translates FilterCriteria into the catalog's Lucene-like query syntax:

- name:"*char*"            name contains "char"
- set.id:"base1"           exact set
- types:"Fire"             exact type
- hp:[100 TO *]            HP >= 100
- attacks.damage:[60 TO *] some attack does >= 60 damage

Terms appear in a fixed order (name, set, type, HP, damage) and are joined
with a single space, which the catalog treats as AND. The joined expression
is percent-encoded the way JavaScript's encodeURIComponent does it.

Building never fails: a criterion that cannot be expressed is dropped and
the remaining terms are still used.
"""

import logging
from collections.abc import Callable
from urllib.parse import quote

from tcgguide.models.criteria import FilterCriteria
from tcgguide.models.failure import MalformedQuery

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone (besides alphanumerics)
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _quoted(value: str) -> str:
    """Double-quote a value, escaping characters that would end the quote."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _text(value: object, label: str) -> str | None:
    """Trimmed text, or None when blank. Non-strings are malformed."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedQuery(f"{label} must be text, got {type(value).__name__}")
    stripped = value.strip()
    return stripped or None


def _threshold(value: object, label: str) -> int | None:
    """Positive integer threshold, or None when zero/negative."""
    if isinstance(value, bool):
        raise MalformedQuery(f"{label} must be a number, got bool")
    try:
        number = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError, OverflowError) as e:
        raise MalformedQuery(f"{label} must be a number, got {value!r}") from e
    return number if number > 0 else None


def _name_term(criteria: FilterCriteria) -> str | None:
    name = _text(criteria.name_substring, "name")
    return f"name:{_quoted(f'*{name}*')}" if name else None


def _set_term(criteria: FilterCriteria) -> str | None:
    set_id = _text(criteria.set_id, "set")
    return f"set.id:{_quoted(set_id)}" if set_id else None


def _type_term(criteria: FilterCriteria) -> str | None:
    card_type = _text(criteria.card_type, "type")
    return f"types:{_quoted(card_type)}" if card_type else None


def _hp_term(criteria: FilterCriteria) -> str | None:
    min_hp = _threshold(criteria.min_hp, "min HP")
    return f"hp:[{min_hp} TO *]" if min_hp else None


def _damage_term(criteria: FilterCriteria) -> str | None:
    min_damage = _threshold(criteria.min_damage, "min damage")
    return f"attacks.damage:[{min_damage} TO *]" if min_damage else None


# Emission order is part of the output contract
_TERM_BUILDERS: tuple[Callable[[FilterCriteria], str | None], ...] = (
    _name_term,
    _set_term,
    _type_term,
    _hp_term,
    _damage_term,
)


def build_terms(criteria: FilterCriteria) -> list[str]:
    """
    Build the unencoded query terms for the present criteria.

    Args:
        criteria: Search constraints

    Returns:
        Terms in name, set, type, HP, damage order. Empty if nothing is constrained.
    """
    terms: list[str] = []
    for builder in _TERM_BUILDERS:
        try:
            term = builder(criteria)
        except MalformedQuery as e:
            logger.debug("Dropping query term: %s", e.message)
            continue
        if term:
            terms.append(term)
    return terms


def build_query(criteria: FilterCriteria) -> str:
    """
    Build the percent-encoded query string for the `q` parameter.

    Args:
        criteria: Search constraints

    Returns:
        Encoded query, or "" when no criterion is present. An empty query
        means the `q` parameter must be left out of the request entirely.

    Examples:
        >>> build_query(FilterCriteria(name_substring=" char ", min_hp=100))
        'name%3A%22*char*%22%20hp%3A%5B100%20TO%20*%5D'
        >>> build_query(FilterCriteria())
        ''
    """
    terms = build_terms(criteria)
    if not terms:
        return ""
    return quote(" ".join(terms), safe=_URI_COMPONENT_SAFE)
