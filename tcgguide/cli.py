"""
Command-line front end.

Usage:
    tcgguide sets
    tcgguide search --name char --min-hp 100
    tcgguide search --type Fire --favorite base1-4 --detail
    tcgguide favorites
"""

import argparse
import asyncio
import logging

from tcgguide.app import TcgGuide
from tcgguide.models.card import Card, TypeValue
from tcgguide.models.criteria import FilterCriteria
from tcgguide.models.failure import PersistenceError
from tcgguide.services.search_controller import AnnotatedCard, SearchPhase


def format_card_line(item: AnnotatedCard) -> str:
    """One result line: favorite star, name, set and id."""
    card = item.card
    star = "★" if item.is_favorite else "☆"
    set_name = card.set.name if card.set and card.set.name else "N/A"
    return f"{star} {card.name or '?'} ({set_name}) [{card.id}]"


def _type_value(entry: TypeValue) -> str:
    return " ".join(part for part in (entry.type or "?", entry.value) if part)


def format_card_detail(card: Card) -> str:
    """Full card detail as indented text."""
    set_ref = card.set
    lines = [
        f"    Set: {(set_ref and set_ref.name) or 'N/A'} ({(set_ref and set_ref.series) or 'N/A'})",
        f"    Type: {card.supertype or 'N/A'}"
        + (f" ({', '.join(card.subtypes)})" if card.subtypes else ""),
        f"    HP: {card.hp or 'N/A'}",
        f"    Rarity: {card.rarity or 'N/A'}",
        f"    Number: {card.number or '?'} / {(set_ref and set_ref.printed_total) or '?'}",
    ]
    if card.flavor_text:
        lines.append(f'    "{card.flavor_text}"')

    for attack in card.attacks:
        lines.append(f"    Attack: {attack.name or '?'}")
        if attack.cost:
            lines.append(f"      Cost: {', '.join(attack.cost)}")
        if attack.damage:
            lines.append(f"      Damage: {attack.damage}")
        if attack.text:
            lines.append(f"      Effect: {attack.text}")

    weaknesses = ", ".join(_type_value(w) for w in card.weaknesses) or "N/A"
    resistances = ", ".join(_type_value(r) for r in card.resistances) or "N/A"
    lines.append(f"    Weakness: {weaknesses}")
    lines.append(f"    Resistance: {resistances}")
    lines.append(f"    Retreat Cost: {', '.join(card.retreat_cost) or '0'}")

    if card.tcgplayer:
        market, low = card.market_price, card.low_price
        lines.append(f"    Market: ${market if market is not None else 'N/A'}")
        lines.append(f"    Low: ${low if low is not None else 'N/A'}")

    for format_name, status in card.legalities.items():
        lines.append(f"    {format_name}: {status or 'N/A'}")

    return "\n".join(lines)


def _list_sets(guide: TcgGuide) -> int:
    if guide.controller.sets_error is not None:
        print(f"Could not load sets: {guide.controller.sets_error}")
        return 1
    for card_set in guide.controller.sets:
        print(f"{card_set.id:<12} {card_set.name or 'N/A'} ({card_set.series or 'N/A'})")
    return 0


async def _search(guide: TcgGuide, args: argparse.Namespace) -> int:
    criteria = FilterCriteria(
        name_substring=args.name,
        set_id=args.set,
        card_type=args.type,
        min_hp=args.min_hp,
        min_damage=args.min_damage,
    )
    await guide.controller.search(criteria)

    if guide.controller.phase is SearchPhase.FAILED:
        print(f"Search failed: {guide.controller.last_error}")
        return 1

    for card_id in args.favorite:
        card = next((c for c in guide.controller.results if c.id == card_id), None)
        if card is None:
            print(f"Not in results: {card_id}")
            continue
        try:
            await guide.toggle_favorite(card)
        except PersistenceError as e:
            print(f"Favorite not saved: {e}")

    results = guide.controller.annotated_results()
    if not results:
        if criteria.is_empty():
            print("Enter criteria and search.")
        else:
            print("No cards found matching your criteria.")
        return 0

    for item in results:
        print(format_card_line(item))
        if args.detail:
            print(format_card_detail(item.card))
    return 0


def _list_favorites(guide: TcgGuide) -> int:
    for card in guide.favorites.favorites:
        print(format_card_line(AnnotatedCard(card=card, is_favorite=True)))
    return 0


async def run(args: argparse.Namespace) -> int:
    async with TcgGuide.open() as guide:
        if args.command == "sets":
            return _list_sets(guide)
        if args.command == "search":
            return await _search(guide, args)
        return _list_favorites(guide)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search the Pokémon TCG catalog")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("sets", help="List sets")
    commands.add_parser("favorites", help="List favorite cards")

    search = commands.add_parser("search", help="Search cards")
    search.add_argument("--name", help="Text the card name contains")
    search.add_argument("--set", help="Set id (see `tcgguide sets`)")
    search.add_argument("--type", help="Energy type, e.g. Fire")
    search.add_argument("--min-hp", type=int, default=0, help="Minimum HP")
    search.add_argument("--min-damage", type=int, default=0, help="Minimum attack damage")
    search.add_argument(
        "--favorite",
        action="append",
        default=[],
        metavar="CARD_ID",
        help="Toggle favorite for a card in the results (repeatable)",
    )
    search.add_argument("--detail", action="store_true", help="Show full card detail")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
