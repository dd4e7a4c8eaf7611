from dataclasses import dataclass, field

# Price variants checked in order when a single market figure is needed
_PRICE_VARIANTS = ("holofoil", "normal")


@dataclass(frozen=True, slots=True)
class SetReference:
    """The set a card was printed in, as embedded in the card payload."""

    id: str | None = None
    name: str | None = None
    series: str | None = None
    printed_total: int | None = None


@dataclass(frozen=True, slots=True)
class Attack:
    """
    A single attack on a card.

    Attributes:
        name: Attack name
        cost: Energy types required, in printed order
        converted_energy_cost: Number of energy required
        damage: Printed damage, e.g. "30", "50+", "20×" (empty if none)
        text: Effect text
    """

    name: str | None = None
    cost: tuple[str, ...] = ()
    converted_energy_cost: int | None = None
    damage: str | None = None
    text: str | None = None


@dataclass(frozen=True, slots=True)
class TypeValue:
    """A weakness or resistance entry, e.g. type="Water", value="×2"."""

    type: str | None = None
    value: str | None = None


@dataclass(frozen=True, slots=True)
class CardImages:
    small: str | None = None
    large: str | None = None


@dataclass(frozen=True, slots=True)
class PriceSnapshot:
    """
    TCGplayer price snapshot.

    Attributes:
        url: TCGplayer product page
        updated_at: Date string the prices were captured (as sent by the API)
        prices: Variant name -> {"low", "mid", "high", "market", ...} -> price
    """

    url: str | None = None
    updated_at: str | None = None
    prices: dict[str, dict[str, float | None]] = field(default_factory=dict)

    def price(self, kind: str) -> float | None:
        """First available `kind` price across holofoil then normal variants."""
        for variant in _PRICE_VARIANTS:
            value = self.prices.get(variant, {}).get(kind)
            if value is not None:
                return value
        return None


@dataclass(frozen=True, slots=True, eq=False)
class Card:
    """
    A card from the catalog.

    Cards are identified solely by `id`: two Card values with the same id
    compare equal and hash the same regardless of any other field.
    Every field other than id may be missing from the payload and is then
    None (or empty).

    Attributes:
        id: Catalog identifier, e.g. "xy1-1"
        name: Card name
        set: Set the card was printed in
        supertype: "Pokémon", "Trainer" or "Energy"
        subtypes: e.g. ("Basic", "EX")
        hp: HP exactly as printed (a string in the catalog)
        types: Energy types of a Pokémon card
        rarity: Rarity name
        number: Collector number within the set
        attacks: Attacks in printed order
        weaknesses: Weakness entries
        resistances: Resistance entries
        retreat_cost: Energy types paid to retreat
        legalities: Format name -> status ("Legal", "Banned")
        flavor_text: Flavor text
        tcgplayer: Price snapshot
        images: Small and large image URIs
    """

    id: str
    name: str | None = None
    set: SetReference | None = None
    supertype: str | None = None
    subtypes: tuple[str, ...] = ()
    hp: str | None = None
    types: tuple[str, ...] = ()
    rarity: str | None = None
    number: str | None = None
    attacks: tuple[Attack, ...] = ()
    weaknesses: tuple[TypeValue, ...] = ()
    resistances: tuple[TypeValue, ...] = ()
    retreat_cost: tuple[str, ...] = ()
    legalities: dict[str, str] = field(default_factory=dict)
    flavor_text: str | None = None
    tcgplayer: PriceSnapshot | None = None
    images: CardImages = field(default_factory=CardImages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def hp_value(self) -> int | None:
        """HP as an integer, or None if missing or not numeric."""
        if self.hp is None:
            return None
        try:
            return int(self.hp)
        except ValueError:
            return None

    @property
    def market_price(self) -> float | None:
        """Holofoil market price, falling back to the normal printing."""
        return self.tcgplayer.price("market") if self.tcgplayer else None

    @property
    def low_price(self) -> float | None:
        """Holofoil low price, falling back to the normal printing."""
        return self.tcgplayer.price("low") if self.tcgplayer else None

    def is_legal(self, format_name: str) -> bool:
        """True if the card is listed as Legal in the format (case-insensitive)."""
        wanted = format_name.lower()
        for name, status in self.legalities.items():
            if name.lower() == wanted:
                return status == "Legal"
        return False
