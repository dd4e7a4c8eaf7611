from dataclasses import dataclass


@dataclass(frozen=True)
class FilterCriteria:
    """
    Independently optional search constraints for one search.

    Absent (None / blank / zero) fields place no constraint on that dimension.

    Attributes:
        name_substring: Text the card name must contain
        set_id: Exact set identifier, e.g. "base1"
        card_type: Energy type, e.g. "Fire", "Water"
        min_hp: Minimum HP (0 = no constraint)
        min_damage: Minimum attack damage (0 = no constraint)
    """

    name_substring: str | None = None
    set_id: str | None = None
    card_type: str | None = None
    min_hp: int = 0
    min_damage: int = 0

    def is_empty(self) -> bool:
        """True if no field constrains the search."""
        return not (
            (self.name_substring or "").strip()
            or (self.set_id or "").strip()
            or (self.card_type or "").strip()
            or self.min_hp > 0
            or self.min_damage > 0
        )
