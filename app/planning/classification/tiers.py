"""Exercise tiers driving compression priority.

Tier 1 primary compounds are protected longest, tier 3 prehab/mobility/core
work is cut first. Anything not matched is tier 2.
"""

from app.planning.classification.rules import ClassificationRule, contains_any, first_match
from app.planning.schema.week_schedule import ExerciseSlot, Tier


def _is_primary_compound(name: str) -> bool:
    if any(k in name for k in ("squat", "deadlift", "bench", "row")):
        return True
    if "press" in name and ("overhead" in name or "shoulder" in name):
        return True
    return "pull" in name and ("up" in name or "down" in name)


TIER_RULES: tuple[ClassificationRule[Tier], ...] = (
    ClassificationRule("compound", _is_primary_compound, Tier.COMPOUND),
    ClassificationRule(
        "prehab",
        contains_any("stretch", "mobility", "warm", "cool", "plank", "crunch", "core"),
        Tier.PREHAB,
    ),
)


def classify_tier(name: str | None) -> Tier:
    return first_match(TIER_RULES, name, Tier.ACCESSORY)


def tier_of(slot: ExerciseSlot) -> Tier:
    """Tier attached to the slot, or inferred from its name."""
    return slot.tier if slot.tier is not None else classify_tier(slot.name)
