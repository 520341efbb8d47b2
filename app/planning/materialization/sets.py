"""Per-set materialization of exercise slots.

Turns a normalized slot into a fully resolved one: movement pattern and tier
tagged, volume resolved, and one SetSpec per target set. Timed exercises get
duration sets; everything else gets rep sets. Weight stays null for loaded
work so the progression engine can assign it; bodyweight work gets 0.
"""

from app.planning.classification.movement_patterns import classify_movement_pattern
from app.planning.classification.tiers import classify_tier
from app.planning.schema.inputs import ExerciseCatalogEntry
from app.planning.schema.week_schedule import ExerciseSlot, MovementPattern, SetSpec
from app.planning.volume_templates import resolve_volume

BODYWEIGHT_KEYWORDS: tuple[str, ...] = (
    "pull up", "pull-up", "pullup", "chin up", "chin-up",
    "push up", "push-up", "pushup", "dip",
    "sit up", "sit-up", "situp", "crunch", "plank", "burpee",
    "mountain climber", "bodyweight squat", "air squat", "lunge",
    "jumping jack", "pistol squat", "handstand push up", "handstand push-up",
    "muscle up", "muscle-up",
)


def is_bodyweight(name: str) -> bool:
    lowered = name.lower()
    return any(keyword in lowered for keyword in BODYWEIGHT_KEYWORDS)


def build_sets(slot: ExerciseSlot) -> list[SetSpec]:
    """One SetSpec per target set, using the slot's resolved values."""
    if slot.is_timed and slot.target_duration_sec:
        return [
            SetSpec(index=i + 1, duration_sec=slot.target_duration_sec, rest_time_sec=slot.rest_time_sec)
            for i in range(slot.target_sets)
        ]
    weight = 0.0 if is_bodyweight(slot.name) else None
    reps = slot.reps_value or 1
    return [
        SetSpec(index=i + 1, reps=reps, weight=weight, rest_time_sec=slot.rest_time_sec)
        for i in range(slot.target_sets)
    ]


def materialize_slot(slot: ExerciseSlot, catalog_entry: ExerciseCatalogEntry | None = None) -> ExerciseSlot:
    """Classify, resolve volume and attach concrete sets.

    Args:
        slot: Normalized slot from model output
        catalog_entry: Matching catalog/user exercise, used for timed metadata

    Returns:
        New, fully resolved ExerciseSlot
    """
    pattern = slot.movement_pattern
    if pattern == MovementPattern.UNKNOWN:
        pattern = classify_movement_pattern(slot.name)

    resolved = resolve_volume(slot)

    is_timed = bool(catalog_entry and catalog_entry.is_timed)
    duration = slot.target_duration_sec or (catalog_entry.default_duration_sec if catalog_entry else None)
    timed = is_timed and duration is not None

    resolved = resolved.model_copy(
        update={
            "movement_pattern": pattern,
            "tier": classify_tier(slot.name),
            "is_timed": timed,
            "target_duration_sec": duration if timed else slot.target_duration_sec,
        }
    )
    return resolved.model_copy(update={"sets": build_sets(resolved)})
