"""Volume template resolution.

Resolves concrete sets, reps and rest for an exercise: the model-supplied
value when it is usable, otherwise the category default, always clamped to
the category bounds. The output is fully numeric and resolving it again is a
no-op.
"""

import math
import re

from loguru import logger

from app.planning.classification.volume_categories import VolumeCategory, classify_volume_category, template_for
from app.planning.schema.week_schedule import ExerciseSlot
from app.utils.rounding import round_half_up

_FIRST_INT = re.compile(r"\d+")


def _positive_number(value: int | float | str | None) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        match = _FIRST_INT.search(value)
        return float(match.group(0)) if match else None
    if isinstance(value, (int, float)) and math.isfinite(value):
        return float(value)
    return None


def resolve_sets(value: int | float | None, category: VolumeCategory) -> int:
    bounds = template_for(category).sets
    number = _positive_number(value) if not isinstance(value, str) else None
    if not number or number <= 0:
        number = bounds.default
    return bounds.clamp(round_half_up(number))


def resolve_reps(value: int | float | str | None, category: VolumeCategory) -> int:
    """Resolve reps; strings contribute their first integer ("8-12" -> 8)."""
    bounds = template_for(category).reps
    number = _positive_number(value)
    if not number or number <= 0:
        number = bounds.default
    return bounds.clamp(round_half_up(number))


def resolve_rest(value: int | float | None, category: VolumeCategory) -> int:
    bounds = template_for(category).rest_sec
    number = _positive_number(value) if not isinstance(value, str) else None
    if number is None or number < 0:
        number = bounds.default
    return bounds.clamp(round_half_up(number))


def resolve_volume(slot: ExerciseSlot) -> ExerciseSlot:
    """Return a copy of slot with sets, reps and rest resolved to its category.

    Args:
        slot: Normalized exercise slot (reps may still be a range string)

    Returns:
        New ExerciseSlot with integer target_sets, target_reps, rest_time_sec
    """
    category = classify_volume_category(slot.name)
    resolved = slot.model_copy(
        update={
            "target_sets": resolve_sets(slot.target_sets, category),
            "target_reps": resolve_reps(slot.target_reps, category),
            "rest_time_sec": resolve_rest(slot.rest_time_sec, category),
        }
    )

    logger.debug(
        "volume_templates: Applied template",
        name=slot.name,
        category=category.value,
        before=(slot.target_sets, slot.target_reps, slot.rest_time_sec),
        after=(resolved.target_sets, resolved.target_reps, resolved.rest_time_sec),
    )
    return resolved
