"""Week schedule validation and normalization.

Model output is validated against the week_schedule shape and repaired
rather than rejected. Deviations are collected as ValidationWarning records
and logged; only a missing week_schedule root aborts the request.
"""

import math
import re
from typing import Any

from loguru import logger

from app.config.settings import settings
from app.planning.errors import StructureInvalidError, ValidationWarning
from app.planning.schema.week_schedule import DAYS_OF_WEEK, DaySchedule, ExerciseSlot, MovementPattern, WeekSchedule

DEFAULT_TARGET_SETS = 3
DEFAULT_TARGET_REPS = 10

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Any) -> int | float | None:
    """Coerce a model-supplied number.

    Numbers pass through; strings yield their leading integer ("4 sets" -> 4).
    Anything else, including booleans and non-finite floats, yields None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return None


def parse_rep_range(value: str) -> tuple[int, int] | None:
    """Parse a "min-max" string; returns None unless 0 < min < max."""
    parts = value.strip().split("-")
    if len(parts) < 2:
        return None
    low, high = parse_int(parts[0]), parse_int(parts[1])
    if low is None or high is None or low <= 0 or high <= 0 or low >= high:
        return None
    return int(low), int(high)


def validate_exercise(exercise: Any, index: int | None = None) -> list[ValidationWarning]:
    """Validate a single raw exercise object.

    Args:
        exercise: Raw exercise mapping from model output
        index: Zero-based position, used in messages

    Returns:
        List of warnings (empty when the exercise is valid)
    """
    prefix = f"Exercise {index + 1}" if index is not None else "Exercise"
    if not isinstance(exercise, dict):
        return [ValidationWarning("exercise", f"{prefix}: must be an object")]

    warnings: list[ValidationWarning] = []

    name = exercise.get("name")
    if not isinstance(name, str) or not name.strip():
        warnings.append(ValidationWarning("name", f"{prefix}: Exercise name is required and must be a non-empty string"))

    sets = exercise.get("target_sets")
    if sets is None:
        warnings.append(ValidationWarning("target_sets", f"{prefix}: target_sets is required"))
    else:
        parsed = parse_int(sets)
        if parsed is None or parsed <= 0:
            warnings.append(ValidationWarning("target_sets", f"{prefix}: target_sets must be a positive number"))

    reps = exercise.get("target_reps")
    if reps is None:
        warnings.append(ValidationWarning("target_reps", f"{prefix}: target_reps is required"))
    elif isinstance(reps, str):
        if "-" in reps:
            if parse_rep_range(reps) is None:
                warnings.append(ValidationWarning("target_reps", f'{prefix}: target_reps range must be valid (e.g., "8-12")'))
        else:
            parsed = parse_int(reps)
            if parsed is None or parsed <= 0:
                warnings.append(ValidationWarning("target_reps", f"{prefix}: target_reps must be a positive number or range"))
    elif isinstance(reps, (int, float)) and not isinstance(reps, bool):
        parsed = parse_int(reps)
        if parsed is None or parsed <= 0:
            warnings.append(ValidationWarning("target_reps", f"{prefix}: target_reps must be a positive number"))
    else:
        warnings.append(ValidationWarning("target_reps", f"{prefix}: target_reps must be a number or string"))

    rest = exercise.get("rest_time_sec")
    if rest is not None:
        parsed = parse_int(rest)
        if parsed is None or parsed < 0:
            warnings.append(ValidationWarning("rest_time_sec", f"{prefix}: rest_time_sec must be a non-negative number"))

    return warnings


def validate_week_schedule(week_schedule: Any) -> list[ValidationWarning]:
    """Validate a raw week_schedule mapping without modifying it."""
    if not isinstance(week_schedule, dict):
        return [ValidationWarning("week_schedule", "week_schedule must be an object")]

    warnings: list[ValidationWarning] = []
    for day in DAYS_OF_WEEK:
        if day not in week_schedule:
            warnings.append(ValidationWarning(day, f"Missing day: {day}"))
            continue
        day_data = week_schedule[day]
        if not isinstance(day_data, dict):
            warnings.append(ValidationWarning(day, f"{day} must be an object"))
        elif not isinstance(day_data.get("exercises"), list):
            warnings.append(ValidationWarning(f"{day}.exercises", f"{day}.exercises must be an array"))
        else:
            for index, exercise in enumerate(day_data["exercises"]):
                warnings.extend(
                    ValidationWarning(f"{day}.{w.field}", f"{day} - {w.message}")
                    for w in validate_exercise(exercise, index)
                )

    for key in week_schedule:
        if key not in DAYS_OF_WEEK:
            warnings.append(ValidationWarning(str(key), f"Unexpected day key: {key}"))

    return warnings


def ensure_all_days(week_schedule: dict[str, Any]) -> dict[str, Any]:
    """Return a copy with every canonical day present as {"exercises": [...]}.

    Day keys that differ only in case or surrounding whitespace are mapped
    onto the canonical name; a bare list is accepted as the exercise list.
    """
    normalized: dict[str, Any] = {}
    lookup = {day.lower(): day for day in DAYS_OF_WEEK}
    for key, value in week_schedule.items():
        canonical = lookup.get(str(key).strip().lower())
        if canonical and canonical not in normalized:
            normalized[canonical] = value

    for day in DAYS_OF_WEEK:
        day_data = normalized.get(day)
        if isinstance(day_data, list):
            normalized[day] = {"exercises": day_data}
        elif not isinstance(day_data, dict):
            normalized[day] = {"exercises": []}
        elif not isinstance(day_data.get("exercises"), list):
            normalized[day] = {**day_data, "exercises": []}

    return {day: normalized[day] for day in DAYS_OF_WEEK}


def _normalize_reps(reps: Any) -> int | str:
    if isinstance(reps, str) and "-" in reps:
        bounds = parse_rep_range(reps)
        if bounds:
            return f"{bounds[0]}-{bounds[1]}"
        return DEFAULT_TARGET_REPS
    parsed = parse_int(reps)
    if parsed is None or parsed <= 0:
        return DEFAULT_TARGET_REPS
    return max(1, round(parsed))


def _optional_positive(value: Any) -> int | None:
    parsed = parse_int(value)
    if parsed is None:
        return None
    rounded = round(parsed)
    return rounded if rounded > 0 else None


def normalize_exercise(exercise: Any) -> ExerciseSlot | None:
    """Build an ExerciseSlot from a raw exercise, repairing soft violations.

    Returns None when the exercise has no usable name.
    """
    if not isinstance(exercise, dict):
        return None
    name = exercise.get("name")
    if not isinstance(name, str) or not name.strip():
        return None

    sets = parse_int(exercise.get("target_sets"))
    target_sets = max(1, round(sets)) if sets is not None and sets > 0 else DEFAULT_TARGET_SETS

    rest = parse_int(exercise.get("rest_time_sec"))
    rest_time_sec = round(rest) if rest is not None and rest >= 0 else settings.default_rest_time_sec

    notes = exercise.get("notes")
    pattern_raw = exercise.get("movement_pattern")
    pattern = MovementPattern.UNKNOWN
    if isinstance(pattern_raw, str) and pattern_raw in MovementPattern._value2member_map_:
        pattern = MovementPattern(pattern_raw)

    tempo = exercise.get("tempo_category")

    return ExerciseSlot(
        name=name.strip(),
        target_sets=target_sets,
        target_reps=_normalize_reps(exercise.get("target_reps")),
        rest_time_sec=rest_time_sec,
        notes=notes if isinstance(notes, str) else None,
        movement_pattern=pattern,
        target_duration_sec=_optional_positive(exercise.get("target_duration_sec")),
        tempo_category=tempo if isinstance(tempo, str) else None,
        setup_buffer_sec=_optional_positive(exercise.get("setup_buffer_sec")),
        is_unilateral=exercise.get("is_unilateral") is True,
    )


def normalize_exercise_list(exercises: Any, context: str = "exercises") -> tuple[list[ExerciseSlot], list[ValidationWarning]]:
    """Validate and normalize a raw exercise array.

    Args:
        exercises: Raw list from model output
        context: Prefix for warning fields (usually the day name)

    Returns:
        Tuple of (normalized slots, warnings). Unusable entries are dropped.
    """
    if not isinstance(exercises, list):
        return [], [ValidationWarning(context, f"{context} must be an array")]

    slots: list[ExerciseSlot] = []
    warnings: list[ValidationWarning] = []
    for index, raw in enumerate(exercises):
        warnings.extend(ValidationWarning(f"{context}.{w.field}", f"{context} - {w.message}") for w in validate_exercise(raw, index))
        slot = normalize_exercise(raw)
        if slot is None:
            warnings.append(ValidationWarning(f"{context}.name", f"{context} - Exercise {index + 1}: dropped (no usable name)"))
            continue
        slots.append(slot)
    return slots, warnings


def normalize_week_schedule(payload: Any) -> tuple[WeekSchedule, list[ValidationWarning]]:
    """Validate, repair and type a parsed model payload.

    Args:
        payload: Parsed JSON, expected to be {"week_schedule": {...}}

    Returns:
        Tuple of (WeekSchedule with all 7 days, collected warnings)

    Raises:
        StructureInvalidError: If payload has no week_schedule object
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("week_schedule"), dict):
        raise StructureInvalidError("Invalid plan structure: week_schedule is missing")

    raw_schedule = payload["week_schedule"]
    warnings = validate_week_schedule(raw_schedule)
    repaired = ensure_all_days(raw_schedule)

    days: dict[str, DaySchedule] = {}
    for day in DAYS_OF_WEEK:
        # Warnings for these exercises were already collected above
        slots, _ = normalize_exercise_list(repaired[day]["exercises"], context=day)
        days[day] = DaySchedule(exercises=slots)

    if warnings:
        logger.warning(
            "validate: Repaired week_schedule deviations",
            warning_count=len(warnings),
            warnings=[w.message for w in warnings[:20]],
        )

    return WeekSchedule(days=days), warnings
