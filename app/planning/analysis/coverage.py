"""Movement pattern coverage analysis.

Measures how evenly a week schedule and the recent log history spread work
across the eight movement patterns. The result is advisory: it feeds prompt
text and optional UI hints and never rewrites the schedule.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from loguru import logger

from app.planning.classification.movement_patterns import (
    ALL_MOVEMENT_PATTERNS,
    classify_movement_pattern,
    movement_pattern_label,
)
from app.planning.schema.inputs import RecentLogEntry
from app.planning.schema.week_schedule import ExerciseSlot, MovementPattern, WeekSchedule
from app.utils.timezone import to_utc, utc_now

UNDER_SERVED_SETS = 3
OVER_SERVED_SETS = 15
OVER_SERVED_AVERAGE_FACTOR = 2

ESSENTIAL_PATTERNS: tuple[MovementPattern, ...] = (
    MovementPattern.SQUAT,
    MovementPattern.HINGE,
    MovementPattern.PUSH_HORIZ,
    MovementPattern.PULL_HORIZ,
)


@dataclass
class PatternCoverage:
    pattern: MovementPattern
    sets_this_week: int = 0
    sets_last_week: int = 0
    sets_last_two_weeks: int = 0
    last_worked_at: datetime | None = None
    is_under_served: bool = False
    is_over_served: bool = False


@dataclass
class CoverageAnalysisResult:
    pattern_coverage: dict[MovementPattern, PatternCoverage]
    under_served_patterns: list[MovementPattern] = field(default_factory=list)
    over_served_patterns: list[MovementPattern] = field(default_factory=list)
    missing_essential_patterns: list[MovementPattern] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


def slot_pattern(slot: ExerciseSlot) -> MovementPattern:
    """Pattern tagged on the slot, falling back to name classification."""
    if slot.movement_pattern != MovementPattern.UNKNOWN:
        return slot.movement_pattern
    return classify_movement_pattern(slot.name)


def _slot_sets(slot: ExerciseSlot) -> int:
    return slot.target_sets or len(slot.sets)


def _labels(patterns: list[MovementPattern]) -> str:
    return ", ".join(movement_pattern_label(p) for p in patterns)


def analyze_coverage(
    week_schedule: WeekSchedule | None,
    recent_logs: list[RecentLogEntry] | None = None,
    now: datetime | None = None,
) -> CoverageAnalysisResult:
    """Analyze movement pattern coverage for a week and recent logs.

    Args:
        week_schedule: Week to measure (None counts as an empty week)
        recent_logs: Performed sets from the last two to three weeks; each
            entry counts as one set
        now: Reference time for the log windows (defaults to current UTC time)

    Returns:
        CoverageAnalysisResult with per-pattern counts and recommendations
    """
    now = to_utc(now) if now else utc_now()
    coverage = {pattern: PatternCoverage(pattern=pattern) for pattern in ALL_MOVEMENT_PATTERNS}

    if week_schedule is not None:
        for _, slot in week_schedule.iter_exercises():
            pattern = slot_pattern(slot)
            if pattern in coverage:
                coverage[pattern].sets_this_week += _slot_sets(slot)

    one_week_ago = now - timedelta(days=7)
    two_weeks_ago = now - timedelta(days=14)

    for log in recent_logs or []:
        pattern = classify_movement_pattern(log.exercise_name)
        if pattern not in coverage:
            continue
        entry = coverage[pattern]
        performed_at = to_utc(log.performed_at)
        if performed_at > one_week_ago:
            entry.sets_last_week += 1
        if performed_at > two_weeks_ago:
            entry.sets_last_two_weeks += 1
        if entry.last_worked_at is None or performed_at > entry.last_worked_at:
            entry.last_worked_at = performed_at

    total_sets = sum(c.sets_this_week for c in coverage.values())
    average_sets = total_sets / len(ALL_MOVEMENT_PATTERNS)

    result = CoverageAnalysisResult(pattern_coverage=coverage)
    for pattern, entry in coverage.items():
        if entry.sets_this_week < UNDER_SERVED_SETS:
            entry.is_under_served = True
            result.under_served_patterns.append(pattern)
        if entry.sets_this_week > OVER_SERVED_SETS or entry.sets_this_week > average_sets * OVER_SERVED_AVERAGE_FACTOR:
            entry.is_over_served = True
            result.over_served_patterns.append(pattern)

    result.missing_essential_patterns = [p for p in ESSENTIAL_PATTERNS if coverage[p].sets_this_week == 0]

    if result.under_served_patterns:
        result.recommendations.append(
            f"Consider adding exercises for: {_labels(result.under_served_patterns)}. "
            f"These movement patterns have fewer than {UNDER_SERVED_SETS} sets this week."
        )
    if result.over_served_patterns:
        result.recommendations.append(
            f"High volume detected for: {_labels(result.over_served_patterns)}. Consider reducing sets or adding variety."
        )
    if result.missing_essential_patterns:
        result.recommendations.append(
            f"Missing essential movement patterns: {_labels(result.missing_essential_patterns)}. "
            "Consider adding at least one exercise for each."
        )

    logger.debug(
        "coverage: Analysis complete",
        total_sets=total_sets,
        under_served=[p.value for p in result.under_served_patterns],
        over_served=[p.value for p in result.over_served_patterns],
        log_count=len(recent_logs or []),
    )
    return result


def coverage_summary(result: CoverageAnalysisResult) -> str:
    """One-line summary for display."""
    parts: list[str] = []
    if result.under_served_patterns:
        parts.append(f"Low: {len(result.under_served_patterns)} patterns")
    if result.over_served_patterns:
        parts.append(f"High: {len(result.over_served_patterns)} patterns")
    if not parts:
        return "Balanced coverage"
    return " · ".join(parts)
