"""Recovery windows per movement pattern.

Tracks the most recent heavy set for each pattern and compares the elapsed
time with the pattern's minimum recovery window. Heavy compound work for the
same pattern needs 48-72 hours; carries and unknown patterns need 24.

Advisory only: conflicts become warnings and prompt hints, never a block.
"""

from dataclasses import dataclass, field
from datetime import datetime

from loguru import logger

from app.planning.analysis.coverage import slot_pattern
from app.planning.classification.movement_patterns import ALL_MOVEMENT_PATTERNS, classify_movement_pattern
from app.planning.schema.inputs import RecentLogEntry
from app.planning.schema.week_schedule import ExerciseSlot, MovementPattern, WeekSchedule
from app.utils.rounding import round_half_up
from app.utils.timezone import hours_between, to_utc, utc_now

MIN_RECOVERY_HOURS: dict[MovementPattern, int] = {
    MovementPattern.SQUAT: 48,
    MovementPattern.HINGE: 72,
    MovementPattern.LUNGE: 48,
    MovementPattern.PUSH_VERT: 48,
    MovementPattern.PUSH_HORIZ: 48,
    MovementPattern.PULL_VERT: 48,
    MovementPattern.PULL_HORIZ: 48,
    MovementPattern.CARRY: 24,
    MovementPattern.UNKNOWN: 24,
}

HEAVY_REP_RANGE = (1, 8)

HEAVY_EXERCISE_KEYWORDS: tuple[str, ...] = (
    "squat",
    "deadlift",
    "bench",
    "press",
    "row",
    "pull up",
    "pull-up",
    "hip thrust",
)


@dataclass
class RecoveryState:
    pattern: MovementPattern
    min_recovery_hours: int
    last_heavy_session_at: datetime | None = None
    hours_since_last_heavy: float | None = None
    is_recovered: bool = True


@dataclass
class RecoveryAnalysisResult:
    pattern_states: dict[MovementPattern, RecoveryState]
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SchedulabilityCheck:
    can_schedule: bool
    reason: str | None = None


def is_heavy_set(log: RecentLogEntry) -> bool:
    low, high = HEAVY_REP_RANGE
    return log.weight > 0 and low <= log.reps <= high


def is_heavy_exercise(name: str | None) -> bool:
    """Whether a planned exercise counts as heavy compound work."""
    lowered = (name or "").lower()
    return any(keyword in lowered for keyword in HEAVY_EXERCISE_KEYWORDS)


def _pattern_name(pattern: MovementPattern) -> str:
    return pattern.value.replace("_", " ", 1)


def _days(hours: float) -> int:
    return round_half_up(hours / 24)


def build_recovery_states(
    recent_logs: list[RecentLogEntry] | None,
    now: datetime | None = None,
) -> dict[MovementPattern, RecoveryState]:
    """Find the latest heavy set per pattern and its recovery status."""
    now = to_utc(now) if now else utc_now()
    states = {
        pattern: RecoveryState(pattern=pattern, min_recovery_hours=MIN_RECOVERY_HOURS[pattern])
        for pattern in ALL_MOVEMENT_PATTERNS
    }

    for log in recent_logs or []:
        if not is_heavy_set(log):
            continue
        state = states.get(classify_movement_pattern(log.exercise_name))
        if state is None:
            continue
        performed_at = to_utc(log.performed_at)
        if state.last_heavy_session_at is None or performed_at > state.last_heavy_session_at:
            state.last_heavy_session_at = performed_at
            state.hours_since_last_heavy = hours_between(performed_at, now)
            state.is_recovered = state.hours_since_last_heavy >= state.min_recovery_hours

    return states


def analyze_recovery(
    recent_logs: list[RecentLogEntry] | None = None,
    proposed_schedule: WeekSchedule | None = None,
    now: datetime | None = None,
) -> RecoveryAnalysisResult:
    """Analyze per-pattern recovery and check a proposed week for conflicts.

    Args:
        recent_logs: Performed sets from roughly the last two weeks
        proposed_schedule: Optional week to check for heavy work on patterns
            that are still recovering
        now: Reference time (defaults to current UTC time)

    Returns:
        RecoveryAnalysisResult with per-pattern states, warnings and recommendations
    """
    states = build_recovery_states(recent_logs, now)
    result = RecoveryAnalysisResult(pattern_states=states)

    if proposed_schedule is not None:
        scheduled: dict[MovementPattern, list[tuple[str, str]]] = {}
        for day, slot in proposed_schedule.iter_exercises():
            pattern = slot_pattern(slot)
            if pattern in states and is_heavy_exercise(slot.name):
                scheduled.setdefault(pattern, []).append((day, slot.name))

        for pattern, entries in scheduled.items():
            state = states[pattern]
            if state.last_heavy_session_at is None:
                continue
            hours_since = state.hours_since_last_heavy or 0.0
            if hours_since < state.min_recovery_hours:
                result.warnings.append(
                    f"{_pattern_name(pattern)} pattern was worked {_days(hours_since)} day(s) ago but is scheduled again. "
                    f"Minimum recovery: {_days(state.min_recovery_hours)} days."
                )
                names = ", ".join(f"{name} ({day})" for day, name in entries)
                result.recommendations.append(f"Consider moving {names} to a later day or using lighter variations.")

    for pattern, state in states.items():
        if state.last_heavy_session_at is None:
            result.recommendations.append(
                f"Consider adding a {_pattern_name(pattern)} exercise - hasn't been worked in over a week."
            )

    if result.warnings:
        logger.info(
            "recovery: Conflicts detected in proposed schedule",
            warning_count=len(result.warnings),
            warnings=result.warnings,
        )
    return result


def can_schedule_exercise(slot: ExerciseSlot, states: dict[MovementPattern, RecoveryState]) -> SchedulabilityCheck:
    """Check whether an exercise can be scheduled given recovery states.

    Unknown patterns, light exercises and patterns with no heavy history are
    always schedulable.
    """
    pattern = slot_pattern(slot)
    state = states.get(pattern)
    if pattern == MovementPattern.UNKNOWN or state is None:
        return SchedulabilityCheck(can_schedule=True)
    if not is_heavy_exercise(slot.name):
        return SchedulabilityCheck(can_schedule=True)
    if state.last_heavy_session_at is None:
        return SchedulabilityCheck(can_schedule=True)

    hours_since = state.hours_since_last_heavy or 0.0
    if hours_since < state.min_recovery_hours:
        return SchedulabilityCheck(
            can_schedule=False,
            reason=(
                f"{_pattern_name(pattern)} pattern was worked {_days(hours_since)} day(s) ago. "
                f"Needs {_days(state.min_recovery_hours)} days recovery."
            ),
        )
    return SchedulabilityCheck(can_schedule=True)
