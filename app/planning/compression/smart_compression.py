"""Smart compression of a day's workload to a duration target.

Deterministic post-processing after volume resolution. When a day is
estimated over its target, ordered strategies are applied one at a time and
never revisited; compression stops as soon as the estimate fits:

1. Reduce rest times by 20% (floor 30s)
2. Remove one set from tier 2/3 exercises (floor 2 sets)
3. Remove tier 3 exercises
4. Remove one set from tier 1 exercises (floor 3 sets)
5. Remove tier 2 exercises, keeping only tier 1

An unreachable target returns the most reduced day. Compression never raises.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from loguru import logger

from app.planning.classification.tiers import tier_of
from app.planning.compression.time_estimation import DurationEstimator, ExerciseTiming, estimate_exercise_duration
from app.planning.schema.week_schedule import ExerciseSlot, Tier
from app.utils.rounding import round_half_up

REST_REDUCTION_FACTOR = 0.8
MIN_REST_SEC = 30
MIN_SETS_ANY = 2
MIN_SETS_TIER_1 = 3
FALLBACK_REPS = 8


@dataclass
class CompressionResult:
    exercises: list[ExerciseSlot]
    estimated_duration_sec: int
    was_compressed: bool = False
    actions: list[str] = field(default_factory=list)


StrategyFn = Callable[[list[ExerciseSlot]], tuple[list[ExerciseSlot], str | None]]


@dataclass(frozen=True)
class CompressionStep:
    """One irreversible strategy.

    Attributes:
        name: Identifier used in logs
        apply: Returns the transformed list and the action text, or None when
            the strategy changed nothing worth reporting
    """

    name: str
    apply: StrategyFn


def _is_timed(slot: ExerciseSlot) -> bool:
    return slot.is_timed or any(s.duration_sec is not None for s in slot.sets)


def _rest_for_set(slot: ExerciseSlot, index: int) -> int:
    if index < len(slot.sets):
        return slot.sets[index].rest_time_sec
    return slot.rest_time_sec


def estimate_exercise_total(slot: ExerciseSlot, position: int, estimator: DurationEstimator) -> int:
    """Execution plus rest for one exercise, in seconds."""
    if _is_timed(slot):
        total = 0
        for set_spec in slot.sets:
            total += (set_spec.duration_sec or 0) + set_spec.rest_time_sec
        return total

    target_sets = slot.target_sets or len(slot.sets) or 3
    target_reps = slot.reps_value
    if target_reps is None:
        target_reps = slot.sets[0].reps if slot.sets and slot.sets[0].reps else FALLBACK_REPS

    execution = estimator(
        ExerciseTiming(
            target_sets=target_sets,
            target_reps=target_reps,
            movement_pattern=slot.movement_pattern.value,
            tempo_category=slot.tempo_category,
            setup_buffer_sec=slot.setup_buffer_sec,
            is_unilateral=slot.is_unilateral,
            position_index=position,
        )
    )
    rest = sum(_rest_for_set(slot, i) for i in range(target_sets))
    return execution + rest


def estimate_day_duration(exercises: list[ExerciseSlot], estimator: DurationEstimator = estimate_exercise_duration) -> int:
    return sum(estimate_exercise_total(slot, idx, estimator) for idx, slot in enumerate(exercises))


def _reduced_rest(rest: int) -> int:
    return max(MIN_REST_SEC, round_half_up(rest * REST_REDUCTION_FACTOR))


def reduce_rest_times(exercises: list[ExerciseSlot]) -> tuple[list[ExerciseSlot], str | None]:
    reduced = [
        slot.model_copy(
            update={
                "rest_time_sec": _reduced_rest(slot.rest_time_sec),
                "sets": [s.model_copy(update={"rest_time_sec": _reduced_rest(s.rest_time_sec)}) for s in slot.sets],
            }
        )
        for slot in exercises
    ]
    return reduced, "Reduced rest times by 20%"


def _drop_one_set(slot: ExerciseSlot, floor: int) -> ExerciseSlot:
    current = slot.target_sets or len(slot.sets) or 3
    if current <= floor:
        return slot
    new_sets = current - 1
    return slot.model_copy(update={"target_sets": new_sets, "sets": slot.sets[:new_sets]})


def reduce_accessory_sets(exercises: list[ExerciseSlot]) -> tuple[list[ExerciseSlot], str | None]:
    reduced = [
        _drop_one_set(slot, MIN_SETS_ANY) if tier_of(slot) in (Tier.ACCESSORY, Tier.PREHAB) else slot
        for slot in exercises
    ]
    return reduced, "Reduced sets on Tier 2/3 exercises"


def remove_prehab(exercises: list[ExerciseSlot]) -> tuple[list[ExerciseSlot], str | None]:
    kept = [slot for slot in exercises if tier_of(slot) != Tier.PREHAB]
    removed = len(exercises) - len(kept)
    return kept, (f"Removed {removed} Tier 3 exercise(s)" if removed else None)


def reduce_compound_sets(exercises: list[ExerciseSlot]) -> tuple[list[ExerciseSlot], str | None]:
    reduced = [_drop_one_set(slot, MIN_SETS_TIER_1) if tier_of(slot) == Tier.COMPOUND else slot for slot in exercises]
    return reduced, "Reduced sets on Tier 1 exercises"


def keep_only_compounds(exercises: list[ExerciseSlot]) -> tuple[list[ExerciseSlot], str | None]:
    kept = [slot for slot in exercises if tier_of(slot) == Tier.COMPOUND]
    removed = len(exercises) - len(kept)
    return kept, (f"Removed {removed} Tier 2 exercise(s)" if removed else None)


COMPRESSION_STEPS: tuple[CompressionStep, ...] = (
    CompressionStep("reduce_rest", reduce_rest_times),
    CompressionStep("reduce_tier_2_3_sets", reduce_accessory_sets),
    CompressionStep("remove_tier_3", remove_prehab),
    CompressionStep("reduce_tier_1_sets", reduce_compound_sets),
    CompressionStep("remove_tier_2", keep_only_compounds),
)


def compress_day(
    exercises: list[ExerciseSlot],
    duration_target_min: int | None,
    estimator: DurationEstimator = estimate_exercise_duration,
) -> CompressionResult:
    """Fit a day's exercises into a duration target.

    Args:
        exercises: Resolved exercises (with per-set specs) in session order
        duration_target_min: Target in minutes; None or <= 0 disables compression
        estimator: Execution-time estimator for rep-based exercises

    Returns:
        CompressionResult with the final exercises, estimate and applied actions
    """
    current = list(exercises)
    estimated = estimate_day_duration(current, estimator)

    if not duration_target_min or duration_target_min <= 0:
        return CompressionResult(exercises=current, estimated_duration_sec=estimated)

    target_sec = duration_target_min * 60
    if estimated <= target_sec:
        return CompressionResult(exercises=current, estimated_duration_sec=estimated)

    logger.debug(
        "compression: Starting",
        target_sec=target_sec,
        estimated_sec=estimated,
        exercise_count=len(current),
    )

    actions: list[str] = []
    for step in COMPRESSION_STEPS:
        if estimated <= target_sec:
            break
        current, action = step.apply(current)
        if action:
            actions.append(action)
        estimated = estimate_day_duration(current, estimator)

    if estimated > target_sec:
        logger.info(
            "compression: Target unreachable, returning most reduced day",
            target_sec=target_sec,
            estimated_sec=estimated,
            actions=actions,
        )
    else:
        logger.debug("compression: Complete", estimated_sec=estimated, actions=actions)

    return CompressionResult(
        exercises=current,
        estimated_duration_sec=estimated,
        was_compressed=bool(actions),
        actions=actions,
    )
