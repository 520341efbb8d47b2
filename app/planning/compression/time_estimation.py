"""Execution-time estimation for rep-based exercises.

A deliberately small deterministic model: reps × seconds-per-rep, doubled for
unilateral work, plus a setup buffer, scaled by a fatigue factor that grows
with the exercise's position in the session. Rest is not included here;
callers add it per set.
"""

from dataclasses import dataclass
from typing import Protocol

from app.utils.rounding import round_half_up

TEMPO_SECONDS_PER_REP: dict[str, float] = {
    "grind": 5.0,
    "standard": 3.5,
    "ballistic": 1.5,
}

DEFAULT_SETUP_BUFFER_SEC = 15
FATIGUE_STEP = 0.05
MAX_FATIGUE_BONUS = 0.3


@dataclass(frozen=True)
class ExerciseTiming:
    """Inputs to a duration estimator for one exercise.

    Attributes:
        target_sets: Number of working sets
        target_reps: Reps per set
        movement_pattern: Pattern tag value, if known
        tempo_category: grind | standard | ballistic
        setup_buffer_sec: Setup time override
        is_unilateral: Each rep is performed per side
        position_index: Zero-based position within the session
        seconds_per_rep_override: Per-user override
        base_seconds_per_rep: Catalog value for the exercise
    """

    target_sets: int
    target_reps: int
    movement_pattern: str | None = None
    tempo_category: str | None = None
    setup_buffer_sec: int | None = None
    is_unilateral: bool = False
    position_index: int = 0
    seconds_per_rep_override: float | None = None
    base_seconds_per_rep: float | None = None


class DurationEstimator(Protocol):
    def __call__(self, timing: ExerciseTiming) -> int:
        """Return the execution time in seconds, excluding rest."""
        ...


def tempo_seconds_per_rep(tempo_category: str | None) -> float:
    if not tempo_category:
        return TEMPO_SECONDS_PER_REP["standard"]
    return TEMPO_SECONDS_PER_REP.get(tempo_category.lower(), TEMPO_SECONDS_PER_REP["standard"])


def seconds_per_rep(timing: ExerciseTiming) -> float:
    """User override > catalog base > tempo category."""
    if timing.seconds_per_rep_override is not None and timing.seconds_per_rep_override > 0:
        return timing.seconds_per_rep_override
    if timing.base_seconds_per_rep is not None and timing.base_seconds_per_rep > 0:
        return timing.base_seconds_per_rep
    return tempo_seconds_per_rep(timing.tempo_category)


def estimate_exercise_duration(timing: ExerciseTiming) -> int:
    unilateral_factor = 2 if timing.is_unilateral else 1
    setup = timing.setup_buffer_sec if timing.setup_buffer_sec is not None else DEFAULT_SETUP_BUFFER_SEC

    total_reps = timing.target_sets * timing.target_reps
    base_seconds = total_reps * seconds_per_rep(timing) * unilateral_factor

    fatigue_multiplier = 1 + min(max(timing.position_index, 0) * FATIGUE_STEP, MAX_FATIGUE_BONUS)
    return round_half_up((base_seconds + setup) * fatigue_multiplier)
