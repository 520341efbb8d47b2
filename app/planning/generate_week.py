"""Weekly plan generation orchestrator.

Pipeline for one request:

1. Advisory coverage/recovery analysis of history (prompt hints)
2. Prompt construction
3. Model resolution (cached) and raw text generation
4. JSON extraction from untrusted text
5. Schema validation and normalization to 7 canonical days
6. Day-count limiting to days_per_week
7. Per-exercise classification, volume resolution and set materialization
8. Per-day compression to the duration target
9. Advisory coverage/recovery analysis of the result

Stages 4-9 are deterministic. Analysis findings never change the schedule.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any

from loguru import logger

from app.core.logger import setup_logger  # noqa: F401  (configures sinks on import)
from app.planning.analysis.coverage import CoverageAnalysisResult, analyze_coverage, coverage_summary
from app.planning.analysis.recovery import RecoveryAnalysisResult, analyze_recovery
from app.planning.compression.smart_compression import CompressionResult, compress_day
from app.planning.compression.time_estimation import DurationEstimator, estimate_exercise_duration
from app.planning.errors import ServiceUnavailableError, StructureInvalidError, ValidationWarning
from app.planning.llm.extraction import extract_json
from app.planning.llm.prompts import build_full_plan_prompt, build_supplementary_prompt
from app.planning.materialization.sets import materialize_slot
from app.planning.schema.inputs import PlanGenerationRequest
from app.planning.schema.week_schedule import DAYS_OF_WEEK, DaySchedule, ExerciseSlot, WeekSchedule
from app.planning.structure.training_days import limit_training_days
from app.planning.validate import normalize_exercise_list, normalize_week_schedule
from app.services.llm.model_cache import ModelSelectionCache
from app.services.llm.text_generation import TextGenerator
from app.utils.timezone import to_utc, utc_now


@dataclass(frozen=True)
class GeneratedWeekPlan:
    """Immutable result of one generation request.

    Attributes:
        week_schedule: Final schedule with all 7 canonical days
        model_name: Model that produced the raw text
        warnings: Repaired schema deviations
        coverage: Coverage analysis of the generated week against history
        recovery: Recovery analysis of the generated week against history
        compression: Per-day compression results, keyed by day name
    """

    week_schedule: WeekSchedule
    model_name: str
    warnings: tuple[ValidationWarning, ...] = ()
    coverage: CoverageAnalysisResult | None = None
    recovery: RecoveryAnalysisResult | None = None
    compression: Mapping[str, CompressionResult] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def estimated_duration_sec(self) -> dict[str, int]:
        return {day: result.estimated_duration_sec for day, result in self.compression.items()}

    @property
    def was_compressed(self) -> bool:
        return any(result.was_compressed for result in self.compression.values())


async def _generate_text(
    prompt: str,
    text_generator: TextGenerator,
    model_cache: ModelSelectionCache,
) -> tuple[str, str]:
    model_name = await model_cache.get()
    try:
        text = await text_generator(prompt, model_name)
    except ServiceUnavailableError as e:
        logger.warning(
            "generate_week: Generation failed, invalidating model cache",
            model_name=model_name,
            status_code=e.status_code,
            model_not_found=e.model_not_found,
        )
        model_cache.invalidate()
        raise
    return text, model_name


def materialize_week(week_schedule: WeekSchedule, request: PlanGenerationRequest) -> WeekSchedule:
    """Classify, resolve and attach sets for every exercise in the week."""
    return WeekSchedule(
        days={
            day: DaySchedule(
                exercises=[
                    materialize_slot(slot, request.find_exercise(slot.name))
                    for slot in week_schedule.days[day].exercises
                ]
            )
            for day in DAYS_OF_WEEK
        }
    )


def compress_week(
    week_schedule: WeekSchedule,
    duration_target_min: int | None,
    estimator: DurationEstimator,
) -> tuple[WeekSchedule, dict[str, CompressionResult]]:
    """Compress every training day to the target; rest days pass through."""
    days: dict[str, DaySchedule] = {}
    results: dict[str, CompressionResult] = {}
    for day in DAYS_OF_WEEK:
        exercises = week_schedule.days[day].exercises
        if not exercises:
            days[day] = DaySchedule()
            continue
        result = compress_day(exercises, duration_target_min, estimator)
        results[day] = result
        days[day] = DaySchedule(exercises=result.exercises)
        if result.was_compressed:
            logger.info(
                "generate_week: Compressed day",
                day=day,
                estimated_sec=result.estimated_duration_sec,
                actions=result.actions,
            )
    return WeekSchedule(days=days), results


async def generate_week_schedule(
    request: PlanGenerationRequest,
    *,
    text_generator: TextGenerator,
    model_cache: ModelSelectionCache,
    estimator: DurationEstimator | None = None,
    now: datetime | None = None,
) -> GeneratedWeekPlan:
    """Generate a validated, day-limited, duration-bounded week.

    Args:
        request: Profile, catalog, history and targets
        text_generator: Raw text transport
        model_cache: Model name cache; invalidated when generation fails
        estimator: Execution-time estimator for compression
        now: Reference time for history windows (defaults to current UTC time)

    Returns:
        GeneratedWeekPlan

    Raises:
        ServiceUnavailableError: If the generative service fails
        ParseFailureError: If the response contains no parseable JSON
        StructureInvalidError: If the parsed JSON has no week_schedule
    """
    now = to_utc(now) if now else utc_now()
    estimator = estimator or estimate_exercise_duration
    profile = request.profile

    coverage_notes: list[str] = []
    recovery_notes: list[str] = []
    if request.recent_logs or request.current_schedule is not None:
        history_coverage = analyze_coverage(request.current_schedule, request.recent_logs, now)
        coverage_notes = history_coverage.recommendations
        logger.debug("generate_week: History coverage", summary=coverage_summary(history_coverage))
    if request.recent_logs:
        history_recovery = analyze_recovery(request.recent_logs, None, now)
        recovery_notes = [*history_recovery.warnings, *history_recovery.recommendations]

    prompt = build_full_plan_prompt(
        profile,
        available_exercises=request.available_exercise_names,
        coverage_recommendations=coverage_notes,
        recovery_notes=recovery_notes,
        missed_workouts=request.missed_workouts,
    )

    logger.info(
        "generate_week: Generating plan",
        days_per_week=profile.days_per_week,
        duration_target_min=request.effective_duration_target_min,
        available_exercises=len(request.available_exercise_names),
        recent_logs=len(request.recent_logs),
    )

    text, model_name = await _generate_text(prompt, text_generator, model_cache)

    payload = extract_json(text)
    week_schedule, warnings = normalize_week_schedule(payload)
    week_schedule = limit_training_days(week_schedule, profile.days_per_week)
    week_schedule = materialize_week(week_schedule, request)
    week_schedule, compression = compress_week(week_schedule, request.effective_duration_target_min, estimator)

    coverage = analyze_coverage(week_schedule, request.recent_logs, now)
    recovery = analyze_recovery(request.recent_logs, week_schedule, now)

    logger.info(
        "generate_week: Plan generated",
        model_name=model_name,
        training_days=week_schedule.training_days(),
        warning_count=len(warnings),
        coverage=coverage_summary(coverage),
        recovery_warnings=len(recovery.warnings),
    )

    return GeneratedWeekPlan(
        week_schedule=week_schedule,
        model_name=model_name,
        warnings=tuple(warnings),
        coverage=coverage,
        recovery=recovery,
        compression=MappingProxyType(compression),
    )


def _exercise_array(payload: Any) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("exercises"), list):
        return payload["exercises"]
    raise StructureInvalidError("Invalid supplementary response: expected an array of exercises")


async def generate_supplementary_exercises(
    request: PlanGenerationRequest,
    day: str,
    existing_exercises: list[ExerciseSlot],
    *,
    text_generator: TextGenerator,
    model_cache: ModelSelectionCache,
) -> list[ExerciseSlot]:
    """Generate exercises that complement a day's existing ones.

    Exercises whose name duplicates an existing one are dropped.

    Raises:
        ServiceUnavailableError: If the generative service fails
        ParseFailureError: If the response contains no parseable JSON
        StructureInvalidError: If the response is not an exercise array
    """
    prompt = build_supplementary_prompt(
        request.profile,
        day,
        existing_exercises,
        available_exercises=request.available_exercise_names,
    )
    text, model_name = await _generate_text(prompt, text_generator, model_cache)

    raw_exercises = _exercise_array(extract_json(text))
    slots, warnings = normalize_exercise_list(raw_exercises, context=day)
    if warnings:
        logger.warning(
            "generate_week: Repaired supplementary exercises",
            day=day,
            warning_count=len(warnings),
            warnings=[w.message for w in warnings[:20]],
        )

    existing_names = {slot.name.strip().lower() for slot in existing_exercises}
    supplementary = [
        materialize_slot(slot, request.find_exercise(slot.name))
        for slot in slots
        if slot.name.strip().lower() not in existing_names
    ]

    logger.info(
        "generate_week: Supplementary exercises generated",
        day=day,
        model_name=model_name,
        count=len(supplementary),
        duplicates_dropped=len(slots) - len(supplementary),
    )
    return supplementary
