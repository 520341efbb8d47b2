"""Tests for smart compression.

Most tests use a flat estimator (60s of execution per set) so durations are
easy to follow: an exercise costs sets * 60 + sets * rest.
"""

from app.planning.compression.smart_compression import (
    COMPRESSION_STEPS,
    compress_day,
    estimate_day_duration,
    reduce_accessory_sets,
    reduce_compound_sets,
    reduce_rest_times,
    remove_prehab,
)
from app.planning.schema.week_schedule import SetSpec, Tier


def flat_estimator(timing):
    return timing.target_sets * 60


def _ninety_minute_day(make_slot):
    names = ["Barbell Back Squat", "Bench Press", "Dumbbell Curl", "Lateral Raise", "Tricep Pushdown"]
    return [make_slot(name, sets=4, reps=6, rest=210) for name in names]


def test_ninety_minute_day_fits_forty_five_minute_target(make_slot):
    exercises = _ninety_minute_day(make_slot)
    assert estimate_day_duration(exercises, flat_estimator) == 5400

    result = compress_day(exercises, 45, flat_estimator)

    assert result.was_compressed is True
    assert result.estimated_duration_sec == 1368
    assert result.estimated_duration_sec <= 45 * 60
    assert result.actions == [
        "Reduced rest times by 20%",
        "Reduced sets on Tier 2/3 exercises",
        "Reduced sets on Tier 1 exercises",
        "Removed 3 Tier 2 exercise(s)",
    ]
    assert [e.name for e in result.exercises] == ["Barbell Back Squat", "Bench Press"]
    assert all(e.target_sets == 3 for e in result.exercises)
    assert all(e.rest_time_sec == 168 for e in result.exercises)


def test_compression_stops_once_target_met(make_slot):
    exercises = _ninety_minute_day(make_slot)
    # 4560s after rest reduction alone
    result = compress_day(exercises, 76, flat_estimator)

    assert result.actions == ["Reduced rest times by 20%"]
    assert len(result.exercises) == 5
    assert result.estimated_duration_sec == 4560


def test_no_compression_when_within_target(make_slot):
    exercises = _ninety_minute_day(make_slot)
    result = compress_day(exercises, 120, flat_estimator)

    assert result.was_compressed is False
    assert result.actions == []
    assert result.exercises == exercises
    assert result.estimated_duration_sec == 5400


def test_no_target_disables_compression(make_slot):
    exercises = _ninety_minute_day(make_slot)
    for target in (None, 0, -5):
        result = compress_day(exercises, target, flat_estimator)
        assert result.was_compressed is False
        assert result.estimated_duration_sec == 5400


def test_unreachable_target_returns_most_reduced_day(make_slot):
    exercises = _ninety_minute_day(make_slot) + [make_slot("Plank", sets=3, reps=1, rest=60)]
    result = compress_day(exercises, 1, flat_estimator)

    assert result.estimated_duration_sec > 60
    assert "Removed 1 Tier 3 exercise(s)" in result.actions
    assert [e.name for e in result.exercises] == ["Barbell Back Squat", "Bench Press"]
    assert all(e.target_sets >= 3 for e in result.exercises)


def test_empty_day():
    result = compress_day([], 30, flat_estimator)
    assert result.exercises == []
    assert result.estimated_duration_sec == 0
    assert result.was_compressed is False


def test_rest_reduction_floors_at_thirty_seconds(make_slot):
    reduced, action = reduce_rest_times(
        [make_slot("Bench Press", rest=35), make_slot("Dumbbell Curl", rest=20), make_slot("Deadlift", rest=150)]
    )
    assert action == "Reduced rest times by 20%"
    assert [e.rest_time_sec for e in reduced] == [30, 30, 120]


def test_rest_reduction_applies_to_each_set(make_slot):
    slot = make_slot("Bench Press", sets=2, rest=100).model_copy(
        update={"sets": [SetSpec(index=1, reps=8, rest_time_sec=100), SetSpec(index=2, reps=8, rest_time_sec=90)]}
    )
    reduced, _ = reduce_rest_times([slot])
    assert [s.rest_time_sec for s in reduced[0].sets] == [80, 72]


def test_set_floors(make_slot):
    accessory = make_slot("Dumbbell Curl", sets=2)
    compound = make_slot("Bench Press", sets=3)
    below_floor = make_slot("Barbell Back Squat", sets=2)

    after_accessory, _ = reduce_accessory_sets([accessory, compound])
    assert [e.target_sets for e in after_accessory] == [2, 3]

    after_compound, _ = reduce_compound_sets([compound, below_floor])
    assert [e.target_sets for e in after_compound] == [3, 2]


def test_set_reduction_trims_set_specs(make_slot):
    slot = make_slot("Dumbbell Curl", sets=3).model_copy(
        update={"sets": [SetSpec(index=i, reps=10) for i in (1, 2, 3)]}
    )
    reduced, _ = reduce_accessory_sets([slot])
    assert reduced[0].target_sets == 2
    assert [s.index for s in reduced[0].sets] == [1, 2]


def test_remove_prehab_reports_nothing_when_none_removed(make_slot):
    kept, action = remove_prehab([make_slot("Bench Press")])
    assert len(kept) == 1
    assert action is None


def test_attached_tier_drives_strategies(make_slot):
    slot = make_slot("Dumbbell Curl").model_copy(update={"tier": Tier.PREHAB})
    kept, action = remove_prehab([slot])
    assert kept == []
    assert action == "Removed 1 Tier 3 exercise(s)"


def test_timed_exercise_uses_set_durations(make_slot):
    plank = make_slot("Plank", sets=3, rest=30, is_timed=True, target_duration_sec=45).model_copy(
        update={"sets": [SetSpec(index=i, duration_sec=45, rest_time_sec=30) for i in (1, 2, 3)]}
    )
    assert estimate_day_duration([plank], flat_estimator) == 225


def test_strategy_order():
    assert [step.name for step in COMPRESSION_STEPS] == [
        "reduce_rest",
        "reduce_tier_2_3_sets",
        "remove_tier_3",
        "reduce_tier_1_sets",
        "remove_tier_2",
    ]
