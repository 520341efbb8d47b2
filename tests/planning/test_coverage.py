"""Tests for movement pattern coverage analysis."""

from datetime import timedelta

from app.planning.analysis.coverage import analyze_coverage, coverage_summary
from app.planning.schema.inputs import RecentLogEntry
from app.planning.schema.week_schedule import MovementPattern


def test_empty_week_flags_everything_under_served(now):
    result = analyze_coverage(None, now=now)

    assert len(result.under_served_patterns) == 8
    assert result.over_served_patterns == []
    assert result.missing_essential_patterns == [
        MovementPattern.SQUAT,
        MovementPattern.HINGE,
        MovementPattern.PUSH_HORIZ,
        MovementPattern.PULL_HORIZ,
    ]
    assert any(r.startswith("Missing essential movement patterns") for r in result.recommendations)


def test_counts_sets_per_pattern(make_slot, make_week, now):
    week = make_week(
        Monday=[make_slot("Barbell Back Squat", sets=4), make_slot("Bench Press", sets=3)],
        Thursday=[make_slot("Romanian Deadlift", sets=3), make_slot("Barbell Row", sets=3)],
    )
    result = analyze_coverage(week, now=now)
    coverage = result.pattern_coverage

    assert coverage[MovementPattern.SQUAT].sets_this_week == 4
    assert coverage[MovementPattern.PUSH_HORIZ].sets_this_week == 3
    assert coverage[MovementPattern.HINGE].sets_this_week == 3
    assert coverage[MovementPattern.PULL_HORIZ].sets_this_week == 3
    assert result.missing_essential_patterns == []
    assert MovementPattern.SQUAT not in result.under_served_patterns
    assert MovementPattern.CARRY in result.under_served_patterns


def test_slot_pattern_tag_overrides_name(make_slot, make_week, now):
    week = make_week(Monday=[make_slot("Mystery Move", sets=5, movement_pattern=MovementPattern.CARRY)])
    result = analyze_coverage(week, now=now)
    assert result.pattern_coverage[MovementPattern.CARRY].sets_this_week == 5


def test_over_served_above_absolute_limit(make_slot, make_week, now):
    week = make_week(
        Monday=[make_slot("Barbell Back Squat", sets=5), make_slot("Front Squat", sets=5)],
        Wednesday=[make_slot("Goblet Squat", sets=5), make_slot("Hack Squat", sets=5)],
    )
    result = analyze_coverage(week, now=now)

    assert result.pattern_coverage[MovementPattern.SQUAT].is_over_served
    assert MovementPattern.SQUAT in result.over_served_patterns
    assert any(r.startswith("High volume detected for: Squat") for r in result.recommendations)


def test_over_served_relative_to_average(make_slot, make_week, now):
    # 8 squat sets and 3 bench sets: average 11/8, squat exceeds twice that
    week = make_week(Monday=[make_slot("Barbell Back Squat", sets=8), make_slot("Bench Press", sets=3)])
    result = analyze_coverage(week, now=now)
    assert MovementPattern.SQUAT in result.over_served_patterns
    assert MovementPattern.PUSH_HORIZ in result.over_served_patterns


def test_log_windows(now):
    logs = [
        RecentLogEntry(exercise_name="Bench Press", performed_at=now - timedelta(days=2), weight=60, reps=8),
        RecentLogEntry(exercise_name="Bench Press", performed_at=now - timedelta(days=2), weight=60, reps=8),
        RecentLogEntry(exercise_name="Bench Press", performed_at=now - timedelta(days=10), weight=60, reps=8),
        RecentLogEntry(exercise_name="Bench Press", performed_at=now - timedelta(days=20), weight=60, reps=8),
    ]
    result = analyze_coverage(None, logs, now=now)
    bench = result.pattern_coverage[MovementPattern.PUSH_HORIZ]

    assert bench.sets_last_week == 2
    assert bench.sets_last_two_weeks == 3
    assert bench.last_worked_at == now - timedelta(days=2)


def test_naive_log_timestamps_are_treated_as_utc(now):
    naive = (now - timedelta(days=1)).replace(tzinfo=None)
    logs = [RecentLogEntry(exercise_name="Pull-Up", performed_at=naive, weight=0, reps=8)]
    result = analyze_coverage(None, logs, now=now)
    assert result.pattern_coverage[MovementPattern.PULL_VERT].sets_last_week == 1


def test_coverage_summary(make_slot, make_week, now):
    assert coverage_summary(analyze_coverage(None, now=now)) == "Low: 8 patterns"

    balanced = make_week(
        Monday=[make_slot(name, sets=3) for name in ("Squat", "Deadlift", "Lunge", "Overhead Press")],
        Friday=[make_slot(name, sets=3) for name in ("Bench Press", "Pull-Up", "Barbell Row", "Farmer Carry")],
    )
    assert coverage_summary(analyze_coverage(balanced, now=now)) == "Balanced coverage"
