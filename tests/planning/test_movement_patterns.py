import pytest

from app.planning.classification.movement_patterns import (
    MOVEMENT_PATTERN_RULES,
    classify_movement_pattern,
    movement_pattern_label,
)
from app.planning.classification.rules import matching_rule
from app.planning.schema.week_schedule import MovementPattern


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Romanian Deadlift", MovementPattern.HINGE),
        ("Barbell Row", MovementPattern.PULL_HORIZ),
        ("Overhead Press", MovementPattern.PUSH_VERT),
        ("Farmer Carry", MovementPattern.CARRY),
        ("Banana Split", MovementPattern.UNKNOWN),
        ("Barbell Back Squat", MovementPattern.SQUAT),
        ("Leg Press", MovementPattern.SQUAT),
        ("Walking Lunge", MovementPattern.LUNGE),
        ("Step-Up", MovementPattern.LUNGE),
        ("Lat Pulldown", MovementPattern.PULL_VERT),
        ("Weighted Pull-Up", MovementPattern.PULL_VERT),
        ("Face Pull", MovementPattern.PULL_HORIZ),
        ("Upright Row", MovementPattern.PUSH_VERT),
        ("Incline Bench Press", MovementPattern.PUSH_HORIZ),
        ("Push-Up", MovementPattern.PUSH_HORIZ),
        ("Suitcase Hold", MovementPattern.CARRY),
    ],
)
def test_classify_movement_pattern(name, expected):
    assert classify_movement_pattern(name) == expected


def test_classify_is_case_and_whitespace_insensitive():
    assert classify_movement_pattern("  ROMANIAN deadlift ") == MovementPattern.HINGE


@pytest.mark.parametrize("name", [None, "", "   "])
def test_classify_empty_is_unknown(name):
    assert classify_movement_pattern(name) == MovementPattern.UNKNOWN


def test_hinge_rule_precedes_squat():
    # "Deadlift to squat complex" carries keywords of both patterns
    rule = matching_rule(MOVEMENT_PATTERN_RULES, "Deadlift to Squat Complex")
    assert rule is not None
    assert rule.label == "hinge"


def test_upright_row_carve_out_precedes_rows():
    labels = [rule.label for rule in MOVEMENT_PATTERN_RULES]
    assert labels.index("pull_vert") < labels.index("upright_row") < labels.index("pull_horiz")


def test_movement_pattern_label():
    assert movement_pattern_label(MovementPattern.PULL_HORIZ) == "Horizontal Pull"
    assert movement_pattern_label(MovementPattern.UNKNOWN) == "Unknown"
    assert movement_pattern_label(None) == "Unknown"
