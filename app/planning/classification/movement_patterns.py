"""Movement pattern tagging from exercise names.

Patterns follow the functional split used for strength programming:
squat (knee dominant), hinge (hip dominant), lunge (single leg), vertical and
horizontal push, vertical and horizontal pull, and loaded carries.
"""

from app.planning.classification.rules import ClassificationRule, contains_any, first_match
from app.planning.schema.week_schedule import MovementPattern

ALL_MOVEMENT_PATTERNS: tuple[MovementPattern, ...] = (
    MovementPattern.SQUAT,
    MovementPattern.HINGE,
    MovementPattern.LUNGE,
    MovementPattern.PUSH_VERT,
    MovementPattern.PUSH_HORIZ,
    MovementPattern.PULL_VERT,
    MovementPattern.PULL_HORIZ,
    MovementPattern.CARRY,
)

MOVEMENT_PATTERN_LABELS: dict[MovementPattern, str] = {
    MovementPattern.SQUAT: "Squat",
    MovementPattern.HINGE: "Hinge",
    MovementPattern.LUNGE: "Lunge",
    MovementPattern.PUSH_VERT: "Vertical Push",
    MovementPattern.PUSH_HORIZ: "Horizontal Push",
    MovementPattern.PULL_VERT: "Vertical Pull",
    MovementPattern.PULL_HORIZ: "Horizontal Pull",
    MovementPattern.CARRY: "Carry",
}

# Hinge precedes squat so "Romanian deadlift" never lands on squat.
# Vertical pull precedes rows; upright row is a shoulder movement, not a pull.
MOVEMENT_PATTERN_RULES: tuple[ClassificationRule[MovementPattern], ...] = (
    ClassificationRule(
        "hinge",
        contains_any("deadlift", "rdl", "romanian", "hip thrust", "good morning", "hyperextension", "back extension"),
        MovementPattern.HINGE,
    ),
    ClassificationRule("squat", contains_any("squat", "leg press"), MovementPattern.SQUAT),
    ClassificationRule(
        "lunge",
        contains_any("lunge", "step up", "step-up", "split squat", "bulgarian", "pistol squat", "single leg"),
        MovementPattern.LUNGE,
    ),
    ClassificationRule(
        "pull_vert",
        contains_any(
            "pull up", "pull-up", "pullup", "chin up", "chin-up",
            "lat pulldown", "lat pull-down", "lat pull down", "pull down", "pulldown",
        ),
        MovementPattern.PULL_VERT,
    ),
    ClassificationRule("upright_row", contains_any("upright row"), MovementPattern.PUSH_VERT),
    ClassificationRule("pull_horiz", contains_any("row", "face pull"), MovementPattern.PULL_HORIZ),
    ClassificationRule(
        "push_vert",
        contains_any(
            "overhead press", "ohp", "shoulder press", "military press", "push press",
            "arnold press", "lateral raise", "front raise",
        ),
        MovementPattern.PUSH_VERT,
    ),
    ClassificationRule(
        "push_horiz",
        contains_any(
            "bench", "push up", "push-up", "pushup", "dip",
            "chest press", "pec fly", "pec flye", "chest fly",
        ),
        MovementPattern.PUSH_HORIZ,
    ),
    ClassificationRule("carry", contains_any("carry", "walk", "suitcase", "farmer"), MovementPattern.CARRY),
)


def classify_movement_pattern(name: str | None) -> MovementPattern:
    """Infer the movement pattern of an exercise from its name.

    Returns MovementPattern.UNKNOWN for empty or unrecognized names.
    """
    return first_match(MOVEMENT_PATTERN_RULES, name, MovementPattern.UNKNOWN)


def movement_pattern_label(pattern: MovementPattern | None) -> str:
    if pattern is None:
        return "Unknown"
    return MOVEMENT_PATTERN_LABELS.get(pattern, "Unknown")
