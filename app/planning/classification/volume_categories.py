"""Volume categories for set/rep/rest templates.

Independent from movement patterns: a category decides how much work an
exercise gets, not what it trains.
"""

from dataclasses import dataclass
from enum import StrEnum

from app.planning.classification.rules import ClassificationRule, contains_any, first_match


class VolumeCategory(StrEnum):
    UPPER_COMPOUND = "upper_compound"
    LOWER_COMPOUND = "lower_compound"
    ACCESSORY = "accessory"
    CALF_CORE = "calf_core"
    CARDIO = "cardio"
    OTHER = "other"


@dataclass(frozen=True)
class Bounds:
    minimum: int
    default: int
    maximum: int

    def clamp(self, value: int) -> int:
        return max(self.minimum, min(self.maximum, value))


@dataclass(frozen=True)
class VolumeTemplate:
    sets: Bounds
    reps: Bounds
    rest_sec: Bounds


_COMPOUND = VolumeTemplate(sets=Bounds(3, 4, 5), reps=Bounds(3, 6, 8), rest_sec=Bounds(90, 150, 210))

VOLUME_TEMPLATES: dict[VolumeCategory, VolumeTemplate] = {
    VolumeCategory.UPPER_COMPOUND: _COMPOUND,
    VolumeCategory.LOWER_COMPOUND: _COMPOUND,
    VolumeCategory.ACCESSORY: VolumeTemplate(sets=Bounds(2, 3, 4), reps=Bounds(8, 12, 15), rest_sec=Bounds(45, 60, 90)),
    VolumeCategory.CALF_CORE: VolumeTemplate(sets=Bounds(3, 4, 5), reps=Bounds(10, 15, 20), rest_sec=Bounds(30, 45, 75)),
    VolumeCategory.CARDIO: VolumeTemplate(sets=Bounds(1, 2, 4), reps=Bounds(1, 1, 5), rest_sec=Bounds(30, 60, 90)),
    VolumeCategory.OTHER: VolumeTemplate(sets=Bounds(3, 3, 5), reps=Bounds(3, 8, 15), rest_sec=Bounds(45, 90, 180)),
}


def _is_upper_compound(name: str) -> bool:
    if any(k in name for k in ("bench", "overhead press", "ohp", "barbell row", "pull up", "chin up")):
        return True
    return "row" in name and "upright" not in name


VOLUME_CATEGORY_RULES: tuple[ClassificationRule[VolumeCategory], ...] = (
    ClassificationRule("upper_compound", _is_upper_compound, VolumeCategory.UPPER_COMPOUND),
    ClassificationRule(
        "lower_compound",
        contains_any("squat", "deadlift", "rdl", "romanian", "hip thrust", "leg press"),
        VolumeCategory.LOWER_COMPOUND,
    ),
    ClassificationRule(
        "calf_core",
        contains_any("calf", "shrug", "crunch", "plank", "sit up", "sit-up"),
        VolumeCategory.CALF_CORE,
    ),
    ClassificationRule(
        "cardio",
        contains_any("run", "bike", "rower", "erg", "treadmill", "interval"),
        VolumeCategory.CARDIO,
    ),
    ClassificationRule(
        "accessory",
        contains_any("curl", "raise", "fly", "extension", "pressdown", "pushdown", "wrist"),
        VolumeCategory.ACCESSORY,
    ),
)


def classify_volume_category(name: str | None) -> VolumeCategory:
    return first_match(VOLUME_CATEGORY_RULES, name, VolumeCategory.OTHER)


def template_for(category: VolumeCategory) -> VolumeTemplate:
    return VOLUME_TEMPLATES[category]
