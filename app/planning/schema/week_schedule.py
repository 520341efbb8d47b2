from enum import IntEnum, StrEnum

from pydantic import BaseModel, Field, field_validator, model_validator

DAYS_OF_WEEK: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


class MovementPattern(StrEnum):
    SQUAT = "squat"
    HINGE = "hinge"
    LUNGE = "lunge"
    PUSH_VERT = "push_vert"
    PUSH_HORIZ = "push_horiz"
    PULL_VERT = "pull_vert"
    PULL_HORIZ = "pull_horiz"
    CARRY = "carry"
    UNKNOWN = "unknown"


class Tier(IntEnum):
    COMPOUND = 1
    ACCESSORY = 2
    PREHAB = 3


class SetSpec(BaseModel):
    index: int = Field(..., ge=1)
    reps: int | None = Field(None, gt=0)
    duration_sec: int | None = Field(None, gt=0)
    weight: float | None = None
    rest_time_sec: int = Field(60, ge=0)

    @model_validator(mode="after")
    def check_reps_or_duration(self) -> "SetSpec":
        if (self.reps is None) == (self.duration_sec is None):
            raise ValueError("SetSpec must carry exactly one of reps or duration_sec")
        return self


class ExerciseSlot(BaseModel):
    name: str = Field(..., min_length=1)
    target_sets: int = Field(..., ge=1)
    target_reps: int | str = Field(..., description="Positive int, or 'min-max' before volume resolution")
    rest_time_sec: int = Field(60, ge=0)
    notes: str | None = None

    movement_pattern: MovementPattern = MovementPattern.UNKNOWN
    tier: Tier | None = Field(None, exclude=True)

    is_timed: bool = False
    target_duration_sec: int | None = Field(None, gt=0)

    tempo_category: str | None = None
    setup_buffer_sec: int | None = Field(None, ge=0)
    is_unilateral: bool = False

    sets: list[SetSpec] = Field(default_factory=list)

    @field_validator("target_reps")
    @classmethod
    def check_reps(cls, value: int | str) -> int | str:
        if isinstance(value, int) and value <= 0:
            raise ValueError("target_reps must be positive")
        return value

    @property
    def reps_value(self) -> int | None:
        """Numeric reps, or None while target_reps is still a range string."""
        if isinstance(self.target_reps, int):
            return self.target_reps
        return None


class DaySchedule(BaseModel):
    exercises: list[ExerciseSlot] = Field(default_factory=list)

    @property
    def has_content(self) -> bool:
        return bool(self.exercises)


class WeekSchedule(BaseModel):
    """Seven canonical days, always in Monday..Sunday order."""

    days: dict[str, DaySchedule]

    @model_validator(mode="after")
    def check_canonical_days(self) -> "WeekSchedule":
        if set(self.days) != set(DAYS_OF_WEEK):
            missing = [d for d in DAYS_OF_WEEK if d not in self.days]
            extra = sorted(set(self.days) - set(DAYS_OF_WEEK))
            raise ValueError(f"WeekSchedule requires the 7 canonical days (missing={missing}, extra={extra})")
        self.days = {day: self.days[day] for day in DAYS_OF_WEEK}
        return self

    @classmethod
    def empty(cls) -> "WeekSchedule":
        return cls(days={day: DaySchedule() for day in DAYS_OF_WEEK})

    def training_days(self) -> list[str]:
        return [day for day in DAYS_OF_WEEK if self.days[day].has_content]

    def iter_exercises(self):
        for day in DAYS_OF_WEEK:
            for slot in self.days[day].exercises:
                yield day, slot

    def to_payload(self) -> dict:
        """Serialize to the {"week_schedule": {...}} shape the model produces."""
        return {
            "week_schedule": {
                day: self.days[day].model_dump(mode="json", exclude_none=True) for day in DAYS_OF_WEEK
            }
        }
