"""Read-only inputs supplied by the host application.

Profiles, catalog entries and logs come from persistence that this package
does not own; the models here only describe their shape.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from app.planning.schema.week_schedule import WeekSchedule


class UserProfile(BaseModel):
    age: int | None = None
    gender: str | None = None
    current_weight: float | None = None
    goal_weight: float | None = None
    height: float | None = None
    goal: str | None = None
    days_per_week: int = Field(3, ge=0, le=7)
    equipment_access: list[str] = Field(default_factory=list)
    experience_level: str | None = None
    duration_target_min: int | None = Field(None, gt=0)
    use_imperial: bool = True
    workout_feedback: str | None = None


class ExerciseCatalogEntry(BaseModel):
    name: str
    is_timed: bool = False
    default_duration_sec: int | None = Field(None, gt=0)
    equipment_needed: list[str] = Field(default_factory=list)


class RecentLogEntry(BaseModel):
    exercise_name: str
    performed_at: datetime
    weight: float = 0.0
    reps: int = 0


class MissedWorkout(BaseModel):
    day: str
    scheduled_at: datetime | None = None
    exercises_planned: int = Field(0, ge=0)
    exercises_completed: int = Field(0, ge=0)

    @property
    def exercises_missed(self) -> int:
        return max(0, self.exercises_planned - self.exercises_completed)


class PlanGenerationRequest(BaseModel):
    """Everything the orchestrator needs for one generation request."""

    profile: UserProfile
    catalog_exercises: list[ExerciseCatalogEntry] = Field(default_factory=list)
    user_exercises: list[ExerciseCatalogEntry] = Field(default_factory=list)
    recent_logs: list[RecentLogEntry] = Field(default_factory=list)
    missed_workouts: list[MissedWorkout] = Field(default_factory=list)
    current_schedule: WeekSchedule | None = None
    duration_target_min: int | None = Field(None, gt=0)

    @property
    def effective_duration_target_min(self) -> int | None:
        return self.duration_target_min or self.profile.duration_target_min

    @property
    def available_exercise_names(self) -> list[str]:
        return [entry.name for entry in [*self.catalog_exercises, *self.user_exercises] if entry.name]

    def find_exercise(self, name: str) -> ExerciseCatalogEntry | None:
        """Case-insensitive lookup across catalog and user-authored exercises."""
        key = name.strip().lower()
        for entry in [*self.catalog_exercises, *self.user_exercises]:
            if entry.name.strip().lower() == key:
                return entry
        return None
