from loguru import logger

from app.planning.schema.week_schedule import DAYS_OF_WEEK, DaySchedule, WeekSchedule


def limit_training_days(week_schedule: WeekSchedule, days_per_week: int) -> WeekSchedule:
    """Keep the first N canonical days that have exercises and empty the rest.

    All 7 days stay present. A schedule with fewer content days than
    days_per_week is returned unchanged; no training is invented.

    Args:
        week_schedule: Normalized week
        days_per_week: Training days requested by the profile

    Returns:
        New WeekSchedule with at most days_per_week content days
    """
    limit = max(0, days_per_week)
    content_days = week_schedule.training_days()
    keep = set(content_days[:limit])
    dropped = [day for day in content_days if day not in keep]

    if dropped:
        logger.info(
            "training_days: Emptied days beyond days_per_week",
            days_per_week=limit,
            kept=[d for d in content_days if d in keep],
            dropped=dropped,
        )

    return WeekSchedule(
        days={
            day: (week_schedule.days[day].model_copy(deep=True) if day in keep else DaySchedule())
            for day in DAYS_OF_WEEK
        }
    )
