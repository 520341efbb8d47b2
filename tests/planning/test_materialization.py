from app.planning.classification.volume_categories import VOLUME_TEMPLATES, VolumeCategory
from app.planning.materialization.sets import build_sets, is_bodyweight, materialize_slot
from app.planning.schema.inputs import ExerciseCatalogEntry
from app.planning.schema.week_schedule import MovementPattern, Tier


def test_is_bodyweight():
    assert is_bodyweight("Push-Up")
    assert is_bodyweight("Weighted Pull-up")
    assert not is_bodyweight("Bench Press")


def test_materialize_loaded_exercise(make_slot):
    slot = materialize_slot(make_slot("Bench Press", sets=4, reps="8-12", rest=120))

    assert slot.movement_pattern == MovementPattern.PUSH_HORIZ
    assert slot.tier == Tier.COMPOUND
    assert slot.target_reps == 8
    assert len(slot.sets) == 4
    assert [s.index for s in slot.sets] == [1, 2, 3, 4]
    assert all(s.reps == 8 and s.weight is None and s.duration_sec is None for s in slot.sets)
    assert all(s.rest_time_sec == 120 for s in slot.sets)


def test_materialize_bodyweight_exercise_gets_zero_weight(make_slot):
    slot = materialize_slot(make_slot("Push-Up", sets=3, reps=15))
    assert all(s.weight == 0.0 for s in slot.sets)


def test_materialize_keeps_existing_pattern(make_slot):
    slot = materialize_slot(make_slot("Mystery Move", movement_pattern=MovementPattern.CARRY))
    assert slot.movement_pattern == MovementPattern.CARRY


def test_materialize_timed_uses_catalog_duration(make_slot):
    entry = ExerciseCatalogEntry(name="Plank", is_timed=True, default_duration_sec=45)
    slot = materialize_slot(make_slot("Plank", sets=3, reps=1, rest=30), entry)

    assert slot.is_timed is True
    assert slot.target_duration_sec == 45
    assert all(s.duration_sec == 45 and s.reps is None for s in slot.sets)
    assert len(slot.sets) == VOLUME_TEMPLATES[VolumeCategory.CALF_CORE].sets.clamp(3)


def test_materialize_timed_without_duration_falls_back_to_reps(make_slot):
    entry = ExerciseCatalogEntry(name="Plank", is_timed=True)
    slot = materialize_slot(make_slot("Plank", sets=3, reps=1, rest=30), entry)

    assert slot.is_timed is False
    assert all(s.reps is not None and s.duration_sec is None for s in slot.sets)


def test_build_sets_uses_resolved_values(make_slot):
    sets = build_sets(make_slot("Dumbbell Curl", sets=2, reps=12, rest=45))
    assert [(s.index, s.reps, s.rest_time_sec) for s in sets] == [(1, 12, 45), (2, 12, 45)]
