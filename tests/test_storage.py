import json
import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from default_exercises import DEFAULT_EXERCISES
from errors import (
    AlreadyExistsError,
    NotFoundError,
    SchemaValidationError,
    ValidationError,
)
from schemas import (
    Config,
    Exercise,
    ExerciseLog,
    ExerciseUpdate,
    SetLog,
    Template,
    TemplateExercise,
    TemplateUpdate,
    Workout,
)
from storage import Storage


def make_workout(date: str, exercises=None, template="push-a") -> Workout:
    return Workout(
        id=f"{date}-{template or 'freestyle'}",
        date=date,
        template=template,
        start_time=f"{date}T10:00:00Z",
        end_time=f"{date}T11:00:00Z",
        exercises=exercises or [],
    )


def bench_log(weight: float, reps=(10, 8)) -> ExerciseLog:
    return ExerciseLog(
        exercise="bench-press",
        sets=[SetLog(weight=weight, reps=r) for r in reps],
    )


@pytest.fixture
def storage(tmp_path):
    os.makedirs(tmp_path / "profiles" / "test" / "workouts")
    return Storage(str(tmp_path), "test")


class TestConfig:
    def test_default_config_is_written(self, storage):
        config = storage.config.get()
        assert config.units == "lbs"
        assert config.data_dir == "~/.workout"
        assert os.path.exists(storage.config.path)

    def test_save_and_reload(self, storage):
        storage.config.save(Config(units="kg"))
        assert storage.config.get().units == "kg"
        with open(storage.config.path, encoding="utf-8") as f:
            assert json.load(f) == {"units": "kg", "dataDir": "~/.workout"}

    def test_invalid_units_on_disk(self, storage):
        os.makedirs(storage.profile_dir, exist_ok=True)
        with open(storage.config.path, "w", encoding="utf-8") as f:
            f.write('{"units": "stone"}')
        with pytest.raises(SchemaValidationError):
            storage.config.get()


class TestExercises:
    def test_seeds_default_library(self, storage):
        exercises = storage.exercises.get_all()
        assert len(exercises) == len(DEFAULT_EXERCISES)
        assert len(exercises) >= 17
        assert os.path.exists(os.path.join(storage.base_dir, "exercises.json"))

    def test_library_is_shared_between_profiles(self, tmp_path, storage):
        storage.exercises.add(
            Exercise(
                id="zercher-squat",
                name="Zercher Squat",
                muscles=["quads", "glutes"],
                type="compound",
                equipment="barbell",
            )
        )
        other = Storage(str(tmp_path), "other")
        assert other.exercises.get("zercher-squat") is not None

    def test_lookup_by_alias_matches_id(self, storage):
        by_id = storage.exercises.get("bench-press")
        by_alias = storage.exercises.get("bench")
        assert by_alias == by_id
        assert storage.exercises.get("nope") is None
        with pytest.raises(NotFoundError):
            storage.exercises.require("nope")

    def test_add_duplicate_id(self, storage):
        existing = storage.exercises.get("squat")
        with pytest.raises(AlreadyExistsError):
            storage.exercises.add(existing)

    def test_add_duplicate_alias(self, storage):
        clash = Exercise(
            id="smith-bench",
            name="Smith Bench",
            aliases=["bench"],
            muscles=["chest"],
            type="compound",
            equipment="machine",
        )
        with pytest.raises(AlreadyExistsError):
            storage.exercises.add(clash)

    def test_update_merges_fields(self, storage):
        updated = storage.exercises.update(
            "squat", ExerciseUpdate(name="Back Squat", notes="high bar")
        )
        assert updated.name == "Back Squat"
        assert updated.notes == "high bar"
        assert updated.muscles == ["quads", "glutes", "hamstrings"]
        assert storage.exercises.get("squat").name == "Back Squat"

    def test_update_revalidates(self, storage):
        with pytest.raises(ValidationError):
            storage.exercises.update("squat", ExerciseUpdate(muscles=[]))

    def test_update_missing(self, storage):
        with pytest.raises(NotFoundError):
            storage.exercises.update("nope", ExerciseUpdate(name="x"))

    def test_delete(self, storage):
        storage.exercises.delete("plank")
        assert storage.exercises.get("plank") is None
        with pytest.raises(NotFoundError):
            storage.exercises.delete("plank")

    def test_corrupt_library(self, storage):
        with open(storage.exercises.path, "w", encoding="utf-8") as f:
            f.write("[{\"id\": \"x\"}]")
        with pytest.raises(SchemaValidationError):
            storage.exercises.get_all()

    def test_invalid_json(self, storage):
        with open(storage.exercises.path, "w", encoding="utf-8") as f:
            f.write("not json")
        with pytest.raises(SchemaValidationError):
            storage.exercises.get_all()


class TestTemplates:
    def template(self) -> Template:
        return Template(
            id="push-a",
            name="Push A",
            exercises=[
                TemplateExercise(exercise="bench-press", sets=3, reps="8-12"),
                TemplateExercise(exercise="overhead-press", sets=3, reps="8-12"),
            ],
        )

    def test_empty_by_default(self, storage):
        assert storage.templates.get_all() == []
        assert os.path.exists(storage.templates.path)

    def test_add_get_round_trip(self, storage):
        storage.templates.add(self.template())
        assert storage.templates.get("push-a") == self.template()
        with open(storage.templates.path, encoding="utf-8") as f:
            assert "description" not in json.load(f)[0]

    def test_add_duplicate(self, storage):
        storage.templates.add(self.template())
        with pytest.raises(AlreadyExistsError):
            storage.templates.add(self.template())

    def test_templates_are_per_profile(self, tmp_path, storage):
        storage.templates.add(self.template())
        assert Storage(str(tmp_path), "other").templates.get_all() == []

    def test_update(self, storage):
        storage.templates.add(self.template())
        updated = storage.templates.update(
            "push-a", TemplateUpdate(description="Chest day")
        )
        assert updated.description == "Chest day"
        assert len(updated.exercises) == 2

    def test_update_revalidates(self, storage):
        storage.templates.add(self.template())
        with pytest.raises(ValidationError):
            storage.templates.update(
                "push-a", TemplateUpdate(name=None)
            )

    def test_delete(self, storage):
        storage.templates.add(self.template())
        storage.templates.delete("push-a")
        assert storage.templates.get("push-a") is None
        with pytest.raises(NotFoundError):
            storage.templates.delete("push-a")


class TestCurrentWorkout:
    def test_none_when_absent(self, storage):
        assert storage.current.get() is None

    def test_save_get_clear(self, storage):
        workout = make_workout("2026-01-20", [bench_log(135)])
        workout.end_time = None
        storage.current.save(workout)
        assert storage.current.get() == workout
        storage.current.clear()
        assert storage.current.get() is None
        storage.current.clear()

    def test_null_fields_are_kept_on_disk(self, storage):
        workout = make_workout("2026-01-20", template=None)
        workout.end_time = None
        storage.current.save(workout)
        with open(storage.current.path, encoding="utf-8") as f:
            data = json.load(f)
        assert data["template"] is None
        assert data["endTime"] is None
        assert "stats" not in data

    def write_current(self, storage, exercises=None):
        data = {
            "id": "2026-01-20-freestyle",
            "date": "2026-01-20",
            "template": None,
            "startTime": "2026-01-20T10:00:00Z",
            "endTime": None,
        }
        if exercises is not None:
            data["exercises"] = exercises
        with open(storage.current.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def test_string_numbers_are_rejected(self, storage):
        self.write_current(
            storage,
            [
                {
                    "exercise": "bench-press",
                    "sets": [{"weight": "135", "reps": "8", "rir": None}],
                }
            ],
        )
        with pytest.raises(SchemaValidationError):
            storage.current.get()

    def test_missing_sets_are_rejected(self, storage):
        self.write_current(storage, [{"exercise": "squat"}])
        with pytest.raises(SchemaValidationError):
            storage.current.get()

    def test_missing_exercises_are_rejected(self, storage):
        self.write_current(storage)
        with pytest.raises(SchemaValidationError):
            storage.current.get()

    def test_integer_weight_is_accepted(self, storage):
        self.write_current(
            storage,
            [{"exercise": "bench-press", "sets": [{"weight": 135, "reps": 8}]}],
        )
        workout = storage.current.get()
        assert workout.exercises[0].sets[0].weight == 135
        assert workout.notes == []


class TestFinishedWorkouts:
    def test_finish_writes_by_date_and_clears_current(self, storage):
        workout = make_workout("2026-01-20", [bench_log(135)])
        storage.current.save(workout)
        storage.finish_workout(workout)
        assert storage.current.get() is None
        assert storage.workouts.get("2026-01-20") == workout
        assert os.path.exists(
            os.path.join(storage.profile_dir, "workouts", "2026-01-20.json")
        )

    def test_same_date_overwrites(self, storage):
        storage.finish_workout(make_workout("2026-01-20", [bench_log(135)]))
        storage.finish_workout(make_workout("2026-01-20", [bench_log(155)]))
        workouts = storage.workouts.get_all()
        assert len(workouts) == 1
        assert workouts[0].exercises[0].sets[0].weight == 155

    def test_get_all_sorted_descending(self, storage):
        for date in ["2026-01-22", "2025-12-31", "2026-01-24", "2026-01-20"]:
            storage.finish_workout(make_workout(date))
        dates = [w.date for w in storage.workouts.get_all()]
        assert dates == ["2026-01-24", "2026-01-22", "2026-01-20", "2025-12-31"]
        assert storage.workouts.get_last().date == "2026-01-24"

    def test_get_last_empty(self, storage):
        assert storage.workouts.get_all() == []
        assert storage.workouts.get_last() is None
        assert storage.workouts.get("2026-01-20") is None

    def test_history_pairs_first_matching_log(self, storage):
        for date, weight in [("2026-01-20", 135), ("2026-01-22", 140), ("2026-01-24", 145)]:
            storage.finish_workout(make_workout(date, [bench_log(weight)]))
        storage.finish_workout(
            make_workout(
                "2026-01-26",
                [ExerciseLog(exercise="squat", sets=[SetLog(weight=225, reps=5)])],
            )
        )
        history = storage.workouts.get_history("bench-press")
        assert [w.date for w, _ in history] == ["2026-01-24", "2026-01-22", "2026-01-20"]
        assert [log.sets[0].weight for _, log in history] == [145, 140, 135]

    def test_invalid_workout_file(self, storage):
        path = storage.workouts.path_for("2026-01-20")
        with open(path, "w", encoding="utf-8") as f:
            f.write('{"id": "x", "date": "2026-1-2"}')
        with pytest.raises(SchemaValidationError):
            storage.workouts.get_all()
