import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from default_exercises import DEFAULT_EXERCISES
from errors import ValidationError
from schemas import (
    Config,
    Exercise,
    SetLog,
    Template,
    Workout,
    parse,
    slugify,
)


class TestExercise:
    def test_camel_case_on_disk(self):
        ex = Exercise.model_validate(
            {
                "id": "db-row",
                "name": "Dumbbell Row",
                "muscles": ["back"],
                "type": "compound",
                "equipment": "dumbbell",
                "weightInput": "per-side",
            }
        )
        assert ex.weight_input == "per-side"
        assert ex.volume_multiplier == 2
        doc = ex.to_document()
        assert doc["weightInput"] == "per-side"
        assert "notes" not in doc
        assert doc["aliases"] == []

    def test_defaults_are_plain_values(self):
        ex = Exercise(
            id="x", name="X", muscles=["abs"], type="isolation", equipment="other"
        )
        assert ex.weight_input == "total"
        assert f"{ex.weight_input}" == "total"
        assert ex.volume_multiplier == 1

    def test_rejects_empty_muscles_and_bad_enum(self):
        with pytest.raises(ValidationError):
            parse(
                Exercise,
                {"id": "x", "name": "X", "muscles": [], "type": "compound", "equipment": "barbell"},
            )
        with pytest.raises(ValidationError):
            parse(
                Exercise,
                {"id": "x", "name": "X", "muscles": ["neck"], "type": "compound", "equipment": "barbell"},
            )

    def test_default_library_is_valid(self):
        exercises = [parse(Exercise, item) for item in DEFAULT_EXERCISES]
        ids = [e.id for e in exercises]
        aliases = [a for e in exercises for a in e.aliases]
        assert len(set(ids)) == len(ids)
        assert len(set(aliases)) == len(aliases)
        assert not set(ids) & set(aliases)


class TestSetLog:
    def test_rir_range(self):
        assert parse(SetLog, {"weight": 100, "reps": 5, "rir": 0}).rir == 0
        with pytest.raises(ValidationError):
            parse(SetLog, {"weight": 100, "reps": 5, "rir": 11})
        with pytest.raises(ValidationError):
            parse(SetLog, {"weight": 100, "reps": 0})


class TestTemplate:
    def test_sets_must_be_positive(self):
        with pytest.raises(ValidationError):
            parse(
                Template,
                {"id": "t", "name": "T", "exercises": [{"exercise": "squat", "sets": 0, "reps": "5"}]},
            )

    def test_description_omitted_when_missing(self):
        template = parse(Template, {"id": "t", "name": "T", "exercises": []})
        assert template.to_document() == {"id": "t", "name": "T", "exercises": []}


class TestWorkout:
    def document(self, **overrides):
        data = {
            "id": "2026-01-20-freestyle",
            "date": "2026-01-20",
            "template": None,
            "startTime": "2026-01-20T10:00:00Z",
            "endTime": None,
            "exercises": [],
            "notes": [],
        }
        data.update(overrides)
        return data

    def test_round_trip_keeps_nulls(self):
        workout = parse(Workout, self.document())
        assert workout.to_document() == self.document()

    def test_stats_serialized_with_aliases(self):
        workout = parse(
            Workout,
            self.document(
                stats={"totalSets": 3, "totalVolume": 3105, "musclesWorked": ["chest"]}
            ),
        )
        assert workout.to_document()["stats"] == {
            "totalSets": 3,
            "totalVolume": 3105.0,
            "musclesWorked": ["chest"],
        }

    @pytest.mark.parametrize("date", ["2026-1-20", "20-01-2026", "2026-02-30"])
    def test_rejects_non_iso_dates(self, date):
        with pytest.raises(ValidationError):
            parse(Workout, self.document(date=date))

    def test_template_and_end_time_required(self):
        data = self.document()
        del data["endTime"]
        with pytest.raises(ValidationError):
            parse(Workout, data)


def test_config_defaults():
    assert Config().to_document() == {"units": "lbs", "dataDir": "~/.workout"}


def test_slugify():
    assert slugify("Push Day A") == "push-day-a"
    assert slugify("  Upper/Lower!! ") == "upper-lower"
