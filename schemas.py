"""Pydantic models describing every JSON document the tracker persists."""

from __future__ import annotations

import datetime
import re
from enum import Enum
from typing import Any, ClassVar, List, Optional, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    ValidationError as PydanticValidationError,
    field_validator,
    model_serializer,
)

from errors import ValidationError

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class MuscleGroup(str, Enum):
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"
    QUADS = "quads"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    ABS = "abs"
    TRAPS = "traps"
    LATS = "lats"
    REAR_DELTS = "rear-delts"
    SIDE_DELTS = "side-delts"
    FRONT_DELTS = "front-delts"


class ExerciseType(str, Enum):
    COMPOUND = "compound"
    ISOLATION = "isolation"


class Equipment(str, Enum):
    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    CABLE = "cable"
    MACHINE = "machine"
    BODYWEIGHT = "bodyweight"
    KETTLEBELL = "kettlebell"
    BAND = "band"
    OTHER = "other"


class WeightInput(str, Enum):
    TOTAL = "total"
    PER_SIDE = "per-side"


class Units(str, Enum):
    LBS = "lbs"
    KG = "kg"


class Document(BaseModel):
    """Base model for persisted documents.

    Field names are snake_case in Python and camelCase on disk. Fields listed
    in ``OMIT_IF_NONE`` are left out of the JSON when unset.
    """

    model_config = ConfigDict(
        populate_by_name=True, use_enum_values=True, validate_default=True
    )

    OMIT_IF_NONE: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def _omit_empty_optionals(self, handler: SerializerFunctionWrapHandler) -> Any:
        data = handler(self)
        if isinstance(data, dict):
            for key in self.OMIT_IF_NONE:
                if key in data and data[key] is None:
                    del data[key]
        return data

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Config(Document):
    units: Units = Units.LBS
    data_dir: str = Field(default="~/.workout", alias="dataDir")


class Exercise(Document):
    OMIT_IF_NONE: ClassVar[frozenset[str]] = frozenset({"notes"})

    id: str = Field(min_length=1)
    name: str
    aliases: List[str] = Field(default_factory=list)
    muscles: List[MuscleGroup] = Field(min_length=1)
    type: ExerciseType
    equipment: Equipment
    weight_input: WeightInput = Field(default=WeightInput.TOTAL, alias="weightInput")
    notes: Optional[str] = None

    @property
    def volume_multiplier(self) -> int:
        return 2 if self.weight_input == WeightInput.PER_SIDE.value else 1


class ExerciseUpdate(BaseModel):
    """Partial update for an exercise; only explicitly set fields apply."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    name: Optional[str] = None
    aliases: Optional[List[str]] = None
    muscles: Optional[List[MuscleGroup]] = None
    type: Optional[ExerciseType] = None
    equipment: Optional[Equipment] = None
    weight_input: Optional[WeightInput] = Field(default=None, alias="weightInput")
    notes: Optional[str] = None


class TemplateExercise(Document):
    exercise: str
    sets: int = Field(gt=0, strict=True)
    reps: str


class Template(Document):
    OMIT_IF_NONE: ClassVar[frozenset[str]] = frozenset({"description"})

    id: str = Field(min_length=1)
    name: str
    description: Optional[str] = None
    exercises: List[TemplateExercise]


class TemplateUpdate(BaseModel):
    """Partial update for a template; only explicitly set fields apply."""

    name: Optional[str] = None
    description: Optional[str] = None
    exercises: Optional[List[TemplateExercise]] = None


class SetLog(Document):
    weight: float = Field(strict=True)
    reps: int = Field(gt=0, strict=True)
    rir: Optional[int] = Field(default=None, ge=0, le=10, strict=True)


class ExerciseLog(Document):
    OMIT_IF_NONE: ClassVar[frozenset[str]] = frozenset({"notes"})

    exercise: str
    sets: List[SetLog]
    notes: Optional[str] = None


class WorkoutStats(Document):
    total_sets: int = Field(alias="totalSets", strict=True)
    total_volume: float = Field(alias="totalVolume", strict=True)
    muscles_worked: List[str] = Field(alias="musclesWorked")


class Workout(Document):
    OMIT_IF_NONE: ClassVar[frozenset[str]] = frozenset({"stats"})

    id: str
    date: str
    template: Optional[str]
    start_time: str = Field(alias="startTime")
    end_time: Optional[str] = Field(alias="endTime")
    exercises: List[ExerciseLog]
    notes: List[str] = Field(default_factory=list)
    stats: Optional[WorkoutStats] = None

    @field_validator("date")
    @classmethod
    def _iso_date(cls, value: str) -> str:
        if not ISO_DATE.match(value):
            raise ValueError("date must be a zero-padded ISO date (YYYY-MM-DD)")
        datetime.date.fromisoformat(value)
        return value

    @property
    def calendar_date(self) -> datetime.date:
        return datetime.date.fromisoformat(self.date)

    def find_log(self, exercise_id: str) -> Optional[ExerciseLog]:
        for log in self.exercises:
            if log.exercise == exercise_id:
                return log
        return None


M = TypeVar("M", bound=BaseModel)


def parse(model: Type[M], data: Any) -> M:
    """Validate ``data`` as ``model`` raising :class:`ValidationError`."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(str(e)) from e


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower())
    return slug.strip("-")
