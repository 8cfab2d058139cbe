import json
import logging
import os
import tempfile
from typing import Any, Callable, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from default_exercises import DEFAULT_EXERCISES
from errors import (
    AlreadyExistsError,
    NotFoundError,
    SchemaValidationError,
    ValidationError,
)
from schemas import (
    Config,
    Document,
    Exercise,
    ExerciseLog,
    ExerciseUpdate,
    Template,
    TemplateUpdate,
    Workout,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class JsonRepository:
    """Base repository providing validated JSON file access."""

    def __init__(self, root: str) -> None:
        self.root = root

    def _ensure_dir(self, path: str) -> None:
        os.makedirs(os.path.dirname(path), exist_ok=True)

    def _read_json(self, path: str) -> Any:
        with open(path, "r", encoding="utf-8") as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                raise SchemaValidationError(path, str(e)) from e

    def _write_json(self, path: str, data: Any) -> None:
        self._ensure_dir(path)
        fd, tmp_path = tempfile.mkstemp(
            dir=os.path.dirname(path), prefix=".", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.debug("Wrote %s", path)

    def _validate(self, model: Type[M], data: Any, path: str) -> M:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise SchemaValidationError(path, str(e)) from e

    def _load_one(self, path: str, model: Type[M]) -> M:
        return self._validate(model, self._read_json(path), path)

    def _load_list(
        self, path: str, model: Type[M], default: Callable[[], list]
    ) -> List[M]:
        self._ensure_dir(path)
        if not os.path.exists(path):
            seed = default()
            items = [self._validate(model, item, path) for item in seed]
            self._save_list(path, items)
            return items
        raw = self._read_json(path)
        if not isinstance(raw, list):
            raise SchemaValidationError(path, "expected a JSON array")
        return [self._validate(model, item, path) for item in raw]

    def _save_list(self, path: str, items: List[Document]) -> None:
        self._write_json(path, [item.to_document() for item in items])


class ConfigRepository(JsonRepository):
    """Per-profile preferences stored in ``config.json``."""

    @property
    def path(self) -> str:
        return os.path.join(self.root, "config.json")

    def get(self) -> Config:
        self._ensure_dir(self.path)
        if not os.path.exists(self.path):
            config = Config()
            self.save(config)
            return config
        return self._load_one(self.path, Config)

    def save(self, config: Config) -> None:
        self._write_json(self.path, config.to_document())


class ExerciseRepository(JsonRepository):
    """Exercise library shared by every profile."""

    @property
    def path(self) -> str:
        return os.path.join(self.root, "exercises.json")

    def get_all(self) -> List[Exercise]:
        return self._load_list(self.path, Exercise, lambda: list(DEFAULT_EXERCISES))

    def save_all(self, exercises: List[Exercise]) -> None:
        self._save_list(self.path, exercises)

    def get(self, key: str) -> Optional[Exercise]:
        """Look up an exercise by id, falling back to its aliases."""
        exercises = self.get_all()
        for exercise in exercises:
            if exercise.id == key:
                return exercise
        for exercise in exercises:
            if key in exercise.aliases:
                return exercise
        return None

    def require(self, key: str) -> Exercise:
        exercise = self.get(key)
        if exercise is None:
            raise NotFoundError(f'Exercise "{key}" not found')
        return exercise

    def add(self, exercise: Exercise) -> None:
        exercises = self.get_all()
        if any(e.id == exercise.id for e in exercises):
            raise AlreadyExistsError(f'Exercise "{exercise.id}" already exists')
        self._check_aliases(exercise, exercises)
        exercises.append(exercise)
        self.save_all(exercises)
        logger.info("Added exercise %s", exercise.id)

    def update(self, exercise_id: str, changes: ExerciseUpdate) -> Exercise:
        exercises = self.get_all()
        index = self._index_of(exercises, exercise_id)
        merged = {
            **exercises[index].model_dump(),
            **changes.model_dump(exclude_unset=True),
        }
        try:
            updated = Exercise.model_validate(merged)
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e
        others = exercises[:index] + exercises[index + 1 :]
        self._check_aliases(updated, others)
        exercises[index] = updated
        self.save_all(exercises)
        return updated

    def delete(self, exercise_id: str) -> None:
        exercises = self.get_all()
        index = self._index_of(exercises, exercise_id)
        del exercises[index]
        self.save_all(exercises)
        logger.info("Deleted exercise %s", exercise_id)

    @staticmethod
    def _index_of(exercises: List[Exercise], exercise_id: str) -> int:
        for index, exercise in enumerate(exercises):
            if exercise.id == exercise_id:
                return index
        raise NotFoundError(f'Exercise "{exercise_id}" not found')

    @staticmethod
    def _check_aliases(exercise: Exercise, others: List[Exercise]) -> None:
        # An alias may never shadow another exercise's id or alias.
        taken = {}
        for other in others:
            taken[other.id] = other.id
            for alias in other.aliases:
                taken[alias] = other.id
        for alias in exercise.aliases:
            if alias in taken:
                raise AlreadyExistsError(
                    f'Alias "{alias}" is already used by exercise "{taken[alias]}"'
                )
        for other in others:
            if exercise.id in other.aliases:
                raise AlreadyExistsError(
                    f'Id "{exercise.id}" is already an alias of exercise "{other.id}"'
                )


class TemplateRepository(JsonRepository):
    """Workout templates belonging to one profile."""

    @property
    def path(self) -> str:
        return os.path.join(self.root, "templates.json")

    def get_all(self) -> List[Template]:
        return self._load_list(self.path, Template, list)

    def save_all(self, templates: List[Template]) -> None:
        self._save_list(self.path, templates)

    def get(self, template_id: str) -> Optional[Template]:
        for template in self.get_all():
            if template.id == template_id:
                return template
        return None

    def add(self, template: Template) -> None:
        templates = self.get_all()
        if any(t.id == template.id for t in templates):
            raise AlreadyExistsError(f'Template "{template.id}" already exists')
        templates.append(template)
        self.save_all(templates)

    def update(self, template_id: str, changes: TemplateUpdate) -> Template:
        templates = self.get_all()
        index = self._index_of(templates, template_id)
        merged = {
            **templates[index].model_dump(),
            **changes.model_dump(exclude_unset=True),
        }
        try:
            updated = Template.model_validate(merged)
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e
        templates[index] = updated
        self.save_all(templates)
        return updated

    def delete(self, template_id: str) -> None:
        templates = self.get_all()
        index = self._index_of(templates, template_id)
        del templates[index]
        self.save_all(templates)

    @staticmethod
    def _index_of(templates: List[Template], template_id: str) -> int:
        for index, template in enumerate(templates):
            if template.id == template_id:
                return index
        raise NotFoundError(f'Template "{template_id}" not found')


class CurrentWorkoutRepository(JsonRepository):
    """The single in-progress workout of a profile."""

    @property
    def path(self) -> str:
        return os.path.join(self.root, "current.json")

    def get(self) -> Optional[Workout]:
        if not os.path.exists(self.path):
            return None
        return self._load_one(self.path, Workout)

    def save(self, workout: Workout) -> None:
        self._write_json(self.path, workout.to_document())

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
            logger.debug("Removed %s", self.path)


class WorkoutRepository(JsonRepository):
    """Finished workouts keyed by date."""

    @property
    def directory(self) -> str:
        return os.path.join(self.root, "workouts")

    def path_for(self, date: str) -> str:
        return os.path.join(self.directory, f"{date}.json")

    def save(self, workout: Workout) -> None:
        path = self.path_for(workout.date)
        if os.path.exists(path):
            logger.warning("Overwriting finished workout for %s", workout.date)
        self._write_json(path, workout.to_document())

    def get(self, date: str) -> Optional[Workout]:
        path = self.path_for(date)
        if not os.path.exists(path):
            return None
        return self._load_one(path, Workout)

    def get_all(self) -> List[Workout]:
        """Return every finished workout, most recent date first."""
        os.makedirs(self.directory, exist_ok=True)
        workouts = [
            self._load_one(os.path.join(self.directory, name), Workout)
            for name in os.listdir(self.directory)
            if name.endswith(".json") and not name.startswith(".")
        ]
        workouts.sort(key=lambda w: w.calendar_date, reverse=True)
        return workouts

    def get_last(self) -> Optional[Workout]:
        workouts = self.get_all()
        return workouts[0] if workouts else None

    def get_history(self, exercise_id: str) -> List[Tuple[Workout, ExerciseLog]]:
        history = []
        for workout in self.get_all():
            log = workout.find_log(exercise_id)
            if log is not None:
                history.append((workout, log))
        return history


class Storage:
    """Bundle of repositories scoped to one profile."""

    def __init__(self, base_dir: str, profile: str) -> None:
        self.base_dir = base_dir
        self.profile = profile
        self.profile_dir = os.path.join(base_dir, "profiles", profile)
        self.config = ConfigRepository(self.profile_dir)
        self.exercises = ExerciseRepository(base_dir)
        self.templates = TemplateRepository(self.profile_dir)
        self.current = CurrentWorkoutRepository(self.profile_dir)
        self.workouts = WorkoutRepository(self.profile_dir)

    def finish_workout(self, workout: Workout) -> None:
        """Persist ``workout`` as finished and clear the current session."""
        self.workouts.save(workout)
        self.current.clear()
        logger.info("Finished workout %s for profile %s", workout.id, self.profile)
