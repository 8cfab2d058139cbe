from __future__ import annotations

import datetime
from typing import List, Optional, Sequence

from errors import (
    ActiveSessionError,
    NoActiveSessionError,
    NotFoundError,
    ValidationError,
)
from schemas import Exercise, ExerciseLog, SetLog, Workout, parse
from stats_service import StatisticsService
from storage import Storage


def workout_id(date: str, template: Optional[str]) -> str:
    return f"{date}-{template or 'freestyle'}"


def parse_reps(reps: int | str) -> List[int]:
    """Parse ``8`` or ``"8,8,7"`` into a list of rep counts."""
    if isinstance(reps, int):
        return [reps]
    values = []
    for part in str(reps).split(","):
        part = part.strip()
        try:
            values.append(int(part))
        except ValueError:
            raise ValidationError(f"Invalid reps: {reps}") from None
    return values


class SessionService:
    """Drive the lifecycle of the current workout for one profile."""

    def __init__(
        self, storage: Storage, stats: StatisticsService | None = None
    ) -> None:
        self.storage = storage
        self.stats = stats or StatisticsService(storage.exercises, storage.workouts)

    def current(self) -> Workout:
        workout = self.storage.current.get()
        if workout is None:
            raise NoActiveSessionError(
                'No active workout. Start one with "workout start".'
            )
        return workout

    def resume(self) -> Workout:
        workout = self.storage.current.get()
        if workout is None:
            raise NoActiveSessionError("No active workout to continue.")
        return workout

    def start(
        self,
        template_id: Optional[str] = None,
        empty: bool = False,
        now: Optional[datetime.datetime] = None,
    ) -> Workout:
        existing = self.storage.current.get()
        if existing is not None:
            raise ActiveSessionError(
                f"Already have an active workout: {existing.id}. "
                'Use "workout done" to finish or "workout cancel" to abort.'
            )
        now = now or datetime.datetime.now().astimezone()
        date = now.date().isoformat()
        template = None if empty else template_id
        exercises: List[ExerciseLog] = []
        if template is not None:
            found = self.storage.templates.get(template)
            if found is None:
                raise NotFoundError(f'Template "{template}" not found')
            exercises = [
                ExerciseLog(exercise=e.exercise, sets=[]) for e in found.exercises
            ]
        workout = Workout(
            id=workout_id(date, template),
            date=date,
            template=template,
            start_time=now.isoformat(),
            end_time=None,
            exercises=exercises,
        )
        self.storage.current.save(workout)
        return workout

    def _ensure_log(self, workout: Workout, exercise: Exercise) -> ExerciseLog:
        log = workout.find_log(exercise.id)
        if log is None:
            log = ExerciseLog(exercise=exercise.id, sets=[])
            workout.exercises.append(log)
        return log

    def _require_log(self, workout: Workout, exercise: Exercise) -> ExerciseLog:
        log = workout.find_log(exercise.id)
        if log is None:
            raise NotFoundError(
                f'Exercise "{exercise.name}" is not in the current workout.'
            )
        return log

    def last_weight(self, exercise: Exercise, workout: Optional[Workout] = None) -> float:
        """Return the weight of the most recently logged set of ``exercise``."""
        if workout is not None:
            log = workout.find_log(exercise.id)
            if log is not None and log.sets:
                return log.sets[-1].weight
        history = self.storage.workouts.get_history(exercise.id)
        if not history:
            raise NotFoundError(
                f'No history for "{exercise.id}" to calculate relative weight.'
            )
        last_log = history[0][1]
        if not last_log.sets:
            raise NotFoundError(f'No previous sets for "{exercise.id}".')
        return last_log.sets[-1].weight

    def resolve_weight(
        self, exercise: Exercise, weight: str | float, workout: Optional[Workout] = None
    ) -> float:
        """Turn ``"135"``, ``"+5"`` or ``"-10"`` into an absolute weight."""
        if not isinstance(weight, str):
            return float(weight)
        text = weight.strip()
        try:
            value = float(text)
        except ValueError:
            raise ValidationError(f"Invalid weight: {weight}") from None
        if text.startswith(("+", "-")):
            return self.last_weight(exercise, workout) + value
        return value

    def log(
        self,
        exercise: str,
        weight: str | float,
        reps: int | str,
        rir: Optional[int] = None,
    ) -> tuple[Exercise, List[SetLog]]:
        workout = self.current()
        ex = self.storage.exercises.require(exercise)
        value = self.resolve_weight(ex, weight, workout)
        new_sets = [
            parse(SetLog, {"weight": value, "reps": r, "rir": rir})
            for r in parse_reps(reps)
        ]
        self._ensure_log(workout, ex).sets.extend(new_sets)
        self.storage.current.save(workout)
        return ex, new_sets

    def note(self, text_parts: Sequence[str]) -> tuple[Optional[Exercise], str]:
        """Attach a note to an exercise when the first word names one."""
        if not text_parts:
            raise ValidationError("Note text is required")
        workout = self.current()
        ex = self.storage.exercises.get(text_parts[0])
        if ex is not None and len(text_parts) > 1:
            text = " ".join(text_parts[1:])
            log = self._ensure_log(workout, ex)
            log.notes = f"{log.notes}; {text}" if log.notes else text
        else:
            ex = None
            text = " ".join(text_parts)
            workout.notes.append(text)
        self.storage.current.save(workout)
        return ex, text

    def swap(self, old: str, new: str) -> tuple[Exercise, Exercise, int]:
        workout = self.current()
        old_ex = self.storage.exercises.require(old)
        new_ex = self.storage.exercises.require(new)
        log = self._require_log(workout, old_ex)
        if workout.find_log(new_ex.id) is not None:
            raise ValidationError(
                f'Exercise "{new_ex.name}" is already in the current workout.'
            )
        log.exercise = new_ex.id
        self.storage.current.save(workout)
        return old_ex, new_ex, len(log.sets)

    def add(self, exercise: str) -> Exercise:
        workout = self.current()
        ex = self.storage.exercises.require(exercise)
        if workout.find_log(ex.id) is not None:
            raise ValidationError(
                f'Exercise "{ex.name}" is already in the current workout.'
            )
        workout.exercises.append(ExerciseLog(exercise=ex.id, sets=[]))
        self.storage.current.save(workout)
        return ex

    def undo(self, exercise: Optional[str] = None) -> tuple[str, SetLog]:
        """Remove the last set of ``exercise`` or of the latest exercise with sets."""
        workout = self.current()
        if exercise is not None:
            ex = self.storage.exercises.require(exercise)
            log = self._require_log(workout, ex)
            name = ex.name
        else:
            candidates = [log for log in workout.exercises if log.sets]
            if not candidates:
                raise ValidationError("No sets to undo.")
            log = candidates[-1]
            found = self.storage.exercises.get(log.exercise)
            name = found.name if found else log.exercise
        if not log.sets:
            raise ValidationError(f"No sets to undo for {name}.")
        removed = log.sets.pop()
        self.storage.current.save(workout)
        return name, removed

    def _set_index(self, ex: Exercise, log: ExerciseLog, set_number: int) -> int:
        index = set_number - 1
        if index < 0 or index >= len(log.sets):
            raise ValidationError(
                f"Invalid set number. {ex.name} has {len(log.sets)} set(s)."
            )
        return index

    def edit_set(
        self,
        exercise: str,
        set_number: int,
        weight: Optional[float] = None,
        reps: Optional[int] = None,
        rir: Optional[int] = None,
    ) -> tuple[Exercise, SetLog, SetLog]:
        workout = self.current()
        ex = self.storage.exercises.require(exercise)
        log = self._require_log(workout, ex)
        index = self._set_index(ex, log, set_number)
        before = log.sets[index]
        data = before.model_dump()
        if weight is not None:
            data["weight"] = weight
        if reps is not None:
            data["reps"] = reps
        if rir is not None:
            data["rir"] = rir
        after = parse(SetLog, data)
        log.sets[index] = after
        self.storage.current.save(workout)
        return ex, before, after

    def delete_set(self, exercise: str, set_number: int) -> tuple[Exercise, SetLog]:
        workout = self.current()
        ex = self.storage.exercises.require(exercise)
        log = self._require_log(workout, ex)
        index = self._set_index(ex, log, set_number)
        removed = log.sets.pop(index)
        self.storage.current.save(workout)
        return ex, removed

    def done(self, now: Optional[datetime.datetime] = None) -> Workout:
        workout = self.storage.current.get()
        if workout is None:
            raise NoActiveSessionError("No active workout to finish.")
        now = now or datetime.datetime.now().astimezone()
        workout.end_time = now.isoformat()
        workout.stats = self.stats.workout_stats(workout)
        self.storage.finish_workout(workout)
        return workout

    def cancel(self) -> Workout:
        workout = self.storage.current.get()
        if workout is None:
            raise NoActiveSessionError("No active workout to cancel.")
        self.storage.current.clear()
        return workout
