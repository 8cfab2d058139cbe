from __future__ import annotations

import datetime
from typing import Dict, List, Optional

from algorithms import MathTools
from errors import ValidationError
from schemas import Exercise, ExerciseLog, SetLog, Workout, WorkoutStats
from storage import ExerciseRepository, WorkoutRepository


class StatisticsService:
    """Compute workout statistics for analysis."""

    def __init__(
        self,
        exercise_repo: ExerciseRepository,
        workout_repo: WorkoutRepository | None = None,
    ) -> None:
        self.exercises = exercise_repo
        self.workouts = workout_repo

    def _library(self) -> Dict[str, Exercise]:
        return {e.id: e for e in self.exercises.get_all()}

    def _finished(self) -> List[Workout]:
        if self.workouts is None:
            return []
        return self.workouts.get_all()

    def workout_stats(self, workout: Workout) -> WorkoutStats:
        """Return set count, volume and muscles for ``workout``.

        Per-side exercises count double towards volume. Logs whose exercise
        is no longer in the library are ignored.
        """
        library = self._library()
        total_sets = 0
        total_volume = 0.0
        muscles: Dict[str, None] = {}
        for log in workout.exercises:
            exercise = self._lookup(library, log.exercise)
            if exercise is None:
                continue
            total_sets += len(log.sets)
            total_volume += MathTools.volume(
                ((s.reps, s.weight) for s in log.sets),
                exercise.volume_multiplier,
            )
            for muscle in exercise.muscles:
                muscles.setdefault(muscle, None)
        return WorkoutStats(
            total_sets=total_sets,
            total_volume=total_volume,
            muscles_worked=list(muscles),
        )

    @staticmethod
    def _lookup(library: Dict[str, Exercise], key: str) -> Optional[Exercise]:
        if key in library:
            return library[key]
        for exercise in library.values():
            if key in exercise.aliases:
                return exercise
        return None

    @staticmethod
    def best_set(sets: List[SetLog]) -> Optional[SetLog]:
        """Return the set with the highest weight times reps."""
        return MathTools.best(sets, lambda s: s.weight * s.reps)

    @staticmethod
    def best_e1rm_set(sets: List[SetLog]) -> Optional[SetLog]:
        return MathTools.best(sets, lambda s: MathTools.epley_1rm(s.weight, s.reps))

    def personal_records(
        self,
        exercise: Optional[str] = None,
        muscle: Optional[str] = None,
    ) -> List[Dict]:
        """Return the best set for each exercise based on estimated 1RM."""
        library = self._library()
        records: Dict[str, Dict] = {}
        for workout in self._finished():
            for log in workout.exercises:
                ex = self._lookup(library, log.exercise)
                if ex is None:
                    continue
                for s in log.sets:
                    est = MathTools.epley_1rm(s.weight, s.reps)
                    current = records.get(ex.id)
                    if current is None or est > current["e1rm"]:
                        records[ex.id] = {
                            "exercise": ex.id,
                            "exerciseName": ex.name,
                            "weight": s.weight,
                            "reps": s.reps,
                            "e1rm": est,
                            "date": workout.date,
                            "workoutId": workout.id,
                        }
        result = list(records.values())
        if exercise is not None:
            target = self.exercises.require(exercise)
            result = [r for r in result if r["exercise"] == target.id]
        if muscle:
            needle = muscle.lower()
            ids = {
                e.id
                for e in library.values()
                if any(needle in m.lower() for m in e.muscles)
            }
            result = [r for r in result if r["exercise"] in ids]
        return sorted(result, key=lambda r: r["e1rm"], reverse=True)

    @staticmethod
    def period_bounds(
        period: str = "weeks",
        weeks: int = 4,
        today: Optional[datetime.date] = None,
    ) -> tuple[datetime.date, datetime.date, str]:
        """Return start, end and a label for a volume reporting period."""
        today = today or datetime.date.today()
        if period == "week":
            return today - datetime.timedelta(days=today.weekday()), today, "This week"
        if period == "month":
            return today.replace(day=1), today, "This month"
        if period != "weeks":
            raise ValidationError(f"Unknown period: {period}")
        if weeks <= 0:
            raise ValidationError("Number of weeks must be positive")
        return today - datetime.timedelta(weeks=weeks), today, f"Last {weeks} weeks"

    def volume(
        self,
        period: str = "weeks",
        weeks: int = 4,
        today: Optional[datetime.date] = None,
    ) -> Dict:
        """Aggregate sets and volume over a period by muscle and exercise."""
        start, end, label = self.period_bounds(period, weeks, today)
        library = self._library()
        workouts = [w for w in self._finished() if start <= w.calendar_date <= end]
        total_sets = 0
        total_volume = 0.0
        by_muscle: Dict[str, float] = {}
        by_exercise: Dict[str, Dict] = {}
        for workout in workouts:
            for log in workout.exercises:
                ex = self._lookup(library, log.exercise)
                if ex is None:
                    continue
                vol = MathTools.volume(
                    ((s.reps, s.weight) for s in log.sets), ex.volume_multiplier
                )
                total_sets += len(log.sets)
                total_volume += vol
                for m in ex.muscles:
                    by_muscle[m] = by_muscle.get(m, 0.0) + vol
                item = by_exercise.setdefault(
                    ex.id, {"name": ex.name, "sets": 0, "volume": 0.0}
                )
                item["sets"] += len(log.sets)
                item["volume"] += vol
        return {
            "period": label,
            "startDate": start.isoformat(),
            "endDate": end.isoformat(),
            "workouts": len(workouts),
            "totalSets": total_sets,
            "totalVolume": total_volume,
            "byMuscle": by_muscle,
            "byExercise": by_exercise,
        }

    def history(self, exercise: str, last: int = 10) -> List[tuple[Workout, ExerciseLog]]:
        """Return the most recent sessions containing ``exercise``."""
        if self.workouts is None:
            return []
        target = self.exercises.require(exercise)
        return self.workouts.get_history(target.id)[:last]

    def progression(self, exercise: str, last: int = 10) -> Dict:
        """Return per-session best set and e1RM, oldest first."""
        target = self.exercises.require(exercise)
        sessions = list(reversed(self.history(target.id, last)))
        entries = []
        for workout, log in sessions:
            best = self.best_e1rm_set(log.sets)
            if best is None:
                continue
            entries.append(
                {
                    "date": workout.date,
                    "sets": len(log.sets),
                    "bestWeight": best.weight,
                    "bestReps": best.reps,
                    "e1rm": MathTools.epley_1rm(best.weight, best.reps),
                    "totalVolume": MathTools.volume(
                        ((s.reps, s.weight) for s in log.sets),
                        target.volume_multiplier,
                    ),
                }
            )
        change = None
        if len(entries) > 1:
            change = entries[-1]["e1rm"] - entries[0]["e1rm"]
        return {"exercise": target.name, "progression": entries, "e1rmChange": change}
