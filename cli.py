import argparse
import datetime
import json
import logging
import os
import re
import sys
from functools import cached_property
from typing import List, Optional

from algorithms import WeightConverter
from config import APP_VERSION, YamlConfig, base_dir
from errors import NotFoundError, ValidationError, WorkoutError
from profiles import ProfileManager
from schemas import (
    Config,
    Exercise,
    ExerciseUpdate,
    Template,
    TemplateExercise,
    TemplateUpdate,
    Workout,
    parse,
    slugify,
)
from session_service import SessionService
from stats_service import StatisticsService
from storage import ExerciseRepository, Storage

logger = logging.getLogger(__name__)

EXERCISE_SPEC = re.compile(r"^([^:]+):(\d+)x(.+)$")


class CliContext:
    """Objects shared by the handlers of a single command invocation."""

    def __init__(self, data_dir: str, profile: Optional[str] = None) -> None:
        self.data_dir = data_dir
        self.requested_profile = profile
        self.profiles = ProfileManager(data_dir)

    @cached_property
    def profile(self) -> str:
        return self.profiles.resolve_profile(self.requested_profile)

    @cached_property
    def storage(self) -> Storage:
        return Storage(self.data_dir, self.profile)

    @cached_property
    def exercises(self) -> ExerciseRepository:
        return ExerciseRepository(self.data_dir)

    @cached_property
    def stats(self) -> StatisticsService:
        return StatisticsService(self.storage.exercises, self.storage.workouts)

    @cached_property
    def session(self) -> SessionService:
        return SessionService(self.storage, self.stats)

    @cached_property
    def units(self) -> str:
        return self.storage.config.get().units

    def exercise_name(self, key: str) -> str:
        exercise = self.exercises.get(key)
        return exercise.name if exercise else key


def fmt_weight(value: float) -> str:
    return f"{value:g}"


def fmt_volume(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def print_json(data) -> None:
    print(json.dumps(data, indent=2))


def split_list(text: str) -> List[str]:
    return [item.strip() for item in text.split(",") if item.strip()]


def parse_exercise_spec(spec: str) -> TemplateExercise:
    """Parse ``bench-press:3x8-12`` into a template entry."""
    match = EXERCISE_SPEC.match(spec)
    if not match:
        raise ValidationError(
            f"Invalid exercise spec: {spec}. Expected format: exercise:setsxreps"
        )
    exercise, sets, reps = match.groups()
    return parse(
        TemplateExercise,
        {"exercise": exercise.strip(), "sets": int(sets), "reps": reps.strip()},
    )


def parse_exercise_specs(ctx: CliContext, text: str) -> List[TemplateExercise]:
    entries = [parse_exercise_spec(spec) for spec in split_list(text)]
    for entry in entries:
        entry.exercise = ctx.exercises.require(entry.exercise).id
    return entries


# profile


def cmd_profile_list(ctx: CliContext, args: argparse.Namespace) -> None:
    profiles = ctx.profiles.list_profiles()
    if not profiles:
        print("No profiles found. A default profile will be created on first use.")
        return
    print("Profiles:")
    for name in profiles:
        print(f"  {name}")


def cmd_profile_create(ctx: CliContext, args: argparse.Namespace) -> None:
    ctx.profiles.create_profile(args.name)
    print(f"Created profile: {args.name}")


def cmd_profile_delete(ctx: CliContext, args: argparse.Namespace) -> None:
    ctx.profiles.delete_profile(args.name)
    print(f"Deleted profile: {args.name}")


# exercises


def cmd_exercises_list(ctx: CliContext, args: argparse.Namespace) -> None:
    exercises = ctx.exercises.get_all()
    if args.muscle:
        needle = args.muscle.lower()
        exercises = [
            e for e in exercises if any(needle in m.lower() for m in e.muscles)
        ]
    if args.type:
        exercises = [e for e in exercises if e.type == args.type]
    if args.json:
        print_json([e.to_document() for e in exercises])
        return
    if not exercises:
        print("No exercises found.")
        return
    for e in exercises:
        print(f"{e.id} - {e.name} ({e.type}, {', '.join(e.muscles)})")


def cmd_exercises_show(ctx: CliContext, args: argparse.Namespace) -> None:
    exercise = ctx.exercises.require(args.id)
    if args.json:
        print_json(exercise.to_document())
        return
    print(f"Name: {exercise.name}")
    print(f"ID: {exercise.id}")
    print(f"Type: {exercise.type}")
    print(f"Equipment: {exercise.equipment}")
    print(f"Weight input: {exercise.weight_input}")
    print(f"Muscles: {', '.join(exercise.muscles)}")
    if exercise.aliases:
        print(f"Aliases: {', '.join(exercise.aliases)}")
    if exercise.notes:
        print(f"Notes: {exercise.notes}")


def cmd_exercises_add(ctx: CliContext, args: argparse.Namespace) -> None:
    exercise = parse(
        Exercise,
        {
            "id": args.id or slugify(args.name),
            "name": args.name,
            "aliases": split_list(args.aliases) if args.aliases else [],
            "muscles": split_list(args.muscles),
            "type": args.type,
            "equipment": args.equipment,
            "weight_input": args.weight_input,
            "notes": args.notes,
        },
    )
    ctx.exercises.add(exercise)
    print(f"Added exercise: {exercise.name} ({exercise.id})")


def cmd_exercises_edit(ctx: CliContext, args: argparse.Namespace) -> None:
    exercise = ctx.exercises.require(args.id)
    changes = {}
    if args.name:
        changes["name"] = args.name
    if args.muscles:
        changes["muscles"] = split_list(args.muscles)
    if args.type:
        changes["type"] = args.type
    if args.equipment:
        changes["equipment"] = args.equipment
    if args.weight_input:
        changes["weight_input"] = args.weight_input
    if args.notes:
        changes["notes"] = args.notes
    if args.add_alias or args.remove_alias:
        aliases = list(exercise.aliases)
        if args.add_alias and args.add_alias not in aliases:
            aliases.append(args.add_alias)
        if args.remove_alias:
            aliases = [a for a in aliases if a != args.remove_alias]
        changes["aliases"] = aliases
    if not changes:
        raise ValidationError("No changes specified.")
    ctx.exercises.update(exercise.id, parse(ExerciseUpdate, changes))
    print(f"Updated exercise: {exercise.id}")


def cmd_exercises_delete(ctx: CliContext, args: argparse.Namespace) -> None:
    ctx.exercises.delete(args.id)
    print(f"Deleted exercise: {args.id}")


# templates


def cmd_templates_list(ctx: CliContext, args: argparse.Namespace) -> None:
    templates = ctx.storage.templates.get_all()
    if args.json:
        print_json([t.to_document() for t in templates])
        return
    if not templates:
        print("No templates found.")
        return
    for t in templates:
        print(f"{t.id} - {t.name} ({len(t.exercises)} exercises)")


def cmd_templates_show(ctx: CliContext, args: argparse.Namespace) -> None:
    template = ctx.storage.templates.get(args.id)
    if template is None:
        raise NotFoundError(f'Template "{args.id}" not found')
    if args.json:
        print_json(template.to_document())
        return
    print(f"Name: {template.name}")
    print(f"ID: {template.id}")
    if template.description:
        print(f"Description: {template.description}")
    print("\nExercises:")
    for e in template.exercises:
        print(f"  - {e.exercise}: {e.sets}x{e.reps}")


def cmd_templates_create(ctx: CliContext, args: argparse.Namespace) -> None:
    template = parse(
        Template,
        {
            "id": args.id or slugify(args.name),
            "name": args.name,
            "description": args.description,
            "exercises": parse_exercise_specs(ctx, args.exercises),
        },
    )
    ctx.storage.templates.add(template)
    print(f"Created template: {template.name} ({template.id})")


def cmd_templates_edit(ctx: CliContext, args: argparse.Namespace) -> None:
    changes = {}
    if args.name:
        changes["name"] = args.name
    if args.description:
        changes["description"] = args.description
    if args.exercises:
        changes["exercises"] = parse_exercise_specs(ctx, args.exercises)
    if not changes:
        raise ValidationError(
            "No changes specified. Use --name, --exercises, or --description."
        )
    ctx.storage.templates.update(args.id, parse(TemplateUpdate, changes))
    print(f"Updated template: {args.id}")


def cmd_templates_delete(ctx: CliContext, args: argparse.Namespace) -> None:
    ctx.storage.templates.delete(args.id)
    print(f"Deleted template: {args.id}")


# session


def cmd_start(ctx: CliContext, args: argparse.Namespace) -> None:
    if args.resume:
        current = ctx.session.resume()
        print(f"Resuming workout: {current.id}")
        print(f"Started: {current.start_time}")
        print(f"Exercises logged: {len(current.exercises)}")
        return
    workout = ctx.session.start(args.template, empty=args.empty)
    print(f"Started workout: {workout.id}")
    if workout.template:
        print(f"Template: {workout.template}")
        print(f"Exercises: {', '.join(log.exercise for log in workout.exercises)}")
    else:
        print('Freestyle session - add exercises with "workout log"')


def cmd_log(ctx: CliContext, args: argparse.Namespace) -> None:
    exercise, sets = ctx.session.log(args.exercise, args.weight, args.reps, args.rir)
    count = len(sets)
    reps = ", ".join(str(s.reps) for s in sets)
    print(
        f"Logged {count} set{'s' if count > 1 else ''}: {exercise.name} @ "
        f"{fmt_weight(sets[0].weight)}{ctx.units} x {reps}"
    )


def cmd_status(ctx: CliContext, args: argparse.Namespace) -> None:
    workout = ctx.storage.current.get()
    if workout is None:
        print("No active workout.")
        return
    unit = ctx.units
    print(f"Workout: {workout.id}")
    print(f"Started: {workout.start_time}")
    if workout.template:
        print(f"Template: {workout.template}")
    print("")
    if not workout.exercises:
        print("No exercises logged yet.")
        return
    print("Exercises:")
    for log in workout.exercises:
        name = ctx.exercise_name(log.exercise)
        if not log.sets:
            print(f"  {name}: (no sets)")
        else:
            sets = ", ".join(f"{fmt_weight(s.weight)}{unit}x{s.reps}" for s in log.sets)
            print(f"  {name}: {sets}")
        if log.notes:
            print(f"    Note: {log.notes}")
    print_notes(workout, "Session Notes:")


def cmd_note(ctx: CliContext, args: argparse.Namespace) -> None:
    exercise, text = ctx.session.note(args.text)
    if exercise is not None:
        print(f"Added note to {exercise.name}: {text}")
    else:
        print(f"Added session note: {text}")


def cmd_swap(ctx: CliContext, args: argparse.Namespace) -> None:
    old, new, moved = ctx.session.swap(args.old, args.new)
    print(f"Swapped {old.name} -> {new.name}")
    if moved:
        print(f"Moved {moved} set{'s' if moved > 1 else ''} to {new.name}")


def cmd_add(ctx: CliContext, args: argparse.Namespace) -> None:
    exercise = ctx.session.add(args.exercise)
    print(f"Added {exercise.name} to workout")


def cmd_undo(ctx: CliContext, args: argparse.Namespace) -> None:
    name, removed = ctx.session.undo(args.exercise)
    print(
        f"Removed set: {fmt_weight(removed.weight)}{ctx.units} x {removed.reps} "
        f"from {name}"
    )


def cmd_edit(ctx: CliContext, args: argparse.Namespace) -> None:
    reps = args.reps if args.reps is not None else args.reps_option
    _exercise, before, after = ctx.session.edit_set(
        args.exercise, args.set, weight=args.weight, reps=reps, rir=args.rir
    )
    unit = ctx.units
    print(
        f"Updated set {args.set}: {fmt_weight(before.weight)}{unit}x{before.reps} -> "
        f"{fmt_weight(after.weight)}{unit}x{after.reps}"
    )


def cmd_delete(ctx: CliContext, args: argparse.Namespace) -> None:
    exercise, removed = ctx.session.delete_set(args.exercise, args.set)
    print(
        f"Deleted set {args.set}: {fmt_weight(removed.weight)}{ctx.units} x "
        f"{removed.reps} from {exercise.name}"
    )


def cmd_done(ctx: CliContext, args: argparse.Namespace) -> None:
    workout = ctx.session.done()
    stats = workout.stats
    unit = ctx.units
    print(f"Workout complete: {workout.id}")
    print(f"Duration: {duration_minutes(workout)} minutes")
    print(f"Total sets: {stats.total_sets}")
    print(f"Total volume: {fmt_volume(stats.total_volume)}{unit}")
    print(f"Muscles worked: {', '.join(stats.muscles_worked)}")


def cmd_cancel(ctx: CliContext, args: argparse.Namespace) -> None:
    workout = ctx.session.cancel()
    print(f"Cancelled workout: {workout.id}")


def duration_minutes(workout: Workout) -> int:
    if not workout.end_time:
        return 0
    start = datetime.datetime.fromisoformat(workout.start_time)
    end = datetime.datetime.fromisoformat(workout.end_time)
    return round((end - start).total_seconds() / 60)


def print_notes(workout: Workout, title: str = "Notes:") -> None:
    if not workout.notes:
        return
    print("")
    print(title)
    for note in workout.notes:
        print(f"  - {note}")


# history and analytics


def cmd_last(ctx: CliContext, args: argparse.Namespace) -> None:
    workout = ctx.storage.workouts.get_last()
    if workout is None:
        print("No workouts found.")
        return
    if args.json:
        print_json(workout.to_document())
        return
    unit = ctx.units
    print(f"Workout: {workout.id}")
    print(f"Date: {workout.date}")
    if workout.template:
        print(f"Template: {workout.template}")
    if workout.stats:
        print(
            f"Sets: {workout.stats.total_sets} | "
            f"Volume: {fmt_volume(workout.stats.total_volume)}{unit}"
        )
    print("")
    if args.full:
        print("Exercises:")
    for log in workout.exercises:
        name = ctx.exercise_name(log.exercise)
        if args.full:
            print(f"  {name}:")
            for s in log.sets:
                rir = f" @{s.rir}RIR" if s.rir is not None else ""
                print(f"    {fmt_weight(s.weight)}{unit} x {s.reps}{rir}")
            if log.notes:
                print(f"    Note: {log.notes}")
            continue
        best = StatisticsService.best_set(log.sets)
        if best is not None:
            print(
                f"  {name}: {fmt_weight(best.weight)}{unit} x {best.reps} "
                f"({len(log.sets)} sets)"
            )
    print_notes(workout)


def cmd_history(ctx: CliContext, args: argparse.Namespace) -> None:
    exercise = ctx.storage.exercises.require(args.exercise)
    history = ctx.stats.history(exercise.id, args.last)
    if args.json:
        print_json(
            [{"workout": w.to_document(), "log": log.to_document()} for w, log in history]
        )
        return
    if not history:
        print(f"No history for {exercise.name}.")
        return
    unit = ctx.units
    print(f"History for {exercise.name} (last {len(history)} sessions):")
    print("")
    for workout, log in history:
        best = StatisticsService.best_set(log.sets)
        if best is None:
            continue
        sets = ", ".join(f"{fmt_weight(s.weight)}x{s.reps}" for s in log.sets)
        print(
            f"{workout.date}: {sets} (best: {fmt_weight(best.weight)}{unit} x {best.reps})"
        )


def cmd_pr(ctx: CliContext, args: argparse.Namespace) -> None:
    records = ctx.stats.personal_records(args.exercise, args.muscle)
    if args.json:
        print_json(records)
        return
    if not records:
        print("No personal records found.")
        return
    unit = ctx.units
    print("Personal Records:")
    print("")
    for r in records:
        print(
            f"{r['exerciseName']}: {fmt_weight(r['weight'])}{unit} x {r['reps']} "
            f"(est. 1RM: {fmt_weight(r['e1rm'])}{unit}) - {r['date']}"
        )


def cmd_volume(ctx: CliContext, args: argparse.Namespace) -> None:
    period = "week" if args.week else "month" if args.month else "weeks"
    report = ctx.stats.volume(period, args.last_weeks)
    if args.json:
        print_json(report)
        return
    if not report["workouts"]:
        print(f"No workouts in period: {report['period']}")
        return
    unit = ctx.units
    print(f"Volume Analysis: {report['period']}")
    print(f"({report['startDate']} to {report['endDate']})")
    print("")
    print(f"Workouts: {report['workouts']}")
    print(f"Total sets: {report['totalSets']}")
    print(f"Total volume: {fmt_volume(report['totalVolume'])}{unit}")
    print("")
    muscles = sorted(report["byMuscle"].items(), key=lambda kv: kv[1], reverse=True)
    if args.by == "exercise":
        print("By Exercise:")
        items = sorted(
            report["byExercise"].values(), key=lambda d: d["volume"], reverse=True
        )
        for item in items:
            print(
                f"  {item['name']}: {item['sets']} sets, "
                f"{fmt_volume(item['volume'])}{unit}"
            )
        return
    if args.by == "muscle":
        print("By Muscle Group:")
    else:
        print("Top Muscles:")
        muscles = muscles[:5]
    for muscle, vol in muscles:
        print(f"  {muscle}: {fmt_volume(vol)}{unit}")


def cmd_progression(ctx: CliContext, args: argparse.Namespace) -> None:
    report = ctx.stats.progression(args.exercise, args.last)
    if args.json:
        print_json(report)
        return
    entries = report["progression"]
    if not entries:
        print(f"No history for {report['exercise']}.")
        return
    unit = ctx.units
    print(f"Progression for {report['exercise']}:")
    print("")
    change = report["e1rmChange"]
    if change is not None:
        sign = "+" if change >= 0 else ""
        print(
            f"Est. 1RM change: {sign}{fmt_weight(change)}{unit} "
            f"({fmt_weight(entries[0]['e1rm'])} -> {fmt_weight(entries[-1]['e1rm'])})"
        )
        print("")
    print("Date       | Best Set         | Est 1RM | Volume")
    print("-----------|------------------|---------|--------")
    for e in entries:
        best = f"{fmt_weight(e['bestWeight'])}{unit} x {e['bestReps']}".ljust(16)
        e1rm = f"{fmt_weight(e['e1rm'])}{unit}".ljust(7)
        print(f"{e['date']} | {best} | {e1rm} | {fmt_volume(e['totalVolume'])}{unit}")


# configuration


def cmd_config_show(ctx: CliContext, args: argparse.Namespace) -> None:
    config = ctx.storage.config.get()
    print(f"Profile: {ctx.profile}")
    print(f"Units: {config.units}")
    print(f"Data dir: {config.data_dir}")


def cmd_config_set(ctx: CliContext, args: argparse.Namespace) -> None:
    config = ctx.storage.config.get()
    updated = parse(Config, {**config.model_dump(), args.key: args.value})
    ctx.storage.config.save(updated)
    print(f"Set {args.key} = {args.value}")


def cmd_convert(ctx: CliContext, args: argparse.Namespace) -> None:
    source, target = ("kg", "lbs") if args.unit == "kg" else ("lbs", "kg")
    converted = WeightConverter.convert(args.weight, source, target)
    other = "lb" if target == "lbs" else "kg"
    print(f"{args.weight} {args.unit} = {converted} {other}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workout",
        description="CLI for tracking workouts, managing exercises, and querying training history",
    )
    parser.add_argument("--version", action="version", version=APP_VERSION)
    parser.add_argument("-p", "--profile", help="Profile to operate on")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    prof = sub.add_parser("profile", help="Manage user profiles")
    prof_sub = prof.add_subparsers(dest="action", required=True)
    prof_sub.add_parser("list").set_defaults(func=cmd_profile_list)
    p = prof_sub.add_parser("create")
    p.add_argument("name")
    p.set_defaults(func=cmd_profile_create)
    p = prof_sub.add_parser("delete")
    p.add_argument("name")
    p.set_defaults(func=cmd_profile_delete)

    ex = sub.add_parser("exercises", help="Manage exercise library")
    ex_sub = ex.add_subparsers(dest="action", required=True)
    p = ex_sub.add_parser("list")
    p.add_argument("-m", "--muscle")
    p.add_argument("-t", "--type", choices=["compound", "isolation"])
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_exercises_list)
    p = ex_sub.add_parser("show")
    p.add_argument("id")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_exercises_show)
    p = ex_sub.add_parser("add")
    p.add_argument("name")
    p.add_argument("--muscles", required=True)
    p.add_argument("--type", required=True)
    p.add_argument("--equipment", required=True)
    p.add_argument("--id")
    p.add_argument("--aliases")
    p.add_argument("--weight-input", default="total")
    p.add_argument("--notes")
    p.set_defaults(func=cmd_exercises_add)
    p = ex_sub.add_parser("edit")
    p.add_argument("id")
    p.add_argument("--name")
    p.add_argument("--muscles")
    p.add_argument("--type")
    p.add_argument("--equipment")
    p.add_argument("--add-alias")
    p.add_argument("--remove-alias")
    p.add_argument("--weight-input")
    p.add_argument("--notes")
    p.set_defaults(func=cmd_exercises_edit)
    p = ex_sub.add_parser("delete")
    p.add_argument("id")
    p.set_defaults(func=cmd_exercises_delete)

    tpl = sub.add_parser("templates", help="Manage workout templates")
    tpl_sub = tpl.add_subparsers(dest="action", required=True)
    p = tpl_sub.add_parser("list")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_templates_list)
    p = tpl_sub.add_parser("show")
    p.add_argument("id")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_templates_show)
    p = tpl_sub.add_parser("create")
    p.add_argument("name")
    p.add_argument("-e", "--exercises", required=True)
    p.add_argument("--id")
    p.add_argument("-d", "--description")
    p.set_defaults(func=cmd_templates_create)
    p = tpl_sub.add_parser("edit")
    p.add_argument("id")
    p.add_argument("-n", "--name")
    p.add_argument("-e", "--exercises")
    p.add_argument("-d", "--description")
    p.set_defaults(func=cmd_templates_edit)
    p = tpl_sub.add_parser("delete")
    p.add_argument("id")
    p.set_defaults(func=cmd_templates_delete)

    p = sub.add_parser("start", help="Start a new workout session")
    p.add_argument("template", nargs="?")
    p.add_argument("--empty", action="store_true")
    p.add_argument("--continue", dest="resume", action="store_true")
    p.set_defaults(func=cmd_start)

    p = sub.add_parser("log", help="Log one or more sets")
    p.add_argument("exercise")
    p.add_argument("weight", help="Weight, or +N/-N relative to the last set")
    p.add_argument("reps", help="Reps, comma separated for several sets")
    p.add_argument("--rir", type=int)
    p.set_defaults(func=cmd_log)

    sub.add_parser("status", help="Show current workout").set_defaults(func=cmd_status)

    p = sub.add_parser("note", help="Add a note to the current workout")
    p.add_argument("text", nargs="+")
    p.set_defaults(func=cmd_note)

    p = sub.add_parser("swap", help="Swap an exercise in the current workout")
    p.add_argument("old")
    p.add_argument("new")
    p.set_defaults(func=cmd_swap)

    p = sub.add_parser("add", help="Add an exercise to the current workout")
    p.add_argument("exercise")
    p.set_defaults(func=cmd_add)

    p = sub.add_parser("undo", help="Remove the last logged set")
    p.add_argument("exercise", nargs="?")
    p.set_defaults(func=cmd_undo)

    p = sub.add_parser("edit", help="Edit a logged set")
    p.add_argument("exercise")
    p.add_argument("set", type=int)
    p.add_argument("weight", nargs="?", type=float)
    p.add_argument("reps", nargs="?", type=int)
    p.add_argument("--reps", dest="reps_option", type=int)
    p.add_argument("--rir", type=int)
    p.set_defaults(func=cmd_edit)

    p = sub.add_parser("delete", help="Delete a logged set")
    p.add_argument("exercise")
    p.add_argument("set", type=int)
    p.set_defaults(func=cmd_delete)

    sub.add_parser("done", help="Finish current workout").set_defaults(func=cmd_done)
    sub.add_parser("cancel", help="Cancel current workout").set_defaults(func=cmd_cancel)

    p = sub.add_parser("last", help="Show last workout")
    p.add_argument("--full", action="store_true")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_last)

    p = sub.add_parser("history", help="Show exercise history")
    p.add_argument("exercise")
    p.add_argument("-n", "--last", type=int, default=10)
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_history)

    p = sub.add_parser("pr", help="Show personal records")
    p.add_argument("exercise", nargs="?")
    p.add_argument("-m", "--muscle")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_pr)

    p = sub.add_parser("volume", help="Analyze training volume")
    p.add_argument("-w", "--week", action="store_true")
    p.add_argument("-m", "--month", action="store_true")
    p.add_argument("--last-weeks", type=int, default=4)
    p.add_argument("--by", choices=["muscle", "exercise"])
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_volume)

    p = sub.add_parser("progression", help="Show progression for an exercise")
    p.add_argument("exercise")
    p.add_argument("-n", "--last", type=int, default=10)
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_progression)

    cfg = sub.add_parser("config", help="Show or change profile preferences")
    cfg_sub = cfg.add_subparsers(dest="action", required=True)
    cfg_sub.add_parser("show").set_defaults(func=cmd_config_show)
    p = cfg_sub.add_parser("set")
    p.add_argument("key", choices=["units"])
    p.add_argument("value", choices=["lbs", "kg"])
    p.set_defaults(func=cmd_config_set)

    p = sub.add_parser("convert", help="Convert a weight between kg and lb")
    p.add_argument("--weight", type=float, required=True)
    p.add_argument("--unit", choices=["kg", "lb"], required=True)
    p.set_defaults(func=cmd_convert)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = YamlConfig().settings()
        level = "DEBUG" if args.verbose else settings.log_level
        logging.basicConfig(
            level=getattr(logging, level),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        profile = (
            args.profile
            or os.environ.get("WORKOUT_PROFILE")
            or settings.default_profile
        )
        ctx = CliContext(base_dir(), profile)
        args.func(ctx, args)
    except WorkoutError as e:
        logger.debug("Command failed", exc_info=True)
        print(str(e), file=sys.stderr)
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
