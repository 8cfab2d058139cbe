"""Built-in exercise library written on first use."""

DEFAULT_EXERCISES: list[dict] = [
    {
        "id": "bench-press",
        "name": "Bench Press",
        "aliases": ["bench", "flat-bench", "bb-bench"],
        "muscles": ["chest", "triceps", "front-delts"],
        "type": "compound",
        "equipment": "barbell",
    },
    {
        "id": "incline-bench-press",
        "name": "Incline Bench Press",
        "aliases": ["incline-bench"],
        "muscles": ["chest", "front-delts", "triceps"],
        "type": "compound",
        "equipment": "barbell",
    },
    {
        "id": "dumbbell-bench-press",
        "name": "Dumbbell Bench Press",
        "aliases": ["db-bench"],
        "muscles": ["chest", "triceps", "front-delts"],
        "type": "compound",
        "equipment": "dumbbell",
        "weightInput": "per-side",
    },
    {
        "id": "overhead-press",
        "name": "Overhead Press",
        "aliases": ["ohp", "military-press"],
        "muscles": ["front-delts", "side-delts", "triceps"],
        "type": "compound",
        "equipment": "barbell",
    },
    {
        "id": "squat",
        "name": "Squat",
        "aliases": ["back-squat", "bb-squat"],
        "muscles": ["quads", "glutes", "hamstrings"],
        "type": "compound",
        "equipment": "barbell",
    },
    {
        "id": "front-squat",
        "name": "Front Squat",
        "aliases": [],
        "muscles": ["quads", "glutes", "abs"],
        "type": "compound",
        "equipment": "barbell",
    },
    {
        "id": "deadlift",
        "name": "Deadlift",
        "aliases": ["dl", "conventional-deadlift"],
        "muscles": ["hamstrings", "glutes", "back", "traps"],
        "type": "compound",
        "equipment": "barbell",
    },
    {
        "id": "romanian-deadlift",
        "name": "Romanian Deadlift",
        "aliases": ["rdl"],
        "muscles": ["hamstrings", "glutes"],
        "type": "compound",
        "equipment": "barbell",
    },
    {
        "id": "barbell-row",
        "name": "Barbell Row",
        "aliases": ["bb-row", "bent-over-row"],
        "muscles": ["back", "lats", "rear-delts", "biceps"],
        "type": "compound",
        "equipment": "barbell",
    },
    {
        "id": "pull-up",
        "name": "Pull-up",
        "aliases": ["pullup", "chin-up"],
        "muscles": ["lats", "back", "biceps"],
        "type": "compound",
        "equipment": "bodyweight",
    },
    {
        "id": "lat-pulldown",
        "name": "Lat Pulldown",
        "aliases": ["pulldown"],
        "muscles": ["lats", "back", "biceps"],
        "type": "compound",
        "equipment": "cable",
    },
    {
        "id": "cable-row",
        "name": "Seated Cable Row",
        "aliases": ["seated-row"],
        "muscles": ["back", "lats", "rear-delts"],
        "type": "compound",
        "equipment": "cable",
    },
    {
        "id": "dip",
        "name": "Dip",
        "aliases": ["dips"],
        "muscles": ["chest", "triceps", "front-delts"],
        "type": "compound",
        "equipment": "bodyweight",
    },
    {
        "id": "leg-press",
        "name": "Leg Press",
        "aliases": [],
        "muscles": ["quads", "glutes"],
        "type": "compound",
        "equipment": "machine",
    },
    {
        "id": "bicep-curl",
        "name": "Bicep Curl",
        "aliases": ["curl", "db-curl"],
        "muscles": ["biceps", "forearms"],
        "type": "isolation",
        "equipment": "dumbbell",
    },
    {
        "id": "tricep-pushdown",
        "name": "Tricep Pushdown",
        "aliases": ["pushdown"],
        "muscles": ["triceps"],
        "type": "isolation",
        "equipment": "cable",
    },
    {
        "id": "lateral-raise",
        "name": "Lateral Raise",
        "aliases": ["side-raise", "lat-raise"],
        "muscles": ["side-delts"],
        "type": "isolation",
        "equipment": "dumbbell",
    },
    {
        "id": "face-pull",
        "name": "Face Pull",
        "aliases": [],
        "muscles": ["rear-delts", "traps"],
        "type": "isolation",
        "equipment": "cable",
    },
    {
        "id": "leg-curl",
        "name": "Leg Curl",
        "aliases": ["hamstring-curl"],
        "muscles": ["hamstrings"],
        "type": "isolation",
        "equipment": "machine",
    },
    {
        "id": "leg-extension",
        "name": "Leg Extension",
        "aliases": [],
        "muscles": ["quads"],
        "type": "isolation",
        "equipment": "machine",
    },
    {
        "id": "calf-raise",
        "name": "Calf Raise",
        "aliases": ["calves"],
        "muscles": ["calves"],
        "type": "isolation",
        "equipment": "machine",
    },
    {
        "id": "plank",
        "name": "Plank",
        "aliases": [],
        "muscles": ["abs"],
        "type": "isolation",
        "equipment": "bodyweight",
    },
]
