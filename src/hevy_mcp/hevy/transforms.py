"""Convert request models into the bodies the Hevy API accepts.

The API wants each payload under an envelope key, rejects empty strings for
fields such as ``notes``, and has no use for display titles or positional
indexes (order is the array order). Optional values that are ``None`` or
blank are therefore left out of the body entirely.
"""

from typing import Any

from hevy_mcp.hevy.models import (
    SET_METRICS,
    ExerciseTemplateRequest,
    RepRange,
    RoutineExercise,
    RoutineFolderRequest,
    RoutineRequest,
    RoutineSet,
    UpdateRoutineRequest,
    WorkoutExercise,
    WorkoutRequest,
    WorkoutSet,
)


def clean_value(value: Any) -> Any:
    """Return ``None`` for values the API treats as absent."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def drop_absent(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if v is not None}


def _set_metrics(set_: WorkoutSet | RoutineSet) -> dict[str, Any]:
    return {name: clean_value(getattr(set_, name)) for name in SET_METRICS}


def _workout_set(set_: WorkoutSet) -> dict[str, Any]:
    return drop_absent({
        "type": set_.type,
        **_set_metrics(set_),
        "rpe": clean_value(set_.rpe),
    })


def _workout_exercise(exercise: WorkoutExercise) -> dict[str, Any]:
    return drop_absent({
        "exercise_template_id": exercise.exercise_template_id,
        "superset_id": clean_value(exercise.superset_id),
        "notes": clean_value(exercise.notes),
        "sets": [_workout_set(s) for s in exercise.sets],
    })


def transform_workout(workout: WorkoutRequest) -> dict[str, Any]:
    """Build the ``POST /v1/workouts`` and ``PUT /v1/workouts/{id}`` body.

    ``is_private`` is always sent; the API refuses workouts without it.
    """
    return {
        "workout": drop_absent({
            "title": workout.title,
            "description": clean_value(workout.description),
            "start_time": workout.start_time,
            "end_time": workout.end_time,
            "routine_id": clean_value(workout.routine_id),
            "is_private": workout.is_private,
            "exercises": [_workout_exercise(ex) for ex in workout.exercises],
        }),
    }


def _rep_range(rep_range: RepRange | None) -> dict[str, Any] | None:
    if rep_range is None:
        return None
    bounds = drop_absent({
        "start": clean_value(rep_range.start),
        "end": clean_value(rep_range.end),
    })
    return bounds or None


def _routine_set(set_: RoutineSet) -> dict[str, Any]:
    return drop_absent({
        "type": set_.type,
        **_set_metrics(set_),
        "rep_range": _rep_range(set_.rep_range),
    })


def _routine_exercise(exercise: RoutineExercise) -> dict[str, Any]:
    return drop_absent({
        "exercise_template_id": exercise.exercise_template_id,
        "superset_id": clean_value(exercise.superset_id),
        "rest_seconds": clean_value(exercise.rest_seconds),
        "notes": clean_value(exercise.notes),
        "sets": [_routine_set(s) for s in exercise.sets],
    })


def transform_routine(routine: UpdateRoutineRequest) -> dict[str, Any]:
    """Build the routine body for create (``RoutineRequest``) or update.

    ``folder_id`` is only carried over when the caller set it on a create;
    updates never resend folder placement.
    """
    fields = {
        "title": routine.title,
        "notes": clean_value(routine.notes),
        "exercises": [_routine_exercise(ex) for ex in routine.exercises],
    }
    if isinstance(routine, RoutineRequest) and routine.declares_folder:
        fields["folder_id"] = clean_value(routine.folder_id)
    return {"routine": drop_absent(fields)}


def transform_exercise_template(template: ExerciseTemplateRequest) -> dict[str, Any]:
    return {
        "exercise": drop_absent({
            "title": template.title,
            "exercise_type": template.exercise_type,
            "equipment_category": template.equipment_category,
            "muscle_group": template.muscle_group,
            "other_muscles": template.other_muscles,
        }),
    }


def transform_routine_folder(folder: RoutineFolderRequest) -> dict[str, Any]:
    return {"routine_folder": {"title": folder.title}}
