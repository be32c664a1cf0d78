"""Domain validation for Hevy requests.

Every check raises ``ValidationError`` at the first rule that fails. Checks
run before any request is transformed or sent, so a rejected call has no
side effects.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Sequence

from hevy_mcp.hevy.exceptions import ValidationError
from hevy_mcp.hevy.models import (
    RPE_VALUES,
    SET_METRICS,
    SET_TYPES,
    ExerciseTemplateRequest,
    RoutineFolderRequest,
    UpdateRoutineRequest,
    WorkoutRequest,
)

ISO8601_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}:\d{2}(\.\d{1,3})?(Z|[+-]\d{2}:\d{2})?)?$"
)
UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


@dataclass(frozen=True)
class PageLimit:
    default: int
    maximum: int


class PaginationLimits:
    """Page size limits enforced per listing endpoint."""
    WORKOUTS = PageLimit(default=10, maximum=10)
    WORKOUT_EVENTS = PageLimit(default=5, maximum=10)
    ROUTINES = PageLimit(default=5, maximum=10)
    ROUTINE_FOLDERS = PageLimit(default=10, maximum=10)
    EXERCISE_TEMPLATES = PageLimit(default=20, maximum=100)


def validate_pagination(page: int, page_size: int, max_page_size: int) -> None:
    if page < 1:
        raise ValidationError(f"Page must be 1 or greater, got {page}")
    if page_size < 1:
        raise ValidationError(f"Page size must be at least 1, got {page_size}")
    if page_size > max_page_size:
        raise ValidationError(f"Page size cannot exceed {max_page_size}, got {page_size}")


def parse_iso8601(value: str, field_name: str) -> datetime:
    """Parse an ISO 8601 date or instant. Values without an offset are UTC."""
    if not isinstance(value, str) or not ISO8601_PATTERN.match(value):
        raise ValidationError(
            f"{field_name} must be in ISO 8601 format (e.g., 2024-01-15T10:00:00Z), got {value}"
        )
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid date: {value}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def validate_iso8601(value: str, field_name: str) -> None:
    parse_iso8601(value, field_name)


def validate_temporal_ordering(
    start: str,
    end: str,
    start_field: str = "start_time",
    end_field: str = "end_time",
) -> None:
    start_at = parse_iso8601(start, start_field)
    end_at = parse_iso8601(end, end_field)
    if end_at <= start_at:
        raise ValidationError(f"{end_field} must be after {start_field}")


def validate_rpe(value: float) -> None:
    if isinstance(value, bool) or value not in RPE_VALUES:
        allowed = ", ".join(f"{v:g}" for v in RPE_VALUES)
        raise ValidationError(f"RPE must be one of: {allowed}. Got {value}")


def validate_uuid(value: str, field_name: str) -> None:
    if not isinstance(value, str) or not UUID_PATTERN.match(value):
        raise ValidationError(
            f"{field_name} must be a valid UUID "
            f"(e.g., b459cba5-cd6d-463c-abd6-54f8eafcadcb), got {value}"
        )


def validate_title(title: str | None, label: str) -> None:
    if not title or not title.strip():
        raise ValidationError(f"{label} title is required and cannot be empty")


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _validate_set_common(set_: Any, position: str) -> None:
    set_type = _field(set_, "type")
    if not set_type:
        raise ValidationError(f"{position}: type is required")
    if set_type not in SET_TYPES:
        raise ValidationError(
            f'{position}: Invalid set type "{set_type}". Must be one of: {", ".join(SET_TYPES)}'
        )


def _validate_metrics(set_: Any, position: str) -> None:
    for name in SET_METRICS:
        value = _field(set_, name)
        if value is not None and value < 0:
            raise ValidationError(f"{position}: {name} cannot be negative")


def _validate_sets_present(exercise: Any, index: int) -> Sequence[Any]:
    sets = _field(exercise, "sets")
    if not isinstance(sets, (list, tuple)):
        raise ValidationError(f"Exercise at index {index} must have a sets array")
    if not sets:
        raise ValidationError(f"Exercise at index {index} must have at least one set")
    return sets


def _validate_exercises_present(exercises: Any) -> None:
    if not isinstance(exercises, (list, tuple)):
        raise ValidationError("Exercises must be an array")
    if not exercises:
        raise ValidationError("At least one exercise is required")


def validate_workout_exercises(exercises: Sequence[Any]) -> None:
    _validate_exercises_present(exercises)

    for index, exercise in enumerate(exercises):
        if not _field(exercise, "title"):
            raise ValidationError(f"Exercise at index {index} is missing required field: title")
        if not _field(exercise, "exercise_template_id"):
            raise ValidationError(
                f"Exercise at index {index} is missing required field: exercise_template_id"
            )

        sets = _validate_sets_present(exercise, index)
        for set_index, set_ in enumerate(sets):
            position = f"Exercise {index}, Set {set_index}"
            _validate_set_common(set_, position)

            rpe = _field(set_, "rpe")
            if rpe is not None:
                try:
                    validate_rpe(rpe)
                except ValidationError as e:
                    raise ValidationError(f"{position}: {e}") from None

            _validate_metrics(set_, position)


def validate_routine_exercises(exercises: Sequence[Any]) -> None:
    _validate_exercises_present(exercises)

    for index, exercise in enumerate(exercises):
        if not _field(exercise, "exercise_template_id"):
            raise ValidationError(
                f"Exercise at index {index} is missing required field: exercise_template_id"
            )

        rest_seconds = _field(exercise, "rest_seconds")
        if rest_seconds is not None and rest_seconds < 0:
            raise ValidationError(f"Exercise at index {index}: rest_seconds cannot be negative")

        sets = _validate_sets_present(exercise, index)
        for set_index, set_ in enumerate(sets):
            position = f"Exercise {index}, Set {set_index}"
            _validate_set_common(set_, position)
            _validate_metrics(set_, position)

            rep_range = _field(set_, "rep_range")
            if not rep_range:
                continue
            start = _field(rep_range, "start")
            end = _field(rep_range, "end")
            if start is not None and start < 0:
                raise ValidationError(f"{position}: rep_range.start cannot be negative")
            if end is not None and end < 0:
                raise ValidationError(f"{position}: rep_range.end cannot be negative")
            if start is not None and end is not None and start > end:
                raise ValidationError(
                    f"{position}: rep_range.start cannot be greater than rep_range.end"
                )


def validate_workout(workout: WorkoutRequest) -> None:
    validate_title(workout.title, "Workout")
    validate_temporal_ordering(workout.start_time, workout.end_time)
    validate_workout_exercises(workout.exercises)


def validate_routine(routine: UpdateRoutineRequest) -> None:
    validate_title(routine.title, "Routine")
    validate_routine_exercises(routine.exercises)


def validate_exercise_template(template: ExerciseTemplateRequest) -> None:
    validate_title(template.title, "Exercise template")
    if not template.exercise_type:
        raise ValidationError("Exercise type is required")
    if not template.equipment_category:
        raise ValidationError("Equipment category is required")
    if not template.muscle_group:
        raise ValidationError("Muscle group is required")


def validate_routine_folder(folder: RoutineFolderRequest) -> None:
    validate_title(folder.title, "Routine folder")
