"""Hevy request models.

These describe the shape tool callers send. Unknown keys are ignored on
parse, so payloads read back from the API (with ``index``, ``id`` and
timestamps) can be fed straight back into an update.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SetType = Literal["warmup", "normal", "failure", "dropset"]

ExerciseType = Literal[
    "weight_reps",
    "reps_only",
    "bodyweight_reps",
    "bodyweight_assisted_reps",
    "duration",
    "weight_duration",
    "distance_duration",
    "short_distance_weight",
]

EquipmentCategory = Literal[
    "none",
    "barbell",
    "dumbbell",
    "kettlebell",
    "machine",
    "plate",
    "resistance_band",
    "suspension",
    "other",
]

MuscleGroup = Literal[
    "abdominals",
    "shoulders",
    "biceps",
    "triceps",
    "forearms",
    "quadriceps",
    "hamstrings",
    "calves",
    "glutes",
    "abductors",
    "adductors",
    "lats",
    "upper_back",
    "traps",
    "lower_back",
    "chest",
    "cardio",
    "neck",
    "full_body",
    "other",
]

Number = int | float

SET_TYPES: tuple[str, ...] = ("warmup", "normal", "failure", "dropset")
RPE_VALUES: tuple[float, ...] = (6, 7, 7.5, 8, 8.5, 9, 9.5, 10)
SET_METRICS: tuple[str, ...] = (
    "weight_kg",
    "reps",
    "distance_meters",
    "duration_seconds",
    "custom_metric",
)


class _Request(BaseModel):
    model_config = ConfigDict(extra="ignore")


class WorkoutSet(_Request):
    """A set performed in a workout."""
    type: SetType = Field(description="Set type")
    weight_kg: Number | None = Field(default=None, description="Weight in kilograms")
    reps: Number | None = Field(default=None, description="Number of repetitions")
    distance_meters: Number | None = Field(default=None, description="Distance in meters")
    duration_seconds: Number | None = Field(default=None, description="Duration in seconds")
    custom_metric: Number | None = Field(default=None, description="Custom metric (steps/floors)")
    rpe: Number | None = Field(
        default=None, description="Rating of Perceived Exertion: 6, 7, 7.5, 8, 8.5, 9, 9.5 or 10"
    )


class WorkoutExercise(_Request):
    """An exercise within a workout. The title is for display only."""
    title: str = Field(description="Exercise name (from the exercise template)")
    exercise_template_id: str = Field(description="Exercise template ID")
    superset_id: int | None = Field(default=None, description="Superset ID, null if not in a superset")
    notes: str | None = Field(default=None, description="Notes for this exercise")
    sets: list[WorkoutSet] = Field(description="Sets performed in this exercise")


class WorkoutRequest(_Request):
    """A workout to create or update."""
    title: str = Field(description="Title of the workout")
    description: str | None = Field(default=None, description="Workout description")
    start_time: str = Field(description="Start time (ISO 8601, e.g. 2024-01-15T10:00:00Z)")
    end_time: str = Field(description="End time (ISO 8601, e.g. 2024-01-15T11:30:00Z)")
    routine_id: str | None = Field(default=None, description="Routine this workout belongs to")
    is_private: bool = Field(default=False, description="Whether the workout is private")
    exercises: list[WorkoutExercise] = Field(description="Exercises in the workout")


class RepRange(_Request):
    """Target repetition range for a routine set."""
    start: Number | None = Field(default=None, description="Lowest rep count of the range")
    end: Number | None = Field(default=None, description="Highest rep count of the range")


class RoutineSet(_Request):
    """A planned set within a routine exercise."""
    type: SetType = Field(description="Set type")
    weight_kg: Number | None = Field(default=None, description="Weight in kilograms")
    reps: Number | None = Field(default=None, description="Number of repetitions")
    distance_meters: Number | None = Field(default=None, description="Distance in meters")
    duration_seconds: Number | None = Field(default=None, description="Duration in seconds")
    custom_metric: Number | None = Field(default=None, description="Custom metric (steps/floors)")
    rep_range: RepRange | None = Field(default=None, description="Range of reps, e.g. 8-12")


class RoutineExercise(_Request):
    """An exercise within a routine."""
    exercise_template_id: str = Field(description="Exercise template ID")
    superset_id: int | None = Field(default=None, description="Superset ID, null if not in a superset")
    rest_seconds: Number | None = Field(default=None, description="Rest time in seconds between sets")
    notes: str | None = Field(default=None, description="Notes for this exercise")
    sets: list[RoutineSet] = Field(description="Sets for this exercise")


class UpdateRoutineRequest(_Request):
    """A routine update. Folder placement cannot change through an update."""
    title: str = Field(description="Title of the routine")
    notes: str | None = Field(default=None, description="Notes for the routine")
    exercises: list[RoutineExercise] = Field(description="Exercises in the routine")


class RoutineRequest(UpdateRoutineRequest):
    """A routine to create."""
    folder_id: int | None = Field(
        default=None, description="Folder ID, null for the default 'My Routines' folder"
    )

    @property
    def declares_folder(self) -> bool:
        return "folder_id" in self.model_fields_set


class ExerciseTemplateRequest(_Request):
    """A custom exercise template."""
    title: str = Field(description="Title of the exercise")
    exercise_type: ExerciseType = Field(description="The exercise type")
    equipment_category: EquipmentCategory = Field(description="Equipment category")
    muscle_group: MuscleGroup = Field(description="Primary muscle group")
    other_muscles: list[MuscleGroup] | None = Field(default=None, description="Secondary muscle groups")


class RoutineFolderRequest(_Request):
    """A routine folder."""
    title: str = Field(description="Title of the routine folder")
