from hevy_mcp.hevy.client import HevyClient
from hevy_mcp.hevy.models import (
    WorkoutSet, WorkoutExercise, WorkoutRequest,
    RepRange, RoutineSet, RoutineExercise, RoutineRequest, UpdateRoutineRequest,
    ExerciseTemplateRequest, RoutineFolderRequest,
)
from hevy_mcp.hevy.exceptions import (
    HevyError, HevyAPIError, ValidationError,
    CredentialsNotConfiguredError, ConfigurationError,
)
from hevy_mcp.hevy.errors import handle_error

__all__ = [
    "HevyClient",
    "WorkoutSet", "WorkoutExercise", "WorkoutRequest",
    "RepRange", "RoutineSet", "RoutineExercise", "RoutineRequest", "UpdateRoutineRequest",
    "ExerciseTemplateRequest", "RoutineFolderRequest",
    "HevyError", "HevyAPIError", "ValidationError",
    "CredentialsNotConfiguredError", "ConfigurationError",
    "handle_error",
]
