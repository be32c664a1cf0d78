"""Hevy MCP tools.

Each tool runs the same pipeline: parse the arguments into a request model,
check domain rules, build the API body, make one call to Hevy, and return a
``CallToolResult``. Any failure along the way is turned into an error result
by ``handle_error``, so tools never raise.

Nested and enumerated arguments are declared as plain dicts and strings so
that the request models, not the MCP argument layer, reject bad shapes and
the caller gets the same error layout as for every other failure.
"""

import functools
import json
import logging
from typing import Any, Awaitable, Callable

import httpx
import pydantic
from mcp.types import CallToolResult, TextContent

from hevy_mcp.config import Settings
from hevy_mcp.hevy.client import HevyClient
from hevy_mcp.hevy.credentials import CredentialStore
from hevy_mcp.hevy.errors import handle_error
from hevy_mcp.hevy.exceptions import (
    CredentialsNotConfiguredError,
    HevyAPIError,
    ValidationError,
)
from hevy_mcp.hevy.models import (
    ExerciseTemplateRequest,
    RoutineFolderRequest,
    RoutineRequest,
    UpdateRoutineRequest,
    WorkoutRequest,
)
from hevy_mcp.hevy.transforms import (
    transform_exercise_template,
    transform_routine,
    transform_routine_folder,
    transform_workout,
)
from hevy_mcp.hevy.validation import (
    PaginationLimits,
    validate_exercise_template,
    validate_iso8601,
    validate_pagination,
    validate_routine,
    validate_routine_folder,
    validate_uuid,
    validate_workout,
)

logger = logging.getLogger(__name__)

ToolHandler = Callable[..., Awaitable[CallToolResult]]

TOOL_NAMES = (
    "get_workouts",
    "get_workout",
    "create_workout",
    "update_workout",
    "get_workouts_count",
    "get_workout_events",
    "get_routines",
    "get_routine",
    "create_routine",
    "update_routine",
    "get_exercise_templates",
    "get_exercise_template",
    "create_exercise_template",
    "get_exercise_history",
    "get_routine_folders",
    "get_routine_folder",
    "create_routine_folder",
)

_EXPECTED_FAILURES = (
    HevyAPIError,
    ValidationError,
    pydantic.ValidationError,
    CredentialsNotConfiguredError,
)


def success_response(summary: str, payload: Any) -> CallToolResult:
    return CallToolResult(
        content=[
            TextContent(type="text", text=summary),
            TextContent(type="text", text=json.dumps(payload, indent=2, ensure_ascii=False)),
        ],
        isError=False,
    )


def _page_summary(result: dict, key: str, label: str, page: int) -> str:
    items = result.get(key) or []
    page_count = result.get("page_count", "?")
    return f"Found {len(items)} {label} (page {page} of {page_count})"


def _require(value: str | None, field_name: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")


def tool(func: ToolHandler) -> ToolHandler:
    """Convert anything a tool raises into an error result."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> CallToolResult:
        try:
            return await func(*args, **kwargs)
        except _EXPECTED_FAILURES as e:
            logger.info("Tool %s rejected: %s", func.__name__, e)
            return handle_error(e)
        except Exception as e:
            logger.warning("Tool %s failed unexpectedly", func.__name__, exc_info=True)
            return handle_error(e)

    return wrapper


class HevyTools:
    """The Hevy tool handlers, bound to a credential store and settings."""

    def __init__(
        self,
        credentials: CredentialStore,
        settings: Settings | None = None,
        user_resolver: Callable[[], str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._credentials = credentials
        self._settings = settings or Settings()
        self._user_resolver = user_resolver or (lambda: self._settings.default_user)
        self._transport = transport

    def _client(self) -> HevyClient:
        user_id = self._user_resolver()
        api_key = self._credentials.get_credential(user_id)
        if not api_key:
            raise CredentialsNotConfiguredError(user_id)
        return HevyClient(
            api_key,
            base_url=self._settings.base_url,
            timeout=self._settings.timeout,
            transport=self._transport,
        )

    # --- Workouts ---

    @tool
    async def get_workouts(
        self,
        page: int = 1,
        page_size: int = PaginationLimits.WORKOUTS.default,
    ) -> CallToolResult:
        """List workouts, newest first.

        Args:
            page: Page number (1 or greater).
            page_size: Workouts per page (max 10).
        """
        validate_pagination(page, page_size, PaginationLimits.WORKOUTS.maximum)
        result = await self._client().get_workouts(page=page, page_size=page_size)
        return success_response(_page_summary(result, "workouts", "workouts", page), result)

    @tool
    async def get_workout(self, workout_id: str) -> CallToolResult:
        """Get a single workout with all exercises and sets.

        Args:
            workout_id: Workout ID (UUID).
        """
        validate_uuid(workout_id, "workout_id")
        result = await self._client().get_workout(workout_id)
        return success_response(f"Workout: {result.get('title') or 'Untitled'}", result)

    @tool
    async def create_workout(
        self,
        title: str,
        start_time: str,
        end_time: str,
        exercises: list[dict[str, Any]],
        description: str | None = None,
        routine_id: str | None = None,
        is_private: bool = False,
    ) -> CallToolResult:
        """Log a completed workout.

        Args:
            title: Title of the workout.
            start_time: Start time, ISO 8601 (e.g. 2024-01-15T10:00:00Z).
            end_time: End time, ISO 8601, after start_time.
            exercises: Exercises in order, each with at least one set. Each exercise
                has title, exercise_template_id, optional superset_id and notes,
                and sets of {type, weight_kg, reps, distance_meters,
                duration_seconds, custom_metric, rpe}. Set type is one of
                warmup, normal, failure, dropset; rpe is one of 6, 7, 7.5, 8,
                8.5, 9, 9.5, 10.
            description: Optional workout description.
            routine_id: Optional routine the workout was based on.
            is_private: Hide the workout from followers (default false).
        """
        workout = WorkoutRequest.model_validate({
            "title": title,
            "start_time": start_time,
            "end_time": end_time,
            "exercises": exercises,
            "description": description,
            "routine_id": routine_id,
            "is_private": is_private,
        })
        validate_workout(workout)
        result = await self._client().create_workout(transform_workout(workout))
        return success_response("Workout created successfully!", result)

    @tool
    async def update_workout(
        self,
        workout_id: str,
        title: str,
        start_time: str,
        end_time: str,
        exercises: list[dict[str, Any]],
        description: str | None = None,
        routine_id: str | None = None,
        is_private: bool = False,
    ) -> CallToolResult:
        """Replace an existing workout. Send the full workout, not a diff.

        A workout read with get_workout can be edited and sent back as-is;
        ids and index fields are dropped before the update.

        Args:
            workout_id: ID of the workout to update (UUID).
            title: Title of the workout.
            start_time: Start time, ISO 8601.
            end_time: End time, ISO 8601, after start_time.
            exercises: Exercises in order, each with at least one set. Same shape
                as create_workout.
            description: Optional workout description.
            routine_id: Optional routine the workout was based on.
            is_private: Hide the workout from followers (default false).
        """
        validate_uuid(workout_id, "workout_id")
        workout = WorkoutRequest.model_validate({
            "title": title,
            "start_time": start_time,
            "end_time": end_time,
            "exercises": exercises,
            "description": description,
            "routine_id": routine_id,
            "is_private": is_private,
        })
        validate_workout(workout)
        result = await self._client().update_workout(workout_id, transform_workout(workout))
        return success_response("Workout updated successfully!", result)

    @tool
    async def get_workouts_count(self) -> CallToolResult:
        """Get the total number of workouts on the account."""
        result = await self._client().get_workouts_count()
        return success_response(f"Total workouts: {result.get('workout_count')}", result)

    @tool
    async def get_workout_events(
        self,
        since: str,
        page: int = 1,
        page_size: int = PaginationLimits.WORKOUT_EVENTS.default,
    ) -> CallToolResult:
        """List workouts updated or deleted since a point in time.

        Args:
            since: ISO 8601 date or instant (e.g. 2024-01-01T00:00:00Z).
            page: Page number (1 or greater).
            page_size: Events per page (max 10).
        """
        validate_iso8601(since, "since")
        validate_pagination(page, page_size, PaginationLimits.WORKOUT_EVENTS.maximum)
        result = await self._client().get_workout_events(page=page, page_size=page_size, since=since)
        events = result.get("events") or []
        return success_response(f"Found {len(events)} events since {since}", result)

    # --- Routines ---

    @tool
    async def get_routines(
        self,
        page: int = 1,
        page_size: int = PaginationLimits.ROUTINES.default,
    ) -> CallToolResult:
        """List saved routines.

        Args:
            page: Page number (1 or greater).
            page_size: Routines per page (max 10).
        """
        validate_pagination(page, page_size, PaginationLimits.ROUTINES.maximum)
        result = await self._client().get_routines(page=page, page_size=page_size)
        return success_response(_page_summary(result, "routines", "routines", page), result)

    @tool
    async def get_routine(self, routine_id: str) -> CallToolResult:
        """Get a single routine.

        Args:
            routine_id: Routine ID (UUID).
        """
        validate_uuid(routine_id, "routine_id")
        result = await self._client().get_routine(routine_id)
        routine = result.get("routine") or {}
        return success_response(f"Routine: {routine.get('title') or 'Untitled'}", result)

    @tool
    async def create_routine(
        self,
        title: str,
        exercises: list[dict[str, Any]],
        notes: str | None = None,
        folder_id: int | None = None,
    ) -> CallToolResult:
        """Create a routine (a reusable workout plan).

        Args:
            title: Title of the routine.
            exercises: Exercises in order, each with at least one set. Each exercise
                has exercise_template_id, optional superset_id, rest_seconds
                and notes, and sets of {type, weight_kg, reps, distance_meters,
                duration_seconds, custom_metric, rep_range: {start, end}}.
            notes: Optional notes for the routine.
            folder_id: Folder to place it in; omit for the default "My Routines".
        """
        arguments: dict[str, Any] = {"title": title, "exercises": exercises, "notes": notes}
        if folder_id is not None:
            arguments["folder_id"] = folder_id
        routine = RoutineRequest.model_validate(arguments)
        validate_routine(routine)
        result = await self._client().create_routine(transform_routine(routine))
        return success_response("Routine created successfully!", result)

    @tool
    async def update_routine(
        self,
        routine_id: str,
        title: str,
        exercises: list[dict[str, Any]],
        notes: str | None = None,
    ) -> CallToolResult:
        """Replace an existing routine. Folder placement is left unchanged.

        Args:
            routine_id: ID of the routine to update (UUID).
            title: Title of the routine.
            exercises: Exercises in order, each with at least one set. Same shape
                as create_routine.
            notes: Optional notes for the routine.
        """
        validate_uuid(routine_id, "routine_id")
        routine = UpdateRoutineRequest.model_validate(
            {"title": title, "exercises": exercises, "notes": notes}
        )
        validate_routine(routine)
        result = await self._client().update_routine(routine_id, transform_routine(routine))
        return success_response("Routine updated successfully!", result)

    # --- Exercise templates ---

    @tool
    async def get_exercise_templates(
        self,
        page: int = 1,
        page_size: int = PaginationLimits.EXERCISE_TEMPLATES.default,
    ) -> CallToolResult:
        """List exercise templates, built-in and custom.

        Args:
            page: Page number (1 or greater).
            page_size: Templates per page (max 100).
        """
        validate_pagination(page, page_size, PaginationLimits.EXERCISE_TEMPLATES.maximum)
        result = await self._client().get_exercise_templates(page=page, page_size=page_size)
        summary = _page_summary(result, "exercise_templates", "exercise templates", page)
        return success_response(summary, result)

    @tool
    async def get_exercise_template(self, exercise_template_id: str) -> CallToolResult:
        """Get a single exercise template.

        Args:
            exercise_template_id: Exercise template ID.
        """
        _require(exercise_template_id, "exercise_template_id")
        result = await self._client().get_exercise_template(exercise_template_id)
        return success_response(f"Exercise Template: {result.get('title') or 'Untitled'}", result)

    @tool
    async def create_exercise_template(
        self,
        title: str,
        exercise_type: str,
        equipment_category: str,
        muscle_group: str,
        other_muscles: list[str] | None = None,
    ) -> CallToolResult:
        """Create a custom exercise template.

        Args:
            title: Title of the exercise.
            exercise_type: One of weight_reps, reps_only, bodyweight_reps,
                bodyweight_assisted_reps, duration, weight_duration,
                distance_duration, short_distance_weight.
            equipment_category: One of none, barbell, dumbbell, kettlebell,
                machine, plate, resistance_band, suspension, other.
            muscle_group: Primary muscle group (e.g. chest, quadriceps, lats,
                full_body).
            other_muscles: Secondary muscle groups.
        """
        template = ExerciseTemplateRequest.model_validate({
            "title": title,
            "exercise_type": exercise_type,
            "equipment_category": equipment_category,
            "muscle_group": muscle_group,
            "other_muscles": other_muscles,
        })
        validate_exercise_template(template)
        result = await self._client().create_exercise_template(transform_exercise_template(template))
        return success_response("Exercise template created successfully!", result)

    @tool
    async def get_exercise_history(
        self,
        exercise_template_id: str,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> CallToolResult:
        """Get every logged set of one exercise, optionally within a date window.

        Args:
            exercise_template_id: Exercise template ID.
            start_date: Optional ISO 8601 start of the window.
            end_date: Optional ISO 8601 end of the window.
        """
        _require(exercise_template_id, "exercise_template_id")
        if start_date:
            validate_iso8601(start_date, "start_date")
        if end_date:
            validate_iso8601(end_date, "end_date")
        result = await self._client().get_exercise_history(
            exercise_template_id, start_date=start_date or None, end_date=end_date or None
        )
        window = ""
        if start_date or end_date:
            window = f" from {start_date or 'the beginning'} to {end_date or 'now'}"
        return success_response(f"Exercise history for {exercise_template_id}{window}", result)

    # --- Routine folders ---

    @tool
    async def get_routine_folders(
        self,
        page: int = 1,
        page_size: int = PaginationLimits.ROUTINE_FOLDERS.default,
    ) -> CallToolResult:
        """List routine folders.

        Args:
            page: Page number (1 or greater).
            page_size: Folders per page (max 10).
        """
        validate_pagination(page, page_size, PaginationLimits.ROUTINE_FOLDERS.maximum)
        result = await self._client().get_routine_folders(page=page, page_size=page_size)
        return success_response(
            _page_summary(result, "routine_folders", "routine folders", page), result
        )

    @tool
    async def get_routine_folder(self, routine_folder_id: int) -> CallToolResult:
        """Get a single routine folder.

        Args:
            routine_folder_id: Routine folder ID (an integer).
        """
        result = await self._client().get_routine_folder(routine_folder_id)
        return success_response(f"Routine Folder: {result.get('title') or 'Untitled'}", result)

    @tool
    async def create_routine_folder(self, title: str) -> CallToolResult:
        """Create a routine folder. New folders are placed first in the list.

        Args:
            title: Title of the routine folder.
        """
        folder = RoutineFolderRequest.model_validate({"title": title})
        validate_routine_folder(folder)
        result = await self._client().create_routine_folder(transform_routine_folder(folder))
        return success_response("Routine folder created successfully!", result)


def build_tool_table(tools: HevyTools) -> dict[str, ToolHandler]:
    """Map tool names to their bound handlers."""
    return {name: getattr(tools, name) for name in TOOL_NAMES}
