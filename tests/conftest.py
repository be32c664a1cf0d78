"""Shared pytest fixtures for the Hevy MCP tests."""

import copy
import json
from typing import Any

import httpx
import pytest

from hevy_mcp.config import Settings
from hevy_mcp.hevy.credentials import InMemoryCredentialStore
from hevy_mcp.tools import HevyTools

API_KEY = "test-api-key-1234"
WORKOUT_ID = "b459cba5-cd6d-463c-abd6-54f8eafcadcb"
ROUTINE_ID = "d7a4f2b1-3c5e-4f6a-8b9c-0d1e2f3a4b5c"


class FakeHevy:
    """Stands in for api.hevyapp.com behind an ``httpx.MockTransport``."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], tuple[int, Any, str | None, dict[str, str] | None]] = {}

    def respond(
        self,
        method: str,
        path: str,
        status: int = 200,
        json: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._routes[(method, path)] = (status, json if json is not None else {}, text, headers)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": f"No route for {request.url.path}"})
        status, body, text, headers = route
        if text is not None:
            return httpx.Response(status, text=text, headers=headers)
        return httpx.Response(status, json=body, headers=headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def fake_hevy() -> FakeHevy:
    return FakeHevy()


@pytest.fixture
def credentials() -> InMemoryCredentialStore:
    return InMemoryCredentialStore({"default": API_KEY})


@pytest.fixture
def tools(fake_hevy: FakeHevy, credentials: InMemoryCredentialStore) -> HevyTools:
    return HevyTools(credentials, settings=Settings(), transport=fake_hevy.transport)


@pytest.fixture
def workout_args() -> dict[str, Any]:
    return {
        "title": "Leg Day",
        "start_time": "2024-01-15T10:00:00Z",
        "end_time": "2024-01-15T11:00:00Z",
        "exercises": [
            {
                "title": "Squat",
                "exercise_template_id": "abc",
                "sets": [{"type": "normal", "weight_kg": 100, "reps": 10}],
            }
        ],
    }


_WORKOUT_READ_BACK = {
    "id": WORKOUT_ID,
    "title": "Morning Workout 💪",
    "description": "Pushed myself to the limit today!",
    "routine_id": "routine-123",
    "start_time": "2024-01-15T10:00:00Z",
    "end_time": "2024-01-15T11:30:00Z",
    "created_at": "2024-01-15T10:00:00Z",
    "updated_at": "2024-01-15T11:30:00Z",
    "exercises": [
        {
            "index": 0,
            "title": "Bench Press (Barbell)",
            "exercise_template_id": "05293BCA",
            "superset_id": None,
            "notes": "Paid closer attention to form today.",
            "sets": [
                {
                    "index": 0,
                    "type": "warmup",
                    "weight_kg": 60,
                    "reps": 10,
                    "distance_meters": None,
                    "duration_seconds": None,
                    "rpe": None,
                    "custom_metric": None,
                },
                {
                    "index": 1,
                    "type": "normal",
                    "weight_kg": 100,
                    "reps": 8,
                    "distance_meters": None,
                    "duration_seconds": None,
                    "rpe": 8.5,
                    "custom_metric": None,
                },
            ],
        },
        {
            "index": 1,
            "title": "Incline Dumbbell Press",
            "exercise_template_id": "05293BCB",
            "superset_id": None,
            "notes": "",
            "sets": [
                {
                    "index": 0,
                    "type": "normal",
                    "weight_kg": 30,
                    "reps": 12,
                    "distance_meters": None,
                    "duration_seconds": None,
                    "rpe": None,
                    "custom_metric": None,
                },
            ],
        },
    ],
}


@pytest.fixture
def workout_read_back() -> dict[str, Any]:
    """A workout as ``GET /v1/workouts/{id}`` returns it."""
    return copy.deepcopy(_WORKOUT_READ_BACK)


@pytest.fixture
def routine_args() -> dict[str, Any]:
    return {
        "title": "Push Day",
        "notes": "Focus on chest",
        "exercises": [
            {
                "exercise_template_id": "05293BCA",
                "rest_seconds": 90,
                "notes": "",
                "sets": [
                    {"type": "warmup", "weight_kg": 60, "reps": 10},
                    {"type": "normal", "weight_kg": 100, "rep_range": {"start": 8, "end": 12}},
                ],
            }
        ],
    }
