"""Hevy API client."""

import logging
from typing import Any

import httpx

from hevy_mcp.hevy.exceptions import HevyAPIError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.hevyapp.com"
DEFAULT_TIMEOUT = 30.0


class HevyClient:
    """Client for the Hevy public API, authenticated with a per-user API key."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {"api-key": self._api_key, "Content-Type": "application/json"}

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        logger.debug("%s %s params=%s", method, path, params)
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            response = await client.request(
                method,
                path,
                headers=self._headers(),
                params=params or None,
                json=json,
            )

        data = response.text or None
        if data and "application/json" in response.headers.get("Content-Type", ""):
            try:
                data = response.json()
            except ValueError:
                logger.debug("%s %s returned malformed JSON", method, path)

        if response.is_error:
            logger.warning("Hevy API %s %s failed with %s", method, path, response.status_code)
            raise HevyAPIError(
                f"Hevy API request failed: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                data=data,
            )

        return data

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, body: Any) -> Any:
        return await self._request("POST", path, json=body)

    async def put(self, path: str, body: Any) -> Any:
        return await self._request("PUT", path, json=body)

    # --- Workouts ---

    async def get_workouts(self, page: int = 1, page_size: int = 10) -> dict:
        """Fetch a page of workouts, newest first."""
        return await self.get("/v1/workouts", {"page": page, "pageSize": page_size})

    async def get_workout(self, workout_id: str) -> dict:
        return await self.get(f"/v1/workouts/{workout_id}")

    async def create_workout(self, body: dict) -> dict:
        return await self.post("/v1/workouts", body)

    async def update_workout(self, workout_id: str, body: dict) -> dict:
        return await self.put(f"/v1/workouts/{workout_id}", body)

    async def get_workouts_count(self) -> dict:
        return await self.get("/v1/workouts/count")

    async def get_workout_events(
        self,
        page: int = 1,
        page_size: int = 5,
        since: str | None = None,
    ) -> dict:
        """Fetch workout updates and deletions since a point in time."""
        return await self.get(
            "/v1/workouts/events",
            {"page": page, "pageSize": page_size, "since": since},
        )

    # --- Routines ---

    async def get_routines(self, page: int = 1, page_size: int = 5) -> dict:
        return await self.get("/v1/routines", {"page": page, "pageSize": page_size})

    async def get_routine(self, routine_id: str) -> dict:
        """Fetch one routine. The API wraps it as ``{"routine": {...}}``."""
        return await self.get(f"/v1/routines/{routine_id}")

    async def create_routine(self, body: dict) -> dict:
        return await self.post("/v1/routines", body)

    async def update_routine(self, routine_id: str, body: dict) -> dict:
        return await self.put(f"/v1/routines/{routine_id}", body)

    # --- Exercise templates ---

    async def get_exercise_templates(self, page: int = 1, page_size: int = 20) -> dict:
        return await self.get("/v1/exercise_templates", {"page": page, "pageSize": page_size})

    async def get_exercise_template(self, exercise_template_id: str) -> dict:
        return await self.get(f"/v1/exercise_templates/{exercise_template_id}")

    async def create_exercise_template(self, body: dict) -> dict:
        return await self.post("/v1/exercise_templates", body)

    async def get_exercise_history(
        self,
        exercise_template_id: str,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> dict:
        """Fetch every logged set of one exercise template, optionally within a date window."""
        return await self.get(
            f"/v1/exercise_history/{exercise_template_id}",
            {"start_date": start_date, "end_date": end_date},
        )

    # --- Routine folders ---

    async def get_routine_folders(self, page: int = 1, page_size: int = 10) -> dict:
        return await self.get("/v1/routine_folders", {"page": page, "pageSize": page_size})

    async def get_routine_folder(self, folder_id: int) -> dict:
        return await self.get(f"/v1/routine_folders/{folder_id}")

    async def create_routine_folder(self, body: dict) -> dict:
        return await self.post("/v1/routine_folders", body)
