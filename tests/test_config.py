"""Tests for settings, credential stores and server assembly."""

import pytest
from mcp.types import CallToolResult

from hevy_mcp.config import Settings
from hevy_mcp.hevy.client import DEFAULT_BASE_URL
from hevy_mcp.hevy.credentials import (
    CredentialStore,
    EnvCredentialStore,
    InMemoryCredentialStore,
    mask_api_key,
)
from hevy_mcp.hevy.exceptions import ConfigurationError
from hevy_mcp.server import create_server, user_resolver
from hevy_mcp.tools import TOOL_NAMES

from conftest import API_KEY, WORKOUT_ID


class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env({})

        assert settings.api_key is None
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout == 30.0
        assert settings.default_user == "default"
        assert settings.transport == "stdio"
        assert settings.log_level == "INFO"

    def test_reads_environment(self):
        settings = Settings.from_env({
            "HEVY_API_KEY": "abc123",
            "HEVY_BASE_URL": "https://hevy.example.test",
            "HEVY_TIMEOUT": "5",
            "HEVY_MCP_USER": "alice",
            "HEVY_MCP_TRANSPORT": "streamable-http",
            "LOG_LEVEL": "DEBUG",
        })

        assert settings.api_key == "abc123"
        assert settings.base_url == "https://hevy.example.test"
        assert settings.timeout == 5.0
        assert settings.default_user == "alice"
        assert settings.transport == "streamable-http"
        assert settings.log_level == "DEBUG"

    def test_empty_values_fall_back_to_defaults(self):
        settings = Settings.from_env({"HEVY_API_KEY": "", "HEVY_TIMEOUT": ""})

        assert settings.api_key is None
        assert settings.timeout == 30.0

    @pytest.mark.parametrize("environ", [
        {"HEVY_TIMEOUT": "0"},
        {"HEVY_TIMEOUT": "soon"},
        {"HEVY_MCP_TRANSPORT": "carrier-pigeon"},
    ])
    def test_invalid_values_raise_configuration_error(self, environ):
        with pytest.raises(ConfigurationError, match="Invalid server settings"):
            Settings.from_env(environ)


class TestCredentialStores:

    def test_env_store_shares_one_key(self):
        store = EnvCredentialStore("abc123")

        assert store.get_credential("alice") == "abc123"
        assert store.get_credential("bob") == "abc123"

    def test_env_store_without_key(self):
        assert EnvCredentialStore("").get_credential("alice") is None

    def test_in_memory_store(self):
        store = InMemoryCredentialStore({"alice": "alice-key"})
        store.set_credential("bob", "bob-key")

        assert store.get_credential("alice") == "alice-key"
        assert store.get_credential("bob") == "bob-key"
        assert store.get_credential("carol") is None
        assert store.user_count == 2

        store.delete_credential("alice")
        store.delete_credential("nobody")
        assert store.get_credential("alice") is None
        assert store.user_count == 1

    def test_stores_satisfy_protocol(self):
        assert isinstance(EnvCredentialStore(None), CredentialStore)
        assert isinstance(InMemoryCredentialStore(), CredentialStore)

    @pytest.mark.parametrize("api_key,masked", [
        ("abcd", "****"),
        ("abcdef123456", "********3456"),
    ])
    def test_mask_api_key(self, api_key, masked):
        assert mask_api_key(api_key) == masked


class TestServer:

    def test_user_resolver_falls_back_without_token(self):
        assert user_resolver("alice")() == "alice"

    @pytest.mark.asyncio
    async def test_registers_every_tool(self):
        mcp = create_server(Settings(api_key="abc123"))

        tools = await mcp.list_tools()

        assert sorted(tool.name for tool in tools) == sorted(TOOL_NAMES)

    @pytest.mark.asyncio
    async def test_tool_schemas_come_from_signatures(self):
        mcp = create_server(Settings(api_key="abc123"))

        tools = {tool.name: tool for tool in await mcp.list_tools()}

        create = tools["create_workout"].inputSchema
        assert set(create["required"]) == {"title", "start_time", "end_time", "exercises"}
        assert "Log a completed workout." in tools["create_workout"].description
        assert tools["get_workouts"].inputSchema["properties"]["page_size"]["default"] == 10



class TestServerDispatch:
    """Tool calls made through the registered FastMCP server."""

    @pytest.fixture
    def server(self, fake_hevy, credentials):
        return create_server(Settings(), credentials=credentials, transport=fake_hevy.transport)

    @pytest.mark.asyncio
    async def test_create_workout_round_trip(self, server, fake_hevy, workout_args):
        fake_hevy.respond("POST", "/v1/workouts", json={"id": WORKOUT_ID, "title": "Leg Day"})

        result = await server.call_tool("create_workout", workout_args)

        assert isinstance(result, CallToolResult)
        assert result.isError is False
        assert result.content[0].text == "Workout created successfully!"
        assert fake_hevy.last_request.headers["api-key"] == API_KEY
        assert fake_hevy.last_body()["workout"]["exercises"] == [
            {"exercise_template_id": "abc", "sets": [{"type": "normal", "weight_kg": 100, "reps": 10}]}
        ]

    @pytest.mark.asyncio
    async def test_bad_set_type_returns_schema_error(self, server, fake_hevy, workout_args):
        workout_args["exercises"][0]["sets"][0]["type"] = "heavy"

        result = await server.call_tool("create_workout", workout_args)

        assert isinstance(result, CallToolResult)
        assert result.isError is True
        text = result.content[0].text
        assert text.startswith("❌ Schema Validation Error")
        assert "exercises[0].sets[0].type" in text
        assert "**How to fix:**" in text
        assert fake_hevy.requests == []

    @pytest.mark.asyncio
    async def test_missing_exercise_field_returns_schema_error(self, server, fake_hevy, routine_args):
        del routine_args["exercises"][0]["exercise_template_id"]

        result = await server.call_tool("create_routine", routine_args)

        assert result.isError is True
        assert "**exercises[0].exercise_template_id**" in result.content[0].text
        assert fake_hevy.requests == []

    @pytest.mark.asyncio
    async def test_bad_enum_argument_returns_schema_error(self, server, fake_hevy):
        result = await server.call_tool("create_exercise_template", {
            "title": "Cable Fly",
            "exercise_type": "heavy_lifting",
            "equipment_category": "machine",
            "muscle_group": "chest",
        })

        assert result.isError is True
        assert "Schema Validation Error" in result.content[0].text
        assert "**exercise_type**" in result.content[0].text
        assert fake_hevy.requests == []

    @pytest.mark.asyncio
    async def test_domain_error_round_trip(self, server, fake_hevy, workout_args):
        workout_args["exercises"][0]["sets"][0]["weight_kg"] = -10

        result = await server.call_tool("create_workout", workout_args)

        assert isinstance(result, CallToolResult)
        assert result.isError is True
        assert result.content[0].text.startswith("❌ Validation Error")
        assert "cannot be negative" in result.content[0].text
        assert fake_hevy.requests == []

    @pytest.mark.asyncio
    async def test_upstream_error_round_trip(self, server):
        result = await server.call_tool("get_workout", {"workout_id": WORKOUT_ID})

        assert result.isError is True
        assert result.content[0].text.startswith("❌ Resource not found")

    @pytest.mark.asyncio
    async def test_resolve_user_selects_key(self, fake_hevy):
        store = InMemoryCredentialStore({"alice": "alice-key", "bob": "bob-key"})
        server = create_server(
            Settings(), credentials=store, resolve_user=lambda: "alice", transport=fake_hevy.transport
        )
        fake_hevy.respond("GET", "/v1/workouts/count", json={"workout_count": 3})

        result = await server.call_tool("get_workouts_count", {})

        assert result.content[0].text == "Total workouts: 3"
        assert fake_hevy.last_request.headers["api-key"] == "alice-key"

    @pytest.mark.asyncio
    async def test_missing_key_round_trip(self, fake_hevy):
        server = create_server(
            Settings(), credentials=InMemoryCredentialStore(), transport=fake_hevy.transport
        )

        result = await server.call_tool("get_workouts_count", {})

        assert result.isError is True
        assert "Hevy API key not configured" in result.content[0].text
