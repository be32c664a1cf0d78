"""Hevy MCP Server."""

import logging
import sys
from typing import Callable

import httpx
from mcp.server.auth.middleware.auth_context import get_access_token
from mcp.server.fastmcp import FastMCP

from hevy_mcp.config import Settings
from hevy_mcp.hevy.credentials import CredentialStore, EnvCredentialStore
from hevy_mcp.tools import HevyTools, ToolHandler, build_tool_table

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "Tools for the Hevy workout tracker. Read tools return the API payload as JSON; "
    "write tools accept the same shape a read returns, so a workout or routine can be "
    "fetched, edited and sent back. Failed calls return an explanation and how to fix it."
)


def user_resolver(default_user: str) -> Callable[[], str]:
    """Identify the caller by access token, falling back to ``default_user``.

    The token's ``client_id`` names the OAuth client, not the person behind
    it. Every user of one client therefore shares a stored API key. Deploy
    one client per Hevy account, or give ``create_server`` a
    ``resolve_user`` that reads a user claim when the auth provider supplies one.
    """

    def resolve() -> str:
        token = get_access_token()
        if token is not None:
            return token.client_id
        return default_user

    return resolve


def register_tools(mcp: FastMCP, table: dict[str, ToolHandler]) -> None:
    for name, handler in table.items():
        mcp.add_tool(handler, name=name, structured_output=False)
    logger.debug("Registered %d tools", len(table))


def create_server(
    settings: Settings | None = None,
    credentials: CredentialStore | None = None,
    resolve_user: Callable[[], str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastMCP:
    settings = settings or Settings.from_env()
    credentials = credentials or EnvCredentialStore(settings.api_key)

    tools = HevyTools(
        credentials,
        settings=settings,
        user_resolver=resolve_user or user_resolver(settings.default_user),
        transport=transport,
    )
    mcp = FastMCP("hevy", instructions=INSTRUCTIONS)
    register_tools(mcp, build_tool_table(tools))
    return mcp


def configure_logging(level: str) -> None:
    # stdout carries the stdio transport
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main():
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    if not settings.api_key:
        logger.warning("HEVY_API_KEY is not set; tools will report missing credentials")

    mcp = create_server(settings)
    logger.info("Starting Hevy MCP server (%s transport)", settings.transport)
    mcp.run(transport=settings.transport)


if __name__ == "__main__":
    main()
