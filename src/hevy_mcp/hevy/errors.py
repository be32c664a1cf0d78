"""Turn any failure into a single MCP tool result.

Whatever went wrong (the Hevy API refused the call, the arguments had the
wrong shape, a domain rule failed, or something unexpected was raised) the
caller gets a ``CallToolResult`` with ``isError=True`` and one text block
laid out as::

    ❌ <headline>

    **What went wrong:**
    <message>

    **Details:** / **Validation Errors:** / **Validation Issues:** (optional)

    **How to fix:**
      - <advice>
"""

from collections import defaultdict

import pydantic
from mcp.types import CallToolResult, TextContent

from hevy_mcp.hevy.exceptions import (
    CredentialsNotConfiguredError,
    HevyAPIError,
    ValidationError,
)

STATUS_MESSAGES: dict[int, str] = {
    400: "Invalid request parameters",
    401: "Unauthorized - Invalid API key",
    403: "Limit exceeded or unauthorized",
    404: "Resource not found",
    429: "Rate limit exceeded",
    500: "Hevy API error",
    502: "Hevy API is temporarily unavailable",
    503: "Hevy API is temporarily unavailable",
}

_SERVER_ADVICE = [
    "This is a temporary Hevy API issue",
    "Try again in a few moments",
    "If the problem persists, contact Hevy support",
]

STATUS_ADVICE: dict[int, list[str]] = {
    400: [
        "Check that all required parameters are provided",
        "Verify parameter formats (dates, IDs, numbers)",
        "Ensure all values are within valid ranges",
    ],
    401: [
        "Verify your Hevy API key is configured (HEVY_API_KEY or the per-user key store)",
        "Check that your API key is still valid",
        "Generate a new API key from Hevy if needed",
    ],
    403: [
        "You may have exceeded API rate limits",
        "Try reducing the frequency of requests",
        "Contact Hevy support if limits are too restrictive",
    ],
    404: [
        "Verify the resource ID exists",
        "Check for typos in the ID",
        "Use list tools (e.g., get_workouts) to find valid IDs",
    ],
    429: [
        "Wait before making more requests",
        "Back off exponentially between retries",
        "Reduce request frequency",
    ],
    500: _SERVER_ADVICE,
    502: _SERVER_ADVICE,
    503: _SERVER_ADVICE,
}

DEFAULT_STATUS_ADVICE = [
    "Review the error details above",
    "Consult the Hevy API documentation",
    "Contact Hevy support if the issue persists",
]

# First entry whose phrase appears in the lowercased message wins.
VALIDATION_ADVICE: list[tuple[tuple[str, ...], list[str]]] = [
    (("page must be",), [
        "Page numbers start at 1",
        "Provide a valid page number (1 or greater)",
    ]),
    (("page size",), [
        "Check the maximum page size for this tool",
        "Reduce the page_size parameter",
        "Use pagination to retrieve data in smaller chunks",
    ]),
    (("iso 8601", "not a valid date"), [
        "Use ISO 8601 format: YYYY-MM-DDTHH:mm:ssZ",
        "Example: 2024-01-15T10:00:00Z",
        "Include timezone (Z for UTC or ±HH:mm)",
    ]),
    (("must be after",), [
        "Ensure end_time is later than start_time",
        "Check for typos in date/time values",
        "Verify timezone offsets are correct",
    ]),
    (("rpe",), [
        "RPE must be one of: 6, 7, 7.5, 8, 8.5, 9, 9.5, 10",
        "Use half-step increments (e.g., 7.5, 8.5)",
        "Leave RPE null if not tracking it",
    ]),
    (("valid uuid",), [
        "IDs look like b459cba5-cd6d-463c-abd6-54f8eafcadcb",
        "Use list tools (e.g., get_workouts) to find valid IDs",
    ]),
    (("at least one exercise", "exercises must be an array"), [
        "Include at least one exercise in your workout/routine",
        "Verify the exercises array is not empty",
    ]),
    (("missing required field",), [
        "Check that all required exercise fields are present",
        "Verify exercise template IDs are valid",
    ]),
    (("at least one set", "sets array"), [
        "Include at least one set for each exercise",
        "Verify the sets array is not empty",
    ]),
    (("set type", ": type is required"), [
        "Set type must be one of: warmup, normal, failure, dropset",
    ]),
    (("rep_range.start cannot be greater",), [
        "Ensure rep range start is less than or equal to end",
        "Both start and end should be positive numbers",
        "Example: { start: 8, end: 12 }",
    ]),
    (("cannot be negative",), [
        "Ensure all numeric values are positive or zero",
        "Check weight, reps, distance, duration and rest values",
    ]),
    (("title is required",), [
        "Provide a non-empty title",
        "Title cannot be just whitespace",
    ]),
]

DEFAULT_VALIDATION_ADVICE = [
    "Review the error message for specific details",
    "Check that all values match expected types and formats",
    "Verify required fields are present",
]


def error_result(text: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=True)


def _bullets(lines: list[str], indent: str = "  ") -> list[str]:
    return [f"{indent}- {line}" for line in lines]


def format_api_error(error: HevyAPIError) -> CallToolResult:
    """Explain a non-2xx answer from the Hevy API."""
    headline = STATUS_MESSAGES.get(error.status_code, f"Unexpected error (HTTP {error.status_code})")
    parts = [f"❌ {headline}", "", "**What went wrong:**", str(error)]

    data = error.data
    if isinstance(data, str) and data:
        parts += ["", "**Details:**", data]
    elif isinstance(data, dict):
        details = [str(data[key]) for key in ("error", "message") if data.get(key)]
        if details:
            parts += ["", "**Details:**", *details]
        errors = data.get("errors")
        if isinstance(errors, list):
            parts += ["", "**Validation Errors:**"]
            for err in errors:
                if isinstance(err, str):
                    parts.append(f"  - {err}")
                elif isinstance(err, dict) and err.get("field") and err.get("message"):
                    parts.append(f"  - {err['field']}: {err['message']}")

    parts += ["", "**How to fix:**"]
    parts += _bullets(STATUS_ADVICE.get(error.status_code, DEFAULT_STATUS_ADVICE))
    return error_result("\n".join(parts))


def format_location(loc: tuple) -> str:
    """Render a pydantic error location as ``exercises[0].sets[1].type``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "root"


def format_schema_error(error: pydantic.ValidationError) -> CallToolResult:
    """Explain arguments that do not match the tool's declared shape."""
    parts = [
        "❌ Schema Validation Error",
        "",
        "**What went wrong:**",
        "The provided data does not match the expected format.",
        "",
        "**Validation Issues:**",
    ]

    by_path: dict[str, list[str]] = defaultdict(list)
    for issue in error.errors():
        by_path[format_location(issue["loc"])].append(issue["msg"])

    for path, messages in by_path.items():
        if path == "root":
            parts += _bullets(messages)
        else:
            parts.append(f"  - **{path}**:")
            parts += [f"    {message}" for message in messages]

    parts += ["", "**How to fix:**"]
    parts += _bullets([
        "Review the validation issues listed above",
        "Ensure all required fields are provided",
        "Check that field types match expected types (string, number, etc.)",
        "Verify that enum values are from the allowed set",
    ])
    return error_result("\n".join(parts))


def remediation_for(message: str) -> list[str]:
    lowered = message.lower()
    for phrases, advice in VALIDATION_ADVICE:
        if any(phrase in lowered for phrase in phrases):
            return advice
    return DEFAULT_VALIDATION_ADVICE


def format_validation_error(error: ValidationError) -> CallToolResult:
    """Explain a broken domain rule with advice picked from the message."""
    message = str(error)
    parts = ["❌ Validation Error", "", "**What went wrong:**", message, "", "**How to fix:**"]
    parts += _bullets(remediation_for(message))
    return error_result("\n".join(parts))


def format_credentials_error(error: CredentialsNotConfiguredError) -> CallToolResult:
    parts = [
        "❌ Hevy API key not configured",
        "",
        "**What went wrong:**",
        str(error),
        "",
        "**How to fix:**",
    ]
    parts += _bullets([
        "Set HEVY_API_KEY for single-user setups",
        "Or store a key for this user in the credential store",
        "Get an API key from the Hevy app settings (Hevy Pro required)",
    ])
    return error_result("\n".join(parts))


def handle_error(error: object) -> CallToolResult:
    """Route any raised value to its formatter."""
    if isinstance(error, HevyAPIError):
        return format_api_error(error)
    if isinstance(error, pydantic.ValidationError):
        return format_schema_error(error)
    if isinstance(error, ValidationError):
        return format_validation_error(error)
    if isinstance(error, CredentialsNotConfiguredError):
        return format_credentials_error(error)
    if isinstance(error, Exception):
        return error_result(f"❌ Error: {error}")
    return error_result("❌ An unknown error occurred")
