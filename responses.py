# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Structured API response helpers.

Every dispatch route answers with the same top-level structure:

  Success:
    {
      "status": "ok",
      "action": "<action_name>",
      "data": { ... }
    }

  Error:
    {
      "status": "error",
      "action": "<action_name>",
      "error_code": "<ERROR_CODE>",
      "message": "Human-readable error description"
    }

Error responses may carry extra fields (e.g. the unsaved snapshot when a
write fails).
"""

from typing import Any

INVALID_INPUT = "INVALID_INPUT"
GAME_NOT_FOUND = "GAME_NOT_FOUND"
GAME_EXISTS = "GAME_EXISTS"
INVALID_GAME_ID = "INVALID_GAME_ID"
PERSISTENCE_FAILED = "PERSISTENCE_FAILED"


def success_response(action: str, data: dict[str, Any]) -> dict[str, Any]:
    """Build a structured success response.

    Args:
        action: The name of the action producing this response.
        data: The action-specific data payload.
    """
    return {
        "status": "ok",
        "action": action,
        "data": data,
    }


def error_response(action: str, error_code: str, message: str, **extra: Any) -> dict[str, Any]:
    """Build a structured error response.

    Args:
        action: The name of the action producing this response.
        error_code: Machine-readable error code (e.g., GAME_NOT_FOUND).
        message: Human-readable error description.
        **extra: Additional fields to include.
    """
    return {
        "status": "error",
        "action": action,
        "error_code": error_code,
        "message": message,
        **extra,
    }
