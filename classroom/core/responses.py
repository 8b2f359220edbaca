"""
Error envelope shared by the exception handlers.

Successful responses carry ``success: true`` through their response models.
"""

from typing import Any


def error_response(error: str, details: Any = None) -> dict:
    body: dict[str, Any] = {"success": False, "error": error}
    if details is not None:
        body["details"] = details
    return body
