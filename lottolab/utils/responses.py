"""Helpers for a consistent response envelope."""

from __future__ import annotations

from typing import Any


def ok(data: Any) -> dict[str, Any]:
    """Success envelope."""

    return {"success": True, "data": data, "error": None}


def fail(code: str, message: str, details: Any | None = None) -> dict[str, Any]:
    """Error envelope."""

    return {
        "success": False,
        "data": None,
        "error": {"code": code, "message": message, "details": details},
    }
