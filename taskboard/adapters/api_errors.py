"""Errors raised by the task server adapters.

``rest_api/app.py`` reports failures with FastAPI's ``{"detail": ...}`` body:
a plain string for ``HTTPException`` (401 key check, 404 unknown task) and a
list of validation entries for 422. ``error_for_response`` reads that body and
returns the matching ``ApiError`` subclass.
"""

from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for task server failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        detail: Optional[str] = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.detail = detail
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the task server."""


class ApiServerError(ApiError):
    """HTTP 5xx from the task server."""


class ApiTimeoutError(ApiError):
    """Timeout or connection failure before any response arrived."""


def response_detail(resp: Any) -> Optional[str]:
    """Return the human readable ``detail`` of an error response, if any."""
    try:
        body = resp.json()
    except ValueError:
        text = (getattr(resp, "text", "") or "").strip()
        return text[:200] or None

    detail = body.get("detail") if isinstance(body, dict) else body
    if isinstance(detail, str):
        return detail.strip() or None
    if isinstance(detail, list):
        # 422: [{"loc": ["body", "id"], "msg": "...", "type": "..."}]
        messages = []
        for entry in detail:
            if not isinstance(entry, dict) or not entry.get("msg"):
                continue
            field = ".".join(str(part) for part in entry.get("loc", ())[1:])
            messages.append(f"{field}: {entry['msg']}" if field else str(entry["msg"]))
        return "; ".join(messages) or None
    return None


def error_for_response(resp: Any, ctx: str) -> ApiError:
    status = resp.status_code
    detail = response_detail(resp)
    message = f"{ctx}: {detail} (HTTP {status})" if detail else f"{ctx}: HTTP {status}"
    if 400 <= status < 500:
        return ApiClientError(message, status=status, detail=detail, context=ctx)
    if 500 <= status < 600:
        return ApiServerError(message, status=status, detail=detail, context=ctx)
    return ApiError(message, status=status, detail=detail, context=ctx)


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "error_for_response",
    "response_detail",
]
