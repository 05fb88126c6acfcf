from __future__ import annotations

from starlette.requests import Request

SESSION_KEY = "_messages"


def flash(request: Request, message: str, category: str = "info") -> None:
    """Queue a message for the next rendered page (success, warning, danger, info)."""
    queued = list(request.session.get(SESSION_KEY, []))
    queued.append({"message": message, "category": category})
    request.session[SESSION_KEY] = queued


def get_flashed_messages(request: Request) -> list[dict[str, str]]:
    return request.session.pop(SESSION_KEY, [])
