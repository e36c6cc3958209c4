"""Visitor gate: dashboard pages answer only the browser that signed in."""

from __future__ import annotations

import secrets

from fastapi import Cookie, Depends, FastAPI, Request

from business_hub.domain.errors import SessionExpiredError

SESSION_COOKIE = "business_hub_session"


def _get_visitor_key(request: Request) -> str | None:
    return request.app.state.visitor_key


async def require_visitor(
    visitor_cookie: str | None = Cookie(default=None, alias=SESSION_COOKIE),
    visitor_key: str | None = Depends(_get_visitor_key),
) -> None:
    """Send visitors without the sign-in cookie back to the login page."""
    if (
        not visitor_cookie
        or not visitor_key
        or not secrets.compare_digest(visitor_cookie, visitor_key)
    ):
        raise SessionExpiredError


def issue_visitor_key(app: FastAPI) -> str:
    """Start a new visit, replacing any earlier one."""
    key = secrets.token_urlsafe(32)
    app.state.visitor_key = key
    return key


def revoke_visitor_key(app: FastAPI) -> None:
    app.state.visitor_key = None
