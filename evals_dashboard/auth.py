"""Password gate backed by a single session flag.

This only keeps casual visitors out of the dashboard view; it is not a
security boundary.
"""

from __future__ import annotations

import hmac
from typing import Any, MutableMapping

from evals_dashboard.config import DASHBOARD_PASSWORD, SESSION_FLAG_KEY, SESSION_FLAG_VALUE


def check_password(candidate: str, expected: str = DASHBOARD_PASSWORD) -> bool:
    return hmac.compare_digest(candidate.encode(), expected.encode())


def is_authenticated(session: MutableMapping[str, Any]) -> bool:
    return session.get(SESSION_FLAG_KEY) == SESSION_FLAG_VALUE


def authenticate(
    session: MutableMapping[str, Any],
    password: str,
    expected: str = DASHBOARD_PASSWORD,
) -> bool:
    """Set the session flag if ``password`` matches. Returns whether it did."""
    if not check_password(password, expected):
        return False
    session[SESSION_FLAG_KEY] = SESSION_FLAG_VALUE
    return True


def logout(session: MutableMapping[str, Any]) -> None:
    session.pop(SESSION_FLAG_KEY, None)
