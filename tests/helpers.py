# tests/helpers.py

from datetime import date, datetime, timedelta, timezone
from typing import Dict

from taskboard.core.security import create_access_token, create_csrf_token
from taskboard.models import User


def auth_headers(user: User, with_csrf: bool = False) -> Dict[str, str]:
    headers = {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}
    if with_csrf:
        headers["X-CSRF-Token"] = create_csrf_token(user.id)
    return headers


def days_ago(n: int) -> date:
    return datetime.now(timezone.utc).date() - timedelta(days=n)
