import datetime
import time

import jwt

from salesdesk import settings


def at(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime.datetime:
    """
    Naive UTC, the way timestamps are stored
    """
    return datetime.datetime(year, month, day, hour, minute, second)


def make_access_token(sub: str, role: str | None = None, expires_in: int = 3600) -> str:
    """
    Bearer token shaped like the ones the CRM issues
    """
    claims = {'sub': sub, 'iat': int(time.time()), 'exp': int(time.time()) + expires_in}
    if role is not None:
        claims['role'] = role
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
