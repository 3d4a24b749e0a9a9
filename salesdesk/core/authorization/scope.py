"""
Decides whose rows a caller may aggregate.

A scope is either a set of user ids or None. None means no restriction and is
only ever produced for admins.
"""
from typing import Iterable, Optional

from loguru import logger

from salesdesk.common.utils import safe_uuid_parse
from salesdesk.core.authentication.domains import CurrentIdentity
from salesdesk.core.authorization.constants import Role

VisibilityScope = Optional[frozenset[str]]


def parse_user_ids(raw: str | None) -> list[str]:
    """
    Comma separated ids, trimmed and de-duplicated in order of appearance.
    Anything that is not a UUID is dropped.
    """
    if raw is None or not raw.strip():
        return []

    parsed: list[str] = []
    for candidate in raw.split(','):
        user_id = safe_uuid_parse(candidate)
        if user_id is None:
            if candidate.strip():
                logger.debug(f'dropping invalid user id from filter: {candidate.strip()!r}')
            continue
        if user_id not in parsed:
            parsed.append(user_id)
    return parsed


def _as_scope(user_ids: Iterable[str]) -> VisibilityScope:
    scope = frozenset(user_ids)
    return scope or None


def resolve_visibility_scope(
    identity: CurrentIdentity,
    user_ids: str | None = None,
    user_id: str | None = None,
) -> VisibilityScope:
    """
    Basic users only ever see themselves, whatever they ask for.
    Admins see everyone unless they narrow with `userIds`, or failing that `userId`.
    """
    if Role.parse(identity.role) != Role.ADMIN:
        return frozenset([identity.user_id])

    if user_ids is not None and user_ids.strip():
        return _as_scope(parse_user_ids(user_ids))

    single_user_id = safe_uuid_parse(user_id)
    if single_user_id is not None:
        return frozenset([single_user_id])

    return None


def resolve_dashboard_scope(identity: CurrentIdentity, user_ids: str | None = None) -> VisibilityScope:
    """
    Dashboard totals are shared by the whole team. Admins may still narrow them
    to a set of users, everyone else gets the unrestricted totals.
    """
    if Role.parse(identity.role) != Role.ADMIN:
        return None

    return _as_scope(parse_user_ids(user_ids))
