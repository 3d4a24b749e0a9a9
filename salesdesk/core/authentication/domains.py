from salesdesk.common.domain import BaseDomain
from salesdesk.core.authorization.constants import Role


class TokenContent(BaseDomain):
    sub: str
    role: str | None = None
    exp: int | None = None
    iat: int | None = None


class CurrentIdentity(BaseDomain):
    """
    Who is calling. Only authenticated identities ever reach the services.
    """

    is_authenticated: bool = True
    user_id: str
    role: Role = Role.BASIC
