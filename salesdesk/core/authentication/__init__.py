from salesdesk.core.authentication.domains import CurrentIdentity, TokenContent
from salesdesk.core.authentication.guards import get_current_identity, oauth
from salesdesk.core.authentication.service import (
    AuthenticationService,
    AuthException,
    AuthTokenExpired,
    AuthTokenInvalid,
)

__all__ = [
    'AuthException',
    'AuthTokenExpired',
    'AuthTokenInvalid',
    'AuthenticationService',
    'CurrentIdentity',
    'TokenContent',
    'get_current_identity',
    'oauth',
]
