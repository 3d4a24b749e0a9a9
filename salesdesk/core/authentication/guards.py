from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from fastapi.security.utils import get_authorization_scheme_param
from loguru import logger

from salesdesk.common import context
from salesdesk.common.exceptions import AuthenticationError
from salesdesk.core.authentication.domains import CurrentIdentity
from salesdesk.core.authentication.service import (
    AuthenticationService,
    AuthTokenExpired,
    AuthTokenInvalid,
)


class OAuth2Token(OAuth2PasswordBearer):
    async def __call__(self, request: Request) -> Optional[str]:
        # Check for existence of raw token
        authorization = request.headers.get('Authorization')
        scheme, token = get_authorization_scheme_param(authorization)
        if not authorization or scheme.lower() != 'bearer' or not token:
            if self.auto_error:
                raise AuthenticationError()
            else:
                return None
        return token


oauth = OAuth2Token(
    scheme_name='bearer-authentication',
    tokenUrl='api/auth/token',
    description='Bearer access token issued by the CRM',
)


def get_current_identity(
    token: str = Depends(oauth),
    authn_service: AuthenticationService = Depends(AuthenticationService.factory),
) -> CurrentIdentity:
    try:
        identity = authn_service.get_identity_from_token(token)
    except AuthTokenExpired:
        raise AuthenticationError(message='Expired access token')
    except AuthTokenInvalid as e:
        logger.debug(f'rejected access token: {e.message}')
        raise AuthenticationError(message='Invalid access token')

    # Update global context with authenticated user
    context.set_user(
        user_type=context.AppContextUserType.USER,
        user_id=identity.user_id,
    )

    return identity
