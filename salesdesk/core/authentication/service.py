import jwt

from salesdesk import settings
from salesdesk.common.exceptions import InternalException
from salesdesk.common.utils import safe_uuid_parse
from salesdesk.core.authentication.domains import CurrentIdentity, TokenContent
from salesdesk.core.authorization.constants import Role


class AuthException(InternalException): ...


class AuthTokenExpired(AuthException): ...


class AuthTokenInvalid(AuthException): ...


class AuthenticationService:
    """
    Verifies access tokens issued by the CRM. Issuing tokens is not our job.
    """

    _JWT_SIGNING_ALGORITHM = settings.JWT_ALGORITHM

    @classmethod
    def factory(cls) -> 'AuthenticationService':
        return cls()

    @classmethod
    def verify_jwt_token(cls, token: str | None) -> TokenContent:
        if token is None:
            raise AuthTokenInvalid(message='Token missing')
        if not isinstance(token, str):
            raise AuthTokenInvalid(message='Invalid token format')

        try:
            decoded_token = jwt.decode(token, settings.SECRET_KEY, algorithms=[cls._JWT_SIGNING_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthTokenExpired(message='Token expired')
        except jwt.InvalidTokenError:
            raise AuthTokenInvalid(message='Token invalid')

        if not isinstance(decoded_token.get('sub'), str):
            raise AuthTokenInvalid(message='Token subject missing')

        return TokenContent(**{key: decoded_token.get(key) for key in ('sub', 'role', 'exp', 'iat')})

    def get_identity_from_token(self, token: str | None) -> CurrentIdentity:
        token_content = self.verify_jwt_token(token)
        user_id = safe_uuid_parse(token_content.sub)
        if user_id is None:
            raise AuthTokenInvalid(message='Token subject is not a user id')

        return CurrentIdentity(
            is_authenticated=True,
            user_id=user_id,
            role=Role.parse(token_content.role),
        )
