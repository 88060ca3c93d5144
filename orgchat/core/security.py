import jwt
from pydantic import ValidationError

from orgchat.core.settings import settings
from orgchat.dtos.token_dtos import AccessTokenPayload


class TokenService:
    """Verifies access tokens issued by the hosted auth service."""

    def __init__(self, secret: str, audience: str, algorithm: str = "HS256"):
        self._secret = secret
        self._audience = audience
        self._algorithm = algorithm

    def verify_access_token(self, token: str) -> AccessTokenPayload | None:
        if not token or not self._secret:
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
            )
            return AccessTokenPayload(**payload)
        except jwt.ExpiredSignatureError:
            return None
        except jwt.InvalidTokenError:
            return None
        except ValidationError:
            return None


token_service = TokenService(
    secret=settings.supabase_jwt_secret,
    audience=settings.supabase_jwt_audience,
)
