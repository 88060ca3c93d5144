import logging
from typing import Any

import aiohttp

from orgchat.constants.chat_errors import CHAT_ERROR_MESSAGES, ChatErrorCode
from orgchat.core.exceptions import AppException
from orgchat.core.settings import settings
from orgchat.models.identity import AuthSession, Identity

logger = logging.getLogger(__name__)


class AuthProviderError(AppException):
    def __init__(self, status_code: int, message: str):
        super().__init__(
            code=ChatErrorCode.AUTH_PROVIDER_ERROR.value,
            message=message,
            status_code=status_code if 400 <= status_code < 500 else 502,
        )
        self.provider_status = status_code


class SupabaseAuthClient:
    """Thin async client for the hosted auth service's REST API."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 10.0):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._client: aiohttp.ClientSession | None = None

    async def _get_client(self) -> aiohttp.ClientSession:
        if self._client is None or self._client.closed:
            logger.debug("Creating new aiohttp ClientSession for auth service")
            self._client = aiohttp.ClientSession(timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.closed:
            logger.debug("Closing auth service ClientSession")
            await self._client.close()
        self._client = None

    async def sign_up(
        self, email: str, password: str, redirect_to: str | None = None
    ) -> tuple[Identity, AuthSession | None]:
        data = await self._request(
            "POST",
            "/signup",
            body={"email": email, "password": password},
            params={"redirect_to": redirect_to} if redirect_to else None,
        )
        # without auto-confirm the service answers with the bare user object
        if data.get("access_token"):
            session = self._parse_session(data)
            return session.user or self._parse_identity(data.get("user")), session
        return self._parse_identity(data.get("user") or data), None

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        data = await self._request(
            "POST",
            "/token",
            body={"email": email, "password": password},
            params={"grant_type": "password"},
        )
        return self._parse_session(data)

    async def sign_in_with_otp(
        self, email: str, redirect_to: str | None = None, create_user: bool = False
    ) -> None:
        await self._request(
            "POST",
            "/otp",
            body={"email": email, "create_user": create_user},
            params={"redirect_to": redirect_to} if redirect_to else None,
        )

    async def verify_otp(self, token_hash: str, otp_type: str) -> AuthSession:
        data = await self._request(
            "POST",
            "/verify",
            body={"token_hash": token_hash, "type": otp_type},
        )
        return self._parse_session(data)

    async def refresh_session(self, refresh_token: str) -> AuthSession:
        data = await self._request(
            "POST",
            "/token",
            body={"refresh_token": refresh_token},
            params={"grant_type": "refresh_token"},
        )
        return self._parse_session(data)

    async def sign_out(self, access_token: str) -> None:
        await self._request("POST", "/logout", access_token=access_token)

    async def get_user(self, access_token: str) -> Identity | None:
        try:
            data = await self._request("GET", "/user", access_token=access_token)
        except AuthProviderError as e:
            if e.provider_status in (401, 403):
                return None
            raise
        return self._parse_identity(data)

    async def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {access_token or self._api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        url = f"{self._base_url}{path}"
        client = await self._get_client()

        logger.debug("Auth service request %s %s", method, path)
        try:
            async with client.request(
                method, url, json=body, params=params, headers=headers
            ) as response:
                try:
                    data = await response.json()
                except aiohttp.ContentTypeError:
                    data = {}
                if response.status >= 400:
                    message = (
                        self._error_message(data)
                        or response.reason
                        or CHAT_ERROR_MESSAGES[ChatErrorCode.AUTH_PROVIDER_ERROR]
                    )
                    logger.warning(
                        "Auth service %s %s failed: status=%s message=%s",
                        method,
                        path,
                        response.status,
                        message,
                    )
                    raise AuthProviderError(response.status, message)
                return data if isinstance(data, dict) else {}
        except aiohttp.ClientError as e:
            logger.error("Auth service unreachable at %s: %s", url, e)
            raise AuthProviderError(503, "Authentication service unavailable") from e

    @staticmethod
    def _error_message(data: Any) -> str | None:
        if not isinstance(data, dict):
            return None
        for key in ("msg", "error_description", "message", "error"):
            if data.get(key):
                return str(data[key])
        return None

    @staticmethod
    def _parse_identity(data: Any) -> Identity:
        if not isinstance(data, dict) or not data.get("id"):
            raise AuthProviderError(502, "Authentication service returned no user")
        return Identity(id=str(data["id"]), email=data.get("email"))

    def _parse_session(self, data: dict[str, Any]) -> AuthSession:
        if not data.get("access_token") or not data.get("refresh_token"):
            raise AuthProviderError(502, "Authentication service returned no session")
        user = data.get("user")
        return AuthSession(
            access_token=data["access_token"],
            refresh_token=data["refresh_token"],
            token_type=data.get("token_type", "bearer"),
            expires_in=data.get("expires_in"),
            user=self._parse_identity(user) if user else None,
        )


auth_client = SupabaseAuthClient(
    base_url=settings.auth_base_url,
    api_key=settings.supabase_anon_key,
    timeout=settings.auth_request_timeout_seconds,
)
