import base64
import hashlib
import hmac
import json
import secrets
import time
from typing import Any

from orgchat.core.settings import settings


def _get_signing_key() -> bytes:
    return (settings.state_signing_key or settings.supabase_jwt_secret).encode()


def _sign_data(data: str) -> str:
    return hmac.new(_get_signing_key(), data.encode(), hashlib.sha256).hexdigest()


def create_org_state(organization_id: str, email: str | None = None) -> str:
    """Sign the organization picked at signup so it survives email confirmation."""
    payload = {
        "nonce": secrets.token_urlsafe(8),
        "organization_id": organization_id,
        "email": email.lower() if email else None,
        "exp": int(time.time()) + settings.org_state_expire_seconds,
    }
    payload_json = json.dumps(payload, separators=(",", ":"))
    payload_b64 = base64.urlsafe_b64encode(payload_json.encode()).decode()
    return f"{payload_b64}.{_sign_data(payload_b64)}"


def verify_org_state(state: str) -> dict[str, Any] | None:
    parts = state.split(".")
    if len(parts) != 2:
        return None

    payload_b64, signature = parts
    if not hmac.compare_digest(signature, _sign_data(payload_b64)):
        return None

    try:
        payload = json.loads(base64.urlsafe_b64decode(payload_b64.encode()).decode())
    except (ValueError, UnicodeDecodeError):
        return None

    if not isinstance(payload, dict) or not payload.get("organization_id"):
        return None
    if payload.get("exp", 0) < int(time.time()):
        return None
    return payload


def organization_from_state(state: str | None, email: str | None) -> str | None:
    """Return the signed organization id when the state is valid for this email."""
    if not state:
        return None
    payload = verify_org_state(state)
    if payload is None:
        return None
    bound_email = payload.get("email")
    if bound_email and (email or "").lower() != bound_email:
        return None
    return payload["organization_id"]
