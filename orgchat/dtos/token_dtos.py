from datetime import datetime

from pydantic import BaseModel


class AccessTokenPayload(BaseModel):
    sub: str
    email: str | None = None
    role: str | None = None
    aud: str | list[str] | None = None
    iat: datetime | None = None
    exp: datetime
