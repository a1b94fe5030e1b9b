"""Identity service shapes: authenticated identity and session."""

import time
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class AuthIdentity(BaseModel):
    """An authenticated identity as issued by the identity service."""

    id: str
    email: str | None = None
    email_confirmed_at: datetime | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None

    class Config:
        extra = "ignore"

    @property
    def is_confirmed(self) -> bool:
        return self.email_confirmed_at is not None


class Session(BaseModel):
    """Opaque token bundle plus the identity it authenticates."""

    access_token: str
    refresh_token: str = ""
    token_type: str = "bearer"
    expires_in: int = 3600
    expires_at: int | None = None
    user: AuthIdentity

    class Config:
        extra = "ignore"

    def model_post_init(self, __context: Any) -> None:
        if self.expires_at is None:
            self.expires_at = int(time.time()) + self.expires_in

    def is_expired(self, margin: int = 10) -> bool:
        """True when the access token expires within ``margin`` seconds."""
        return self.expires_at is not None and self.expires_at - margin <= time.time()
