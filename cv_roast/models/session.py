"""
Session domain models.

Session tokens, stored document text and external-id mappings.
Serialized as JSON values in the session store.

Dependencies: pydantic
System role: Session-scoped state contracts
"""

import uuid
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field

SESSION_TTL = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Session(BaseModel):
    """Opaque token pairing one uploaded document with its critique."""

    session_id: str
    created_at: datetime
    expires_at: datetime

    @classmethod
    def new(cls, ttl: timedelta = SESSION_TTL, now: datetime | None = None) -> "Session":
        """
        Mint a session with a random identifier.

        Args:
            ttl: Session lifetime
            now: Creation time (defaults to current UTC time)

        Returns:
            Session: New session expiring at now + ttl
        """
        created_at = now or _utcnow()
        return cls(
            session_id=str(uuid.uuid4()),
            created_at=created_at,
            expires_at=created_at + ttl,
        )


class DocumentRecord(BaseModel):
    """Extracted text of the document uploaded for a session."""

    session_id: str
    raw_text: str
    stored_at: datetime = Field(default_factory=_utcnow)


class SessionMapping(BaseModel):
    """Binding of an externally issued identifier to an internal session."""

    external_id: str
    internal_id: str
    created_at: datetime
    expires_at: datetime

    @classmethod
    def bind(
        cls,
        external_id: str,
        internal_id: str,
        ttl: timedelta = SESSION_TTL,
        now: datetime | None = None,
    ) -> "SessionMapping":
        """Create a mapping whose lifetime starts now."""
        created_at = now or _utcnow()
        return cls(
            external_id=external_id,
            internal_id=internal_id,
            created_at=created_at,
            expires_at=created_at + ttl,
        )
