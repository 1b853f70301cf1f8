"""
Session correlator.

Reconciles an identifier minted outside the upload request (for example a
payment checkout id) with the internal session that holds the source text.

Resolution order:
1. The identifier is itself a live session id.
2. A mapping for the identifier already exists.
3. Bind to a live session: the only one, or the lexicographically first
   when several are live. The multi-candidate case is an accepted
   ambiguity that only holds up under one active user at a time.

Once persisted, a mapping is never rewritten until it expires, so repeated
resolutions return the same session even when new sessions appear.

Dependencies: cv_roast.boundary.store, cv_roast.models
System role: Cross-namespace session identity
"""

import logging
from datetime import timedelta

from pydantic import ValidationError

from cv_roast.boundary.store.session_keys import SessionKeys
from cv_roast.boundary.store.session_store import SessionStore
from cv_roast.core.exceptions import SessionNotFoundError, StorageError
from cv_roast.models.session import SessionMapping
from cv_roast.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class SessionCorrelator:
    """Resolves external identifiers to internal session ids."""

    def __init__(
        self,
        store: SessionStore,
        keys: SessionKeys,
        ttl_seconds: int = 24 * 60 * 60,
    ) -> None:
        """
        Initialize correlator.

        Args:
            store: Session store holding documents and mappings
            keys: Key namespace
            ttl_seconds: Lifetime of newly created mappings
        """
        self._store = store
        self._keys = keys
        self._ttl_seconds = ttl_seconds

    async def resolve(self, external_id: str) -> str:
        """
        Resolve an identifier to the internal session owning the source text.

        Args:
            external_id: Session id or externally issued identifier

        Returns:
            str: Internal session id

        Raises:
            SessionNotFoundError: No live session can be bound, or the store
                could not be read
        """
        try:
            return await self._resolve(external_id)
        except StorageError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:resolve - Store unavailable, treating as not found",
                e,
                external_id=external_id,
            )
            raise SessionNotFoundError(external_id, {"cause": "storage_unavailable"}) from e

    async def _resolve(self, external_id: str) -> str:
        if await self._store.get(self._keys.document(external_id)) is not None:
            return external_id

        existing = await self._read_mapping(external_id)
        if existing is not None:
            return existing.internal_id

        keys = await self._store.list_keys_with_prefix(self._keys.document_prefix)
        candidates = sorted(self._keys.session_id_from_document_key(key) for key in keys)
        if not candidates:
            raise SessionNotFoundError(external_id)

        if len(candidates) > 1:
            logger.warning(
                f"{__name__}:resolve - Multiple live sessions, binding to the first",
                extra={"external_id": external_id, "candidate_count": len(candidates)},
            )

        return await self._bind(external_id, candidates[0])

    async def _bind(self, external_id: str, internal_id: str) -> str:
        """Persist a new mapping and return whichever binding the store holds."""
        mapping = SessionMapping.bind(
            external_id,
            internal_id,
            ttl=timedelta(seconds=self._ttl_seconds),
        )
        stored = await self._store.put(
            self._keys.mapping(external_id),
            mapping.model_dump_json(),
            self._ttl_seconds,
        )
        logger.info(
            f"{__name__}:bind - Bound external id to session",
            extra={"external_id": external_id, "session_id": internal_id, "persisted": stored},
        )
        if not stored:
            return internal_id

        # A concurrent resolver may have persisted its own binding meanwhile.
        persisted = await self._read_mapping(external_id)
        return persisted.internal_id if persisted is not None else internal_id

    async def _read_mapping(self, external_id: str) -> SessionMapping | None:
        raw = await self._store.get(self._keys.mapping(external_id))
        if raw is None:
            return None
        try:
            return SessionMapping.model_validate_json(raw)
        except ValidationError:
            logger.warning(
                f"{__name__}:resolve - Ignoring unreadable mapping",
                extra={"external_id": external_id},
            )
            return None
