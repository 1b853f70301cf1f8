"""
Critique pipeline orchestrator.

Coordinates extraction, storage, generation and fallback for the two
operations of the service: the initial analysis of an uploaded document
and the deep analysis reached later through an external identifier.

Only an unreadable input document is surfaced as an error. Every other
failure degrades to fallback content.

Dependencies: fastapi.concurrency, cv_roast.core, cv_roast.boundary.store
System role: Critique use case orchestration
"""

import logging
from datetime import timedelta

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from cv_roast.application.services.session_correlator import SessionCorrelator
from cv_roast.boundary.store.session_keys import SessionKeys
from cv_roast.boundary.store.session_store import SessionStore
from cv_roast.core.critique.critique_generator import CritiqueGenerator
from cv_roast.core.critique.fallback_pool import FallbackPool
from cv_roast.core.critique.recommendation_generator import RecommendationGenerator
from cv_roast.core.exceptions import SessionNotFoundError, StorageError
from cv_roast.core.extraction.text_extractor import PdfTextExtractor
from cv_roast.models.critique import CritiqueResult, DeepAnalysisResult, GeneratedBy
from cv_roast.models.session import DocumentRecord, Session
from cv_roast.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class CritiquePipeline:
    """Critique pipeline orchestrator."""

    def __init__(
        self,
        store: SessionStore,
        critique_generator: CritiqueGenerator,
        recommendation_generator: RecommendationGenerator,
        fallback_pool: FallbackPool,
        extractor: PdfTextExtractor | None = None,
        correlator: SessionCorrelator | None = None,
        keys: SessionKeys | None = None,
        ttl_seconds: int = 24 * 60 * 60,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            store: Session store shared by all requests
            critique_generator: Generator for the initial critique
            recommendation_generator: Generator for the deep analysis
            fallback_pool: Canned content used on any generation failure
            extractor: Document text extractor
            correlator: Session correlator (built over the same store if None)
            keys: Key namespace
            ttl_seconds: Lifetime of every stored entry
        """
        self._store = store
        self._critique_generator = critique_generator
        self._recommendation_generator = recommendation_generator
        self._fallback_pool = fallback_pool
        self._extractor = extractor or PdfTextExtractor()
        self._keys = keys or SessionKeys()
        self._ttl_seconds = ttl_seconds
        self._correlator = correlator or SessionCorrelator(store, self._keys, ttl_seconds)

    async def analyze(self, file_bytes: bytes, file_name: str | None = None) -> tuple[CritiqueResult, str]:
        """
        Critique an uploaded document and open a session for it.

        Args:
            file_bytes: Raw document bytes
            file_name: Original file name (log context only)

        Returns:
            tuple[CritiqueResult, str]: Critique and the new session id

        Raises:
            ExtractionError: If the document is unreadable or empty
        """
        text = await run_in_threadpool(self._extractor.extract, file_bytes, file_name)

        session = Session.new(ttl=timedelta(seconds=self._ttl_seconds))
        session_id = session.session_id
        record = DocumentRecord(session_id=session_id, raw_text=text, stored_at=session.created_at)
        await self._store.put(self._keys.document(session_id), record.model_dump_json(), self._ttl_seconds)

        outcome = await self._critique_generator.generate(text, session_id)
        if outcome.succeeded:
            result = outcome.value
        else:
            result = self._fallback_pool.draw(session_id)

        await self._store.put(self._keys.critique(session_id), result.model_dump_json(), self._ttl_seconds)

        logger.info(
            f"{__name__}:analyze - Critique ready",
            extra={
                "session_id": session_id,
                "generated_by": result.generated_by.value,
                "text_chars": len(text),
            },
        )
        return result, session_id

    async def deep_analysis(self, identifier: str) -> DeepAnalysisResult:
        """
        Produce the detailed recommendation set for a session.

        Args:
            identifier: Internal session id or externally issued identifier

        Returns:
            DeepAnalysisResult: Personalized categories (source=model), or the
                generic catalog (source=fallback)
        """
        try:
            session_id = await self._correlator.resolve(identifier)
        except SessionNotFoundError:
            logger.info(
                f"{__name__}:deep_analysis - No session for identifier, serving generic set",
                extra={"identifier": identifier},
            )
            return self._generic_result()

        record = await self._load_document(session_id)
        if record is None:
            return self._generic_result()

        outcome = await self._recommendation_generator.generate(record.raw_text)
        if not outcome.succeeded:
            return self._generic_result()

        return DeepAnalysisResult(categories=outcome.value, source=GeneratedBy.MODEL)

    async def get_critique(self, session_id: str) -> CritiqueResult | None:
        """
        Read back the stored critique of a session.

        Args:
            session_id: Internal session id

        Returns:
            CritiqueResult | None: Stored critique, or None if missing,
                expired or unreadable
        """
        try:
            raw = await self._store.get(self._keys.critique(session_id))
        except StorageError as e:
            log_exception_with_context(logger, f"{__name__}:get_critique - Store unavailable", e, session_id=session_id)
            return None
        if raw is None:
            return None
        try:
            return CritiqueResult.model_validate_json(raw)
        except ValidationError:
            logger.warning(f"{__name__}:get_critique - Unreadable critique", extra={"session_id": session_id})
            return None

    async def _load_document(self, session_id: str) -> DocumentRecord | None:
        try:
            raw = await self._store.get(self._keys.document(session_id))
        except StorageError as e:
            log_exception_with_context(logger, f"{__name__}:deep_analysis - Store unavailable", e, session_id=session_id)
            return None
        if raw is None:
            logger.info(f"{__name__}:deep_analysis - Document expired", extra={"session_id": session_id})
            return None
        try:
            return DocumentRecord.model_validate_json(raw)
        except ValidationError:
            logger.warning(f"{__name__}:deep_analysis - Unreadable document", extra={"session_id": session_id})
            return None

    def _generic_result(self) -> DeepAnalysisResult:
        return DeepAnalysisResult(
            categories=self._fallback_pool.generic_recommendations(),
            source=GeneratedBy.FALLBACK,
        )
