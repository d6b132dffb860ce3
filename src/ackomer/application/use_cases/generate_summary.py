"""Generate summary use case."""

import logging
from dataclasses import dataclass

from ...domain.entities.summary import Summary
from ...domain.errors import SessionNotFoundError, SummaryAlreadyExistsError
from ..dto.summary_dto import GenerateSummaryRequest
from ..ports.repositories.session_repo import SessionRepository
from ..ports.repositories.summary_repo import SummaryRepository
from ..ports.repositories.transcription_repo import TranscriptionRepository
from ..ports.services.cache_service import CacheService
from ..ports.services.event_publisher import EventPublisher
from ..ports.services.summary_service import SummaryService
from ..utils.transcript import load_session_transcript

logger = logging.getLogger("ackomer")


@dataclass
class SummaryJob:
    """What the background step needs once the request has been accepted."""

    summary_id: str
    session_id: str
    transcript: str
    regenerate: bool


class GenerateSummaryUseCase:
    """Accept a summary request and run generation in the background."""

    def __init__(
        self,
        session_repository: SessionRepository,
        transcription_repository: TranscriptionRepository,
        summary_repository: SummaryRepository,
        summary_service: SummaryService,
        cache: CacheService,
        publisher: EventPublisher,
    ):
        self._session_repository = session_repository
        self._transcription_repository = transcription_repository
        self._summary_repository = summary_repository
        self._summary_service = summary_service
        self._cache = cache
        self._publisher = publisher

    async def execute(self, request: GenerateSummaryRequest) -> SummaryJob:
        session = await self._session_repository.find_by_id(request.session_id)
        if not session:
            raise SessionNotFoundError(request.session_id)

        transcript = await load_session_transcript(
            self._transcription_repository, request.session_id
        )

        existing = None
        if session.summary_id:
            existing = await self._summary_repository.find_by_id(session.summary_id)
        if existing and not request.regenerate:
            raise SummaryAlreadyExistsError(existing.summary_id)

        if existing:
            summary = existing
            summary.start_generation()
            await self._summary_repository.save(summary)
        else:
            summary = Summary.for_session(request.session_id)
            await self._summary_repository.save(summary)
            session.attach_summary(summary.summary_id)
            await self._session_repository.save(session)

        await self._cache.invalidate_session(request.session_id)
        logger.info(
            f"Summary generation accepted: {summary.summary_id} "
            f"(session={request.session_id}, regenerate={existing is not None})"
        )
        return SummaryJob(
            summary_id=summary.summary_id,
            session_id=request.session_id,
            transcript=transcript,
            regenerate=existing is not None,
        )

    async def process(self, job: SummaryJob) -> None:
        """Background job: call the summary service and publish the outcome."""
        summary = await self._summary_repository.find_by_id(job.summary_id)
        if not summary:
            logger.error(f"Summary {job.summary_id} vanished before generation")
            return

        try:
            generated = await self._summary_service.generate_summary(job.transcript)
            if job.regenerate:
                summary.create_new_version(generated, generated_by="ai-generated")
            else:
                summary.complete(generated)
            await self._summary_repository.save(summary)
            await self._cache.invalidate_session(job.session_id)
            logger.info(
                f"Summary generated: {job.summary_id} (session={job.session_id}, "
                f"version={summary.version}, words={summary.word_count})"
            )
            await self._publisher.emit(
                job.session_id,
                "summary-completed",
                {"summaryId": job.summary_id, "sessionId": job.session_id},
            )
        except Exception as e:
            logger.error(f"Summary generation failed: {job.summary_id} (session={job.session_id}): {e}")
            summary.fail(str(e))
            await self._summary_repository.save(summary)
            await self._cache.invalidate_session(job.session_id)
            await self._publisher.emit(
                job.session_id,
                "summary-failed",
                {"summaryId": job.summary_id, "error": str(e)},
            )
