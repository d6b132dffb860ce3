"""Summary review, approval, export and deletion."""

import logging
from typing import Any, Dict, Optional

from ...domain.entities.summary import Summary
from ...domain.enums.status import ExportFormat
from ...domain.errors import SummaryNotFoundError
from ..dto.summary_dto import UpdateSummaryRequest, summary_export_to_dict
from ..ports.repositories.session_repo import SessionRepository
from ..ports.repositories.summary_repo import SummaryRepository
from ..ports.services.cache_service import CacheService

logger = logging.getLogger("ackomer")


class ExportNotSupportedError(Exception):
    """Export format is recognised but has no renderer."""

    def __init__(self, export_format: ExportFormat):
        self.export_format = export_format
        super().__init__(f"{export_format.value.upper()} export not implemented yet")


async def _load(repository: SummaryRepository, summary_id: str) -> Summary:
    summary = await repository.find_by_id(summary_id)
    if not summary:
        raise SummaryNotFoundError(summary_id)
    return summary


class UpdateSummaryUseCase:
    def __init__(self, summary_repository: SummaryRepository, cache: CacheService):
        self._summary_repository = summary_repository
        self._cache = cache

    async def execute(self, summary_id: str, request: UpdateSummaryRequest) -> Summary:
        summary = await _load(self._summary_repository, summary_id)
        if request.content:
            summary.revise(request.content)
        if request.review_notes is not None or request.reviewed_by:
            summary.review(reviewed_by=request.reviewed_by, notes=request.review_notes)
        await self._summary_repository.save(summary)
        await self._cache.invalidate_session(summary.session_id)
        logger.info(f"Summary updated: {summary_id} (version={summary.version})")
        return summary


class ApproveSummaryUseCase:
    def __init__(self, summary_repository: SummaryRepository, cache: CacheService):
        self._summary_repository = summary_repository
        self._cache = cache

    async def execute(self, summary_id: str, approved_by: str, notes: Optional[str] = None) -> Summary:
        if not approved_by or not approved_by.strip():
            raise ValueError("approvedBy is required")
        summary = await _load(self._summary_repository, summary_id)
        summary.approve(approved_by.strip(), notes)
        await self._summary_repository.save(summary)
        await self._cache.invalidate_session(summary.session_id)
        logger.info(f"Summary approved: {summary_id} by {summary.approved_by}")
        return summary


class ExportSummaryUseCase:
    def __init__(self, summary_repository: SummaryRepository):
        self._summary_repository = summary_repository

    async def execute(self, summary_id: str, export_format: str) -> Dict[str, Any]:
        """
        Raises:
            ValueError: Unknown format.
            ExportNotSupportedError: pdf or word.
        """
        try:
            fmt = ExportFormat(export_format.lower())
        except ValueError:
            raise ValueError("Invalid export format. Supported formats: json, pdf, word")
        summary = await _load(self._summary_repository, summary_id)
        if fmt != ExportFormat.JSON:
            raise ExportNotSupportedError(fmt)
        return summary_export_to_dict(summary)


class DeleteSummaryUseCase:
    """Delete a summary and detach it from its session."""

    def __init__(
        self,
        summary_repository: SummaryRepository,
        session_repository: SessionRepository,
        cache: CacheService,
    ):
        self._summary_repository = summary_repository
        self._session_repository = session_repository
        self._cache = cache

    async def execute(self, summary_id: str) -> None:
        summary = await _load(self._summary_repository, summary_id)
        session = await self._session_repository.find_by_id(summary.session_id)
        if session and session.summary_id == summary_id:
            session.detach_summary()
            await self._session_repository.save(session)
        await self._summary_repository.delete(summary_id)
        await self._cache.invalidate_session(summary.session_id)
        logger.info(f"Summary deleted: {summary_id}")
