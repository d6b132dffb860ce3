"""
MongoDB implementation of SummaryRepository.
"""

from dataclasses import asdict
from typing import Optional

from ackomer.application.ports.repositories.summary_repo import SummaryRepository
from ackomer.domain.entities.summary import (
    ExtractedData,
    GenerationMetadata,
    KeyPoint,
    Summary,
    SummaryContent,
    SummaryVersion,
)
from ackomer.domain.enums.status import SummaryStatus

from ..models.session_m import (
    ExtractedDataMongo,
    GenerationMetadataMongo,
    KeyPointMongo,
    SummaryContentMongo,
    SummaryMongo,
    SummaryVersionMongo,
)


class MongoSummaryRepository(SummaryRepository):
    """MongoDB implementation of SummaryRepository."""

    async def save(self, summary: Summary) -> Summary:
        summary_mongo = self._domain_to_mongo(summary)
        existing = await SummaryMongo.find_one(SummaryMongo.summary_id == summary.summary_id)
        if existing:
            summary_mongo.id = existing.id
        await summary_mongo.save()
        return self._mongo_to_domain(summary_mongo)

    async def find_by_id(self, summary_id: str) -> Optional[Summary]:
        summary_mongo = await SummaryMongo.find_one(SummaryMongo.summary_id == summary_id)
        if not summary_mongo:
            return None
        return self._mongo_to_domain(summary_mongo)

    async def find_by_session(self, session_id: str) -> Optional[Summary]:
        summary_mongo = await SummaryMongo.find(
            SummaryMongo.session_id == session_id
        ).sort([("created_at", -1)]).first_or_none()
        if not summary_mongo:
            return None
        return self._mongo_to_domain(summary_mongo)

    async def delete(self, summary_id: str) -> bool:
        summary_mongo = await SummaryMongo.find_one(SummaryMongo.summary_id == summary_id)
        if not summary_mongo:
            return False
        await summary_mongo.delete()
        return True

    def _domain_to_mongo(self, summary: Summary) -> SummaryMongo:
        return SummaryMongo(
            summary_id=summary.summary_id,
            session_id=summary.session_id,
            content=SummaryContentMongo(**asdict(summary.content)),
            key_points=[KeyPointMongo(**asdict(k)) for k in summary.key_points],
            extracted_data=ExtractedDataMongo(**asdict(summary.extracted_data)),
            generation_metadata=GenerationMetadataMongo(**asdict(summary.generation_metadata)),
            status=summary.status.value,
            version=summary.version,
            previous_versions=[
                SummaryVersionMongo(
                    version=v.version,
                    content=SummaryContentMongo(**asdict(v.content)),
                    generated_at=v.generated_at,
                    generated_by=v.generated_by,
                )
                for v in summary.previous_versions
            ],
            error_message=summary.error_message,
            reviewed_by=summary.reviewed_by,
            reviewed_at=summary.reviewed_at,
            review_notes=summary.review_notes,
            is_approved=summary.is_approved,
            approved_by=summary.approved_by,
            approved_at=summary.approved_at,
            is_active=summary.is_active,
            created_at=summary.created_at,
            updated_at=summary.updated_at,
        )

    def _mongo_to_domain(self, summary_mongo: SummaryMongo) -> Summary:
        return Summary(
            summary_id=summary_mongo.summary_id,
            session_id=summary_mongo.session_id,
            content=SummaryContent(**summary_mongo.content.model_dump()),
            key_points=[KeyPoint(**k.model_dump()) for k in summary_mongo.key_points],
            extracted_data=ExtractedData(**summary_mongo.extracted_data.model_dump()),
            generation_metadata=GenerationMetadata(**summary_mongo.generation_metadata.model_dump()),
            status=SummaryStatus(summary_mongo.status),
            version=summary_mongo.version,
            previous_versions=[
                SummaryVersion(
                    version=v.version,
                    content=SummaryContent(**v.content.model_dump()),
                    generated_at=v.generated_at,
                    generated_by=v.generated_by,
                )
                for v in summary_mongo.previous_versions
            ],
            error_message=summary_mongo.error_message,
            reviewed_by=summary_mongo.reviewed_by,
            reviewed_at=summary_mongo.reviewed_at,
            review_notes=summary_mongo.review_notes,
            is_approved=summary_mongo.is_approved,
            approved_by=summary_mongo.approved_by,
            approved_at=summary_mongo.approved_at,
            is_active=summary_mongo.is_active,
            created_at=summary_mongo.created_at,
            updated_at=summary_mongo.updated_at,
        )
