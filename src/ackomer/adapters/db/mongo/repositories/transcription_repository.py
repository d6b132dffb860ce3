"""
MongoDB implementation of TranscriptionRepository.
"""

from dataclasses import asdict
from typing import List, Optional, Tuple

from ackomer.application.ports.repositories.transcription_repo import TranscriptionRepository
from ackomer.domain.entities.transcription import (
    AudioFileInfo,
    EditRecord,
    ProcessingMetadata,
    SpeakerSegment,
    TimeRange,
    Transcription,
)
from ackomer.domain.enums.status import Speaker, TranscriptionStatus

from ..models.session_m import (
    AudioFileMongo,
    EditRecordMongo,
    ProcessingMetadataMongo,
    SpeakerSegmentMongo,
    TimeRangeMongo,
    TranscriptionMongo,
)


class MongoTranscriptionRepository(TranscriptionRepository):
    """MongoDB implementation of TranscriptionRepository."""

    async def save(self, transcription: Transcription) -> Transcription:
        transcription_mongo = self._domain_to_mongo(transcription)
        existing = await TranscriptionMongo.find_one(
            TranscriptionMongo.transcription_id == transcription.transcription_id
        )
        if existing:
            transcription_mongo.id = existing.id
        await transcription_mongo.save()
        return self._mongo_to_domain(transcription_mongo)

    async def find_by_id(self, transcription_id: str) -> Optional[Transcription]:
        transcription_mongo = await TranscriptionMongo.find_one(
            TranscriptionMongo.transcription_id == transcription_id
        )
        if not transcription_mongo:
            return None
        return self._mongo_to_domain(transcription_mongo)

    async def find_by_session(
        self,
        session_id: str,
        status: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> Tuple[List[Transcription], int]:
        mongo_filter = {"session_id": session_id}
        if status:
            mongo_filter["status"] = status
        total = await TranscriptionMongo.find(mongo_filter).count()
        cursor = TranscriptionMongo.find(mongo_filter).sort([("created_at", 1)]).skip(skip)
        if limit is not None:
            cursor = cursor.limit(limit)
        items = await cursor.to_list()
        return [self._mongo_to_domain(t) for t in items], total

    async def delete(self, transcription_id: str) -> bool:
        transcription_mongo = await TranscriptionMongo.find_one(
            TranscriptionMongo.transcription_id == transcription_id
        )
        if not transcription_mongo:
            return False
        await transcription_mongo.delete()
        return True

    async def delete_by_session(self, session_id: str) -> int:
        result = await TranscriptionMongo.find(TranscriptionMongo.session_id == session_id).delete()
        return result.deleted_count if result else 0

    def _domain_to_mongo(self, transcription: Transcription) -> TranscriptionMongo:
        return TranscriptionMongo(
            transcription_id=transcription.transcription_id,
            session_id=transcription.session_id,
            audio_file=AudioFileMongo(**asdict(transcription.audio_file)),
            text=transcription.text,
            original_text=transcription.original_text,
            confidence=transcription.confidence,
            language=transcription.language,
            speaker=transcription.speaker.value,
            timestamp=TimeRangeMongo(**asdict(transcription.timestamp)),
            processing_metadata=ProcessingMetadataMongo(**asdict(transcription.processing_metadata)),
            segments=[SpeakerSegmentMongo(**asdict(s)) for s in transcription.segments],
            speaker_count=transcription.speaker_count,
            status=transcription.status.value,
            error_message=transcription.error_message,
            is_edited=transcription.is_edited,
            edit_history=[EditRecordMongo(**asdict(e)) for e in transcription.edit_history],
            created_at=transcription.created_at,
            updated_at=transcription.updated_at,
        )

    def _mongo_to_domain(self, transcription_mongo: TranscriptionMongo) -> Transcription:
        return Transcription(
            transcription_id=transcription_mongo.transcription_id,
            session_id=transcription_mongo.session_id,
            audio_file=AudioFileInfo(**transcription_mongo.audio_file.model_dump()),
            text=transcription_mongo.text,
            original_text=transcription_mongo.original_text,
            confidence=transcription_mongo.confidence,
            language=transcription_mongo.language,
            speaker=Speaker(transcription_mongo.speaker),
            timestamp=TimeRange(**transcription_mongo.timestamp.model_dump()),
            processing_metadata=ProcessingMetadata(
                **transcription_mongo.processing_metadata.model_dump()
            ),
            segments=[SpeakerSegment(**s.model_dump()) for s in transcription_mongo.segments],
            speaker_count=transcription_mongo.speaker_count,
            status=TranscriptionStatus(transcription_mongo.status),
            error_message=transcription_mongo.error_message,
            is_edited=transcription_mongo.is_edited,
            edit_history=[EditRecord(**e.model_dump()) for e in transcription_mongo.edit_history],
            created_at=transcription_mongo.created_at,
            updated_at=transcription_mongo.updated_at,
        )
