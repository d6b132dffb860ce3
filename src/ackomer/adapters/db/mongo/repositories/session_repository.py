"""
MongoDB implementation of SessionRepository.
"""

import logging
import re
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Tuple

from ackomer.application.ports.repositories.session_repo import SessionQuery, SessionRepository
from ackomer.domain.entities.session import Diagnosis, Prescription, Session, SessionMetadata
from ackomer.domain.enums.status import Priority, SessionStatus, SessionType

from ..models.session_m import (
    DiagnosisMongo,
    PrescriptionMongo,
    SessionMetadataMongo,
    SessionMongo,
)

logger = logging.getLogger("ackomer")


def build_session_filter(query: SessionQuery) -> Dict[str, Any]:
    """Translate a SessionQuery into a MongoDB filter document."""
    mongo_filter: Dict[str, Any] = {}
    if query.status:
        mongo_filter["status"] = query.status
    if query.doctor_id:
        mongo_filter["doctor_id"] = query.doctor_id
    if query.session_type:
        mongo_filter["session_type"] = query.session_type
    if query.priority:
        mongo_filter["priority"] = query.priority
    if query.start_date or query.end_date:
        time_range: Dict[str, Any] = {}
        if query.start_date:
            time_range["$gte"] = query.start_date
        if query.end_date:
            time_range["$lte"] = query.end_date
        mongo_filter["start_time"] = time_range
    if query.search:
        pattern = {"$regex": re.escape(query.search), "$options": "i"}
        mongo_filter["$or"] = [{"doctor_name": pattern}, {"notes": pattern}]
    return mongo_filter


def session_document_fields(session: Session) -> Dict[str, Any]:
    """Stored fields of a session document."""
    return {
        "session_id": session.session_id,
        "doctor_name": session.doctor_name,
        "doctor_id": session.doctor_id,
        "patient_id": session.patient_id,
        "status": session.status.value,
        "start_time": session.start_time,
        "end_time": session.end_time,
        "duration": session.duration,
        "session_type": session.session_type.value,
        "department": session.department,
        "priority": session.priority.value,
        "notes": session.notes,
        "transcription_ids": list(session.transcription_ids),
        "summary_id": session.summary_id,
        "symptom_ids": list(session.symptom_ids),
        "follow_up_required": session.follow_up_required,
        "follow_up_date": session.follow_up_date,
        "diagnosis": [DiagnosisMongo(**asdict(d)) for d in session.diagnosis],
        "prescriptions": [PrescriptionMongo(**asdict(p)) for p in session.prescriptions],
        "metadata": SessionMetadataMongo(**asdict(session.metadata)),
        "is_active": session.is_active,
        "created_at": session.created_at,
        "updated_at": session.updated_at,
    }


class MongoSessionRepository(SessionRepository):
    """MongoDB implementation of SessionRepository."""

    async def save(self, session: Session) -> Session:
        """Insert a new session or replace the stored one."""
        session_mongo = self._domain_to_mongo(session)
        existing = await SessionMongo.find_one(SessionMongo.session_id == session.session_id)
        if existing:
            session_mongo.id = existing.id
        await session_mongo.save()
        logger.debug(f"Saved session {session.session_id} (status={session.status.value})")
        return self._mongo_to_domain(session_mongo)

    async def find_by_id(self, session_id: str) -> Optional[Session]:
        session_mongo = await SessionMongo.find_one(SessionMongo.session_id == session_id)
        if not session_mongo:
            return None
        return self._mongo_to_domain(session_mongo)

    async def exists_by_id(self, session_id: str) -> bool:
        count = await SessionMongo.find(SessionMongo.session_id == session_id).count()
        return count > 0

    async def find_many(
        self, query: SessionQuery, skip: int = 0, limit: int = 20
    ) -> Tuple[List[Session], int]:
        mongo_filter = build_session_filter(query)
        total = await SessionMongo.find(mongo_filter).count()
        sessions_mongo = (
            await SessionMongo.find(mongo_filter)
            .sort([("start_time", -1)])
            .skip(skip)
            .limit(limit)
            .to_list()
        )
        return [self._mongo_to_domain(s) for s in sessions_mongo], total

    async def delete(self, session_id: str) -> bool:
        session_mongo = await SessionMongo.find_one(SessionMongo.session_id == session_id)
        if not session_mongo:
            return False
        await session_mongo.delete()
        return True

    def _domain_to_mongo(self, session: Session) -> SessionMongo:
        return SessionMongo(**session_document_fields(session))

    def _mongo_to_domain(self, session_mongo: SessionMongo) -> Session:
        return Session(
            session_id=session_mongo.session_id,
            doctor_name=session_mongo.doctor_name,
            doctor_id=session_mongo.doctor_id,
            patient_id=session_mongo.patient_id,
            status=SessionStatus(session_mongo.status),
            start_time=session_mongo.start_time,
            end_time=session_mongo.end_time,
            duration=session_mongo.duration,
            session_type=SessionType(session_mongo.session_type),
            department=session_mongo.department,
            priority=Priority(session_mongo.priority),
            notes=session_mongo.notes,
            transcription_ids=list(session_mongo.transcription_ids),
            summary_id=session_mongo.summary_id,
            symptom_ids=list(session_mongo.symptom_ids),
            follow_up_required=session_mongo.follow_up_required,
            follow_up_date=session_mongo.follow_up_date,
            diagnosis=[Diagnosis(**d.model_dump()) for d in session_mongo.diagnosis],
            prescriptions=[Prescription(**p.model_dump()) for p in session_mongo.prescriptions],
            metadata=SessionMetadata(**session_mongo.metadata.model_dump()),
            is_active=session_mongo.is_active,
            created_at=session_mongo.created_at,
            updated_at=session_mongo.updated_at,
        )
