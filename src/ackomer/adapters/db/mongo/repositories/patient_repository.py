"""
MongoDB implementation of PatientRepository.
"""

import re
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Tuple

from ackomer.application.ports.repositories.patient_repo import PatientRepository
from ackomer.domain.entities.patient import (
    Address,
    Allergy,
    ContactInfo,
    EmergencyContact,
    MedicalHistoryEntry,
    Medication,
    Patient,
)

from ..models.patient_m import (
    AddressMongo,
    AllergyMongo,
    ContactInfoMongo,
    EmergencyContactMongo,
    MedicalHistoryMongo,
    MedicationMongo,
    PatientMongo,
    to_date,
    to_datetime,
)


class MongoPatientRepository(PatientRepository):
    """MongoDB implementation of PatientRepository."""

    async def save(self, patient: Patient) -> Patient:
        patient_mongo = self._domain_to_mongo(patient)
        existing = await PatientMongo.find_one(PatientMongo.patient_id == patient.patient_id)
        if existing:
            patient_mongo.id = existing.id
        await patient_mongo.save()
        return self._mongo_to_domain(patient_mongo)

    async def find_by_id(self, patient_id: str) -> Optional[Patient]:
        patient_mongo = await PatientMongo.find_one(PatientMongo.patient_id == patient_id)
        if not patient_mongo:
            return None
        return self._mongo_to_domain(patient_mongo)

    async def exists_by_id(self, patient_id: str) -> bool:
        count = await PatientMongo.find(PatientMongo.patient_id == patient_id).count()
        return count > 0

    async def find_many(
        self, search: Optional[str] = None, skip: int = 0, limit: int = 20
    ) -> Tuple[List[Patient], int]:
        mongo_filter: Dict[str, Any] = {"is_active": True}
        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            mongo_filter["$or"] = [{"first_name": pattern}, {"last_name": pattern}]
        total = await PatientMongo.find(mongo_filter).count()
        items = (
            await PatientMongo.find(mongo_filter)
            .sort([("last_name", 1), ("first_name", 1)])
            .skip(skip)
            .limit(limit)
            .to_list()
        )
        return [self._mongo_to_domain(p) for p in items], total

    def _domain_to_mongo(self, patient: Patient) -> PatientMongo:
        contact = patient.contact_info
        return PatientMongo(
            patient_id=patient.patient_id,
            first_name=patient.first_name,
            last_name=patient.last_name,
            date_of_birth=to_datetime(patient.date_of_birth),
            gender=patient.gender,
            contact_info=ContactInfoMongo(
                phone=contact.phone,
                email=contact.email,
                address=AddressMongo(**asdict(contact.address)),
            ),
            medical_history=[
                MedicalHistoryMongo(
                    condition=h.condition,
                    diagnosed_date=to_datetime(h.diagnosed_date),
                    status=h.status,
                    notes=h.notes,
                )
                for h in patient.medical_history
            ],
            allergies=[AllergyMongo(**asdict(a)) for a in patient.allergies],
            medications=[
                MedicationMongo(
                    name=m.name,
                    dosage=m.dosage,
                    frequency=m.frequency,
                    prescribed_date=to_datetime(m.prescribed_date),
                    is_active=m.is_active,
                )
                for m in patient.medications
            ],
            emergency_contact=EmergencyContactMongo(**asdict(patient.emergency_contact)),
            is_active=patient.is_active,
            created_at=patient.created_at,
            updated_at=patient.updated_at,
        )

    def _mongo_to_domain(self, patient_mongo: PatientMongo) -> Patient:
        contact = patient_mongo.contact_info
        return Patient(
            patient_id=patient_mongo.patient_id,
            first_name=patient_mongo.first_name,
            last_name=patient_mongo.last_name,
            date_of_birth=to_date(patient_mongo.date_of_birth),
            gender=patient_mongo.gender,
            contact_info=ContactInfo(
                phone=contact.phone,
                email=contact.email,
                address=Address(**contact.address.model_dump()),
            ),
            medical_history=[
                MedicalHistoryEntry(
                    condition=h.condition,
                    diagnosed_date=to_date(h.diagnosed_date),
                    status=h.status,
                    notes=h.notes,
                )
                for h in patient_mongo.medical_history
            ],
            allergies=[Allergy(**a.model_dump()) for a in patient_mongo.allergies],
            medications=[
                Medication(
                    name=m.name,
                    dosage=m.dosage,
                    frequency=m.frequency,
                    prescribed_date=to_date(m.prescribed_date),
                    is_active=m.is_active,
                )
                for m in patient_mongo.medications
            ],
            emergency_contact=EmergencyContact(**patient_mongo.emergency_contact.model_dump()),
            is_active=patient_mongo.is_active,
            created_at=patient_mongo.created_at,
            updated_at=patient_mongo.updated_at,
        )
