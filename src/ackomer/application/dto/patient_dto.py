"""Patient DTOs for API communication."""

from typing import Any, Dict

from ...domain.entities.patient import Patient
from ._format import iso, plain


def patient_to_dict(patient: Patient) -> Dict[str, Any]:
    return {
        "patientId": patient.patient_id,
        "firstName": patient.first_name,
        "lastName": patient.last_name,
        "fullName": patient.full_name,
        "dateOfBirth": iso(patient.date_of_birth),
        "age": patient.age(),
        "gender": patient.gender,
        "contactInfo": plain(patient.contact_info),
        "medicalHistory": plain(patient.medical_history),
        "allergies": plain(patient.allergies),
        "medications": plain(patient.medications),
        "emergencyContact": plain(patient.emergency_contact),
        "isActive": patient.is_active,
        "createdAt": iso(patient.created_at),
        "updatedAt": iso(patient.updated_at),
    }
