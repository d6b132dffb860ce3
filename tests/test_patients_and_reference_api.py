"""
Patient registry and clinical reference lookup tests.
"""

import pytest

from ackomer.domain.entities.reference import AssessmentQuestion, Condition, Symptom
from ackomer.domain.enums.reference import ConditionCategory, Severity, SymptomCategory, UrgencyLevel

PATIENT = {
    "firstName": "Meera",
    "lastName": "Iyer",
    "dateOfBirth": "1988-04-12",
    "gender": "female",
    "contactInfo": {"email": "Meera.Iyer@Example.com", "address": {"city": "Pune", "zipCode": "411001"}},
    "allergies": [{"allergen": "penicillin", "severity": "severe"}],
}


@pytest.fixture
def reference_data(backend):
    backend.conditions.conditions = [
        Condition(
            name="Migraine",
            icd10_code="g43.9",
            category=ConditionCategory.NERVOUS_SYSTEM,
            synonyms=["hemicrania"],
            symptoms=["Headache", "Nausea"],
            risk_factors=["Family history"],
        ),
        Condition(
            name="Essential hypertension",
            icd10_code="I10",
            category=ConditionCategory.CIRCULATORY_SYSTEM,
            severity=Severity.SEVERE,
        ),
    ]
    backend.symptoms.symptoms = [
        Symptom(
            name="Chest pain",
            category=SymptomCategory.CARDIOVASCULAR,
            body_parts=[" Chest ", "Left Arm"],
            urgency_level=UrgencyLevel.EMERGENCY,
            associated_conditions=["i21.9", "I20.9"],
            questions=[
                AssessmentQuestion(question="Does the pain radiate?", importance=9),
                AssessmentQuestion(question="Any recent travel?", importance=3),
                AssessmentQuestion(question="Is it worse on exertion?", importance=7),
            ],
        ),
    ]


def test_register_patient(client):
    response = client.post("/api/patients", json=PATIENT)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["patientId"].startswith("pat_")
    assert data["fullName"] == "Meera Iyer"
    assert data["contactInfo"]["email"] == "meera.iyer@example.com"
    assert data["contactInfo"]["address"]["zip_code"] == "411001"
    assert data["allergies"][0]["severity"] == "severe"


def test_register_patient_with_client_id_rejects_duplicates(client, backend):
    first = client.post("/api/patients", json={**PATIENT, "patientId": "MRN-1042"})
    assert first.status_code == 201
    assert first.json()["data"]["patientId"] == "MRN-1042"

    again = client.post("/api/patients", json={**PATIENT, "patientId": "MRN-1042", "firstName": "Asha"})
    assert again.status_code == 409
    body = again.json()
    assert body["error"] == "DUPLICATE_PATIENT"
    assert body["details"]["patient_id"] == "MRN-1042"
    assert backend.patients.items["MRN-1042"].first_name == "Meera"


def test_register_patient_rejects_malformed_client_id(client):
    response = client.post("/api/patients", json={**PATIENT, "patientId": "bad id!"})
    assert response.status_code == 400


def test_register_patient_rejects_unknown_gender(client):
    response = client.post("/api/patients", json={**PATIENT, "gender": "unknown"})
    assert response.status_code == 400


def test_patient_can_be_linked_to_session(client):
    patient_id = client.post("/api/patients", json=PATIENT).json()["data"]["patientId"]
    session = client.post("/api/sessions", json={"doctorName": "Dr. Rao", "patientId": patient_id}).json()["data"]

    data = client.get(f"/api/sessions/{session['sessionId']}").json()["data"]
    assert data["patient"]["patientId"] == patient_id


def test_list_and_get_patients(client):
    patient_id = client.post("/api/patients", json=PATIENT).json()["data"]["patientId"]
    client.post("/api/patients", json={**PATIENT, "firstName": "Arjun", "lastName": "Menon"})

    response = client.get("/api/patients", params={"search": "meera"})
    data = response.json()["data"]
    assert [p["patientId"] for p in data["patients"]] == [patient_id]
    assert data["pagination"]["total"] == 1

    assert client.get(f"/api/patients/{patient_id}").status_code == 200
    assert client.get("/api/patients/pat_unknown").status_code == 404


def test_condition_search_and_icd10_lookup(client, reference_data):
    response = client.get("/api/conditions/search", params={"q": "hemicrania"})
    assert [c["icd10Code"] for c in response.json()["data"]] == ["G43.9"]

    response = client.get("/api/conditions/search", params={"q": "e", "severity": "severe"})
    assert [c["name"] for c in response.json()["data"]] == ["Essential hypertension"]

    response = client.get("/api/conditions/icd10/i10")
    assert response.status_code == 200
    assert response.json()["data"]["category"] == "circulatory-system"

    response = client.get("/api/conditions/icd10/Z99")
    assert response.status_code == 404
    assert response.json()["error"] == "CONDITION_NOT_FOUND"


def test_condition_search_requires_query(client, reference_data):
    assert client.get("/api/conditions/search").status_code == 400


def test_symptom_lookups(client, reference_data):
    response = client.get("/api/symptoms/search", params={"q": "chest", "urgencyLevel": "emergency"})
    assert [s["name"] for s in response.json()["data"]] == ["Chest pain"]

    response = client.get("/api/symptoms/body-part/chest")
    assert response.json()["data"][0]["isUrgent"] is True


def test_symptom_assessment_questions_filtered_by_importance(client, reference_data):
    response = client.get("/api/symptoms/Chest pain/questions", params={"minImportance": 5})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["isUrgent"] is True
    assert [q["importance"] for q in data["questions"]] == [9, 7]

    assert client.get("/api/symptoms/Fever/questions").status_code == 404


def test_reference_entries_link_conditions_and_symptoms(client, reference_data):
    condition = client.get("/api/conditions/icd10/G43.9").json()["data"]
    assert condition["symptoms"] == ["Headache", "Nausea"]
    assert condition["riskFactors"] == ["Family history"]

    response = client.get("/api/symptoms/body-part/Left Arm")
    assert response.status_code == 200
    symptom = response.json()["data"][0]
    assert symptom["bodyParts"] == ["chest", "left arm"]
    assert symptom["associatedConditions"] == ["I21.9", "I20.9"]
