"""
Prompt templates for summary and reflexive question generation.
"""

from ackomer.domain.enums.status import QuestionType

SCRIBE_SYSTEM_PROMPT = (
    "You are an experienced medical scribe. You only document what is stated "
    "in the transcript and never invent findings. Reply with JSON only."
)

STRUCTURED_SUMMARY_PROMPT = """Create structured clinical documentation from this consultation transcript.

Return a single JSON object with these string fields (use "" when the transcript does not cover a section):
- chief_complaint: main reason for the visit
- history_of_present_illness: detailed description of the current symptoms
- past_medical_history
- medications
- allergies
- social_history
- family_history
- review_of_systems
- physical_examination
- assessment: clinical assessment and findings
- plan: treatment plan and next steps
- follow_up

Transcript:
{transcript}

JSON:"""

KEY_POINTS_PROMPT = """Extract the key medical points from this consultation transcript.

Return a JSON array of objects with fields: category, point, confidence (0-100).
category must be one of: symptom, diagnosis, treatment, followup, medication, other.

Transcript:
{transcript}

JSON array:"""

MEDICAL_DATA_PROMPT = """Extract structured medical data from this consultation transcript.

Return a JSON object with:
- symptoms: array of {{name, severity (mild|moderate|severe), duration, onset}}
- diagnoses: array of {{condition, icd10Code, confidence}}
- medications: array of {{name, dosage, frequency, duration, route}}
- procedures: array of {{name, cptCode, description}}
- vitalSigns: object with any of bloodPressure, heartRate, temperature, respiratoryRate, oxygenSaturation, weight, height

Transcript:
{transcript}

JSON:"""

QUESTIONS_SYSTEM_PROMPT = (
    "You are a clinical decision-support assistant helping a doctor during a "
    "consultation. Reply with a JSON array only."
)

QUESTION_PROMPTS = {
    QuestionType.CLINICAL: """From this consultation transcript, list the clinical questions the doctor should still ask to understand the patient's condition.

Consider symptoms not yet explored, relevant medical history, risk factors and physical examination findings.

Return a JSON array of objects with fields: question, category, priority (1-5), rationale.
category must be one of: symptom_assessment, medical_history, risk_factors, physical_exam.

Transcript:
{transcript}

JSON array:""",
    QuestionType.FOLLOWUP: """From this consultation transcript, list questions for the patient's next visit or ongoing care.

Consider treatment response, medication adherence and side effects, lifestyle changes and warning signs.

Return a JSON array of objects with fields: question, category, timeframe, importance.
category: treatment_response, medication_monitoring, lifestyle_changes or warning_signs.
timeframe: immediate, short_term, medium_term or long_term.
importance: low, medium, high or critical.

Transcript:
{transcript}

JSON array:""",
    QuestionType.DIFFERENTIAL: """From this consultation transcript, list questions that separate the likely diagnoses or rule out serious conditions.

Consider red-flag symptoms, features that distinguish similar conditions, tests or examinations needed and alternative explanations.

Return a JSON array of objects with fields: question, purpose, urgency, diagnostic_value.
urgency: routine, urgent or immediate. diagnostic_value: low, medium or high.

Transcript:
{transcript}

JSON array:""",
    QuestionType.EDUCATION: """From this consultation transcript, list questions that check and improve the patient's understanding of their condition.

Consider their grasp of the diagnosis, adherence concerns, lifestyle changes and prevention.

Return a JSON array of objects with fields: question, educational_goal, patient_benefit.

Transcript:
{transcript}

JSON array:""",
}

FALLBACK_QUESTIONS = {
    QuestionType.CLINICAL: {
        "question": "What other symptoms is the patient experiencing?",
        "category": "symptom_assessment",
        "priority": 3,
        "rationale": "Unable to generate specific questions automatically",
    },
    QuestionType.FOLLOWUP: {
        "question": "How is the patient responding to the current treatment plan?",
        "category": "treatment_response",
        "timeframe": "short_term",
        "importance": "medium",
    },
    QuestionType.DIFFERENTIAL: {
        "question": "Are there any other conditions that could explain these symptoms?",
        "purpose": "Consider alternative diagnoses",
        "urgency": "routine",
        "diagnostic_value": "medium",
    },
    QuestionType.EDUCATION: {
        "question": "Do you have any questions about your condition or treatment?",
        "educational_goal": "Ensure patient understanding",
        "patient_benefit": "Improved treatment compliance",
    },
}
