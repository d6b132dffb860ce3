"""
Summary and question generation against a scripted model client.
"""

import json

import pytest

from ackomer.adapters.external.question_service_openai import OpenAIQuestionService, fallback_questions
from ackomer.adapters.external.summary_service_openai import (
    OpenAISummaryService,
    parse_key_points,
    parse_medical_data,
)
from ackomer.core.config import QuestionSettings, SummarySettings
from ackomer.core.exceptions import GenerationError
from ackomer.domain.enums.status import QuestionType

NOTE = {
    "chief_complaint": "Headache",
    "assessment": "Tension-type headache",
    "plan": ["Paracetamol", "Hydration"],
    "unexpected": "ignored",
}


class ScriptedAIClient:
    """Answers each prompt by its first line; missing scripts raise."""

    deployment_name = "gpt-test"

    def __init__(self, replies):
        self.replies = replies
        self.prompts = []

    async def complete_text(self, prompt, *, system_prompt=None, temperature=0.3, max_tokens=None):
        self.prompts.append(prompt)
        for marker, reply in self.replies.items():
            if prompt.startswith(marker):
                if isinstance(reply, Exception):
                    raise reply
                return reply, {"prompt": 10, "completion": 5, "total": 15}
        raise RuntimeError("no scripted reply")


def summary_service(replies, **settings):
    return OpenAISummaryService(ScriptedAIClient(replies), SummarySettings(**settings))


def test_parse_key_points_normalizes_categories_and_confidence():
    points = parse_key_points(
        [
            {"category": "Symptom", "point": " Headache ", "confidence": 140},
            {"category": "astrology", "point": "Full moon", "confidence": "high"},
            {"category": "diagnosis", "point": ""},
            "not a dict",
        ]
    )
    assert [(p.category, p.point, p.confidence) for p in points] == [
        ("symptom", "Headache", 100.0),
        ("other", "Full moon", 80.0),
    ]


def test_parse_medical_data_accepts_camel_case_vitals():
    data = parse_medical_data(
        {"symptoms": [{"name": "cough"}, "bad"], "vitalSigns": {"temperature": "38.2C"}, "procedures": "none"}
    )
    assert data.symptoms == [{"name": "cough"}]
    assert data.vital_signs == {"temperature": "38.2C"}
    assert data.procedures == []


@pytest.mark.asyncio
async def test_generate_summary_combines_three_prompts():
    service = summary_service(
        {
            "Create structured": "Here you go:\n" + json.dumps(NOTE),
            "Extract the key": json.dumps([{"category": "symptom", "point": "Headache", "confidence": 90}]),
            "Extract structured": json.dumps({"medications": [{"name": "Paracetamol"}]}),
        }
    )
    result = await service.generate_summary("Doctor: what brings you in? Patient: headache.")
    assert result.content.chief_complaint == "Headache"
    assert result.content.plan == "Paracetamol\nHydration"
    assert result.key_points[0].point == "Headache"
    assert result.extracted_data.medications == [{"name": "Paracetamol"}]
    assert result.metadata.model == "gpt-test"
    assert result.metadata.token_usage["total"] == 15
    assert result.metadata.confidence == 85.0


@pytest.mark.asyncio
async def test_extraction_failures_fall_back():
    service = summary_service({"Create structured": json.dumps(NOTE)})
    result = await service.generate_summary("some transcript")
    assert result.key_points[0].point == "Unable to extract key points automatically"
    assert result.extracted_data.symptoms == []


@pytest.mark.asyncio
async def test_non_json_note_is_a_generation_error():
    service = summary_service({"Create structured": "I cannot help with that."})
    with pytest.raises(GenerationError):
        await service.generate_summary("some transcript")


@pytest.mark.asyncio
async def test_transcript_is_truncated_per_prompt():
    client = ScriptedAIClient({"Create structured": json.dumps(NOTE)})
    service = OpenAISummaryService(client, SummarySettings(structured_char_limit=50, extraction_char_limit=20))
    await service.generate_summary("x" * 500)
    note_prompt = next(p for p in client.prompts if p.startswith("Create structured"))
    key_points_prompt = next(p for p in client.prompts if p.startswith("Extract the key"))
    assert "x" * 50 in note_prompt and "x" * 51 not in note_prompt
    assert "x" * 20 in key_points_prompt and "x" * 21 not in key_points_prompt


@pytest.mark.asyncio
async def test_question_service_filters_items_without_question():
    reply = 'Sure: [{"question": "Any fever?", "priority": 4}, {"priority": 1}, 7, "  "]'
    client = ScriptedAIClient({"": reply})
    service = OpenAIQuestionService(client, QuestionSettings())
    questions = await service.generate_questions("transcript", QuestionType.CLINICAL)
    assert questions == [{"question": "Any fever?", "priority": 4}]
    assert service.is_configured() is True
    assert service.model_name == "gpt-test"


@pytest.mark.asyncio
async def test_question_service_accepts_plain_string_questions():
    reply = '["Any fever?", " Since when? ", {"question": "Travel history?", "priority": 2}]'
    service = OpenAIQuestionService(ScriptedAIClient({"": reply}), QuestionSettings())
    questions = await service.generate_questions("transcript", QuestionType.CLINICAL)
    assert questions == [
        {"question": "Any fever?"},
        {"question": "Since when?"},
        {"question": "Travel history?", "priority": 2},
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", ["no array here", "[{}, 3]", RuntimeError("timeout")])
async def test_question_service_falls_back(reply):
    service = OpenAIQuestionService(ScriptedAIClient({"": reply}), QuestionSettings())
    questions = await service.generate_questions("transcript", QuestionType.DIFFERENTIAL)
    assert questions == fallback_questions(QuestionType.DIFFERENTIAL)
