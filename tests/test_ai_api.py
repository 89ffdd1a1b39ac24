import json
from types import SimpleNamespace

import pytest

from interview_prep.modules.ai.prompts import concept_explain_prompt

QUESTIONS_URL = "/api/ai/generate-questions"
EXPLANATION_URL = "/api/ai/generate-explanation"

QUESTIONS_BODY = {
    "role": "Backend Developer",
    "experience": "3",
    "topicsToFocus": "Node.js,APIs",
    "numberOfQuestions": 5,
}


def qa_pairs(n):
    return [{"question": f"Question {i}?", "answer": f"Answer {i}."} for i in range(n)]


async def test_generate_questions_returns_wrapped_array(client, auth_headers, fake_models):
    fake_models.responses = [SimpleNamespace(text=json.dumps(qa_pairs(5)))]

    res = await client.post(QUESTIONS_URL, json=QUESTIONS_BODY, headers=auth_headers)

    assert res.status_code == 200
    body = res.json()
    assert len(body["questions"]) == 5
    assert body["questions"][0] == {"question": "Question 0?", "answer": "Answer 0."}

    call = fake_models.calls[0]
    assert call["model"] == "gemini-test"
    assert "Generate 5 interview question-answer pairs" in call["contents"]
    assert call["config"].response_mime_type == "application/json"
    assert call["config"].temperature == 0.5


@pytest.mark.parametrize(
    "missing", ["role", "experience", "topicsToFocus", "numberOfQuestions"]
)
async def test_generate_questions_missing_field(client, auth_headers, fake_models, missing):
    body = {k: v for k, v in QUESTIONS_BODY.items() if k != missing}

    res = await client.post(QUESTIONS_URL, json=body, headers=auth_headers)

    assert res.status_code == 400
    assert res.json() == {"message": "Missing required fields"}
    assert fake_models.calls == []


async def test_generate_questions_accepts_non_string_fields(
    client, auth_headers, fake_models
):
    fake_models.responses = [SimpleNamespace(text=json.dumps(qa_pairs(2)))]
    body = {
        "role": 123,
        "experience": 4.5,
        "topicsToFocus": ["SQL", "caching"],
        "numberOfQuestions": "2",
    }

    res = await client.post(QUESTIONS_URL, json=body, headers=auth_headers)

    assert res.status_code == 200
    assert len(res.json()["questions"]) == 2
    prompt = fake_models.calls[0]["contents"]
    assert "for a 123 with 4.5 years of experience." in prompt
    assert "Generate 2 interview question-answer pairs" in prompt


@pytest.mark.parametrize(
    "override",
    [{"role": 0}, {"experience": False}, {"topicsToFocus": []}, {"numberOfQuestions": None}],
)
async def test_generate_questions_falsy_values_are_missing(
    client, auth_headers, fake_models, override
):
    res = await client.post(
        QUESTIONS_URL, json={**QUESTIONS_BODY, **override}, headers=auth_headers
    )

    assert res.status_code == 400
    assert res.json() == {"message": "Missing required fields"}
    assert fake_models.calls == []


async def test_generate_questions_without_body(client, auth_headers):
    res = await client.post(QUESTIONS_URL, headers=auth_headers)
    assert res.status_code == 400


async def test_generate_questions_unparsable_text(client, auth_headers, fake_models):
    fake_models.responses = [SimpleNamespace(text="I cannot help with that.")]

    res = await client.post(QUESTIONS_URL, json=QUESTIONS_BODY, headers=auth_headers)

    assert res.status_code == 500
    body = res.json()
    assert body["rawText"] == "I cannot help with that."
    assert "JSON parsing failed" in body["message"]


async def test_generate_questions_object_is_not_accepted(client, auth_headers, fake_models):
    fake_models.responses = [{"text": '{"question": "Q", "answer": "A"}'}]

    res = await client.post(QUESTIONS_URL, json=QUESTIONS_BODY, headers=auth_headers)

    assert res.status_code == 500
    assert "rawText" in res.json()


async def test_generate_questions_provider_error_is_not_retried(
    client, auth_headers, fake_models
):
    fake_models.responses = [RuntimeError("quota exceeded")]

    res = await client.post(QUESTIONS_URL, json=QUESTIONS_BODY, headers=auth_headers)

    assert res.status_code == 500
    assert res.json() == {
        "message": "Failed to generate questions",
        "error": "quota exceeded",
    }
    assert len(fake_models.calls) == 1


async def test_generate_explanation_returns_object(client, auth_headers, fake_models):
    payload = {"title": "Closures", "explanation": "A closure captures scope."}
    fake_models.responses = [
        {"output": [{"contents": [{"type": "text", "text": json.dumps(payload)}]}]}
    ]

    res = await client.post(
        EXPLANATION_URL, json={"question": "What is a closure?"}, headers=auth_headers
    )

    assert res.status_code == 200
    assert res.json() == payload
    assert fake_models.calls[0]["contents"] == concept_explain_prompt("What is a closure?")
    assert fake_models.calls[0]["config"] is None


async def test_generate_explanation_prose_returns_raw_text(
    client, auth_headers, fake_models
):
    fake_models.responses = [SimpleNamespace(text="A closure is a function with scope.")]

    res = await client.post(
        EXPLANATION_URL, json={"question": "What is a closure?"}, headers=auth_headers
    )

    assert res.status_code == 200
    body = res.json()
    assert body["rawText"] == "A closure is a function with scope."
    assert "title" not in body and "explanation" not in body


async def test_generate_explanation_retries_then_succeeds(
    client, auth_headers, fake_models
):
    fake_models.responses = [
        TimeoutError("slow"),
        SimpleNamespace(text='{"title": "T", "explanation": "E"}'),
    ]

    res = await client.post(
        EXPLANATION_URL, json={"question": "Explain GIL"}, headers=auth_headers
    )

    assert res.status_code == 200
    assert res.json() == {"title": "T", "explanation": "E"}
    assert len(fake_models.calls) == 2


async def test_generate_explanation_gives_up_after_three_attempts(
    client, auth_headers, fake_models
):
    fake_models.responses = [ConnectionError("provider down")]

    res = await client.post(
        EXPLANATION_URL, json={"question": "Explain GIL"}, headers=auth_headers
    )

    assert res.status_code == 500
    assert res.json() == {
        "message": "Failed to generate explanation",
        "error": "provider down",
    }
    assert len(fake_models.calls) == 3


async def test_generate_explanation_missing_question(client, auth_headers, fake_models):
    res = await client.post(EXPLANATION_URL, json={"question": ""}, headers=auth_headers)

    assert res.status_code == 400
    assert fake_models.calls == []


async def test_generate_explanation_numeric_question(client, auth_headers, fake_models):
    fake_models.responses = [SimpleNamespace(text='{"title": "42", "explanation": "E"}')]

    res = await client.post(EXPLANATION_URL, json={"question": 42}, headers=auth_headers)

    assert res.status_code == 200
    assert res.json() == {"title": "42", "explanation": "E"}
    assert fake_models.calls[0]["contents"] == concept_explain_prompt(42)


@pytest.mark.parametrize("question", [0, False, None, []])
async def test_generate_explanation_falsy_question(
    client, auth_headers, fake_models, question
):
    res = await client.post(
        EXPLANATION_URL, json={"question": question}, headers=auth_headers
    )

    assert res.status_code == 400
    assert res.json() == {"message": "Missing required fields"}
    assert fake_models.calls == []


@pytest.mark.parametrize("url", [QUESTIONS_URL, EXPLANATION_URL])
async def test_ai_endpoints_require_auth(client, url):
    res = await client.post(url, json=QUESTIONS_BODY)
    assert res.status_code == 401
