import pytest

SESSION_BODY = {
    "role": "Frontend Developer",
    "experience": 2,
    "topicsToFocus": "React, CSS",
    "description": "Prep for a product company",
    "questions": [
        {"question": "What is the virtual DOM?", "answer": "An in-memory tree."},
        {"question": "What is specificity?", "answer": "Selector weight."},
    ],
}


async def create_session(client, headers, body=None):
    res = await client.post("/api/sessions/create", json=body or SESSION_BODY, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["session"]


async def test_create_session_with_questions(client, auth_headers):
    res = await client.post("/api/sessions/create", json=SESSION_BODY, headers=auth_headers)

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    session = body["session"]
    assert session["role"] == "Frontend Developer"
    assert session["experience"] == "2"
    assert session["topicsToFocus"] == "React, CSS"
    assert [q["question"] for q in session["questions"]] == [
        "What is the virtual DOM?",
        "What is specificity?",
    ]
    assert all(q["isPinned"] is False and q["note"] == "" for q in session["questions"])


async def test_create_session_requires_role(client, auth_headers):
    body = {k: v for k, v in SESSION_BODY.items() if k != "role"}
    res = await client.post("/api/sessions/create", json=body, headers=auth_headers)
    assert res.status_code == 422


async def test_my_sessions_newest_first_and_scoped(client, auth_headers, login_as):
    first = await create_session(client, auth_headers)
    second = await create_session(client, auth_headers, {**SESSION_BODY, "role": "SRE"})
    other_headers = await login_as("someone-else@example.com")
    await create_session(client, other_headers)

    res = await client.get("/api/sessions/my-sessions", headers=auth_headers)

    assert res.status_code == 200
    ids = [s["id"] for s in res.json()]
    assert ids == [second["id"], first["id"]]


async def test_get_session_orders_pinned_first(client, auth_headers):
    session = await create_session(client, auth_headers)
    second_question = session["questions"][1]

    res = await client.post(f"/api/questions/{second_question['id']}/pin", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["question"]["isPinned"] is True

    res = await client.get(f"/api/sessions/{session['id']}", headers=auth_headers)

    assert res.status_code == 200
    questions = res.json()["session"]["questions"]
    assert questions[0]["id"] == second_question["id"]
    assert questions[0]["isPinned"] is True


async def test_get_session_of_other_user_is_not_found(client, auth_headers, login_as):
    session = await create_session(client, auth_headers)
    other_headers = await login_as("intruder@example.com")

    res = await client.get(f"/api/sessions/{session['id']}", headers=other_headers)

    assert res.status_code == 404
    assert res.json() == {"message": "Session not found"}


async def test_delete_session(client, auth_headers, login_as):
    session = await create_session(client, auth_headers)
    other_headers = await login_as("intruder@example.com")

    res = await client.delete(f"/api/sessions/{session['id']}", headers=other_headers)
    assert res.status_code == 401
    assert res.json()["message"] == "Not authorized to delete this session"

    res = await client.delete(f"/api/sessions/{session['id']}", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {"message": "Session deleted successfully"}

    res = await client.get(f"/api/sessions/{session['id']}", headers=auth_headers)
    assert res.status_code == 404

    question_id = session["questions"][0]["id"]
    res = await client.post(f"/api/questions/{question_id}/pin", headers=auth_headers)
    assert res.status_code == 404


async def test_delete_missing_session(client, auth_headers):
    res = await client.delete("/api/sessions/9999", headers=auth_headers)
    assert res.status_code == 404


async def test_add_questions(client, auth_headers):
    session = await create_session(client, auth_headers)

    res = await client.post(
        "/api/questions/add",
        json={
            "sessionId": session["id"],
            "questions": [{"question": "What is a hook?", "answer": "A function."}],
        },
        headers=auth_headers,
    )

    assert res.status_code == 201
    created = res.json()
    assert len(created) == 1
    assert created[0]["sessionId"] == session["id"]

    res = await client.get(f"/api/sessions/{session['id']}", headers=auth_headers)
    assert len(res.json()["session"]["questions"]) == 3


@pytest.mark.parametrize(
    "body",
    [
        {"questions": [{"question": "Q", "answer": "A"}]},
        {"sessionId": 1, "questions": "not a list"},
        {"sessionId": 1, "questions": [{"answer": "no question"}]},
    ],
)
async def test_add_questions_invalid_input(client, auth_headers, body):
    await create_session(client, auth_headers)

    res = await client.post("/api/questions/add", json=body, headers=auth_headers)

    assert res.status_code == 400
    assert res.json() == {"message": "Invalid input data"}


async def test_add_questions_unknown_session(client, auth_headers):
    res = await client.post(
        "/api/questions/add",
        json={"sessionId": 424242, "questions": []},
        headers=auth_headers,
    )
    assert res.status_code == 404


async def test_toggle_pin_twice(client, auth_headers):
    session = await create_session(client, auth_headers)
    question_id = session["questions"][0]["id"]

    first = await client.post(f"/api/questions/{question_id}/pin", headers=auth_headers)
    second = await client.post(f"/api/questions/{question_id}/pin", headers=auth_headers)

    assert first.json()["question"]["isPinned"] is True
    assert second.json()["question"]["isPinned"] is False


async def test_update_note(client, auth_headers):
    session = await create_session(client, auth_headers)
    question_id = session["questions"][0]["id"]

    res = await client.post(
        f"/api/questions/{question_id}/note",
        json={"note": "Mention reconciliation"},
        headers=auth_headers,
    )
    assert res.status_code == 200
    assert res.json()["success"] is True
    assert res.json()["question"]["note"] == "Mention reconciliation"

    res = await client.post(f"/api/questions/{question_id}/note", json={}, headers=auth_headers)
    assert res.json()["question"]["note"] == ""


async def test_question_of_other_user_is_not_found(client, auth_headers, login_as):
    session = await create_session(client, auth_headers)
    other_headers = await login_as("intruder@example.com")

    res = await client.post(
        f"/api/questions/{session['questions'][0]['id']}/note",
        json={"note": "mine now"},
        headers=other_headers,
    )

    assert res.status_code == 404
    assert res.json() == {"message": "Question not found"}
