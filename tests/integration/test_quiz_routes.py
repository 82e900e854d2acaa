"""Integration tests for /api/tests and /api/results."""

import pytest

QUESTIONS = [
    {
        "text": "2 + 2?",
        "type": "multiple-choice",
        "options": [{"id": "a", "text": "3"}, {"id": "b", "text": "4", "correct": True}],
    },
    {
        "text": "Prime numbers",
        "type": "multiple-answer",
        "options": [
            {"id": "A", "text": "2", "correct": True},
            {"id": "B", "text": "3", "correct": True},
            {"id": "C", "text": "4"},
        ],
    },
    {"text": "Capital of France", "type": "text", "correctAnswer": "Paris"},
]


@pytest.fixture
def published_test(client, admin_headers):
    resp = client.post(
        "/api/tests",
        json={"title": "Math", "description": "Basics", "duration": 20, "questions": QUESTIONS},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    test_id = resp.json()["id"]
    resp = client.put(f"/api/tests/{test_id}/publish", json={"published": True}, headers=admin_headers)
    assert resp.status_code == 200
    return test_id


class TestTestsRoutes:
    def test_student_cannot_create(self, client, student_headers):
        resp = client.post(
            "/api/tests",
            json={"title": "X", "duration": 5, "questions": QUESTIONS},
            headers=student_headers,
        )
        assert resp.status_code == 403

    def test_student_view_is_redacted(self, client, published_test, student_headers):
        test_id = published_test
        resp = client.get(f"/api/tests/{test_id}", headers=student_headers)
        assert resp.status_code == 200
        for question in resp.json()["questions"]:
            assert "correctAnswer" not in question
            for option in question.get("options", []):
                assert set(option) == {"id", "text"}

        listing = client.get("/api/tests", headers=student_headers).json()
        assert [t["id"] for t in listing] == [test_id]
        assert listing[0]["questionCount"] == 3

    def test_draft_hidden_from_student(self, client, admin_headers, student_headers):
        resp = client.post(
            "/api/tests",
            json={"title": "Draft", "duration": 5, "questions": QUESTIONS},
            headers=admin_headers,
        )
        draft_id = resp.json()["id"]
        assert resp.json()["published"] is False
        assert client.get("/api/tests", headers=student_headers).json() == []
        assert client.get(f"/api/tests/{draft_id}", headers=student_headers).status_code == 403

    def test_unknown_test(self, client, admin_headers):
        assert client.get("/api/tests/missing", headers=admin_headers).status_code == 404

    def test_import_text_file(self, client, admin_headers):
        content = "# Poytaxt?\n+ Toshkent\n- Samarqand\n# Tub sonlar\n+ 2\n+ 3\n- 4\n"
        resp = client.post(
            "/api/tests/import",
            content=content.encode("utf-8"),
            headers={**admin_headers, "Content-Type": "text/plain"},
        )
        assert resp.status_code == 200
        questions = resp.json()["questions"]
        assert [q["type"] for q in questions] == ["multiple-choice", "multiple-answer"]

    def test_random_test(self, client, admin_headers):
        resp = client.post(
            "/api/tests/random",
            json={"title": "Random", "duration": 10, "questionCount": 2, "allQuestions": QUESTIONS},
            headers=admin_headers,
        )
        assert resp.status_code == 201
        assert len(resp.json()["questions"]) == 2


class TestResultsRoutes:
    def _answers(self, client, admin_headers, test_id):
        questions = client.get(f"/api/tests/{test_id}", headers=admin_headers).json()["questions"]
        choice, multi, text = (q["id"] for q in questions)
        return [
            {"questionId": choice, "optionId": "b"},
            {"questionId": multi, "selectedOptions": ["A"]},
            {"questionId": text, "text": " paris "},
        ]

    def test_submit_returns_summary_only(self, client, published_test, admin_headers, student_headers):
        test_id = published_test
        answers = self._answers(client, admin_headers, test_id)

        resp = client.post("/api/results", json={"testId": test_id, "answers": answers}, headers=student_headers)

        assert resp.status_code == 201
        body = resp.json()
        assert set(body) == {"id", "score", "correctCount", "totalQuestions"}
        assert body["correctCount"] == 2
        assert body["totalQuestions"] == 3
        assert body["score"] == pytest.approx(200 / 3)

        detail = client.get(f"/api/results/{body['id']}", headers=student_headers).json()
        assert detail["testTitle"] == "Math"
        assert [a["correct"] for a in detail["answers"]] == [True, False, True]

    def test_admin_sees_all_results(self, client, published_test, admin_headers, student_headers):
        test_id = published_test
        client.post("/api/results", json={"testId": test_id, "answers": []}, headers=student_headers)

        [item] = client.get("/api/results", headers=admin_headers).json()
        assert item["userName"] == "Alice"
        assert item["score"] == 0

    def test_other_student_cannot_read_result(
        self, client, published_test, student_headers, register_student, auth_header
    ):
        test_id = published_test
        result_id = client.post(
            "/api/results", json={"testId": test_id, "answers": []}, headers=student_headers
        ).json()["id"]

        other = auth_header(register_student(telegram="bobby", username="bob_t")["token"])
        assert client.get(f"/api/results/{result_id}", headers=other).status_code == 403

    def test_submit_unknown_test(self, client, student_headers):
        resp = client.post("/api/results", json={"testId": "missing", "answers": []}, headers=student_headers)
        assert resp.status_code == 404
        assert resp.json() == {"error": "Test topilmadi", "code": "not_found"}


class TestAdminTestManagement:
    def test_update_keeps_question_ids(self, client, published_test, admin_headers):
        before = client.get(f"/api/tests/{published_test}", headers=admin_headers).json()
        questions = before["questions"]
        questions[2]["correctAnswer"] = "Parij"

        resp = client.put(
            f"/api/tests/{published_test}",
            json={"title": "Math 2", "questions": questions},
            headers=admin_headers,
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["title"] == "Math 2"
        assert body["duration"] == 20
        assert body["updatedAt"]
        assert [q["id"] for q in body["questions"]] == [q["id"] for q in before["questions"]]
        assert body["questions"][2]["correctAnswer"] == "Parij"

    def test_update_validation_and_missing_test(self, client, published_test, admin_headers):
        resp = client.put(f"/api/tests/{published_test}", json={"duration": 0}, headers=admin_headers)
        assert resp.status_code == 400
        resp = client.put("/api/tests/missing", json={"title": "X"}, headers=admin_headers)
        assert resp.status_code == 404

    def test_delete_removes_test_and_its_results(
        self, client, published_test, admin_headers, student_headers
    ):
        client.post("/api/results", json={"testId": published_test, "answers": []}, headers=student_headers)
        assert len(client.get("/api/results", headers=admin_headers).json()) == 1

        resp = client.delete(f"/api/tests/{published_test}", headers=admin_headers)

        assert resp.status_code == 200
        assert resp.json() == {"message": "Test muvaffaqiyatli o'chirildi"}
        assert client.get(f"/api/tests/{published_test}", headers=admin_headers).status_code == 404
        assert client.get("/api/results", headers=admin_headers).json() == []
        assert client.delete(f"/api/tests/{published_test}", headers=admin_headers).status_code == 404

    def test_student_cannot_update_or_delete(self, client, published_test, student_headers):
        assert client.put(f"/api/tests/{published_test}", json={"title": "X"}, headers=student_headers).status_code == 403
        assert client.delete(f"/api/tests/{published_test}", headers=student_headers).status_code == 403

    def test_question_pool_feeds_random_test(self, client, published_test, admin_headers):
        pool = client.get("/api/questions", headers=admin_headers).json()
        assert len(pool) == 3
        assert pool[2]["correctAnswer"] == "Paris"

        resp = client.post(
            "/api/tests/random",
            json={"title": "Mix", "duration": 5, "questionCount": 2, "allQuestions": pool},
            headers=admin_headers,
        )
        assert resp.status_code == 201
        assert not {q["id"] for q in resp.json()["questions"]} & {q["id"] for q in pool}

    def test_users_listing_hides_password_hashes(self, client, admin_headers, student_headers):
        resp = client.get("/api/users", headers=admin_headers)

        assert resp.status_code == 200
        users = {u["username"]: u for u in resp.json()}
        assert set(users) == {"admin", "alice_t"}
        assert users["alice_t"]["telegram"] == "alice"
        assert users["alice_t"]["phone"] == "+998901234567"
        assert all("passwordHash" not in u for u in users.values())

    def test_admin_lists_need_admin(self, client, student_headers):
        assert client.get("/api/users", headers=student_headers).status_code == 403
        assert client.get("/api/questions", headers=student_headers).status_code == 403
