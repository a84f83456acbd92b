"""Tests for home, dashboard and class-selection pages."""

from fake_supabase import NEWBIE_ID, NEWBIE_TOKEN, STUDENT_ID, STUDENT_TOKEN


class TestHome:
    def test_lists_all_classes_anonymously(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [c["name"] for c in data["classes"]] == ["Class 1", "Class 2"]

    def test_store_error_replaces_page(self, client, backend):
        backend.failures[("classes", "select")] = "permission denied for table classes"
        response = client.get("/")
        assert response.status_code == 502
        assert response.json()["detail"] == "permission denied for table classes"


class TestDashboard:
    def test_anonymous_redirects_to_login(self, client):
        response = client.get("/dashboard")
        assert response.status_code == 307
        assert response.headers["location"] == "/login"

    def test_without_class_redirects_to_selection(self, login_as):
        response = login_as(NEWBIE_TOKEN).get("/dashboard")
        assert response.status_code == 307
        assert response.headers["location"] == "/select-class"

    def test_shows_class_scoped_stats(self, login_as, record_progress):
        record_progress(STUDENT_ID, 1000, "correct", "2026-02-01T10:00:00+00:00")
        record_progress(STUDENT_ID, 1004, "correct", "2026-02-02T10:00:00+00:00")
        record_progress(STUDENT_ID, 1005, "attempted", "2026-02-03T10:00:00+00:00")

        response = login_as(STUDENT_TOKEN).get("/dashboard")

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "student@example.com"
        assert data["class_id"] == 1
        assert data["class_name"] == "Class 1"
        assert data["stats"] == {
            "total": 6,
            "attempted": 3,
            "correct": 2,
            "completion_pct": 50,
            "accuracy_pct": 67,
        }
        assert [a["question_id"] for a in data["recent_activity"]] == [1005, 1004, 1000]

    def test_no_activity(self, login_as):
        data = login_as(STUDENT_TOKEN).get("/dashboard").json()
        assert data["stats"]["completion_pct"] == 0
        assert data["stats"]["accuracy_pct"] == 0
        assert data["recent_activity"] == []

    def test_missing_class_row_uses_fallback_name(self, login_as, backend):
        backend.tables["classes"] = [c for c in backend.tables["classes"] if c["id"] != 1]
        data = login_as(STUDENT_TOKEN).get("/dashboard").json()
        assert data["class_name"] == "Class 1"


class TestSelectClassPage:
    def test_anonymous_redirects_to_login(self, client):
        response = client.get("/select-class")
        assert response.headers["location"] == "/login"

    def test_user_with_class_goes_to_class(self, login_as):
        response = login_as(STUDENT_TOKEN).get("/select-class")
        assert response.status_code == 307
        assert response.headers["location"] == "/class/1"

    def test_change_shows_list_for_user_with_class(self, login_as):
        response = login_as(STUDENT_TOKEN).get("/select-class", params={"change": "true"})
        assert response.status_code == 200
        assert response.json()["count"] == 2

    def test_new_user_sees_list(self, login_as):
        response = login_as(NEWBIE_TOKEN).get("/select-class")
        assert response.status_code == 200
        assert response.json()["count"] == 2


class TestChooseClass:
    def test_upserts_and_opens_class(self, login_as, backend):
        response = login_as(NEWBIE_TOKEN).post("/select-class", json={"class_id": 2})

        assert response.status_code == 303
        assert response.headers["location"] == "/class/2"
        rows = [p for p in backend.tables["user_profiles"] if p["user_id"] == NEWBIE_ID]
        assert len(rows) == 1
        assert rows[0]["selected_class_id"] == 2

    def test_repeat_selection_keeps_one_row(self, login_as, backend):
        client = login_as(NEWBIE_TOKEN)
        client.post("/select-class", json={"class_id": 1})
        client.post("/select-class", json={"class_id": 1})
        rows = [p for p in backend.tables["user_profiles"] if p["user_id"] == NEWBIE_ID]
        assert len(rows) == 1

    def test_changed_class_unlocks_new_class(self, login_as):
        client = login_as(STUDENT_TOKEN)
        client.post("/select-class", json={"class_id": 2})
        assert client.get("/class/2").status_code == 200
        assert client.get("/class/1").headers["location"] == "/class/2"

    def test_anonymous_redirects_to_login(self, client, backend):
        response = client.post("/select-class", json={"class_id": 1})
        assert response.status_code == 303
        assert response.headers["location"] == "/login"
        assert backend.calls_to("user_profiles", "upsert") == 0

    def test_store_error_surfaces(self, login_as, backend):
        backend.failures[("user_profiles", "upsert")] = "violates foreign key constraint"
        response = login_as(NEWBIE_TOKEN).post("/select-class", json={"class_id": 99})
        assert response.status_code == 502
        assert "foreign key" in response.json()["detail"]
