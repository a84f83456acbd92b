"""Tests for ContentRepository against the in-memory backend."""

import pytest

from eduportal.backend.records import ClassRecord, SubjectRecord
from eduportal.errors import StoreError
from fake_supabase import ADMIN_ID, NEWBIE_ID, STUDENT_ID


class TestContentReads:
    def test_list_classes_ordered(self, repo):
        assert repo.list_classes() == [
            ClassRecord(id=1, name="Class 1"),
            ClassRecord(id=2, name="Class 2"),
        ]

    def test_get_class_missing_returns_none(self, repo):
        assert repo.get_class(42) is None

    def test_list_subjects_for_class(self, repo):
        subjects = repo.list_subjects(class_id=1)
        assert [s.id for s in subjects] == [10, 11]
        assert subjects[0] == SubjectRecord(id=10, name="Mathematics", class_id=1, is_preview=True)

    def test_list_subjects_all(self, repo):
        assert [s.id for s in repo.list_subjects()] == [10, 11, 20]

    def test_get_subject_and_chapter(self, repo):
        assert repo.get_subject(20).class_id == 2
        assert repo.get_chapter(110).subject_id == 11
        assert repo.get_subject(7) is None
        assert repo.get_chapter(7) is None

    def test_list_questions_for_chapter(self, repo):
        questions = repo.list_questions(100)
        assert [q.id for q in questions] == [1000, 1001, 1002]
        assert questions[0].question_type == "theory"
        assert questions[0].options is None


class TestProfilesAndAdmins:
    def test_selected_class(self, repo):
        assert repo.get_selected_class_id(STUDENT_ID) == 1
        assert repo.get_selected_class_id(NEWBIE_ID) is None

    def test_profile_with_null_class(self, repo, backend):
        backend.tables["user_profiles"].append({"user_id": NEWBIE_ID, "selected_class_id": None})
        assert repo.get_selected_class_id(NEWBIE_ID) is None

    def test_is_admin(self, repo):
        assert repo.is_admin(ADMIN_ID) is True
        assert repo.is_admin(STUDENT_ID) is False


class TestCounts:
    def test_count_class_questions(self, repo):
        assert repo.count_class_questions(1) == 6
        assert repo.count_class_questions(2) == 2
        assert repo.count_class_questions(99) == 0

    def test_question_with_missing_chapter_not_counted(self, repo, backend):
        backend.tables["questions"].append({"id": 5000, "chapter_id": 999, "question": "Orphan"})
        assert repo.count_class_questions(1) == 6

    def test_count_class_progress_by_status(self, repo, record_progress):
        record_progress(STUDENT_ID, 1000, "correct")
        record_progress(STUDENT_ID, 1001, "wrong")
        record_progress(STUDENT_ID, 1006, "correct")
        record_progress(NEWBIE_ID, 1002, "correct")

        assert repo.count_class_progress(STUDENT_ID, 1) == 2
        assert repo.count_class_progress(STUDENT_ID, 1, status="correct") == 1
        assert repo.count_class_progress(STUDENT_ID, 2) == 1

    def test_counts_ignore_row_cap(self, repo, backend, record_progress):
        backend.max_rows = 1
        record_progress(STUDENT_ID, 1000, "correct")
        record_progress(STUDENT_ID, 1001, "correct")
        assert repo.count_class_questions(1) == 6
        assert repo.count_class_progress(STUDENT_ID, 1) == 2


class TestErrors:
    def test_api_error_becomes_store_error(self, repo, backend):
        backend.failures[("classes", "select")] = "relation \"classes\" does not exist"
        with pytest.raises(StoreError) as excinfo:
            repo.list_classes()
        assert excinfo.value.message == 'relation "classes" does not exist'
        assert excinfo.value.code == "42501"

    def test_insert_returns_stored_row(self, repo):
        row = repo.insert("classes", {"name": "Class 3"})
        assert row == {"id": 3, "name": "Class 3"}
