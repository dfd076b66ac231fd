"""Tests for task data models."""

import pytest
from pydantic import ValidationError

from securetask.core.api.exceptions import TaskValidationError
from securetask.core.tasks.models import (
    EditSession,
    Task,
    TaskDraft,
    TaskFilters,
    TaskStatus,
    TaskUpdate,
)


class TestTaskStatus:
    def test_toggled(self) -> None:
        assert TaskStatus.PENDING.toggled() == TaskStatus.COMPLETED
        assert TaskStatus.COMPLETED.toggled() == TaskStatus.PENDING

    def test_values(self) -> None:
        assert [s.value for s in TaskStatus] == ["pending", "completed"]


class TestTask:
    """Tests for parsing tasks from the wire."""

    def test_accepts_underscore_id(self) -> None:
        """Test that Mongo-style _id is accepted."""
        task = Task.model_validate({"_id": "t1", "title": "Buy milk", "status": "completed"})
        assert task.id == "t1"
        assert task.status == TaskStatus.COMPLETED
        assert task.is_completed

    def test_accepts_plain_id(self) -> None:
        task = Task.model_validate({"id": "t1", "title": "Buy milk"})
        assert task.id == "t1"

    def test_numeric_id_becomes_string(self) -> None:
        task = Task.model_validate({"id": 42, "title": "Buy milk"})
        assert task.id == "42"

    def test_defaults(self) -> None:
        """Test that description and status have defaults."""
        task = Task.model_validate({"_id": "t1", "title": "Buy milk"})
        assert task.description == ""
        assert task.status == TaskStatus.PENDING

    def test_null_description_is_empty(self) -> None:
        task = Task.model_validate({"_id": "t1", "title": "x", "description": None})
        assert task.description == ""

    def test_extra_fields_ignored(self) -> None:
        task = Task.model_validate(
            {"_id": "t1", "title": "x", "user": "u1", "createdAt": "2026-01-01"}
        )
        assert "user" not in task.model_dump()

    def test_missing_title_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Task.model_validate({"_id": "t1"})

    def test_dump_uses_id(self) -> None:
        task = Task.model_validate({"_id": "t1", "title": "x"})
        assert task.model_dump(mode="json") == {
            "id": "t1",
            "title": "x",
            "description": "",
            "status": "pending",
        }


class TestTaskDraft:
    """Tests for the form draft."""

    def test_defaults(self) -> None:
        draft = TaskDraft()
        assert draft.to_payload() == {"title": "", "description": "", "status": "pending"}

    def test_from_task(self, sample_task: Task) -> None:
        draft = TaskDraft.from_task(sample_task)
        assert draft == TaskDraft(title="Buy milk", description="2 litres")

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_blank_title_fails_validation(self, title: str) -> None:
        """Test that a title that is empty after trimming is rejected."""
        with pytest.raises(TaskValidationError, match="Title is required") as exc_info:
            TaskDraft(title=title).validated()
        assert exc_info.value.context["field"] == "title"

    def test_valid_draft_unchanged(self) -> None:
        """Test that validation does not rewrite the title."""
        draft = TaskDraft(title="  Buy milk ")
        assert draft.validated() is draft
        assert draft.to_payload()["title"] == "  Buy milk "

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TaskDraft.model_validate({"title": "x", "priority": 1})


class TestTaskUpdate:
    def test_only_set_fields_sent(self) -> None:
        assert TaskUpdate(status=TaskStatus.COMPLETED).to_payload() == {"status": "completed"}

    def test_explicit_empty_description_sent(self) -> None:
        assert TaskUpdate(description="").to_payload() == {"description": ""}

    def test_blank_title_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TaskUpdate(title="  ")

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TaskUpdate.model_validate({"priority": 1})


class TestTaskFilters:
    """Tests for list filters."""

    @pytest.mark.parametrize(
        ("search", "status", "expected"),
        [
            (None, None, {}),
            ("milk", None, {"search": "milk"}),
            (None, "completed", {"status": "completed"}),
            ("milk", "pending", {"search": "milk", "status": "pending"}),
            ("", "", {}),
        ],
    )
    def test_to_params(self, search, status, expected) -> None:
        """Test that only non-absent filters become query parameters."""
        assert TaskFilters(search=search, status=status).to_params() == expected

    def test_invalid_status_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TaskFilters(status="done")

    def test_equality(self) -> None:
        assert TaskFilters(search="a") == TaskFilters(search="a")
        assert TaskFilters(search="a") != TaskFilters(search="b")
        assert TaskFilters(search="") == TaskFilters()

    def test_describe(self) -> None:
        assert TaskFilters().describe() is None
        assert TaskFilters(search="milk", status="pending").describe() == (
            "search=milk status=pending"
        )


class TestEditSession:
    def test_creating(self) -> None:
        session = EditSession.creating()
        assert session.task_id is None
        assert not session.is_editing

    def test_editing(self) -> None:
        session = EditSession.editing("t1")
        assert session.task_id == "t1"
        assert session.is_editing
