"""Tests for request schemas and parse_input."""

import pytest
from pydantic import ValidationError

from src.tracker.core.exceptions import InvalidInputError
from src.tracker.models import ProjectPriority, ProjectStatus
from src.tracker.schemas import (
    ProjectCreate,
    ProjectFilter,
    ProjectUpdate,
    parse_input,
)

pytestmark = pytest.mark.unit


class TestProjectCreate:
    def test_defaults_status_and_priority(self):
        payload = parse_input(ProjectCreate, {"name": "API", "description": "Build it"})
        assert payload.status is ProjectStatus.TODO
        assert payload.priority is ProjectPriority.MEDIUM

    def test_trims_text_fields(self):
        payload = parse_input(ProjectCreate, {"name": "  API ", "description": " Build it "})
        assert payload.name == "API"
        assert payload.description == "Build it"

    def test_missing_name_reports_the_field(self):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_input(ProjectCreate, {"description": "No name"})
        assert exc_info.value.message.startswith("name:")

    def test_rule_message_is_passed_through(self):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_input(ProjectCreate, {"name": "   ", "description": "Blank name"})
        assert exc_info.value.message == "Name is required"

    def test_invalid_status(self):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_input(
                ProjectCreate, {"name": "API", "description": "d", "status": "archived"}
            )
        assert exc_info.value.message == "Status must be one of: todo, in-progress, completed"

    def test_none_input_is_rejected(self):
        with pytest.raises(InvalidInputError):
            parse_input(ProjectCreate, None)

    def test_direct_construction_raises_validation_error(self):
        with pytest.raises(ValidationError):
            ProjectCreate(name="", description="d")

    def test_existing_instance_is_returned_unchanged(self):
        payload = ProjectCreate(name="API", description="d")
        assert parse_input(ProjectCreate, payload) is payload


class TestProjectUpdate:
    def test_changes_contain_only_sent_fields(self):
        payload = parse_input(ProjectUpdate, {"status": "completed"})
        assert payload.changes() == {"status": "completed"}

    def test_empty_update_has_no_changes(self):
        assert parse_input(ProjectUpdate, {}).changes() == {}

    def test_changes_are_normalized(self):
        payload = parse_input(ProjectUpdate, {"name": "  Renamed  ", "priority": "low"})
        assert payload.changes() == {"name": "Renamed", "priority": "low"}

    @pytest.mark.parametrize(
        ("field", "message"),
        [
            ("name", "Name cannot be null"),
            ("description", "Description cannot be null"),
            ("status", "Status cannot be null"),
            ("priority", "Priority cannot be null"),
        ],
    )
    def test_explicit_null_is_rejected(self, field, message):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_input(ProjectUpdate, {field: None})
        assert exc_info.value.message == message

    def test_invalid_field_is_rejected(self):
        with pytest.raises(InvalidInputError, match="Description cannot exceed 500"):
            parse_input(ProjectUpdate, {"description": "x" * 501})


class TestProjectFilter:
    def test_empty_strings_mean_no_filter(self):
        filters = parse_input(ProjectFilter, {"status": "", "priority": ""})
        assert filters.is_empty

    def test_values_are_parsed(self):
        filters = parse_input(ProjectFilter, {"status": "in-progress", "priority": "high"})
        assert filters.status is ProjectStatus.IN_PROGRESS
        assert filters.priority is ProjectPriority.HIGH
        assert not filters.is_empty

    def test_none_input_means_no_filter(self):
        assert parse_input(ProjectFilter, None).is_empty

    def test_invalid_priority(self):
        with pytest.raises(InvalidInputError, match="Priority must be one of"):
            parse_input(ProjectFilter, {"priority": "urgent"})
