"""
Unit tests for project DTOs.
"""

import pytest
from datetime import datetime

from bizdesk.application.dto.project_dto import (
    CreateProjectRequestDTO,
    UpdateProjectRequestDTO,
    ProjectResponseDTO
)
from bizdesk.domain.models.base import ValidationError
from bizdesk.domain.models.project import Project, ProjectStatus


class TestCreateProjectRequestDTO:
    """Test cases for CreateProjectRequestDTO."""

    def test_defaults(self):
        """New projects are active."""
        dto = CreateProjectRequestDTO.build({"name": "Website"})

        assert dto.status == ProjectStatus.ACTIVE
        assert dto.client_id is None

    def test_camel_case_fields(self):
        """camelCase keys are accepted."""
        dto = CreateProjectRequestDTO.build({
            "name": "Website",
            "clientId": 3,
            "startDate": "2024-01-01T00:00:00",
            "endDate": "2024-06-30T00:00:00",
        })

        assert dto.client_id == 3
        assert dto.start_date == datetime(2024, 1, 1)
        assert dto.end_date == datetime(2024, 6, 30)

    def test_name_required(self):
        """A project needs a name."""
        with pytest.raises(ValidationError, match="name"):
            CreateProjectRequestDTO.build({"description": "No name"})

    def test_null_status_is_active(self):
        """An explicit null status falls back to active."""
        dto = CreateProjectRequestDTO.build({"name": "Website", "status": None})
        assert dto.status == ProjectStatus.ACTIVE

    def test_end_before_start_rejected(self):
        """The end date cannot precede the start date."""
        with pytest.raises(ValidationError, match="End date"):
            CreateProjectRequestDTO.build({
                "name": "Website",
                "start_date": "2024-06-01T00:00:00",
                "end_date": "2024-01-01T00:00:00",
            })

    def test_same_start_and_end_allowed(self):
        """A one-day project is valid."""
        dto = CreateProjectRequestDTO.build({
            "name": "Workshop",
            "start_date": "2024-06-01T00:00:00",
            "end_date": "2024-06-01T00:00:00",
        })
        assert dto.end_date == dto.start_date


class TestUpdateProjectRequestDTO:
    """Test cases for UpdateProjectRequestDTO."""

    def test_patch(self):
        """Only supplied fields reach the patch."""
        dto = UpdateProjectRequestDTO.build({"status": "on-hold"})
        assert dto.to_patch() == {"status": "on-hold"}

    def test_name_cannot_be_cleared(self):
        """The name cannot be set to null."""
        with pytest.raises(ValidationError, match="name cannot be null"):
            UpdateProjectRequestDTO.build({"name": None})

    def test_client_can_be_cleared(self):
        """A project may be detached from its client."""
        dto = UpdateProjectRequestDTO.build({"clientId": None})
        assert dto.to_patch() == {"client_id": None}

    def test_blank_client_clears_client(self):
        """An empty client id is the same as null."""
        dto = UpdateProjectRequestDTO.build({"clientId": ""})
        assert dto.to_patch() == {"client_id": None}


class TestProjectResponseDTO:
    """Test cases for ProjectResponseDTO."""

    def test_from_domain(self):
        """Responses carry the joined client name."""
        project = Project(id=5, name="Website", client_id=2, client_name="Acme Corp")

        response = ProjectResponseDTO.from_domain(project)

        assert response.id == 5
        assert response.name == "Website"
        assert response.status == "active"
        assert response.client_name == "Acme Corp"
