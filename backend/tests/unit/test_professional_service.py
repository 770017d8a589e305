"""
Unit tests for professional business logic.
"""

import pytest

from core.exceptions import NotFoundError, ReferentialConflictError, ValidationError
from services import ConsultationService, ProfessionalService


class TestProfessionalService:
    """Test professional service operations."""

    def test_create(self, db_session, sample_professional_data):
        professional = ProfessionalService.create_professional(db_session, **sample_professional_data)

        assert professional.id is not None
        assert ProfessionalService.get_professional(db_session, professional.id) == professional

    def test_duplicate_license_number_rejected(self, db_session, sample_professional_data):
        ProfessionalService.create_professional(db_session, **sample_professional_data)
        sample_professional_data["name"] = "Outro Nome"

        with pytest.raises(ValidationError, match="already registered"):
            ProfessionalService.create_professional(db_session, **sample_professional_data)

    @pytest.mark.parametrize("field, value", [
        ("name", "X"),
        ("specialty", ""),
        ("service_mode", "  "),
        ("license_number", 0),
        ("license_number", 123456),
    ])
    def test_create_with_invalid_field(self, db_session, sample_professional_data, field, value):
        sample_professional_data[field] = value

        with pytest.raises(ValidationError):
            ProfessionalService.create_professional(db_session, **sample_professional_data)

    def test_find_by_license_number(self, db_session, sample_professional_data):
        created = ProfessionalService.create_professional(db_session, **sample_professional_data)

        assert ProfessionalService.find_by_license_number(db_session, 12345) == created

    def test_find_by_unknown_license_number(self, db_session):
        with pytest.raises(NotFoundError):
            ProfessionalService.find_by_license_number(db_session, 54321)

    def test_partial_update(self, db_session, sample_professional_data):
        created = ProfessionalService.create_professional(db_session, **sample_professional_data)

        ProfessionalService.update_professional(db_session, created.id, service_mode="remoto")

        stored = ProfessionalService.get_professional(db_session, created.id)
        assert stored.service_mode == "remoto"
        assert stored.specialty == "Fisioterapia"

    def test_update_to_taken_license_number(self, db_session, sample_professional_data):
        ProfessionalService.create_professional(db_session, **sample_professional_data)
        sample_professional_data["license_number"] = 222
        other = ProfessionalService.create_professional(db_session, **sample_professional_data)

        with pytest.raises(ValidationError):
            ProfessionalService.update_professional(db_session, other.id, license_number=12345)

    def test_update_missing(self, db_session):
        with pytest.raises(NotFoundError):
            ProfessionalService.update_professional(db_session, 4444, name="Nome")

    def test_delete_linked_professional(self, db_session, sample_professional_data):
        professional = ProfessionalService.create_professional(db_session, **sample_professional_data)
        ConsultationService.create_consultation(
            db_session, kind="retorno", date="2024-03-15", reason="Dor", professional_ids=[professional.id]
        )

        with pytest.raises(ReferentialConflictError):
            ProfessionalService.delete_professional(db_session, professional.id)
