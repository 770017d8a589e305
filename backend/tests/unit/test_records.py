"""
Unit tests for record value types.
"""

from datetime import date

from shared_types import ConsultationData, PatientData, ProfessionalData


def _professional(professional_id=None, name="Ana") -> ProfessionalData:
    return ProfessionalData(
        id=professional_id, name=name, specialty="Fisioterapia",
        service_mode="presencial", license_number=123
    )


class TestIdentifierEquality:
    """Test identifier-based equality shared by all records."""

    def test_same_id_is_equal_regardless_of_fields(self):
        assert _professional(5, name="Ana") == _professional(5, name="Outra")

    def test_different_ids_are_not_equal(self):
        assert _professional(5) != _professional(6)

    def test_unset_id_only_equals_itself(self):
        unsaved = _professional()

        assert unsaved == unsaved
        assert unsaved != _professional()
        assert unsaved != _professional(5)

    def test_different_types_never_equal(self):
        consultation = ConsultationData(id=5, kind="retorno", date=date(2024, 1, 1), reason="-")

        assert consultation != _professional(5)

    def test_has_id(self):
        assert _professional(5).has_id
        assert not _professional().has_id

    def test_hash_follows_identifier(self):
        assert len({_professional(5), _professional(5, name="Outra"), _professional(6)}) == 2

    def test_unset_records_hash_separately(self):
        assert len({_professional(), _professional()}) == 2


class TestConsultationProfessionals:
    """Test in-memory professional membership helpers."""

    def test_add_professional_skips_duplicates(self):
        consultation = ConsultationData(kind="retorno", date=date(2024, 1, 1), reason="-")

        consultation.add_professional(_professional(1))
        consultation.add_professional(_professional(1, name="Same id"))
        consultation.add_professional(_professional(2))

        assert consultation.professional_ids == [1, 2]

    def test_remove_professional(self):
        consultation = ConsultationData(
            kind="retorno", date=date(2024, 1, 1), reason="-",
            professionals=[_professional(1), _professional(2)]
        )

        consultation.remove_professional(_professional(1))
        consultation.remove_professional(_professional(9))

        assert consultation.professional_ids == [2]

    def test_professional_ids_skip_unsaved_professionals(self):
        consultation = ConsultationData(
            kind="retorno", date=date(2024, 1, 1), reason="-",
            professionals=[_professional(), _professional(3)]
        )

        assert consultation.professional_ids == [3]

    def test_professionals_default_to_empty_list(self):
        first = ConsultationData(kind="a", date=date(2024, 1, 1), reason="-")
        second = ConsultationData(kind="b", date=date(2024, 1, 1), reason="-")

        first.add_professional(_professional(1))

        assert second.professionals == []


class TestPatientData:
    """Test patient helpers."""

    def test_clean(self):
        patient = PatientData(
            name="  Carlos  ", age=67, technical_level=3, service_mode=" remoto ",
            national_id="123.456.789-01", password_hash="hash"
        )

        patient.clean()

        assert patient.name == "Carlos"
        assert patient.service_mode == "remoto"
        assert patient.national_id == "12345678901"
        assert patient.has_valid_national_id()

    def test_invalid_national_id(self):
        patient = PatientData(
            name="Carlos", age=67, technical_level=3, service_mode="remoto",
            national_id="123", password_hash="hash"
        )

        assert not patient.has_valid_national_id()

    def test_repr_hides_password_hash(self):
        patient = PatientData(
            name="Carlos", age=67, technical_level=3, service_mode="remoto",
            national_id="12345678901", password_hash="$2b$secret"
        )

        assert "$2b$secret" not in repr(patient)
