"""Unit tests for the persisted DirectorySnapshot schema."""

import json

import pytest
from pydantic import ValidationError

from college_erp.admin import create_course
from college_erp.directory import SEED_STUDENT_ID, Directory, PaymentMethod, Role
from college_erp.enrollment import enroll
from college_erp.persistence import DirectorySnapshot


def seed_document(directory: Directory) -> dict:
    return json.loads(DirectorySnapshot.from_directory(directory).model_dump_json())


@pytest.mark.unit
class TestSnapshotConversion:
    def test_seed_survives_serialization(self, directory: Directory) -> None:
        raw = DirectorySnapshot.from_directory(directory).model_dump_json()

        assert DirectorySnapshot.model_validate_json(raw).to_directory() == directory

    def test_mutated_directory_survives(self, directory: Directory) -> None:
        directory, _ = create_course(directory, "PH201", "Optics", schedule_lines="Mon|9|Lab")
        directory = enroll(directory, SEED_STUDENT_ID, "PH201")

        raw = DirectorySnapshot.from_directory(directory).model_dump_json()

        assert DirectorySnapshot.model_validate_json(raw).to_directory() == directory

    def test_enums_and_dates_serialized_as_strings(self, directory: Directory) -> None:
        doc = seed_document(directory)

        assert {a["role"] for a in doc["accounts"]} == {"admin", "student"}
        payment = doc["students"][0]["payments"][0]
        assert payment == {"amount": 500, "date": "2024-12-01", "method": "UPI"}

    def test_restored_types(self, directory: Directory) -> None:
        raw = DirectorySnapshot.from_directory(directory).model_dump_json()
        restored = DirectorySnapshot.model_validate_json(raw).to_directory()

        assert restored.accounts[SEED_STUDENT_ID].role is Role.STUDENT
        assert restored.students[SEED_STUDENT_ID].payments[0].method is PaymentMethod.UPI


@pytest.mark.unit
class TestSnapshotValidation:
    """Documents that break invariants are rejected."""

    def test_unknown_role_rejected(self, directory: Directory) -> None:
        doc = seed_document(directory)
        doc["accounts"][0]["role"] = "superuser"

        with pytest.raises(ValidationError):
            DirectorySnapshot.model_validate(doc)

    def test_unknown_payment_method_rejected(self, directory: Directory) -> None:
        doc = seed_document(directory)
        doc["students"][0]["payments"][0]["method"] = "Barter"

        with pytest.raises(ValidationError):
            DirectorySnapshot.model_validate(doc)

    def test_negative_fees_rejected(self, directory: Directory) -> None:
        doc = seed_document(directory)
        doc["students"][0]["fees_due"] = -1

        with pytest.raises(ValidationError):
            DirectorySnapshot.model_validate(doc)

    def test_one_sided_enrollment_rejected(self, directory: Directory) -> None:
        doc = seed_document(directory)
        doc["courses"][2]["enrolled"] = [SEED_STUDENT_ID]

        with pytest.raises(ValidationError, match="disagree"):
            DirectorySnapshot.model_validate(doc)

    def test_over_capacity_rejected(self, directory: Directory) -> None:
        doc = seed_document(directory)
        doc["courses"][0]["capacity"] = 1
        doc["courses"][0]["enrolled"] = [SEED_STUDENT_ID, "admin-1"]

        with pytest.raises(ValidationError, match="capacity"):
            DirectorySnapshot.model_validate(doc)

    def test_empty_schedule_rejected(self, directory: Directory) -> None:
        doc = seed_document(directory)
        doc["courses"][2]["schedule"] = []

        with pytest.raises(ValidationError):
            DirectorySnapshot.model_validate(doc)

    def test_email_differing_only_in_case_rejected(self, directory: Directory) -> None:
        doc = seed_document(directory)
        doc["accounts"].append(
            {
                "id": "adm-x",
                "name": "Shadow",
                "email": " ADMIN@college.edu",
                "credential": "pw",
                "role": "admin",
            }
        )

        with pytest.raises(ValidationError, match="Duplicate email"):
            DirectorySnapshot.model_validate(doc)

    def test_student_account_without_record_rejected(self, directory: Directory) -> None:
        doc = seed_document(directory)
        doc["accounts"].append(
            {
                "id": "stu-x",
                "name": "Ghost",
                "email": "ghost@college.edu",
                "credential": "pw",
                "role": "student",
            }
        )

        with pytest.raises(ValidationError, match="no student record"):
            DirectorySnapshot.model_validate(doc)

    def test_course_id_must_match_code(self, directory: Directory) -> None:
        doc = seed_document(directory)
        doc["courses"][2]["code"] = "HS999"

        with pytest.raises(ValidationError, match="differs from its code"):
            DirectorySnapshot.model_validate(doc)

    @pytest.mark.parametrize("section", ["accounts", "students", "faculty", "courses"])
    def test_duplicate_ids_rejected(self, directory: Directory, section: str) -> None:
        """A repeated id would silently collapse when the aggregate is rebuilt."""
        doc = seed_document(directory)
        doc[section].append(dict(doc[section][-1]))

        with pytest.raises(ValidationError, match="Duplicate"):
            DirectorySnapshot.model_validate(doc)
