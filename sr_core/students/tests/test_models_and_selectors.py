# sr_core/students/tests/test_models_and_selectors.py
from datetime import date

import pytest
from django.db import IntegrityError, transaction

from sr_core.students.models import Child, ChildGuardian, Guardian, MedicalContact
from sr_core.students.api.serializers import split_full_name
from sr_core.students.selectors import build_student, get_student, list_students, student_rows

pytestmark = pytest.mark.django_db


@pytest.fixture
def child(parent_user):
    return Child.objects.create(
        parent_user=parent_user,
        first_name="Noah",
        last_name="Kim",
        date_of_birth=date(2021, 6, 1),
    )


def test_child_may_have_only_one_primary_guardian(child):
    g1 = Guardian.objects.create(first_name="Ha", last_name="Kim")
    g2 = Guardian.objects.create(first_name="Jun", last_name="Kim")
    ChildGuardian.objects.create(child=child, guardian=g1, relation_type="Mother", is_primary=True)

    with pytest.raises(IntegrityError):
        with transaction.atomic():
            ChildGuardian.objects.create(child=child, guardian=g2, relation_type="Father", is_primary=True)

    # a second, non-primary guardian is fine
    ChildGuardian.objects.create(child=child, guardian=g2, relation_type="Father", is_primary=False)
    assert child.guardians.count() == 2


def test_student_without_related_rows_has_empty_sections(child):
    student = get_student(child_id=child.id)

    assert student["childInfo"]["firstName"] == "Noah"
    assert student["childInfo"]["dateOfBirth"] == date(2021, 6, 1)
    assert student["parentGuardianInfo"]["guardianId"] is None
    assert student["medicalInfo"]["physicianName"] == ""
    assert student["careFacilityInfo"]["facilityId"] is None
    assert student["enrollmentProgramDetails"]["registrationId"] is None


def test_student_shows_primary_guardian_only(child):
    secondary = Guardian.objects.create(first_name="Secondary", last_name="Kim")
    primary = Guardian.objects.create(first_name="Primary", last_name="Kim")
    ChildGuardian.objects.create(child=child, guardian=secondary, relation_type="Father")
    ChildGuardian.objects.create(child=child, guardian=primary, relation_type="Mother", is_primary=True)

    students = list_students()
    assert len(students) == 1
    assert students[0]["parentGuardianInfo"]["guardianId"] == primary.id
    assert students[0]["parentGuardianInfo"]["relationship"] == "Mother"


def test_physician_name_skips_empty_parts(child):
    MedicalContact.objects.create(child=child, physician_first_name="Ada", physician_last_name="Byron")
    assert get_student(child_id=child.id)["medicalInfo"]["physicianName"] == "Ada Byron"


def test_build_student_maps_flat_row(child):
    row = student_rows(child_id=child.id).first()
    assert build_student(row)["childInfo"]["childId"] == child.id


@pytest.mark.parametrize(
    "full_name,expected",
    [
        ("Ada", {"first_name": "Ada", "middle_name": "", "last_name": ""}),
        ("Ada Byron", {"first_name": "Ada", "middle_name": "", "last_name": "Byron"}),
        ("Ada King Noel Byron", {"first_name": "Ada", "middle_name": "King Noel", "last_name": "Byron"}),
    ],
)
def test_split_full_name(full_name, expected):
    assert split_full_name(full_name) == expected
