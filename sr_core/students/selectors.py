# sr_core/students/selectors.py
"""
Read side: one flat LEFT JOIN row per child, reshaped into the nested
student document the UI consumes.
"""
from __future__ import annotations

from typing import Any

from django.db.models import FilteredRelation, Q
from rest_framework.exceptions import NotFound

from sr_core.students.filters import StudentFilter
from sr_core.students.models import Child

STUDENT_NOT_FOUND_MSG = "Student not found"

_G = "primary_link__guardian__"
_M = "medical_contact__"
_C = "care_facility__"
_R = "registration__"
_ADDRESS = ("address_line1", "address_line2", "city", "state", "country", "zip_code", "country_code")

STUDENT_VALUES = (
    "id",
    "first_name",
    "middle_name",
    "last_name",
    "gender",
    "date_of_birth",
    "place_of_birth",
    "primary_link__relation_type",
    f"{_G}id",
    f"{_G}first_name",
    f"{_G}middle_name",
    f"{_G}last_name",
    f"{_G}email",
    *(f"{_G}{f}" for f in _ADDRESS),
    f"{_G}phone_type",
    f"{_G}phone_number",
    f"{_G}alternate_country_code",
    f"{_G}alternate_phone_type",
    f"{_G}alternate_phone_number",
    f"{_M}id",
    f"{_M}physician_first_name",
    f"{_M}physician_middle_name",
    f"{_M}physician_last_name",
    *(f"{_M}{f}" for f in _ADDRESS),
    f"{_M}phone_type",
    f"{_M}phone_number",
    f"{_C}id",
    f"{_C}emergency_contact_name",
    f"{_C}emergency_phone_number",
    *(f"{_C}{f}" for f in _ADDRESS),
    f"{_C}phone_type",
    f"{_R}id",
    f"{_R}enrollment_plan_id",
    f"{_R}status",
    f"{_R}payment_plan_id",
    f"{_R}amount",
    f"{_R}enrollment_date",
    f"{_R}enrollment_plan__program_id",
    f"{_R}enrollment_plan__program__name",
    f"{_R}enrollment_plan__room_type_id",
    f"{_R}enrollment_plan__room_type__name",
    f"{_R}payment_plan__plan_type",
)


def student_rows(*, child_id: int | None = None, status: str | None = None, q: str | None = None):
    qs = Child.objects.annotate(
        primary_link=FilteredRelation("guardian_links", condition=Q(guardian_links__is_primary=True)),
    )

    if child_id is not None:
        qs = qs.filter(pk=child_id)

    if status or q:
        qs = StudentFilter({"status": status or "", "q": q or ""}, queryset=qs).qs

    return qs.order_by("-id").values(*STUDENT_VALUES)


def _address(row: dict, prefix: str) -> dict[str, Any]:
    return {
        "address1": row[f"{prefix}address_line1"],
        "address2": row[f"{prefix}address_line2"],
        "city": row[f"{prefix}city"],
        "state": row[f"{prefix}state"],
        "country": row[f"{prefix}country"],
        "zipCode": row[f"{prefix}zip_code"],
        "countryCode": row[f"{prefix}country_code"],
    }


def _join_name(*parts) -> str:
    return " ".join(p for p in parts if p)


def build_student(row: dict) -> dict[str, Any]:
    return {
        "childInfo": {
            "childId": row["id"],
            "firstName": row["first_name"],
            "middleName": row["middle_name"],
            "lastName": row["last_name"],
            "gender": row["gender"],
            "dateOfBirth": row["date_of_birth"],
            "placeOfBirth": row["place_of_birth"],
        },
        "parentGuardianInfo": {
            "guardianId": row[f"{_G}id"],
            "firstName": row[f"{_G}first_name"],
            "middleName": row[f"{_G}middle_name"],
            "lastName": row[f"{_G}last_name"],
            "email": row[f"{_G}email"],
            **_address(row, _G),
            "phoneType": row[f"{_G}phone_type"],
            "phoneNumber": row[f"{_G}phone_number"],
            "alternateCountryCode": row[f"{_G}alternate_country_code"],
            "alternatePhoneType": row[f"{_G}alternate_phone_type"],
            "alternatePhoneNumber": row[f"{_G}alternate_phone_number"],
            "relationship": row["primary_link__relation_type"],
        },
        "medicalInfo": {
            "medicalContactId": row[f"{_M}id"],
            "physicianFirstName": row[f"{_M}physician_first_name"],
            "physicianMiddleName": row[f"{_M}physician_middle_name"],
            "physicianLastName": row[f"{_M}physician_last_name"],
            "physicianName": _join_name(
                row[f"{_M}physician_first_name"],
                row[f"{_M}physician_middle_name"],
                row[f"{_M}physician_last_name"],
            ),
            **_address(row, _M),
            "phoneType": row[f"{_M}phone_type"],
            "phoneNumber": row[f"{_M}phone_number"],
        },
        "careFacilityInfo": {
            "facilityId": row[f"{_C}id"],
            "emergencyContactName": row[f"{_C}emergency_contact_name"],
            "emergencyPhoneNumber": row[f"{_C}emergency_phone_number"],
            **_address(row, _C),
            "phoneType": row[f"{_C}phone_type"],
        },
        "enrollmentProgramDetails": {
            "registrationId": row[f"{_R}id"],
            "enrollmentPlanId": row[f"{_R}enrollment_plan_id"],
            "status": row[f"{_R}status"],
            "paymentPlanId": row[f"{_R}payment_plan_id"],
            "amount": row[f"{_R}amount"],
            "programType": row[f"{_R}enrollment_plan__program__name"],
            "roomType": row[f"{_R}enrollment_plan__room_type__name"],
            "planType": row[f"{_R}payment_plan__plan_type"],
            "programId": row[f"{_R}enrollment_plan__program_id"],
            "roomTypeId": row[f"{_R}enrollment_plan__room_type_id"],
            "enrollmentDate": row[f"{_R}enrollment_date"],
        },
    }


def get_student(*, child_id: int) -> dict[str, Any]:
    row = student_rows(child_id=child_id).first()
    if row is None:
        raise NotFound(STUDENT_NOT_FOUND_MSG)
    return build_student(row)


def list_students(*, status: str | None = None, q: str | None = None) -> list[dict[str, Any]]:
    students: list[dict[str, Any]] = []
    seen: set[int] = set()
    for row in student_rows(status=status, q=q):
        if row["id"] in seen:
            continue
        seen.add(row["id"])
        students.append(build_student(row))
    return students
