# sr_core/students/services.py
from __future__ import annotations

import logging
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError

from sr_core.catalog.services import resolve_enrollment_selection
from sr_core.students.constants import REGISTRATION_STATUS_PENDING
from sr_core.students.models import (
    CareFacility,
    Child,
    ChildGuardian,
    Guardian,
    MedicalContact,
    Registration,
)

logger = logging.getLogger(__name__)

USER_NOT_FOUND_MSG = "User not found"
STUDENT_NOT_FOUND_MSG = "Student not found"
GUARDIAN_NOT_FOUND_MSG = "Guardian not found for this child"

ADDRESS_FIELDS = {"address_line1", "address_line2", "city", "state", "country", "zip_code", "country_code"}

CHILD_FIELDS = {"first_name", "middle_name", "last_name", "gender", "date_of_birth", "place_of_birth"}
GUARDIAN_FIELDS = ADDRESS_FIELDS | {
    "first_name",
    "middle_name",
    "last_name",
    "email",
    "phone_type",
    "phone_number",
    "alternate_country_code",
    "alternate_phone_type",
    "alternate_phone_number",
}
MEDICAL_FIELDS = ADDRESS_FIELDS | {
    "physician_first_name",
    "physician_middle_name",
    "physician_last_name",
    "phone_type",
    "phone_number",
}
CARE_FACILITY_FIELDS = ADDRESS_FIELDS | {"emergency_contact_name", "emergency_phone_number", "phone_type"}


def _pick(data: dict | None, allowed: set[str]) -> dict:
    return {k: v for k, v in (data or {}).items() if k in allowed}


def _apply(obj, updates: dict) -> None:
    if not updates:
        return
    for k, v in updates.items():
        setattr(obj, k, v)
    obj.save(update_fields=[*updates.keys(), "updated_at"])


def _lock_child(child_id: int) -> Child:
    child = Child.objects.select_for_update().filter(pk=child_id).first()
    if child is None:
        raise NotFound(STUDENT_NOT_FOUND_MSG)
    return child


def _upsert_child_row(model, child: Child, updates: dict) -> None:
    """
    One-to-one rows (medical contact, care facility): update in place,
    create when the child has none yet.
    """
    obj = model.objects.filter(child=child).first()
    if obj is None:
        model.objects.create(child=child, **updates)
        return
    _apply(obj, updates)


def _update_primary_guardian(child: Child, data: dict) -> None:
    link = ChildGuardian.objects.select_related("guardian").filter(child=child, is_primary=True).first()
    if link is None:
        raise ValidationError({"detail": GUARDIAN_NOT_FOUND_MSG})

    _apply(link.guardian, _pick(data, GUARDIAN_FIELDS))

    relation_type = data.get("relation_type")
    if relation_type and relation_type != link.relation_type:
        link.relation_type = relation_type
        link.save(update_fields=["relation_type"])


def _apply_enrollment(child: Child, data: dict) -> Registration:
    """
    Re-resolve the selection and point the child's registration at it.
    Missing refs fall back to the current registration's choices; a child
    without a registration gets a new pending one.
    """
    registration = (
        Registration.objects.select_related("enrollment_plan").filter(child=child).first()
    )

    current = {}
    if registration is not None:
        current = {
            "program": registration.enrollment_plan.program_id,
            "room_type": registration.enrollment_plan.room_type_id,
            "payment_plan": registration.payment_plan_id,
        }

    selection = resolve_enrollment_selection(
        program=data.get("program", current.get("program")),
        room_type=data.get("room_type", current.get("room_type")),
        payment_plan=data.get("payment_plan", current.get("payment_plan")),
    )

    if registration is None:
        return Registration.objects.create(
            child=child,
            enrollment_plan_id=selection.enrollment_plan_id,
            payment_plan_id=selection.payment_plan_id,
            status=REGISTRATION_STATUS_PENDING,
            amount=Decimal("0"),
            enrollment_date=data.get("enrollment_date"),
        )

    updates = {
        "enrollment_plan_id": selection.enrollment_plan_id,
        "payment_plan_id": selection.payment_plan_id,
    }
    if "enrollment_date" in data:
        updates["enrollment_date"] = data["enrollment_date"]
    _apply(registration, updates)
    return registration


class RegistrationService:
    @staticmethod
    @transaction.atomic
    def create_registration(
        *,
        email: str,
        child: dict,
        guardian: dict,
        medical: dict,
        care_facility: dict,
        enrollment: dict,
    ) -> int:
        """
        Persist one registration across children, guardians, child_guardians,
        medicalcontacts, carefacilities and registrations. Any failure rolls
        the whole unit back. Returns the new child id.
        """
        User = get_user_model()
        parent = User.objects.filter(email__iexact=(email or "").strip()).order_by("id").first()
        if parent is None:
            raise NotFound(USER_NOT_FOUND_MSG)

        new_child = Child.objects.create(parent_user=parent, **_pick(child, CHILD_FIELDS))
        new_guardian = Guardian.objects.create(**_pick(guardian, GUARDIAN_FIELDS))
        ChildGuardian.objects.create(
            child=new_child,
            guardian=new_guardian,
            relation_type=guardian.get("relation_type") or "",
            is_primary=True,
        )
        MedicalContact.objects.create(child=new_child, **_pick(medical, MEDICAL_FIELDS))
        CareFacility.objects.create(child=new_child, **_pick(care_facility, CARE_FACILITY_FIELDS))

        selection = resolve_enrollment_selection(
            program=enrollment.get("program"),
            room_type=enrollment.get("room_type"),
            payment_plan=enrollment.get("payment_plan"),
        )
        Registration.objects.create(
            child=new_child,
            enrollment_plan_id=selection.enrollment_plan_id,
            payment_plan_id=selection.payment_plan_id,
            status=REGISTRATION_STATUS_PENDING,
            amount=Decimal("0"),
            enrollment_date=enrollment.get("enrollment_date"),
        )

        logger.info(
            "registration created child_id=%s parent_user_id=%s enrollment_plan_id=%s",
            new_child.id,
            parent.id,
            selection.enrollment_plan_id,
        )
        return new_child.id

    @staticmethod
    @transaction.atomic
    def update_registration(
        *,
        child_id: int,
        child: dict | None = None,
        guardian: dict | None = None,
        medical: dict | None = None,
        care_facility: dict | None = None,
        enrollment: dict | None = None,
    ) -> int:
        """
        Apply the supplied sections to an existing registration. Sections that
        are None are left alone; inside a section only the supplied keys change.
        """
        row = _lock_child(child_id)
        sections = []

        if child is not None:
            _apply(row, _pick(child, CHILD_FIELDS))
            sections.append("child")
        if guardian is not None:
            _update_primary_guardian(row, guardian)
            sections.append("guardian")
        if medical is not None:
            _upsert_child_row(MedicalContact, row, _pick(medical, MEDICAL_FIELDS))
            sections.append("medical")
        if care_facility is not None:
            _upsert_child_row(CareFacility, row, _pick(care_facility, CARE_FACILITY_FIELDS))
            sections.append("care_facility")
        if enrollment is not None:
            _apply_enrollment(row, enrollment)
            sections.append("enrollment")

        logger.info("registration updated child_id=%s sections=%s", row.id, ",".join(sections))
        return row.id

    @staticmethod
    @transaction.atomic
    def update_enrollment(*, child_id: int, enrollment: dict) -> Registration:
        row = _lock_child(child_id)
        registration = _apply_enrollment(row, enrollment)
        logger.info(
            "enrollment updated child_id=%s enrollment_plan_id=%s payment_plan_id=%s",
            row.id,
            registration.enrollment_plan_id,
            registration.payment_plan_id,
        )
        return registration
