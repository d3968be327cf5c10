# sr_core/catalog/selectors.py
from __future__ import annotations

from django.db.models import QuerySet

from sr_core.catalog.models import EnrollmentPlan, PaymentPlan, Program, RoomType


def list_programs() -> QuerySet[Program]:
    return Program.objects.order_by("id")


def list_room_types() -> QuerySet[RoomType]:
    return RoomType.objects.order_by("id")


def list_payment_plans() -> QuerySet[PaymentPlan]:
    return PaymentPlan.objects.order_by("id")


def list_enrollment_plans(
    *,
    program_id: int | None = None,
    room_type_id: int | None = None,
) -> QuerySet[EnrollmentPlan]:
    qs = EnrollmentPlan.objects.select_related("program", "room_type")

    if program_id is not None:
        qs = qs.filter(program_id=program_id)
    if room_type_id is not None:
        qs = qs.filter(room_type_id=room_type_id)

    return qs.order_by("program_id", "room_type_id")
