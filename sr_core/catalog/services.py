# sr_core/catalog/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from django.db import IntegrityError, models, transaction
from rest_framework.exceptions import NotFound, ValidationError

from sr_core.catalog.models import EnrollmentPlan, PaymentPlan, Program, RoomType

logger = logging.getLogger(__name__)

# A selection coming from the form: either a row id or a display name.
LookupRef = Union[int, str, None]

INVALID_PROGRAM_OR_ROOM_MSG = "Invalid program or room type"
NO_ENROLLMENT_PLAN_MSG = "No enrollment plan found for selected program & room"
INVALID_PAYMENT_PLAN_MSG = "Invalid payment plan type"


@dataclass(frozen=True)
class EnrollmentSelection:
    program_id: int
    room_type_id: int
    enrollment_plan_id: int
    payment_plan_id: int


def resolve_lookup_id(model: type[models.Model], name_field: str, ref: LookupRef) -> Optional[int]:
    """
    Resolve a lookup row id.

    - int (or an ASCII-digit string) -> match by primary key
    - any other string              -> case-insensitive match on the trimmed name
    Returns None when nothing matches.
    """
    if ref is None or isinstance(ref, bool):
        return None

    if isinstance(ref, int):
        pk: Optional[int] = ref
    else:
        text = str(ref).strip()
        if not text:
            return None
        pk = int(text) if text.isascii() and text.isdigit() else None
        if pk is None:
            return (
                model.objects.filter(**{f"{name_field}__iexact": text})
                .values_list("pk", flat=True)
                .first()
            )

    return model.objects.filter(pk=pk).values_list("pk", flat=True).first()


def resolve_enrollment_selection(
    *,
    program: LookupRef,
    room_type: LookupRef,
    payment_plan: LookupRef,
) -> EnrollmentSelection:
    """
    Program + room type must map to a curated EnrollmentPlan; the payment plan
    must exist. Raises ValidationError with a human-readable detail otherwise.
    """
    program_id = resolve_lookup_id(Program, "name", program)
    room_type_id = resolve_lookup_id(RoomType, "name", room_type)
    if program_id is None or room_type_id is None:
        logger.info("enrollment selection rejected: program=%r room_type=%r", program, room_type)
        raise ValidationError({"detail": INVALID_PROGRAM_OR_ROOM_MSG})

    enrollment_plan_id = (
        EnrollmentPlan.objects.filter(program_id=program_id, room_type_id=room_type_id)
        .values_list("pk", flat=True)
        .first()
    )
    if enrollment_plan_id is None:
        logger.info(
            "enrollment selection rejected: no plan for program_id=%s room_type_id=%s",
            program_id,
            room_type_id,
        )
        raise ValidationError({"detail": NO_ENROLLMENT_PLAN_MSG})

    payment_plan_id = resolve_lookup_id(PaymentPlan, "plan_type", payment_plan)
    if payment_plan_id is None:
        logger.info("enrollment selection rejected: payment_plan=%r", payment_plan)
        raise ValidationError({"detail": INVALID_PAYMENT_PLAN_MSG})

    return EnrollmentSelection(
        program_id=program_id,
        room_type_id=room_type_id,
        enrollment_plan_id=enrollment_plan_id,
        payment_plan_id=payment_plan_id,
    )


class CatalogService:
    @staticmethod
    @transaction.atomic
    def rename_program(*, program_id: int, name: str) -> Program:
        program = Program.objects.select_for_update().filter(pk=program_id).first()
        if program is None:
            raise NotFound("Program not found.")

        program.name = name.strip()
        try:
            with transaction.atomic():
                program.save(update_fields=["name"])
        except IntegrityError:
            raise ValidationError({"detail": "A program with this name already exists."})
        return program

    @staticmethod
    @transaction.atomic
    def rename_room_type(*, room_type_id: int, name: str) -> RoomType:
        room_type = RoomType.objects.select_for_update().filter(pk=room_type_id).first()
        if room_type is None:
            raise NotFound("Room type not found.")

        room_type.name = name.strip()
        try:
            with transaction.atomic():
                room_type.save(update_fields=["name"])
        except IntegrityError:
            raise ValidationError({"detail": "A room type with this name already exists."})
        return room_type

    @staticmethod
    @transaction.atomic
    def update_payment_plan(
        *,
        payment_plan_id: int,
        plan_type: str | None = None,
        plan_duration: int | None = None,
    ) -> PaymentPlan:
        plan = PaymentPlan.objects.select_for_update().filter(pk=payment_plan_id).first()
        if plan is None:
            raise NotFound("Payment plan not found.")

        fields = []
        if plan_type is not None:
            plan.plan_type = plan_type.strip()
            fields.append("plan_type")
        if plan_duration is not None:
            plan.plan_duration = plan_duration
            fields.append("plan_duration")

        if fields:
            try:
                with transaction.atomic():
                    plan.save(update_fields=fields)
            except IntegrityError:
                raise ValidationError({"detail": "A payment plan with this type already exists."})
        return plan
