# sr_core/catalog/models.py
from __future__ import annotations

from django.db import models


class Program(models.Model):
    """
    Program offering, e.g. "Full Time", "Part Time", "After School".
    """
    name = models.CharField(max_length=128, unique=True)

    class Meta:
        db_table = "programs"
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name


class RoomType(models.Model):
    """
    Age-group room, e.g. "Infant", "Toddler", "Preschool".
    """
    name = models.CharField(max_length=128, unique=True)

    class Meta:
        db_table = "roomtypes"
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name


class PaymentPlan(models.Model):
    plan_type = models.CharField(max_length=64, unique=True)
    # billing cycle length in days (e.g. 7 weekly, 30 monthly)
    plan_duration = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        db_table = "paymentplan"
        ordering = ["id"]

    def __str__(self) -> str:
        return self.plan_type


class EnrollmentPlan(models.Model):
    """
    Curated (program, room type) combination. Only combinations that have a
    row here can be enrolled into.
    """
    program = models.ForeignKey(Program, on_delete=models.PROTECT, related_name="enrollment_plans")
    room_type = models.ForeignKey(RoomType, on_delete=models.PROTECT, related_name="enrollment_plans")

    class Meta:
        db_table = "enrollmentplans"
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["program", "room_type"], name="uq_enrollment_plan_program_room"),
        ]

    def __str__(self) -> str:
        return f"{self.program_id}/{self.room_type_id}"
