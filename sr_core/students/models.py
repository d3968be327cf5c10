# sr_core/students/models.py
from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Q

from sr_core.catalog.models import EnrollmentPlan, PaymentPlan
from sr_core.common.models import AddressFields, TimeStampedModel
from sr_core.students.constants import REGISTRATION_STATUS_PENDING, RelationType


class Child(TimeStampedModel):
    """
    The enrolling student. Owned by the parent user account that submitted
    the registration.
    """
    first_name = models.CharField(max_length=100)
    middle_name = models.CharField(max_length=100, blank=True, default="")
    last_name = models.CharField(max_length=100)
    gender = models.CharField(max_length=32, blank=True, default="")
    date_of_birth = models.DateField(null=True, blank=True)
    place_of_birth = models.CharField(max_length=128, blank=True, default="")

    parent_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="children",
    )

    class Meta:
        db_table = "children"
        indexes = [
            models.Index(fields=["last_name", "first_name"], name="children_name_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} (#{self.pk})"


class Guardian(TimeStampedModel, AddressFields):
    first_name = models.CharField(max_length=100)
    middle_name = models.CharField(max_length=100, blank=True, default="")
    last_name = models.CharField(max_length=100)
    email = models.EmailField(blank=True, default="")

    phone_type = models.CharField(max_length=16, blank=True, default="")
    phone_number = models.CharField(max_length=32, blank=True, default="")

    alternate_country_code = models.CharField(max_length=8, blank=True, default="")
    alternate_phone_type = models.CharField(max_length=16, blank=True, default="")
    alternate_phone_number = models.CharField(max_length=32, blank=True, default="")

    children = models.ManyToManyField(Child, through="ChildGuardian", related_name="guardians")

    class Meta:
        db_table = "guardians"
        indexes = [
            models.Index(fields=["email"], name="guardians_email_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}"


class ChildGuardian(models.Model):
    """
    Child <-> Guardian link. Exactly one link per child may be primary;
    the partial unique index enforces it at the database.
    """
    child = models.ForeignKey(Child, on_delete=models.CASCADE, related_name="guardian_links")
    guardian = models.ForeignKey(Guardian, on_delete=models.CASCADE, related_name="child_links")
    relation_type = models.CharField(max_length=16, choices=RelationType.choices, blank=True, default="")
    is_primary = models.BooleanField(default=False)

    class Meta:
        db_table = "child_guardians"
        constraints = [
            models.UniqueConstraint(fields=["child", "guardian"], name="uq_child_guardian"),
            models.UniqueConstraint(
                fields=["child"],
                condition=Q(is_primary=True),
                name="uq_child_primary_guardian",
            ),
        ]


class MedicalContact(TimeStampedModel, AddressFields):
    """
    The child's physician.
    """
    child = models.OneToOneField(Child, on_delete=models.CASCADE, related_name="medical_contact")

    physician_first_name = models.CharField(max_length=100, blank=True, default="")
    physician_middle_name = models.CharField(max_length=100, blank=True, default="")
    physician_last_name = models.CharField(max_length=100, blank=True, default="")

    phone_type = models.CharField(max_length=16, blank=True, default="")
    phone_number = models.CharField(max_length=32, blank=True, default="")

    class Meta:
        db_table = "medicalcontacts"

    @property
    def physician_name(self) -> str:
        return " ".join(
            p for p in (self.physician_first_name, self.physician_middle_name, self.physician_last_name) if p
        )


class CareFacility(TimeStampedModel, AddressFields):
    """
    Emergency contact + care facility address for the child.
    """
    child = models.OneToOneField(Child, on_delete=models.CASCADE, related_name="care_facility")

    emergency_contact_name = models.CharField(max_length=200, blank=True, default="")
    emergency_phone_number = models.CharField(max_length=32, blank=True, default="")
    phone_type = models.CharField(max_length=16, blank=True, default="")

    class Meta:
        db_table = "carefacilities"
        verbose_name_plural = "care facilities"


class Registration(TimeStampedModel):
    """
    Enrollment record for a child: which curated program/room plan, which
    payment plan, and where the application stands.
    """
    child = models.OneToOneField(Child, on_delete=models.CASCADE, related_name="registration")

    enrollment_plan = models.ForeignKey(EnrollmentPlan, on_delete=models.PROTECT, related_name="registrations")
    payment_plan = models.ForeignKey(PaymentPlan, on_delete=models.PROTECT, related_name="registrations")

    status = models.CharField(max_length=64, default=REGISTRATION_STATUS_PENDING, db_index=True)
    amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0"))
    enrollment_date = models.DateField(null=True, blank=True)

    class Meta:
        db_table = "registrations"

    def __str__(self) -> str:
        return f"Registration #{self.pk} ({self.status})"
