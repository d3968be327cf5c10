# sr_core/students/constants.py
from django.db import models


class RelationType(models.TextChoices):
    FATHER = "Father", "Father"
    MOTHER = "Mother", "Mother"
    GUARDIAN = "Guardian", "Guardian"


REGISTRATION_STATUS_PENDING = "Pending Approval"
DEFAULT_COUNTRY_CODE = "+1"
