# sr_core/students/api/serializers.py
"""
Registration payload contracts.

Wire names are the camelCase keys the registration form sends; every field
maps (via ``source``) onto the model column name, so ``validated_data`` comes
out keyed the way the services expect:

    {"child": {...}, "guardian": {...}, "medical": {...},
     "care_facility": {...}, "enrollment": {...}}
"""
from __future__ import annotations

from django.utils.dateparse import parse_datetime
from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from sr_core.students.constants import DEFAULT_COUNTRY_CODE, RelationType


@extend_schema_field({"oneOf": [{"type": "integer"}, {"type": "string"}]})
class LookupRefField(serializers.Field):
    """
    A lookup selection: an integer id or a display name.
    """
    default_error_messages = {
        "invalid": "Must be an id or a name.",
    }

    def to_internal_value(self, data):
        if isinstance(data, bool):
            self.fail("invalid")
        if isinstance(data, int):
            return data
        if isinstance(data, str) and data.strip():
            return data.strip()
        self.fail("invalid")

    def to_representation(self, value):
        return value


class FormDateField(serializers.DateField):
    """
    Accepts plain ISO dates and the full ISO timestamps that browser date
    pickers serialize (the time part is dropped).
    """

    def to_internal_value(self, value):
        if isinstance(value, str) and "T" in value:
            parsed = parse_datetime(value.replace("Z", "+00:00"))
            if parsed is not None:
                return parsed.date()
        return super().to_internal_value(value)


def _text(max_length: int, **kwargs):
    kwargs.setdefault("required", False)
    kwargs.setdefault("allow_blank", True)
    if not kwargs["required"]:
        kwargs.setdefault("default", "")
    return serializers.CharField(max_length=max_length, **kwargs)


class ChildInfoSerializer(serializers.Serializer):
    firstName = _text(100, source="first_name", required=True, allow_blank=False)
    middleName = _text(100, source="middle_name")
    lastName = _text(100, source="last_name", required=True, allow_blank=False)
    gender = _text(32)
    dateOfBirth = FormDateField(source="date_of_birth", required=False, allow_null=True)
    placeOfBirth = _text(128, source="place_of_birth")


class ParentGuardianInfoSerializer(serializers.Serializer):
    firstName = _text(100, source="first_name", required=True, allow_blank=False)
    middleName = _text(100, source="middle_name")
    lastName = _text(100, source="last_name", required=True, allow_blank=False)
    relationship = serializers.ChoiceField(choices=RelationType.choices, source="relation_type")
    email = serializers.EmailField(required=False, allow_blank=True, default="")

    address1 = _text(255, source="address_line1")
    address2 = _text(255, source="address_line2")
    city = _text(128)
    state = _text(128)
    country = _text(64)
    zipCode = _text(16, source="zip_code")
    countryCode = _text(8, source="country_code", default=DEFAULT_COUNTRY_CODE)

    phoneType = _text(16, source="phone_type")
    phoneNumber = _text(32, source="phone_number")
    alternateCountryCode = _text(8, source="alternate_country_code")
    alternatePhoneType = _text(16, source="alternate_phone_type")
    alternatePhoneNumber = _text(32, source="alternate_phone_number")


class MedicalInfoSerializer(serializers.Serializer):
    physicianFirstName = _text(100, source="physician_first_name")
    physicianMiddleName = _text(100, source="physician_middle_name")
    physicianLastName = _text(100, source="physician_last_name")
    # convenience: a single full name, split when the parts are not sent
    physicianName = serializers.CharField(max_length=300, required=False, allow_blank=True, write_only=True)

    address1 = _text(255, source="address_line1")
    address2 = _text(255, source="address_line2")
    city = _text(128)
    state = _text(128)
    country = _text(64)
    zipCode = _text(16, source="zip_code")
    countryCode = _text(8, source="country_code", default=DEFAULT_COUNTRY_CODE)

    phoneType = _text(16, source="phone_type")
    phoneNumber = _text(32, source="phone_number")

    def validate(self, attrs):
        full_name = (attrs.pop("physicianName", "") or "").strip()
        if full_name and not attrs.get("physician_first_name"):
            attrs.update(split_full_name(full_name, prefix="physician_"))
        return attrs


class CareFacilityInfoSerializer(serializers.Serializer):
    emergencyContactName = _text(200, source="emergency_contact_name")
    emergencyPhoneNumber = _text(32, source="emergency_phone_number")

    address1 = _text(255, source="address_line1")
    address2 = _text(255, source="address_line2")
    city = _text(128)
    state = _text(128)
    country = _text(64)
    zipCode = _text(16, source="zip_code")
    countryCode = _text(8, source="country_code", default=DEFAULT_COUNTRY_CODE)

    phoneType = _text(16, source="phone_type")


class EnrollmentProgramDetailsSerializer(serializers.Serializer):
    programType = LookupRefField(source="program")
    roomType = LookupRefField(source="room_type")
    planType = LookupRefField(source="payment_plan")
    enrollmentDate = FormDateField(source="enrollment_date", required=False, allow_null=True)


def split_full_name(full_name: str, *, prefix: str = "") -> dict:
    """
    "A"       -> first
    "A B"     -> first, last
    "A B C D" -> first, middle ("B C"), last

    Parts not present come back as "" so an update clears the old value.
    """
    parts = full_name.split()
    first = parts[0] if parts else ""
    middle = " ".join(parts[1:-1])
    last = parts[-1] if len(parts) > 1 else ""
    return {
        f"{prefix}first_name": first,
        f"{prefix}middle_name": middle,
        f"{prefix}last_name": last,
    }


class RegistrationCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    childInfo = ChildInfoSerializer(source="child")
    parentGuardianInfo = ParentGuardianInfoSerializer(source="guardian")
    medicalInfo = MedicalInfoSerializer(source="medical")
    careFacilityInfo = CareFacilityInfoSerializer(source="care_facility")
    enrollmentProgramDetails = EnrollmentProgramDetailsSerializer(source="enrollment")


class RegistrationUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PUT/PATCH). Bind with ``partial=True``: only
    the sections, and the keys inside them, that the client sent come back
    in validated_data.
    """
    childInfo = ChildInfoSerializer(source="child", required=False)
    parentGuardianInfo = ParentGuardianInfoSerializer(source="guardian", required=False)
    medicalInfo = MedicalInfoSerializer(source="medical", required=False)
    careFacilityInfo = CareFacilityInfoSerializer(source="care_facility", required=False)
    enrollmentProgramDetails = EnrollmentProgramDetailsSerializer(source="enrollment", required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one section is required.")
        return attrs


class StudentUpdateSerializer(RegistrationUpdateSerializer):
    """
    PATCH /students/{id}: same sections as the registration update.
    """


class EnrollmentUpdateSerializer(serializers.Serializer):
    """
    Bound with ``partial=True`` as well: refs left out keep the
    registration's current choice.
    """
    enrollmentProgramDetails = EnrollmentProgramDetailsSerializer(source="enrollment")

    def validate(self, attrs):
        if "enrollment" not in attrs:
            raise serializers.ValidationError({"enrollmentProgramDetails": "This field is required."})
        return attrs


class RegistrationCreatedSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    childId = serializers.IntegerField()
