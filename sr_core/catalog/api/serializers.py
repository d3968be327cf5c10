# sr_core/catalog/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from sr_core.catalog.models import EnrollmentPlan, PaymentPlan, Program, RoomType


class ProgramSerializer(serializers.ModelSerializer):
    programName = serializers.CharField(source="name", read_only=True)

    class Meta:
        model = Program
        fields = ["id", "programName"]
        read_only_fields = fields


class RoomTypeSerializer(serializers.ModelSerializer):
    roomType = serializers.CharField(source="name", read_only=True)

    class Meta:
        model = RoomType
        fields = ["id", "roomType"]
        read_only_fields = fields


class PaymentPlanSerializer(serializers.ModelSerializer):
    planType = serializers.CharField(source="plan_type", read_only=True)
    planDuration = serializers.IntegerField(source="plan_duration", read_only=True, allow_null=True)

    class Meta:
        model = PaymentPlan
        fields = ["id", "planType", "planDuration"]
        read_only_fields = fields


class EnrollmentPlanSerializer(serializers.ModelSerializer):
    programId = serializers.IntegerField(source="program_id", read_only=True)
    programName = serializers.CharField(source="program.name", read_only=True)
    roomTypeId = serializers.IntegerField(source="room_type_id", read_only=True)
    roomType = serializers.CharField(source="room_type.name", read_only=True)

    class Meta:
        model = EnrollmentPlan
        fields = ["id", "programId", "programName", "roomTypeId", "roomType"]
        read_only_fields = fields


class ProgramUpdateSerializer(serializers.Serializer):
    programName = serializers.CharField(max_length=128, source="name")


class RoomTypeUpdateSerializer(serializers.Serializer):
    roomType = serializers.CharField(max_length=128, source="name")


class PaymentPlanUpdateSerializer(serializers.Serializer):
    planType = serializers.CharField(max_length=64, source="plan_type", required=False)
    planDuration = serializers.IntegerField(min_value=1, source="plan_duration", required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs
