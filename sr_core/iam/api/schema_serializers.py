# sr_core/iam/api/schema_serializers.py
from __future__ import annotations

from rest_framework import serializers


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)


class UserSummarySerializer(serializers.Serializer):
    userid = serializers.IntegerField()
    email = serializers.EmailField(allow_blank=True)
    roleid = serializers.IntegerField(allow_null=True)


class LoginResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    user = UserSummarySerializer()


class RefreshResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()


class LogoutResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()


class MeUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField(allow_null=True, required=False)
    email = serializers.EmailField(allow_null=True, required=False)
    is_superuser = serializers.BooleanField()
    roleid = serializers.IntegerField(allow_null=True)


class MeResponseSerializer(serializers.Serializer):
    user = MeUserSerializer()
    roles = serializers.ListField(child=serializers.CharField())


class UserListResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    users = UserSummarySerializer(many=True)
