# sr_core/iam/api/users.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from sr_core.common.permissions import UserAdminPermission
from sr_core.iam.api.schema_serializers import UserListResponseSerializer
from sr_core.iam.selectors import list_user_summaries


class UserListView(APIView):
    """Account listing for administrators."""
    permission_classes = [UserAdminPermission]

    @extend_schema(responses={200: UserListResponseSerializer}, tags=["IAM"])
    def get(self, request):
        return Response({"success": True, "users": list_user_summaries()}, status=status.HTTP_200_OK)
