# sr_core/iam/api/me.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from sr_core.common.permissions import user_roles
from sr_core.iam.api.schema_serializers import MeResponseSerializer
from sr_core.iam.selectors import role_id_for_user


class MeView(APIView):
    """The signed-in account, its role group id and every role it holds."""
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: MeResponseSerializer}, tags=["IAM"])
    def get(self, request):
        account = request.user
        profile = {
            "id": account.pk,
            "username": account.get_username(),
            "email": account.email or None,
            "is_superuser": account.is_superuser,
            "roleid": role_id_for_user(account),
        }
        return Response({"user": profile, "roles": sorted(user_roles(account))})
