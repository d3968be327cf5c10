# sr_core/catalog/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from sr_core.catalog.api.serializers import (
    EnrollmentPlanSerializer,
    PaymentPlanSerializer,
    PaymentPlanUpdateSerializer,
    ProgramSerializer,
    ProgramUpdateSerializer,
    RoomTypeSerializer,
    RoomTypeUpdateSerializer,
)
from sr_core.catalog.models import EnrollmentPlan, PaymentPlan, Program, RoomType
from sr_core.catalog.selectors import (
    list_enrollment_plans,
    list_payment_plans,
    list_programs,
    list_room_types,
)
from sr_core.catalog.services import CatalogService
from sr_core.common.permissions import CatalogPermission


def _int_param(request, name: str) -> int | None:
    raw = (request.query_params.get(name) or "").strip()
    if not raw:
        return None
    if not (raw.isascii() and raw.isdigit()):
        raise ValidationError({name: "Must be an integer."})
    return int(raw)


class ProgramViewSet(viewsets.ViewSet):
    permission_classes = [CatalogPermission]

    serializer_class = ProgramSerializer
    queryset = Program.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(tags=["Catalog"], responses={200: ProgramSerializer(many=True)})
    def list(self, request):
        return Response(ProgramSerializer(list_programs(), many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Catalog"], request=ProgramUpdateSerializer, responses={200: ProgramSerializer})
    def update(self, request, pk=None):
        s = ProgramUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = CatalogService.rename_program(program_id=int(pk), name=s.validated_data["name"])
        return Response(ProgramSerializer(obj).data, status=status.HTTP_200_OK)


class RoomTypeViewSet(viewsets.ViewSet):
    permission_classes = [CatalogPermission]

    serializer_class = RoomTypeSerializer
    queryset = RoomType.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(tags=["Catalog"], responses={200: RoomTypeSerializer(many=True)})
    def list(self, request):
        return Response(RoomTypeSerializer(list_room_types(), many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Catalog"], request=RoomTypeUpdateSerializer, responses={200: RoomTypeSerializer})
    def update(self, request, pk=None):
        s = RoomTypeUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = CatalogService.rename_room_type(room_type_id=int(pk), name=s.validated_data["name"])
        return Response(RoomTypeSerializer(obj).data, status=status.HTTP_200_OK)


class PaymentPlanViewSet(viewsets.ViewSet):
    permission_classes = [CatalogPermission]

    serializer_class = PaymentPlanSerializer
    queryset = PaymentPlan.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(tags=["Catalog"], responses={200: PaymentPlanSerializer(many=True)})
    def list(self, request):
        return Response(PaymentPlanSerializer(list_payment_plans(), many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Catalog"], request=PaymentPlanUpdateSerializer, responses={200: PaymentPlanSerializer})
    def update(self, request, pk=None):
        s = PaymentPlanUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        obj = CatalogService.update_payment_plan(
            payment_plan_id=int(pk),
            plan_type=d.get("plan_type"),
            plan_duration=d.get("plan_duration"),
        )
        return Response(PaymentPlanSerializer(obj).data, status=status.HTTP_200_OK)


class EnrollmentPlanViewSet(viewsets.ViewSet):
    """
    Valid program/room-type combinations (the registration form uses this
    to offer only enrollable choices).
    """
    permission_classes = [CatalogPermission]

    serializer_class = EnrollmentPlanSerializer
    queryset = EnrollmentPlan.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        tags=["Catalog"],
        responses={200: EnrollmentPlanSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="program_id",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Only plans for this program.",
            ),
            OpenApiParameter(
                name="room_type_id",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Only plans for this room type.",
            ),
        ],
    )
    def list(self, request):
        qs = list_enrollment_plans(
            program_id=_int_param(request, "program_id"),
            room_type_id=_int_param(request, "room_type_id"),
        )
        return Response(EnrollmentPlanSerializer(qs, many=True).data, status=status.HTTP_200_OK)
