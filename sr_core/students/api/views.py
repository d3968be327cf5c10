# sr_core/students/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from sr_core.common.permissions import RegistrationPermission, StudentPermission
from sr_core.students.api.serializers import (
    EnrollmentUpdateSerializer,
    RegistrationCreatedSerializer,
    RegistrationCreateSerializer,
    RegistrationUpdateSerializer,
    StudentUpdateSerializer,
)
from sr_core.students.models import Child
from sr_core.students.selectors import get_student, list_students
from sr_core.students.services import RegistrationService

REGISTRATION_CREATED_MSG = "Registration completed successfully"
REGISTRATION_UPDATED_MSG = "Registration updated successfully"
ENROLLMENT_UPDATED_MSG = "Enrollment updated successfully"
STUDENT_UPDATED_MSG = "Student information updated successfully"
STUDENT_RETRIEVED_MSG = "Student retrieved successfully"
NO_STUDENTS_MSG = "No students found"


def _updated(message: str, child_id: int) -> Response:
    return Response({"success": True, "message": message, "childId": child_id}, status=status.HTTP_200_OK)


class RegistrationViewSet(viewsets.ViewSet):
    """
    Registration form backend: one POST writes the whole registration,
    PUT/PATCH apply any subset of its sections.
    """
    permission_classes = [RegistrationPermission]

    serializer_class = RegistrationCreateSerializer
    queryset = Child.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        tags=["Registrations"],
        request=RegistrationCreateSerializer,
        responses={201: RegistrationCreatedSerializer},
    )
    def create(self, request):
        s = RegistrationCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        child_id = RegistrationService.create_registration(**s.validated_data)
        return Response(
            {"success": True, "message": REGISTRATION_CREATED_MSG, "childId": child_id},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(tags=["Registrations"], responses={200: OpenApiTypes.OBJECT})
    def retrieve(self, request, pk=None):
        return Response(get_student(child_id=int(pk)), status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Registrations"],
        request=RegistrationUpdateSerializer,
        responses={200: RegistrationCreatedSerializer},
    )
    def update(self, request, pk=None):
        s = RegistrationUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        child_id = RegistrationService.update_registration(child_id=int(pk), **s.validated_data)
        return _updated(REGISTRATION_UPDATED_MSG, child_id)

    @extend_schema(
        tags=["Registrations"],
        request=RegistrationUpdateSerializer,
        responses={200: RegistrationCreatedSerializer},
    )
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(
        tags=["Registrations"],
        request=EnrollmentUpdateSerializer,
        responses={200: RegistrationCreatedSerializer},
    )
    @action(detail=True, methods=["put"], url_path="enrollment")
    def enrollment(self, request, pk=None):
        s = EnrollmentUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        RegistrationService.update_enrollment(child_id=int(pk), enrollment=s.validated_data["enrollment"])
        return _updated(ENROLLMENT_UPDATED_MSG, int(pk))


class StudentViewSet(viewsets.ViewSet):
    """
    Student roster: nested student documents for the admin screens.
    """
    permission_classes = [StudentPermission]

    serializer_class = StudentUpdateSerializer
    queryset = Child.objects.none()
    lookup_value_regex = r"\d+"

    @extend_schema(
        tags=["Students"],
        responses={200: OpenApiTypes.OBJECT},
        parameters=[
            OpenApiParameter(
                name="status",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Registration status (case-insensitive).",
            ),
            OpenApiParameter(
                name="q",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Search child name or guardian email.",
            ),
        ],
    )
    def list(self, request):
        students = list_students(
            status=request.query_params.get("status"),
            q=request.query_params.get("q"),
        )
        message = f"Successfully retrieved {len(students)} student(s)" if students else NO_STUDENTS_MSG
        return Response(
            {"success": True, "message": message, "totalCount": len(students), "data": students},
            status=status.HTTP_200_OK,
        )

    @extend_schema(tags=["Students"], responses={200: OpenApiTypes.OBJECT})
    def retrieve(self, request, pk=None):
        student = get_student(child_id=int(pk))
        return Response(
            {"success": True, "message": STUDENT_RETRIEVED_MSG, "data": student},
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        tags=["Students"],
        request=StudentUpdateSerializer,
        responses={200: RegistrationCreatedSerializer},
    )
    def partial_update(self, request, pk=None):
        s = StudentUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        child_id = RegistrationService.update_registration(child_id=int(pk), **s.validated_data)
        return _updated(STUDENT_UPDATED_MSG, child_id)
