# sr_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from sr_core.catalog.api.views import (
    EnrollmentPlanViewSet,
    PaymentPlanViewSet,
    ProgramViewSet,
    RoomTypeViewSet,
)
from sr_core.iam.api.auth import LoginView, LogoutView, RefreshView
from sr_core.iam.api.me import MeView
from sr_core.iam.api.users import UserListView
from sr_core.students.api.views import RegistrationViewSet, StudentViewSet

router = DefaultRouter()

router.register(r"registrations", RegistrationViewSet, basename="registrations")
router.register(r"students", StudentViewSet, basename="students")

# Lookup tables
router.register(r"programs", ProgramViewSet, basename="programs")
router.register(r"room-types", RoomTypeViewSet, basename="room-types")
router.register(r"payment-plans", PaymentPlanViewSet, basename="payment-plans")
router.register(r"enrollment-plans", EnrollmentPlanViewSet, basename="enrollment-plans")

urlpatterns = [
    path("login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),
    path("users/", UserListView.as_view(), name="users"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
