# sr_core/students/admin.py
from django.contrib import admin

from sr_core.students.models import (
    CareFacility,
    Child,
    ChildGuardian,
    Guardian,
    MedicalContact,
    Registration,
)


class ChildGuardianInline(admin.TabularInline):
    model = ChildGuardian
    extra = 0
    raw_id_fields = ("guardian",)


@admin.register(Child)
class ChildAdmin(admin.ModelAdmin):
    list_display = ("id", "first_name", "last_name", "date_of_birth", "parent_user", "created_at")
    search_fields = ("first_name", "last_name", "parent_user__email")
    readonly_fields = ("created_at", "updated_at")
    raw_id_fields = ("parent_user",)
    inlines = [ChildGuardianInline]
    ordering = ("-id",)


@admin.register(Guardian)
class GuardianAdmin(admin.ModelAdmin):
    list_display = ("id", "first_name", "last_name", "email", "phone_number")
    search_fields = ("first_name", "last_name", "email", "phone_number")
    readonly_fields = ("created_at", "updated_at")


@admin.register(MedicalContact)
class MedicalContactAdmin(admin.ModelAdmin):
    list_display = ("child", "physician_first_name", "physician_last_name", "phone_number")
    search_fields = ("physician_last_name", "child__last_name")
    raw_id_fields = ("child",)


@admin.register(CareFacility)
class CareFacilityAdmin(admin.ModelAdmin):
    list_display = ("child", "emergency_contact_name", "emergency_phone_number", "city")
    raw_id_fields = ("child",)


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ("id", "child", "enrollment_plan", "payment_plan", "status", "amount", "enrollment_date")
    list_filter = ("status", "payment_plan")
    search_fields = ("child__first_name", "child__last_name")
    raw_id_fields = ("child",)
    readonly_fields = ("created_at", "updated_at")
    ordering = ("-created_at",)
