from django.contrib import admin

from sr_core.catalog.models import EnrollmentPlan, PaymentPlan, Program, RoomType


@admin.register(Program)
class ProgramAdmin(admin.ModelAdmin):
    list_display = ("id", "name")
    search_fields = ("name",)


@admin.register(RoomType)
class RoomTypeAdmin(admin.ModelAdmin):
    list_display = ("id", "name")
    search_fields = ("name",)


@admin.register(PaymentPlan)
class PaymentPlanAdmin(admin.ModelAdmin):
    list_display = ("id", "plan_type", "plan_duration")
    search_fields = ("plan_type",)


@admin.register(EnrollmentPlan)
class EnrollmentPlanAdmin(admin.ModelAdmin):
    list_display = ("id", "program", "room_type")
    list_filter = ("program", "room_type")
