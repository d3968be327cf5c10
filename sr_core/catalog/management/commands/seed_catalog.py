# sr_core/catalog/management/commands/seed_catalog.py

from django.core.management.base import BaseCommand
from django.db import transaction

from sr_core.catalog.models import EnrollmentPlan, PaymentPlan, Program, RoomType


PROGRAMS = ["Full Time", "Part Time", "Before & After School"]
ROOM_TYPES = ["Infant", "Toddler", "Preschool", "School Age"]
PAYMENT_PLANS = [("Weekly", 7), ("Bi-Weekly", 14), ("Monthly", 30)]

# Curated program/room combinations that can be enrolled into.
ENROLLMENT_PLANS = [
    ("Full Time", "Toddler"),
    ("Full Time", "Preschool"),
    ("Part Time", "Infant"),
    ("Part Time", "Toddler"),
    ("Part Time", "Preschool"),
    ("Before & After School", "School Age"),
]


class Command(BaseCommand):
    help = "Ensure default programs, room types, payment plans and enrollment plans exist (idempotent)."

    @transaction.atomic
    def handle(self, *args, **options):
        created = 0

        programs = {}
        for name in PROGRAMS:
            programs[name], was_created = Program.objects.get_or_create(name=name)
            created += 1 if was_created else 0

        rooms = {}
        for name in ROOM_TYPES:
            rooms[name], was_created = RoomType.objects.get_or_create(name=name)
            created += 1 if was_created else 0

        for plan_type, duration in PAYMENT_PLANS:
            _, was_created = PaymentPlan.objects.get_or_create(
                plan_type=plan_type,
                defaults={"plan_duration": duration},
            )
            created += 1 if was_created else 0

        for program_name, room_name in ENROLLMENT_PLANS:
            _, was_created = EnrollmentPlan.objects.get_or_create(
                program=programs[program_name],
                room_type=rooms[room_name],
            )
            created += 1 if was_created else 0

        self.stdout.write(self.style.SUCCESS(f"Catalog ensured. Newly created rows: {created}"))
