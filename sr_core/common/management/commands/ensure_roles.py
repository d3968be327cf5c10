# sr_core/common/management/commands/ensure_roles.py
from django.contrib.auth.models import Group
from django.core.management.base import BaseCommand

from sr_core.common.permissions import ALL_ROLES


class Command(BaseCommand):
    help = "Create the ADMIN / STAFF / PARENT / READONLY groups if missing."

    def handle(self, *args, **options):
        missing = [name for name in ALL_ROLES if not Group.objects.filter(name=name).exists()]
        Group.objects.bulk_create([Group(name=name) for name in missing])

        if options["verbosity"]:
            added = ", ".join(missing) or "none"
            self.stdout.write(self.style.SUCCESS(f"Role groups ready (added: {added})"))
