from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


def _address_fields():
    return [
        ("address_line1", models.CharField(blank=True, default="", max_length=255)),
        ("address_line2", models.CharField(blank=True, default="", max_length=255)),
        ("city", models.CharField(blank=True, default="", max_length=128)),
        ("state", models.CharField(blank=True, default="", max_length=128)),
        ("country", models.CharField(blank=True, default="", max_length=64)),
        ("zip_code", models.CharField(blank=True, default="", max_length=16)),
        ("country_code", models.CharField(blank=True, default="+1", max_length=8)),
    ]


def _timestamps():
    return [
        ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("catalog", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Child",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *_timestamps(),
                ("first_name", models.CharField(max_length=100)),
                ("middle_name", models.CharField(blank=True, default="", max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("gender", models.CharField(blank=True, default="", max_length=32)),
                ("date_of_birth", models.DateField(blank=True, null=True)),
                ("place_of_birth", models.CharField(blank=True, default="", max_length=128)),
                (
                    "parent_user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="children",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "children",
                "indexes": [models.Index(fields=["last_name", "first_name"], name="children_name_idx")],
            },
        ),
        migrations.CreateModel(
            name="Guardian",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *_timestamps(),
                *_address_fields(),
                ("first_name", models.CharField(max_length=100)),
                ("middle_name", models.CharField(blank=True, default="", max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("phone_type", models.CharField(blank=True, default="", max_length=16)),
                ("phone_number", models.CharField(blank=True, default="", max_length=32)),
                ("alternate_country_code", models.CharField(blank=True, default="", max_length=8)),
                ("alternate_phone_type", models.CharField(blank=True, default="", max_length=16)),
                ("alternate_phone_number", models.CharField(blank=True, default="", max_length=32)),
            ],
            options={
                "db_table": "guardians",
                "indexes": [models.Index(fields=["email"], name="guardians_email_idx")],
            },
        ),
        migrations.CreateModel(
            name="ChildGuardian",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "relation_type",
                    models.CharField(
                        blank=True,
                        choices=[("Father", "Father"), ("Mother", "Mother"), ("Guardian", "Guardian")],
                        default="",
                        max_length=16,
                    ),
                ),
                ("is_primary", models.BooleanField(default=False)),
                (
                    "child",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="guardian_links",
                        to="students.child",
                    ),
                ),
                (
                    "guardian",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="child_links",
                        to="students.guardian",
                    ),
                ),
            ],
            options={
                "db_table": "child_guardians",
            },
        ),
        migrations.AddConstraint(
            model_name="childguardian",
            constraint=models.UniqueConstraint(fields=("child", "guardian"), name="uq_child_guardian"),
        ),
        migrations.AddConstraint(
            model_name="childguardian",
            constraint=models.UniqueConstraint(
                condition=models.Q(("is_primary", True)),
                fields=("child",),
                name="uq_child_primary_guardian",
            ),
        ),
        migrations.AddField(
            model_name="guardian",
            name="children",
            field=models.ManyToManyField(
                related_name="guardians",
                through="students.ChildGuardian",
                to="students.child",
            ),
        ),
        migrations.CreateModel(
            name="MedicalContact",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *_timestamps(),
                *_address_fields(),
                ("physician_first_name", models.CharField(blank=True, default="", max_length=100)),
                ("physician_middle_name", models.CharField(blank=True, default="", max_length=100)),
                ("physician_last_name", models.CharField(blank=True, default="", max_length=100)),
                ("phone_type", models.CharField(blank=True, default="", max_length=16)),
                ("phone_number", models.CharField(blank=True, default="", max_length=32)),
                (
                    "child",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="medical_contact",
                        to="students.child",
                    ),
                ),
            ],
            options={
                "db_table": "medicalcontacts",
            },
        ),
        migrations.CreateModel(
            name="CareFacility",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *_timestamps(),
                *_address_fields(),
                ("emergency_contact_name", models.CharField(blank=True, default="", max_length=200)),
                ("emergency_phone_number", models.CharField(blank=True, default="", max_length=32)),
                ("phone_type", models.CharField(blank=True, default="", max_length=16)),
                (
                    "child",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="care_facility",
                        to="students.child",
                    ),
                ),
            ],
            options={
                "db_table": "carefacilities",
                "verbose_name_plural": "care facilities",
            },
        ),
        migrations.CreateModel(
            name="Registration",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *_timestamps(),
                ("status", models.CharField(db_index=True, default="Pending Approval", max_length=64)),
                ("amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=10)),
                ("enrollment_date", models.DateField(blank=True, null=True)),
                (
                    "child",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="registration",
                        to="students.child",
                    ),
                ),
                (
                    "enrollment_plan",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="registrations",
                        to="catalog.enrollmentplan",
                    ),
                ),
                (
                    "payment_plan",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="registrations",
                        to="catalog.paymentplan",
                    ),
                ),
            ],
            options={
                "db_table": "registrations",
            },
        ),
    ]
