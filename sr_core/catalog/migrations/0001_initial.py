from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Program",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=128, unique=True)),
            ],
            options={
                "db_table": "programs",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="RoomType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=128, unique=True)),
            ],
            options={
                "db_table": "roomtypes",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="PaymentPlan",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("plan_type", models.CharField(max_length=64, unique=True)),
                ("plan_duration", models.PositiveIntegerField(blank=True, null=True)),
            ],
            options={
                "db_table": "paymentplan",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="EnrollmentPlan",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "program",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="enrollment_plans",
                        to="catalog.program",
                    ),
                ),
                (
                    "room_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="enrollment_plans",
                        to="catalog.roomtype",
                    ),
                ),
            ],
            options={
                "db_table": "enrollmentplans",
                "ordering": ["id"],
            },
        ),
        migrations.AddConstraint(
            model_name="enrollmentplan",
            constraint=models.UniqueConstraint(fields=("program", "room_type"), name="uq_enrollment_plan_program_room"),
        ),
    ]
