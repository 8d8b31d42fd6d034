"""
======================================================
PATH: activity/migrations/0001_initial.py
======================================================
MIGRATION: CREATE ActivityLog (append-only)
"""

from __future__ import annotations

from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ActivityLog",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("user_email", models.EmailField(db_index=True, max_length=254)),
                ("role", models.CharField(default="user", max_length=20)),
                ("action", models.CharField(max_length=500)),
                (
                    "timestamp",
                    models.DateTimeField(db_index=True, default=django.utils.timezone.now),
                ),
            ],
            options={
                "ordering": ["-timestamp"],
            },
        ),
    ]
