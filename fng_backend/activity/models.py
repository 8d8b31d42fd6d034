# activity/models.py

"""
ACTIVITY LOG

Append-only record of back-office actions (who did what, when).

The actor is stored by email + role snapshot rather than a foreign key, so
deleting a user never rewrites history.
"""

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


class ActivityLog(models.Model):
    user_email = models.EmailField(db_index=True)
    role = models.CharField(max_length=20, default="user")
    action = models.CharField(max_length=500)
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-timestamp"]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("ActivityLog records are immutable")
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.timestamp:%Y-%m-%d %H:%M} {self.user_email}: {self.action}"
