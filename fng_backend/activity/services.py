# activity/services.py

"""
ACTIVITY LOG SERVICES

- record_activity(): append one ActivityLog row for a user action.
- recent_activity(): newest-first slice, capped by ACTIVITY_LOG_LIMIT.
- dashboard_stats(): counters for the back-office landing page.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.utils import timezone

from activity.models import ActivityLog
from permissions.roles import ELEVATED_ROLES, ROLE_USER

logger = logging.getLogger(__name__)


def record_activity(*, action: str, user=None, email: str = "", role: str = "") -> ActivityLog:
    """
    Append an activity row.

    The actor comes from `user` when given; `email` / `role` override it
    (used by the public log endpoint, where the client names the actor).
    """
    user_email = (email or getattr(user, "email", "") or "system@local").strip().lower()
    user_role = (role or getattr(user, "role", "") or ROLE_USER).strip()

    entry = ActivityLog.objects.create(
        user_email=user_email,
        role=user_role,
        action=(action or "").strip()[:500],
    )

    logger.info("%s: %s", user_email, entry.action)
    return entry


def recent_activity(limit: int | None = None):
    cap = int(getattr(settings, "ACTIVITY_LOG_LIMIT", 200))
    if limit is None or limit <= 0 or limit > cap:
        limit = cap
    return ActivityLog.objects.order_by("-timestamp")[:limit]


def dashboard_stats() -> dict:
    # local import: products depends on activity for logging
    from products.models import Product

    User = get_user_model()
    today = timezone.localdate()

    return {
        "total_users": User.objects.count(),
        "total_admins": User.objects.filter(role__in=ELEVATED_ROLES).count(),
        "total_products": Product.objects.count(),
        "low_stock_count": Product.objects.filter(
            is_track_stock=True, low_stock_alert=True
        ).count(),
        "today_logs": ActivityLog.objects.filter(timestamp__date=today).count(),
    }
