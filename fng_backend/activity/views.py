# activity/views.py

"""
ACTIVITY + DASHBOARD ENDPOINTS

- GET  /api/activity/logs/?limit=N     superadmin (newest first)
- POST /api/activity/logs/             any authenticated user
- GET  /api/activity/dashboard/stats/  admin / superadmin
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from activity.serializers import (
    ActivityLogCreateSerializer,
    ActivityLogSerializer,
    DashboardStatsSerializer,
)
from activity.services import dashboard_stats, recent_activity, record_activity
from permissions.roles import (
    CAP_DASHBOARD_VIEW,
    CAP_LOGS_VIEW,
    CAP_LOGS_WRITE,
    HasCapability,
)


class ActivityLogView(APIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = None

    def get_permissions(self):
        # reset per request
        if self.request.method == "POST":
            self.required_capability = CAP_LOGS_WRITE
        else:
            self.required_capability = CAP_LOGS_VIEW
        return super().get_permissions()

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="limit",
                type=int,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Max rows (capped by ACTIVITY_LOG_LIMIT).",
            )
        ],
        responses={200: ActivityLogSerializer(many=True)},
        description="Recent activity log entries, newest first",
    )
    def get(self, request):
        raw_limit = (request.query_params.get("limit") or "").strip()
        limit = None
        if raw_limit:
            try:
                limit = int(raw_limit)
                if limit <= 0:
                    raise ValueError
            except ValueError:
                return Response(
                    {"detail": "limit must be a positive integer"},
                    status=status.HTTP_400_BAD_REQUEST,
                )

        data = ActivityLogSerializer(recent_activity(limit), many=True).data
        return Response({"count": len(data), "results": data})

    @extend_schema(
        request=ActivityLogCreateSerializer,
        responses={201: ActivityLogSerializer},
        description="Append an activity log entry",
    )
    def post(self, request):
        serializer = ActivityLogCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        v = serializer.validated_data

        entry = record_activity(
            user=request.user,
            action=v["action"],
            email=v.get("user_email", ""),
            role=v.get("role", ""),
        )
        return Response(ActivityLogSerializer(entry).data, status=status.HTTP_201_CREATED)


class DashboardStatsView(APIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_DASHBOARD_VIEW

    @extend_schema(
        responses={200: DashboardStatsSerializer},
        description="Counters for the back-office dashboard",
    )
    def get(self, request):
        return Response(DashboardStatsSerializer(dashboard_stats()).data)
