"""
USER MANAGEMENT VIEWSET (SUPERADMIN ONLY)

Rules:
- Superadmin accounts cannot be created through the API.
- Email must be unique (409 on conflict).
- A superadmin cannot be demoted by somebody else.
- The superadmin role cannot be granted to an existing user.
- Superadmins cannot be deleted; nobody can delete their own account.
"""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from activity.services import record_activity
from permissions.roles import CAP_USERS_MANAGE, HasCapability
from users.serializers import UserSerializer, UserWriteSerializer

logger = logging.getLogger(__name__)

User = get_user_model()


class UserViewSet(viewsets.ModelViewSet):
    queryset = User.objects.all().order_by("-created_at")
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_USERS_MANAGE
    filterset_fields = ["role", "is_active"]

    def get_serializer_class(self):
        if self.action in {"create", "update", "partial_update"}:
            return UserWriteSerializer
        return UserSerializer

    def perform_create(self, serializer):
        user = serializer.save()
        logger.info(
            "User created",
            extra={"user_email": user.email, "by": self.request.user.email},
        )
        record_activity(user=self.request.user, action=f"Created user {user.email} ({user.role})")

    def perform_update(self, serializer):
        user = serializer.save()
        record_activity(user=self.request.user, action=f"Updated user {user.email}")

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()

        if user.is_superadmin:
            return Response(
                {"detail": "Cannot delete superadmin users"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        if user.pk == request.user.pk:
            return Response(
                {"detail": "Cannot delete your own account"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        email = user.email
        user.delete()

        logger.info("User deleted", extra={"user_email": email, "by": request.user.email})
        record_activity(user=request.user, action=f"Deleted user {email}")

        return Response({"message": "User deleted successfully"}, status=status.HTTP_200_OK)
