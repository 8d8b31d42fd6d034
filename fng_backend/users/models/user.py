"""
PATH: users/models/user.py

CUSTOM USER MODEL

Back-office accounts:
- Email is the login identity (stored lowercased).
- Display name is a single free-text field.
- Role is one of superadmin / admin / user (see permissions.roles).
"""

from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models

from permissions.roles import ROLE_ADMIN, ROLE_SUPERADMIN, ROLE_USER


# ---------------- USER MANAGER ----------------
class UserManager(BaseUserManager):
    def normalize_email(self, email):
        return super().normalize_email((email or "").strip()).lower()

    def create_user(self, email=None, password=None, **extra_fields):
        """
        create_user(email="a@b.com", password="secret", name="Ani", role="admin")

        Rules:
        - email is required
        - password may be omitted (unusable password)
        """
        email = self.normalize_email(email or extra_fields.pop("email", ""))
        if not email:
            raise ValueError("Email is required")

        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("role", ROLE_USER)

        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.full_clean(exclude=["password"])
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Superuser must have an email")
        if not password:
            raise ValueError("Superuser must have a password")

        extra_fields.setdefault("role", ROLE_SUPERADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(email=email, password=password, **extra_fields)


# ---------------- USER MODEL ----------------
class User(AbstractBaseUser, PermissionsMixin):
    ROLE_CHOICES = [
        (ROLE_SUPERADMIN, "Super Admin"),
        (ROLE_ADMIN, "Admin"),
        (ROLE_USER, "User"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ["-created_at"]

    def clean(self):
        if self.email:
            self.email = self.__class__.objects.normalize_email(self.email)
        self.name = (self.name or "").strip()

        if not self.email:
            raise ValidationError("User must have an email")

    @property
    def is_superadmin(self) -> bool:
        return self.role == ROLE_SUPERADMIN

    def __str__(self):
        return f"{self.email} ({self.role})"
