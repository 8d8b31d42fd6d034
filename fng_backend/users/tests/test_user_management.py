from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()

USERS_URL = "/api/auth/users/"


class UserManagementTests(TestCase):
    """
    Superadmin user management.

    GUARANTEES:
    - only superadmins manage users
    - superadmins cannot be created, deleted, or demoted by someone else
    - nobody deletes their own account
    """

    def setUp(self):
        self.client = APIClient()

        self.root = User.objects.create_user(
            email="root@fng.test", password="secret123", name="Root", role="superadmin"
        )
        self.admin = User.objects.create_user(
            email="admin@fng.test", password="secret123", name="Admin", role="admin"
        )

        self.client.force_authenticate(self.root)

    def test_admin_cannot_manage_users(self):
        self.client.force_authenticate(self.admin)

        response = self.client.get(USERS_URL)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_users(self):
        response = self.client.get(USERS_URL)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 2)

        response = self.client.get(USERS_URL, {"role": "admin"})
        self.assertEqual([u["email"] for u in response.data["results"]], ["admin@fng.test"])

    def test_create_user(self):
        response = self.client.post(
            USERS_URL,
            {"name": "Kasir", "email": "kasir@fng.test", "password": "secret123", "role": "user"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["role"], "user")
        self.assertTrue(User.objects.get(email="kasir@fng.test").check_password("secret123"))

    def test_create_rules(self):
        cases = [
            {"name": "X", "email": "x@fng.test", "password": "secret123", "role": "superadmin"},
            {"name": "X", "email": "x@fng.test", "role": "user"},
            {"name": "X", "email": "x@fng.test", "password": "abc", "role": "user"},
        ]
        for body in cases:
            with self.subTest(body=body):
                response = self.client.post(USERS_URL, body, format="json")
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_duplicate_email_conflicts(self):
        response = self.client.post(
            USERS_URL,
            {"name": "Dup", "email": "ADMIN@fng.test", "password": "secret123", "role": "user"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

        response = self.client.patch(
            f"{USERS_URL}{self.admin.pk}/", {"email": "root@fng.test"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_update_user_and_password(self):
        response = self.client.patch(
            f"{USERS_URL}{self.admin.pk}/",
            {"name": "Admin Baru", "password": "newsecret"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.admin.refresh_from_db()
        self.assertEqual(self.admin.name, "Admin Baru")
        self.assertTrue(self.admin.check_password("newsecret"))

    def test_update_rejects_short_password(self):
        response = self.client.patch(
            f"{USERS_URL}{self.admin.pk}/", {"password": "abc"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", response.data)
        self.admin.refresh_from_db()
        self.assertTrue(self.admin.check_password("secret123"))

    def test_superadmin_role_rules(self):
        other_root = User.objects.create_user(
            email="root2@fng.test", password="secret123", role="superadmin"
        )

        response = self.client.patch(
            f"{USERS_URL}{other_root.pk}/", {"role": "admin"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.patch(
            f"{USERS_URL}{self.admin.pk}/", {"role": "superadmin"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        other_root.refresh_from_db()
        self.admin.refresh_from_db()
        self.assertEqual(other_root.role, "superadmin")
        self.assertEqual(self.admin.role, "admin")

    def test_delete_rules(self):
        other_root = User.objects.create_user(
            email="root2@fng.test", password="secret123", role="superadmin"
        )

        response = self.client.delete(f"{USERS_URL}{other_root.pk}/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.delete(f"{USERS_URL}{self.admin.pk}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(User.objects.filter(pk=self.admin.pk).exists())

    def test_superadmin_cannot_delete_own_account(self):
        response = self.client.delete(f"{USERS_URL}{self.root.pk}/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(User.objects.filter(pk=self.root.pk).exists())
