from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from products.models import Product

User = get_user_model()

PRODUCTS_URL = "/api/products/products/"


class ProductPermissionTests(TestCase):
    """
    Permission & access tests.

    GUARANTEES:
    - Anonymous users have no access
    - Every back-office role can read the menu
    - Only admin / superadmin can change it
    """

    def setUp(self):
        self.client = APIClient()

        self.superadmin = User.objects.create_user(
            email="root@fng.test", password="secret123", role="superadmin"
        )
        self.user = User.objects.create_user(
            email="kasir@fng.test", password="secret123", role="user"
        )

        self.product = Product.objects.create(
            name="Gado Gado",
            price=Decimal("18000"),
            category=Product.Category.FOOD,
        )

    def test_anonymous_cannot_read(self):
        response = self.client.get(PRODUCTS_URL)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_user_can_read(self):
        self.client.force_authenticate(self.user)

        self.assertEqual(self.client.get(PRODUCTS_URL).status_code, status.HTTP_200_OK)
        self.assertEqual(
            self.client.get(f"{PRODUCTS_URL}{self.product.pk}/").status_code,
            status.HTTP_200_OK,
        )

    def test_user_cannot_write(self):
        self.client.force_authenticate(self.user)

        response = self.client.post(
            PRODUCTS_URL,
            {"name": "Lontong", "price": "10000", "category": "makanan"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = self.client.patch(
            f"{PRODUCTS_URL}{self.product.pk}/", {"name": "Changed"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = self.client.delete(f"{PRODUCTS_URL}{self.product.pk}/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.product.refresh_from_db()
        self.assertEqual(self.product.name, "Gado Gado")

    def test_superadmin_can_write(self):
        self.client.force_authenticate(self.superadmin)

        response = self.client.patch(
            f"{PRODUCTS_URL}{self.product.pk}/", {"name": "Gado Gado Spesial"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["name"], "Gado Gado Spesial")
