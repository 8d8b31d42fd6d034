import uuid
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from activity.models import ActivityLog
from products.models import Product, StockMovement

User = get_user_model()

PRODUCTS_URL = "/api/products/products/"


class StockApiTestBase(TestCase):
    def setUp(self):
        self.client = APIClient()

        self.admin = User.objects.create_user(
            email="admin@fng.test", password="secret123", name="Admin", role="admin"
        )
        self.staff = User.objects.create_user(
            email="staff@fng.test", password="secret123", name="Staff", role="user"
        )

        self.product = Product.objects.create(
            name="Sate Ayam",
            price=Decimal("20000"),
            category=Product.Category.FOOD,
            current_stock=20,
            minimum_stock=10,
        )

    def stock_url(self, product_id):
        return f"{PRODUCTS_URL}{product_id}/stock/"


class SingleStockAdjustmentApiTests(StockApiTestBase):
    """
    POST|PUT /products/products/{id}/stock/

    GUARANTEES:
    - admin roles adjust, plain users cannot
    - ledger errors map to 400 / 404 with a detail message
    """

    def test_admin_sets_absolute_stock(self):
        self.client.force_authenticate(self.admin)

        response = self.client.put(
            self.stock_url(self.product.pk),
            {"new_stock": 5, "adjustment_type": "set"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["old_stock"], 20)
        self.assertEqual(response.data["new_stock"], 5)
        self.assertEqual(response.data["difference"], -15)
        self.assertTrue(response.data["product"]["low_stock_alert"])
        self.assertEqual(response.data["movement"]["movement_type"], "out")
        self.assertTrue(response.data["movement"]["reference"].startswith("ADJ-"))
        self.assertEqual(response.data["movement"]["notes"], "Manual adjustment: set")
        self.assertEqual(response.data["movement"]["adjusted_by"], str(self.admin.pk))

        self.assertTrue(
            ActivityLog.objects.filter(user_email="admin@fng.test", action__contains="Sate Ayam").exists()
        )

    def test_add_mode_computes_target_server_side(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.stock_url(self.product.pk),
            {"adjustment_type": "add", "quantity": 7},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.product.refresh_from_db()
        self.assertEqual(self.product.current_stock, 27)

    def test_subtract_below_zero_returns_400(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.stock_url(self.product.pk),
            {"adjustment_type": "subtract", "quantity": 21},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("negative", response.data["detail"])
        self.assertFalse(StockMovement.objects.exists())

    def test_negative_new_stock_returns_400(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.stock_url(self.product.pk), {"new_stock": -3}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_missing_body_fields_return_400(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post(self.stock_url(self.product.pk), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_untracked_product_returns_400(self):
        self.product.is_track_stock = False
        self.product.save()
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.stock_url(self.product.pk), {"new_stock": 3}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Stock tracking is disabled for this product")

    def test_unknown_product_returns_404(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post(self.stock_url(uuid.uuid4()), {"new_stock": 3}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_plain_user_is_forbidden(self):
        self.client.force_authenticate(self.staff)

        response = self.client.post(
            self.stock_url(self.product.pk), {"new_stock": 3}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.product.refresh_from_db()
        self.assertEqual(self.product.current_stock, 20)

    def test_anonymous_is_unauthorized(self):
        response = self.client.post(
            self.stock_url(self.product.pk), {"new_stock": 3}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class BulkStockApiTests(StockApiTestBase):
    url = f"{PRODUCTS_URL}bulk-stock-update/"

    def test_partial_success_reports_each_item(self):
        other = Product.objects.create(
            name="Teh Manis",
            price=Decimal("5000"),
            category=Product.Category.DRINK,
            current_stock=1,
            minimum_stock=3,
        )
        self.client.force_authenticate(self.admin)

        response = self.client.put(
            self.url,
            {
                "product_ids": [str(self.product.pk), str(uuid.uuid4()), str(other.pk)],
                "action_type": "add-all",
                "quantity": 4,
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["updated_count"], 2)
        self.assertEqual(response.data["total_count"], 3)
        self.assertEqual(response.data["mode"], "add-all")
        self.assertEqual(response.data["results"][1]["status"], "failed")
        self.assertIn("not found", response.data["results"][1]["error"].lower())

    def test_nothing_updated_returns_404(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.url,
            {"product_ids": [str(uuid.uuid4())], "mode": "set-all", "quantity": 4},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["detail"], "No valid products found for update")
        self.assertEqual(response.data["total_count"], 1)

    def test_validation_errors(self):
        self.client.force_authenticate(self.admin)

        cases = [
            {"product_ids": [], "mode": "set-all", "quantity": 1},
            {"product_ids": [str(self.product.pk)], "mode": "set-all", "quantity": -1},
            {"product_ids": [str(self.product.pk)], "mode": "explode", "quantity": 1},
            {"product_ids": [str(self.product.pk)], "quantity": 1},
        ]
        for body in cases:
            with self.subTest(body=body):
                response = self.client.post(self.url, body, format="json")
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        self.assertFalse(StockMovement.objects.exists())

    def test_plain_user_is_forbidden(self):
        self.client.force_authenticate(self.staff)

        response = self.client.post(
            self.url,
            {"product_ids": [str(self.product.pk)], "mode": "set-all", "quantity": 4},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class StockReadApiTests(StockApiTestBase):
    def setUp(self):
        super().setUp()
        self.client.force_authenticate(self.admin)
        for target in (15, 9, 30):
            self.client.post(self.stock_url(self.product.pk), {"new_stock": target}, format="json")
        self.client.force_authenticate(self.staff)

    def test_stock_history_for_product(self):
        url = f"{PRODUCTS_URL}{self.product.pk}/stock-history/"

        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 3)

        response = self.client.get(url, {"limit": 1})
        self.assertEqual(response.data["count"], 1)

        response = self.client.get(url, {"limit": "abc"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_stock_history_for_unknown_product_is_404(self):
        response = self.client.get(f"{PRODUCTS_URL}{uuid.uuid4()}/stock-history/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_recent_movements_filters(self):
        response = self.client.get("/api/products/stock-movements/", {"product": str(self.product.pk)})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 3)

        response = self.client.get("/api/products/stock-movements/", {"movement_type": "in"})
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["results"][0]["new_stock"], 30)

    def test_low_stock_alerts_and_summary(self):
        self.client.force_authenticate(self.admin)
        self.client.post(self.stock_url(self.product.pk), {"new_stock": 0}, format="json")
        Product.objects.create(
            name="Kopi Susu",
            price=Decimal("15000"),
            category=Product.Category.DRINK,
            is_track_stock=False,
        )
        self.client.force_authenticate(self.staff)

        response = self.client.get(f"{PRODUCTS_URL}alerts/low-stock/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["results"][0]["name"], "Sate Ayam")

        response = self.client.get(f"{PRODUCTS_URL}stock-summary/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_products"], 2)
        self.assertEqual(response.data["tracked_products"], 1)
        self.assertEqual(response.data["low_stock_count"], 1)
        self.assertEqual(response.data["out_of_stock_count"], 1)
        self.assertEqual(response.data["total_stock_value"], Decimal("0.00"))
