from types import SimpleNamespace

from django.contrib.auth.models import AnonymousUser
from django.test import SimpleTestCase

from permissions.roles import (
    CAP_INVENTORY_ADJUST,
    CAP_LOGS_VIEW,
    CAP_MENU_VIEW,
    CAP_USERS_MANAGE,
    HasCapability,
    actor_id_for,
    capabilities_for,
)


def fake_user(role, pk="42", email="someone@fng.test"):
    return SimpleNamespace(role=role, pk=pk, email=email, is_authenticated=True)


class CapabilityMapTests(SimpleTestCase):
    def test_superadmin_has_everything(self):
        caps = capabilities_for(fake_user("superadmin"))
        self.assertIn(CAP_USERS_MANAGE, caps)
        self.assertIn(CAP_LOGS_VIEW, caps)

    def test_admin_adjusts_stock_but_not_users(self):
        caps = capabilities_for(fake_user("admin"))
        self.assertIn(CAP_INVENTORY_ADJUST, caps)
        self.assertNotIn(CAP_USERS_MANAGE, caps)
        self.assertNotIn(CAP_LOGS_VIEW, caps)

    def test_user_is_read_only(self):
        caps = capabilities_for(fake_user("user"))
        self.assertIn(CAP_MENU_VIEW, caps)
        self.assertNotIn(CAP_INVENTORY_ADJUST, caps)

    def test_unknown_role_has_nothing(self):
        self.assertEqual(capabilities_for(fake_user("cashier")), set())


class HasCapabilityTests(SimpleTestCase):
    def check(self, user, required):
        request = SimpleNamespace(user=user)
        view = SimpleNamespace(required_capability=required)
        return HasCapability().has_permission(request, view)

    def test_denies_when_view_declares_nothing(self):
        self.assertFalse(self.check(fake_user("superadmin"), None))

    def test_checks_role_capabilities(self):
        self.assertTrue(self.check(fake_user("admin"), CAP_INVENTORY_ADJUST))
        self.assertFalse(self.check(fake_user("user"), CAP_INVENTORY_ADJUST))
        self.assertFalse(self.check(AnonymousUser(), CAP_MENU_VIEW))


class ActorIdTests(SimpleTestCase):
    def test_actor_id(self):
        self.assertEqual(actor_id_for(fake_user("admin", pk="abc")), "abc")
        self.assertEqual(actor_id_for(None), "system")
        self.assertEqual(actor_id_for(AnonymousUser()), "system")
