# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS (BACK-OFFICE ROLES)
# =========================================================
ROLE_SUPERADMIN = "superadmin"
ROLE_ADMIN = "admin"
ROLE_USER = "user"

# Roles allowed to mutate the menu and stock.
ELEVATED_ROLES = {
    ROLE_SUPERADMIN,
    ROLE_ADMIN,
}


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views should protect capabilities, not raw roles.
CAP_USERS_MANAGE = "users.manage"

CAP_MENU_VIEW = "menu.view"
CAP_MENU_EDIT = "menu.edit"

CAP_INVENTORY_VIEW = "inventory.view"
CAP_INVENTORY_ADJUST = "inventory.adjust"

CAP_DASHBOARD_VIEW = "dashboard.view"

CAP_LOGS_VIEW = "logs.view"
CAP_LOGS_WRITE = "logs.write"

ALL_CAPABILITIES = {
    CAP_USERS_MANAGE,
    CAP_MENU_VIEW,
    CAP_MENU_EDIT,
    CAP_INVENTORY_VIEW,
    CAP_INVENTORY_ADJUST,
    CAP_DASHBOARD_VIEW,
    CAP_LOGS_VIEW,
    CAP_LOGS_WRITE,
}


# =========================================================
# ROLE → CAPABILITY MAP
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_SUPERADMIN: {
        *ALL_CAPABILITIES,
    },
    ROLE_ADMIN: {
        CAP_MENU_VIEW,
        CAP_MENU_EDIT,
        CAP_INVENTORY_VIEW,
        CAP_INVENTORY_ADJUST,
        CAP_DASHBOARD_VIEW,
        CAP_LOGS_WRITE,
    },
    ROLE_USER: {
        CAP_MENU_VIEW,
        CAP_INVENTORY_VIEW,
        CAP_LOGS_WRITE,
    },
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def capabilities_for(user) -> set[str]:
    return set(ROLE_CAPABILITIES.get(get_user_role(user), set()))


def actor_id_for(user) -> str:
    """
    Identifier stamped on ledger rows (StockMovement.adjusted_by).

    Falls back to the literal "system" for jobs running without a user.
    """
    if user is None or not getattr(user, "is_authenticated", False):
        return "system"
    return str(getattr(user, "pk", None) or getattr(user, "email", "") or "system")


# =========================================================
# Capability Permissions
# =========================================================
class HasCapability(BasePermission):
    """
    Require a specific capability.

    Usage:
        permission_classes = [IsAuthenticated, HasCapability]
        view.required_capability = CAP_INVENTORY_ADJUST
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_capability", None)
        if not required:
            # deny-by-default
            return False

        return required in capabilities_for(user)
