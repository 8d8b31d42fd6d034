# users/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import LoginView, MeView, RegisterView, UserViewSet

app_name = "users"

router = DefaultRouter()
router.register(r"users", UserViewSet, basename="users")

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    # ---------------- AUTHENTICATED ----------------
    path("me/", MeView.as_view(), name="me"),
    # ---------------- SUPERADMIN ----------------
    path("", include(router.urls)),
]
