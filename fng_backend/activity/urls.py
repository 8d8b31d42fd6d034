# activity/urls.py

from django.urls import path

from .views import ActivityLogView, DashboardStatsView

app_name = "activity"

urlpatterns = [
    path("logs/", ActivityLogView.as_view(), name="logs"),
    path("dashboard/stats/", DashboardStatsView.as_view(), name="dashboard-stats"),
]
