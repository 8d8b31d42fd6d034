from rest_framework import serializers

from activity.models import ActivityLog


class ActivityLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = ActivityLog
        fields = ["id", "user_email", "role", "action", "timestamp"]
        read_only_fields = ["id", "timestamp"]


class ActivityLogCreateSerializer(serializers.Serializer):
    """
    POST body. user_email / role default to the authenticated user.
    """

    user_email = serializers.EmailField(required=False)
    role = serializers.CharField(required=False, allow_blank=True, max_length=20)
    action = serializers.CharField(max_length=500)

    def validate_action(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("action is required")
        return value


class DashboardStatsSerializer(serializers.Serializer):
    total_users = serializers.IntegerField()
    total_admins = serializers.IntegerField()
    total_products = serializers.IntegerField()
    low_stock_count = serializers.IntegerField()
    today_logs = serializers.IntegerField()
