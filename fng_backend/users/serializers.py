# users/serializers.py

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from rest_framework.exceptions import APIException

from permissions.roles import ROLE_SUPERADMIN, ROLE_USER

User = get_user_model()


class EmailTaken(APIException):
    status_code = 409
    default_detail = "Email already in use"
    default_code = "email_taken"


# ---------------- REGISTER ----------------
class RegisterSerializer(serializers.Serializer):
    """
    Self-registration. Role is always "user"; elevated roles are granted by
    a superadmin through the user management endpoints.
    """

    name = serializers.CharField(required=False, allow_blank=True, max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={"input_type": "password"},
    )

    def validate_email(self, value):
        email = User.objects.normalize_email(value)
        if User.objects.filter(email__iexact=email).exists():
            raise EmailTaken("User with this email already exists")
        return email

    def create(self, validated_data):
        return User.objects.create_user(
            email=validated_data["email"],
            password=validated_data["password"],
            name=validated_data.get("name", ""),
            role=ROLE_USER,
        )


# ---------------- LOGIN (INPUT ONLY) ----------------
class LoginSerializer(serializers.Serializer):
    """
    Input validation only.
    Authentication is handled in the view.
    """

    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )


# ---------------- USER OUTPUT ----------------
class UserSerializer(serializers.ModelSerializer):
    """
    Safe user representation (never includes the password hash).
    """

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "email",
            "role",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


# ---------------- USER MANAGEMENT (SUPERADMIN) ----------------
class UserWriteSerializer(serializers.Serializer):
    """
    Create / update payload for the user management endpoints.

    Create:
    - name, email, password, role all required
    - role may not be "superadmin"

    Update:
    - name, email, role required (PUT); password optional
    - superadmin role rules are enforced against the target instance
    """

    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        required=False,
        allow_blank=True,
        validators=[validate_password],
        style={"input_type": "password"},
    )
    role = serializers.ChoiceField(choices=[r for r, _ in User.ROLE_CHOICES])

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def validate_email(self, value):
        email = User.objects.normalize_email(value)
        qs = User.objects.filter(email__iexact=email)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            if self.instance is not None:
                raise EmailTaken("Email already taken by another user")
            raise EmailTaken("User with this email already exists")
        return email

    def validate(self, attrs):
        role = attrs.get("role")
        request = self.context.get("request")
        actor = getattr(request, "user", None)

        if self.instance is None:
            if not attrs.get("password"):
                raise serializers.ValidationError({"password": "Password is required"})
            if role == ROLE_SUPERADMIN:
                raise serializers.ValidationError(
                    {"role": "Cannot create superadmin users through this endpoint"}
                )
            return attrs

        target = self.instance
        if role is None:
            return attrs

        if (
            target.role == ROLE_SUPERADMIN
            and role != ROLE_SUPERADMIN
            and (actor is None or actor.pk != target.pk)
        ):
            raise serializers.ValidationError({"role": "Cannot change superadmin role"})

        if role == ROLE_SUPERADMIN and target.role != ROLE_SUPERADMIN:
            raise serializers.ValidationError(
                {"role": "Cannot assign superadmin role to existing user"}
            )

        return attrs

    def create(self, validated_data):
        return User.objects.create_user(
            email=validated_data["email"],
            password=validated_data["password"],
            name=validated_data["name"],
            role=validated_data["role"],
        )

    def update(self, instance, validated_data):
        password = validated_data.pop("password", "")

        for field in ("name", "email", "role"):
            if field in validated_data:
                setattr(instance, field, validated_data[field])

        if password:
            instance.set_password(password)

        instance.save()
        return instance

    def to_representation(self, instance):
        return UserSerializer(instance, context=self.context).data
