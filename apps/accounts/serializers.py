from rest_framework import serializers
from .models import User, UserType


class UserSerializer(serializers.ModelSerializer):
    """Team user as shown to admins and to the user themselves."""

    class Meta:
        model = User
        fields = [
            'id',
            'team_name',
            'email',
            'user_type',
            'is_staff',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserCreateSerializer(serializers.Serializer):
    """Input for admin-side team user creation."""

    team_name = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        min_length=8,
        style={'input_type': 'password'}
    )
    user_type = serializers.ChoiceField(
        choices=UserType.choices,
        required=False,
        default=UserType.HSV
    )
    is_staff = serializers.BooleanField(required=False, default=False)


class UserUpdateSerializer(serializers.Serializer):
    """Input for partial team user updates. Blank values are ignored."""

    team_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    password = serializers.CharField(
        write_only=True,
        required=False,
        allow_blank=True,
        style={'input_type': 'password'}
    )
    user_type = serializers.ChoiceField(choices=UserType.choices, required=False)


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
