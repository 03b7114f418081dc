from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework_simplejwt.tokens import RefreshToken, TokenError

from utils.exceptions import Conflict, Forbidden, Unauthorized


class UserSerializer(serializers.ModelSerializer):
    """Staff account serializer"""
    password = serializers.CharField(
        write_only=True,
        max_length=128,
        required=False,
        min_length=8,
        help_text='Password (at least 8 characters)'
    )
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = get_user_model()
        fields = ['id', 'email', 'first_name', 'last_name', 'full_name', 'phone', 'role', 'specialty',
                  'is_active', 'last_login', 'created_at', 'updated_at', 'password']
        read_only_fields = ['id', 'is_active', 'last_login', 'created_at', 'updated_at']
        # duplicates are reported by validate_email with a 409
        extra_kwargs = {'email': {'validators': []}}

    def validate_email(self, value):
        value = value.lower()
        qs = get_user_model().objects.filter(email__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise Conflict('Email already registered')
        return value

    def create(self, validated_data):
        from django.db import IntegrityError

        password = validated_data.pop('password', None)
        if not password:
            raise serializers.ValidationError({'password': 'Password is required'})
        email = validated_data.pop('email')
        try:
            return get_user_model().objects.create_user(email=email, password=password, **validated_data)
        except IntegrityError:
            raise Conflict('Email already registered')

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        user = super().update(instance, validated_data)
        if password:
            user.set_password(password)
            user.save()
        return user


class ProfileSerializer(serializers.ModelSerializer):
    """Fields a staff member may change on their own profile"""
    class Meta:
        model = get_user_model()
        fields = ['first_name', 'last_name', 'phone']


class UserLoginSerializer(serializers.Serializer):
    """Email and password login"""
    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, write_only=True)

    def validate(self, attrs):
        user = get_user_model().objects.filter(email__iexact=attrs['email']).first()
        if not user or not user.check_password(attrs['password']):
            raise Unauthorized('Invalid email or password')
        if not user.is_active:
            raise Forbidden('Account is deactivated, contact the administrator')
        attrs['user'] = user
        return attrs


class UserLogOutSerializer(serializers.Serializer):
    "Validates the refresh token handed in on logout"
    refresh = serializers.CharField(required=True, write_only=True, trim_whitespace=True)

    def validate_refresh(self, value):
        user = self.context['request'].user
        try:
            refresh_token = RefreshToken(value)
        except TokenError:
            raise serializers.ValidationError('Invalid or expired refresh token.')

        # user_id is serialised as a string by recent simplejwt releases
        if str(refresh_token.payload.get('user_id')) != str(user.pk):
            raise serializers.ValidationError('The refresh token does not belong to the current user.')
        self.context['token'] = refresh_token
        return value


class ChangePasswordSerializer(serializers.Serializer):
    """Change the caller's password"""
    current_password = serializers.CharField(required=True, write_only=True)
    new_password = serializers.CharField(required=True, write_only=True, min_length=8)

    def validate_current_password(self, value):
        user = self.context['request'].user
        if not user.check_password(value):
            raise Unauthorized('Current password is incorrect')
        return value

    def validate(self, attrs):
        if attrs['current_password'] == attrs['new_password']:
            raise serializers.ValidationError({'new_password': 'New password must differ from the current one'})
        validate_password(attrs['new_password'], self.context['request'].user)
        return attrs

    def save(self, **kwargs):
        user = self.context['request'].user
        user.set_password(self.validated_data['new_password'])
        user.save()
        return user
