"""
Authentication and staff account views
"""
import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login
from django.db.models import Q
from rest_framework import generics
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView

from utils.exceptions import BadRequest, NotFound
from utils.permissions import IsSystemAdmin
from utils.response import success_response, paginated_response
from .serializers import (
    ChangePasswordSerializer,
    ProfileSerializer,
    UserLoginSerializer,
    UserLogOutSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


class LoginView(APIView):
    """
    Email + password login, answers with a JWT pair
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = UserLoginSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']

        refresh = RefreshToken.for_user(user)
        update_last_login(None, user)
        logger.info('User %s logged in', user.email)

        return success_response(
            data={
                'token': str(refresh.access_token),
                'refresh_token': str(refresh),
                'expires_in': int(api_settings.ACCESS_TOKEN_LIFETIME.total_seconds()),
                'user': UserSerializer(user).data,
            },
            message='Login successful',
        )


class RefreshTokenView(TokenRefreshView):
    """
    Refresh the access token and rotate the refresh token
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        token_data = serializer.validated_data
        return success_response(
            data={
                'token': token_data.get('access'),
                'refresh_token': token_data.get('refresh') or request.data.get('refresh'),
                'expires_in': int(api_settings.ACCESS_TOKEN_LIFETIME.total_seconds()),
            },
            message='Token refreshed',
        )


class Logout(APIView):
    """Blacklist the caller's refresh token"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = UserLogOutSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        serializer.context['token'].blacklist()
        return success_response(message='Logout successful')


class MeView(generics.RetrieveUpdateAPIView):
    """Current user's profile"""
    permission_classes = [IsAuthenticated]
    serializer_class = ProfileSerializer

    def get_object(self):
        return self.request.user

    def get(self, request, *args, **kwargs):
        return success_response(UserSerializer(request.user).data)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(request.user, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return success_response(UserSerializer(request.user).data, 'Profile updated')


class ChangePasswordView(APIView):
    """Change the current user's password"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info('User %s changed their password', request.user.email)
        return success_response(message='Password changed')


class RegisterView(generics.CreateAPIView):
    """
    Create a staff account (administrators only)
    """
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsSystemAdmin]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return success_response(UserSerializer(user).data, 'User created', 201)


class AdminUserList(APIView):
    """Staff list with role / is_active / search filters"""
    permission_classes = [IsAuthenticated, IsSystemAdmin]

    def get(self, request):
        users = get_user_model().objects.all()
        role = request.query_params.get('role')
        is_active = request.query_params.get('is_active')
        search = request.query_params.get('search')
        if role:
            users = users.filter(role=role)
        if is_active in ('true', 'false'):
            users = users.filter(is_active=is_active == 'true')
        if search:
            users = users.filter(
                Q(first_name__icontains=search) | Q(last_name__icontains=search) | Q(email__icontains=search)
            )
        return paginated_response(users, UserSerializer, request)


class _AdminUserToggle(APIView):
    permission_classes = [IsAuthenticated, IsSystemAdmin]
    target_state = True
    done_message = ''

    def post(self, request, pk):
        user = get_user_model().objects.filter(pk=pk).first()
        if user is None:
            raise NotFound('User not found')
        if user.pk == request.user.pk:
            raise BadRequest('You cannot change the state of your own account')
        if user.is_active == self.target_state:
            raise BadRequest(f"User is already {'active' if self.target_state else 'inactive'}")
        user.is_active = self.target_state
        user.save(update_fields=['is_active', 'updated_at'])
        return success_response(UserSerializer(user).data, self.done_message)


class AdminUserActivate(_AdminUserToggle):
    """Re-enable a staff account"""
    target_state = True
    done_message = 'User activated'


class AdminUserDeactivate(_AdminUserToggle):
    """Disable a staff account"""
    target_state = False
    done_message = 'User deactivated'
