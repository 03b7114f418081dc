from django.urls import path
from .views import (
    AdminUserActivate,
    AdminUserDeactivate,
    AdminUserList,
    ChangePasswordView,
    LoginView,
    Logout,
    MeView,
    RefreshTokenView,
    RegisterView,
)

urlpatterns = [
    path('login/', LoginView.as_view(), name='login'),
    path('refresh/', RefreshTokenView.as_view(), name='refresh'),
    path('logout/', Logout.as_view(), name='logout'),
    path('me/', MeView.as_view(), name='me'),
    path('change-password/', ChangePasswordView.as_view(), name='change_password'),
    # admin only
    path('register/', RegisterView.as_view(), name='register'),
    path('users/', AdminUserList.as_view(), name='user_list'),
    path('users/<int:pk>/activate/', AdminUserActivate.as_view(), name='user_activate'),
    path('users/<int:pk>/deactivate/', AdminUserDeactivate.as_view(), name='user_deactivate'),
]
