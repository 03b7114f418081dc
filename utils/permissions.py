"""
Role based permission classes
"""
from rest_framework import permissions

STAFF_ROLES = ('admin', 'doctor', 'receptionist')


def _role(request):
    user = request.user
    if not (user and user.is_authenticated):
        return None
    return getattr(user, 'role', None)


class IsSystemAdmin(permissions.BasePermission):
    """Clinic administrators only"""
    def has_permission(self, request, view):
        return _role(request) == 'admin'


class IsClinicalStaff(permissions.BasePermission):
    """Admins and doctors (clinical data writers)"""
    def has_permission(self, request, view):
        return _role(request) in ('admin', 'doctor')


class IsClinicStaff(permissions.BasePermission):
    """Any staff role"""
    def has_permission(self, request, view):
        return _role(request) in STAFF_ROLES


class IsAdminOrReadOnly(permissions.BasePermission):
    """Staff may read, only admins may write"""
    def has_permission(self, request, view):
        role = _role(request)
        if request.method in permissions.SAFE_METHODS:
            return role in STAFF_ROLES
        return role == 'admin'


class IsClinicalStaffOrReadOnly(permissions.BasePermission):
    """Staff may read, admins and doctors may write"""
    def has_permission(self, request, view):
        role = _role(request)
        if request.method in permissions.SAFE_METHODS:
            return role in STAFF_ROLES
        return role in ('admin', 'doctor')
