from rest_framework import permissions

from utils.rbac import is_admin


class IsAdminOrReadOnly(permissions.BasePermission):
    """
    Anyone may read; only admins (staff, superusers or the admin role) may write.
    """

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_admin(request.user)
