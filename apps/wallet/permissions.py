"""
Custom permission classes for wallet app.

Deposits and withdrawals are reviewed by staff only.
"""
from rest_framework.permissions import BasePermission


class IsStaffReviewer(BasePermission):
    """
    Allow only staff users to approve, reject or pay out requests.

    Usage:
        def get_permissions(self):
            if self.action in ['approve', 'reject']:
                return [IsAuthenticated(), IsStaffReviewer()]
            return super().get_permissions()
    """

    message = 'Only staff can review wallet requests.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_staff)
