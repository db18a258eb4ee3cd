"""Permission classes for price moderation endpoints."""
from rest_framework.permissions import BasePermission


class IsModerator(BasePermission):
    """
    Allows access only to active staff users.

    Usage:
        @permission_classes([IsAuthenticated, IsModerator])
    """

    message = 'Only moderators can manage price reports.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_moderator)
