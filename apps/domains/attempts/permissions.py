# PATH: apps/domains/attempts/permissions.py
from __future__ import annotations

from rest_framework.permissions import BasePermission


def learner_id(request) -> str:
    """Attempts are keyed by the authenticated user's primary key (as text)."""
    return str(request.user.pk)


class IsAdminOrStaff(BasePermission):
    """
    Author / operator only (preview grading, grading audit).
    """

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and (user.is_superuser or user.is_staff)
        )
