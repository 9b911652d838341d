"""Permission classes shared by the catalogue apps."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsStaffOrReadOnly(permissions.BasePermission):
    """Anyone may read; only staff and superusers may write."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return bool(getattr(user, "is_staff", False) or getattr(user, "is_superuser", False))
