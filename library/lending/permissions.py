from rest_framework import permissions


class IsLibrarian(permissions.BasePermission):
    message = "Forbidden"

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_librarian)


class IsMember(permissions.BasePermission):
    message = "Forbidden"

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_member)


class IsLibrarianForListMemberForCreate(permissions.BasePermission):
    """Librarians read the loan list, members post new borrows."""

    message = "Forbidden"

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return IsLibrarian().has_permission(request, view)
        return IsMember().has_permission(request, view)
