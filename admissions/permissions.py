from rest_framework import permissions


class IsAdmissionOfficer(permissions.BasePermission):
    """
    Allows access to staff, Admission Officers and Admins.
    Strictly blocks Candidates.
    """
    def has_permission(self, request, view):
        # 1. User must be logged in
        if not request.user or not request.user.is_authenticated:
            return False

        # 2. Staff flag or an admissions role
        return getattr(request.user, 'can_manage_admissions', False)


class IsCandidate(permissions.BasePermission):
    """Logged-in user with a candidate profile."""
    message = "Only registered candidates can access this resource."

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return getattr(request.user, 'candidate', None) is not None
