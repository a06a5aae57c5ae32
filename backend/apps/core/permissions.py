from rest_framework import permissions

from .authentication import CronSecretAuthentication


class IsCronCaller(permissions.BasePermission):
    """
    Allow only requests authenticated with the cron shared secret.
    """
    message = 'Unauthorized'

    def has_permission(self, request, view):
        return request.auth == CronSecretAuthentication.auth_marker
