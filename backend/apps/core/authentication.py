"""
Shared-secret authentication for scheduler callbacks.
"""
import hmac

from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from rest_framework import authentication, exceptions


class CronSecretAuthentication(authentication.BaseAuthentication):
    """
    Authenticates `Authorization: Bearer <CRON_SECRET>`.

    A missing header leaves the request unauthenticated. A wrong secret is
    rejected outright. Both produce a 401 response.
    """
    keyword = 'Bearer'
    auth_marker = 'cron'

    def authenticate(self, request):
        header = authentication.get_authorization_header(request).split()

        if not header or header[0].lower() != self.keyword.lower().encode():
            return None

        if len(header) != 2:
            raise exceptions.AuthenticationFailed('Invalid token')

        expected = getattr(settings, 'CRON_SECRET', '')
        if not expected:
            raise exceptions.AuthenticationFailed('Cron secret is not configured')

        if not hmac.compare_digest(header[1], expected.encode()):
            raise exceptions.AuthenticationFailed('Invalid token')

        return (AnonymousUser(), self.auth_marker)

    def authenticate_header(self, request):
        return self.keyword
