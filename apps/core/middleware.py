"""
Route protection

Rules (checked on every request, after AuthenticationMiddleware):
1. Anonymous user under PROTECTED_PATH_PREFIX → redirect to LOGIN_URL?next=<path>
2. Logged-in user on LOGIN_URL, SIGNUP_URL or '/' → redirect to LOGIN_REDIRECT_URL

Everything else passes through untouched.
"""

import logging

from django.conf import settings
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect

logger = logging.getLogger(__name__)


class SessionRouteMiddleware:

    def __init__(self, get_response):
        self.get_response = get_response
        self.protected_prefix = getattr(settings, 'PROTECTED_PATH_PREFIX', '/dashboard')
        self.login_url = settings.LOGIN_URL
        self.home_url = settings.LOGIN_REDIRECT_URL
        self.entry_paths = {
            self.login_url,
            getattr(settings, 'SIGNUP_URL', '/signup/'),
            '/',
        }

    def __call__(self, request):
        response = self.check_route(request)
        if response is not None:
            return response
        return self.get_response(request)

    def check_route(self, request):
        """
        Returns:
            HttpResponseRedirect or None (None = let the request through)
        """
        user = getattr(request, 'user', None)
        is_authenticated = bool(user and user.is_authenticated)
        path = request.path

        if not is_authenticated and path.startswith(self.protected_prefix):
            logger.debug(f"Anonymous request to {path}, redirecting to login")
            return redirect_to_login(request.get_full_path(), self.login_url)

        if is_authenticated and path in self.entry_paths:
            return redirect(self.home_url)

        return None
