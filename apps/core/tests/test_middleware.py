"""
Tests for SessionRouteMiddleware
"""

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.http import HttpResponse
from django.test import RequestFactory, TestCase, override_settings

from apps.core.middleware import SessionRouteMiddleware

User = get_user_model()


@override_settings(LOGIN_URL='/login/', SIGNUP_URL='/signup/', LOGIN_REDIRECT_URL='/dashboard/',
                   PROTECTED_PATH_PREFIX='/dashboard')
class SessionRouteMiddlewareTest(TestCase):

    def setUp(self):
        self.factory = RequestFactory()
        self.middleware = SessionRouteMiddleware(lambda request: HttpResponse('ok'))
        self.user = User.objects.create_user(email='ana@test.com', password='testpass123')

    def _request(self, path, user):
        request = self.factory.get(path)
        request.user = user
        return request

    def test_anonymous_protected_path_redirects_to_login(self):
        for path in ('/dashboard', '/dashboard/', '/dashboard/prospects/', '/dashboard/tasks/'):
            with self.subTest(path=path):
                response = self.middleware(self._request(path, AnonymousUser()))

                self.assertEqual(response.status_code, 302)
                self.assertEqual(response.url, f'/login/?next={path}')

    def test_query_string_is_kept_in_next(self):
        response = self.middleware(self._request('/dashboard/prospects/?query=ana', AnonymousUser()))

        self.assertEqual(response.url, '/login/?next=/dashboard/prospects/%3Fquery%3Dana')

    def test_anonymous_public_paths_pass(self):
        for path in ('/login/', '/signup/', '/'):
            with self.subTest(path=path):
                response = self.middleware(self._request(path, AnonymousUser()))

                self.assertEqual(response.content, b'ok')

    def test_authenticated_entry_paths_redirect_to_dashboard(self):
        for path in ('/login/', '/signup/', '/'):
            with self.subTest(path=path):
                response = self.middleware(self._request(path, self.user))

                self.assertEqual(response.status_code, 302)
                self.assertEqual(response.url, '/dashboard/')

    def test_authenticated_protected_path_passes(self):
        response = self.middleware(self._request('/dashboard/prospects/', self.user))

        self.assertEqual(response.content, b'ok')

    def test_other_paths_are_untouched(self):
        response = self.middleware(self._request('/api/tasks/', AnonymousUser()))

        self.assertEqual(response.content, b'ok')

    def test_full_stack_redirect(self):
        response = self.client.get('/dashboard/')

        self.assertRedirects(response, '/login/?next=/dashboard/', fetch_redirect_response=False)
