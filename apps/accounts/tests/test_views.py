"""
Account Views Tests
===================

Test Coverage:
1. login_view - valid / invalid credentials, next redirect
2. signup_view - account creation with metadata, validation errors
3. logout_view

Run tests:
    python manage.py test apps.accounts.tests.test_views
"""

from django.contrib.auth import get_user_model
from django.test import Client, TestCase
from django.urls import reverse

from apps.accounts.models import Profile

User = get_user_model()


class LoginViewTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(email='ana@test.com', password='testpass123', first_name='Ana')

    def test_login_page_renders(self):
        response = self.client.get(reverse('accounts:login'))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'accounts/login.html')

    def test_valid_credentials_redirect_to_dashboard(self):
        response = self.client.post(reverse('accounts:login'), {
            'email': 'ANA@test.com',
            'password': 'testpass123',
        })

        self.assertRedirects(response, reverse('core:dashboard'), fetch_redirect_response=False)

    def test_invalid_credentials_stay_on_login(self):
        response = self.client.post(reverse('accounts:login'), {
            'email': 'ana@test.com',
            'password': 'wrong-password',
        })

        self.assertEqual(response.status_code, 200)
        self.assertNotIn('_auth_user_id', self.client.session)

    def test_safe_next_url_is_honoured(self):
        url = reverse('accounts:login') + '?next=/dashboard/tasks/'

        response = self.client.post(url, {'email': 'ana@test.com', 'password': 'testpass123'})

        self.assertRedirects(response, '/dashboard/tasks/', fetch_redirect_response=False)

    def test_external_next_url_is_ignored(self):
        url = reverse('accounts:login') + '?next=https://evil.example.com/'

        response = self.client.post(url, {'email': 'ana@test.com', 'password': 'testpass123'})

        self.assertRedirects(response, reverse('core:dashboard'), fetch_redirect_response=False)


class SignupViewTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.data = {
            'first_name': 'Lucía',
            'last_name': 'Pérez',
            'email': 'lucia@test.com',
            'phone': '600111222',
            'city': 'Málaga',
            'country': 'España',
            'company_name': 'Costa Homes',
            'password': 'S3guraPassw0rd',
            'confirm_password': 'S3guraPassw0rd',
            'accept_privacy': 'on',
        }

    def test_signup_creates_user_with_metadata(self):
        """
        Test: Successful sign-up

        Expected: User created with metadata, no profile yet, redirect to login
        """
        response = self.client.post(reverse('accounts:signup'), self.data)

        self.assertRedirects(response, reverse('accounts:login'), fetch_redirect_response=False)

        user = User.objects.get(email='lucia@test.com')
        self.assertEqual(user.metadata['company_name'], 'Costa Homes')
        self.assertEqual(user.metadata['city'], 'Málaga')
        self.assertFalse(Profile.objects.filter(user=user).exists())

    def test_password_mismatch(self):
        self.data['confirm_password'] = 'OtraCosa123'

        response = self.client.post(reverse('accounts:signup'), self.data)

        self.assertEqual(response.status_code, 200)
        self.assertIn('confirm_password', response.context['form'].errors)
        self.assertFalse(User.objects.filter(email='lucia@test.com').exists())

    def test_duplicate_email(self):
        User.objects.create_user(email='lucia@test.com', password='testpass123')

        response = self.client.post(reverse('accounts:signup'), self.data)

        self.assertIn('email', response.context['form'].errors)

    def test_privacy_must_be_accepted(self):
        del self.data['accept_privacy']

        response = self.client.post(reverse('accounts:signup'), self.data)

        self.assertIn('accept_privacy', response.context['form'].errors)


class LogoutViewTest(TestCase):

    def test_logout_ends_session(self):
        user = User.objects.create_user(email='ana@test.com', password='testpass123')
        self.client.force_login(user)

        response = self.client.post(reverse('accounts:logout'))

        self.assertRedirects(response, reverse('accounts:login'), fetch_redirect_response=False)
        self.assertNotIn('_auth_user_id', self.client.session)
