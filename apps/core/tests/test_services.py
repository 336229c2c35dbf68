"""
Dashboard Metrics Tests
=======================

Test Cases:
1. Every counter with mixed data
2. Agent only counts their own rows
3. Any failing sub-query gives the all-zero summary
4. months_ago() date arithmetic

Run tests:
    python manage.py test apps.core.tests.test_services
"""

from datetime import date, timedelta
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError
from django.test import SimpleTestCase, TestCase
from django.utils import timezone

from apps.accounts.models import Profile
from apps.core.models import Organization
from apps.core.services import DashboardMetrics, get_dashboard_metrics, months_ago
from apps.prospects.models import Interaction, Property, Prospect
from apps.tasks.models import Task

User = get_user_model()


class DashboardMetricsTest(TestCase):

    def setUp(self):
        self.today = timezone.localdate()
        self.now = timezone.now()

        self.organization = Organization.objects.create(name='Agencia Centro')
        self.admin = User.objects.create_user(email='admin@test.com', password='testpass123')
        self.agent = User.objects.create_user(email='agente@test.com', password='testpass123')
        Profile.objects.create(user=self.admin, organization=self.organization, role=Profile.ROLE_ADMIN)
        Profile.objects.create(user=self.agent, organization=self.organization, role=Profile.ROLE_AGENT)

        # Hot prospects: closing stage and score above 70
        hot = Prospect.objects.create(organization=self.organization, name='Caliente', score=80,
                                      status=Prospect.STATUS_CLOSING, created_by=self.agent)
        Prospect.objects.create(organization=self.organization, name='Muy caliente', score=90,
                                status=Prospect.STATUS_CLOSING, created_by=self.admin)
        Prospect.objects.create(organization=self.organization, name='Tibio', score=60,
                                status=Prospect.STATUS_CLOSING, created_by=self.admin)
        Prospect.objects.create(organization=self.organization, name='Otra fase', score=95,
                                status=Prospect.STATUS_IN_PROGRESS, created_by=self.admin)

        # Tasks
        Task.objects.create(organization=self.organization, title='Vencida', due_date=self.today - timedelta(days=1),
                            created_by=self.agent)
        Task.objects.create(organization=self.organization, title='Hoy', due_date=self.today, created_by=self.admin)
        Task.objects.create(organization=self.organization, title='Hecha', due_date=self.today,
                            status=Task.STATUS_COMPLETED, created_by=self.admin)
        Task.objects.create(organization=self.organization, title='Mañana', due_date=self.today + timedelta(days=1),
                            created_by=self.admin)

        # Properties
        Property.objects.create(organization=self.organization, title='Ático', status=Property.STATUS_SOLD,
                                closed_at=self.today, created_by=self.admin)
        Property.objects.create(organization=self.organization, title='Chalet', status=Property.STATUS_SOLD,
                                closed_at=self.today - timedelta(days=30), created_by=self.admin)
        Property.objects.create(organization=self.organization, title='Local', status=Property.STATUS_SOLD,
                                closed_at=self.today - timedelta(days=200), created_by=self.admin)
        Property.objects.create(organization=self.organization, title='Piso', status=Property.STATUS_AVAILABLE,
                                closed_at=self.today, created_by=self.admin)

        # Interactions
        Interaction.objects.create(organization=self.organization, prospect=hot, impact=80,
                                   created_at=self.now - timedelta(days=1), created_by=self.agent)
        Interaction.objects.create(organization=self.organization, prospect=hot, impact=None,
                                   created_at=self.now - timedelta(days=2), created_by=self.admin)
        Interaction.objects.create(organization=self.organization, prospect=hot, impact=100,
                                   created_at=self.now - timedelta(days=10), created_by=self.admin)

    def test_admin_counters(self):
        metrics = get_dashboard_metrics(self.admin)

        self.assertEqual(metrics.hot_prospects, 2)
        self.assertEqual(metrics.hot_prospects_avg_score, 85)
        self.assertEqual(metrics.tasks_due, 2)
        self.assertEqual(metrics.tasks_due_today, 1)
        self.assertEqual(metrics.closed_properties, 2)
        self.assertEqual(metrics.immediate_opportunities, 1)
        self.assertEqual(metrics.interactions, 2)
        self.assertEqual(metrics.interactions_avg_impact, 40)

    def test_agent_counts_only_own_rows(self):
        metrics = get_dashboard_metrics(self.agent)

        self.assertEqual(metrics.hot_prospects, 1)
        self.assertEqual(metrics.hot_prospects_avg_score, 80)
        self.assertEqual(metrics.tasks_due, 1)
        self.assertEqual(metrics.tasks_due_today, 0)
        self.assertEqual(metrics.closed_properties, 0)
        self.assertEqual(metrics.interactions, 1)
        self.assertEqual(metrics.interactions_avg_impact, 80)

    def test_failure_in_any_counter_gives_all_zero(self):
        with patch('apps.core.services._closed_properties', side_effect=DatabaseError('timeout')):
            metrics = get_dashboard_metrics(self.admin)

        self.assertEqual(metrics, DashboardMetrics.zero())

    def test_anonymous_user_gets_zero_summary(self):
        self.assertEqual(get_dashboard_metrics(AnonymousUser()), DashboardMetrics.zero())

    def test_as_dict_keys(self):
        self.assertEqual(set(DashboardMetrics.zero().as_dict()), {
            'hot_prospects', 'hot_prospects_avg_score', 'tasks_due', 'tasks_due_today',
            'closed_properties', 'immediate_opportunities', 'interactions', 'interactions_avg_impact',
        })


class MonthsAgoTest(SimpleTestCase):

    def test_plain_subtraction(self):
        self.assertEqual(months_ago(date(2025, 5, 15), 3), date(2025, 2, 15))

    def test_crosses_year(self):
        self.assertEqual(months_ago(date(2025, 1, 15), 3), date(2024, 10, 15))

    def test_clamps_to_shorter_month(self):
        self.assertEqual(months_ago(date(2025, 5, 31), 3), date(2025, 2, 28))
