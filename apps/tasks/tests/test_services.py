"""
Task Services Tests
===================

Test Coverage:
1. get_tasks - filters, ordering, defaults, scope, no demo fallback
2. get_task_stats
3. get_recent_tasks
4. update_task / complete_task

Run tests:
    python manage.py test apps.tasks.tests.test_services
"""

from datetime import timedelta
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError
from django.test import TestCase
from django.utils import timezone

from apps.accounts.models import Profile
from apps.core.models import Organization
from apps.prospects.models import Prospect
from apps.tasks.models import Task
from apps.tasks.services import complete_task, get_recent_tasks, get_task_stats, get_tasks, update_task

User = get_user_model()


class TaskServiceTestCase(TestCase):

    def setUp(self):
        self.today = timezone.localdate()
        self.organization = Organization.objects.create(name='Agencia Centro')

        self.admin = User.objects.create_user(email='admin@test.com', password='testpass123')
        self.agent = User.objects.create_user(email='agente@test.com', password='testpass123')
        Profile.objects.create(user=self.admin, organization=self.organization, role=Profile.ROLE_ADMIN)
        Profile.objects.create(user=self.agent, organization=self.organization, role=Profile.ROLE_AGENT)

        self.prospect = Prospect.objects.create(organization=self.organization, name='Ana García',
                                                email='ana@correo.es', created_by=self.agent)

        self.call = Task.objects.create(
            organization=self.organization, title='Llamar a Ana', due_date=self.today + timedelta(days=2),
            type='Llamada', priority=Task.PRIORITY_HIGH, prospect=self.prospect, created_by=self.agent,
        )
        self.visit = Task.objects.create(
            organization=self.organization, title='Visita piso centro', description='Llevar llaves',
            due_date=self.today - timedelta(days=1), type='Visita', priority=Task.PRIORITY_LOW,
            created_by=self.admin,
        )
        self.untyped = Task.objects.create(
            organization=self.organization, title='Revisar contrato', due_date=self.today,
            type=None, priority=None, created_by=self.admin,
        )
        self.done = Task.objects.create(
            organization=self.organization, title='Enviar dossier', due_date=self.today - timedelta(days=3),
            status=Task.STATUS_COMPLETED, created_by=self.admin,
        )


class GetTasksTest(TaskServiceTestCase):

    def test_ordered_by_due_date(self):
        result = get_tasks(self.admin)

        self.assertTrue(result.is_live)
        self.assertEqual(
            [row['title'] for row in result],
            ['Enviar dossier', 'Visita piso centro', 'Revisar contrato', 'Llamar a Ana'],
        )

    def test_defaults_for_missing_values(self):
        row = next(row for row in get_tasks(self.admin) if row['title'] == 'Revisar contrato')

        self.assertEqual(row['type'], 'Llamada')
        self.assertEqual(row['priority'], 'Media')
        self.assertEqual(row['prospect_name'], 'Sin prospecto')
        self.assertEqual(row['prospect_initials'], 'SP')
        self.assertIsNone(row['prospect_email'])
        self.assertEqual(row['due']['text'], 'Hoy')
        self.assertFalse(row['overdue'])

    def test_overdue_flag(self):
        rows = {row['title']: row for row in get_tasks(self.admin)}

        self.assertTrue(rows['Visita piso centro']['overdue'])
        self.assertFalse(rows['Enviar dossier']['overdue'])
        self.assertFalse(rows['Llamar a Ana']['overdue'])

    def test_prospect_data(self):
        row = next(row for row in get_tasks(self.admin) if row['title'] == 'Llamar a Ana')

        self.assertEqual(row['prospect_name'], 'Ana García')
        self.assertEqual(row['prospect_initials'], 'AG')
        self.assertEqual(row['prospect_email'], 'ana@correo.es')

    def test_type_and_priority_filters(self):
        self.assertEqual([r['title'] for r in get_tasks(self.admin, type='Visita')], ['Visita piso centro'])
        self.assertEqual([r['title'] for r in get_tasks(self.admin, priority='Alta')], ['Llamar a Ana'])

    def test_text_filter_over_title_description_and_prospect(self):
        self.assertEqual([r['title'] for r in get_tasks(self.admin, query='llaves')], ['Visita piso centro'])
        self.assertEqual([r['title'] for r in get_tasks(self.admin, query='ana garc')], ['Llamar a Ana'])

    def test_agent_sees_only_own_tasks(self):
        self.assertEqual([r['title'] for r in get_tasks(self.agent)], ['Llamar a Ana'])

    def test_no_demo_fallback(self):
        self.assertTrue(get_tasks(AnonymousUser()).is_empty)

        with patch('apps.tasks.services.build_tenant_scope', side_effect=DatabaseError('down')):
            self.assertTrue(get_tasks(self.admin).is_empty)


class TaskStatsTest(TaskServiceTestCase):

    def test_counters(self):
        Task.objects.filter(pk=self.done.pk).update(updated_at=timezone.now() - timedelta(days=20))
        Task.objects.create(organization=self.organization, title='Hecha ayer', status=Task.STATUS_COMPLETED,
                            created_by=self.admin)

        stats = get_task_stats(self.admin)

        self.assertEqual(stats, {'total_completed': 2, 'total_pending': 3, 'completed_last_7_days': 1})

    def test_agent_counters(self):
        self.assertEqual(get_task_stats(self.agent), {'total_completed': 0, 'total_pending': 1, 'completed_last_7_days': 0})

    def test_failure_gives_zeros(self):
        with patch('apps.tasks.services.build_tenant_scope', side_effect=DatabaseError('down')):
            stats = get_task_stats(self.admin)

        self.assertEqual(stats, {'total_completed': 0, 'total_pending': 0, 'completed_last_7_days': 0})


class RecentTasksTest(TaskServiceTestCase):

    def test_open_tasks_soonest_first(self):
        tasks = get_recent_tasks(self.admin)

        self.assertEqual([t['title'] for t in tasks], ['Visita piso centro', 'Revisar contrato', 'Llamar a Ana'])

    def test_limit(self):
        self.assertEqual(len(get_recent_tasks(self.admin, limit=2)), 2)

    def test_task_without_prospect_has_blank_name(self):
        row = next(t for t in get_recent_tasks(self.admin) if t['title'] == 'Revisar contrato')

        self.assertEqual(row['prospect_name'], '')
        self.assertEqual(row['prospect_initials'], '')


class UpdateTaskTest(TaskServiceTestCase):

    def test_complete_task(self):
        result = complete_task(self.admin, self.visit.pk)

        self.assertTrue(result.success)
        self.visit.refresh_from_db()
        self.assertEqual(self.visit.status, Task.STATUS_COMPLETED)

    def test_agent_cannot_complete_admin_task(self):
        result = complete_task(self.agent, self.visit.pk)

        self.assertEqual(result.error, 'Task not found')
        self.visit.refresh_from_db()
        self.assertEqual(self.visit.status, Task.STATUS_PENDING)

    def test_update_only_editable_fields(self):
        new_date = self.today + timedelta(days=10)

        result = update_task(self.agent, self.call.pk, {'due_date': new_date, 'created_by_id': self.admin.pk})

        self.assertTrue(result.success)
        self.call.refresh_from_db()
        self.assertEqual(self.call.due_date, new_date)
        self.assertEqual(self.call.created_by, self.agent)

    def test_no_fields(self):
        self.assertEqual(update_task(self.admin, self.call.pk, {}).error, 'No fields to update')

    def test_anonymous(self):
        self.assertEqual(complete_task(AnonymousUser(), self.call.pk).error, 'No authentication')
