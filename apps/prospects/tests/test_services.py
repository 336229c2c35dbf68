"""
Prospect Services Tests
=======================

Test Coverage:
1. get_prospects_by_status - Kanban buckets, ordering, interaction data
2. get_prospects - live / fallback / empty listing, filters
3. update_prospect - editable fields, tenant scope, failure texts
4. get_recent_interactions

Run tests:
    python manage.py test apps.prospects.tests.test_services
"""

from datetime import timedelta
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError
from django.test import TestCase
from django.utils import timezone

from apps.accounts.models import Profile
from apps.core.formatting import CTA_NONE_TEXT, CTA_VISIT_TEXT
from apps.core.models import Organization
from apps.core.results import ListingResult
from apps.prospects.models import Interaction, Prospect
from apps.prospects.services import (
    get_prospects,
    get_prospects_by_status,
    get_recent_interactions,
    update_prospect,
)

User = get_user_model()


class ProspectServiceTestCase(TestCase):
    """Organization with one admin, one agent and a few prospects"""

    def setUp(self):
        self.now = timezone.now()
        self.organization = Organization.objects.create(name='Agencia Centro')
        self.other_organization = Organization.objects.create(name='Agencia Rival')

        self.admin = User.objects.create_user(email='admin@test.com', password='testpass123')
        self.agent = User.objects.create_user(email='agente@test.com', password='testpass123')
        Profile.objects.create(user=self.admin, organization=self.organization, role=Profile.ROLE_ADMIN)
        Profile.objects.create(user=self.agent, organization=self.organization, role=Profile.ROLE_AGENT)

        self.ana = Prospect.objects.create(
            organization=self.organization, name='Ana García', email='ana@correo.es', phone='600111222',
            location='Madrid, España', score=85, status=Prospect.STATUS_CLOSING, created_by=self.agent,
        )
        self.bruno = Prospect.objects.create(
            organization=self.organization, name='Bruno Díaz', email='bruno@correo.es',
            location='Sevilla, España', score=45, status=Prospect.STATUS_INITIAL, created_by=self.admin,
        )
        self.carla = Prospect.objects.create(
            organization=self.organization, name='Carla Ruiz', score=None,
            status=Prospect.STATUS_IN_PROGRESS, created_by=self.admin,
        )
        self.archived = Prospect.objects.create(
            organization=self.organization, name='Dario Sin Fase', score=99,
            status='Archivado', created_by=self.admin,
        )
        Prospect.objects.create(
            organization=self.other_organization, name='Ajeno', score=100,
            status=Prospect.STATUS_INITIAL,
        )

        Interaction.objects.create(organization=self.organization, prospect=self.ana, type='Llamada', impact=30,
                                   cta='Enviar dossier', created_at=self.now - timedelta(days=3), created_by=self.agent)
        Interaction.objects.create(organization=self.organization, prospect=self.ana, type='Visita', impact=90,
                                   cta='Preparar oferta', created_at=self.now - timedelta(hours=2), created_by=self.agent)


class ProspectsByStatusTest(ProspectServiceTestCase):

    def test_buckets_by_exact_status(self):
        kanban = get_prospects_by_status(self.admin)

        self.assertEqual([p['name'] for p in kanban['fase_inicial']], ['Bruno Díaz'])
        self.assertEqual([p['name'] for p in kanban['en_proceso']], ['Carla Ruiz'])
        self.assertEqual([p['name'] for p in kanban['fase_cierre']], ['Ana García'])

    def test_unknown_status_is_in_no_bucket(self):
        kanban = get_prospects_by_status(self.admin)

        names = [p['name'] for bucket in kanban.values() for p in bucket]
        self.assertNotIn('Dario Sin Fase', names)
        self.assertNotIn('Ajeno', names)

    def test_lowercase_initial_stage_is_not_on_the_board(self):
        Prospect.objects.create(organization=self.organization, name='Minúscula',
                                status=Prospect.STATUS_TABLE_INITIAL, created_by=self.admin)

        kanban = get_prospects_by_status(self.admin)

        self.assertNotIn('Minúscula', [p['name'] for p in kanban['fase_inicial']])

    def test_card_uses_latest_interaction(self):
        card = get_prospects_by_status(self.admin)['fase_cierre'][0]

        self.assertEqual(card['initials'], 'AG')
        self.assertEqual(card['total_interactions'], 2)
        self.assertEqual(card['cta'], 'Preparar oferta')
        self.assertEqual(card['last_interaction_text'], 'Hoy')
        self.assertEqual(card['urgency_score'], 85)

    def test_card_without_interactions(self):
        card = get_prospects_by_status(self.admin)['fase_inicial'][0]

        self.assertEqual(card['total_interactions'], 0)
        self.assertIsNone(card['cta'])
        self.assertEqual(card['last_interaction_text'], 'No hay interacciones')

    def test_null_score_counts_as_zero(self):
        card = get_prospects_by_status(self.admin)['en_proceso'][0]

        self.assertEqual(card['urgency_score'], 0)

    def test_agent_sees_only_own_prospects(self):
        kanban = get_prospects_by_status(self.agent)

        self.assertEqual([p['name'] for p in kanban['fase_cierre']], ['Ana García'])
        self.assertEqual(kanban['fase_inicial'], [])
        self.assertEqual(kanban['en_proceso'], [])

    def test_failure_gives_empty_buckets(self):
        with patch('apps.prospects.services.build_tenant_scope', side_effect=DatabaseError('down')):
            kanban = get_prospects_by_status(self.admin)

        self.assertEqual(kanban, {'fase_inicial': [], 'en_proceso': [], 'fase_cierre': []})

    def test_no_profile_gives_empty_buckets(self):
        kanban = get_prospects_by_status(AnonymousUser())

        self.assertEqual(kanban, {'fase_inicial': [], 'en_proceso': [], 'fase_cierre': []})


class GetProspectsTest(ProspectServiceTestCase):

    def test_live_rows_ordered_by_score(self):
        result = get_prospects(self.admin)

        self.assertTrue(result.is_live)
        self.assertEqual(
            [row['name'] for row in result],
            ['Dario Sin Fase', 'Ana García', 'Bruno Díaz', 'Carla Ruiz'],
        )

    def test_row_shape(self):
        row = next(row for row in get_prospects(self.admin) if row['name'] == 'Ana García')

        self.assertEqual(row['initials'], 'AG')
        self.assertEqual(row['interaction_count'], 2)
        self.assertEqual(row['last_interaction_text'], 'Hoy')
        self.assertEqual(row['score_color'], 'text-green-600')
        self.assertEqual(row['cta_text'], CTA_VISIT_TEXT)

    def test_missing_values_get_defaults(self):
        row = next(row for row in get_prospects(self.admin) if row['name'] == 'Carla Ruiz')

        self.assertEqual(row['score'], 0)
        self.assertEqual(row['location'], '-')
        self.assertEqual(row['last_interaction_text'], 'No ha habido interacciones')
        self.assertEqual(row['cta_text'], CTA_NONE_TEXT)

    def test_status_filter_in_query(self):
        result = get_prospects(self.admin, status=[Prospect.STATUS_INITIAL, Prospect.STATUS_IN_PROGRESS])

        self.assertEqual({row['name'] for row in result}, {'Bruno Díaz', 'Carla Ruiz'})

    def test_text_filter_matches_name_email_or_phone(self):
        self.assertEqual([r['name'] for r in get_prospects(self.admin, query='bruno@')], ['Bruno Díaz'])
        self.assertEqual([r['name'] for r in get_prospects(self.admin, query='600111')], ['Ana García'])
        self.assertEqual([r['name'] for r in get_prospects(self.admin, query='  CARLA ')], ['Carla Ruiz'])

    def test_location_and_score_range(self):
        result = get_prospects(self.admin, location='españa', score_range=(40, 90))

        self.assertEqual([row['name'] for row in result], ['Ana García', 'Bruno Díaz'])

    def test_filters_removing_everything_give_empty(self):
        result = get_prospects(self.admin, query='nadie se llama así')

        self.assertTrue(result.is_empty)
        self.assertEqual(result.rows, [])

    def test_agent_listing_is_scoped(self):
        result = get_prospects(self.agent)

        self.assertEqual([row['name'] for row in result], ['Ana García'])

    def test_no_profile_gives_demo_rows(self):
        """
        Test: Listing without a resolvable profile

        Expected: The 10 demo prospects, each with a CTA text
        """
        result = get_prospects(AnonymousUser())

        self.assertTrue(result.is_fallback)
        self.assertEqual(len(result), 10)
        for row in result:
            self.assertTrue(row['cta_text'])
        self.assertEqual(result.rows[0]['name'], 'Ertha Matiebe')
        self.assertTrue(result.rows[0]['last_interaction_text'].lower().startswith('hace'))
        self.assertEqual(result.rows[1]['last_interaction_text'], 'No ha habido interacciones')

    def test_query_error_gives_demo_rows(self):
        with patch('apps.prospects.services.build_tenant_scope', side_effect=DatabaseError('down')):
            result = get_prospects(self.admin)

        self.assertEqual(result.source, ListingResult.FALLBACK)
        self.assertEqual(len(result), 10)

    def test_organization_without_prospects_gives_demo_rows(self):
        Prospect.objects.filter(organization=self.organization).delete()

        result = get_prospects(self.admin)

        self.assertTrue(result.is_fallback)

    def test_status_filter_without_matches_gives_demo_rows(self):
        result = get_prospects(self.admin, status=Prospect.STATUS_TABLE_ADVANCED)

        self.assertTrue(result.is_fallback)


class UpdateProspectTest(ProspectServiceTestCase):

    def test_admin_updates_any_prospect_of_organization(self):
        result = update_prospect(self.admin, self.ana.pk, {'status': Prospect.STATUS_IN_PROGRESS, 'phone': '611'})

        self.assertTrue(result.success)
        self.ana.refresh_from_db()
        self.assertEqual(self.ana.status, Prospect.STATUS_IN_PROGRESS)
        self.assertEqual(self.ana.phone, '611')

    def test_non_editable_fields_are_ignored(self):
        result = update_prospect(self.admin, self.ana.pk, {'name': 'Ana G.', 'score': 1, 'organization_id': None})

        self.assertTrue(result.success)
        self.ana.refresh_from_db()
        self.assertEqual(self.ana.name, 'Ana G.')
        self.assertEqual(self.ana.score, 85)

    def test_no_editable_fields(self):
        result = update_prospect(self.admin, self.ana.pk, {'score': 10})

        self.assertFalse(result.success)
        self.assertEqual(result.error, 'No fields to update')

    def test_agent_cannot_update_colleague_prospect(self):
        result = update_prospect(self.agent, self.bruno.pk, {'name': 'Hackeado'})

        self.assertFalse(result.success)
        self.assertEqual(result.error, 'Prospect not found')
        self.bruno.refresh_from_db()
        self.assertEqual(self.bruno.name, 'Bruno Díaz')

    def test_agent_updates_own_prospect(self):
        result = update_prospect(self.agent, self.ana.pk, {'substatus': 'Seguimiento'})

        self.assertTrue(result.success)

    def test_other_organization_is_not_found(self):
        foreign = Prospect.objects.get(name='Ajeno')

        result = update_prospect(self.admin, foreign.pk, {'name': 'Mío'})

        self.assertEqual(result.error, 'Prospect not found')

    def test_anonymous(self):
        result = update_prospect(AnonymousUser(), self.ana.pk, {'name': 'X'})

        self.assertEqual(result.error, 'No authentication')

    def test_store_error_is_returned(self):
        with patch('apps.prospects.services.build_tenant_scope', side_effect=DatabaseError('read only')):
            result = update_prospect(self.admin, self.ana.pk, {'name': 'X'})

        self.assertFalse(result.success)
        self.assertIn('read only', result.error)


class RecentInteractionsTest(ProspectServiceTestCase):

    def test_newest_first_with_prospect_data(self):
        interactions = get_recent_interactions(self.admin)

        self.assertEqual([i['type'] for i in interactions], ['Visita', 'Llamada'])
        self.assertEqual(interactions[0]['prospect_name'], 'Ana García')
        self.assertEqual(interactions[0]['prospect_initials'], 'AG')
        self.assertEqual(interactions[0]['impact_badge'], 'bg-green-100 text-green-800')

    def test_limit(self):
        self.assertEqual(len(get_recent_interactions(self.admin, limit=1)), 1)

    def test_failure_gives_empty_list(self):
        with patch('apps.prospects.services.build_tenant_scope', side_effect=DatabaseError('down')):
            self.assertEqual(get_recent_interactions(self.admin), [])
