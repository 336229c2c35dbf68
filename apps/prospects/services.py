"""
Prospect read/write operations

Every function:
1. resolves the profile of the user (auto-healing)
2. builds the tenant scope (organization, plus owner for agents)
3. queries, then shapes rows into plain dicts for templates / JSON

Reads never raise: they log and return empty buckets, [] or the demo
listing. Updates return a MutationResult.
"""

import logging

from django.conf import settings
from django.db.models import Count, F, Max
from django.utils import timezone

from apps.accounts.services import resolve_profile
from apps.core.formatting import (
    NO_INTERACTIONS_DASHBOARD_TEXT,
    cta_text,
    get_avatar_color,
    get_initials,
    impact_badge,
    relative_date_text,
    score_badge,
    score_color,
)
from apps.core.results import ListingResult, MutationResult
from apps.core.tenancy import build_tenant_scope
from .demo import demo_prospect_rows
from .models import Interaction, Prospect

logger = logging.getLogger(__name__)


# Kanban columns: key → exact status string
KANBAN_BUCKETS = (
    ('fase_inicial', Prospect.STATUS_INITIAL),
    ('en_proceso', Prospect.STATUS_IN_PROGRESS),
    ('fase_cierre', Prospect.STATUS_CLOSING),
)

PROSPECT_EDITABLE_FIELDS = ('name', 'email', 'phone', 'location', 'status', 'substatus')

PROSPECT_LIST_FIELDS = ('id', 'name', 'email', 'phone', 'location', 'score', 'status', 'substatus', 'created_at')


# KANBAN (dashboard)

def empty_kanban():
    return {key: [] for key, _status in KANBAN_BUCKETS}


def format_kanban_prospect(prospect):
    """
    Card data for one prospect

    Expects prospect.interactions to be prefetched.
    """
    interactions = list(prospect.interactions.all())
    latest = max(interactions, key=lambda interaction: interaction.created_at) if interactions else None
    last_interaction_date = latest.created_at if latest else None
    score = prospect.score or 0
    initials = get_initials(prospect.name)

    return {
        'id': prospect.id,
        'name': prospect.name,
        'email': prospect.email,
        'phone': prospect.phone,
        'status': prospect.status,
        'urgency_score': score,
        'score_badge': score_badge(score),
        'last_interaction_date': last_interaction_date,
        'last_interaction_text': relative_date_text(last_interaction_date, empty_text=NO_INTERACTIONS_DASHBOARD_TEXT),
        'total_interactions': len(interactions),
        'cta': latest.cta if latest and latest.cta else None,
        'initials': initials,
        'avatar_color': get_avatar_color(initials),
    }


def get_prospects_by_status(user):
    """
    Prospects grouped for the Kanban board, highest score first

    Returns:
        dict: {'fase_inicial': [...], 'en_proceso': [...], 'fase_cierre': [...]}

    Statuses outside the three columns are not shown on the board.
    """
    try:
        profile = resolve_profile(user)
        if profile is None:
            logger.warning("No user profile found, returning empty prospects")
            return empty_kanban()

        scope = build_tenant_scope(profile)
        prospects = (
            scope.apply(Prospect.objects.all())
            .prefetch_related('interactions')
            .order_by(F('score').desc(nulls_last=True), '-created_at')
        )

        bucket_for_status = {status: key for key, status in KANBAN_BUCKETS}
        grouped = empty_kanban()

        for prospect in prospects:
            key = bucket_for_status.get(prospect.status)
            if key is None:
                continue
            grouped[key].append(format_kanban_prospect(prospect))

        return grouped

    except Exception:
        logger.exception("Error in get_prospects_by_status")
        return empty_kanban()


# PROSPECT TABLE (filtered listing)

def format_prospect_row(row):
    """Table row with display fields (initials, colors, texts)."""
    score = row.get('score') or 0
    initials = get_initials(row.get('name') or 'NN')

    return {
        'id': row.get('id'),
        'name': row.get('name') or 'Sin nombre',
        'email': row.get('email') or '',
        'phone': row.get('phone') or '',
        'location': row.get('location') or '-',
        'score': score,
        'score_color': score_color(score),
        'status': row.get('status') or Prospect.STATUS_TABLE_INITIAL,
        'substatus': row.get('substatus'),
        'last_interaction_date': row.get('last_interaction_date'),
        'last_interaction_text': relative_date_text(row.get('last_interaction_date')),
        'interaction_count': row.get('interaction_count') or 0,
        'initials': initials,
        'avatar_color': get_avatar_color(initials),
        'cta_text': cta_text(score),
    }


def demo_listing():
    return ListingResult.fallback([format_prospect_row(row) for row in demo_prospect_rows()])


def filter_prospect_rows(rows, query=None, location=None, score_range=None):
    """
    In-memory filters applied after the query

    Args:
        query (str): matches name, email or phone (case-insensitive)
        location (str): substring of location
        score_range (tuple): (min, max), both inclusive
    """
    if query and query.strip():
        needle = query.strip().lower()
        rows = [
            row for row in rows
            if any(needle in (row.get(field) or '').lower() for field in ('name', 'email', 'phone'))
        ]

    if location and location.strip():
        needle = location.strip().lower()
        rows = [row for row in rows if needle in (row.get('location') or '').lower()]

    if score_range is not None:
        score_min, score_max = score_range
        rows = [row for row in rows if score_min <= (row.get('score') or 0) <= score_max]

    return rows


def get_prospects(user, query=None, location=None, status=None, score_range=None):
    """
    Prospect table with filters

    Status (a string or a list) is filtered in the database; query,
    location and score range in memory.

    Returns:
        ListingResult:
            live     - rows from the database
            fallback - demo rows (no profile, query error, no prospects at all)
            empty    - the filters removed every row
    """
    try:
        profile = resolve_profile(user)
        if profile is None:
            logger.warning("No user profile found, returning demo prospects")
            return demo_listing()

        scope = build_tenant_scope(profile)
        queryset = scope.apply(Prospect.objects.all())

        if status:
            if isinstance(status, (list, tuple, set)):
                queryset = queryset.filter(status__in=list(status))
            else:
                queryset = queryset.filter(status=status)

        rows = list(
            queryset
            .annotate(
                interaction_count=Count('interactions'),
                last_interaction_date=Max('interactions__created_at'),
            )
            .order_by(F('score').desc(nulls_last=True), '-created_at')
            .values(*PROSPECT_LIST_FIELDS, 'interaction_count', 'last_interaction_date')
        )

    except Exception:
        logger.exception("Error fetching prospects, returning demo prospects")
        return demo_listing()

    if not rows:
        return demo_listing()

    rows = filter_prospect_rows(rows, query=query, location=location, score_range=score_range)
    return ListingResult.live([format_prospect_row(row) for row in rows])


def update_prospect(user, prospect_id, data):
    """
    Update one prospect of the user's organization

    Only PROSPECT_EDITABLE_FIELDS are written; anything else in data is
    ignored. The tenant scope applies (agents can only edit their own).

    Returns:
        MutationResult
    """
    try:
        profile = resolve_profile(user)
        if profile is None:
            return MutationResult.failure('No authentication')

        fields = {key: value for key, value in (data or {}).items() if key in PROSPECT_EDITABLE_FIELDS}
        if not fields:
            return MutationResult.failure('No fields to update')

        scope = build_tenant_scope(profile)
        updated = scope.apply(Prospect.objects.filter(pk=prospect_id)).update(updated_at=timezone.now(), **fields)

    except Exception as e:
        logger.exception(f"Error updating prospect {prospect_id}")
        return MutationResult.failure(str(e))

    if not updated:
        return MutationResult.failure('Prospect not found')

    logger.info(f"Prospect {prospect_id} updated by {user.email}: {', '.join(sorted(fields))}")
    return MutationResult.ok()


# INTERACTIONS (dashboard)

def format_interaction(interaction):
    prospect_name = interaction.prospect.name if interaction.prospect_id else 'Sin prospecto'
    impact = interaction.impact or 0

    return {
        'id': interaction.id,
        'type': interaction.type or 'Sin tipo',
        'impact': impact,
        'impact_badge': impact_badge(impact),
        'created_at': interaction.created_at,
        'prospect_id': interaction.prospect_id,
        'prospect_name': prospect_name,
        'prospect_initials': get_initials(prospect_name),
    }


def get_recent_interactions(user, limit=None):
    """Latest interactions, newest first."""
    limit = limit or settings.RECENT_INTERACTIONS_LIMIT

    try:
        profile = resolve_profile(user)
        if profile is None:
            logger.warning("No user profile found, returning empty interactions")
            return []

        scope = build_tenant_scope(profile)
        interactions = (
            scope.apply(Interaction.objects.select_related('prospect'))
            .order_by('-created_at')[:limit]
        )
        return [format_interaction(interaction) for interaction in interactions]

    except Exception:
        logger.exception("Error in get_recent_interactions")
        return []
