"""
Task read/write operations (tenant-scoped)

Tasks have no demo dataset: a missing profile or a failing query gives
an empty listing.
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.db.models import F
from django.utils import timezone

from apps.accounts.services import resolve_profile
from apps.core.formatting import due_date_status, get_initials
from apps.core.results import ListingResult, MutationResult
from apps.core.tenancy import build_tenant_scope
from .models import Task

logger = logging.getLogger(__name__)


TASK_EDITABLE_FIELDS = ('title', 'description', 'due_date', 'status', 'type', 'priority')

NO_PROSPECT_TEXT = 'Sin prospecto'


def format_task(task, no_prospect_text=NO_PROSPECT_TEXT):
    """The dashboard widget passes no_prospect_text='' (blank name and initials)."""
    prospect = task.prospect if task.prospect_id else None
    prospect_name = prospect.name if prospect and prospect.name else no_prospect_text

    return {
        'id': task.id,
        'title': task.title,
        'description': task.description,
        'due_date': task.due_date,
        'due': due_date_status(task.due_date),
        'overdue': task.is_overdue(),
        'status': task.status or Task.STATUS_PENDING,
        'type': task.type or Task.TYPE_CALL,
        'priority': task.priority or Task.PRIORITY_MEDIUM,
        'prospect_id': task.prospect_id,
        'prospect_name': prospect_name,
        'prospect_initials': get_initials(prospect_name),
        'prospect_email': prospect.email if prospect else None,
        'created_by': task.created_by_id,
        'created_at': task.created_at,
    }


def _matches_query(task, needle):
    prospect_name = task.prospect.name if task.prospect_id else ''
    haystack = (prospect_name or '', task.title or '', task.description or '')
    return any(needle in text.lower() for text in haystack)


def get_tasks(user, query=None, type=None, priority=None):
    """
    Task table with filters, ordered by due date (soonest first)

    Type and priority are filtered in the database, the free text
    (title, description or prospect name) in memory.

    Returns:
        ListingResult: live, or empty (no rows, no profile, query error)
    """
    try:
        profile = resolve_profile(user)
        if profile is None:
            logger.warning("No user profile found, returning empty tasks")
            return ListingResult.empty()

        scope = build_tenant_scope(profile)
        queryset = scope.apply(Task.objects.select_related('prospect'))

        if type:
            queryset = queryset.filter(type=type)
        if priority:
            queryset = queryset.filter(priority=priority)

        tasks = list(queryset.order_by(F('due_date').asc(nulls_last=True), '-created_at'))

    except Exception:
        logger.exception("Error in get_tasks")
        return ListingResult.empty()

    if query and query.strip():
        needle = query.strip().lower()
        tasks = [task for task in tasks if _matches_query(task, needle)]

    return ListingResult.live([format_task(task) for task in tasks])


def get_recent_tasks(user, limit=None):
    """Open tasks closest to their due date (dashboard widget)."""
    limit = limit or settings.RECENT_TASKS_LIMIT

    try:
        profile = resolve_profile(user)
        if profile is None:
            logger.warning("No user profile found, returning empty tasks")
            return []

        scope = build_tenant_scope(profile)
        tasks = (
            scope.apply(Task.objects.select_related('prospect'))
            .exclude(status=Task.STATUS_COMPLETED)
            .order_by(F('due_date').asc(nulls_last=True))[:limit]
        )
        return [format_task(task, no_prospect_text='') for task in tasks]

    except Exception:
        logger.exception("Error in get_recent_tasks")
        return []


def empty_task_stats():
    return {'total_completed': 0, 'total_pending': 0, 'completed_last_7_days': 0}


def get_task_stats(user):
    """
    Task counters

    Returns:
        dict: total_completed, total_pending, completed_last_7_days
    """
    try:
        profile = resolve_profile(user)
        if profile is None:
            logger.warning("No user profile found, returning empty stats")
            return empty_task_stats()

        scope = build_tenant_scope(profile)
        tasks = scope.apply(Task.objects.all())
        completed = tasks.filter(status=Task.STATUS_COMPLETED)
        since = timezone.localdate() - timedelta(days=7)

        return {
            'total_completed': completed.count(),
            'total_pending': tasks.exclude(status=Task.STATUS_COMPLETED).count(),
            'completed_last_7_days': completed.filter(updated_at__date__gte=since).count(),
        }

    except Exception:
        logger.exception("Error in get_task_stats")
        return empty_task_stats()


def update_task(user, task_id, data):
    """
    Update one task of the user's organization

    Only TASK_EDITABLE_FIELDS are written. Agents can only edit their own.

    Returns:
        MutationResult
    """
    try:
        profile = resolve_profile(user)
        if profile is None:
            return MutationResult.failure('No authentication')

        fields = {key: value for key, value in (data or {}).items() if key in TASK_EDITABLE_FIELDS}
        if not fields:
            return MutationResult.failure('No fields to update')

        scope = build_tenant_scope(profile)
        updated = scope.apply(Task.objects.filter(pk=task_id)).update(updated_at=timezone.now(), **fields)

    except Exception as e:
        logger.exception(f"Error updating task {task_id}")
        return MutationResult.failure(str(e))

    if not updated:
        return MutationResult.failure('Task not found')

    logger.info(f"Task {task_id} updated by {user.email}: {', '.join(sorted(fields))}")
    return MutationResult.ok()


def complete_task(user, task_id):
    return update_task(user, task_id, {'status': Task.STATUS_COMPLETED})
