"""
Dashboard metrics

Each counter is a separate query inside one try block: if any of them
fails the whole summary is reported as zeros rather than half-filled.
"""

import logging
import calendar
from dataclasses import asdict, dataclass
from datetime import timedelta

from django.conf import settings
from django.db.models import Avg, Count
from django.utils import timezone

from apps.accounts.services import resolve_profile
from apps.prospects.models import Interaction, Prospect, Property
from apps.tasks.models import Task
from .tenancy import build_tenant_scope

logger = logging.getLogger(__name__)


@dataclass
class DashboardMetrics:
    hot_prospects: int = 0
    hot_prospects_avg_score: float = 0
    tasks_due: int = 0
    tasks_due_today: int = 0
    closed_properties: int = 0
    immediate_opportunities: int = 0
    interactions: int = 0
    interactions_avg_impact: float = 0

    @classmethod
    def zero(cls):
        return cls()

    def as_dict(self):
        return asdict(self)


def months_ago(day, months):
    """Same day N months earlier, clamped to the end of shorter months."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def _hot_prospects(scope):
    stats = scope.apply(Prospect.objects.all()).filter(
        status=Prospect.STATUS_CLOSING,
        score__gt=settings.HOT_PROSPECT_MIN_SCORE,
    ).aggregate(total=Count('id'), avg_score=Avg('score'))
    return stats['total'], stats['avg_score'] or 0


def _tasks_due(scope, today):
    open_tasks = scope.apply(Task.objects.all()).exclude(status=Task.STATUS_COMPLETED)
    return open_tasks.filter(due_date__lte=today).count(), open_tasks.filter(due_date=today).count()


def _closed_properties(scope, today):
    sold = scope.apply(Property.objects.all()).filter(status=Property.STATUS_SOLD)
    return (
        sold.filter(closed_at__gte=months_ago(today, 3)).count(),
        sold.filter(closed_at=today).count(),
    )


def _recent_interactions(scope, today):
    interactions = scope.apply(Interaction.objects.all()).filter(created_at__date__gte=today - timedelta(days=7))
    total = interactions.count()
    if not total:
        return 0, 0

    # Null impact counts as 0 in the average
    impact_sum = sum(impact or 0 for impact in interactions.values_list('impact', flat=True))
    return total, impact_sum / total


def get_dashboard_metrics(user):
    """
    Summary cards of the dashboard

    Returns:
        DashboardMetrics: all zeros when there is no profile or any query fails
    """
    try:
        profile = resolve_profile(user)
        if profile is None:
            logger.warning("No user profile found, returning empty metrics")
            return DashboardMetrics.zero()

        scope = build_tenant_scope(profile)
        today = timezone.localdate()

        hot_prospects, hot_prospects_avg_score = _hot_prospects(scope)
        tasks_due, tasks_due_today = _tasks_due(scope, today)
        closed_properties, immediate_opportunities = _closed_properties(scope, today)
        interactions, interactions_avg_impact = _recent_interactions(scope, today)

        return DashboardMetrics(
            hot_prospects=hot_prospects,
            hot_prospects_avg_score=hot_prospects_avg_score,
            tasks_due=tasks_due,
            tasks_due_today=tasks_due_today,
            closed_properties=closed_properties,
            immediate_opportunities=immediate_opportunities,
            interactions=interactions,
            interactions_avg_impact=interactions_avg_impact,
        )

    except Exception:
        logger.exception("Error in get_dashboard_metrics")
        return DashboardMetrics.zero()
