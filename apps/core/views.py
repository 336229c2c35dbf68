from django.contrib.auth.decorators import login_required
from django.shortcuts import render

from apps.accounts.services import resolve_profile
from apps.prospects.services import get_prospects_by_status, get_recent_interactions
from apps.tasks.services import get_recent_tasks
from .services import get_dashboard_metrics


@login_required
def dashboard_view(request):
    """
    Main dashboard view
    - Metric cards (hot prospects, tasks due, closed properties, interactions)
    - Kanban board of prospects
    - Upcoming tasks and latest interactions

    Every block degrades to zeros / empty lists on its own, the page
    always renders.
    """
    user = request.user

    context = {
        'profile': resolve_profile(user),
        'metrics': get_dashboard_metrics(user),
        'kanban': get_prospects_by_status(user),
        'recent_tasks': get_recent_tasks(user),
        'recent_interactions': get_recent_interactions(user),
    }

    return render(request, 'core/dashboard.html', context)
