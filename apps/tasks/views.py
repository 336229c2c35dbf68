from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import render
from django.views.decorators.http import require_POST

from apps.core.results import MutationResult
from apps.core.utils import mutation_response, parse_request_data
from .forms import TaskFilterForm, TaskUpdateForm
from .models import Task
from .services import complete_task, get_task_stats, get_tasks, update_task


@login_required
def task_list_view(request):
    filter_form = TaskFilterForm(request.GET)

    filters = {}
    if filter_form.is_valid():
        filters = {
            'query': filter_form.cleaned_data.get('query'),
            'type': filter_form.cleaned_data.get('type'),
            'priority': filter_form.cleaned_data.get('priority'),
        }

    result = get_tasks(request.user, **filters)

    context = {
        'tasks': result.rows,
        'total_count': len(result),
        'stats': get_task_stats(request.user),
        'filter_form': filter_form,
        'priority_choices': Task.PRIORITY_CHOICES,
    }

    return render(request, 'tasks/task_list.html', context)


@login_required
@require_POST
def task_update_view(request, pk):
    """
    Quick edit from the task table (priority select)

    Returns:
        {"success": true} or {"success": false, "error": "..."} (400)
    """
    try:
        data = parse_request_data(request)
    except ValueError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)

    form = TaskUpdateForm(data)
    if not form.is_valid():
        errors = '; '.join(f"{field}: {' '.join(messages)}" for field, messages in form.errors.items())
        return JsonResponse({'success': False, 'error': errors}, status=400)

    fields = form.changed_fields()
    if not fields:
        return mutation_response(MutationResult.failure('No fields to update'))

    return mutation_response(update_task(request.user, pk, fields))


@login_required
@require_POST
def task_complete_view(request, pk):
    """Mark a task as 'Completada' (checkbox in the task table)."""
    return mutation_response(complete_task(request.user, pk))
