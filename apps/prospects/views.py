from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.http import JsonResponse
from django.shortcuts import render
from django.views.decorators.http import require_POST

from apps.core.results import MutationResult
from apps.core.utils import mutation_response, parse_request_data
from .forms import ProspectFilterForm, ProspectUpdateForm
from .models import Prospect
from .services import get_prospects, update_prospect


@login_required
def prospect_list_view(request):
    """
    Prospect table

    Shows demo rows (with a notice) when the organization has no
    prospects yet or the query fails.
    """
    filter_form = ProspectFilterForm(request.GET)

    filters = {}
    if filter_form.is_valid():
        filters = {
            'query': filter_form.cleaned_data.get('query'),
            'location': filter_form.cleaned_data.get('location'),
            'status': filter_form.cleaned_data.get('status'),
            'score_range': filter_form.get_score_range(),
        }

    result = get_prospects(request.user, **filters)

    paginator = Paginator(result.rows, 50)
    page_obj = paginator.get_page(request.GET.get('page', 1))

    context = {
        'prospects': page_obj,
        'page_obj': page_obj,
        'is_paginated': page_obj.has_other_pages(),
        'total_count': len(result),
        'source': result.source,
        'is_demo': result.is_fallback,
        'filter_form': filter_form,
        'status_choices': Prospect.STATUS_CHOICES,
        'substatus_choices': Prospect.SUBSTATUS_CHOICES,
    }

    return render(request, 'prospects/prospect_list.html', context)


@login_required
@require_POST
def prospect_update_view(request, pk):
    """
    Quick edit from the prospect table

    Returns:
        {"success": true} or {"success": false, "error": "..."} (400)
    """
    try:
        data = parse_request_data(request)
    except ValueError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)

    form = ProspectUpdateForm(data)
    if not form.is_valid():
        errors = '; '.join(f"{field}: {' '.join(messages)}" for field, messages in form.errors.items())
        return JsonResponse({'success': False, 'error': errors}, status=400)

    fields = form.changed_fields()
    if not fields:
        return mutation_response(MutationResult.failure('No fields to update'))

    return mutation_response(update_prospect(request.user, pk, fields))
