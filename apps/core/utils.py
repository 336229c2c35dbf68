"""
Helpers shared by the JSON views
"""
import json

from django.http import JsonResponse


def parse_request_data(request):
    """
    Body of a quick-update request

    JSON bodies (fetch from the dashboard) and form posts are both
    accepted.

    Raises:
        ValueError: the body is not valid JSON or not a JSON object
    """
    if request.content_type == 'application/json':
        try:
            data = json.loads(request.body or b'{}')
        except json.JSONDecodeError as e:
            raise ValueError('Invalid JSON format') from e

        if not isinstance(data, dict):
            raise ValueError('Invalid JSON format')
        return data

    return request.POST


def mutation_response(result):
    """JsonResponse for a MutationResult: 200 on success, 400 otherwise."""
    return JsonResponse(result.as_dict(), status=200 if result.success else 400)
