from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import ProspectFilterSerializer, ProspectUpdateSerializer
from .services import get_prospects, get_prospects_by_status, get_recent_interactions, update_prospect


class ProspectListAPIView(APIView):
    """
    GET /api/prospects/?query=&location=&status=&status=&score_min=&score_max=

    Response carries the listing source ('live', 'fallback' or 'empty')
    so clients can flag demo rows.
    """

    def get(self, request):
        params = {key: value for key, value in request.query_params.items() if key != 'status'}
        statuses = [value for value in request.query_params.getlist('status') if value.strip()]
        if statuses:
            params['status'] = statuses

        serializer = ProspectFilterSerializer(data=params)
        serializer.is_valid(raise_exception=True)

        return Response(get_prospects(request.user, **serializer.to_filters()).as_dict())


class ProspectKanbanAPIView(APIView):

    def get(self, request):
        return Response(get_prospects_by_status(request.user))


class ProspectDetailAPIView(APIView):
    """PATCH /api/prospects/<id>/ with any subset of the editable fields."""

    def patch(self, request, pk):
        serializer = ProspectUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = update_prospect(request.user, pk, serializer.validated_data)
        return Response(result.as_dict(), status=status.HTTP_200_OK if result.success else status.HTTP_400_BAD_REQUEST)


class RecentInteractionsAPIView(APIView):

    def get(self, request):
        try:
            limit = int(request.query_params.get('limit', 0)) or None
        except ValueError:
            limit = None
        return Response(get_recent_interactions(request.user, limit=limit))
