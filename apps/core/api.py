from rest_framework.response import Response
from rest_framework.views import APIView

from .services import get_dashboard_metrics


class DashboardMetricsAPIView(APIView):
    """GET /api/dashboard/metrics/ → metric cards as JSON."""

    def get(self, request):
        return Response(get_dashboard_metrics(request.user).as_dict())
