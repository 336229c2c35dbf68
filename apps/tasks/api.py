from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import TaskFilterSerializer, TaskUpdateSerializer
from .services import get_task_stats, get_tasks, update_task


class TaskListAPIView(APIView):
    """GET /api/tasks/?query=&type=&priority="""

    def get(self, request):
        serializer = TaskFilterSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        return Response(get_tasks(request.user, **serializer.validated_data).as_dict())


class TaskStatsAPIView(APIView):

    def get(self, request):
        return Response(get_task_stats(request.user))


class TaskDetailAPIView(APIView):
    """PATCH /api/tasks/<id>/ with any subset of the editable fields."""

    def patch(self, request, pk):
        serializer = TaskUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = update_task(request.user, pk, serializer.validated_data)
        return Response(result.as_dict(), status=status.HTTP_200_OK if result.success else status.HTTP_400_BAD_REQUEST)
