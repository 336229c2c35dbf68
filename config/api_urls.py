from django.urls import path

from apps.core import api as core_api
from apps.prospects import api as prospects_api
from apps.tasks import api as tasks_api

# REST endpoints (JSON) for the dashboard widgets

app_name = 'api'

urlpatterns = [
    path('dashboard/metrics/', core_api.DashboardMetricsAPIView.as_view(), name='dashboard_metrics'),
    path('prospects/', prospects_api.ProspectListAPIView.as_view(), name='prospect_list'),
    path('prospects/kanban/', prospects_api.ProspectKanbanAPIView.as_view(), name='prospect_kanban'),
    path('prospects/<uuid:pk>/', prospects_api.ProspectDetailAPIView.as_view(), name='prospect_detail'),
    path('interactions/recent/', prospects_api.RecentInteractionsAPIView.as_view(), name='recent_interactions'),
    path('tasks/', tasks_api.TaskListAPIView.as_view(), name='task_list'),
    path('tasks/stats/', tasks_api.TaskStatsAPIView.as_view(), name='task_stats'),
    path('tasks/<uuid:pk>/', tasks_api.TaskDetailAPIView.as_view(), name='task_detail'),
]
