from django.urls import path
from . import views

app_name = 'tasks'

urlpatterns = [
    path('', views.task_list_view, name='task_list'),
    path('<uuid:pk>/update/', views.task_update_view, name='task_update'),
    path('<uuid:pk>/complete/', views.task_complete_view, name='task_complete'),
]
