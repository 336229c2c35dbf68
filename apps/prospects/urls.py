from django.urls import path
from . import views

app_name = 'prospects'

urlpatterns = [
    path('', views.prospect_list_view, name='prospect_list'),
    path('<uuid:pk>/update/', views.prospect_update_view, name='prospect_update'),
]
