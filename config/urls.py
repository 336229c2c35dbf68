from django.contrib import admin
from django.urls import path, include
from django.shortcuts import redirect

# Main URL Configuration
# Routes all requests to appropriate apps

urlpatterns = [

    path('admin/', admin.site.urls),
    path('', include('apps.accounts.urls')),
    path('dashboard/', include('apps.core.urls')),
    path('dashboard/prospects/', include('apps.prospects.urls')),
    path('dashboard/tasks/', include('apps.tasks.urls')),
    path('api/', include('config.api_urls')),
    path('', lambda request: redirect('core:dashboard') if request.user.is_authenticated else redirect('accounts:login'), name='root'),

]
