# ASGI (Asynchronous Server Gateway Interface) configuration
#
# Production servers:
# - Uvicorn:   uvicorn config.asgi:application --port 8000
# - Hypercorn: hypercorn config.asgi:application
# ==============================================================================

import os
from django.core.asgi import get_asgi_application

# Set the default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

# Plain HTTP only: the dashboard has no WebSocket consumers
application = get_asgi_application()
