# WSGI (Web Server Gateway Interface) configuration for production deployment
#
# Used by production servers like Gunicorn or uWSGI:
#   gunicorn config.wsgi:application --bind 0.0.0.0:8000 --workers 4
# ==============================================================================

import os
from django.core.wsgi import get_wsgi_application

# Points to config/settings.py
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_wsgi_application()


# ==============================================================================
# NOTES
# ==============================================================================
#
# 1. Always run with multiple workers in production
#    Rule of thumb: (2 x CPU cores) + 1
#
# 2. Use a reverse proxy (Nginx) in front of Gunicorn
#    Nginx handles static files, SSL, load balancing
#
# 3. Set environment variables in production:
#    - DEBUG=False
#    - SECRET_KEY=<random-value>
#    - ALLOWED_HOSTS=yourdomain.com
#    - DB_ENGINE=django.db.backends.postgresql
#
