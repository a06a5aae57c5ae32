"""
WSGI config for sky_hostel project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE',
                      'sky_hostel.settings.production')

application = get_wsgi_application()
