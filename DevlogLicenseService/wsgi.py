"""
WSGI config for DevlogLicenseService project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "DevlogLicenseService.settings.prod")

application = get_wsgi_application()
