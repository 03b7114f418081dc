"""
WSGI config for dental_clinic project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'dental_clinic.settings')

application = get_wsgi_application()
