"""
ASGI config for dental_clinic project.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'dental_clinic.settings')

application = get_asgi_application()
