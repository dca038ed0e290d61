"""
WSGI config para o projeto Mobiliar.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'mobiliar.settings')

application = get_wsgi_application()
