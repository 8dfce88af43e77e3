"""
WSGI entry point for the forum backend.

    gunicorn forumsite.wsgi:application
"""
import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'forumsite.settings')
application = get_wsgi_application()
