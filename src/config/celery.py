"""
Celery configuration for the order management project.

``DJANGO_SETTINGS_MODULE`` is set before the app is created so Celery
reads its configuration from the Django settings (``CELERY_`` prefix).
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("order_management")

# Read the CELERY_* keys from the Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Discover tasks.py in every installed app
app.autodiscover_tasks()
