# golinkbot/golinkbot/celery.py

"""
Celery Configuration for the golinkbot project.

Defines the Celery application used to deliver link messages in the
background. Configuration is read from the Django settings under the
`CELERY_` namespace, and task modules are discovered from installed apps.
"""

import os
from celery import Celery

# Must be set before the app instance is created so workers load the same settings.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'golinkbot.settings')

app = Celery('golinkbot')

app.config_from_object('django.conf:settings', namespace='CELERY')

app.autodiscover_tasks()
