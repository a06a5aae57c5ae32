# sky_hostel/celery.py
import os
from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE',
                      'sky_hostel.settings.development')

app = Celery('sky_hostel')

# CELERY_* Django settings, including CELERY_BEAT_SCHEDULE for the payment sweep
app.config_from_object('django.conf:settings', namespace='CELERY')

app.conf.update(
    broker_connection_retry_on_startup=True,
    task_serializer='json',
    result_serializer='json',
    accept_content=['json'],
    result_expires=6 * 60 * 60,
    # Whole sweep; each gateway call inside it is capped by REMITA_TIMEOUT
    task_soft_time_limit=50 * 60,
    task_time_limit=60 * 60,
)

app.autodiscover_tasks()
