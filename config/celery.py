"""
Celery configuration for Sativar.
"""
import os
from celery import Celery
from celery.schedules import crontab

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('config')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()

# Celery Beat Schedule
app.conf.beat_schedule = {
    'check-plan-renewals': {
        'task': 'apps.notifications.tasks.check_plan_renewals',
        'schedule': crontab(hour='7', minute='0'),
    },
    'refresh-overdue-invoices': {
        'task': 'apps.invoices.tasks.refresh_overdue_invoices',
        'schedule': crontab(hour='0', minute='15'),
    },
}
