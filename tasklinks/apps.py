from django.apps import AppConfig


class TasklinksAppConfig(AppConfig):
    """Configuration for the tasklinks Django app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'tasklinks'
    verbose_name = 'Task links'
