"""
Django app configuration for Brand Kit core.

PR-1: Shared enums for the provenance model.
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "brandkit.core"
    verbose_name = "Brand Kit Core"
