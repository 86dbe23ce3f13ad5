"""
Kit app configuration.

PR-1: Provenance tree, normalizer, scoring and gap analysis.
"""

from django.apps import AppConfig


class KitConfig(AppConfig):
    """Configuration for the Kit app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "brandkit.kit"
    label = "kit"
    verbose_name = "Brand Kit"
