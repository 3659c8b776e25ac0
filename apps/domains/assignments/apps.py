# PATH: apps/domains/assignments/apps.py
from django.apps import AppConfig


class AssignmentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.domains.assignments"
    label = "assignments"
