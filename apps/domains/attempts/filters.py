# apps/domains/attempts/filters.py

import django_filters

from .models import AssignmentAttempt


class AttemptFilter(django_filters.FilterSet):
    """
    Attempt list filtering.
    Front uses: /assignments/{id}/attempts/?submitted=true
    """

    class Meta:
        model = AssignmentAttempt
        fields = {
            "submitted": ["exact"],
        }
