# apps/domains/attempts/serializers/grading_audit.py

from rest_framework import serializers

from apps.domains.attempts.models import GradingAudit


class GradingAuditSerializer(serializers.ModelSerializer):
    class Meta:
        model = GradingAudit
        fields = [
            "id",
            "question_id",
            "assignment_id",
            "grading_strategy",
            "request_payload",
            "response_payload",
            "metadata",
            "created_at",
        ]
