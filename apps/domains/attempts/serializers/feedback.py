# PATH: apps/domains/attempts/serializers/feedback.py
from rest_framework import serializers

from apps.domains.attempts.models import Report


class FeedbackSerializer(serializers.Serializer):
    comments = serializers.CharField(required=False, allow_blank=True, default="")
    ai_grading_rating = serializers.IntegerField(required=False, allow_null=True, min_value=1, max_value=5)
    assignment_rating = serializers.IntegerField(required=False, allow_null=True, min_value=1, max_value=5)


class RegradingRequestSerializer(serializers.Serializer):
    reason = serializers.CharField()


class ReportSerializer(serializers.Serializer):
    issue_type = serializers.ChoiceField(choices=Report.IssueType.choices)
    description = serializers.CharField()
