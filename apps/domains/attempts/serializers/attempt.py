# PATH: apps/domains/attempts/serializers/attempt.py
from rest_framework import serializers


class QuestionResponseInputSerializer(serializers.Serializer):
    """One learner answer. Only the field matching the question type is read."""

    id = serializers.IntegerField()
    learner_text_response = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    learner_url_response = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    learner_choices = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, allow_null=True)
    learner_answer_choice = serializers.JSONField(required=False, allow_null=True)
    learner_file_response = serializers.ListField(child=serializers.DictField(), required=False, allow_null=True)
    learner_presentation_response = serializers.JSONField(required=False, allow_null=True)


class AttemptSubmitSerializer(serializers.Serializer):
    responses_for_questions = QuestionResponseInputSerializer(many=True)
    language = serializers.CharField(required=False, allow_blank=True, default="en")
    grading_callback_required = serializers.BooleanField(required=False, default=False)


class AuthorPreviewSerializer(serializers.Serializer):
    responses_for_questions = QuestionResponseInputSerializer(many=True)
    author_questions = serializers.ListField(child=serializers.DictField(), allow_empty=False)
    language = serializers.CharField(required=False, allow_blank=True, default="en")


class AttemptCreatedSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    success = serializers.BooleanField()


class AttemptListItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    assignment_id = serializers.IntegerField()
    user_id = serializers.CharField()
    submitted = serializers.BooleanField()
    grade = serializers.FloatField(allow_null=True)
    created_at = serializers.DateTimeField()
    expires_at = serializers.DateTimeField(allow_null=True)
    comments = serializers.CharField(allow_null=True)
