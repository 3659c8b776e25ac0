# PATH: apps/domains/attempts/views/attempt_views.py
"""
Learner attempt API

Endpoint
- GET   /assignments/{assignment_id}/attempts/                 my attempts (?submitted=true|false)
- POST  /assignments/{assignment_id}/attempts/                 start a new attempt
- GET   /assignments/{assignment_id}/attempts/{attempt_id}/    attempt detail (?language=fr)
- PATCH /assignments/{assignment_id}/attempts/{attempt_id}/    submit responses

- learner identity: request.user.pk
- LMS grade passback uses the "authentication" cookie
"""

from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.domains.attempts.filters import AttemptFilter
from apps.domains.attempts.models import AssignmentAttempt
from apps.domains.attempts.permissions import learner_id
from apps.domains.attempts.serializers.attempt import (
    AttemptCreatedSerializer,
    AttemptListItemSerializer,
    AttemptSubmitSerializer,
)
from apps.domains.attempts.services.attempt_service import AttemptService

LTI_AUTH_COOKIE = "authentication"


class AttemptListCreateView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(responses={200: AttemptListItemSerializer(many=True)})
    def get(self, request, assignment_id: int):
        f = AttemptFilter(request.query_params, queryset=AssignmentAttempt.objects.none())
        if not f.is_valid():
            raise ValidationError(f.errors)

        rows = AttemptService.list_attempts(
            assignment_id=assignment_id,
            user_id=learner_id(request),
            submitted=f.form.cleaned_data.get("submitted"),
        )
        return Response(AttemptListItemSerializer(rows, many=True).data)

    @swagger_auto_schema(responses={201: AttemptCreatedSerializer})
    def post(self, request, assignment_id: int):
        attempt = AttemptService().create_attempt(
            assignment_id=assignment_id,
            user_id=learner_id(request),
        )
        return Response({"id": attempt.id, "success": True}, status=status.HTTP_201_CREATED)


class AttemptDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, assignment_id: int, attempt_id: int):
        data = AttemptService.get_attempt(
            attempt_id=attempt_id,
            assignment_id=assignment_id,
            user_id=learner_id(request),
            language=request.query_params.get("language") or None,
        )
        return Response(data)

    @swagger_auto_schema(request_body=AttemptSubmitSerializer)
    def patch(self, request, assignment_id: int, attempt_id: int):
        serializer = AttemptSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = AttemptService().submit_attempt(
            attempt_id=attempt_id,
            assignment_id=assignment_id,
            user_id=learner_id(request),
            responses=[dict(r) for r in data["responses_for_questions"]],
            language=data.get("language") or "en",
            auth_cookie=request.COOKIES.get(LTI_AUTH_COOKIE),
            grading_callback_required=data.get("grading_callback_required", False),
        )
        return Response(result)
