# PATH: apps/domains/attempts/views/feedback_views.py
"""
Post-attempt learner actions: feedback, regrade request, issue report.
"""

from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.domains.attempts.permissions import learner_id
from apps.domains.attempts.serializers.feedback import (
    FeedbackSerializer,
    RegradingRequestSerializer,
    ReportSerializer,
)
from apps.domains.attempts.services.feedback_service import AttemptFeedbackService
from apps.domains.attempts.services.regrading_service import AttemptRegradingService
from apps.domains.attempts.services.reporting_service import AttemptReportingService


class AttemptFeedbackView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, assignment_id: int, attempt_id: int):
        data = AttemptFeedbackService.get_feedback(
            assignment_id=assignment_id,
            attempt_id=attempt_id,
            user_id=learner_id(request),
        )
        return Response(data)

    @swagger_auto_schema(request_body=FeedbackSerializer)
    def post(self, request, assignment_id: int, attempt_id: int):
        serializer = FeedbackSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = AttemptFeedbackService.submit_feedback(
            assignment_id=assignment_id,
            attempt_id=attempt_id,
            user_id=learner_id(request),
            **serializer.validated_data,
        )
        return Response(data)


class AttemptRegradeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, assignment_id: int, attempt_id: int):
        data = AttemptRegradingService.get_regrading_status(
            assignment_id=assignment_id,
            attempt_id=attempt_id,
            user_id=learner_id(request),
        )
        return Response(data)

    @swagger_auto_schema(request_body=RegradingRequestSerializer)
    def post(self, request, assignment_id: int, attempt_id: int):
        serializer = RegradingRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = AttemptRegradingService.process_regrading_request(
            assignment_id=assignment_id,
            attempt_id=attempt_id,
            user_id=learner_id(request),
            reason=serializer.validated_data["reason"],
        )
        return Response(data, status=status.HTTP_201_CREATED)


class AttemptReportView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(request_body=ReportSerializer)
    def post(self, request, assignment_id: int, attempt_id: int):
        serializer = ReportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        report = AttemptReportingService.create_report(
            assignment_id=assignment_id,
            attempt_id=attempt_id,
            user_id=learner_id(request),
            **serializer.validated_data,
        )
        return Response({"success": True, "id": report.id}, status=status.HTTP_201_CREATED)
