# PATH: apps/domains/attempts/views/grading_audit_views.py
"""
Grading quality control (staff only)

Endpoint
- GET /assignments/grading-audits/questions/{question_id}/?limit=10
- GET /assignments/{assignment_id}/grading-audits/statistics/
- GET /assignments/{assignment_id}/grading-audits/issues/
"""

from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.domains.attempts.permissions import IsAdminOrStaff
from apps.domains.attempts.serializers.grading_audit import GradingAuditSerializer
from apps.domains.attempts.services.grading_audit_service import GradingAuditService

MAX_HISTORY_LIMIT = 100


class QuestionGradingHistoryView(APIView):
    permission_classes = [IsAuthenticated, IsAdminOrStaff]

    def get(self, request, question_id: int):
        raw = request.query_params.get("limit", "10")
        try:
            limit = max(1, min(int(raw), MAX_HISTORY_LIMIT))
        except ValueError:
            raise ValidationError({"limit": "must be an integer"})

        audits = GradingAuditService.get_grading_history(question_id=question_id, limit=limit)
        return Response(GradingAuditSerializer(audits, many=True).data)


class AssignmentGradingStatisticsView(APIView):
    permission_classes = [IsAuthenticated, IsAdminOrStaff]

    def get(self, request, assignment_id: int):
        return Response({
            "assignment_id": assignment_id,
            "questions": GradingAuditService.get_grading_statistics(assignment_id=assignment_id),
        })


class AssignmentGradingIssuesView(APIView):
    permission_classes = [IsAuthenticated, IsAdminOrStaff]

    def get(self, request, assignment_id: int):
        issues = GradingAuditService.identify_grading_issues(assignment_id=assignment_id)
        return Response({
            "assignment_id": assignment_id,
            # JSON object keys are strings
            "issues": {str(qid): items for qid, items in issues.items()},
        })
