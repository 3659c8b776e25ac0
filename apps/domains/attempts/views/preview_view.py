# PATH: apps/domains/attempts/views/preview_view.py

from drf_yasg.utils import swagger_auto_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.domains.attempts.permissions import IsAdminOrStaff
from apps.domains.attempts.serializers.attempt import AuthorPreviewSerializer
from apps.domains.attempts.services.attempt_service import AttemptService


class AuthorPreviewView(APIView):
    """
    POST /assignments/{assignment_id}/preview/

    Grades draft questions sent by the author. Nothing is stored except
    the grading audit trail.
    """

    permission_classes = [IsAuthenticated, IsAdminOrStaff]

    @swagger_auto_schema(request_body=AuthorPreviewSerializer)
    def post(self, request, assignment_id: int):
        serializer = AuthorPreviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = AttemptService().preview_submission(
            assignment_id=assignment_id,
            responses=[dict(r) for r in data["responses_for_questions"]],
            author_questions=data["author_questions"],
            language=data.get("language") or "en",
        )
        return Response(result)
