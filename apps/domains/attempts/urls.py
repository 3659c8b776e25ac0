# PATH: apps/domains/attempts/urls.py

from django.urls import path

# ======================================================
# Learner
# ======================================================
from apps.domains.attempts.views.attempt_views import (
    AttemptDetailView,
    AttemptListCreateView,
)
from apps.domains.attempts.views.feedback_views import (
    AttemptFeedbackView,
    AttemptRegradeView,
    AttemptReportView,
)

# ======================================================
# Author / Staff
# ======================================================
from apps.domains.attempts.views.preview_view import AuthorPreviewView
from apps.domains.attempts.views.grading_audit_views import (
    AssignmentGradingIssuesView,
    AssignmentGradingStatisticsView,
    QuestionGradingHistoryView,
)

urlpatterns = [
    # Learner
    path("<int:assignment_id>/attempts/", AttemptListCreateView.as_view()),
    path("<int:assignment_id>/attempts/<int:attempt_id>/", AttemptDetailView.as_view()),
    path("<int:assignment_id>/attempts/<int:attempt_id>/feedback/", AttemptFeedbackView.as_view()),
    path("<int:assignment_id>/attempts/<int:attempt_id>/regrade/", AttemptRegradeView.as_view()),
    path("<int:assignment_id>/attempts/<int:attempt_id>/report/", AttemptReportView.as_view()),

    # Author
    path("<int:assignment_id>/preview/", AuthorPreviewView.as_view()),

    # Grading audit
    path("<int:assignment_id>/grading-audits/statistics/", AssignmentGradingStatisticsView.as_view()),
    path("<int:assignment_id>/grading-audits/issues/", AssignmentGradingIssuesView.as_view()),
    path("grading-audits/questions/<int:question_id>/", QuestionGradingHistoryView.as_view()),
]
