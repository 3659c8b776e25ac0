# apps/domains/attempts/migrations/0001_initial.py
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("assignments", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="AssignmentAttempt",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user_id", models.CharField(db_index=True, max_length=255)),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("submitted", models.BooleanField(default=False)),
                ("grade", models.FloatField(blank=True, null=True)),
                ("question_order", models.JSONField(blank=True, default=list)),
                ("preferred_language", models.CharField(blank=True, max_length=16, null=True)),
                ("comments", models.TextField(blank=True, null=True)),
                (
                    "assignment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="attempts",
                        to="assignments.assignment",
                    ),
                ),
            ],
            options={
                "db_table": "attempts_assignment_attempt",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["assignment", "user_id"], name="attempt_assignment_user_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="AssignmentAttemptQuestionVariant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("randomized_choices", models.JSONField(blank=True, null=True)),
                (
                    "attempt",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="question_variants",
                        to="attempts.assignmentattempt",
                    ),
                ),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="attempt_bindings",
                        to="assignments.question",
                    ),
                ),
                (
                    "question_variant",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="attempt_bindings",
                        to="assignments.questionvariant",
                    ),
                ),
            ],
            options={
                "db_table": "attempts_attempt_question_variant",
                "unique_together": {("attempt", "question")},
            },
        ),
        migrations.CreateModel(
            name="QuestionResponse",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("learner_response", models.JSONField(blank=True, null=True)),
                ("points", models.FloatField(default=0)),
                ("feedback", models.JSONField(blank=True, default=list)),
                ("metadata", models.JSONField(blank=True, null=True)),
                ("graded_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "attempt",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="question_responses",
                        to="attempts.assignmentattempt",
                    ),
                ),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="responses",
                        to="assignments.question",
                    ),
                ),
            ],
            options={
                "db_table": "attempts_question_response",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="GradingAudit",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("question_id", models.PositiveIntegerField(db_index=True)),
                ("assignment_id", models.PositiveIntegerField(blank=True, db_index=True, null=True)),
                ("request_payload", models.JSONField(default=dict)),
                ("response_payload", models.JSONField(default=dict)),
                ("grading_strategy", models.CharField(max_length=64)),
                ("metadata", models.JSONField(blank=True, null=True)),
            ],
            options={
                "db_table": "attempts_grading_audit",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="AssignmentFeedback",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user_id", models.CharField(max_length=255)),
                ("comments", models.TextField(blank=True, default="")),
                ("ai_grading_rating", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("assignment_rating", models.PositiveSmallIntegerField(blank=True, null=True)),
                (
                    "assignment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="feedbacks",
                        to="assignments.assignment",
                    ),
                ),
                (
                    "attempt",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="feedbacks",
                        to="attempts.assignmentattempt",
                    ),
                ),
            ],
            options={
                "db_table": "attempts_assignment_feedback",
                "unique_together": {("assignment", "attempt", "user_id")},
            },
        ),
        migrations.CreateModel(
            name="RegradingRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user_id", models.CharField(max_length=255)),
                ("reason", models.TextField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("APPROVED", "Approved"),
                            ("REJECTED", "Rejected"),
                            ("COMPLETED", "Completed"),
                        ],
                        default="PENDING",
                        max_length=16,
                    ),
                ),
                (
                    "assignment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="regrading_requests",
                        to="assignments.assignment",
                    ),
                ),
                (
                    "attempt",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="regrading_requests",
                        to="attempts.assignmentattempt",
                    ),
                ),
            ],
            options={
                "db_table": "attempts_regrading_request",
                "unique_together": {("assignment", "attempt", "user_id")},
            },
        ),
        migrations.CreateModel(
            name="Report",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("reporter_id", models.CharField(db_index=True, max_length=255)),
                (
                    "issue_type",
                    models.CharField(
                        choices=[
                            ("BUG", "Bug"),
                            ("FEEDBACK", "Feedback"),
                            ("SUGGESTION", "Suggestion"),
                            ("PERFORMANCE", "Performance"),
                            ("FALSE_MARKING", "False marking"),
                            ("OTHER", "Other"),
                        ],
                        max_length=20,
                    ),
                ),
                ("description", models.TextField()),
                (
                    "status",
                    models.CharField(
                        choices=[("OPEN", "Open"), ("IN_PROGRESS", "In progress"), ("CLOSED", "Closed")],
                        default="OPEN",
                        max_length=16,
                    ),
                ),
                (
                    "assignment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reports",
                        to="assignments.assignment",
                    ),
                ),
                (
                    "attempt",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="reports",
                        to="attempts.assignmentattempt",
                    ),
                ),
            ],
            options={
                "db_table": "attempts_report",
                "ordering": ["-created_at"],
            },
        ),
    ]
