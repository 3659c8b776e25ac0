# apps/domains/assignments/migrations/0001_initial.py
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Assignment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                ("introduction", models.TextField(blank=True, default="")),
                ("instructions", models.TextField(blank=True, default="")),
                ("question_order", models.JSONField(blank=True, default=list)),
                (
                    "display_order",
                    models.CharField(
                        choices=[("SEQUENTIAL", "Sequential"), ("RANDOM", "Random")],
                        default="SEQUENTIAL",
                        max_length=20,
                    ),
                ),
                ("num_attempts", models.IntegerField(default=-1)),
                ("attempts_per_time_range", models.PositiveIntegerField(blank=True, null=True)),
                ("attempts_time_range_hours", models.PositiveIntegerField(blank=True, null=True)),
                ("alloted_time_minutes", models.PositiveIntegerField(blank=True, null=True)),
                ("passing_grade", models.PositiveIntegerField(default=50)),
                ("show_assignment_score", models.BooleanField(default=True)),
                ("show_submission_feedback", models.BooleanField(default=True)),
                ("show_question_score", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "assignments_assignment",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Question",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("question", models.TextField()),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("TEXT", "Text"),
                            ("URL", "Url"),
                            ("UPLOAD", "Upload"),
                            ("LINK_FILE", "Link or file"),
                            ("TRUE_FALSE", "True / False"),
                            ("SINGLE_CORRECT", "Single correct"),
                            ("MULTIPLE_CORRECT", "Multiple correct"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "response_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("CODE", "Code"),
                            ("ESSAY", "Essay"),
                            ("REPORT", "Report"),
                            ("LIVE_RECORDING", "Live recording"),
                            ("PRESENTATION", "Presentation"),
                            ("OTHER", "Other"),
                        ],
                        max_length=32,
                        null=True,
                    ),
                ),
                ("total_points", models.FloatField(default=0)),
                ("choices", models.JSONField(blank=True, null=True)),
                ("scoring", models.JSONField(blank=True, null=True)),
                ("answer", models.BooleanField(blank=True, null=True)),
                ("max_words", models.PositiveIntegerField(blank=True, null=True)),
                ("max_characters", models.PositiveIntegerField(blank=True, null=True)),
                ("grading_context_question_ids", models.JSONField(blank=True, default=list)),
                ("randomized_choices", models.BooleanField(default=False)),
                ("video_presentation_config", models.JSONField(blank=True, null=True)),
                ("is_deleted", models.BooleanField(default=False)),
                (
                    "assignment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="questions",
                        to="assignments.assignment",
                    ),
                ),
            ],
            options={
                "db_table": "assignments_question",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="QuestionVariant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("variant_content", models.TextField()),
                ("choices", models.JSONField(blank=True, null=True)),
                ("scoring", models.JSONField(blank=True, null=True)),
                ("answer", models.BooleanField(blank=True, null=True)),
                ("max_words", models.PositiveIntegerField(blank=True, null=True)),
                ("max_characters", models.PositiveIntegerField(blank=True, null=True)),
                ("randomized_choices", models.BooleanField(default=False)),
                ("is_deleted", models.BooleanField(default=False)),
                (
                    "variant_of",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="variants",
                        to="assignments.question",
                    ),
                ),
            ],
            options={
                "db_table": "assignments_question_variant",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Translation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("language_code", models.CharField(max_length=16)),
                ("translated_text", models.TextField()),
                ("translated_choices", models.JSONField(blank=True, null=True)),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="assignments.question",
                    ),
                ),
                (
                    "variant",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="assignments.questionvariant",
                    ),
                ),
            ],
            options={
                "db_table": "assignments_translation",
                "ordering": ["id"],
                "unique_together": {("question", "variant", "language_code")},
            },
        ),
    ]
