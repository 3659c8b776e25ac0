# PATH: apps/domains/assignments/admin.py
from django.contrib import admin

from apps.domains.assignments.models import Assignment, Question, QuestionVariant, Translation


class QuestionInline(admin.TabularInline):
    model = Question
    extra = 0
    fields = ("question", "type", "response_type", "total_points", "is_deleted")


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "display_order", "num_attempts", "alloted_time_minutes")
    search_fields = ("name",)
    inlines = [QuestionInline]


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ("id", "assignment", "type", "response_type", "total_points", "is_deleted")
    list_filter = ("type", "is_deleted")


@admin.register(QuestionVariant)
class QuestionVariantAdmin(admin.ModelAdmin):
    list_display = ("id", "variant_of", "randomized_choices", "is_deleted")


@admin.register(Translation)
class TranslationAdmin(admin.ModelAdmin):
    list_display = ("id", "question", "variant", "language_code")
    list_filter = ("language_code",)
