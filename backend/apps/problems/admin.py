from __future__ import annotations

from django.contrib import admin

from .models import Problem, SubmissionPoint


class SubmissionPointInline(admin.TabularInline):
    model = SubmissionPoint
    extra = 0
    fields = ("name", "max_score")


@admin.register(Problem)
class ProblemAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "direction", "created_at")
    list_filter = ("direction",)
    search_fields = ("title",)
    list_select_related = ("direction",)
    inlines = [SubmissionPointInline]
    ordering = ("id",)


@admin.register(SubmissionPoint)
class SubmissionPointAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "max_score", "problem")
    list_select_related = ("problem",)
    search_fields = ("name",)
    ordering = ("id",)
