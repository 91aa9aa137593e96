from __future__ import annotations

from django.contrib import admin

from .models import Score


@admin.register(Score)
class ScoreAdmin(admin.ModelAdmin):
    """评分后台：只读查看，修改统一走 API 以保证最大分值校验"""

    list_display = ("id", "submission", "user", "reviewer", "score", "updated_at")
    list_select_related = ("submission", "user", "reviewer")
    search_fields = ("user__username", "reviewer__username")
    readonly_fields = ("submission", "user", "reviewer", "score", "comment", "created_at", "updated_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
