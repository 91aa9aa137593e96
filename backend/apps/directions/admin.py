from __future__ import annotations

from django.contrib import admin

from .models import Direction


@admin.register(Direction)
class DirectionAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "created_at", "updated_at")
    search_fields = ("name",)
    filter_horizontal = ("managers",)
    ordering = ("id",)

    def delete_model(self, request, obj):
        obj.managers.clear()
        obj.soft_delete()
