from __future__ import annotations

from django.urls import path

from .views import (
    AdminDirectionCreateView,
    AdminDirectionDetailView,
    DirectionDetailView,
    DirectionListView,
)

app_name = "directions"

urlpatterns = [
    path("directions", DirectionListView.as_view(), name="direction-list"),
    path("directions/<int:direction_id>", DirectionDetailView.as_view(), name="direction-detail"),
    path("admin/directions", AdminDirectionCreateView.as_view(), name="admin-direction-create"),
    path("admin/directions/<int:direction_id>", AdminDirectionDetailView.as_view(), name="admin-direction-detail"),
]
