from __future__ import annotations

from django.urls import path

from .views import (
    AdminProblemCreateView,
    AdminProblemDetailView,
    AdminSubmissionPointCreateView,
    AdminSubmissionPointDetailView,
    ProblemDetailView,
    ProblemListView,
    SubmissionPointListView,
)

app_name = "problems"

urlpatterns = [
    # 公开浏览
    path("problems", ProblemListView.as_view(), name="problem-list"),
    path("problems/<int:problem_id>", ProblemDetailView.as_view(), name="problem-detail"),
    path(
        "problems/<int:problem_id>/submission-points",
        SubmissionPointListView.as_view(),
        name="submission-point-list",
    ),
    # 管理
    path("admin/problems", AdminProblemCreateView.as_view(), name="admin-problem-create"),
    path("admin/problems/<int:problem_id>", AdminProblemDetailView.as_view(), name="admin-problem-detail"),
    path(
        "admin/problems/<int:problem_id>/submission-points",
        AdminSubmissionPointCreateView.as_view(),
        name="admin-submission-point-create",
    ),
    path(
        "admin/submission-points/<int:point_id>",
        AdminSubmissionPointDetailView.as_view(),
        name="admin-submission-point-detail",
    ),
]
