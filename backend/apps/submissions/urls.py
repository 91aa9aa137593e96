from __future__ import annotations

from django.urls import path

from .views import (
    AdminReviewSubmissionListView,
    MySubmissionListView,
    SubmissionCreateView,
    SubmissionDetailView,
)

app_name = "submissions"

urlpatterns = [
    path("submissions", SubmissionCreateView.as_view(), name="submission-create"),
    path("submissions/my", MySubmissionListView.as_view(), name="submission-my"),
    path("submissions/<int:submission_id>", SubmissionDetailView.as_view(), name="submission-detail"),
    path("admin/submissions/review", AdminReviewSubmissionListView.as_view(), name="admin-submission-review"),
]
