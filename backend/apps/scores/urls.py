from __future__ import annotations

from django.urls import path

from .views import (
    AdminMyReviewedScoreListView,
    AdminScoreCreateView,
    AdminScoreDetailView,
    MyScoreListView,
    RankingView,
    SubmissionScoreListView,
    UserScoreListView,
)

app_name = "scores"

urlpatterns = [
    path("ranking", RankingView.as_view(), name="ranking"),
    path("submissions/<int:submission_id>/scores", SubmissionScoreListView.as_view(), name="submission-scores"),
    path("scores/my", MyScoreListView.as_view(), name="score-my"),
    path("users/<int:user_id>/scores", UserScoreListView.as_view(), name="user-scores"),
    path("admin/scores", AdminScoreCreateView.as_view(), name="admin-score-create"),
    path("admin/scores/my", AdminMyReviewedScoreListView.as_view(), name="admin-score-my"),
    path("admin/scores/<int:score_id>", AdminScoreDetailView.as_view(), name="admin-score-detail"),
]
