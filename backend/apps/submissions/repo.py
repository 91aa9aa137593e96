from __future__ import annotations

from typing import Optional

from django.db.models import IntegerField, Q, QuerySet, Sum
from django.db.models.functions import Coalesce

from apps.common.base.base_repo import BaseRepo
from apps.common.exceptions import SubmissionNotFoundError

from .models import Submission


# 仓储层：封装提交记录的查询与写入


class SubmissionRepo(BaseRepo[Submission]):
    """
    提交仓储：
    - 默认带上用户、题目、提交点与未删除的评分，避免序列化时 N+1
    - total_score 为该提交全部有效评分之和，无评分时为 0
    """

    model = Submission
    not_found_error = SubmissionNotFoundError

    def get_queryset(self) -> QuerySet[Submission]:
        return (
            super()
            .get_queryset()
            .select_related("user", "problem", "submission_point")
            .prefetch_related("scores")
            .annotate(
                total_score=Coalesce(
                    Sum("scores__score", filter=Q(scores__deleted_at__isnull=True)),
                    0,
                    output_field=IntegerField(),
                )
            )
            .order_by("id")
        )

    def list_for_user(self, user_id: int, problem_id: Optional[int] = None) -> QuerySet[Submission]:
        qs = self.filter(user_id=user_id)
        if problem_id:
            qs = qs.filter(problem_id=problem_id)
        return qs

    def list_for_problems(self, problem_ids: list[int]) -> QuerySet[Submission]:
        return self.filter(problem_id__in=problem_ids)

    def upsert(self, *, user_id: int, problem_id: int, submission_point_id: int, content: str) -> tuple[Submission, bool]:
        """
        按 (user, problem, submission_point) 写入：已存在则覆盖 content
        唯一约束保证并发下只会留下一条有效记录
        """
        return self.model.objects.update_or_create(
            user_id=user_id,
            problem_id=problem_id,
            submission_point_id=submission_point_id,
            defaults={"content": content},
        )

    @staticmethod
    def delete_scores(submission: Submission) -> int:
        return submission.scores.all().soft_delete()
