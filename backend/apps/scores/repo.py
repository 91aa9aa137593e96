"""评分与排行榜的数据访问层"""

from __future__ import annotations

from typing import Optional

from django.contrib.auth import get_user_model
from django.db.models import IntegerField, Q, QuerySet, Sum
from django.db.models.functions import Coalesce

from apps.common.base.base_repo import BaseRepo
from apps.common.exceptions import ScoreNotFoundError

from .models import Score


class ScoreRepo(BaseRepo[Score]):
    """
    评分仓储：
    - 默认关联被评分用户、提交（含提交点）与评审人
    - problem_id 过滤经由提交关联
    """

    model = Score
    not_found_error = ScoreNotFoundError

    def get_queryset(self) -> QuerySet[Score]:
        return (
            super()
            .get_queryset()
            .select_related("user", "reviewer", "submission", "submission__submission_point")
            .order_by("id")
        )

    def _by_problem(self, qs: QuerySet[Score], problem_id: Optional[int]) -> QuerySet[Score]:
        if problem_id:
            qs = qs.filter(submission__problem_id=problem_id)
        return qs

    def list_for_submission(self, submission_id: int) -> QuerySet[Score]:
        return self.filter(submission_id=submission_id)

    def list_for_user(self, user_id: int, problem_id: Optional[int] = None) -> QuerySet[Score]:
        return self._by_problem(self.filter(user_id=user_id), problem_id)

    def list_for_reviewer(self, reviewer_id: int, problem_id: Optional[int] = None) -> QuerySet[Score]:
        return self._by_problem(self.filter(reviewer_id=reviewer_id), problem_id)

    def upsert(self, *, submission, reviewer_id: int, score: int, comment: str) -> tuple[Score, bool]:
        """
        按 (submission, reviewer) 写入：已存在则覆盖分数与评语
        """
        return self.model.objects.update_or_create(
            submission=submission,
            reviewer_id=reviewer_id,
            defaults={"score": score, "comment": comment, "user_id": submission.user_id},
        )

    @staticmethod
    def ranking(direction_id: Optional[int], limit: int) -> list[dict]:
        """
        排行榜：每位用户收到的有效评分之和
        - 不限方向时，没有任何评分的用户同样出现，得分为 0
        - direction_id 提供时只统计该方向题目下的评分，且只列出在该方向得过分的用户
        - 按总分降序，同分按用户 ID 升序
        """
        users = get_user_model().objects.all()
        score_filter = Q(received_scores__deleted_at__isnull=True)
        if direction_id:
            score_filter &= Q(received_scores__submission__problem__direction_id=direction_id)
            users = users.filter(
                pk__in=Score.objects.filter(submission__problem__direction_id=direction_id).values("user_id")
            )
        rows = (
            users.annotate(
                total=Coalesce(
                    Sum("received_scores__score", filter=score_filter),
                    0,
                    output_field=IntegerField(),
                )
            )
            .order_by("-total", "id")
            .values("id", "nickname", "total")[:limit]
        )
        return [{"user_id": row["id"], "nickname": row["nickname"], "score": row["total"]} for row in rows]
