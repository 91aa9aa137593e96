"""题目与提交点的数据访问层"""

from __future__ import annotations

from typing import Optional

from django.db.models import QuerySet

from apps.common.base.base_repo import BaseRepo
from apps.common.exceptions import ProblemNotFoundError, SubmissionPointNotFoundError

from .models import Problem, SubmissionPoint


class ProblemRepo(BaseRepo[Problem]):
    """
    题目仓储：
    - 默认关联方向、预加载未删除的提交点
    - 删除题目时批量软删除其提交点
    """

    model = Problem
    not_found_error = ProblemNotFoundError

    def get_queryset(self) -> QuerySet[Problem]:
        return (
            super()
            .get_queryset()
            .select_related("direction")
            .prefetch_related("submission_points")
            .order_by("id")
        )

    def list_by_direction(self, direction_id: Optional[int] = None) -> QuerySet[Problem]:
        qs = self.get_queryset()
        if direction_id:
            qs = qs.filter(direction_id=direction_id)
        return qs

    def ids_in_directions(self, direction_ids: list[int]) -> list[int]:
        return list(self.filter(direction_id__in=direction_ids).values_list("id", flat=True))

    @staticmethod
    def has_submissions(problem: Problem) -> bool:
        return problem.submissions.exists()

    @staticmethod
    def delete_points(problem: Problem) -> int:
        return SubmissionPoint.objects.filter(problem=problem).soft_delete()


class SubmissionPointRepo(BaseRepo[SubmissionPoint]):
    """提交点仓储：附带所属题目，便于推导方向做授权"""

    model = SubmissionPoint
    not_found_error = SubmissionPointNotFoundError

    def get_queryset(self) -> QuerySet[SubmissionPoint]:
        return super().get_queryset().select_related("problem").order_by("id")

    def list_for_problem(self, problem_id: int) -> QuerySet[SubmissionPoint]:
        return self.filter(problem_id=problem_id)

    def get_in_problem(self, point_id: int, problem_id: int) -> Optional[SubmissionPoint]:
        """提交点存在且属于该题目时返回，否则 None"""
        return self.get_or_none(pk=point_id, problem_id=problem_id)

    @staticmethod
    def has_submissions(point: SubmissionPoint) -> bool:
        return point.submissions.exists()
