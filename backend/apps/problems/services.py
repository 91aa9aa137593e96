"""题目模块的业务服务层

职责：
- 题目与提交点的增删改查
- 写操作统一走 capabilities：管理员或题目所属方向的负责人才能管理
- 删除时校验是否已有提交记录
"""

from __future__ import annotations

from typing import Optional

from django.db.models import QuerySet

from apps.common.base.base_service import BaseService
from apps.common.capabilities import Action, Actor, DirectionResource, ensure
from apps.common.exceptions import ConflictError
from apps.common.infra.logger import get_logger, logger_extra
from apps.common.utils.helpers import isoformat
from apps.directions.repo import DirectionRepo
from apps.directions.services import serialize_direction_summary

from .models import Problem, SubmissionPoint
from .repo import ProblemRepo, SubmissionPointRepo
from .schemas import (
    ProblemCreateSchema,
    ProblemUpdateSchema,
    SubmissionPointCreateSchema,
    SubmissionPointUpdateSchema,
)

logger = get_logger(__name__)


def serialize_problem_summary(problem: Problem) -> dict[str, object]:
    return {
        "id": problem.pk,
        "title": problem.title,
        "description": problem.description,
        "direction_id": problem.direction_id,
        "created_at": isoformat(problem.created_at),
        "updated_at": isoformat(problem.updated_at),
    }


def serialize_submission_point(point: SubmissionPoint) -> dict[str, object]:
    return {
        "id": point.pk,
        "name": point.name,
        "max_score": point.max_score,
        "problem_id": point.problem_id,
        "created_at": isoformat(point.created_at),
        "updated_at": isoformat(point.updated_at),
    }


def serialize_problem(problem: Problem) -> dict[str, object]:
    """题目详情：附带所属方向与未删除的提交点"""
    data = serialize_problem_summary(problem)
    data["direction"] = serialize_direction_summary(problem.direction)
    data["submission_points"] = [serialize_submission_point(point) for point in problem.submission_points.all()]
    return data


class CreateProblemService(BaseService[Problem]):
    """
    创建题目：
    - 方向不存在 → DirectionNotFoundError
    - 需要 MANAGE_PROBLEM（管理员或方向负责人）
    """

    def __init__(self, problem_repo: ProblemRepo | None = None, direction_repo: DirectionRepo | None = None):
        self.problem_repo = problem_repo or ProblemRepo()
        self.direction_repo = direction_repo or DirectionRepo()

    def perform(self, actor: Actor, schema: ProblemCreateSchema) -> Problem:
        direction = self.direction_repo.get_or_raise(schema.direction_id)
        ensure(actor, Action.MANAGE_PROBLEM, DirectionResource(direction.pk))
        problem = self.problem_repo.create(
            {"title": schema.title, "description": schema.description, "direction": direction}
        )
        logger.info(
            "题目已创建",
            extra=logger_extra({"problem_id": problem.pk, "direction_id": direction.pk, "user_id": actor.user_id}),
        )
        return self.problem_repo.get_or_raise(problem.pk)


class ProblemListService(BaseService[QuerySet]):
    """题目列表，可按方向过滤"""

    atomic_enabled = False

    def __init__(self, problem_repo: ProblemRepo | None = None):
        self.problem_repo = problem_repo or ProblemRepo()

    def perform(self, direction_id: Optional[int] = None) -> QuerySet:
        return self.problem_repo.list_by_direction(direction_id)


class ProblemDetailService(BaseService[Problem]):
    atomic_enabled = False

    def __init__(self, problem_repo: ProblemRepo | None = None):
        self.problem_repo = problem_repo or ProblemRepo()

    def perform(self, problem_id: int) -> Problem:
        return self.problem_repo.get_or_raise(problem_id)


class UpdateProblemService(BaseService[Problem]):
    """修改题目标题 / 描述，仅写入实际提供的字段"""

    def __init__(self, problem_repo: ProblemRepo | None = None):
        self.problem_repo = problem_repo or ProblemRepo()

    def perform(self, actor: Actor, problem_id: int, schema: ProblemUpdateSchema) -> Problem:
        problem = self.problem_repo.get_or_raise(problem_id)
        ensure(actor, Action.MANAGE_PROBLEM, DirectionResource(problem.direction_id))
        changes = schema.changes()
        self.problem_repo.update(problem, changes)
        logger.info(
            "题目已更新",
            extra=logger_extra({"problem_id": problem_id, "fields": sorted(changes.keys()), "user_id": actor.user_id}),
        )
        return self.problem_repo.get_or_raise(problem_id)


class DeleteProblemService(BaseService[None]):
    """
    删除题目：
    - 已有提交记录 → ConflictError
    - 先软删除其提交点，再软删除题目
    """

    def __init__(self, problem_repo: ProblemRepo | None = None):
        self.problem_repo = problem_repo or ProblemRepo()

    def perform(self, actor: Actor, problem_id: int) -> None:
        problem = self.problem_repo.get_or_raise(problem_id)
        ensure(actor, Action.MANAGE_PROBLEM, DirectionResource(problem.direction_id))
        if self.problem_repo.has_submissions(problem):
            raise ConflictError(message="该题目已有提交记录，无法删除")
        removed_points = self.problem_repo.delete_points(problem)
        self.problem_repo.delete(problem)
        logger.info(
            "题目已删除",
            extra=logger_extra({"problem_id": problem_id, "removed_points": removed_points, "user_id": actor.user_id}),
        )


class SubmissionPointListService(BaseService[QuerySet]):
    """题目下的提交点；题目不存在时抛 ProblemNotFoundError"""

    atomic_enabled = False

    def __init__(self, problem_repo: ProblemRepo | None = None, point_repo: SubmissionPointRepo | None = None):
        self.problem_repo = problem_repo or ProblemRepo()
        self.point_repo = point_repo or SubmissionPointRepo()

    def perform(self, problem_id: int) -> QuerySet:
        self.problem_repo.get_or_raise(problem_id)
        return self.point_repo.list_for_problem(problem_id)


class CreateSubmissionPointService(BaseService[SubmissionPoint]):
    def __init__(self, problem_repo: ProblemRepo | None = None, point_repo: SubmissionPointRepo | None = None):
        self.problem_repo = problem_repo or ProblemRepo()
        self.point_repo = point_repo or SubmissionPointRepo()

    def perform(self, actor: Actor, problem_id: int, schema: SubmissionPointCreateSchema) -> SubmissionPoint:
        problem = self.problem_repo.get_or_raise(problem_id)
        ensure(actor, Action.MANAGE_PROBLEM, DirectionResource(problem.direction_id))
        point = self.point_repo.create({"name": schema.name, "max_score": schema.max_score, "problem": problem})
        logger.info(
            "提交点已创建",
            extra=logger_extra({"submission_point_id": point.pk, "problem_id": problem_id, "user_id": actor.user_id}),
        )
        return point


class UpdateSubmissionPointService(BaseService[SubmissionPoint]):
    """修改提交点：授权依据为提交点所属题目的方向"""

    def __init__(self, point_repo: SubmissionPointRepo | None = None):
        self.point_repo = point_repo or SubmissionPointRepo()

    def perform(self, actor: Actor, point_id: int, schema: SubmissionPointUpdateSchema) -> SubmissionPoint:
        point = self.point_repo.get_or_raise(point_id)
        ensure(actor, Action.MANAGE_PROBLEM, DirectionResource(point.problem.direction_id))
        changes = schema.changes()
        point = self.point_repo.update(point, changes)
        logger.info(
            "提交点已更新",
            extra=logger_extra({"submission_point_id": point_id, "fields": sorted(changes.keys())}),
        )
        return point


class DeleteSubmissionPointService(BaseService[None]):
    def __init__(self, point_repo: SubmissionPointRepo | None = None):
        self.point_repo = point_repo or SubmissionPointRepo()

    def perform(self, actor: Actor, point_id: int) -> None:
        point = self.point_repo.get_or_raise(point_id)
        ensure(actor, Action.MANAGE_PROBLEM, DirectionResource(point.problem.direction_id))
        if self.point_repo.has_submissions(point):
            raise ConflictError(message="该提交点已有提交记录，无法删除")
        self.point_repo.delete(point)
        logger.info("提交点已删除", extra=logger_extra({"submission_point_id": point_id, "user_id": actor.user_id}))
