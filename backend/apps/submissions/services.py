"""提交模块的业务服务层

职责：
- 提交（按用户 + 题目 + 提交点覆盖写入）
- 我的提交、提交详情、删除自己的提交
- 评审队列：当前用户负责方向下的全部提交
"""

from __future__ import annotations

from typing import Optional

from django.db.models import QuerySet

from apps.accounts.services import serialize_user
from apps.common.base.base_service import BaseService
from apps.common.capabilities import Action, Actor, OwnedResource, ensure
from apps.common.exceptions import InvalidReferenceError, SubmissionNotFoundError
from apps.common.infra.logger import get_logger, logger_extra
from apps.common.utils.helpers import isoformat
from apps.directions.repo import DirectionRepo
from apps.problems.repo import ProblemRepo, SubmissionPointRepo
from apps.problems.services import serialize_problem_summary, serialize_submission_point

from .models import Submission
from .repo import SubmissionRepo
from .schemas import SubmissionCreateSchema

logger = get_logger(__name__)


def serialize_submission_summary(submission: Submission) -> dict[str, object]:
    return {
        "id": submission.pk,
        "content": submission.content,
        "user_id": submission.user_id,
        "problem_id": submission.problem_id,
        "submission_point_id": submission.submission_point_id,
        "created_at": isoformat(submission.created_at),
        "updated_at": isoformat(submission.updated_at),
    }


def serialize_submission(submission: Submission) -> dict[str, object]:
    """
    提交序列化：附带提交者、题目、提交点、有效评分与总分
    """
    # 评分模块依赖提交模块，这里延迟导入
    from apps.scores.services import serialize_score_summary

    data = serialize_submission_summary(submission)
    data.update(
        {
            "user": serialize_user(submission.user),
            "problem": serialize_problem_summary(submission.problem),
            "submission_point": serialize_submission_point(submission.submission_point),
            "scores": [serialize_score_summary(score) for score in submission.scores.all()],
            "total_score": getattr(submission, "total_score", 0) or 0,
        }
    )
    return data


class CreateSubmissionService(BaseService[Submission]):
    """
    提交服务：
    - 题目不存在 → ProblemNotFoundError
    - 提交点不存在或不属于该题目 → InvalidReferenceError
    - 同一 (用户, 题目, 提交点) 再次提交时覆盖内容，不新增记录
    """

    def __init__(
            self,
            submission_repo: SubmissionRepo | None = None,
            problem_repo: ProblemRepo | None = None,
            point_repo: SubmissionPointRepo | None = None,
    ):
        self.submission_repo = submission_repo or SubmissionRepo()
        self.problem_repo = problem_repo or ProblemRepo()
        self.point_repo = point_repo or SubmissionPointRepo()

    def perform(self, actor: Actor, schema: SubmissionCreateSchema) -> Submission:
        problem = self.problem_repo.get_or_raise(schema.problem_id)
        point = self.point_repo.get_in_problem(schema.submission_point_id, problem.pk)
        if point is None:
            raise InvalidReferenceError()

        submission, created = self.submission_repo.upsert(
            user_id=actor.user_id,
            problem_id=problem.pk,
            submission_point_id=point.pk,
            content=schema.content,
        )
        logger.info(
            "提交已创建" if created else "提交已覆盖",
            extra=logger_extra(
                {
                    "submission_id": submission.pk,
                    "user_id": actor.user_id,
                    "problem_id": problem.pk,
                    "submission_point_id": point.pk,
                }
            ),
        )
        return self.submission_repo.get_or_raise(submission.pk)


class MySubmissionListService(BaseService[QuerySet]):
    """当前用户的提交（带总分），可按题目过滤"""

    atomic_enabled = False

    def __init__(self, submission_repo: SubmissionRepo | None = None):
        self.submission_repo = submission_repo or SubmissionRepo()

    def perform(self, user_id: int, problem_id: Optional[int] = None) -> QuerySet:
        return self.submission_repo.list_for_user(user_id, problem_id)


class SubmissionDetailService(BaseService[Submission]):
    """提交详情：仅提交者本人或管理员可见"""

    atomic_enabled = False

    def __init__(self, submission_repo: SubmissionRepo | None = None):
        self.submission_repo = submission_repo or SubmissionRepo()

    def perform(self, actor: Actor, submission_id: int) -> Submission:
        submission = self.submission_repo.get_or_raise(submission_id)
        ensure(actor, Action.VIEW_SUBMISSION, OwnedResource(submission.user_id))
        return submission


class DeleteSubmissionService(BaseService[None]):
    """
    删除自己的提交：
    - 不存在与不属于当前用户统一为 SubmissionNotFoundError
    - 先软删除该提交的全部评分
    """

    def __init__(self, submission_repo: SubmissionRepo | None = None):
        self.submission_repo = submission_repo or SubmissionRepo()

    def perform(self, actor: Actor, submission_id: int) -> None:
        not_owned = SubmissionNotFoundError(message="提交不存在或无权限删除")
        submission = self.submission_repo.get_or_none(pk=submission_id)
        if submission is None:
            raise not_owned
        ensure(actor, Action.MUTATE_OWN, OwnedResource(submission.user_id), error=not_owned)

        removed_scores = self.submission_repo.delete_scores(submission)
        self.submission_repo.delete(submission)
        logger.info(
            "提交已删除",
            extra=logger_extra(
                {"submission_id": submission_id, "user_id": actor.user_id, "removed_scores": removed_scores}
            ),
        )


class ReviewSubmissionListService(BaseService[list]):
    """
    评审队列：
    - 先取评审人负责的方向，再取这些方向下的题目，最后取题目下的提交
    - problem_id 不在负责范围内时返回空列表，而不是报错
    """

    atomic_enabled = False

    def __init__(
            self,
            submission_repo: SubmissionRepo | None = None,
            direction_repo: DirectionRepo | None = None,
            problem_repo: ProblemRepo | None = None,
    ):
        self.submission_repo = submission_repo or SubmissionRepo()
        self.direction_repo = direction_repo or DirectionRepo()
        self.problem_repo = problem_repo or ProblemRepo()

    def perform(self, reviewer_id: int, problem_id: Optional[int] = None) -> list[Submission]:
        direction_ids = self.direction_repo.managed_direction_ids(reviewer_id)
        if not direction_ids:
            return []
        problem_ids = self.problem_repo.ids_in_directions(direction_ids)
        if problem_id:
            if problem_id not in problem_ids:
                return []
            problem_ids = [problem_id]
        if not problem_ids:
            return []
        return list(self.submission_repo.list_for_problems(problem_ids))
