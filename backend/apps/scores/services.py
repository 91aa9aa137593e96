"""评分模块的业务服务层

职责：
- 评分（按提交 + 评审人覆盖写入），分数不得超过提交点最大分值
- 按提交 / 被评分用户 / 评审人查询评分
- 评审人修改、删除自己的评分
- 排行榜
"""

from __future__ import annotations

from typing import Optional

from django.db.models import QuerySet

from apps.accounts.services import serialize_user
from apps.common.base.base_service import BaseService
from apps.common.capabilities import Action, Actor, DirectionResource, OwnedResource, ensure
from apps.common.exceptions import PermissionDeniedError, ValidationError
from apps.common.infra.logger import get_logger, logger_extra
from apps.common.utils.helpers import isoformat
from apps.submissions.repo import SubmissionRepo
from apps.submissions.services import serialize_submission_summary

from .models import Score
from .repo import ScoreRepo
from .schemas import ScoreCreateSchema, ScoreUpdateSchema

logger = get_logger(__name__)

CEILING_MESSAGE = "评分不能超过最大分值"


def serialize_score_summary(score: Score) -> dict[str, object]:
    return {
        "id": score.pk,
        "score": score.score,
        "comment": score.comment,
        "user_id": score.user_id,
        "submission_id": score.submission_id,
        "reviewer_id": score.reviewer_id,
        "created_at": isoformat(score.created_at),
        "updated_at": isoformat(score.updated_at),
    }


def serialize_score(score: Score) -> dict[str, object]:
    """评分详情：附带被评分用户、提交与评审人"""
    data = serialize_score_summary(score)
    data.update(
        {
            "user": serialize_user(score.user),
            "submission": serialize_submission_summary(score.submission),
            "reviewer": serialize_user(score.reviewer),
        }
    )
    return data


def _ensure_within_ceiling(value: int, max_score: int) -> None:
    if value > max_score:
        raise ValidationError(message=CEILING_MESSAGE)


class CreateScoreService(BaseService[Score]):
    """
    评分服务：
    - 提交不存在 → SubmissionNotFoundError
    - 评审人必须是提交所属方向的负责人（管理员身份不自动放行）
    - 超过提交点最大分值 → ValidationError，且不写入任何数据
    - 同一评审人再次评分时覆盖原分数与评语
    """

    def __init__(self, score_repo: ScoreRepo | None = None, submission_repo: SubmissionRepo | None = None):
        self.score_repo = score_repo or ScoreRepo()
        self.submission_repo = submission_repo or SubmissionRepo()

    def perform(self, actor: Actor, schema: ScoreCreateSchema) -> Score:
        submission = self.submission_repo.get_or_raise(schema.submission_id)
        ensure(
            actor,
            Action.SCORE_SUBMISSION,
            DirectionResource(submission.problem.direction_id),
            error=PermissionDeniedError(message="无权限评分该提交"),
        )
        _ensure_within_ceiling(schema.score, submission.submission_point.max_score)

        score, created = self.score_repo.upsert(
            submission=submission,
            reviewer_id=actor.user_id,
            score=schema.score,
            comment=schema.comment or "",
        )
        logger.info(
            "评分已创建" if created else "评分已覆盖",
            extra=logger_extra(
                {
                    "score_id": score.pk,
                    "submission_id": submission.pk,
                    "reviewer_id": actor.user_id,
                    "score": schema.score,
                }
            ),
        )
        return self.score_repo.get_or_raise(score.pk)


class SubmissionScoreListService(BaseService[QuerySet]):
    atomic_enabled = False

    def __init__(self, score_repo: ScoreRepo | None = None):
        self.score_repo = score_repo or ScoreRepo()

    def perform(self, submission_id: int) -> QuerySet:
        return self.score_repo.list_for_submission(submission_id)


class UserScoreListService(BaseService[QuerySet]):
    """某用户收到的评分，可按题目过滤"""

    atomic_enabled = False

    def __init__(self, score_repo: ScoreRepo | None = None):
        self.score_repo = score_repo or ScoreRepo()

    def perform(self, user_id: int, problem_id: Optional[int] = None) -> QuerySet:
        return self.score_repo.list_for_user(user_id, problem_id)


class ReviewerScoreListService(BaseService[QuerySet]):
    """某评审人给出的评分，可按题目过滤"""

    atomic_enabled = False

    def __init__(self, score_repo: ScoreRepo | None = None):
        self.score_repo = score_repo or ScoreRepo()

    def perform(self, reviewer_id: int, problem_id: Optional[int] = None) -> QuerySet:
        return self.score_repo.list_for_reviewer(reviewer_id, problem_id)


class UpdateScoreService(BaseService[Score]):
    """
    修改评分：
    - 评分不存在或不属于当前评审人 → PermissionDeniedError
    - 新分数同样受提交点最大分值约束
    """

    def __init__(self, score_repo: ScoreRepo | None = None):
        self.score_repo = score_repo or ScoreRepo()

    def perform(self, actor: Actor, score_id: int, schema: ScoreUpdateSchema) -> Score:
        not_owned = PermissionDeniedError(message="评分不存在或无权限修改")
        score = self.score_repo.get_or_none(pk=score_id)
        if score is None:
            raise not_owned
        ensure(actor, Action.MUTATE_OWN, OwnedResource(score.reviewer_id), error=not_owned)

        changes = schema.changes()
        if "score" in changes:
            _ensure_within_ceiling(changes["score"], score.submission.submission_point.max_score)
        self.score_repo.update(score, changes)
        logger.info(
            "评分已更新",
            extra=logger_extra({"score_id": score_id, "reviewer_id": actor.user_id, "fields": sorted(changes.keys())}),
        )
        return self.score_repo.get_or_raise(score_id)


class DeleteScoreService(BaseService[None]):
    def __init__(self, score_repo: ScoreRepo | None = None):
        self.score_repo = score_repo or ScoreRepo()

    def perform(self, actor: Actor, score_id: int) -> None:
        not_owned = PermissionDeniedError(message="评分不存在或无权限删除")
        score = self.score_repo.get_or_none(pk=score_id)
        if score is None:
            raise not_owned
        ensure(actor, Action.MUTATE_OWN, OwnedResource(score.reviewer_id), error=not_owned)
        self.score_repo.delete(score)
        logger.info("评分已删除", extra=logger_extra({"score_id": score_id, "reviewer_id": actor.user_id}))


class RankingService(BaseService[list[dict]]):
    """
    排行榜服务：
    - 汇总每位用户收到的评分，可限定方向
    - limit 的默认值与上下限由视图层收敛后传入
    """

    atomic_enabled = False

    def __init__(self, score_repo: ScoreRepo | None = None):
        self.score_repo = score_repo or ScoreRepo()

    def perform(self, direction_id: Optional[int] = None, limit: int = 10) -> list[dict]:
        return self.score_repo.ranking(direction_id, limit)
