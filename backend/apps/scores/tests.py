from __future__ import annotations

from rest_framework.test import APITestCase

from apps.accounts.models import User
from apps.common.tests_utils import AuthenticatedAPIMixin
from apps.directions.models import Direction
from apps.problems.models import Problem, SubmissionPoint
from apps.scores.models import Score
from apps.scores.services import RankingService
from apps.submissions.models import Submission


class ScoreAPITestCase(AuthenticatedAPIMixin, APITestCase):
    """
    评分模块接口测试：
    - 只有提交所属方向的负责人可以评分，同一评审人重复评分覆盖
    - 分数上限为提交点最大分值，超限不落库
    - 评审人只能修改 / 删除自己的评分
    - 按提交、用户、评审人查询
    """

    @classmethod
    def setUpTestData(cls):
        cls.admin = User.objects.create_user(username="admin", password="admin123", nickname="管理员", is_admin=True)
        cls.reviewer = User.objects.create_user(username="mgr", password="password123", nickname="负责人", is_admin=True)
        cls.alice = User.objects.create_user(username="alice", password="secret1", nickname="爱丽丝")

        cls.backend = Direction.objects.create(name="后端")
        cls.backend.managers.add(cls.reviewer)
        cls.problem = Problem.objects.create(title="实现 API", description="desc", direction=cls.backend)
        cls.point = SubmissionPoint.objects.create(name="代码", max_score=100, problem=cls.problem)
        cls.submission = Submission.objects.create(
            content="http://repo",
            user=cls.alice,
            problem=cls.problem,
            submission_point=cls.point,
        )

    def setUp(self):
        self.reviewer_client = self.auth_client("mgr", "password123")

    def score(self, value, client=None, **payload):
        body = {"score": value, "comment": "不错", "submission_id": self.submission.pk, **payload}
        return (client or self.reviewer_client).post("/api/admin/scores", body, format="json")

    def test_manager_scores_submission(self):
        resp = self.score(85)
        self.assertEqual(resp.data["code"], 0)
        data = resp.data["data"]
        self.assertEqual(data["score"], 85)
        self.assertEqual(data["user_id"], self.alice.pk)
        self.assertEqual(data["reviewer"]["username"], "mgr")
        self.assertEqual(data["submission"]["id"], self.submission.pk)

    def test_rescoring_overwrites(self):
        first = self.score(85).data["data"]["id"]
        resp = self.score(90, comment="更好了")
        self.assertEqual(resp.data["data"]["id"], first)
        self.assertEqual(Score.objects.filter(submission=self.submission, reviewer=self.reviewer).count(), 1)
        stored = Score.objects.get(pk=first)
        self.assertEqual((stored.score, stored.comment), (90, "更好了"))

    def test_score_above_ceiling_is_rejected(self):
        resp = self.score(101)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["code"], 3001)
        self.assertEqual(resp.data["message"], "评分不能超过最大分值")
        self.assertFalse(Score.objects.exists())

    def test_negative_score_is_rejected(self):
        resp = self.score(-1)
        self.assertEqual(resp.data["code"], 3001)

    def test_admin_without_membership_cannot_score(self):
        resp = self.score(50, client=self.auth_client("admin", "admin123"))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.data["code"], 1005)
        self.assertFalse(Score.objects.exists())

    def test_unknown_submission(self):
        resp = self.score(50, submission_id=99999)
        self.assertEqual(resp.data["code"], 2003)

    def test_update_own_score_respects_ceiling(self):
        score_id = self.score(60).data["data"]["id"]
        url = f"/api/admin/scores/{score_id}"

        resp = self.reviewer_client.put(url, {"score": 70}, format="json")
        self.assertEqual(resp.data["data"]["score"], 70)
        self.assertEqual(resp.data["data"]["comment"], "不错")

        resp = self.reviewer_client.put(url, {"score": 150}, format="json")
        self.assertEqual(resp.data["code"], 3001)
        self.assertEqual(Score.objects.get(pk=score_id).score, 70)

    def test_update_and_delete_require_ownership(self):
        score_id = self.score(60).data["data"]["id"]
        admin_client = self.auth_client("admin", "admin123")

        resp = admin_client.put(f"/api/admin/scores/{score_id}", {"score": 1}, format="json")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.data["message"], "评分不存在或无权限修改")

        resp = admin_client.delete(f"/api/admin/scores/{score_id}")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.data["message"], "评分不存在或无权限删除")

        resp = self.reviewer_client.delete("/api/admin/scores/99999")
        self.assertEqual(resp.status_code, 403)

        resp = self.reviewer_client.delete(f"/api/admin/scores/{score_id}")
        self.assertEqual(resp.data["code"], 0)
        self.assertFalse(Score.objects.filter(pk=score_id).exists())

    def test_score_listings(self):
        self.score(40)
        alice_client = self.auth_client("alice", "secret1")

        resp = alice_client.get(f"/api/submissions/{self.submission.pk}/scores")
        self.assertEqual([item["score"] for item in resp.data["data"]], [40])

        resp = alice_client.get("/api/scores/my")
        self.assertEqual(len(resp.data["data"]), 1)

        resp = alice_client.get("/api/scores/my", {"problem_id": 99999})
        self.assertEqual(resp.data["data"], [])

        resp = alice_client.get(f"/api/users/{self.alice.pk}/scores")
        self.assertEqual(resp.data["data"][0]["reviewer_id"], self.reviewer.pk)

        resp = self.reviewer_client.get("/api/admin/scores/my", {"problem_id": self.problem.pk})
        self.assertEqual(len(resp.data["data"]), 1)


class RankingTestCase(AuthenticatedAPIMixin, APITestCase):
    """排行榜：降序、零分用户、方向过滤与 limit 收敛"""

    @classmethod
    def setUpTestData(cls):
        cls.reviewer = User.objects.create_user(username="mgr", password="password123", nickname="负责人", is_admin=True)
        cls.alice = User.objects.create_user(username="alice", password="secret1", nickname="爱丽丝")
        cls.bob = User.objects.create_user(username="bob", password="password123", nickname="鲍勃")

        cls.backend = Direction.objects.create(name="后端")
        cls.frontend = Direction.objects.create(name="前端")
        for direction, user, value in ((cls.backend, cls.alice, 30), (cls.frontend, cls.bob, 50)):
            problem = Problem.objects.create(title=f"{direction.name}题", description="d", direction=direction)
            point = SubmissionPoint.objects.create(name="代码", max_score=100, problem=problem)
            submission = Submission.objects.create(content="c", user=user, problem=problem, submission_point=point)
            Score.objects.create(score=value, user=user, submission=submission, reviewer=cls.reviewer)

    def test_ranking_orders_by_total_and_includes_zero(self):
        resp = self.client.get("/api/ranking")
        self.assertEqual(resp.data["code"], 0)
        rows = resp.data["data"]
        self.assertEqual([row["user_id"] for row in rows], [self.bob.pk, self.alice.pk, self.reviewer.pk])
        self.assertEqual([row["score"] for row in rows], [50, 30, 0])
        self.assertEqual(rows[0]["nickname"], "鲍勃")

    def test_ranking_filtered_by_direction(self):
        rows = RankingService().execute(self.backend.pk, 10)
        self.assertEqual(rows, [{"user_id": self.alice.pk, "nickname": "爱丽丝", "score": 30}])

        resp = self.client.get("/api/ranking", {"direction_id": self.frontend.pk})
        self.assertEqual([row["user_id"] for row in resp.data["data"]], [self.bob.pk])

    def test_direction_without_scores_has_empty_ranking(self):
        Score.objects.filter(user=self.alice).soft_delete()
        self.assertEqual(RankingService().execute(self.backend.pk, 10), [])

        empty = Direction.objects.create(name="设计")
        self.assertEqual(RankingService().execute(empty.pk, 10), [])

    def test_ranking_limit_clamped(self):
        resp = self.client.get("/api/ranking", {"limit": 1})
        self.assertEqual(len(resp.data["data"]), 1)
        for raw in (0, 101, "abc"):
            resp = self.client.get("/api/ranking", {"limit": raw})
            self.assertEqual(len(resp.data["data"]), 3)

    def test_deleted_scores_are_ignored(self):
        Score.objects.filter(user=self.bob).soft_delete()
        rows = RankingService().execute(None, 10)
        self.assertEqual(rows[0]["user_id"], self.alice.pk)


class GradingFlowTestCase(AuthenticatedAPIMixin, APITestCase):
    """端到端：注册 → 建方向 / 题目 / 提交点 → 提交 → 负责人评分 → 排行榜 → 重新评分"""

    @classmethod
    def setUpTestData(cls):
        User.objects.create_user(username="admin", password="admin123", nickname="管理员", is_admin=True)
        cls.manager = User.objects.create_user(username="mgr", password="password123", nickname="负责人", is_admin=True)

    def test_alice_backend_scenario(self):
        resp = self.client.post(
            "/api/auth/register",
            {
                "username": "alice",
                "password": "secret1",
                "nickname": "爱丽丝",
                "real_name": "Alice",
                "college": "计算机学院",
                "student_id": "2024001",
            },
            format="json",
        )
        self.assertEqual(resp.data["code"], 0)
        alice_id = resp.data["data"]["id"]
        alice_client = self.auth_client("alice", "secret1")

        admin_client = self.auth_client("admin", "admin123")
        resp = admin_client.post(
            "/api/admin/directions",
            {"name": "Backend", "manager_ids": [self.manager.pk]},
            format="json",
        )
        direction_id = resp.data["data"]["id"]
        resp = admin_client.post(
            "/api/admin/problems",
            {"title": "Build an API", "description": "REST", "direction_id": direction_id},
            format="json",
        )
        problem_id = resp.data["data"]["id"]
        resp = admin_client.post(
            f"/api/admin/problems/{problem_id}/submission-points",
            {"name": "Code", "max_score": 100},
            format="json",
        )
        point_id = resp.data["data"]["id"]

        resp = alice_client.post(
            "/api/submissions",
            {"content": "http://repo", "problem_id": problem_id, "submission_point_id": point_id},
            format="json",
        )
        submission_id = resp.data["data"]["id"]

        manager_client = self.auth_client("mgr", "password123")
        resp = manager_client.post(
            "/api/admin/scores",
            {"score": 85, "submission_id": submission_id},
            format="json",
        )
        self.assertEqual(resp.data["code"], 0)

        resp = self.client.get("/api/ranking", {"direction_id": direction_id})
        self.assertEqual(resp.data["data"][0], {"user_id": alice_id, "nickname": "爱丽丝", "score": 85})

        resp = manager_client.post(
            "/api/admin/scores",
            {"score": 90, "submission_id": submission_id},
            format="json",
        )
        self.assertEqual(resp.data["code"], 0)
        self.assertEqual(Score.objects.filter(submission_id=submission_id).count(), 1)

        resp = self.client.get("/api/ranking", {"direction_id": direction_id})
        self.assertEqual(resp.data["data"][0]["score"], 90)

        resp = alice_client.get("/api/submissions/my")
        self.assertEqual(resp.data["data"][0]["total_score"], 90)
