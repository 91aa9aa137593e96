from __future__ import annotations

from rest_framework.test import APITestCase

from apps.accounts.models import User
from apps.common.tests_utils import AuthenticatedAPIMixin
from apps.directions.models import Direction
from apps.problems.models import Problem, SubmissionPoint
from apps.scores.models import Score
from apps.submissions.models import Submission


class SubmissionAPITestCase(AuthenticatedAPIMixin, APITestCase):
    """
    提交模块接口测试：
    - 同一 (用户, 题目, 提交点) 重复提交覆盖内容
    - 提交点必须属于题目
    - 我的提交附带总分；详情仅本人或管理员可见
    - 删除本人提交连带删除评分；他人提交视为不存在
    - 评审队列只包含负责方向下的提交
    """

    @classmethod
    def setUpTestData(cls):
        cls.admin = User.objects.create_user(username="admin", password="admin123", nickname="管理员", is_admin=True)
        cls.reviewer = User.objects.create_user(username="mgr", password="password123", nickname="负责人", is_admin=True)
        cls.alice = User.objects.create_user(username="alice", password="secret1", nickname="爱丽丝")
        cls.bob = User.objects.create_user(username="bob", password="password123", nickname="鲍勃")

        cls.backend = Direction.objects.create(name="后端")
        cls.backend.managers.add(cls.reviewer)
        cls.frontend = Direction.objects.create(name="前端")

        cls.problem = Problem.objects.create(title="实现 API", description="desc", direction=cls.backend)
        cls.point = SubmissionPoint.objects.create(name="代码", max_score=100, problem=cls.problem)
        cls.other_problem = Problem.objects.create(title="做个页面", description="desc", direction=cls.frontend)
        cls.other_point = SubmissionPoint.objects.create(name="截图", max_score=10, problem=cls.other_problem)

    def setUp(self):
        self.alice_client = self.auth_client("alice", "secret1")

    def submit(self, client=None, **payload):
        body = {
            "content": "http://repo",
            "problem_id": self.problem.pk,
            "submission_point_id": self.point.pk,
            **payload,
        }
        return (client or self.alice_client).post("/api/submissions", body, format="json")

    def test_submit_requires_login(self):
        resp = self.client.post("/api/submissions", {"content": "x"}, format="json")
        self.assertEqual(resp.status_code, 401)

    def test_resubmission_overwrites_content(self):
        first = self.submit()
        self.assertEqual(first.data["code"], 0)
        second = self.submit(content="http://repo-v2")
        self.assertEqual(second.data["data"]["id"], first.data["data"]["id"])
        self.assertEqual(second.data["data"]["content"], "http://repo-v2")
        self.assertEqual(
            Submission.objects.filter(user=self.alice, problem=self.problem, submission_point=self.point).count(),
            1,
        )

    def test_point_must_belong_to_problem(self):
        resp = self.submit(submission_point_id=self.other_point.pk)
        self.assertEqual(resp.data["code"], 3004)
        self.assertFalse(Submission.objects.exists())

    def test_unknown_problem(self):
        resp = self.submit(problem_id=99999)
        self.assertEqual(resp.data["code"], 2002)

    def test_blank_content_rejected(self):
        resp = self.submit(content="   ")
        self.assertEqual(resp.data["code"], 3001)

    def test_my_submissions_include_total_score(self):
        submission_id = self.submit().data["data"]["id"]
        Score.objects.create(score=30, user=self.alice, submission_id=submission_id, reviewer=self.reviewer)
        Score.objects.create(score=20, user=self.alice, submission_id=submission_id, reviewer=self.admin)
        self.submit(problem_id=self.other_problem.pk, submission_point_id=self.other_point.pk)

        resp = self.alice_client.get("/api/submissions/my")
        self.assertEqual(resp.data["code"], 0)
        totals = {item["problem_id"]: item["total_score"] for item in resp.data["data"]}
        self.assertEqual(totals, {self.problem.pk: 50, self.other_problem.pk: 0})

        resp = self.alice_client.get("/api/submissions/my", {"problem_id": self.other_problem.pk})
        self.assertEqual(len(resp.data["data"]), 1)
        self.assertEqual(resp.data["data"][0]["scores"], [])

    def test_detail_visible_to_owner_and_admin_only(self):
        submission_id = self.submit().data["data"]["id"]
        url = f"/api/submissions/{submission_id}"

        resp = self.alice_client.get(url)
        self.assertEqual(resp.data["data"]["user"]["username"], "alice")
        self.assertEqual(resp.data["data"]["submission_point"]["name"], "代码")

        resp = self.auth_client("bob", "password123").get(url)
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.data["code"], 1005)

        resp = self.auth_client("admin", "admin123").get(url)
        self.assertEqual(resp.data["code"], 0)

        resp = self.alice_client.get("/api/submissions/99999")
        self.assertEqual(resp.data["code"], 2003)

    def test_delete_not_owned_is_not_found(self):
        submission_id = self.submit().data["data"]["id"]
        resp = self.auth_client("bob", "password123").delete(f"/api/submissions/{submission_id}")
        self.assertEqual(resp.data["code"], 2003)
        self.assertTrue(Submission.objects.filter(pk=submission_id).exists())

    def test_delete_cascades_scores(self):
        submission_id = self.submit().data["data"]["id"]
        score = Score.objects.create(score=80, user=self.alice, submission_id=submission_id, reviewer=self.reviewer)

        resp = self.alice_client.delete(f"/api/submissions/{submission_id}")
        self.assertEqual(resp.data["code"], 0)
        self.assertFalse(Submission.objects.filter(pk=submission_id).exists())
        self.assertFalse(Score.objects.filter(pk=score.pk).exists())
        self.assertFalse(Score.objects.filter(submission_id=submission_id).exists())

        # 删除后可以重新提交同一提交点
        resp = self.submit()
        self.assertEqual(resp.data["code"], 0)
        self.assertNotEqual(resp.data["data"]["id"], submission_id)

    def test_review_queue_scoped_to_managed_directions(self):
        own = self.submit().data["data"]["id"]
        self.submit(problem_id=self.other_problem.pk, submission_point_id=self.other_point.pk)

        reviewer_client = self.auth_client("mgr", "password123")
        resp = reviewer_client.get("/api/admin/submissions/review")
        self.assertEqual([item["id"] for item in resp.data["data"]], [own])

        resp = reviewer_client.get("/api/admin/submissions/review", {"problem_id": self.other_problem.pk})
        self.assertEqual(resp.data["code"], 0)
        self.assertEqual(resp.data["data"], [])

        # 管理员若不负责任何方向，评审队列为空
        resp = self.auth_client("admin", "admin123").get("/api/admin/submissions/review")
        self.assertEqual(resp.data["data"], [])
