from __future__ import annotations

from rest_framework.test import APITestCase

from apps.accounts.models import User
from apps.common.tests_utils import AuthenticatedAPIMixin
from apps.directions.models import Direction
from apps.problems.models import Problem, SubmissionPoint
from apps.submissions.models import Submission


class ProblemAPITestCase(AuthenticatedAPIMixin, APITestCase):
    """
    题目与提交点接口测试：
    - 公开浏览（列表按方向过滤、详情附带提交点）
    - 管理员题目 / 提交点的增删改
    - 方向授权：管理员放行，非管理员调用管理接口被拒
    - 有提交记录时删除冲突
    """

    @classmethod
    def setUpTestData(cls):
        cls.admin = User.objects.create_user(username="admin", password="admin123", nickname="管理员", is_admin=True)
        cls.student = User.objects.create_user(username="alice", password="secret1", nickname="爱丽丝")
        cls.backend = Direction.objects.create(name="后端")
        cls.frontend = Direction.objects.create(name="前端")

    def setUp(self):
        self.admin_client = self.auth_client("admin", "admin123")

    def create_problem(self, direction=None, **payload):
        body = {
            "title": "实现 API",
            "description": "使用任意框架",
            "direction_id": (direction or self.backend).pk,
            **payload,
        }
        resp = self.admin_client.post("/api/admin/problems", body, format="json")
        self.assertEqual(resp.data["code"], 0, resp.data)
        return resp.data["data"]

    def create_point(self, problem_id, name="代码", max_score=100):
        resp = self.admin_client.post(
            f"/api/admin/problems/{problem_id}/submission-points",
            {"name": name, "max_score": max_score},
            format="json",
        )
        self.assertEqual(resp.data["code"], 0, resp.data)
        return resp.data["data"]

    def test_create_problem_and_fetch_detail(self):
        problem = self.create_problem()
        self.assertEqual(problem["direction"]["name"], "后端")
        self.create_point(problem["id"])

        resp = self.client.get(f"/api/problems/{problem['id']}")
        self.assertEqual(resp.data["code"], 0)
        self.assertEqual(resp.data["data"]["submission_points"][0]["max_score"], 100)

        resp = self.client.get(f"/api/problems/{problem['id']}/submission-points")
        self.assertEqual(len(resp.data["data"]), 1)

    def test_create_problem_unknown_direction(self):
        resp = self.admin_client.post(
            "/api/admin/problems",
            {"title": "t", "description": "d", "direction_id": 99999},
            format="json",
        )
        self.assertEqual(resp.data["code"], 2001)

    def test_create_problem_missing_description(self):
        resp = self.admin_client.post(
            "/api/admin/problems",
            {"title": "t", "direction_id": self.backend.pk},
            format="json",
        )
        self.assertEqual(resp.data["code"], 3001)

    def test_non_admin_cannot_manage_problems(self):
        client = self.auth_client("alice", "secret1")
        resp = client.post(
            "/api/admin/problems",
            {"title": "t", "description": "d", "direction_id": self.backend.pk},
            format="json",
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.data["code"], 1005)

    def test_list_filters_by_direction(self):
        self.create_problem()
        self.create_problem(direction=self.frontend, title="做个页面")

        resp = self.client.get("/api/problems")
        self.assertEqual(len(resp.data["data"]), 2)

        resp = self.client.get("/api/problems", {"direction_id": self.frontend.pk})
        self.assertEqual([p["title"] for p in resp.data["data"]], ["做个页面"])

        # 无法解析的过滤参数视为未提供
        resp = self.client.get("/api/problems", {"direction_id": "abc"})
        self.assertEqual(len(resp.data["data"]), 2)

    def test_update_problem_partial(self):
        problem = self.create_problem()
        resp = self.admin_client.put(
            f"/api/admin/problems/{problem['id']}",
            {"title": "", "description": "新的描述"},
            format="json",
        )
        self.assertEqual(resp.data["data"]["title"], "实现 API")
        self.assertEqual(resp.data["data"]["description"], "新的描述")

    def test_missing_problem_and_point(self):
        resp = self.client.get("/api/problems/99999")
        self.assertEqual(resp.data["code"], 2002)
        resp = self.client.get("/api/problems/99999/submission-points")
        self.assertEqual(resp.data["code"], 2002)
        resp = self.admin_client.put("/api/admin/submission-points/99999", {"name": "x"}, format="json")
        self.assertEqual(resp.data["code"], 2004)

    def test_point_max_score_must_be_positive(self):
        problem = self.create_problem()
        resp = self.admin_client.post(
            f"/api/admin/problems/{problem['id']}/submission-points",
            {"name": "代码", "max_score": 0},
            format="json",
        )
        self.assertEqual(resp.data["code"], 3001)

    def test_update_submission_point(self):
        problem = self.create_problem()
        point = self.create_point(problem["id"])
        resp = self.admin_client.put(
            f"/api/admin/submission-points/{point['id']}",
            {"max_score": 50},
            format="json",
        )
        self.assertEqual(resp.data["data"]["max_score"], 50)
        self.assertEqual(resp.data["data"]["name"], "代码")

    def test_delete_problem_cascades_points(self):
        problem = self.create_problem()
        point = self.create_point(problem["id"])

        resp = self.admin_client.delete(f"/api/admin/problems/{problem['id']}")
        self.assertEqual(resp.data["code"], 0)
        self.assertFalse(Problem.objects.filter(pk=problem["id"]).exists())
        self.assertFalse(SubmissionPoint.objects.filter(pk=point["id"]).exists())
        self.assertTrue(SubmissionPoint.all_objects.filter(pk=point["id"]).exists())

    def test_delete_with_submissions_conflicts(self):
        problem = self.create_problem()
        point = self.create_point(problem["id"])
        Submission.objects.create(
            content="http://repo",
            user=self.student,
            problem_id=problem["id"],
            submission_point_id=point["id"],
        )

        resp = self.admin_client.delete(f"/api/admin/problems/{problem['id']}")
        self.assertEqual(resp.data["code"], 3003)
        resp = self.admin_client.delete(f"/api/admin/submission-points/{point['id']}")
        self.assertEqual(resp.data["code"], 3003)
        self.assertTrue(Problem.objects.filter(pk=problem["id"]).exists())
        self.assertTrue(SubmissionPoint.objects.filter(pk=point["id"]).exists())
