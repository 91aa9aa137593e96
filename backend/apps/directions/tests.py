from __future__ import annotations

from rest_framework.test import APITestCase

from apps.accounts.models import User
from apps.common.tests_utils import AuthenticatedAPIMixin
from apps.directions.models import Direction
from apps.directions.services import CheckDirectionManagerService
from apps.problems.models import Problem


class DirectionAPITestCase(AuthenticatedAPIMixin, APITestCase):
    """
    方向模块接口测试：
    - 公开列表 / 详情（附带负责人、题目）
    - 管理员创建、修改（负责人三态）、删除（有题目时冲突）
    """

    @classmethod
    def setUpTestData(cls):
        cls.admin = User.objects.create_user(username="admin", password="admin123", nickname="管理员", is_admin=True)
        cls.manager = User.objects.create_user(username="mgr", password="password123", nickname="负责人")
        cls.other = User.objects.create_user(username="other", password="password123", nickname="路人")

    def setUp(self):
        self.admin_client = self.auth_client("admin", "admin123")

    def create_direction(self, **payload):
        body = {"name": "后端", "description": "服务端开发", **payload}
        resp = self.admin_client.post("/api/admin/directions", body, format="json")
        self.assertEqual(resp.data["code"], 0, resp.data)
        return resp.data["data"]

    def test_create_direction_with_managers(self):
        data = self.create_direction(manager_ids=[self.manager.pk, 99999])
        self.assertEqual(data["name"], "后端")
        self.assertEqual([m["id"] for m in data["managers"]], [self.manager.pk])
        self.assertTrue(CheckDirectionManagerService().execute(data["id"], self.manager.pk))
        self.assertFalse(CheckDirectionManagerService().execute(data["id"], self.other.pk))

    def test_create_direction_requires_name(self):
        resp = self.admin_client.post("/api/admin/directions", {"description": "x"}, format="json")
        self.assertEqual(resp.data["code"], 3001)

    def test_create_direction_forbidden_for_normal_user(self):
        client = self.auth_client("other", "password123")
        resp = client.post("/api/admin/directions", {"name": "前端"}, format="json")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.data["code"], 1005)

    def test_public_list_and_detail(self):
        data = self.create_direction(manager_ids=[self.manager.pk])
        Problem.objects.create(title="实现 API", description="desc", direction_id=data["id"])

        resp = self.client.get("/api/directions")
        self.assertEqual(resp.data["code"], 0)
        self.assertEqual(len(resp.data["data"]), 1)
        self.assertEqual(resp.data["data"][0]["managers"][0]["username"], "mgr")
        self.assertNotIn("problems", resp.data["data"][0])

        resp = self.client.get(f"/api/directions/{data['id']}")
        self.assertEqual(resp.data["data"]["problems"][0]["title"], "实现 API")

    def test_detail_missing_direction(self):
        resp = self.client.get("/api/directions/99999")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["code"], 2001)

    def test_update_manager_ids_tri_state(self):
        data = self.create_direction(manager_ids=[self.manager.pk])
        url = f"/api/admin/directions/{data['id']}"

        # 省略 manager_ids：负责人不变
        resp = self.admin_client.put(url, {"description": "新描述"}, format="json")
        self.assertEqual(resp.data["data"]["description"], "新描述")
        self.assertEqual(len(resp.data["data"]["managers"]), 1)

        # 传入新列表：整体替换
        resp = self.admin_client.put(url, {"manager_ids": [self.other.pk]}, format="json")
        self.assertEqual([m["id"] for m in resp.data["data"]["managers"]], [self.other.pk])

        # 空列表：清空
        resp = self.admin_client.put(url, {"manager_ids": []}, format="json")
        self.assertEqual(resp.data["data"]["managers"], [])

    def test_update_blank_name_keeps_original(self):
        data = self.create_direction()
        resp = self.admin_client.put(f"/api/admin/directions/{data['id']}", {"name": ""}, format="json")
        self.assertEqual(resp.data["data"]["name"], "后端")

    def test_delete_direction_with_problems_conflicts(self):
        data = self.create_direction(manager_ids=[self.manager.pk])
        problem = Problem.objects.create(title="实现 API", description="desc", direction_id=data["id"])
        url = f"/api/admin/directions/{data['id']}"

        resp = self.admin_client.delete(url)
        self.assertEqual(resp.data["code"], 3003)
        self.assertTrue(Direction.objects.filter(pk=data["id"]).exists())

        problem.soft_delete()
        resp = self.admin_client.delete(url)
        self.assertEqual(resp.data["code"], 0)
        self.assertFalse(Direction.objects.filter(pk=data["id"]).exists())
        self.assertTrue(Direction.all_objects.filter(pk=data["id"]).exists())
        self.assertFalse(Direction.managers.through.objects.filter(direction_id=data["id"]).exists())

        resp = self.client.get(f"/api/directions/{data['id']}")
        self.assertEqual(resp.data["code"], 2001)
