from __future__ import annotations

from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from apps.accounts.models import User
from apps.common.tests_utils import AuthenticatedAPIMixin

REGISTER_PAYLOAD = {
    "username": "alice",
    "password": "password123",
    "nickname": "爱丽丝",
    "real_name": "张三",
    "college": "计算机学院",
    "student_id": "2024001",
    "qq": "123456",
    "email": "alice@example.com",
}


class AccountsAPITestCase(AuthenticatedAPIMixin, APITestCase):
    """
    账户模块接口测试：
    - 注册、登录、当前用户资料
    - 管理员用户管理（列表 / 详情 / 修改 / 删除）
    - 未登录与权限不足的统一错误响应
    """

    @classmethod
    def setUpTestData(cls):
        cls.admin = User.objects.create_user(
            username="admin",
            password="admin123",
            nickname="管理员",
            is_admin=True,
        )
        cls.user = User.objects.create_user(
            username="bob",
            password="password123",
            nickname="鲍勃",
            real_name="李四",
            college="软件学院",
            student_id="2024002",
        )

    def register(self, **overrides):
        return self.client.post("/api/auth/register", {**REGISTER_PAYLOAD, **overrides}, format="json")

    # ---------- 注册 ----------

    def test_register_returns_user_without_password(self):
        resp = self.register()
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["code"], 0)
        data = resp.data["data"]
        self.assertEqual(data["username"], "alice")
        self.assertFalse(data["is_admin"])
        self.assertNotIn("password", data)
        user = User.objects.get(username="alice")
        self.assertNotEqual(user.password, "password123")
        self.assertTrue(user.check_password("password123"))

    def test_register_duplicate_username_keeps_original(self):
        self.register()
        resp = self.register(nickname="冒名者", password="another456")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["code"], 1002)
        user = User.objects.get(username="alice")
        self.assertEqual(user.nickname, "爱丽丝")
        self.assertTrue(user.check_password("password123"))

    def test_register_missing_required_field(self):
        payload = dict(REGISTER_PAYLOAD)
        payload.pop("student_id")
        resp = self.client.post("/api/auth/register", payload, format="json")
        self.assertEqual(resp.data["code"], 3001)

    def test_register_short_password(self):
        resp = self.register(password="12345")
        self.assertEqual(resp.data["code"], 3001)
        self.assertFalse(User.objects.filter(username="alice").exists())

    def test_register_invalid_email(self):
        resp = self.register(email="not-an-email")
        self.assertEqual(resp.data["code"], 3001)

    # ---------- 登录 ----------

    def test_login_success_returns_token(self):
        resp = self.client.post("/api/auth/login", {"username": "bob", "password": "password123"}, format="json")
        self.assertEqual(resp.data["code"], 0)
        token = resp.data["data"]["token"]
        claims = AccessToken(token)
        self.assertEqual(int(claims["user_id"]), self.user.pk)
        self.assertEqual(claims["username"], "bob")
        self.assertFalse(claims["is_admin"])
        self.assertEqual(resp.data["data"]["user"]["id"], self.user.pk)

    def test_login_unknown_user(self):
        resp = self.client.post("/api/auth/login", {"username": "ghost", "password": "whatever"}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["code"], 1001)

    def test_login_wrong_password(self):
        resp = self.client.post("/api/auth/login", {"username": "bob", "password": "wrong-pass"}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["code"], 1003)

    # ---------- 当前用户 ----------

    def test_profile_requires_login(self):
        resp = self.client.get("/api/user/profile")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.data["code"], 1004)

    def test_profile_with_invalid_token(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        resp = self.client.get("/api/user/profile")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.data["code"], 1006)

    def test_profile_returns_current_user(self):
        client = self.auth_client("bob", "password123")
        resp = client.get("/api/user/profile")
        self.assertEqual(resp.data["code"], 0)
        self.assertEqual(resp.data["data"]["username"], "bob")
        self.assertEqual(resp.data["data"]["college"], "软件学院")

    # ---------- 管理员用户管理 ----------

    def test_admin_endpoints_forbidden_for_normal_user(self):
        client = self.auth_client("bob", "password123")
        resp = client.get("/api/admin/users")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.data["code"], 1005)

    def test_admin_list_users_paginated(self):
        client = self.auth_client("admin", "admin123")
        resp = client.get("/api/admin/users", {"page": 1, "page_size": 1})
        self.assertEqual(resp.data["code"], 0)
        self.assertEqual(len(resp.data["data"]), 1)
        self.assertEqual(resp.data["extra"]["total"], 2)
        self.assertEqual(resp.data["extra"]["page_size"], 1)
        self.assertTrue(resp.data["extra"]["has_next"])

    def test_admin_list_users_invalid_page_size_falls_back(self):
        client = self.auth_client("admin", "admin123")
        resp = client.get("/api/admin/users", {"page": 0, "page_size": 500})
        self.assertEqual(resp.data["extra"]["page"], 1)
        self.assertEqual(resp.data["extra"]["page_size"], 10)

    def test_admin_user_detail_and_missing(self):
        client = self.auth_client("admin", "admin123")
        resp = client.get(f"/api/admin/users/{self.user.pk}")
        self.assertEqual(resp.data["data"]["username"], "bob")
        resp = client.get("/api/admin/users/99999")
        self.assertEqual(resp.data["code"], 1001)

    def test_admin_update_ignores_blank_fields(self):
        client = self.auth_client("admin", "admin123")
        resp = client.put(
            f"/api/admin/users/{self.user.pk}",
            {"nickname": "", "college": "理学院", "is_admin": True},
            format="json",
        )
        self.assertEqual(resp.data["code"], 0)
        self.user.refresh_from_db()
        self.assertEqual(self.user.nickname, "鲍勃")
        self.assertEqual(self.user.college, "理学院")
        self.assertTrue(self.user.is_admin)

    def test_admin_delete_user_releases_username(self):
        client = self.auth_client("admin", "admin123")
        resp = client.delete(f"/api/admin/users/{self.user.pk}")
        self.assertEqual(resp.data["code"], 0)
        self.assertFalse(User.objects.filter(pk=self.user.pk).exists())
        self.assertTrue(User.all_objects.filter(pk=self.user.pk).exists())

        resp = client.get(f"/api/admin/users/{self.user.pk}")
        self.assertEqual(resp.data["code"], 1001)

        resp = self.client.post("/api/auth/login", {"username": "bob", "password": "password123"}, format="json")
        self.assertEqual(resp.data["code"], 1001)

        resp = self.register(username="bob")
        self.assertEqual(resp.data["code"], 0)
