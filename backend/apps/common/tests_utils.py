from __future__ import annotations

from rest_framework.test import APIClient

LOGIN_URL = "/api/auth/login"


class AuthenticatedAPIMixin:
    """
    测试基类混入：通过真实登录接口拿令牌，返回带 Bearer 头的独立客户端

    每次 auth_client() 都是新客户端，同一用例里可以同时扮演多个用户
    """

    client: APIClient

    def login_token(self, username: str, password: str) -> str:
        resp = self.client.post(LOGIN_URL, {"username": username, "password": password}, format="json")
        body = resp.data
        if resp.status_code != 200 or body.get("code") != 0:
            raise AssertionError(f"{username} 登录失败：HTTP {resp.status_code} {body}")
        return body["data"]["token"]

    def auth_client(self, username: str, password: str) -> APIClient:
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.login_token(username, password)}")
        return client
