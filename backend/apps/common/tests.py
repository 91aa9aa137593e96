# -*- coding: utf-8 -*-
"""
公共模块单测：
- 统一响应结构与异常映射
- 资源级授权 can / ensure
- 日志 extra 脱敏
- 分页参数收敛
- 健康检查与初始化命令
"""

from __future__ import annotations

from io import StringIO

from django.core.management import call_command
from django.test import SimpleTestCase, TestCase
from rest_framework.exceptions import NotAuthenticated, ParseError, ValidationError as DRFValidationError
from rest_framework.test import APITestCase

from apps.accounts.models import User
from apps.common import response
from apps.common.capabilities import Action, Actor, DirectionResource, OwnedResource, can, ensure
from apps.common.exception_handler import custom_exception_handler
from apps.common.exceptions import (
    DirectionNotFoundError,
    PermissionDeniedError,
    TokenError,
    ValidationError,
)
from apps.common.infra.logger import logger_extra
from apps.common.pagination import clamp_limit, clamp_page, clamp_page_size, paginate
from apps.common.utils.validators import parse_optional_id
from apps.directions.models import Direction


class ResponseEnvelopeTests(SimpleTestCase):
    """统一响应结构 {code, message, data, extra?}"""

    def test_success_payload(self):
        resp = response.success({"id": 1})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data, {"code": 0, "message": "success", "data": {"id": 1}})

    def test_page_success_puts_meta_in_extra(self):
        resp = response.page_success(
            items=[1, 2],
            page=1,
            page_size=2,
            total=3,
            total_pages=2,
            has_next=True,
            has_previous=False,
        )
        self.assertEqual(resp.data["data"], [1, 2])
        self.assertEqual(resp.data["extra"]["total_pages"], 2)
        self.assertTrue(resp.data["extra"]["has_next"])

    def test_biz_error_keeps_code_and_http_status(self):
        resp = custom_exception_handler(DirectionNotFoundError(), {})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["code"], 2001)

        resp = custom_exception_handler(PermissionDeniedError(), {})
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.data["code"], 1005)

        resp = custom_exception_handler(TokenError(), {})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.data["code"], 1006)

    def test_drf_exceptions_are_mapped(self):
        self.assertEqual(custom_exception_handler(ParseError("bad json"), {}).data["code"], 3002)
        self.assertEqual(custom_exception_handler(DRFValidationError({"name": ["必填"]}), {}).data["code"], 3001)
        resp = custom_exception_handler(NotAuthenticated(), {})
        self.assertEqual((resp.status_code, resp.data["code"]), (401, 1004))


class CapabilityTests(SimpleTestCase):
    """授权判断通过 is_manager 注入负责人关系，不访问数据库"""

    admin = Actor(user_id=1, is_admin=True)
    manager = Actor(user_id=2)
    student = Actor(user_id=3)

    @staticmethod
    def is_manager(direction_id: int, user_id: int) -> bool:
        return (direction_id, user_id) == (10, 2)

    def test_manage_problem(self):
        resource = DirectionResource(10)
        self.assertTrue(can(self.admin, Action.MANAGE_PROBLEM, resource, is_manager=self.is_manager))
        self.assertTrue(can(self.manager, Action.MANAGE_PROBLEM, resource, is_manager=self.is_manager))
        self.assertFalse(can(self.student, Action.MANAGE_PROBLEM, resource, is_manager=self.is_manager))
        self.assertFalse(can(self.manager, Action.MANAGE_PROBLEM, DirectionResource(11), is_manager=self.is_manager))

    def test_score_submission_has_no_admin_bypass(self):
        resource = DirectionResource(10)
        self.assertFalse(can(self.admin, Action.SCORE_SUBMISSION, resource, is_manager=self.is_manager))
        self.assertTrue(can(self.manager, Action.SCORE_SUBMISSION, resource, is_manager=self.is_manager))

    def test_owned_resources(self):
        owned = OwnedResource(owner_id=3)
        self.assertTrue(can(self.student, Action.VIEW_SUBMISSION, owned))
        self.assertTrue(can(self.admin, Action.VIEW_SUBMISSION, owned))
        self.assertFalse(can(self.manager, Action.VIEW_SUBMISSION, owned))
        self.assertTrue(can(self.student, Action.MUTATE_OWN, owned))
        self.assertFalse(can(self.admin, Action.MUTATE_OWN, owned))

    def test_ensure_raises_given_error(self):
        with self.assertRaises(PermissionDeniedError):
            ensure(self.student, Action.MUTATE_OWN, OwnedResource(owner_id=1))
        with self.assertRaises(ValidationError):
            ensure(
                self.student,
                Action.MUTATE_OWN,
                OwnedResource(owner_id=1),
                error=ValidationError(message="自定义"),
            )

    def test_wrong_resource_kind(self):
        with self.assertRaises(TypeError):
            can(self.admin, Action.MANAGE_PROBLEM, OwnedResource(owner_id=1))


class LoggerExtraTests(SimpleTestCase):
    def test_sensitive_keys_are_masked(self):
        extra = logger_extra({"username": "alice", "password": "secret1", "Token": "abc"})
        self.assertEqual(extra, {"username": "alice", "password": "***", "Token": "***"})
        self.assertEqual(logger_extra(None), {})


class PaginationParamTests(SimpleTestCase):
    def test_page_and_size(self):
        self.assertEqual(clamp_page(None), 1)
        self.assertEqual(clamp_page("-3"), 1)
        self.assertEqual(clamp_page("4"), 4)
        self.assertEqual(clamp_page_size("20"), 20)
        self.assertEqual(clamp_page_size("0"), 10)
        self.assertEqual(clamp_page_size("101"), 10)
        self.assertEqual(clamp_page_size("abc"), 10)

    def test_limit_and_optional_id(self):
        self.assertEqual(clamp_limit(None), 10)
        self.assertEqual(clamp_limit("100"), 100)
        self.assertEqual(clamp_limit("1000"), 10)
        self.assertIsNone(parse_optional_id("0"))
        self.assertIsNone(parse_optional_id("x"))
        self.assertEqual(parse_optional_id("7"), 7)


class PaginateTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        for name in ("后端", "前端", "设计", "运维", "产品"):
            Direction.objects.create(name=name)

    def test_pages_follow_paginator(self):
        first = paginate(Direction.objects.order_by("id"), page=1, page_size=2)
        self.assertEqual([d.name for d in first.items], ["后端", "前端"])
        self.assertEqual((first.total, first.total_pages), (5, 3))
        self.assertTrue(first.has_next)
        self.assertFalse(first.has_previous)

        last = paginate(Direction.objects.order_by("id"), page=3, page_size=2)
        self.assertEqual([d.name for d in last.items], ["产品"])
        self.assertFalse(last.has_next)
        self.assertTrue(last.has_previous)

    def test_page_beyond_range_is_empty(self):
        result = paginate(Direction.objects.order_by("id"), page=9, page_size=2)
        self.assertEqual(result.items, [])
        self.assertEqual((result.page, result.total, result.total_pages), (9, 5, 3))
        self.assertFalse(result.has_next)
        self.assertTrue(result.has_previous)

    def test_empty_queryset(self):
        result = paginate(Direction.objects.none(), page=1, page_size=10)
        self.assertEqual(result.items, [])
        self.assertEqual((result.total, result.total_pages), (0, 0))
        self.assertFalse(result.has_next)
        self.assertFalse(result.has_previous)


class HealthCheckTests(APITestCase):
    def test_health(self):
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["data"], {"status": "ok", "database": "ok"})


class InitCommandTests(TestCase):
    """init_glimgate 可重复执行，不重复写入"""

    def test_seed_is_idempotent(self):
        call_command("init_glimgate", skip_migrate=True, stdout=StringIO())
        call_command("init_glimgate", skip_migrate=True, stdout=StringIO())

        admins = User.objects.filter(is_admin=True)
        self.assertEqual(admins.count(), 1)
        self.assertTrue(admins.get().check_password("admin123"))
        self.assertEqual(
            list(Direction.objects.values_list("name", flat=True)),
            ["前端开发", "后端开发", "移动开发", "UI/UX设计"],
        )
