"""
账户相关模型定义

- 扩展 User 模型（昵称、真实姓名、学院、学号、QQ、管理员标记）
- 用户同样支持软删除：默认管理器隐藏 deleted_at 非空的账号，认证与查询天然看不到
"""

from __future__ import annotations

from uuid import uuid4

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models
from django.utils import timezone


class GlimUserManager(UserManager):
    """
    默认用户管理器：
    - 过滤已软删除的账号（登录、JWT 取用户、后台列表均经过此处）
    - 创建超管时同步 is_admin，保证命令行创建的超管也能调用管理接口
    """

    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)

    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault("is_admin", True)
        return super().create_superuser(username, email=email, password=password, **extra_fields)


class User(AbstractUser):
    """
    GlimGate 用户模型：
    - 承载报名同学与管理员的认证主体
    - is_admin 为业务管理员标记，同时同步到 is_staff 以便进入 Django Admin
    """

    nickname = models.CharField("昵称", max_length=50)
    real_name = models.CharField("真实姓名", max_length=50)
    college = models.CharField("学院", max_length=100)
    student_id = models.CharField("学号", max_length=20)
    qq = models.CharField("QQ", max_length=20, blank=True, default="")
    email = models.EmailField("邮箱", max_length=100, blank=True, default="")
    is_admin = models.BooleanField("管理员", default=False, db_index=True)
    created_at = models.DateTimeField("创建时间", auto_now_add=True)
    updated_at = models.DateTimeField("更新时间", auto_now=True)
    deleted_at = models.DateTimeField("删除时间", null=True, blank=True, db_index=True, editable=False)

    objects = GlimUserManager()
    all_objects = models.Manager()

    REQUIRED_FIELDS = ["email"]

    class Meta(AbstractUser.Meta):  # type: ignore[misc]
        db_table = "users"
        ordering = ["id"]
        verbose_name = "用户"
        verbose_name_plural = "用户"

    def save(self, *args, **kwargs):
        """保存前同步 is_staff，避免后台入口与业务管理员标记不一致"""
        self.is_staff = bool(self.is_admin or self.is_superuser)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "is_admin" in update_fields and "is_staff" not in update_fields:
            kwargs["update_fields"] = [*update_fields, "is_staff"]
        super().save(*args, **kwargs)

    def soft_delete(self) -> None:
        """
        软删除：标记 deleted_at，并改写用户名释放占用，使同名账号可重新注册
        """
        suffix = uuid4().hex[:8]
        self.username = f"deleted_user_{self.pk}_{suffix}"
        self.is_active = False
        self.deleted_at = timezone.now()
        self.set_unusable_password()
        self.save(update_fields=["username", "is_active", "deleted_at", "password", "updated_at"])
