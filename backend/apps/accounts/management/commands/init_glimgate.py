"""
初始化 GlimGate 运行环境：

- 执行数据库迁移
- 不存在任何管理员时创建默认管理员（admin / admin123）
- 不存在任何方向时写入示例方向

可重复执行，已有数据不会被覆盖。

使用:
  python manage.py init_glimgate
"""
from django.core.management import call_command
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.repo import UserRepo
from apps.common.infra.logger import get_logger, logger_extra
from apps.directions.repo import DirectionRepo

logger = get_logger(__name__)

DEFAULT_ADMIN = {
    "username": "admin",
    "password": "admin123",
    "nickname": "系统管理员",
    "real_name": "管理员",
    "college": "系统",
    "student_id": "ADMIN001",
    "email": "admin@glimgate.com",
}

SAMPLE_DIRECTIONS = [
    ("前端开发", "负责前端页面开发和用户交互设计"),
    ("后端开发", "负责服务器端逻辑和API开发"),
    ("移动开发", "负责iOS和Android移动应用开发"),
    ("UI/UX设计", "负责用户界面和用户体验设计"),
]


class Command(BaseCommand):
    help = "执行迁移并写入默认管理员与示例方向"

    def add_arguments(self, parser):
        parser.add_argument(
            "--skip-migrate",
            action="store_true",
            help="跳过 migrate（数据库已是最新结构时使用）",
        )

    def handle(self, *args, **options):
        if not options["skip_migrate"]:
            call_command("migrate", interactive=False, verbosity=options.get("verbosity", 1))

        user_repo = UserRepo()
        direction_repo = DirectionRepo()

        with transaction.atomic():
            if user_repo.exists(is_admin=True):
                self.stdout.write("管理员账户已存在，跳过创建")
            else:
                payload = dict(DEFAULT_ADMIN)
                user = user_repo.create_user(
                    username=payload.pop("username"),
                    password=payload.pop("password"),
                    is_admin=True,
                    **payload,
                )
                logger.info("默认管理员已创建", extra=logger_extra({"user_id": user.pk}))
                self.stdout.write(self.style.SUCCESS("默认管理员账户创建成功：admin / admin123"))
                self.stdout.write(self.style.WARNING("请在生产环境中及时修改默认密码！"))

            if direction_repo.exists():
                self.stdout.write("方向数据已存在，跳过示例方向")
            else:
                for name, description in SAMPLE_DIRECTIONS:
                    direction_repo.create({"name": name, "description": description})
                    self.stdout.write(f"创建方向 {name} 成功")

        self.stdout.write(self.style.SUCCESS("数据库初始化完成！"))
