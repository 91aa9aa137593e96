from __future__ import annotations

from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Direction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="创建时间")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="更新时间")),
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, editable=False, null=True, verbose_name="删除时间")),
                ("name", models.CharField(max_length=100, verbose_name="名称")),
                ("description", models.TextField(blank=True, default="", verbose_name="描述")),
                ("managers", models.ManyToManyField(blank=True, db_table="direction_managers", related_name="managed_directions", to=settings.AUTH_USER_MODEL, verbose_name="负责人")),
            ],
            options={
                "verbose_name": "方向",
                "verbose_name_plural": "方向",
                "db_table": "directions",
                "ordering": ["id"],
            },
        ),
    ]
