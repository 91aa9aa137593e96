from __future__ import annotations

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("directions", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Problem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="创建时间")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="更新时间")),
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, editable=False, null=True, verbose_name="删除时间")),
                ("title", models.CharField(max_length=200, verbose_name="标题")),
                ("description", models.TextField(verbose_name="描述")),
                ("direction", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="problems", to="directions.direction", verbose_name="方向")),
            ],
            options={
                "verbose_name": "题目",
                "verbose_name_plural": "题目",
                "db_table": "problems",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="SubmissionPoint",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="创建时间")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="更新时间")),
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, editable=False, null=True, verbose_name="删除时间")),
                ("name", models.CharField(max_length=100, verbose_name="名称")),
                ("max_score", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)], verbose_name="最大分值")),
                ("problem", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="submission_points", to="problems.problem", verbose_name="题目")),
            ],
            options={
                "verbose_name": "提交点",
                "verbose_name_plural": "提交点",
                "db_table": "submission_points",
                "ordering": ["id"],
            },
        ),
    ]
