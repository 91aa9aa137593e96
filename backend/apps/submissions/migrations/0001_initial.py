from __future__ import annotations

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("problems", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Submission",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="创建时间")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="更新时间")),
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, editable=False, null=True, verbose_name="删除时间")),
                ("content", models.TextField(verbose_name="提交内容")),
                ("problem", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="submissions", to="problems.problem", verbose_name="题目")),
                ("submission_point", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="submissions", to="problems.submissionpoint", verbose_name="提交点")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="submissions", to=settings.AUTH_USER_MODEL, verbose_name="提交者")),
            ],
            options={
                "verbose_name": "提交",
                "verbose_name_plural": "提交",
                "db_table": "submissions",
                "ordering": ["id"],
            },
        ),
        migrations.AddConstraint(
            model_name="submission",
            constraint=models.UniqueConstraint(
                condition=models.Q(("deleted_at__isnull", True)),
                fields=("user", "problem", "submission_point"),
                name="uniq_active_submission_per_point",
            ),
        ),
    ]
