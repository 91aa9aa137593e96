from __future__ import annotations

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("submissions", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Score",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="创建时间")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="更新时间")),
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, editable=False, null=True, verbose_name="删除时间")),
                ("score", models.PositiveIntegerField(verbose_name="分数")),
                ("comment", models.TextField(blank=True, default="", verbose_name="评语")),
                ("reviewer", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="reviewed_scores", to=settings.AUTH_USER_MODEL, verbose_name="评审人")),
                ("submission", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="scores", to="submissions.submission", verbose_name="提交")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="received_scores", to=settings.AUTH_USER_MODEL, verbose_name="被评分用户")),
            ],
            options={
                "verbose_name": "评分",
                "verbose_name_plural": "评分",
                "db_table": "scores",
                "ordering": ["id"],
            },
        ),
        migrations.AddConstraint(
            model_name="score",
            constraint=models.UniqueConstraint(
                condition=models.Q(("deleted_at__isnull", True)),
                fields=("submission", "reviewer"),
                name="uniq_active_score_per_reviewer",
            ),
        ),
    ]
