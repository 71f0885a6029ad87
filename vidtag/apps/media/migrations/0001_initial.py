from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import simple_history.models

import vidtag.apps.media.models


HISTORY_TYPE_CHOICES = [("+", "Created"), ("~", "Changed"), ("-", "Deleted")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Language",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(max_length=80)),
                ("language_isocode", models.CharField(help_text="ISO 639-1 code, e.g. 'de'", max_length=16)),
                ("hidden", models.BooleanField(default=False)),
            ],
            options={
                "db_table": "sys_language",
                "ordering": ["title"],
            },
        ),
        migrations.CreateModel(
            name="StoredFile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("file", models.FileField(upload_to=vidtag.apps.media.models.stored_file_upload_to)),
                ("name", models.CharField(blank=True, max_length=255)),
                ("mime_type", models.CharField(blank=True, max_length=100)),
            ],
            options={
                "db_table": "sys_file",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="FileMetadata",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(blank=True, max_length=255)),
                ("description", models.TextField(blank=True)),
                ("width", models.PositiveIntegerField(default=0)),
                ("height", models.PositiveIntegerField(default=0)),
                ("duration", models.PositiveIntegerField(default=0, help_text="Duration in seconds")),
                ("poster", models.PositiveIntegerField(default=0, editable=False)),
                ("tracks", models.PositiveIntegerField(default=0, editable=False)),
                (
                    "file",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="file_metadata",
                        to="media.storedfile",
                    ),
                ),
            ],
            options={
                "verbose_name": "file metadata",
                "verbose_name_plural": "file metadata",
                "db_table": "sys_file_metadata",
            },
        ),
        migrations.CreateModel(
            name="FileReference",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("tablenames", models.CharField(max_length=64)),
                ("fieldname", models.CharField(max_length=64)),
                ("uid_foreign", models.PositiveIntegerField()),
                ("sorting_foreign", models.PositiveIntegerField(default=0)),
                ("title", models.CharField(blank=True, max_length=255)),
                ("autoplay", models.BooleanField(blank=True, null=True)),
                (
                    "track_language",
                    models.PositiveIntegerField(default=0, help_text="Language id; 0 uses the site default"),
                ),
                (
                    "track_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("subtitles", "Subtitles"),
                            ("captions", "Captions"),
                            ("descriptions", "Descriptions"),
                            ("chapters", "Chapters"),
                            ("metadata", "Metadata"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "original_file",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="references",
                        to="media.storedfile",
                    ),
                ),
            ],
            options={
                "db_table": "sys_file_reference",
                "ordering": ["tablenames", "uid_foreign", "fieldname", "sorting_foreign", "id"],
                "indexes": [
                    models.Index(
                        fields=["tablenames", "fieldname", "uid_foreign"],
                        name="sys_file_ref_relation_idx",
                    )
                ],
            },
        ),
        # --- History tables ---
        migrations.CreateModel(
            name="HistoricalLanguage",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                ("created_at", models.DateTimeField(blank=True, editable=False)),
                ("updated_at", models.DateTimeField(blank=True, editable=False)),
                ("title", models.CharField(max_length=80)),
                ("language_isocode", models.CharField(help_text="ISO 639-1 code, e.g. 'de'", max_length=16)),
                ("hidden", models.BooleanField(default=False)),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                ("history_type", models.CharField(choices=HISTORY_TYPE_CHOICES, max_length=1)),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "historical language",
                "verbose_name_plural": "historical languages",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name="HistoricalFileMetadata",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                ("created_at", models.DateTimeField(blank=True, editable=False)),
                ("updated_at", models.DateTimeField(blank=True, editable=False)),
                ("title", models.CharField(blank=True, max_length=255)),
                ("description", models.TextField(blank=True)),
                ("width", models.PositiveIntegerField(default=0)),
                ("height", models.PositiveIntegerField(default=0)),
                ("duration", models.PositiveIntegerField(default=0, help_text="Duration in seconds")),
                ("poster", models.PositiveIntegerField(default=0, editable=False)),
                ("tracks", models.PositiveIntegerField(default=0, editable=False)),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                ("history_type", models.CharField(choices=HISTORY_TYPE_CHOICES, max_length=1)),
                (
                    "file",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="+",
                        to="media.storedfile",
                    ),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "historical file metadata",
                "verbose_name_plural": "historical file metadata",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
