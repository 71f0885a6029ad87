"""Stored files, their metadata, and the references that link them to records.

Table names follow the relation names used by file lookups
(``sys_file_metadata`` + field ``poster`` etc.), so a reference row reads
the same in the database as it does in ``find_by_relation()`` calls.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from urllib.parse import urljoin

from django.conf import settings
from django.db import models
from simple_history.models import HistoricalRecords

from vidtag.apps.core.models import TimeStampedMixin

METADATA_TABLE = "sys_file_metadata"


def stored_file_upload_to(instance: StoredFile, filename: str) -> str:
    return f"files/{PurePosixPath(filename).name}"


class Language(TimeStampedMixin):
    """A site language that subtitle tracks can be tagged with."""

    title = models.CharField(max_length=80)
    language_isocode = models.CharField(max_length=16, help_text="ISO 639-1 code, e.g. 'de'")
    hidden = models.BooleanField(default=False)

    history = HistoricalRecords()

    class Meta:
        db_table = "sys_language"
        ordering = ["title"]

    def __str__(self) -> str:
        return f"{self.title} ({self.language_isocode})"


class StoredFile(TimeStampedMixin):
    """A file held in media storage."""

    file = models.FileField(upload_to=stored_file_upload_to)
    name = models.CharField(max_length=255, blank=True)
    mime_type = models.CharField(max_length=100, blank=True)

    class Meta:
        db_table = "sys_file"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name or self.file.name

    def save(self, *args, **kwargs):
        if not self.name and self.file:
            self.name = PurePosixPath(self.file.name).name
        super().save(*args, **kwargs)

    # -- file capabilities shared with FileReference --------------------

    def get_mime_type(self) -> str:
        return self.mime_type

    def get_public_url(self, relative: bool = False) -> str:
        """Return the URL the file is served from.

        ``relative=True`` returns the storage URL as-is (``/media/...``);
        otherwise it is made absolute against ``settings.SITE_URL`` when set.
        """
        url = self.file.url
        site_url = getattr(settings, "SITE_URL", "")
        if relative or not site_url:
            return url
        return urljoin(site_url, url)

    def get_original_file(self) -> StoredFile:
        return self

    @property
    def metadata(self) -> FileMetadata | None:
        try:
            return self.file_metadata
        except FileMetadata.DoesNotExist:
            return None

    @property
    def metadata_uid(self) -> int | None:
        metadata = self.metadata
        return metadata.pk if metadata is not None else None

    def get_property(self, name: str):
        """Return a field of this file, falling back to its metadata row."""
        if name in _field_names(StoredFile):
            return getattr(self, name)
        metadata = self.metadata
        if metadata is not None and name in _field_names(FileMetadata):
            return getattr(metadata, name)
        return None


class FileMetadata(TimeStampedMixin):
    """Descriptive metadata for a stored file.

    ``poster`` and ``tracks`` count the FileReferences attached under those
    field names; signals keep them current.
    """

    file = models.OneToOneField(
        StoredFile, on_delete=models.CASCADE, related_name="file_metadata"
    )
    title = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    width = models.PositiveIntegerField(default=0)
    height = models.PositiveIntegerField(default=0)
    duration = models.PositiveIntegerField(default=0, help_text="Duration in seconds")
    poster = models.PositiveIntegerField(default=0, editable=False)
    tracks = models.PositiveIntegerField(default=0, editable=False)

    history = HistoricalRecords()

    RELATION_FIELDS = ("poster", "tracks")

    class Meta:
        db_table = METADATA_TABLE
        verbose_name = "file metadata"
        verbose_name_plural = "file metadata"

    def __str__(self) -> str:
        return self.title or str(self.file)


class FileReference(TimeStampedMixin):
    """Use of a stored file by a record field, with per-use properties."""

    class TrackType(models.TextChoices):
        SUBTITLES = "subtitles", "Subtitles"
        CAPTIONS = "captions", "Captions"
        DESCRIPTIONS = "descriptions", "Descriptions"
        CHAPTERS = "chapters", "Chapters"
        METADATA = "metadata", "Metadata"

    original_file = models.ForeignKey(
        StoredFile, on_delete=models.CASCADE, related_name="references"
    )
    tablenames = models.CharField(max_length=64)
    fieldname = models.CharField(max_length=64)
    uid_foreign = models.PositiveIntegerField()
    sorting_foreign = models.PositiveIntegerField(default=0)

    title = models.CharField(max_length=255, blank=True)
    autoplay = models.BooleanField(null=True, blank=True)
    track_language = models.PositiveIntegerField(
        default=0, help_text="Language id; 0 uses the site default"
    )
    track_type = models.CharField(max_length=20, choices=TrackType.choices, blank=True)

    class Meta:
        db_table = "sys_file_reference"
        ordering = ["tablenames", "uid_foreign", "fieldname", "sorting_foreign", "id"]
        indexes = [
            models.Index(
                fields=["tablenames", "fieldname", "uid_foreign"],
                name="sys_file_ref_relation_idx",
            )
        ]

    def __str__(self) -> str:
        return f"{self.tablenames}.{self.fieldname}[{self.uid_foreign}] -> {self.original_file}"

    def get_mime_type(self) -> str:
        return self.original_file.get_mime_type()

    def get_public_url(self, relative: bool = False) -> str:
        return self.original_file.get_public_url(relative)

    def get_original_file(self) -> StoredFile:
        return self.original_file

    def get_property(self, name: str):
        """Return a field of this reference, falling back to the original file."""
        if name in _REFERENCE_PROPERTIES:
            return getattr(self, name)
        return self.original_file.get_property(name)


_REFERENCE_PROPERTIES = frozenset({"title", "autoplay", "track_language", "track_type"})


def _field_names(model: type[models.Model]) -> set[str]:
    return {f.name for f in model._meta.concrete_fields}
