"""Shared test utilities, factories, and mixins.

Usage:
    from vidtag.apps.core.test_utils import TemporaryMediaMixin, create_video

    class MyTestCase(TemporaryMediaMixin, TestCase):
        def setUp(self):
            self.video = create_video()
"""

from __future__ import annotations

import shutil
import tempfile
import uuid

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings

from vidtag.apps.media.models import (
    METADATA_TABLE,
    FileMetadata,
    FileReference,
    Language,
    StoredFile,
)
from vidtag.apps.media.repositories import FileRepository


def _unique_suffix() -> str:
    """Return a short unique suffix for test data."""
    return uuid.uuid4().hex[:8]


# =============================================================================
# Factory Functions
# =============================================================================


def create_stored_file(
    name: str | None = None,
    mime_type: str = "video/mp4",
    content: bytes = b"fake media",
    with_metadata: bool = True,
) -> StoredFile:
    """Create a StoredFile backed by a small uploaded file.

    Args:
        name: Filename (auto-generated .mp4 name if not provided)
        mime_type: MIME type recorded on the file
        content: File bytes
        with_metadata: Also create the FileMetadata row

    Returns:
        Created StoredFile, re-fetched so no relations are cached
    """
    if name is None:
        name = f"clip-{_unique_suffix()}.mp4"
    stored = StoredFile.objects.create(
        file=SimpleUploadedFile(name, content, content_type=mime_type),
        mime_type=mime_type,
    )
    if with_metadata:
        FileMetadata.objects.create(file=stored)
    return StoredFile.objects.get(pk=stored.pk)


def create_video(name: str | None = None, mime_type: str = "video/mp4") -> StoredFile:
    return create_stored_file(name=name, mime_type=mime_type)


def create_language(title: str = "Deutsch", language_isocode: str = "de") -> Language:
    return Language.objects.create(title=title, language_isocode=language_isocode)


def attach_to_metadata(
    video: StoredFile, field: str, file: StoredFile, **properties
) -> FileReference:
    """Attach ``file`` to the ``poster`` or ``tracks`` relation of ``video``'s metadata."""
    return FileRepository().add_relation(
        METADATA_TABLE, field, video.metadata_uid, file, **properties
    )


def create_poster(video: StoredFile, name: str | None = None) -> FileReference:
    poster = create_stored_file(
        name=name or f"poster-{_unique_suffix()}.jpg", mime_type="image/jpeg", with_metadata=False
    )
    return attach_to_metadata(video, "poster", poster)


def create_track(
    video: StoredFile,
    name: str | None = None,
    track_language: int = 0,
    track_type: str = "",
) -> FileReference:
    track = create_stored_file(
        name=name or f"track-{_unique_suffix()}.vtt", mime_type="text/vtt", with_metadata=False
    )
    return attach_to_metadata(
        video, "tracks", track, track_language=track_language, track_type=track_type
    )


def create_content_reference(video: StoredFile, uid: int = 1, **properties) -> FileReference:
    """Reference ``video`` from a content record, e.g. with a per-use autoplay setting."""
    return FileRepository().add_relation("tt_content", "assets", uid, video, **properties)


class TemporaryMediaMixin:
    """Mixin to isolate MEDIA_ROOT per test class and clean up files."""

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls._temp_media_dir = tempfile.mkdtemp()
        cls._override_media_root = override_settings(MEDIA_ROOT=cls._temp_media_dir)
        cls._override_media_root.enable()

    @classmethod
    def tearDownClass(cls):
        cls._override_media_root.disable()
        shutil.rmtree(cls._temp_media_dir, ignore_errors=True)
        super().tearDownClass()
