"""Lookups the renderers depend on: file relations and language records."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import transaction
from django.db.models import Max

from .models import FileReference, Language, StoredFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageRecord:
    title: str
    iso_code: str


class FileRepository:
    """Resolve FileReferences attached to a record field."""

    def find_by_relation(self, table: str, field: str, uid: int | None) -> list[FileReference]:
        """Return references for ``table.field`` of record ``uid`` in their stored order.

        A missing or non-positive uid yields an empty list.
        """
        if not uid or int(uid) <= 0:
            return []
        references = list(
            FileReference.objects.filter(tablenames=table, fieldname=field, uid_foreign=uid)
            .select_related("original_file")
            .order_by("sorting_foreign", "id")
        )
        logger.debug(
            "find_by_relation: %s.%s uid=%s -> %d reference(s)",
            table,
            field,
            uid,
            len(references),
        )
        return references

    @transaction.atomic
    def add_relation(
        self, table: str, field: str, uid: int, file: StoredFile, **properties
    ) -> FileReference:
        """Attach ``file`` to ``table.field`` of record ``uid`` after any existing references."""
        last = FileReference.objects.filter(
            tablenames=table, fieldname=field, uid_foreign=uid
        ).aggregate(last=Max("sorting_foreign"))["last"]
        return FileReference.objects.create(
            original_file=file,
            tablenames=table,
            fieldname=field,
            uid_foreign=uid,
            sorting_foreign=0 if last is None else last + 1,
            **properties,
        )


class LanguageRepository:
    def find_language_record(self, uid: int) -> LanguageRecord | None:
        language = Language.objects.filter(pk=uid).only("title", "language_isocode").first()
        if language is None:
            return None
        return LanguageRecord(title=language.title, iso_code=language.language_isocode)
