from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from .models import FileMetadata, FileReference, Language, StoredFile


@admin.register(Language)
class LanguageAdmin(SimpleHistoryAdmin):
    list_display = ("title", "language_isocode", "hidden")
    list_filter = ("hidden",)
    search_fields = ("title", "language_isocode")


class FileMetadataInline(admin.StackedInline):
    model = FileMetadata
    can_delete = False
    fields = ("title", "description", ("width", "height", "duration"), ("poster", "tracks"))
    readonly_fields = ("poster", "tracks")


@admin.register(StoredFile)
class StoredFileAdmin(admin.ModelAdmin):
    list_display = ("name", "mime_type", "created_at")
    list_filter = ("mime_type",)
    search_fields = ("name", "file")
    readonly_fields = ("created_at", "updated_at")
    inlines = (FileMetadataInline,)


@admin.register(FileMetadata)
class FileMetadataAdmin(SimpleHistoryAdmin):
    list_display = ("__str__", "file", "poster", "tracks", "updated_at")
    search_fields = ("title", "file__name")
    readonly_fields = ("poster", "tracks", "created_at", "updated_at")


@admin.register(FileReference)
class FileReferenceAdmin(admin.ModelAdmin):
    list_display = (
        "original_file",
        "tablenames",
        "fieldname",
        "uid_foreign",
        "sorting_foreign",
        "track_type",
        "track_language",
    )
    list_filter = ("tablenames", "fieldname", "track_type")
    search_fields = ("original_file__name", "title")
    list_select_related = ("original_file",)
    ordering = ("tablenames", "uid_foreign", "fieldname", "sorting_foreign")
