"""HTML renderers for stored files.

A renderer turns a stored file (or a reference to one) into an HTML fragment.
Renderers are registered in ``vidtag.apps.media.registry`` and picked by
priority, so a more specific renderer can take over a MIME type from a
general one.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from django.utils.html import escape, format_html
from django.utils.safestring import SafeString, mark_safe

from .labels import translate as default_translate
from .models import METADATA_TABLE
from .repositories import FileRepository, LanguageRepository

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_INTEGER = re.compile(r"[+-]?\d+")


def to_int(value: Any) -> int:
    """Coerce a dimension like ``220``, ``"200m"`` or ``"200c"`` to an integer.

    Strings are read up to the end of their leading number, which may carry a
    fraction or exponent (``"1e3"`` is 1000), and truncated. Values without a
    leading number become 0.
    """
    if value is None:
        return 0
    if isinstance(value, bool | int):
        return int(value)
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return 0
    number = match.group(1)
    if _INTEGER.fullmatch(number):
        return int(number)
    return to_int(float(number))


def is_empty(value: Any) -> bool:
    """True for values an option treats as unset: None, False, 0, "", "0", empty containers."""
    if isinstance(value, str):
        return value in {"", "0"}
    return not value


class FileRenderer:
    """Base class for file renderers.

    Priority should be between 1 and 100; higher wins when several renderers
    accept the same file.
    """

    def get_priority(self) -> int:
        raise NotImplementedError

    def can_render(self, file) -> bool:
        raise NotImplementedError

    def render(
        self,
        file,
        width: int | str,
        height: int | str,
        options: Mapping[str, Any] | None = None,
        relative_paths: bool = False,
        *,
        site_isocode: str = "",
    ) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class VideoTagSettings:
    """Integration attributes added to every video tag."""

    disable_context_menu: bool = True
    data_setup: str = "{}"

    @classmethod
    def from_config(cls) -> VideoTagSettings:
        from constance import config

        return cls(
            disable_context_menu=bool(config.VIDEO_DISABLE_CONTEXT_MENU),
            data_setup=config.VIDEO_DATA_SETUP or "",
        )


class VideoTagRenderer(FileRenderer):
    """Render HTML5 ``<video>`` tags, including poster and subtitle tracks from metadata."""

    MIME_TYPES = ("video/mp4", "video/webm", "video/ogg", "application/ogg")
    PASSTHROUGH_ATTRIBUTES = (
        "class",
        "dir",
        "id",
        "lang",
        "style",
        "title",
        "accesskey",
        "tabindex",
        "onclick",
    )
    DEFAULT_TRACK_KIND = "subtitles"

    def __init__(
        self,
        file_repository: FileRepository | None = None,
        language_repository: LanguageRepository | None = None,
        translate: Callable[[str, str], str | None] | None = None,
        tag_settings: VideoTagSettings | None = None,
    ):
        self.file_repository = file_repository or FileRepository()
        self.language_repository = language_repository or LanguageRepository()
        self.translate = translate or default_translate
        # None reads admin-editable config on every render
        self.tag_settings = tag_settings

    def get_priority(self) -> int:
        return 1

    def can_render(self, file) -> bool:
        return file.get_mime_type() in self.MIME_TYPES

    def render(
        self,
        file,
        width: int | str,
        height: int | str,
        options: Mapping[str, Any] | None = None,
        relative_paths: bool = False,
        *,
        site_isocode: str = "",
    ) -> SafeString:
        """Render a ``<video>`` tag for ``file``.

        Options: ``controls`` (default on), ``autoplay``, ``muted``, ``loop``,
        ``poster`` (URL), plus the pass-through HTML attributes in
        ``PASSTHROUGH_ATTRIBUTES``. ``site_isocode`` is the srclang used for
        tracks without a language of their own.
        """
        options = dict(options or {})
        tag_settings = self.tag_settings or VideoTagSettings.from_config()

        # A reference can carry its own autoplay setting; an explicit option wins.
        if options.get("autoplay") is None:
            autoplay = file.get_property("autoplay")
            if autoplay is not None:
                options["autoplay"] = autoplay

        attributes: list[str] = []
        width = to_int(width)
        height = to_int(height)
        if width > 0:
            attributes.append(format_html('width="{}"', width))
        if height > 0:
            attributes.append(format_html('height="{}"', height))
        if options.get("controls") is None or not is_empty(options["controls"]):
            attributes.append("controls")
        for flag in ("autoplay", "muted", "loop"):
            if not is_empty(options.get(flag)):
                attributes.append(flag)

        # Both posters are emitted when an explicit one and a related one exist.
        if not is_empty(options.get("poster")):
            attributes.append(format_html('poster="{}"', escape(options["poster"])))
        original = file.get_original_file()
        if original.get_property("poster"):
            posters = self.file_repository.find_by_relation(
                METADATA_TABLE, "poster", original.metadata_uid
            )
            if posters:
                attributes.append(format_html('poster="{}"', escape(posters[0].get_public_url())))

        if tag_settings.disable_context_menu:
            attributes.append('oncontextmenu="return false;"')

        tracks = ""
        if original.get_property("tracks"):
            tracks = self._render_tracks(original, site_isocode)

        for name in self.PASSTHROUGH_ATTRIBUTES:
            if not is_empty(options.get(name)):
                attributes.append(format_html('{}="{}"', name, escape(options[name])))

        if tag_settings.data_setup:
            attributes.append(format_html('data-setup="{}"', escape(tag_settings.data_setup)))

        logger.debug(
            "render: mime=%s attributes=%d tracks=%s",
            file.get_mime_type(),
            len(attributes),
            bool(tracks),
        )
        attribute_html = " " + " ".join(attributes) if attributes else ""
        return format_html(
            '<video{}><source src="{}" type="{}">{}</video>',
            mark_safe(attribute_html),  # noqa: S308 - each value escaped above
            escape(file.get_public_url(relative_paths)),
            escape(file.get_mime_type()),
            tracks,
        )

    def _render_tracks(self, original, site_isocode: str) -> SafeString:
        references = self.file_repository.find_by_relation(
            METADATA_TABLE, "tracks", original.metadata_uid
        )
        default_label = self.translate("language.default", "videos") or ""
        rendered = []
        for reference in references:
            label, iso_code = default_label, site_isocode
            track_language = to_int(reference.get_property("track_language"))
            if track_language > 0:
                record = self.language_repository.find_language_record(track_language)
                if record is not None:
                    label, iso_code = record.title, record.iso_code
            rendered.append(
                format_html(
                    '<track label="{}" kind="{}" srclang="{}" src="{}">',
                    escape(label),
                    escape(reference.get_property("track_type") or self.DEFAULT_TRACK_KIND),
                    escape(iso_code),
                    escape(reference.get_public_url()),
                )
            )
        return mark_safe("".join(rendered))  # noqa: S308 - each track built with format_html
