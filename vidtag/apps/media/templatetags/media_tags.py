import logging

from django import template
from django.conf import settings

from vidtag.apps.media.registry import get_renderer

logger = logging.getLogger(__name__)

register = template.Library()


def site_isocode(request) -> str:
    """Return the ISO 639-1 part of the request language, e.g. "de" for "de-at"."""
    language_code = getattr(request, "LANGUAGE_CODE", None) or settings.LANGUAGE_CODE
    return language_code.split("-")[0].lower()


@register.simple_tag(takes_context=True)
def render_media(context, file, width=0, height=0, relative_paths=False, **options):
    """Render a stored file with the best matching renderer.

    Usage:
        {% load media_tags %}
        {% render_media video 640 360 autoplay=1 class="hero-video" %}

    Renders nothing when no renderer accepts the file.
    """
    if not file:
        return ""
    renderer = get_renderer(file)
    if renderer is None:
        logger.debug("render_media: no renderer for mime=%s", file.get_mime_type())
        return ""
    return renderer.render(
        file,
        width,
        height,
        options,
        relative_paths,
        site_isocode=site_isocode(context.get("request")),
    )
