"""End-to-end tests rendering stored videos through the registry and template tag."""

from io import StringIO

from constance.test import override_config
from django.core.management import call_command
from django.core.management.base import CommandError
from django.template import Context, Template
from django.test import RequestFactory, TestCase, override_settings, tag
from django.utils import translation

from vidtag.apps.core.test_utils import (
    TemporaryMediaMixin,
    create_content_reference,
    create_language,
    create_poster,
    create_stored_file,
    create_track,
    create_video,
)
from vidtag.apps.media import registry
from vidtag.apps.media.models import FileReference, StoredFile
from vidtag.apps.media.rendering import FileRenderer, VideoTagRenderer
from vidtag.apps.media.templatetags.media_tags import site_isocode


def reload(video: StoredFile) -> StoredFile:
    """Fetch a fresh copy so relation counters updated by signals are visible."""
    return StoredFile.objects.get(pk=video.pk)


@tag("rendering")
class StoredVideoRenderingTests(TemporaryMediaMixin, TestCase):
    """Tests rendering real stored files with the default collaborators."""

    def test_plain_video(self):
        """A video without relations renders the minimal tag from config defaults."""
        video = create_video()
        html = VideoTagRenderer().render(video, 320, 240, {"controls": True})
        self.assertEqual(
            html,
            '<video width="320" height="240" controls oncontextmenu="return false;" '
            f'data-setup="{{}}"><source src="{video.get_public_url()}" type="video/mp4"></video>',
        )

    def test_poster_and_tracks_from_metadata(self):
        """Poster and tracks attached to the metadata are rendered."""
        video = create_video()
        poster = create_poster(video)
        german = create_language("Deutsch", "de")
        default_track = create_track(video)
        german_track = create_track(video, track_language=german.pk, track_type="captions")

        html = VideoTagRenderer().render(reload(video), 0, 0, site_isocode="en")

        self.assertIn(f'poster="{poster.get_public_url()}"', html)
        self.assertIn(
            '<track label="Default" kind="subtitles" srclang="en" '
            f'src="{default_track.get_public_url()}">'
            '<track label="Deutsch" kind="captions" srclang="de" '
            f'src="{german_track.get_public_url()}"></video>',
            html,
        )

    def test_default_label_is_translated(self):
        """The default track label follows the active language."""
        video = create_video()
        create_track(video)
        with translation.override("en"):
            html = VideoTagRenderer().render(reload(video), 0, 0)
        self.assertIn('label="Default"', html)

    def test_reference_autoplay(self):
        """A content reference with autoplay enables autoplay unless overridden."""
        reference = create_content_reference(create_video(), autoplay=True)
        renderer = VideoTagRenderer()

        self.assertIn(" autoplay ", renderer.render(reference, 0, 0))
        self.assertNotIn("autoplay", renderer.render(reference, 0, 0, {"autoplay": 0}))

    def test_reference_uses_original_file_metadata(self):
        """Rendering a reference resolves posters from the original file's metadata."""
        video = create_video()
        poster = create_poster(video)
        reference = FileReference.objects.get(pk=create_content_reference(video).pk)

        html = VideoTagRenderer().render(reference, 0, 0)

        self.assertIn(f'poster="{poster.get_public_url()}"', html)
        self.assertIn(f'<source src="{video.get_public_url()}"', html)

    @override_config(VIDEO_DISABLE_CONTEXT_MENU=False, VIDEO_DATA_SETUP="")
    def test_integration_attributes_follow_config(self):
        """Admin config can turn off the context-menu hook and data-setup marker."""
        html = VideoTagRenderer().render(create_video(), 0, 0)
        self.assertNotIn("oncontextmenu", html)
        self.assertNotIn("data-setup", html)


class HighPriorityMp4Renderer(FileRenderer):
    def get_priority(self):
        return 50

    def can_render(self, file):
        return file.get_mime_type() == "video/mp4"

    def render(self, file, width, height, options=None, relative_paths=False, *, site_isocode=""):
        return "custom"


@tag("rendering")
class RendererRegistryTests(TemporaryMediaMixin, TestCase):
    """Tests for renderer registration and lookup."""

    def setUp(self):
        self.startup_renderers = registry.get_renderers()
        registry.clear_registry()
        self.addCleanup(self._restore_registry)

    def _restore_registry(self):
        registry.clear_registry()
        for renderer in self.startup_renderers:
            registry.register(renderer)

    def test_video_renderer_registered_on_startup(self):
        """The media app registers the video renderer when it loads."""
        self.assertTrue(any(isinstance(r, VideoTagRenderer) for r in self.startup_renderers))

    def test_highest_priority_wins(self):
        registry.register(VideoTagRenderer())
        registry.register(HighPriorityMp4Renderer())

        self.assertIsInstance(registry.get_renderer(create_video()), HighPriorityMp4Renderer)
        webm = create_video(name="clip.webm", mime_type="video/webm")
        self.assertIsInstance(registry.get_renderer(webm), VideoTagRenderer)

    def test_no_renderer_for_unsupported_file(self):
        registry.register(VideoTagRenderer())
        image = create_stored_file(name="photo.jpg", mime_type="image/jpeg")
        self.assertIsNone(registry.get_renderer(image))

    def test_duplicate_registration_rejected(self):
        registry.register(VideoTagRenderer())
        with self.assertRaises(ValueError):
            registry.register(VideoTagRenderer())


@tag("rendering")
class RenderMediaTagTests(TemporaryMediaMixin, TestCase):
    """Tests for the {% render_media %} template tag."""

    def render_template(self, source, **context):
        template = Template("{% load media_tags %}" + source)
        return template.render(Context(context))

    def test_renders_video(self):
        """The tag renders through the registered renderer without double escaping."""
        video = create_video()
        html = self.render_template(
            '{% render_media video 640 "360c" autoplay=1 title="A & B" %}', video=video
        )
        self.assertEqual(
            html,
            '<video width="640" height="360" controls autoplay oncontextmenu="return false;" '
            f'title="A &amp; B" data-setup="{{}}"><source src="{video.get_public_url()}" '
            'type="video/mp4"></video>',
        )

    def test_template_literal_attributes_escaped(self):
        """String literals in the template are escaped even though Django marks them safe."""
        html = self.render_template(
            '{% render_media video title="<b>x</b>" %}', video=create_video()
        )
        self.assertIn('title="&lt;b&gt;x&lt;/b&gt;"', html)
        self.assertNotIn("<b>", html)

    def test_relative_paths(self):
        video = create_video()
        html = self.render_template("{% render_media video relative_paths=True %}", video=video)
        self.assertIn(f'src="{video.get_public_url(relative=True)}"', html)

    def test_track_language_from_request(self):
        """Tracks without a language use the request language."""
        video = create_video()
        create_track(video)
        request = RequestFactory().get("/")
        request.LANGUAGE_CODE = "de-at"

        html = self.render_template(
            "{% render_media video %}", video=reload(video), request=request
        )

        self.assertIn('srclang="de"', html)

    def test_unsupported_file_renders_nothing(self):
        image = create_stored_file(name="photo.jpg", mime_type="image/jpeg")
        self.assertEqual(self.render_template("{% render_media image %}", image=image), "")

    def test_missing_file_renders_nothing(self):
        self.assertEqual(self.render_template("{% render_media missing %}"), "")

    @override_settings(LANGUAGE_CODE="fr-ca")
    def test_site_isocode_falls_back_to_settings(self):
        self.assertEqual(site_isocode(None), "fr")


@tag("rendering")
class RenderVideoCommandTests(TemporaryMediaMixin, TestCase):
    """Tests for the render_video management command."""

    def call(self, *args):
        out = StringIO()
        call_command("render_video", *args, stdout=out)
        return out.getvalue().strip()

    def test_renders_stored_file(self):
        video = create_video()
        output = self.call(str(video.pk), "--width", "320", "--height", "240")
        self.assertEqual(output, VideoTagRenderer().render(video, 320, 240))

    def test_renders_reference_with_options(self):
        reference = create_content_reference(create_video())
        output = self.call(
            str(reference.pk), "--reference", "--option", "muted=1", "--option", "class=hero"
        )
        self.assertIn("controls muted", output)
        self.assertIn('class="hero"', output)

    def test_unknown_file(self):
        with self.assertRaises(CommandError):
            self.call("999")

    def test_unsupported_file(self):
        image = create_stored_file(name="photo.jpg", mime_type="image/jpeg")
        with self.assertRaises(CommandError):
            self.call(str(image.pk))

    def test_invalid_option(self):
        video = create_video()
        with self.assertRaises(CommandError):
            self.call(str(video.pk), "--option", "muted")
