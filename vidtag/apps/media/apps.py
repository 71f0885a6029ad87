from django.apps import AppConfig


class MediaConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "vidtag.apps.media"
    verbose_name = "Media"

    def ready(self):
        from . import signals  # noqa: F401 - registers @receiver handlers

        self._register_renderers()

    @staticmethod
    def _register_renderers():
        from .registry import register
        from .rendering import VideoTagRenderer

        register(VideoTagRenderer())
