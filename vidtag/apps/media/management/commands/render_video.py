"""Print the HTML a stored file or file reference renders to."""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from vidtag.apps.media.models import FileReference, StoredFile
from vidtag.apps.media.registry import get_renderer


class Command(BaseCommand):
    help = "Render the HTML tag for a stored file (or, with --reference, a file reference)"

    def add_arguments(self, parser):
        parser.add_argument(
            "id", type=int, help="StoredFile id (FileReference id with --reference)"
        )
        parser.add_argument("--reference", action="store_true", help="Treat id as a FileReference")
        parser.add_argument("--width", default="0")
        parser.add_argument("--height", default="0")
        parser.add_argument(
            "--option",
            action="append",
            default=[],
            metavar="KEY=VALUE",
            help="Render option, may be repeated (e.g. --option autoplay=1)",
        )
        parser.add_argument("--relative", action="store_true", help="Use relative file URLs")
        parser.add_argument("--language", default="", help="ISO code for tracks without a language")

    def handle(self, *args, **options):
        file = self._get_file(options["id"], options["reference"])
        renderer = get_renderer(file)
        if renderer is None:
            raise CommandError(f"No renderer accepts {file} ({file.get_mime_type()})")

        html = renderer.render(
            file,
            options["width"],
            options["height"],
            self._parse_options(options["option"]),
            options["relative"],
            site_isocode=options["language"],
        )
        self.stdout.write(html)

    def _get_file(self, pk: int, reference: bool):
        model = FileReference if reference else StoredFile
        try:
            return model.objects.get(pk=pk)
        except model.DoesNotExist:
            raise CommandError(f"{model.__name__} {pk} does not exist") from None

    def _parse_options(self, pairs: list[str]) -> dict[str, str]:
        parsed = {}
        for pair in pairs:
            key, sep, value = pair.partition("=")
            if not sep or not key:
                raise CommandError(f"Invalid option '{pair}', expected KEY=VALUE")
            parsed[key.strip()] = value
        return parsed
