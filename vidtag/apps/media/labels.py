"""Localized labels used in rendered markup, keyed by domain and key."""

from __future__ import annotations

from django.utils.translation import gettext_lazy as _

LABELS = {
    "videos": {
        "language.default": _("Default"),
    },
}


def translate(key: str, domain: str) -> str | None:
    """Return the label for ``key`` in the active language, or None if unknown."""
    label = LABELS.get(domain, {}).get(key)
    return None if label is None else str(label)
