from django.db import models


class TimeStampedMixin(models.Model):
    """Mixin providing created_at and updated_at timestamp fields."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
