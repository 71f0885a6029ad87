"""Keep FileMetadata relation counters in step with their FileReferences."""

from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from .models import METADATA_TABLE, FileMetadata, FileReference


def _recount(tablenames, fieldname, uid_foreign):
    if tablenames != METADATA_TABLE or fieldname not in FileMetadata.RELATION_FIELDS:
        return
    count = FileReference.objects.filter(
        tablenames=METADATA_TABLE,
        fieldname=fieldname,
        uid_foreign=uid_foreign,
    ).count()
    FileMetadata.objects.filter(pk=uid_foreign).update(**{fieldname: count})


@receiver(pre_save, sender=FileReference)
def remember_previous_relation(sender, instance, **kwargs):
    """Note the relation an existing reference is saved away from."""
    instance._previous_relation = None
    if instance.pk is None:
        return
    instance._previous_relation = (
        FileReference.objects.filter(pk=instance.pk)
        .values_list("tablenames", "fieldname", "uid_foreign")
        .first()
    )


@receiver(post_save, sender=FileReference)
@receiver(post_delete, sender=FileReference)
def update_relation_count(sender, instance, **kwargs):
    """Recount the metadata field a reference is attached to, and the one it left."""
    relations = {(instance.tablenames, instance.fieldname, instance.uid_foreign)}
    previous = getattr(instance, "_previous_relation", None)
    if previous:
        relations.add(tuple(previous))
    for relation in relations:
        _recount(*relation)
