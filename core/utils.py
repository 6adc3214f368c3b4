from django.utils import timezone


def as_id(value):
    """Normalize a user reference to a plain string id.

    Accepts a model instance, a raw primary key or ``None``. Every actor
    comparison goes through here so a loaded object is never compared
    against a raw id.
    """
    if value is None:
        return None
    pk = getattr(value, 'pk', value)
    return None if pk is None else str(pk)


def system_clock():
    return timezone.now()

