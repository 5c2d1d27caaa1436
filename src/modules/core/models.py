"""Base abstract models shared by the service's modules.

Provides:
- ``TimestampedModel``: created_at / updated_at bookkeeping.
- ``SoftDeleteModel``: Extends TimestampedModel with an ``available`` flag.

Design decisions:
- Soft delete is a single boolean ``available`` column.  It starts as
  ``True`` and only ever flips to ``False``; there is no restore.
- ``objects`` manager returns ALL records (unfiltered).  Use
  ``.available()`` explicitly to exclude deactivated rows.
- ``save()`` guard ensures ``updated_at`` is included when ``update_fields``
  is specified (Django skips ``auto_now`` fields otherwise).
"""

from __future__ import annotations

from django.db import models

# ---------------------------------------------------------------------------
# TimestampedModel
# ---------------------------------------------------------------------------


class TimestampedModel(models.Model):
    """Abstract base with timestamp bookkeeping."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Ensure ``updated_at`` is refreshed even when ``update_fields`` is passed."""
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)


# ---------------------------------------------------------------------------
# Soft Delete infrastructure
# ---------------------------------------------------------------------------


class SoftDeleteQuerySet(models.QuerySet):
    """QuerySet with soft-delete helpers."""

    def available(self) -> SoftDeleteQuerySet:
        """Return only active records."""
        return self.filter(available=True)


class SoftDeleteManager(models.Manager):
    """Manager that exposes ``.available()`` on the queryset."""

    def get_queryset(self) -> SoftDeleteQuerySet:
        return SoftDeleteQuerySet(self.model, using=self._db)

    def available(self) -> SoftDeleteQuerySet:
        return self.get_queryset().available()


class SoftDeleteModel(TimestampedModel):
    """Abstract model with soft-delete via an ``available`` flag.

    - ``objects`` is **unfiltered** (returns all rows).
    - Use ``Model.objects.available()`` to exclude soft-deleted rows.
    - ``deactivate()`` performs the soft-delete; rows are never removed.
    """

    available = models.BooleanField(default=True, db_index=True)

    objects = SoftDeleteManager()

    class Meta:
        abstract = True

    @property
    def is_deleted(self) -> bool:
        """Computed: ``True`` when the record has been soft-deleted."""
        return not self.available

    def deactivate(self) -> None:
        """Soft-delete this instance (no-op if already deactivated)."""
        if self.is_deleted:
            return
        self.available = False
        self.save(update_fields=["available", "updated_at"])
