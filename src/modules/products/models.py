"""Product model with soft delete through the ``available`` flag.

Input rules (non-blank name, price format) live in the DTOs; the
database enforces a non-negative price.
"""

from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import SoftDeleteModel


class Product(SoftDeleteModel):
    """Product aggregate root.

    Rows are ordered by ascending ``id`` so that paginated listings are
    stable across calls.
    """

    name = models.CharField(max_length=255)
    price = models.FloatField(validators=[MinValueValidator(0)])

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"#{self.id} - {self.name}"
