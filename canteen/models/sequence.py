"""
Code sequence for atomic PurchaseOrder code generation.

Uses an atomic counter with SELECT FOR UPDATE instead of
SELECT MAX(code) + 1.
"""

from django.db import models, transaction
from django.utils.translation import gettext_lazy as _


class CodeSequence(models.Model):
    """
    Atomic counter for generating sequential codes.

    One row per (prefix), e.g. "PO-2026" → last_value = 42.

    Usage (internal to PurchaseOrder.save):
        seq_val = CodeSequence.next_value("PO-2026")
        # Returns 1, 2, 3... atomically
    """

    prefix = models.CharField(
        max_length=50,
        unique=True,
        verbose_name=_("前缀"),
    )
    last_value = models.PositiveIntegerField(
        default=0,
        verbose_name=_("当前值"),
    )

    class Meta:
        db_table = "canteen_code_sequence"
        verbose_name = _("编号序列")
        verbose_name_plural = _("编号序列")

    def __str__(self) -> str:
        return f"{self.prefix} → {self.last_value}"

    @classmethod
    def next_value(cls, prefix: str) -> int:
        """Atomically increment and return the next value for a prefix."""
        with transaction.atomic():
            seq, created = cls.objects.select_for_update().get_or_create(
                prefix=prefix, defaults={"last_value": 0}
            )
            seq.last_value += 1
            seq.save(update_fields=["last_value"])
            return seq.last_value
