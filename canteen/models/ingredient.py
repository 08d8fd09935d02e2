"""
Ingredient model.

Ingredient = reference entity for a raw material (原料).
Created on first use by name, looked up by name thereafter.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Ingredient(models.Model):
    """
    原料.

    The canonical ``unit`` is informative only: usage lines and purchase
    order lines carry their own unit verbatim.
    """

    name = models.CharField(
        max_length=100,
        unique=True,
        verbose_name=_("名称"),
    )
    unit = models.CharField(
        max_length=20,
        blank=True,
        verbose_name=_("单位"),
        help_text=_("kg, g, L, 个, 包..."),
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("创建时间"))

    class Meta:
        db_table = "canteen_ingredient"
        verbose_name = _("原料")
        verbose_name_plural = _("原料")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
