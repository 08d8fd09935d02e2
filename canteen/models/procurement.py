"""
Supplier, PurchaseOrder and PurchaseOrderItem models.

PurchaseOrder = 采购单 covering the menus of one target date.
"""

import logging
import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from simple_history.models import HistoricalRecords

from canteen.conf import get_setting
from canteen.models.sequence import CodeSequence

logger = logging.getLogger(__name__)


class Supplier(models.Model):
    """供应商."""

    name = models.CharField(
        max_length=200,
        verbose_name=_("名称"),
    )
    contact = models.CharField(
        max_length=100,
        blank=True,
        verbose_name=_("联系人"),
    )
    phone = models.CharField(
        max_length=50,
        blank=True,
        verbose_name=_("电话"),
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name=_("启用"),
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("创建时间"))

    class Meta:
        db_table = "canteen_supplier"
        verbose_name = _("供应商")
        verbose_name_plural = _("供应商")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class PurchaseOrderStatus(models.TextChoices):
    """Purchase order lifecycle status."""

    DRAFT = "draft", _("草稿")
    CONFIRMED = "confirmed", _("已确认")


class PurchaseOrder(models.Model):
    """
    采购单.

    Status: DRAFT → CONFIRMED

    Any line of any order (draft or confirmed) marks its ingredient as
    assigned for ``target_date``.
    """

    # UUID for external references
    uuid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
        verbose_name=_("UUID"),
    )

    code = models.CharField(
        max_length=30,
        unique=True,
        blank=True,
        verbose_name=_("编号"),
        help_text=_("自动生成 (PO-YYYY-NNNNN)"),
    )

    date = models.DateField(
        verbose_name=_("采购日期"),
    )
    target_date = models.DateField(
        db_index=True,
        verbose_name=_("用餐日期"),
        help_text=_("采购单对应的菜单日期"),
    )

    supplier = models.ForeignKey(
        Supplier,
        on_delete=models.PROTECT,
        related_name="purchase_orders",
        verbose_name=_("供应商"),
    )

    status = models.CharField(
        max_length=20,
        choices=PurchaseOrderStatus.choices,
        default=PurchaseOrderStatus.DRAFT,
        verbose_name=_("状态"),
    )

    notes = models.TextField(
        blank=True,
        verbose_name=_("备注"),
    )
    created_by = models.CharField(
        max_length=100,
        blank=True,
        verbose_name=_("创建人"),
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("创建时间"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("更新时间"))
    confirmed_at = models.DateTimeField(null=True, blank=True, verbose_name=_("确认时间"))

    # History
    history = HistoricalRecords()

    class Meta:
        db_table = "canteen_purchase_order"
        verbose_name = _("采购单")
        verbose_name_plural = _("采购单")
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.code} ({self.target_date:%Y-%m-%d})"

    def save(self, *args, **kwargs):
        """Override save to auto-generate code."""
        if not self.code:
            self.code = self._generate_code()
        super().save(*args, **kwargs)

    def _generate_code(self) -> str:
        """Generate unique code in format PO-YYYY-NNNNN."""
        prefix = f"{get_setting('ORDER_CODE_PREFIX')}-{timezone.now().year}"
        return f"{prefix}-{CodeSequence.next_value(prefix):05d}"

    def confirm(self, user=None):
        """确认采购单."""
        if self.status != PurchaseOrderStatus.DRAFT:
            raise ValidationError(_("只有草稿采购单可以确认。"))

        self.status = PurchaseOrderStatus.CONFIRMED
        self.confirmed_at = timezone.now()
        self.save(update_fields=["status", "confirmed_at", "updated_at"])

        from canteen.signals import purchase_order_confirmed

        purchase_order_confirmed.send(sender=self.__class__, order=self, user=user)

        logger.info(
            f"PurchaseOrder {self.code} confirmed",
            extra={
                "purchase_order": self.code,
                "target_date": str(self.target_date),
                "user": user.username if user else None,
            },
        )

    @property
    def total_items(self) -> int:
        return self.items.count()


class PurchaseOrderItem(models.Model):
    """Line of a purchase order."""

    order = models.ForeignKey(
        PurchaseOrder,
        on_delete=models.CASCADE,
        related_name="items",
        verbose_name=_("采购单"),
    )
    ingredient = models.ForeignKey(
        "canteen.Ingredient",
        on_delete=models.PROTECT,
        related_name="purchase_items",
        verbose_name=_("原料"),
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name=_("数量"),
    )
    unit = models.CharField(
        max_length=20,
        verbose_name=_("单位"),
    )
    remark = models.CharField(
        max_length=200,
        blank=True,
        verbose_name=_("备注"),
    )

    class Meta:
        db_table = "canteen_purchase_order_item"
        verbose_name = _("采购明细")
        verbose_name_plural = _("采购明细")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.ingredient} ({self.quantity} {self.unit})"
