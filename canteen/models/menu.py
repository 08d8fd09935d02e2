"""
Menu, Dish and DishIngredient models.

Menu = dishes planned for one (date, canteen, meal slot).
Dish = one dish on a menu.
DishIngredient = ingredient usage line of a dish.
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

from canteen.conf import get_canteen_name, get_canteens

logger = logging.getLogger(__name__)


class MenuStatus(models.TextChoices):
    """Menu lifecycle status."""

    DRAFT = "draft", _("草稿")
    SUBMITTED = "submitted", _("已提交")


class MealSlot(models.TextChoices):
    """Meal slots served by a canteen."""

    BREAKFAST = "breakfast", _("早餐")
    LUNCH = "lunch", _("午餐")
    DINNER = "dinner", _("晚餐")


class Menu(models.Model):
    """
    菜单: one canteen, one meal slot, one day.

    Status: DRAFT → SUBMITTED (terminal)

    Only submitted menus count toward procurement.
    """

    # UUID for external references
    uuid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
        verbose_name=_("UUID"),
    )

    date = models.DateField(
        verbose_name=_("日期"),
    )
    canteen = models.SlugField(
        max_length=50,
        verbose_name=_("食堂"),
        help_text=_("CANTEEN['CANTEENS'] 中配置的食堂ID"),
    )
    meal = models.CharField(
        max_length=20,
        choices=MealSlot.choices,
        verbose_name=_("餐次"),
    )

    status = models.CharField(
        max_length=20,
        choices=MenuStatus.choices,
        default=MenuStatus.DRAFT,
        verbose_name=_("状态"),
    )

    notes = models.TextField(
        blank=True,
        verbose_name=_("备注"),
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("创建时间"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("更新时间"))
    submitted_at = models.DateTimeField(null=True, blank=True, verbose_name=_("提交时间"))

    # History
    history = HistoricalRecords()

    class Meta:
        db_table = "canteen_menu"
        verbose_name = _("菜单")
        verbose_name_plural = _("菜单")
        ordering = ["-date", "canteen", "meal"]
        constraints = [
            models.UniqueConstraint(
                fields=["date", "canteen", "meal"],
                name="canteen_menu_unique_slot",
            ),
        ]
        indexes = [
            models.Index(fields=["date", "status"], name="canteen_menu_date_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.date:%Y-%m-%d} {self.canteen_name} {self.get_meal_display()}"

    def clean(self):
        super().clean()
        if self.canteen and self.canteen not in get_canteens():
            raise ValidationError({"canteen": _("未知的食堂。")})

    @property
    def canteen_name(self) -> str:
        return get_canteen_name(self.canteen)

    @property
    def is_submitted(self) -> bool:
        return self.status == MenuStatus.SUBMITTED

    def submit(self, user=None):
        """提交菜单 (one-way)."""
        if self.status != MenuStatus.DRAFT:
            raise ValidationError(_("只有草稿菜单可以提交。"))

        self.status = MenuStatus.SUBMITTED
        self.submitted_at = timezone.now()
        self.save(update_fields=["status", "submitted_at", "updated_at"])

        from canteen.signals import menu_submitted

        menu_submitted.send(sender=self.__class__, menu=self, user=user)

        logger.info(
            f"Menu {self} submitted",
            extra={
                "menu_date": str(self.date),
                "canteen": self.canteen,
                "meal": self.meal,
                "user": user.username if user else None,
            },
        )

    @property
    def total_dishes(self) -> int:
        return self.dishes.count()


class Dish(models.Model):
    """Dish planned on a menu."""

    menu = models.ForeignKey(
        Menu,
        on_delete=models.CASCADE,
        related_name="dishes",
        verbose_name=_("菜单"),
    )
    name = models.CharField(
        max_length=200,
        verbose_name=_("菜名"),
    )
    planned_servings = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name=_("计划份数"),
    )
    chef_name = models.CharField(
        max_length=100,
        blank=True,
        verbose_name=_("厨师"),
        help_text=_("负责制作的厨师"),
    )
    remarks = models.TextField(
        blank=True,
        verbose_name=_("备注"),
    )
    sort_order = models.PositiveSmallIntegerField(
        default=0,
        verbose_name=_("排序"),
    )

    class Meta:
        db_table = "canteen_dish"
        verbose_name = _("菜品")
        verbose_name_plural = _("菜品")
        ordering = ["sort_order", "id"]

    def __str__(self) -> str:
        return self.name


class DishIngredient(models.Model):
    """
    Ingredient usage line of a dish.

    ``unit`` is stored verbatim from the line and is not checked against
    ``Ingredient.unit``.
    """

    dish = models.ForeignKey(
        Dish,
        on_delete=models.CASCADE,
        related_name="ingredients",
        verbose_name=_("菜品"),
    )
    ingredient = models.ForeignKey(
        "canteen.Ingredient",
        on_delete=models.PROTECT,
        related_name="usages",
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
        db_table = "canteen_dish_ingredient"
        verbose_name = _("用料")
        verbose_name_plural = _("用料")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.ingredient} ({self.quantity} {self.unit})"
