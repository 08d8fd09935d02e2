# Generated manually for the initial canteen schema

import decimal
import uuid

import django.core.validators
import django.db.models.deletion
import simple_history.models
from django.conf import settings
from django.db import migrations, models

MEAL_CHOICES = [("breakfast", "早餐"), ("lunch", "午餐"), ("dinner", "晚餐")]
MENU_STATUS_CHOICES = [("draft", "草稿"), ("submitted", "已提交")]
ORDER_STATUS_CHOICES = [("draft", "草稿"), ("confirmed", "已确认")]
HISTORY_TYPE_CHOICES = [("+", "Created"), ("~", "Changed"), ("-", "Deleted")]


def history_fields():
    return [
        ("history_id", models.AutoField(primary_key=True, serialize=False)),
        ("history_date", models.DateTimeField(db_index=True)),
        ("history_change_reason", models.CharField(max_length=100, null=True)),
        (
            "history_type",
            models.CharField(choices=HISTORY_TYPE_CHOICES, max_length=1),
        ),
        (
            "history_user",
            models.ForeignKey(
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to=settings.AUTH_USER_MODEL,
            ),
        ),
    ]


def quantity_field():
    return models.DecimalField(
        decimal_places=3,
        default=decimal.Decimal("0"),
        max_digits=12,
        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))],
        verbose_name="数量",
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        # ══════════════════════════════════════════════════════════════
        # REFERENCE DATA
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="Ingredient",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("name", models.CharField(max_length=100, unique=True, verbose_name="名称")),
                (
                    "unit",
                    models.CharField(
                        blank=True,
                        help_text="kg, g, L, 个, 包...",
                        max_length=20,
                        verbose_name="单位",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="创建时间")),
            ],
            options={
                "verbose_name": "原料",
                "verbose_name_plural": "原料",
                "db_table": "canteen_ingredient",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Supplier",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("name", models.CharField(max_length=200, verbose_name="名称")),
                ("contact", models.CharField(blank=True, max_length=100, verbose_name="联系人")),
                ("phone", models.CharField(blank=True, max_length=50, verbose_name="电话")),
                ("is_active", models.BooleanField(default=True, verbose_name="启用")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="创建时间")),
            ],
            options={
                "verbose_name": "供应商",
                "verbose_name_plural": "供应商",
                "db_table": "canteen_supplier",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="CodeSequence",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("prefix", models.CharField(max_length=50, unique=True, verbose_name="前缀")),
                ("last_value", models.PositiveIntegerField(default=0, verbose_name="当前值")),
            ],
            options={
                "verbose_name": "编号序列",
                "verbose_name_plural": "编号序列",
                "db_table": "canteen_code_sequence",
            },
        ),
        # ══════════════════════════════════════════════════════════════
        # MENUS
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="Menu",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "uuid",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, unique=True, verbose_name="UUID"
                    ),
                ),
                ("date", models.DateField(verbose_name="日期")),
                (
                    "canteen",
                    models.SlugField(
                        help_text="CANTEEN['CANTEENS'] 中配置的食堂ID",
                        verbose_name="食堂",
                    ),
                ),
                (
                    "meal",
                    models.CharField(choices=MEAL_CHOICES, max_length=20, verbose_name="餐次"),
                ),
                (
                    "status",
                    models.CharField(
                        choices=MENU_STATUS_CHOICES,
                        default="draft",
                        max_length=20,
                        verbose_name="状态",
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="备注")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="创建时间")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="更新时间")),
                (
                    "submitted_at",
                    models.DateTimeField(blank=True, null=True, verbose_name="提交时间"),
                ),
            ],
            options={
                "verbose_name": "菜单",
                "verbose_name_plural": "菜单",
                "db_table": "canteen_menu",
                "ordering": ["-date", "canteen", "meal"],
                "indexes": [
                    models.Index(fields=["date", "status"], name="canteen_menu_date_status_idx")
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("date", "canteen", "meal"), name="canteen_menu_unique_slot"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Dish",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("name", models.CharField(max_length=200, verbose_name="菜名")),
                (
                    "planned_servings",
                    models.PositiveIntegerField(blank=True, null=True, verbose_name="计划份数"),
                ),
                (
                    "chef_name",
                    models.CharField(
                        blank=True,
                        help_text="负责制作的厨师",
                        max_length=100,
                        verbose_name="厨师",
                    ),
                ),
                ("remarks", models.TextField(blank=True, verbose_name="备注")),
                ("sort_order", models.PositiveSmallIntegerField(default=0, verbose_name="排序")),
                (
                    "menu",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="dishes",
                        to="canteen.menu",
                        verbose_name="菜单",
                    ),
                ),
            ],
            options={
                "verbose_name": "菜品",
                "verbose_name_plural": "菜品",
                "db_table": "canteen_dish",
                "ordering": ["sort_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="DishIngredient",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("quantity", quantity_field()),
                ("unit", models.CharField(max_length=20, verbose_name="单位")),
                ("remark", models.CharField(blank=True, max_length=200, verbose_name="备注")),
                (
                    "dish",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ingredients",
                        to="canteen.dish",
                        verbose_name="菜品",
                    ),
                ),
                (
                    "ingredient",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="usages",
                        to="canteen.ingredient",
                        verbose_name="原料",
                    ),
                ),
            ],
            options={
                "verbose_name": "用料",
                "verbose_name_plural": "用料",
                "db_table": "canteen_dish_ingredient",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="HistoricalMenu",
            fields=[
                (
                    "id",
                    models.BigIntegerField(
                        auto_created=True, blank=True, db_index=True, verbose_name="ID"
                    ),
                ),
                (
                    "uuid",
                    models.UUIDField(
                        db_index=True, default=uuid.uuid4, editable=False, verbose_name="UUID"
                    ),
                ),
                ("date", models.DateField(verbose_name="日期")),
                (
                    "canteen",
                    models.SlugField(
                        help_text="CANTEEN['CANTEENS'] 中配置的食堂ID",
                        verbose_name="食堂",
                    ),
                ),
                (
                    "meal",
                    models.CharField(choices=MEAL_CHOICES, max_length=20, verbose_name="餐次"),
                ),
                (
                    "status",
                    models.CharField(
                        choices=MENU_STATUS_CHOICES,
                        default="draft",
                        max_length=20,
                        verbose_name="状态",
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="备注")),
                (
                    "created_at",
                    models.DateTimeField(blank=True, editable=False, verbose_name="创建时间"),
                ),
                (
                    "updated_at",
                    models.DateTimeField(blank=True, editable=False, verbose_name="更新时间"),
                ),
                (
                    "submitted_at",
                    models.DateTimeField(blank=True, null=True, verbose_name="提交时间"),
                ),
                *history_fields(),
            ],
            options={
                "verbose_name": "historical 菜单",
                "verbose_name_plural": "historical 菜单",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        # ══════════════════════════════════════════════════════════════
        # PURCHASE ORDERS
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="PurchaseOrder",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "uuid",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, unique=True, verbose_name="UUID"
                    ),
                ),
                (
                    "code",
                    models.CharField(
                        blank=True,
                        help_text="自动生成 (PO-YYYY-NNNNN)",
                        max_length=30,
                        unique=True,
                        verbose_name="编号",
                    ),
                ),
                ("date", models.DateField(verbose_name="采购日期")),
                (
                    "target_date",
                    models.DateField(
                        db_index=True, help_text="采购单对应的菜单日期", verbose_name="用餐日期"
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=ORDER_STATUS_CHOICES,
                        default="draft",
                        max_length=20,
                        verbose_name="状态",
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="备注")),
                ("created_by", models.CharField(blank=True, max_length=100, verbose_name="创建人")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="创建时间")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="更新时间")),
                (
                    "confirmed_at",
                    models.DateTimeField(blank=True, null=True, verbose_name="确认时间"),
                ),
                (
                    "supplier",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="purchase_orders",
                        to="canteen.supplier",
                        verbose_name="供应商",
                    ),
                ),
            ],
            options={
                "verbose_name": "采购单",
                "verbose_name_plural": "采购单",
                "db_table": "canteen_purchase_order",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="PurchaseOrderItem",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("quantity", quantity_field()),
                ("unit", models.CharField(max_length=20, verbose_name="单位")),
                ("remark", models.CharField(blank=True, max_length=200, verbose_name="备注")),
                (
                    "ingredient",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="purchase_items",
                        to="canteen.ingredient",
                        verbose_name="原料",
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="canteen.purchaseorder",
                        verbose_name="采购单",
                    ),
                ),
            ],
            options={
                "verbose_name": "采购明细",
                "verbose_name_plural": "采购明细",
                "db_table": "canteen_purchase_order_item",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="HistoricalPurchaseOrder",
            fields=[
                (
                    "id",
                    models.BigIntegerField(
                        auto_created=True, blank=True, db_index=True, verbose_name="ID"
                    ),
                ),
                (
                    "uuid",
                    models.UUIDField(
                        db_index=True, default=uuid.uuid4, editable=False, verbose_name="UUID"
                    ),
                ),
                (
                    "code",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="自动生成 (PO-YYYY-NNNNN)",
                        max_length=30,
                        verbose_name="编号",
                    ),
                ),
                ("date", models.DateField(verbose_name="采购日期")),
                (
                    "target_date",
                    models.DateField(
                        db_index=True, help_text="采购单对应的菜单日期", verbose_name="用餐日期"
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=ORDER_STATUS_CHOICES,
                        default="draft",
                        max_length=20,
                        verbose_name="状态",
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="备注")),
                ("created_by", models.CharField(blank=True, max_length=100, verbose_name="创建人")),
                (
                    "created_at",
                    models.DateTimeField(blank=True, editable=False, verbose_name="创建时间"),
                ),
                (
                    "updated_at",
                    models.DateTimeField(blank=True, editable=False, verbose_name="更新时间"),
                ),
                (
                    "confirmed_at",
                    models.DateTimeField(blank=True, null=True, verbose_name="确认时间"),
                ),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="+",
                        to="canteen.supplier",
                        verbose_name="供应商",
                    ),
                ),
                *history_fields(),
            ],
            options={
                "verbose_name": "historical 采购单",
                "verbose_name_plural": "historical 采购单",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
