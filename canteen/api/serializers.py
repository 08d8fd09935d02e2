"""
Canteen API Serializers.
"""

from decimal import Decimal

from rest_framework import serializers

from canteen.models import (
    Dish,
    DishIngredient,
    Ingredient,
    MealSlot,
    Menu,
    MenuStatus,
    PurchaseOrder,
    PurchaseOrderItem,
    Supplier,
)


class IngredientSerializer(serializers.ModelSerializer):
    """Serializer for Ingredient model."""

    class Meta:
        model = Ingredient
        fields = ["id", "name", "unit", "created_at"]
        read_only_fields = ["created_at"]


class SupplierSerializer(serializers.ModelSerializer):
    """Serializer for Supplier model."""

    class Meta:
        model = Supplier
        fields = ["id", "name", "contact", "phone", "is_active", "created_at"]
        read_only_fields = ["created_at"]


# ── Menus ──


class DishIngredientSerializer(serializers.ModelSerializer):
    ingredient_name = serializers.CharField(source="ingredient.name", read_only=True)

    class Meta:
        model = DishIngredient
        fields = ["id", "ingredient", "ingredient_name", "quantity", "unit", "remark"]


class DishSerializer(serializers.ModelSerializer):
    ingredients = DishIngredientSerializer(many=True, read_only=True)

    class Meta:
        model = Dish
        fields = [
            "id",
            "name",
            "planned_servings",
            "chef_name",
            "remarks",
            "ingredients",
        ]


class MenuSerializer(serializers.ModelSerializer):
    """Read serializer for Menu with nested dishes and lines."""

    canteen_name = serializers.CharField(read_only=True)
    dishes = DishSerializer(many=True, read_only=True)

    class Meta:
        model = Menu
        fields = [
            "id",
            "uuid",
            "date",
            "canteen",
            "canteen_name",
            "meal",
            "status",
            "notes",
            "dishes",
            "created_at",
            "updated_at",
            "submitted_at",
        ]
        read_only_fields = fields


class MenuLineWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    quantity = serializers.DecimalField(
        max_digits=12, decimal_places=3, min_value=Decimal("0")
    )
    unit = serializers.CharField(max_length=20, allow_blank=True, default="")
    remark = serializers.CharField(max_length=200, allow_blank=True, default="")


class DishWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    planned_servings = serializers.IntegerField(
        min_value=0, required=False, allow_null=True
    )
    chef_name = serializers.CharField(max_length=100, allow_blank=True, default="")
    remarks = serializers.CharField(allow_blank=True, default="")
    ingredients = MenuLineWriteSerializer(many=True, default=list)


class MenuWriteSerializer(serializers.Serializer):
    """
    Payload of POST /menus/ (create or replace the menu of a slot).

    {
        "date": "2025-01-01",
        "canteen": "canteen-1",
        "meal": "lunch",
        "status": "draft",
        "dishes": [{"name": "红烧肉", "ingredients": [{"name": "五花肉", "quantity": 500, "unit": "g"}]}]
    }
    """

    date = serializers.DateField()
    canteen = serializers.CharField(max_length=50)
    meal = serializers.ChoiceField(choices=MealSlot.choices)
    status = serializers.ChoiceField(choices=MenuStatus.choices, default=MenuStatus.DRAFT)
    notes = serializers.CharField(allow_blank=True, required=False)
    dishes = DishWriteSerializer(many=True, default=list)


# ── Purchase orders ──


class PurchaseOrderItemSerializer(serializers.ModelSerializer):
    ingredient_name = serializers.CharField(source="ingredient.name", read_only=True)

    class Meta:
        model = PurchaseOrderItem
        fields = ["id", "ingredient", "ingredient_name", "quantity", "unit", "remark"]


class PurchaseOrderSerializer(serializers.ModelSerializer):
    """Read serializer for PurchaseOrder."""

    supplier_name = serializers.CharField(source="supplier.name", read_only=True)
    items = PurchaseOrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = PurchaseOrder
        fields = [
            "uuid",
            "code",
            "date",
            "target_date",
            "supplier",
            "supplier_name",
            "status",
            "notes",
            "created_by",
            "items",
            "created_at",
            "updated_at",
            "confirmed_at",
        ]
        read_only_fields = fields


class PurchaseOrderLineSerializer(serializers.Serializer):
    ingredient_id = serializers.IntegerField()
    quantity = serializers.DecimalField(
        max_digits=12, decimal_places=3, min_value=Decimal("0")
    )
    unit = serializers.CharField(max_length=20, required=False, allow_blank=True)
    remark = serializers.CharField(max_length=200, required=False, allow_blank=True)


class PurchaseOrderCreateSerializer(serializers.Serializer):
    """Payload of POST /purchase-orders/."""

    target_date = serializers.DateField()
    supplier = serializers.IntegerField(help_text="Supplier id")
    notes = serializers.CharField(allow_blank=True, default="")
    items = PurchaseOrderLineSerializer(many=True, allow_empty=False)


# ── Procurement (derived, not persisted) ──


class IngredientSourceSerializer(serializers.Serializer):
    dish_name = serializers.CharField()
    menu_id = serializers.IntegerField()
    quantity = serializers.DecimalField(max_digits=20, decimal_places=3)


class AggregatedIngredientSerializer(serializers.Serializer):
    ingredient_id = serializers.IntegerField()
    ingredient_name = serializers.CharField()
    total_quantity = serializers.DecimalField(max_digits=20, decimal_places=3)
    unit = serializers.CharField()
    sources = IngredientSourceSerializer(many=True)
    unit_totals = serializers.DictField(
        child=serializers.DecimalField(max_digits=20, decimal_places=3)
    )
    has_mixed_units = serializers.BooleanField()


class ProcurementDataSerializer(serializers.Serializer):
    aggregated_ingredients = AggregatedIngredientSerializer(many=True)
    purchase_orders = PurchaseOrderSerializer(many=True)
    assigned_ids = serializers.SerializerMethodField()
    pending = AggregatedIngredientSerializer(many=True)

    def get_assigned_ids(self, obj) -> list[int]:
        return sorted(obj.assigned_ids)
